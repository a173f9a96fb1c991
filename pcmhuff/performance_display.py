import matplotlib.pyplot as plt
import numpy as np

from .logger import CodeAssignmentLog


class PerformanceDisplay:
    def __init__(self, logs,
                 fig_size=(10, 6), dpi=100, font_size=12,
                 dot_size=5, dot_alpha=0.6,
                 dot_color='blue',
                 trend_line_color='red', trend_line_linewidth=2,
                 moving_avg_window=10):
        self.logs = logs
        self.fig_size = fig_size
        self.dpi = dpi
        self.font_size = font_size
        self.dot_size = dot_size
        self.dot_alpha = dot_alpha
        self.dot_color = dot_color
        self.trend_line_color = trend_line_color
        self.trend_line_linewidth = trend_line_linewidth
        self.moving_avg_window = moving_avg_window

    def _moving_average(self, data):
        window = self.moving_avg_window
        if window < 1:
            raise ValueError("moving_avg_window must be at least 1")
        window = min(window, len(data))
        return np.convolve(data, np.ones(window) / window, mode='same')

    def _code_assignments(self):
        return sorted((log for log in self.logs if isinstance(log, CodeAssignmentLog)), key=lambda log: log.sample)

    def _plot_graph(self, x_values, y_values, title, xlabel, ylabel, show_graph=False, save_path=None):
        if not y_values:
            print(f"No data available for {title}.")
            return False

        x = np.array(x_values)
        y = np.array(y_values, dtype=float)
        trend = self._moving_average(y)

        plt.figure(figsize=self.fig_size, dpi=self.dpi)

        plt.scatter(x, y, s=self.dot_size, alpha=self.dot_alpha, color=self.dot_color, label="Data points")
        plt.plot(x, trend, color=self.trend_line_color, linewidth=self.trend_line_linewidth, label="Moving Average Trend")

        plt.title(title, fontsize=self.font_size + 2)
        plt.xlabel(xlabel, fontsize=self.font_size)
        plt.ylabel(ylabel, fontsize=self.font_size)
        plt.grid(True)
        plt.legend(fontsize=self.font_size)
        plt.tight_layout()

        if save_path:
            plt.savefig(save_path)
        if show_graph:
            plt.show()
        plt.close()
        return True

    def generate_code_length_plot(self, show_graphs=False, save_path=None):
        logs = self._code_assignments()
        return self._plot_graph([log.sample for log in logs], [log.code_length for log in logs],
                                "Code Length per Sample Value", "Sample Value", "Code Length (bits)",
                                show_graphs, save_path)

    def generate_frequency_plot(self, show_graphs=False, save_path=None):
        logs = self._code_assignments()
        return self._plot_graph([log.sample for log in logs], [log.frequency for log in logs],
                                "Frequency per Sample Value", "Sample Value", "Frequency",
                                show_graphs, save_path)
