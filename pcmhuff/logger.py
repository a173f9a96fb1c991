"""
logger.py

Logging module for pcmhuff.

Components accept an optional Logger and push typed Log records into it. The
logger decides per level whether a record is kept, printed, or later saved.
"""


from datetime import datetime
from typing import Union, Optional

class LogLevel:
    INFO = 0
    WARNING = 1
    ERROR = 2
    PROGRESS = 3


class Log:
    def __init__(self, type_name: str, level: int, message: str) -> None:
        self.level = level
        self.type_name = type_name
        self.message = message
        self.date = datetime.now()

    def __str__(self) -> str:
        return f"{self.date} - {self.type_name} - {self.level} - {self.message}"

    def __repr__(self) -> str:
        return self.__str__()


class FrequencyTableLog(Log):
    def __init__(self, distinct_samples: int, total_samples: int, entropy: float) -> None:
        self.distinct_samples = distinct_samples
        self.total_samples = total_samples
        self.entropy = entropy
        super().__init__(
            "Frequency_table_log",
            LogLevel.INFO,
            f"Distinct samples: {distinct_samples}, Total samples: {total_samples}, Entropy: {entropy:.4f} bits/sample",
        )


class CodeAssignmentLog(Log):
    def __init__(self, sample: int, frequency: int, code_length: int) -> None:
        self.sample = sample
        self.frequency = frequency
        self.code_length = code_length
        super().__init__(
            "Code_assignment_log",
            LogLevel.INFO,
            f"Sample: {sample}, Frequency: {frequency}, Code length: {code_length}",
        )


class CodingLog(Log):
    def __init__(self, symbol_size: int, encoded_size: int) -> None:
        self.symbol_size = symbol_size
        self.encoded_size = encoded_size
        super().__init__("Coding_log", LogLevel.INFO, f"Symbol size: {symbol_size}, Encoded size: {encoded_size}")


class DecodeStateLog(Log):
    def __init__(self, state: str) -> None:
        self.state = state
        super().__init__("Decode_state_log", LogLevel.INFO, f"State: {state}")


class CodingProgressStep(Log):
    def __init__(self, message: str, total_steps: Optional[int] = None) -> None:
        self.base_message = message
        self.total_steps = total_steps
        super().__init__("Coding_progress_step", LogLevel.PROGRESS, message)


class Logger:
    def __init__(self) -> None:
        self.coding_progress_count = 0

        self.logs = []

        self.record_info = True
        self.record_warning = True
        self.record_error = True
        self.record_progress = False

        self.display_info = False
        self.display_warning = True
        self.display_error = True
        self.display_progress = True

        self.coding_step_interval_count = 100

    def log(self, log: Union[Log, str]) -> None:
        if not (isinstance(log, Log) or isinstance(log, str)):
            raise ValueError("Log must be an instance of Log class or a string")
        if isinstance(log, str):
            log = Log("General", LogLevel.INFO, log)

        if log.level == LogLevel.INFO:
            if self.record_info:
                self.logs.append(log)
            if self.display_info:
                print(log)
        elif log.level == LogLevel.WARNING:
            if self.record_warning:
                self.logs.append(log)
            if self.display_warning:
                print(log)
        elif log.level == LogLevel.ERROR:
            if self.record_error:
                self.logs.append(log)
            if self.display_error:
                print(log)
        elif log.level == LogLevel.PROGRESS:
            self.coding_progress_count += 1
            count = self.coding_progress_count
            if log.total_steps is not None:
                log.message = f"{log.base_message} ({count}/{log.total_steps})"
            else:
                log.message = f"{log.base_message} ({count})"
            if self.record_progress:
                self.logs.append(log)
            if self.display_progress and (count % self.coding_step_interval_count == 0):
                print(log)

    def get_logs(self, log_type: Optional[type] = None) -> list:
        if log_type is None:
            return list(self.logs)
        return [log for log in self.logs if isinstance(log, log_type)]

    def save(self, file_path: str) -> None:
        with open(file_path, 'w') as file:
            for log in self.logs:
                file.write(str(log) + "\n")
