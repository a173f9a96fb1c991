import contextlib
import io
import os
import struct
import tempfile
import unittest

from pcmhuff.cli import main


def make_wav(samples):
    data = struct.pack(f"<{len(samples)}h", *samples)
    header = struct.pack("<4sI4s4sIHHIIHH4sI", b"RIFF", 36 + len(data), b"WAVE", b"fmt ", 16, 1, 1,
                         8000, 16000, 2, 16, b"data", len(data))
    return header + data


class TestCli(unittest.TestCase):
    def setUp(self):
        self.directory = tempfile.TemporaryDirectory()
        self.wav = make_wav([5, 5, 5, -3, -3, 7] * 50)
        with open(self.path("in.wav"), "wb") as file:
            file.write(self.wav)

    def tearDown(self):
        self.directory.cleanup()

    def path(self, name):
        return os.path.join(self.directory.name, name)

    def run_main(self, argv):
        out, err = io.StringIO(), io.StringIO()
        with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
            status = main(argv)
        return status, out.getvalue(), err.getvalue()

    def test_encode_decode(self):
        status, out, _ = self.run_main(["encode", self.path("in.wav"), self.path("out.phf")])
        self.assertEqual(status, 0)
        self.assertIn("Encoding completed.", out)

        status, out, _ = self.run_main(["decode", self.path("out.phf"), self.path("restored.wav")])
        self.assertEqual(status, 0)
        self.assertIn("Decoding completed.", out)
        with open(self.path("restored.wav"), "rb") as file:
            self.assertEqual(file.read(), self.wav)

    def test_log_file(self):
        status, _, _ = self.run_main(["--log-file", self.path("log.txt"), "encode",
                                      self.path("in.wav"), self.path("out.phf")])
        self.assertEqual(status, 0)
        with open(self.path("log.txt")) as file:
            self.assertIn("Frequency_table_log", file.read())

    def test_missing_input(self):
        status, _, err = self.run_main(["encode", self.path("missing.wav"), self.path("out.phf")])
        self.assertEqual(status, 1)
        self.assertIn("missing.wav", err)

    def test_invalid_wav(self):
        with open(self.path("bad.wav"), "wb") as file:
            file.write(b"RIFX" + self.wav[4:])
        status, _, err = self.run_main(["encode", self.path("bad.wav"), self.path("out.phf")])
        self.assertEqual(status, 1)
        self.assertIn("Invalid WAV file", err)

    def test_truncated_container(self):
        self.run_main(["encode", self.path("in.wav"), self.path("out.phf")])
        with open(self.path("out.phf"), "rb") as file:
            data = file.read()
        with open(self.path("cut.phf"), "wb") as file:
            file.write(data[:50])
        status, _, err = self.run_main(["decode", self.path("cut.phf"), self.path("restored.wav")])
        self.assertEqual(status, 1)
        self.assertIn("truncated", err)

    def test_unwritable_output(self):
        status, _, _ = self.run_main(["encode", self.path("in.wav"), os.path.join(self.path("nodir"), "out.phf")])
        self.assertEqual(status, 1)


if __name__ == '__main__':
    unittest.main()
