#file_handler.py
import struct
from typing import Tuple

import numpy as np

from .errors import FileOpenError, StructuralError, TruncatedStreamError
from .settings import WAV_HEADER_SIZE, SAMPLE_DTYPE, SAMPLE_WIDTH
from .validators import validate_type, validate_file_exists

# RIFF id, RIFF size, WAVE id, fmt id, fmt length, format, channels,
# sample rate, byte rate, block align, bits per sample, data id, data size
WAV_HEADER_FORMAT = "<4sI4s4sIHHIIHH4sI"


class WavHeader:
    """Canonical 44-byte WAV header, kept verbatim for re-emission."""

    def __init__(self, raw: bytes) -> None:
        validate_type(raw, "Raw header", bytes)
        if len(raw) != WAV_HEADER_SIZE:
            raise ValueError(f"WAV header must be exactly {WAV_HEADER_SIZE} bytes")
        (riff, self.riff_size, wave, fmt, self.fmt_length, self.format_type, self.channels,
         self.sample_rate, self.byte_rate, self.block_align, self.bits_per_sample,
         data, self.data_size) = struct.unpack(WAV_HEADER_FORMAT, raw)

        if riff != b"RIFF" or wave != b"WAVE":
            raise StructuralError("Invalid WAV file: missing RIFF/WAVE markers")
        if fmt != b"fmt ":
            raise StructuralError("Invalid WAV file: missing fmt chunk marker")
        if data != b"data":
            raise StructuralError("Invalid WAV file: missing data chunk marker")
        if self.data_size % SAMPLE_WIDTH != 0:
            raise StructuralError("Invalid WAV file: data size is not a whole number of 16-bit samples")
        self.raw = raw

    @staticmethod
    def from_bytes(data: bytes) -> 'WavHeader':
        """Parse the header at the start of data."""
        validate_type(data, "Data", bytes)
        if len(data) < WAV_HEADER_SIZE:
            raise TruncatedStreamError("WAV header", WAV_HEADER_SIZE, len(data))
        return WavHeader(data[:WAV_HEADER_SIZE])

    def get_sample_count(self) -> int:
        return self.data_size // SAMPLE_WIDTH

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WavHeader):
            return False
        return self.raw == other.raw


def split_wav_bytes(data: bytes) -> Tuple[WavHeader, np.ndarray]:
    """
    Split WAV file content into its header and the int16 samples it declares.

    Bytes after the declared data region are ignored.
    """
    header = WavHeader.from_bytes(data)
    end = WAV_HEADER_SIZE + header.data_size
    if len(data) < end:
        raise TruncatedStreamError("WAV samples", header.data_size, len(data) - WAV_HEADER_SIZE)
    samples = np.frombuffer(data[WAV_HEADER_SIZE:end], dtype=SAMPLE_DTYPE).astype(np.int16)
    return header, samples


def join_wav_bytes(header: WavHeader, samples: np.ndarray) -> bytes:
    validate_type(header, "Header", WavHeader)
    return header.raw + np.asarray(samples, dtype=np.int16).astype(SAMPLE_DTYPE).tobytes()


class WavFile:
    @staticmethod
    def read(file_path: str) -> Tuple[WavHeader, np.ndarray]:
        validate_type(file_path, "File path", str)
        return split_wav_bytes(read_bytes(file_path))

    @staticmethod
    def write(file_path: str, header: WavHeader, samples: np.ndarray) -> None:
        validate_type(file_path, "File path", str)
        data = join_wav_bytes(header, samples)
        write_bytes(file_path, data)


def write_bytes(file_path: str, data: bytes) -> None:
    try:
        with open(file_path, 'wb') as file:
            file.write(data)
    except OSError as e:
        raise FileOpenError(file_path, str(e)) from e


def read_bytes(file_path: str) -> bytes:
    validate_file_exists(file_path)
    try:
        with open(file_path, 'rb') as file:
            return file.read()
    except OSError as e:
        raise FileOpenError(file_path, str(e)) from e
