import struct
from typing import Optional, Any

from .coders import HuffmanCoder
from .errors import InvalidCodeTableError, StructuralError, TruncatedStreamError
from .file_handler import WavHeader, split_wav_bytes, join_wav_bytes, read_bytes, write_bytes
from .logger import Logger, DecodeStateLog
from .models import CodeTable
from .settings import HuffmanCoderSettings, WAV_HEADER_SIZE, TABLE_BIT_ZERO, TABLE_BIT_ONE
from .validators import validate_type, validate_file_exists


class DecodeState:
    READ_HEADER = "ReadHeader"
    READ_CODE_TABLE = "ReadCodeTable"
    READ_PAYLOAD_META = "ReadPayloadMeta"
    READ_PAYLOAD = "ReadPayload"
    DECODE = "Decode"
    WRITE_OUTPUT = "WriteOutput"
    DONE = "Done"


def _enter_state(state: str, logger: Optional[Logger]) -> None:
    if logger is not None:
        logger.log(DecodeStateLog(state))


class _ByteReader:
    """Sequential reader that fails with TruncatedStreamError on short reads."""

    def __init__(self, data: bytes) -> None:
        self.data = data
        self.offset = 0

    def read(self, size: int, field: str) -> bytes:
        available = len(self.data) - self.offset
        if available < size:
            raise TruncatedStreamError(field, size, available)
        chunk = self.data[self.offset:self.offset + size]
        self.offset += size
        return chunk

    def unpack(self, fmt: str, field: str) -> Any:
        value, = struct.unpack(fmt, self.read(struct.calcsize(fmt), field))
        return value


class CompressedRecord:
    """Represents a compressed audio file."""

    def __init__(
        self,
        header: WavHeader,
        code_table: CodeTable,
        bit_count: int,
        payload: bytes,
    ) -> None:
        validate_type(header, "Header", WavHeader)
        validate_type(code_table, "Code table", CodeTable)
        validate_type(bit_count, "Bit count", int)
        validate_type(payload, "Payload", bytes)
        if not 0 <= bit_count < 2 ** 32:
            raise StructuralError("Bit count must fit in an unsigned 32-bit integer")
        if len(payload) != (bit_count + 7) // 8:
            raise ValueError("Payload length must be the bit count rounded up to whole bytes")

        self.header = header
        self.code_table = code_table
        self.bit_count = bit_count
        self.payload = payload

    @staticmethod
    def serialize(record: 'CompressedRecord') -> bytes:
        """
        Serialize a CompressedRecord instance into bytes.

        The format (little-endian):
          - WAV header (44 bytes, verbatim)
          - code table entry count (4 bytes, unsigned int)
          - per entry, ascending sample order:
              - sample (2 bytes, signed int)
              - code length (4 bytes, unsigned int)
              - code (code length bytes, one ASCII '0'/'1' per bit)
          - encoded bit count (4 bytes, unsigned int)
          - payload (bit count / 8 rounded up, LSB-first packed bits)
        """
        serialized = record.header.raw
        serialized += struct.pack("<I", record.code_table.get_size())
        for sample, code in record.code_table.items():
            serialized += struct.pack("<hI", sample, len(code))
            serialized += code.encode("ascii")
        serialized += struct.pack("<I", record.bit_count)
        serialized += record.payload
        return serialized

    @staticmethod
    def deserialize(serialized: bytes, logger: Optional[Logger] = None) -> 'CompressedRecord':
        """
        Deserialize bytes into a CompressedRecord instance.

        Trailing bytes after the payload are ignored.

        Raises:
            TruncatedStreamError: If a field is cut short.
            StructuralError: If the WAV header markers are wrong.
            InvalidCodeTableError: If a stored code is malformed or a sample repeats.
        """
        validate_type(serialized, "Serialized data", bytes)
        reader = _ByteReader(serialized)

        _enter_state(DecodeState.READ_HEADER, logger)
        header = WavHeader.from_bytes(reader.read(WAV_HEADER_SIZE, "WAV header"))

        _enter_state(DecodeState.READ_CODE_TABLE, logger)
        entry_count = reader.unpack("<I", "code table entry count")
        code_table = CodeTable()
        for index in range(entry_count):
            sample = reader.unpack("<h", f"sample of code table entry {index}")
            code_length = reader.unpack("<I", f"code length of code table entry {index}")
            code_bytes = reader.read(code_length, f"code of code table entry {index}")
            if code_length == 0:
                raise InvalidCodeTableError(f"Sample {sample} has an empty code")
            if any(b not in (TABLE_BIT_ZERO, TABLE_BIT_ONE) for b in code_bytes):
                raise InvalidCodeTableError(f"Sample {sample} has a code with characters other than 0 and 1")
            if code_table.contains(sample):
                raise InvalidCodeTableError(f"Sample {sample} appears more than once in the code table")
            code_table.add(sample, code_bytes.decode("ascii"))

        _enter_state(DecodeState.READ_PAYLOAD_META, logger)
        bit_count = reader.unpack("<I", "encoded bit count")

        _enter_state(DecodeState.READ_PAYLOAD, logger)
        payload = reader.read((bit_count + 7) // 8, "payload")

        return CompressedRecord(header, code_table, bit_count, payload)


class CompressedRecordFile:
    """Provides methods to write and read a CompressedRecord instance to/from a file."""

    @staticmethod
    def write_to_file(record: CompressedRecord, file_path: str) -> None:
        """
        Serialize the record and write it as binary data to the given file.

        Args:
            record (CompressedRecord): The compressed record to write.
            file_path (str): The path to the output file.
        """
        write_bytes(file_path, CompressedRecord.serialize(record))

    @staticmethod
    def read_from_file(file_path: str, logger: Optional[Logger] = None) -> CompressedRecord:
        """
        Read binary data from the given file and deserialize it into a CompressedRecord instance.

        Args:
            file_path (str): The path to the compressed file.
            logger: Logger instance for logging.

        Returns:
            CompressedRecord: The deserialized compressed record.
        """
        return CompressedRecord.deserialize(read_bytes(file_path), logger)


class CompressionSummary:
    """Sizes and statistics of one file compression."""

    def __init__(self, input_size: int, output_size: int, sample_count: int,
                 distinct_samples: int, bit_count: int) -> None:
        self.input_size = input_size
        self.output_size = output_size
        self.sample_count = sample_count
        self.distinct_samples = distinct_samples
        self.bit_count = bit_count

    def get_ratio(self) -> float:
        if self.output_size == 0:
            return 0.0
        return self.input_size / self.output_size

    def __str__(self) -> str:
        return (f"{self.input_size} -> {self.output_size} bytes "
                f"(ratio {self.get_ratio():.3f}, {self.distinct_samples} distinct samples)")


class HuffmanAudioCodec:
    def compress(
        self,
        data: bytes,
        settings: Optional[HuffmanCoderSettings] = None,
        logger: Optional[Logger] = None,
    ) -> CompressedRecord:
        """
        Compress the content of a 16-bit PCM WAV file.

        Args:
            data (bytes): The WAV file content.
            settings (Optional[HuffmanCoderSettings]): Coder settings.
            logger: Logger instance for logging.

        Returns:
            CompressedRecord: The resulting compressed record.
        """
        validate_type(data, "Data", bytes)
        header, samples = split_wav_bytes(data)
        encoded = HuffmanCoder(settings, logger).encode(samples)
        return CompressedRecord(header, encoded.code_table, encoded.bit_count, encoded.payload)

    def decompress(
        self,
        record: CompressedRecord,
        logger: Optional[Logger] = None,
    ) -> bytes:
        """
        Decompress a record back into the original WAV file content.

        Args:
            record (CompressedRecord): The compressed record.
            logger: Logger instance for logging.

        Returns:
            bytes: The WAV header followed by the decoded samples.
        """
        if not isinstance(record, CompressedRecord):
            raise ValueError("Input must be a CompressedRecord instance")

        expected = record.header.get_sample_count()
        if record.code_table.get_size() == 0 and expected > 0:
            raise InvalidCodeTableError(f"Code table is empty but the header declares {expected} samples")

        _enter_state(DecodeState.DECODE, logger)
        samples = HuffmanCoder(logger=logger).decode(record.code_table, record.bit_count, record.payload)
        if len(samples) != expected:
            raise StructuralError(f"Decoded {len(samples)} samples but the header declares {expected}")
        return join_wav_bytes(record.header, samples)


class HuffmanAudioCodecFile(HuffmanAudioCodec):
    def compress(
        self,
        input_path: str,
        output_path: str,
        settings: Optional[HuffmanCoderSettings] = None,
        logger: Optional[Logger] = None,
    ) -> CompressionSummary:
        """
        Compress the input WAV file and write the compressed record to an output file.

        Args:
            input_path (str): Path to the input WAV file.
            output_path (str): Path to the output file.
            settings (Optional[HuffmanCoderSettings]): Coder settings.
            logger: Logger instance for logging.

        Returns:
            CompressionSummary: Sizes of the input and output.
        """
        validate_type(input_path, "Input path", str)
        validate_type(output_path, "Output path", str)
        validate_file_exists(input_path)

        data = read_bytes(input_path)
        record = super().compress(data, settings, logger)
        serialized = CompressedRecord.serialize(record)
        write_bytes(output_path, serialized)
        return CompressionSummary(
            len(data),
            len(serialized),
            record.header.get_sample_count(),
            record.code_table.get_size(),
            record.bit_count,
        )

    def decompress(
        self,
        compressed_file_path: str,
        output_file_path: str,
        logger: Optional[Logger] = None,
    ) -> int:
        """
        Decompress the input file and write the restored WAV file.

        Args:
            compressed_file_path (str): Path to the compressed file.
            output_file_path (str): Path to the output WAV file.
            logger: Logger instance for logging.

        Returns:
            int: Number of samples written.
        """
        validate_type(compressed_file_path, "Compressed file path", str)
        validate_type(output_file_path, "Output file path", str)
        validate_file_exists(compressed_file_path)

        record = CompressedRecordFile.read_from_file(compressed_file_path, logger)
        data = super().decompress(record, logger)
        _enter_state(DecodeState.WRITE_OUTPUT, logger)
        write_bytes(output_file_path, data)
        _enter_state(DecodeState.DONE, logger)
        return record.header.get_sample_count()
