"""
coders.py

Bit packing and the Huffman coder that turns a sample sequence into a code
table plus a packed payload, and back.

"""


import numpy as np
from typing import Any, Optional

from .errors import InvalidCodeTableError, TruncatedStreamError
from .huffman import build_huffman_tree, generate_codes, reconstruct_tree, decode_bits, build_code_bits, encode_samples
from .logger import Logger, FrequencyTableLog, CodingLog, CodingProgressStep
from .models import CodeTable, FrequencyTable
from .settings import HuffmanCoderSettings, PROGRESS_BLOCK_SIZE, SAMPLE_WIDTH
from .validators import validate_type


class BitPacker:
    """
    Packs 0/1 values into bytes, least-significant bit first.

    Bit i of every group of eight lands at bit position i of its byte. The
    last byte is padded with zeros, so callers carry the bit count alongside.
    """

    @staticmethod
    def pack_bits_to_bytes(bits: Any) -> bytes:
        """
        Pack a sequence of bits into bytes.

        Args:
            bits: Sequence of 0/1 values.

        Returns:
            bytes: ceil(len(bits) / 8) packed bytes.
        """
        if bits is None:
            raise ValueError("Bits cannot be None")
        array = np.asarray(bits)
        if array.size == 0:
            return b""
        if not np.isin(array, (0, 1)).all():
            raise ValueError("Bits must be 0 or 1")
        return np.packbits(array.astype(np.uint8), bitorder="little").tobytes()

    @staticmethod
    def unpack_bytes_to_bits(data: bytes, bit_count: int) -> np.ndarray:
        """
        Unpack bytes into exactly bit_count bits, dropping the padding.

        Raises:
            TruncatedStreamError: If data holds fewer bytes than bit_count needs.
        """
        validate_type(data, "Data", bytes)
        validate_type(bit_count, "Bit count", int)
        if bit_count < 0:
            raise ValueError("Bit count must be non-negative")
        needed = (bit_count + 7) // 8
        if len(data) < needed:
            raise TruncatedStreamError("payload", needed, len(data))
        if bit_count == 0:
            return np.zeros(0, dtype=np.uint8)
        raw = np.frombuffer(data[:needed], dtype=np.uint8)
        return np.unpackbits(raw, bitorder="little")[:bit_count]


class EncodedSamples:
    """Code table, bit count and packed payload of one sample sequence."""

    def __init__(self, code_table: CodeTable, bit_count: int, payload: bytes) -> None:
        validate_type(code_table, "Code table", CodeTable)
        validate_type(bit_count, "Bit count", int)
        validate_type(payload, "Payload", bytes)
        self.code_table = code_table
        self.bit_count = bit_count
        self.payload = payload


class HuffmanCoder:
    """
    Static Huffman coder for 16-bit samples.
    """

    def __init__(self, settings: Optional[HuffmanCoderSettings] = None, logger: Optional[Logger] = None) -> None:
        if settings is None:
            settings = HuffmanCoderSettings()
        validate_type(settings, "Settings", HuffmanCoderSettings)
        self.settings = settings
        self.logger = logger

    def _log(self, log) -> None:
        if self.logger is not None:
            self.logger.log(log)

    def encode(self, samples: Any) -> EncodedSamples:
        """
        Encode samples into a code table and an LSB-first packed payload.

        Args:
            samples: Sequence of signed 16-bit sample values.

        Returns:
            EncodedSamples: The code table, encoded bit count and payload.
        """
        samples = np.asarray(samples, dtype=np.int16)
        frequency_table = FrequencyTable.from_samples(samples)
        self._log(FrequencyTableLog(frequency_table.get_size(), frequency_table.total(), frequency_table.entropy()))
        if frequency_table.get_size() == 0:
            return EncodedSamples(CodeTable(), 0, b"")

        root = build_huffman_tree(frequency_table)
        code_table = generate_codes(root, self.settings, self.logger)

        code_bits = build_code_bits(code_table)
        blocks = []
        total_blocks = (len(samples) + PROGRESS_BLOCK_SIZE - 1) // PROGRESS_BLOCK_SIZE
        for start in range(0, len(samples), PROGRESS_BLOCK_SIZE):
            blocks.append(encode_samples(samples[start:start + PROGRESS_BLOCK_SIZE].tolist(), code_table, code_bits))
            self._log(CodingProgressStep("Encoding samples", total_blocks))
        bits = np.concatenate(blocks)

        payload = BitPacker.pack_bits_to_bytes(bits)
        self._log(CodingLog(len(samples) * SAMPLE_WIDTH, len(payload)))
        return EncodedSamples(code_table, int(bits.size), payload)

    def decode(self, code_table: CodeTable, bit_count: int, payload: bytes) -> np.ndarray:
        """
        Decode a packed payload back into samples.

        Raises:
            InvalidCodeTableError: If the table is invalid, or empty while bits are present.
            TruncatedStreamError: If the payload or the bit sequence ends early.
        """
        validate_type(code_table, "Code table", CodeTable)
        bits = BitPacker.unpack_bytes_to_bits(payload, bit_count)
        if code_table.get_size() == 0:
            if bit_count != 0:
                raise InvalidCodeTableError("Code table is empty but the payload holds encoded bits")
            return np.zeros(0, dtype=np.int16)

        root = reconstruct_tree(code_table)
        samples = decode_bits(root, bits.tolist())
        self._log(CodingLog(len(samples) * SAMPLE_WIDTH, len(payload)))
        return np.array(samples, dtype=np.int16)
