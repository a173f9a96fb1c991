"""
pcmhuff: Lossless Huffman compression and decompression of 16-bit PCM WAV audio.
"""

from .codecs import (
    DecodeState,
    CompressedRecord,
    CompressedRecordFile,
    CompressionSummary,
    HuffmanAudioCodec,
    HuffmanAudioCodecFile,
)

from .coders import (
    BitPacker,
    EncodedSamples,
    HuffmanCoder,
)

from .huffman import (
    HuffmanNode,
    build_huffman_tree,
    generate_codes,
    reconstruct_tree,
    decode_bits,
    build_code_bits,
    encode_samples,
)

from .models import (
    SymbolFrequency,
    FrequencyTable,
    CodeTable,
)

from .file_handler import (
    WavHeader,
    WavFile,
)

from .errors import (
    CodecError,
    FileOpenError,
    StructuralError,
    TruncatedStreamError,
    InvalidCodeTableError,
)

from .settings import HuffmanCoderSettings

from .logger import (
    Logger,
    Log,
    LogLevel,
    FrequencyTableLog,
    CodeAssignmentLog,
    CodingLog,
    CodingProgressStep,
    DecodeStateLog,
)

# Validators
from .validators import *

__all__ = [

    "DecodeState",
    "CompressedRecord",
    "CompressedRecordFile",
    "CompressionSummary",
    "HuffmanAudioCodec",
    "HuffmanAudioCodecFile",

    "BitPacker",
    "EncodedSamples",
    "HuffmanCoder",

    "HuffmanNode",
    "build_huffman_tree",
    "generate_codes",
    "reconstruct_tree",
    "decode_bits",
    "build_code_bits",
    "encode_samples",

    "SymbolFrequency",
    "FrequencyTable",
    "CodeTable",

    "WavHeader",
    "WavFile",

    "CodecError",
    "FileOpenError",
    "StructuralError",
    "TruncatedStreamError",
    "InvalidCodeTableError",

    "HuffmanCoderSettings",

    "Logger",
    "Log",
    "LogLevel",
    "FrequencyTableLog",
    "CodeAssignmentLog",
    "CodingLog",
    "CodingProgressStep",
    "DecodeStateLog",
]
