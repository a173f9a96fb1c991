"""
settings.py

Format constants and coder settings shared across pcmhuff.
"""


# Canonical RIFF/WAVE header: RIFF chunk, 16-byte fmt chunk, data chunk header.
WAV_HEADER_SIZE = 44

SAMPLE_WIDTH = 2
SAMPLE_DTYPE = "<i2"

# Code assigned when the input holds a single distinct sample value.
SINGLE_SYMBOL_CODE = "0"

# Code table entries store one ASCII character per code bit.
TABLE_BIT_ZERO = ord("0")
TABLE_BIT_ONE = ord("1")

# Samples per CodingProgressStep emitted while coding.
PROGRESS_BLOCK_SIZE = 4096


class HuffmanCoderSettings:
    """
    Settings for the Huffman coder.
    """

    def __init__(self, single_symbol_code: str = SINGLE_SYMBOL_CODE) -> None:
        if single_symbol_code not in ("0", "1"):
            raise ValueError("Single symbol code must be exactly one bit")
        self.single_symbol_code: str = single_symbol_code
