"""
cli.py

Command line entry point: `pcmhuff encode` and `pcmhuff decode`.
"""


import argparse
import sys
from typing import List, Optional

from .codecs import HuffmanAudioCodecFile
from .errors import CodecError
from .logger import Logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pcmhuff",
        description="Lossless Huffman compression of 16-bit PCM WAV files.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="display info logs while coding")
    parser.add_argument("--log-file", default=None, help="save the recorded logs to this path")
    subparsers = parser.add_subparsers(dest="command", required=True)

    encode = subparsers.add_parser("encode", help="compress a WAV file")
    encode.add_argument("input", help="input WAV file")
    encode.add_argument("output", help="output compressed file")

    decode = subparsers.add_parser("decode", help="restore a WAV file")
    decode.add_argument("input", help="input compressed file")
    decode.add_argument("output", help="output WAV file")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logger = Logger()
    logger.display_info = args.verbose
    codec = HuffmanAudioCodecFile()

    try:
        if args.command == "encode":
            summary = codec.compress(args.input, args.output, logger=logger)
            print("Encoding completed.")
            print(summary)
        else:
            codec.decompress(args.input, args.output, logger=logger)
            print("Decoding completed.")
    except CodecError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        if args.log_file is not None:
            logger.save(args.log_file)
    return 0


if __name__ == "__main__":
    sys.exit(main())
