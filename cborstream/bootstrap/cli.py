import argparse
import contextlib
import json
import logging
import sys
from typing import BinaryIO, Generator, TextIO

from cborstream.bootstrap.config.loader import set_configfile
from cborstream.bootstrap.config.settings import CodecSettings
from cborstream.bootstrap.deps import get_codec, get_settings
from cborstream.core.errors import CodecError, MalformedFrame
from cborstream.core.helpers.utils import render_yaml, setup_logging
from cborstream.core.models.mode import SelfDescribeMode

logger = logging.getLogger("bootstrap.cli")


def get_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cborstream",
        description=(
            "Inspect and produce streams of self-delimiting CBOR or MessagePack frames.\n\n"
            "Frames are written back to back without length prefix; the value\n"
            "encoding itself tells where each one ends."
        ),
        formatter_class=argparse.RawTextHelpFormatter
    )

    parser.add_argument(
        "-c", "--config",
        type=str,
        help="Path to a cborstream configuration file"
    )

    parser.add_argument(
        "-l", "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging verbosity (default: WARNING)."
    )

    parser.add_argument(
        "-f", "--format",
        type=str,
        help="Value encoding: cbor or msgpack (default from configuration, else cbor)."
    )

    parser.add_argument(
        "--self-describe",
        type=str,
        choices=[mode.value for mode in SelfDescribeMode],
        help=(
            "Self-describe marker policy when encoding.\n"
            "always → every frame, once → first frame only, never → no marker."
        )
    )

    parser.add_argument(
        "--packed",
        action="store_true",
        default=None,
        help="Write record fields by index instead of by name when encoding."
    )

    commands = parser.add_subparsers(dest="command", required=True)

    decode = commands.add_parser(
        "decode",
        help="Decode a stream of frames and print each one as a YAML document."
    )
    decode.add_argument("file", nargs="?", help="Input file (default: stdin)")
    decode.add_argument("-o", "--output", help="Output file (default: stdout)")
    decode.add_argument(
        "--chunk-size",
        type=int,
        help="Bytes read per call (default from configuration, else 65536)."
    )

    encode = commands.add_parser(
        "encode",
        help="Encode JSON lines into a stream of frames."
    )
    encode.add_argument("file", nargs="?", help="Input JSON lines file (default: stdin)")
    encode.add_argument("-o", "--output", help="Output file (default: stdout)")

    return parser


def get_cli_settings(args: argparse.Namespace) -> CodecSettings:
    set_configfile(args.config)

    overrides = {}
    if args.format is not None:
        overrides["format"] = args.format
    if args.self_describe is not None:
        overrides["self_describe"] = args.self_describe
    if args.packed is not None:
        overrides["packed"] = args.packed
    if getattr(args, "chunk_size", None) is not None:
        overrides["chunk_size"] = args.chunk_size

    return get_settings(**overrides)


@contextlib.contextmanager
def open_binary(path: str | None, mode: str) -> Generator[BinaryIO, None, None]:
    if path is None or path == "-":
        yield sys.stdin.buffer if "r" in mode else sys.stdout.buffer
        return
    with open(path, mode) as fp:
        yield fp  # type: ignore[misc]


@contextlib.contextmanager
def open_text(path: str | None, mode: str) -> Generator[TextIO, None, None]:
    if path is None or path == "-":
        yield sys.stdin if "r" in mode else sys.stdout
        return
    with open(path, mode, encoding="utf-8") as fp:
        yield fp  # type: ignore[misc]


def decode(args: argparse.Namespace, settings: CodecSettings) -> int:
    codec = get_codec(settings)
    buffer = bytearray()
    frames = 0

    with open_binary(args.file, "rb") as src, \
            open_text(args.output, "w") as dst:
        while chunk := src.read(settings.chunk_size):
            buffer.extend(chunk)
            try:
                for item in codec.iter_decode(buffer):
                    dst.write(render_yaml(item))
                    frames += 1
            except MalformedFrame as exc:
                logger.error(f"Malformed frame after {frames} frame(s): {exc}")
                return 1

    logger.info(f"Decoded {frames} frame(s)")
    if buffer:
        logger.warning(f"{len(buffer)} trailing byte(s) do not form a complete frame")
    return 0


def encode(args: argparse.Namespace, settings: CodecSettings) -> int:
    codec = get_codec(settings)
    buffer = bytearray()
    frames = 0

    with open_text(args.file, "r") as src, \
            open_binary(args.output, "wb") as dst:
        for lineno, line in enumerate(src, start=1):
            if not line.strip():
                continue
            try:
                item = json.loads(line)
            except json.JSONDecodeError as exc:
                logger.error(f"Line {lineno}: invalid JSON: {exc}")
                return 1

            codec.encode(item, buffer)
            dst.write(bytes(buffer))
            buffer.clear()
            frames += 1

    logger.info(f"Encoded {frames} frame(s)")
    return 0


COMMANDS = {
    "decode": decode,
    "encode": encode,
}


def main(argv: list[str] | None = None) -> int:
    args = get_parser().parse_args(argv)
    setup_logging(args.log_level)
    settings = get_cli_settings(args)

    try:
        return COMMANDS[args.command](args, settings)
    except CodecError as exc:
        logger.error(str(exc))
        return 1


if __name__ == "__main__":
    sys.exit(main())
