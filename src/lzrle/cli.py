"""
Command-line interface for lzrle.

Examples:
    lzrle compress -a lz -i notes.txt -o notes.lz
    lzrle decompress -a lz -i notes.lz -o -
    cat data.bin | lzrle compress --auto-algorithm -i - -o data.lz
    lzrle compress --multiple-files -i a.txt,b.txt --output-dir packed/
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .algorithms import Algorithm
from .config import CodecConfig, create_codec_config, load_config_from_json
from .core import compress, decompress
from .detection import (
    detect_file_type_from_path,
    is_detection_enabled,
    resolve_algorithm,
    suggest_algorithm,
)
from .error_handling import (
    CodecError,
    CodecIOError,
    ErrorSummary,
    safe_file_operation,
    validate_file_path,
)
from .utils import compression_ratio, content_digest

logger = logging.getLogger(__name__)

STREAM = "-"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lzrle",
        description="Compress or decompress files with RLE or LZ77",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "operation", choices=["compress", "decompress"], help="operation to perform"
    )
    parser.add_argument(
        "-a",
        "--algorithm",
        choices=[a.value for a in Algorithm],
        default=Algorithm.RLE.value,
        help="codec to use (default: rle)",
    )
    parser.add_argument(
        "-i",
        "--input",
        required=True,
        help="input file, '-' for stdin; comma-separated list with --multiple-files",
    )
    parser.add_argument("-o", "--output", help="output file, '-' for stdout")
    parser.add_argument(
        "--auto-algorithm",
        action="store_true",
        help="pick the codec from a sample of the input (same as -a auto)",
    )
    parser.add_argument(
        "--multiple-files",
        action="store_true",
        help="process every file in the comma-separated --input list",
    )
    parser.add_argument("--output-dir", help="output directory for --multiple-files")
    parser.add_argument(
        "--verify", action="store_true", help="check every compressed result round-trips"
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="fail on truncated compressed input instead of dropping the partial token",
    )
    parser.add_argument("--config", help="JSON configuration file")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def _read_input(input_path: str) -> bytes:
    if input_path == STREAM:
        return sys.stdin.buffer.read()

    path = validate_file_path(input_path, must_exist=True)
    return safe_file_operation("read input", path, path.read_bytes)


def _write_output(output_path: str, data: bytes) -> None:
    if output_path == STREAM:
        sys.stdout.buffer.write(data)
        sys.stdout.buffer.flush()
        return

    path = validate_file_path(output_path)
    safe_file_operation("write output", path, path.write_bytes, data)


def _resolve_cli_algorithm(
    algorithm: Algorithm, input_path: str, config: CodecConfig
) -> Algorithm:
    if algorithm.is_terminal:
        return algorithm

    if input_path == STREAM:
        return resolve_algorithm(algorithm, None, config)

    if not is_detection_enabled(config):
        default = Algorithm(config.detection.default_algorithm)
        logger.warning(
            f"File-type detection unavailable for {input_path}, "
            f"AUTO falls back to {default.value}"
        )
        return default

    resolved = suggest_algorithm(detect_file_type_from_path(input_path, config))
    logger.info(f"Auto-selected {resolved.value} for {input_path}")
    return resolved


def process_single_file(
    input_path: str,
    output_path: str,
    operation: str,
    algorithm: Algorithm,
    config: CodecConfig,
) -> None:
    """Read one input, run the codec and write the result."""
    data = _read_input(input_path)
    algorithm = _resolve_cli_algorithm(algorithm, input_path, config)

    if operation == "compress":
        result = compress(data, algorithm, config)
    else:
        result = decompress(data, algorithm, config)

    _write_output(output_path, result)

    logger.info(
        f"{operation} {input_path} -> {output_path} [{algorithm.value}]: "
        f"{len(data)} -> {len(result)} bytes "
        f"(ratio {compression_ratio(len(data), len(result)):.3f})"
    )
    logger.debug(f"digests: input={content_digest(data)} output={content_digest(result)}")


def batch_output_name(input_path: str) -> str:
    if input_path == STREAM:
        return "stdin"
    return Path(input_path).name or "output"


def process_multiple_files(
    inputs: List[str],
    output_dir: str,
    operation: str,
    algorithm: Algorithm,
    config: CodecConfig,
) -> ErrorSummary:
    """Process each input into ``output_dir/<basename>``, collecting failures."""
    directory = Path(output_dir)
    if not directory.is_dir():
        raise CodecIOError(
            f"Output directory does not exist: {directory}",
            {"output_dir": str(directory)},
        )

    summary = ErrorSummary()
    used_names = set()
    for input_path in inputs:
        name = batch_output_name(input_path)
        if name in used_names:
            summary.add_warning(
                f"Skipping {input_path}: output name {name} already used",
                {"input": input_path, "output_name": name},
            )
            continue
        used_names.add(name)

        output_path = directory / name
        try:
            process_single_file(input_path, str(output_path), operation, algorithm, config)
        except CodecError as e:
            summary.add_error(e, {"input": input_path, "output": str(output_path)})

    summary.log_summary()
    return summary


def _load_config(args) -> CodecConfig:
    if args.config:
        config = load_config_from_json(args.config)
    else:
        config = create_codec_config()

    if args.verify:
        config.verification.verify_roundtrip = True
    if args.strict:
        config.decompression.strict = True
    return config


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    algorithm = Algorithm.AUTO if args.auto_algorithm else Algorithm.from_name(args.algorithm)
    if algorithm is Algorithm.AUTO and args.operation == "decompress":
        parser.error("automatic algorithm selection is only available for compress")

    if args.multiple_files:
        if not args.output_dir:
            parser.error("--output-dir is required with --multiple-files")
    elif not args.output:
        parser.error("-o/--output is required")

    try:
        config = _load_config(args)
        if args.multiple_files:
            inputs = [item.strip() for item in args.input.split(",") if item.strip()]
            summary = process_multiple_files(
                inputs, args.output_dir, args.operation, algorithm, config
            )
            return 1 if summary.has_errors() else 0

        process_single_file(args.input, args.output, args.operation, algorithm, config)
        return 0
    except CodecError as e:
        print(f"lzrle: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
