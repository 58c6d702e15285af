"""
lzopack CLI — write .lzo files readable by lzop(1).

Commands:
  lzopack compress     - Compress a file into an LZOP container
  lzopack compressors  - List block compressors and whether they're installed
  lzopack config       - Show the effective configuration
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

log = logging.getLogger(__name__)


def _add_config_args(parser: argparse.ArgumentParser) -> None:
    """Add the common --config flag to a subparser."""
    parser.add_argument(
        "--config",
        help="Path to config TOML (default: ~/.lzopack/config.toml)",
    )


def _setup_logging(level: str, verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )


def _load(args: argparse.Namespace) -> dict:
    from lzopack.config import load_config

    config_path = getattr(args, "config", None)
    return load_config(Path(config_path) if config_path else None)


def cmd_compress(args: argparse.Namespace) -> None:
    """Compress a file into ``<file><suffix>`` (or ``-o``)."""
    from lzopack._format.writer import LzopWriter
    from lzopack.compressors import get_compressor
    from lzopack.errors import LzopError

    config = _load(args)
    _setup_logging(config["log_level"], args.verbose)

    src = Path(args.path)
    if not src.is_file():
        print(f"Error: File not found: {args.path}", file=sys.stderr)
        sys.exit(1)

    out = Path(args.output) if args.output else src.with_name(src.name + config["suffix"])
    if out.exists() and not args.force:
        print(f"Error: {out} already exists (use -f to overwrite)", file=sys.stderr)
        sys.exit(1)

    try:
        compress = get_compressor(args.compressor or config["compressor"])
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        if args.mtime is not None:
            file_time = args.mtime
        elif config["keep_mtime"]:
            file_time = int(src.stat().st_mtime)
        else:
            file_time = None
        data = src.read_bytes()
    except OSError as e:
        print(f"Error: Cannot read {src}: {e}", file=sys.stderr)
        sys.exit(1)

    name = args.name if args.name is not None else src.name

    try:
        written = LzopWriter.write(str(out), data, compress, file_name=name, file_time=file_time)
    except LzopError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    log.info("Wrote %s (%d -> %d bytes)", out, len(data), written)
    ratio = (written / len(data) * 100) if data else 0.0
    print(f"{src} -> {out}  {len(data)} -> {written} bytes ({ratio:.1f}%)")


def cmd_compressors(args: argparse.Namespace) -> None:
    """List compressors."""
    from lzopack.compressors import available_compressors

    for name, ok in available_compressors().items():
        status = "available" if ok else "not installed (pip install lzopack[lzo])"
        print(f"  {name:<10} {status}")


def cmd_config(args: argparse.Namespace) -> None:
    """Print the effective configuration."""
    from lzopack.config import default_config_path

    config = _load(args)
    source = args.config or default_config_path()
    print(f"Config: {source}{'' if os.path.isfile(source) else ' (not found, defaults)'}")
    for key, value in config.items():
        print(f"  {key} = {value!r}")


def main(argv: list[str] | None = None) -> None:
    from lzopack import __version__

    parser = argparse.ArgumentParser(
        prog="lzopack",
        description="Write LZOP containers readable by lzop -d",
    )
    parser.add_argument("--version", action="version", version=f"lzopack {__version__}")
    sub = parser.add_subparsers(dest="command")

    p_comp = sub.add_parser("compress", help="Compress a file into an LZOP container")
    p_comp.add_argument("path", help="Input file")
    p_comp.add_argument("-o", "--output", help="Output path (default: <path><suffix>)")
    p_comp.add_argument("--name", help="Filename stored in the header (default: input basename)")
    p_comp.add_argument("--compressor", help="Block compressor: lzo1x_1 or store")
    p_comp.add_argument("--mtime", type=int, help="Unix mtime stored in the header")
    p_comp.add_argument("-f", "--force", action="store_true", help="Overwrite existing output")
    p_comp.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    _add_config_args(p_comp)

    sub.add_parser("compressors", help="List block compressors")

    p_conf = sub.add_parser("config", help="Show effective configuration")
    _add_config_args(p_conf)

    args = parser.parse_args(argv)

    if not args.command:
        print("lzopack — write .lzo files readable by lzop(1)")
        print()
        print("Usage:")
        print("  lzopack compress <file> [-o out.lzo] [--compressor lzo1x_1|store] [-f]")
        print("  lzopack compressors")
        print("  lzopack config [--config path]")
        print()
        print("Run 'lzopack <command> --help' for details on any command.")
        sys.exit(0)

    commands = {
        "compress": cmd_compress,
        "compressors": cmd_compressors,
        "config": cmd_config,
    }

    commands[args.command](args)


if __name__ == "__main__":
    main()
