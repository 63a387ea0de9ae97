from __future__ import annotations

import argparse
import logging
import os
import sys

from hexpatch.config import ConfigError, load_config

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(path: str | None, level: str = "DEBUG") -> None:
    """Send `hexpatch` logs to `path`; stay silent when no path is given.

    The terminal belongs to the TUI, so there is never a stream handler.
    """
    logger = logging.getLogger("hexpatch")
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()
    if path is None:
        logger.addHandler(logging.NullHandler())
        return
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.info("Start logging...")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="hexpatch", description="hexpatch hex editor (Textual)")
    parser.add_argument("path", nargs="?", help="Path to binary file")
    parser.add_argument("--config", help="YAML preferences file")
    parser.add_argument("--theme", help="Palette: default, dim or high_contrast")
    parser.add_argument("--overscan", type=int, help="Extra rows rendered around the viewport")
    parser.add_argument("--log", metavar="FILE", help="Write debug logs to FILE")
    parser.add_argument(
        "--log-level",
        default="DEBUG",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level for --log",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    if args.path is not None and not os.path.exists(args.path):
        print(f"hexpatch: file not found: {args.path}", file=sys.stderr)
        return 2

    try:
        config = load_config(args.config).with_overrides(
            theme=args.theme, overscan=args.overscan
        )
    except ConfigError as e:
        print(f"hexpatch: {e}", file=sys.stderr)
        return 2

    configure_logging(args.log, args.log_level)

    # Import here so --help and config errors do not pay for Textual
    from hexpatch.app import HexpatchApp

    app = HexpatchApp(args.path, config=config)
    app.run()
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
