# python
"""
iff/__main__.py
Materialize a JSON directory specification and print its path table.

    python -m iff spec.json --root-dir /tmp/fixture
"""
import argparse
import asyncio
import json
import logging
import sys
from typing import List, Optional

from .errors import IFFError
from .fixture import define_iff_creator

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="python -m iff", description="Write a fixture tree from a JSON spec.")
    parser.add_argument("spec", help="JSON file holding the directory specification ('-' for stdin)")
    parser.add_argument("--root-dir", default=None, help="write here instead of a generated root directory")
    parser.add_argument("--unix-style-path", action="store_true", default=None, help="print paths with '/' separators")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def _load_spec(source: str):
    if source == "-":
        return json.load(sys.stdin)
    with open(source, "r", encoding="utf-8") as f:
        return json.load(f)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        directory = _load_spec(args.spec)
        create_iff = define_iff_creator(unix_style_path=args.unix_style_path)
        iff = asyncio.run(create_iff(directory, override_root_dir=args.root_dir))
    except (IFFError, OSError, UnicodeError, json.JSONDecodeError) as exc:
        logger.debug("Fixture creation failed", exc_info=True)
        print(f"iff: {exc}", file=sys.stderr)
        return 2
    json.dump({"root_dir": iff.root_dir, "paths": iff.paths}, sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
