import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from toc_positions.core.errors import PositionsUnavailable, PublicationLoadError
from toc_positions.core.models import PositionLocator, TocNode
from toc_positions.core.pipeline import build_toc_payload
from toc_positions.integrations.epub_source import EpubPublication
from toc_positions.utils.settings import load_settings


def _load_json_list(path: Path) -> list:
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise ValueError(f"{path} must contain a JSON array")
    return data


def _toc_from_json(path: Path) -> List[TocNode]:
    return [TocNode.from_dict(entry) for entry in _load_json_list(path)]


def _positions_from_json(path: Optional[Path]) -> List[PositionLocator]:
    if path is None:
        raise PositionsUnavailable("no positions file given")
    try:
        return [PositionLocator.from_dict(entry) for entry in _load_json_list(path)]
    except (OSError, ValueError, KeyError) as e:
        raise PositionsUnavailable(f"cannot read {path}: {e}") from e


def main(argv=None):
    parser = argparse.ArgumentParser(description="Compute position ranges for a table of contents")
    parser.add_argument("--indent", type=int, default=2)
    subparsers = parser.add_subparsers(dest="command")

    epub_parser = subparsers.add_parser("epub", help="Read TOC and positions from an EPUB")
    epub_parser.add_argument("file")

    positions_parser = subparsers.add_parser("positions", help="Dump the reading positions of an EPUB")
    positions_parser.add_argument("file")

    json_parser = subparsers.add_parser("json", help="Read TOC and positions from JSON dumps")
    json_parser.add_argument("--toc", required=True, type=Path)
    json_parser.add_argument("--positions", type=Path)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    try:
        settings = load_settings()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    logging.basicConfig(level=getattr(logging, settings.log_level, logging.INFO))

    try:
        if args.command == "positions":
            publication = EpubPublication(args.file, settings.bytes_per_position)
            output = [locator.to_dict() for locator in publication.positions()]
        elif args.command == "epub":
            publication = EpubPublication(args.file, settings.bytes_per_position)
            output = build_toc_payload(publication.toc, publication.positions).to_dict()
        else:
            output = build_toc_payload(
                lambda: _toc_from_json(args.toc),
                lambda: _positions_from_json(args.positions),
            ).to_dict()
    except (PublicationLoadError, PositionsUnavailable, OSError, ValueError, KeyError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(json.dumps(output, indent=args.indent, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
