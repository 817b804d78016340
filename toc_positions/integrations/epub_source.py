"""
Reads the two inputs of the range computation, the TOC and the reading
positions, out of a local EPUB file.
"""

import logging
import math
import os
from typing import List, Optional
from urllib.parse import unquote

import ebooklib
from ebooklib import epub
from bs4 import BeautifulSoup

from toc_positions.core.errors import PositionsUnavailable, PublicationLoadError
from toc_positions.core.models import PositionLocator, TocNode
from toc_positions.utils.settings import DEFAULT_BYTES_PER_POSITION

logger = logging.getLogger(__name__)


def open_epub(epub_path: str) -> epub.EpubBook:
    if not os.path.exists(epub_path):
        raise PublicationLoadError(f"EPUB file not found: {epub_path}")
    logger.info(f"Loading {epub_path}...")
    try:
        return epub.read_epub(epub_path)
    except Exception as e:
        raise PublicationLoadError(f"Failed to read EPUB file: {e}") from e


def reading_order(book) -> list:
    """Spine documents in linear reading order. Non-linear and missing items are skipped."""
    items = []
    for spine_item in book.spine:
        item_id, linear = spine_item if isinstance(spine_item, tuple) else (spine_item, 'yes')
        if linear == 'no':
            continue

        item = book.get_item_with_id(item_id)
        if not item:
            logger.debug(f"Spine references unknown item {item_id!r}")
            continue
        if item.get_type() != ebooklib.ITEM_DOCUMENT:
            continue
        items.append(item)
    return items


def toc_from_epub(book) -> List[TocNode]:
    toc = _parse_toc_recursive(book.toc)
    if not toc:
        logger.info("No navigation document, building TOC from the spine")
        toc = _get_fallback_toc(book)
    return toc


def positions_from_epub(book, bytes_per_position: int = DEFAULT_BYTES_PER_POSITION) -> List[PositionLocator]:
    """
    Splits every spine document into positions of `bytes_per_position` bytes
    (at least one per document) and numbers them across the whole book.
    """
    items = reading_order(book)
    if not items:
        raise PositionsUnavailable("EPUB spine has no readable documents")

    counts = []
    for item in items:
        try:
            length = len(item.get_content())
        except Exception as e:
            raise PositionsUnavailable(f"Cannot read {item.get_name()}: {e}") from e
        counts.append(max(1, math.ceil(length / bytes_per_position)))

    total = sum(counts)
    positions = []
    for item, count in zip(items, counts):
        for i in range(count):
            number = len(positions) + 1
            positions.append(PositionLocator(
                href=item.get_name(),
                position=number,
                media_type=item.media_type,
                progression=i / count,
                total_progression=(number - 1) / total,
            ))

    logger.debug(f"Built {total} positions over {len(items)} documents")
    return positions


class EpubPublication:
    """Exposes an EPUB's TOC and positions as fetchers for build_toc_payload."""

    def __init__(self, epub_path: str, bytes_per_position: int = DEFAULT_BYTES_PER_POSITION):
        self.book = open_epub(epub_path)
        self.bytes_per_position = bytes_per_position

    def toc(self) -> List[TocNode]:
        return toc_from_epub(self.book)

    def positions(self) -> List[PositionLocator]:
        return positions_from_epub(self.book, self.bytes_per_position)


# --- Internal Helpers ---

def _parse_toc_recursive(toc_list) -> List[TocNode]:
    result = []
    for item in toc_list:
        if isinstance(item, tuple):
            section, children = item
            result.append(TocNode(
                title=section.title or "",
                href=_toc_href(section.href),
                children=_parse_toc_recursive(children),
            ))
        elif isinstance(item, (epub.Link, epub.Section)):
            result.append(TocNode(title=item.title or "", href=_toc_href(item.href)))
        else:
            logger.debug(f"Skipping unsupported TOC entry {item!r}")
    return result


def _toc_href(href) -> Optional[str]:
    # Manifest names come back decoded, nav hrefs do not
    return unquote(href) if href else None


def _get_fallback_toc(book) -> List[TocNode]:
    toc = []
    for item in reading_order(book):
        name = item.get_name()
        title = _document_title(item) or os.path.basename(name).rsplit('.', 1)[0].replace('_', ' ').title()
        toc.append(TocNode(title=title, href=name, media_type=item.media_type))
    return toc


def _document_title(item) -> Optional[str]:
    soup = BeautifulSoup(item.get_content(), 'html.parser')
    for tag in soup.find_all(['title', 'h1', 'h2'], limit=3):
        text = tag.get_text(strip=True)
        if text:
            return text
    return None
