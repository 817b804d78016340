"""
Assigns a [start, end] position range to every TOC entry that has an href.

Entries are visited in document order (pre-order, depth first) while a single
watermark, the highest end assigned so far, is carried from one entry to the
next across all roots. Each entry starts right after the watermark, so the
ranges read as a gap-free, non-decreasing sequence even when the raw position
data disagrees with the TOC order. A parent's range never bounds its children.
"""

import logging
from typing import Dict, Iterator, Mapping, Optional, Sequence, Tuple

from toc_positions.core.models import AssignedRange, NodePath, RawRange, TocNode
from toc_positions.core.normalize import normalize_href

logger = logging.getLogger(__name__)


def iter_preorder(toc: Sequence[TocNode], parent: NodePath = ()) -> Iterator[Tuple[NodePath, TocNode]]:
    """Yields (path, node) for every node, parents before their children."""
    for index, node in enumerate(toc):
        path = parent + (index,)
        yield path, node
        yield from iter_preorder(node.children, path)


def assign_node(watermark: int, raw: Optional[RawRange]) -> Tuple[AssignedRange, int]:
    """
    Computes the range of one href-bearing entry and the next watermark.

    A raw start ahead of the watermark is pulled down to close the gap, and
    one at or behind it is moved up past it. The raw end is kept unless it
    would precede the start.
    """
    start = watermark + 1
    end_candidate = raw.end if raw is not None else start
    end = max(end_candidate, start)
    return AssignedRange(start=start, end=end), max(watermark, end)


def assign_ranges(
    toc: Sequence[TocNode],
    raw_ranges: Mapping[str, RawRange],
) -> Dict[NodePath, AssignedRange]:
    """
    Walks the whole TOC once and returns the range of each href-bearing node,
    keyed by its path. Entries sharing an href get independent ranges.
    """
    assigned: Dict[NodePath, AssignedRange] = {}
    watermark = 0

    for path, node in iter_preorder(toc):
        if node.href is None:
            continue
        raw = raw_ranges.get(normalize_href(node.href))
        assigned[path], watermark = assign_node(watermark, raw)

    logger.debug(f"Assigned ranges to {len(assigned)} TOC entries, last position {watermark}")
    return assigned
