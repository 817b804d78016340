import logging
from typing import Callable, Optional, Sequence

from toc_positions.core.aggregate import build_raw_ranges
from toc_positions.core.annotate import annotate_toc
from toc_positions.core.assign import assign_ranges
from toc_positions.core.errors import PositionsUnavailable
from toc_positions.core.models import PositionLocator, TocNode, TocPayload

logger = logging.getLogger(__name__)


def compute_toc_positions(
    toc: Sequence[TocNode],
    positions: Optional[Sequence[PositionLocator]],
) -> TocPayload:
    """
    Main logic: Positions -> Raw ranges -> Assigned ranges -> Annotated TOC.
    Pass positions=None when the list could not be obtained; the TOC is then
    annotated from its own order and total_positions is None.
    """
    total_positions = len(positions) if positions is not None else None

    raw_ranges = build_raw_ranges(positions or [])
    assigned = assign_ranges(toc, raw_ranges)
    return TocPayload(toc=annotate_toc(toc, assigned), total_positions=total_positions)


def build_toc_payload(
    fetch_toc: Callable[[], Sequence[TocNode]],
    fetch_positions: Callable[[], Sequence[PositionLocator]],
) -> TocPayload:
    """
    Fetches both inputs from a publication source and computes the payload.
    Only the positions fetch is allowed to fail.
    """
    toc = fetch_toc()

    try:
        positions: Optional[Sequence[PositionLocator]] = fetch_positions()
    except PositionsUnavailable as e:
        logger.warning(f"Positions unavailable, ranges follow TOC order only: {e}")
        positions = None

    return compute_toc_positions(toc, positions)
