import logging
from typing import Dict, Sequence

from toc_positions.core.models import PositionLocator, RawRange
from toc_positions.core.normalize import normalize_href

logger = logging.getLogger(__name__)


def build_raw_ranges(positions: Sequence[PositionLocator]) -> Dict[str, RawRange]:
    """
    Groups the reading positions by normalized href and keeps the lowest and
    highest position of each resource.
    A locator without an explicit position stands at its 1-based index in the list.
    """
    ranges: Dict[str, RawRange] = {}

    for index, locator in enumerate(positions):
        numeric_position = locator.position if locator.position is not None else index + 1
        key = normalize_href(locator.href)

        existing = ranges.get(key)
        if existing is None:
            ranges[key] = RawRange(start=numeric_position, end=numeric_position)
        else:
            ranges[key] = RawRange(
                start=min(existing.start, numeric_position),
                end=max(existing.end, numeric_position),
            )

    logger.debug(f"Aggregated {len(positions)} positions into {len(ranges)} resources")
    return ranges
