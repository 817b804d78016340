from toc_positions.core.errors import PositionsUnavailable, PublicationLoadError
from toc_positions.core.models import (
    AnnotatedTocNode,
    AssignedRange,
    PositionLocator,
    RawRange,
    TocNode,
    TocPayload,
)
from toc_positions.core.normalize import normalize_href
from toc_positions.core.pipeline import build_toc_payload, compute_toc_positions

__all__ = [
    "compute_toc_positions",
    "build_toc_payload",
    "normalize_href",
    "PositionLocator",
    "TocNode",
    "RawRange",
    "AssignedRange",
    "AnnotatedTocNode",
    "TocPayload",
    "PositionsUnavailable",
    "PublicationLoadError",
]
