from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

# Child indices from the root list down to a node, e.g. (0, 2) is the third
# child of the first root.
NodePath = Tuple[int, ...]


@dataclass
class PositionLocator:
    """One entry of the publication-wide reading position list."""
    href: str
    position: Optional[int] = None              # 1-based, may be missing
    media_type: Optional[str] = None
    title: Optional[str] = None
    progression: Optional[float] = None         # within the resource
    total_progression: Optional[float] = None   # within the publication

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PositionLocator':
        if not isinstance(data, dict):
            raise ValueError(f"Locator must be a JSON object, got {data!r}")
        locations = data.get('locations') or {}
        return cls(
            href=data['href'],
            position=locations.get('position'),
            media_type=data.get('type'),
            title=data.get('title'),
            progression=locations.get('progression'),
            total_progression=locations.get('totalProgression'),
        )

    def to_dict(self) -> Dict[str, Any]:
        locations = {}
        if self.position is not None:
            locations['position'] = self.position
        if self.progression is not None:
            locations['progression'] = self.progression
        if self.total_progression is not None:
            locations['totalProgression'] = self.total_progression

        data: Dict[str, Any] = {'href': self.href}
        if self.media_type:
            data['type'] = self.media_type
        if self.title:
            data['title'] = self.title
        data['locations'] = locations
        return data


@dataclass
class TocNode:
    """Represents a logical entry in the navigation tree."""
    title: str
    href: Optional[str] = None    # None for pure section headers
    children: List['TocNode'] = field(default_factory=list)
    media_type: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TocNode':
        if not isinstance(data, dict):
            raise ValueError(f"TOC entry must be a JSON object, got {data!r}")
        return cls(
            title=data.get('title') or "",
            href=data.get('href'),
            children=[cls.from_dict(child) for child in data.get('children') or []],
            media_type=data.get('type'),
        )


@dataclass(frozen=True)
class RawRange:
    """Lowest and highest position seen for one normalized href."""
    start: int
    end: int


@dataclass(frozen=True)
class AssignedRange:
    """Final range of a single TOC node."""
    start: int
    end: int


@dataclass
class AnnotatedTocNode:
    """A TocNode copy carrying its position range."""
    title: str
    href: Optional[str] = None
    start_position: Optional[int] = None
    end_position: Optional[int] = None
    children: List['AnnotatedTocNode'] = field(default_factory=list)
    media_type: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        if self.href is not None:
            data['href'] = self.href
        if self.media_type:
            data['type'] = self.media_type
        data['title'] = self.title
        data['startPosition'] = self.start_position
        data['endPosition'] = self.end_position
        if self.children:
            data['children'] = [child.to_dict() for child in self.children]
        return data


@dataclass
class TocPayload:
    """What the hosting bridge receives: the annotated tree and the position count."""
    toc: List[AnnotatedTocNode]
    total_positions: Optional[int]   # None when positions could not be fetched

    def to_dict(self) -> Dict[str, Any]:
        return {
            'toc': [node.to_dict() for node in self.toc],
            'totalPositions': self.total_positions,
        }
