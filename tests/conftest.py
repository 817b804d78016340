"""Shared fixtures and path setup for the test suite."""

import sys
from pathlib import Path

import pytest

_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(_ROOT))

from toc_positions.core.models import PositionLocator, TocNode  # noqa: E402


def locators(*entries):
    """('c1', 1), ('c2', None), ... -> PositionLocator list."""
    return [PositionLocator(href=href, position=position) for href, position in entries]


def link(href, *children, title=None):
    return TocNode(title=title or (href or "Section"), href=href, children=list(children))


@pytest.fixture
def nested_toc():
    return [
        link("part1.xhtml",
             link("ch1.xhtml"),
             link("ch1.xhtml#s2")),
        link(None,
             link("ch2.xhtml"),
             link("ch3.xhtml")),
    ]


@pytest.fixture
def nested_positions():
    return locators(
        ("part1.xhtml", 1),
        ("ch1.xhtml", 2), ("ch1.xhtml", 3), ("ch1.xhtml", 4),
        ("ch2.xhtml", 5), ("ch2.xhtml", 6),
        ("ch3.xhtml", 7),
    )
