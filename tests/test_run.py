"""Tests for the command line."""

import json
from unittest.mock import patch

import pytest

from toc_positions.core.errors import PositionsUnavailable
from toc_positions.core.models import PositionLocator, TocNode
from toc_positions.run import main


@pytest.fixture(autouse=True)
def _default_settings(monkeypatch, tmp_path):
    monkeypatch.setattr("toc_positions.utils.settings.get_project_root", lambda: tmp_path)


def _write(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestJsonCommand:

    def test_computes_payload(self, tmp_path, capsys):
        toc = _write(tmp_path / "toc.json", [
            {"href": "c1", "title": "One"},
            {"href": "c2", "title": "Two"},
        ])
        positions = _write(tmp_path / "positions.json", [
            {"href": "c2", "locations": {"position": 5}},
        ])

        assert main(["json", "--toc", str(toc), "--positions", str(positions)]) == 0

        payload = json.loads(capsys.readouterr().out)
        assert payload["totalPositions"] == 1
        assert [(n["startPosition"], n["endPosition"]) for n in payload["toc"]] == [(1, 1), (2, 5)]

    def test_missing_positions_file_is_unavailable(self, tmp_path, capsys):
        toc = _write(tmp_path / "toc.json", [{"href": "c1", "title": "One"}])

        assert main(["json", "--toc", str(toc), "--positions", str(tmp_path / "nope.json")]) == 0

        payload = json.loads(capsys.readouterr().out)
        assert payload["totalPositions"] is None
        assert payload["toc"][0]["startPosition"] == 1

    def test_bad_toc_file(self, tmp_path, capsys):
        toc = _write(tmp_path / "toc.json", {"not": "a list"})
        assert main(["json", "--toc", str(toc)]) == 1
        assert "Error" in capsys.readouterr().err


class TestEpubCommand:

    def test_uses_publication_fetchers(self, capsys):
        with patch("toc_positions.run.EpubPublication") as publication_cls:
            publication = publication_cls.return_value
            publication.toc.return_value = [TocNode(title="One", href="ch1.xhtml")]
            publication.positions.return_value = [PositionLocator(href="ch1.xhtml", position=1)]

            assert main(["epub", "book.epub"]) == 0

        publication_cls.assert_called_once_with("book.epub", 1024)
        payload = json.loads(capsys.readouterr().out)
        assert payload == {
            "toc": [{"href": "ch1.xhtml", "title": "One", "startPosition": 1, "endPosition": 1}],
            "totalPositions": 1,
        }

    def test_load_error(self, tmp_path, capsys):
        assert main(["epub", str(tmp_path / "missing.epub")]) == 1
        assert "not found" in capsys.readouterr().err


def test_no_command_prints_help(capsys):
    assert main([]) == 1
    assert "usage" in capsys.readouterr().out


class TestMalformedJson:
    """Entries that are not JSON objects: positions degrade, a bad TOC is an error."""

    def test_non_object_positions_are_unavailable(self, tmp_path, capsys):
        toc = _write(tmp_path / "toc.json", [{"href": "c1", "title": "One"}])
        positions = _write(tmp_path / "positions.json", ["c1", "c2"])

        assert main(["json", "--toc", str(toc), "--positions", str(positions)]) == 0

        payload = json.loads(capsys.readouterr().out)
        assert payload["totalPositions"] is None
        assert payload["toc"][0]["startPosition"] == 1

    def test_non_object_toc_entry(self, tmp_path, capsys):
        toc = _write(tmp_path / "toc.json", ["c1"])
        assert main(["json", "--toc", str(toc)]) == 1
        assert "Error" in capsys.readouterr().err

    def test_non_object_toc_child(self, tmp_path, capsys):
        toc = _write(tmp_path / "toc.json", [{"title": "Part", "children": [42]}])
        assert main(["json", "--toc", str(toc)]) == 1
        assert "Error" in capsys.readouterr().err


class TestPositionsCommand:

    def test_dumps_locators(self, capsys):
        with patch("toc_positions.run.EpubPublication") as publication_cls:
            publication_cls.return_value.positions.return_value = [
                PositionLocator(href="ch1.xhtml", position=1, media_type="application/xhtml+xml",
                                progression=0.0, total_progression=0.0),
                PositionLocator(href="ch1.xhtml", position=2, progression=0.5, total_progression=0.5),
            ]

            assert main(["positions", "book.epub"]) == 0

        assert json.loads(capsys.readouterr().out) == [
            {"href": "ch1.xhtml", "type": "application/xhtml+xml",
             "locations": {"position": 1, "progression": 0.0, "totalProgression": 0.0}},
            {"href": "ch1.xhtml",
             "locations": {"position": 2, "progression": 0.5, "totalProgression": 0.5}},
        ]

    def test_unavailable_positions_is_an_error(self, capsys):
        with patch("toc_positions.run.EpubPublication") as publication_cls:
            publication_cls.return_value.positions.side_effect = PositionsUnavailable("empty spine")

            assert main(["positions", "book.epub"]) == 1

        assert "empty spine" in capsys.readouterr().err
