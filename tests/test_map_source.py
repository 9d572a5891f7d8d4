"""
Tests for loading map documents from files.
"""

from pathlib import Path

import pytest

from jsontransform.config import Settings
from jsontransform.core.exceptions import (
    DuplicateDestinationFieldException,
    MalformedMapException,
    NotFoundException,
)
from jsontransform.services.map_source import load_default_map, load_map_file


def test_load_map_file(tmp_path: Path) -> None:
    map_file = tmp_path / "map.json"
    map_file.write_text(
        '{"person": {"first": "firstname"}, "card": {"mifare": "currentMifareID"}}',
        encoding="utf-8",
    )

    document = load_map_file(map_file)

    assert list(document) == ["person", "card"]
    assert document["card"] == {"mifare": "currentMifareID"}


def test_load_map_file_missing(tmp_path: Path) -> None:
    with pytest.raises(NotFoundException):
        load_map_file(tmp_path / "nope.json")


def test_load_map_file_wrong_shape(tmp_path: Path) -> None:
    map_file = tmp_path / "map.json"
    map_file.write_text('{"person": "firstname"}', encoding="utf-8")

    with pytest.raises(MalformedMapException):
        load_map_file(map_file)


def test_load_map_file_duplicate_field(tmp_path: Path) -> None:
    map_file = tmp_path / "map.json"
    map_file.write_text('{"card": {"id": "userID", "id": "userid"}}', encoding="utf-8")

    with pytest.raises(DuplicateDestinationFieldException):
        load_map_file(map_file)


def test_load_default_map_unset() -> None:
    assert load_default_map(Settings(map_file="")) is None


def test_load_default_map_from_settings(tmp_path: Path) -> None:
    map_file = tmp_path / "map.json"
    map_file.write_text('{"empty": {}}', encoding="utf-8")

    assert load_default_map(Settings(map_file=str(map_file))) == {"empty": {}}


def test_bundled_id_card_map_is_valid() -> None:
    map_file = Path(__file__).resolve().parent.parent / "maps" / "idcard_map.json"
    document = load_map_file(map_file)
    assert list(document) == ["person", "card"]
    assert document["person"]["photolastupdated"] == "lastupdated"
