from unittest.mock import patch

import pytest
from sqlalchemy.exc import OperationalError
from app.core.exceptions import NotFoundError, StorageFailure
from app.models.models import Translation
from app.services.cascade_service import CascadeService


@pytest.fixture
def populated(keys, languages, matrix):
    play = keys.add("ui_Play")
    quit_key = keys.add("ui_Quit")
    en = languages.register("en", "English")
    tr = languages.register("tr", "Türkçe")
    matrix.upsert(play.id, en.id, "Play")
    matrix.upsert(play.id, tr.id, "Oyna")
    matrix.upsert(quit_key.id, en.id, "Quit")
    return {"play": play, "quit": quit_key, "en": en, "tr": tr}


def cell_pairs(matrix):
    return sorted(
        (cell.translation_key_id, cell.language_id)
        for key in matrix.page(1, 100).keys
        for cell in key.translations
    )


def test_delete_language_removes_its_cells(cascade, matrix, populated):
    deleted = cascade.delete_language(populated["en"].id)

    assert deleted == 2
    assert cell_pairs(matrix) == [(populated["play"].id, populated["tr"].id)]
    assert [lang.code for lang in matrix.page(1, 100).languages] == ["tr"]


def test_delete_key_removes_its_cells(cascade, matrix, populated):
    deleted = cascade.delete_key(populated["play"].id)

    assert deleted == 2
    assert cell_pairs(matrix) == [(populated["quit"].id, populated["en"].id)]


def test_delete_missing_language(cascade):
    with pytest.raises(NotFoundError):
        cascade.delete_language(7)


def test_delete_missing_key(cascade):
    with pytest.raises(NotFoundError):
        cascade.delete_key(7)


def test_unregister_then_no_page_references_language(languages, matrix, populated):
    languages.unregister(populated["tr"].id)

    table = matrix.page(1, 100)
    assert all(
        cell.language_id != populated["tr"].id
        for key in table.keys
        for cell in key.translations
    )


@patch.object(
    CascadeService,
    "_delete_owner",
    side_effect=OperationalError("DELETE FROM languages", {}, Exception("connection lost")),
)
def test_failed_language_delete_rolls_back_cells(mock_delete_owner, cascade, languages, matrix, populated):
    before = cell_pairs(matrix)

    with pytest.raises(StorageFailure):
        cascade.delete_language(populated["en"].id)

    mock_delete_owner.assert_called_once()
    assert cell_pairs(matrix) == before
    assert [lang.code for lang in languages.list_registered()] == ["en", "tr"]


@patch.object(
    CascadeService,
    "_delete_owner",
    side_effect=OperationalError("DELETE FROM translation_keys", {}, Exception("connection lost")),
)
def test_failed_key_delete_rolls_back_cells(mock_delete_owner, cascade, keys, matrix, populated):
    before = cell_pairs(matrix)

    with pytest.raises(StorageFailure):
        cascade.delete_key(populated["play"].id)

    assert cell_pairs(matrix) == before
    assert keys.find("ui_Play") is not None


class LateCellCascade(CascadeService):
    """Writes a cell for the owner after its cells were cleared, like a concurrent editor."""

    def __init__(self, engine, key_id, language_id):
        super().__init__(engine)
        self.key_id = key_id
        self.language_id = language_id

    def _delete_cells(self, session, condition):
        deleted = super()._delete_cells(session, condition)
        session.add(Translation(translation_key_id=self.key_id, language_id=self.language_id, value="late"))
        session.flush()
        return deleted


def test_cell_written_during_language_delete_raises_storage_failure(engine, languages, matrix, populated):
    before = cell_pairs(matrix)
    cascade = LateCellCascade(engine, populated["play"].id, populated["en"].id)

    with pytest.raises(StorageFailure):
        cascade.delete_language(populated["en"].id)

    assert cell_pairs(matrix) == before
    assert [lang.code for lang in languages.list_registered()] == ["en", "tr"]


def test_cell_written_during_key_delete_raises_storage_failure(engine, keys, matrix, populated):
    before = cell_pairs(matrix)
    cascade = LateCellCascade(engine, populated["quit"].id, populated["tr"].id)

    with pytest.raises(StorageFailure):
        cascade.delete_key(populated["quit"].id)

    assert cell_pairs(matrix) == before
    assert keys.find("ui_Quit") is not None
