import pytest
from sqlalchemy.exc import IntegrityError
from sqlmodel import select
from app.core.database import create_db_engine, init_db, normalize_database_url, unit_of_work
from app.core.exceptions import StorageFailure
from app.models.models import Language, Translation, TranslationKey
from app.services.language_service import LanguageService


def test_normalize_database_url():
    assert normalize_database_url("postgres://u:p@db/app") == "postgresql://u:p@db/app"
    assert normalize_database_url("postgresql://u:p@db/app") == "postgresql://u:p@db/app"
    assert normalize_database_url("sqlite:///local.db") == "sqlite:///local.db"


def test_unit_of_work_commits(engine):
    with unit_of_work(engine) as session:
        session.add(Language(code="en", name="English"))

    with unit_of_work(engine) as session:
        assert session.exec(select(Language.code)).all() == ["en"]


def test_unit_of_work_rolls_back_on_error(engine):
    with pytest.raises(RuntimeError):
        with unit_of_work(engine) as session:
            session.add(Language(code="en", name="English"))
            session.flush()
            raise RuntimeError("abort")

    with unit_of_work(engine) as session:
        assert session.exec(select(Language)).all() == []


def test_cells_unique_per_key_and_language(engine):
    with unit_of_work(engine) as session:
        language = Language(code="en", name="English")
        key = TranslationKey(key="ui_Play")
        session.add(language)
        session.add(key)
        session.flush()
        language_id, key_id = language.id, key.id
        session.add(Translation(translation_key_id=key_id, language_id=language_id, value="a"))

    with pytest.raises(IntegrityError):
        with unit_of_work(engine) as session:
            session.add(Translation(translation_key_id=key_id, language_id=language_id, value="b"))


def test_sqlite_enforces_foreign_keys(engine):
    with pytest.raises(IntegrityError):
        with unit_of_work(engine) as session:
            session.add(Translation(translation_key_id=1, language_id=1, value="orphan"))


def test_unavailable_store_raises_storage_failure(tmp_path):
    missing = tmp_path / "missing" / "localization.db"
    bad_engine = create_db_engine(f"sqlite:///{missing}")

    with pytest.raises(StorageFailure):
        LanguageService(bad_engine).list_registered()


def test_init_db_is_repeatable(engine):
    init_db(engine)
    assert LanguageService(engine).list_registered() == []
