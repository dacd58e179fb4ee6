import os

# Settings require a database URL at import time; tests build their own engines
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from app.core.database import create_db_engine, get_engine, init_db  # noqa: E402
from app.models import models  # noqa: E402,F401
from app.services.cascade_service import CascadeService  # noqa: E402
from app.services.language_service import LanguageService  # noqa: E402
from app.services.translation_key_service import TranslationKeyService  # noqa: E402
from app.services.translation_service import TranslationService  # noqa: E402


@pytest.fixture
def engine(tmp_path):
    db_engine = create_db_engine(f"sqlite:///{tmp_path / 'localization.db'}")
    init_db(db_engine)
    yield db_engine
    db_engine.dispose()


@pytest.fixture
def languages(engine):
    return LanguageService(engine)


@pytest.fixture
def keys(engine):
    return TranslationKeyService(engine)


@pytest.fixture
def matrix(engine):
    return TranslationService(engine)


@pytest.fixture
def cascade(engine):
    return CascadeService(engine)


@pytest.fixture
def client(engine):
    from app.main import app

    app.dependency_overrides[get_engine] = lambda: engine
    yield TestClient(app)
    app.dependency_overrides.clear()
