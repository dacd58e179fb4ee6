"""
Language service for business logic related to the language catalog.
"""
# pyright: reportAttributeAccessIssue=false
import logging
from typing import List, Optional
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from sqlmodel import select

from app.core.database import unit_of_work
from app.core.exceptions import ValidationError, NotFoundError, ConflictError
from app.models.models import Language
from app.schemas.language import AvailableLanguageResponse
from app.services.cascade_service import CascadeService

logger = logging.getLogger(__name__)

# Languages the editor offers to add, in display order
KNOWN_LANGUAGES = (
    ('en', 'English'),
    ('ru', 'Русский'),
    ('tr', 'Türkçe'),
)

LANGUAGE_CODE_LENGTH = 2


class LanguageService:
    """Registered languages plus the fixed catalog of known language codes."""

    def __init__(self, engine: Engine, cascade: Optional[CascadeService] = None):
        self.engine = engine
        self.cascade = cascade or CascadeService(engine)

    def list_registered(self) -> List[Language]:
        """Get all registered languages in creation order."""
        with unit_of_work(self.engine) as session:
            return list(session.exec(select(Language).order_by(Language.id)).all())

    def list_available(self) -> List[AvailableLanguageResponse]:
        """Get known languages that are not registered yet, in catalog order."""
        with unit_of_work(self.engine) as session:
            registered_codes = set(session.exec(select(Language.code)).all())

        return [
            AvailableLanguageResponse(code=code, name=name)
            for code, name in KNOWN_LANGUAGES
            if code not in registered_codes
        ]

    def exists(self, code: str) -> bool:
        """Check whether a language code is registered."""
        with unit_of_work(self.engine) as session:
            return session.exec(
                select(Language.id).where(Language.code == code)
            ).first() is not None

    def get(self, language_id: int) -> Language:
        """Get a registered language by ID."""
        with unit_of_work(self.engine) as session:
            language = session.get(Language, language_id)
        if not language:
            raise NotFoundError(f"Language with id {language_id} not found")
        return language

    def register(self, code: str, name: str) -> Language:
        """
        Register a new language.

        The duplicate check and the insert share one transaction. The unique
        index on languages.code settles races between concurrent requests.

        Args:
            code: Two-character language code (e.g., 'es')
            name: Display name (e.g., 'Español')

        Returns:
            The created Language

        Raises:
            ValidationError: If the code is not exactly 2 characters or the name is blank
            ConflictError: If the code is already registered
        """
        code = (code or "").strip()
        name = (name or "").strip()

        if len(code) != LANGUAGE_CODE_LENGTH:
            raise ValidationError("Language code must be 2 characters (e.g., 'en', 'fr')")
        if not name:
            raise ValidationError("Language name is required")

        try:
            with unit_of_work(self.engine) as session:
                existing = session.exec(
                    select(Language).where(Language.code == code)
                ).first()
                if existing:
                    raise ConflictError(f"Language '{code}' already exists")

                language = Language(code=code, name=name)
                session.add(language)
                session.flush()
        except IntegrityError as e:
            logger.info(f"Concurrent registration of language '{code}' lost the race")
            raise ConflictError(f"Language '{code}' already exists") from e

        logger.info(f"Registered language {language.id} ({code})")
        return language

    def unregister(self, language_id: int) -> None:
        """
        Delete a language and, atomically, every translation in it.

        Raises:
            NotFoundError: If the language does not exist
        """
        self.cascade.delete_language(language_id)
