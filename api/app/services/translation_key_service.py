"""
Translation key service for business logic related to translation keys.
"""
# pyright: reportAttributeAccessIssue=false
import logging
import re
from typing import List, Optional
from sqlalchemy import func
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from app.core.database import unit_of_work
from app.core.exceptions import ValidationError, NotFoundError, ConflictError
from app.models.models import TranslationKey, Translation, Language
from app.schemas.translation import TranslationCellResponse, TranslationKeyResponse
from app.services.cascade_service import CascadeService

logger = logging.getLogger(__name__)

KEY_PATTERN = re.compile(r"^ui_[A-Za-z]+$")


def validate_key(key: Optional[str]) -> str:
    """
    Normalize and validate a translation key.

    Returns:
        The key with surrounding whitespace removed

    Raises:
        ValidationError: If the key is blank or does not look like 'ui_Name'
    """
    key = (key or "").strip()
    if not key:
        raise ValidationError("Key is required")
    if not KEY_PATTERN.match(key):
        raise ValidationError("Key must match 'ui_' followed by letters (e.g., 'ui_Play')")
    return key


def load_cells(session: Session, key_ids: List[int]) -> List[TranslationCellResponse]:
    """Load the cells of the given keys joined with their language, by language ID."""
    if not key_ids:
        return []

    rows = session.exec(
        select(Translation, Language)
        .join(Language, Translation.language_id == Language.id)
        .where(Translation.translation_key_id.in_(key_ids))  # type: ignore
        .order_by(Translation.translation_key_id, Language.id)
    ).all()

    return [
        TranslationCellResponse(
            id=translation.id,
            value=translation.value,
            translation_key_id=translation.translation_key_id,
            language_id=language.id,
            language_code=language.code,
            language_name=language.name,
        )
        for translation, language in rows
    ]


class TranslationKeyService:
    """The set of translation keys."""

    def __init__(self, engine: Engine, cascade: Optional[CascadeService] = None):
        self.engine = engine
        self.cascade = cascade or CascadeService(engine)

    def add(self, key: str) -> TranslationKeyResponse:
        """
        Add a new translation key with no translations yet.

        Raises:
            ValidationError: If the key is blank or malformed
            ConflictError: If the key already exists
        """
        key = validate_key(key)

        try:
            with unit_of_work(self.engine) as session:
                existing = session.exec(
                    select(TranslationKey).where(TranslationKey.key == key)
                ).first()
                if existing:
                    raise ConflictError(f"Key '{key}' already exists")

                translation_key = TranslationKey(key=key)
                session.add(translation_key)
                session.flush()
        except IntegrityError as e:
            logger.info(f"Concurrent creation of key '{key}' lost the race")
            raise ConflictError(f"Key '{key}' already exists") from e

        logger.info(f"Added key {translation_key.id} ({key})")
        return TranslationKeyResponse(id=translation_key.id, key=translation_key.key, translations=[])

    def find(self, key: str) -> Optional[TranslationKey]:
        """Get a translation key by its identifier, or None."""
        with unit_of_work(self.engine) as session:
            return session.exec(
                select(TranslationKey).where(TranslationKey.key == key)
            ).first()

    def count(self) -> int:
        """Get the total number of translation keys."""
        with unit_of_work(self.engine) as session:
            return session.exec(select(func.count()).select_from(TranslationKey)).one()

    def cells_for_key(self, key_id: int) -> List[TranslationCellResponse]:
        """
        Get every translation of a key, joined with its language.

        Raises:
            NotFoundError: If the key does not exist
        """
        with unit_of_work(self.engine) as session:
            if not session.get(TranslationKey, key_id):
                raise NotFoundError(f"Key with id {key_id} not found")
            return load_cells(session, [key_id])

    def remove(self, key_id: int) -> None:
        """
        Delete a key and, atomically, all of its translations.

        Raises:
            NotFoundError: If the key does not exist
        """
        self.cascade.delete_key(key_id)
