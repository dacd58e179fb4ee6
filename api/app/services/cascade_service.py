"""
Cascade service - deletes an owner (language or key) together with its cells.
"""
import logging
from sqlalchemy import delete
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from app.core.database import unit_of_work
from app.core.exceptions import NotFoundError, StorageFailure
from app.models.models import Language, TranslationKey, Translation

logger = logging.getLogger(__name__)


class CascadeService:
    """
    Keeps the translation matrix free of cells that point at deleted owners.

    Both deletions run as one transaction: dependent cells first, then the
    owner. If any step fails the whole unit is rolled back, so an owner is
    never observed deleted while its cells survive, or the other way round.
    Store-native ON DELETE CASCADE is not relied upon.

    The owner row is locked when it is looked up, so cell writes that point
    at it wait until the delete commits or rolls back.
    """

    def __init__(self, engine: Engine):
        self.engine = engine

    def delete_language(self, language_id: int) -> int:
        """
        Delete a language and every translation in that language.

        Args:
            language_id: The language ID to delete

        Returns:
            Number of translations deleted

        Raises:
            NotFoundError: If the language does not exist
            StorageFailure: If the transaction could not be completed
        """
        try:
            with unit_of_work(self.engine) as session:
                language = self._lock_owner(session, Language, language_id)
                if not language:
                    raise NotFoundError(f"Language with id {language_id} not found")

                cells_deleted = self._delete_cells(
                    session, Translation.language_id == language_id
                )
                self._delete_owner(session, language)
        except IntegrityError as e:
            logger.error(f"Deleting language {language_id} aborted: {e}")
            raise StorageFailure(f"Language {language_id} could not be deleted: {e}") from e

        logger.info(f"Deleted language {language_id} and {cells_deleted} translations")
        return cells_deleted

    def delete_key(self, key_id: int) -> int:
        """
        Delete a translation key and all of its translations.

        Args:
            key_id: The translation key ID to delete

        Returns:
            Number of translations deleted

        Raises:
            NotFoundError: If the key does not exist
            StorageFailure: If the transaction could not be completed
        """
        try:
            with unit_of_work(self.engine) as session:
                translation_key = self._lock_owner(session, TranslationKey, key_id)
                if not translation_key:
                    raise NotFoundError(f"Key with id {key_id} not found")

                cells_deleted = self._delete_cells(
                    session, Translation.translation_key_id == key_id
                )
                self._delete_owner(session, translation_key)
        except IntegrityError as e:
            logger.error(f"Deleting key {key_id} aborted: {e}")
            raise StorageFailure(f"Key {key_id} could not be deleted: {e}") from e

        logger.info(f"Deleted key {key_id} and {cells_deleted} translations")
        return cells_deleted

    def _lock_owner(self, session: Session, model, owner_id: int):
        # FOR UPDATE on PostgreSQL; SQLite already serializes writers
        return session.exec(
            select(model).where(model.id == owner_id).with_for_update()
        ).first()

    def _delete_cells(self, session: Session, condition) -> int:
        result = session.exec(delete(Translation).where(condition))
        return result.rowcount

    def _delete_owner(self, session: Session, owner) -> None:
        session.delete(owner)
        session.flush()
