"""
Translation service - the sparse (key, language) -> value matrix.
"""
# pyright: reportAttributeAccessIssue=false
import logging
from collections import defaultdict
from typing import Optional
from sqlalchemy import func
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from app.core.database import unit_of_work
from app.core.exceptions import ValidationError, NotFoundError, StorageFailure
from app.models.models import Language, TranslationKey, Translation
from app.schemas.language import LanguageResponse
from app.schemas.translation import (
    TableDataResponse,
    TranslationCellResponse,
    TranslationKeyResponse,
)
from app.services.translation_key_service import load_cells

logger = logging.getLogger(__name__)

# Dialects that can resolve a unique conflict inside the INSERT itself
UPSERT_INSERTS = {
    'postgresql': postgresql_insert,
    'sqlite': sqlite_insert,
}


class TranslationService:
    """Paginated reads of the translation table and the single cell write path."""

    def __init__(self, engine: Engine):
        self.engine = engine

    def page(self, page_number: int, page_size: int) -> TableDataResponse:
        """
        Get one page of translation keys with their translations.

        Keys are ordered by ID and windowed to
        [(page_number - 1) * page_size, page_number * page_size). Each key
        carries only the cells that exist; the full registered language list
        and the unwindowed key count come along so the caller can build the
        dense grid and the pager.

        Raises:
            ValidationError: If page_number or page_size is less than 1
        """
        if page_number < 1:
            raise ValidationError("Page number must be at least 1")
        if page_size < 1:
            raise ValidationError("Page size must be at least 1")

        with unit_of_work(self.engine) as session:
            keys = session.exec(
                select(TranslationKey)
                .order_by(TranslationKey.id)
                .offset((page_number - 1) * page_size)
                .limit(page_size)
            ).all()

            cells_by_key = defaultdict(list)
            for cell in load_cells(session, [k.id for k in keys]):
                cells_by_key[cell.translation_key_id].append(cell)

            languages = session.exec(select(Language).order_by(Language.id)).all()
            total_count = session.exec(select(func.count()).select_from(TranslationKey)).one()

        return TableDataResponse(
            keys=[
                TranslationKeyResponse(id=k.id, key=k.key, translations=cells_by_key[k.id])
                for k in keys
            ],
            languages=[LanguageResponse.model_validate(lang) for lang in languages],
            total_count=total_count,
            current_page=page_number,
            page_size=page_size,
        )

    def upsert(self, key_id: int, language_id: int, value: Optional[str]) -> TranslationCellResponse:
        """
        Write the value of one cell, creating the cell on first write.

        The write is a single INSERT .. ON CONFLICT DO UPDATE on the
        (translation_key_id, language_id) unique constraint, so concurrent
        editors of the same cell never produce duplicate rows. Repeating the
        same call leaves the same state.

        Raises:
            ValidationError: If value is None
            NotFoundError: If the key or the language does not exist
        """
        if value is None:
            raise ValidationError("Value is required")

        try:
            with unit_of_work(self.engine) as session:
                translation_key = session.get(TranslationKey, key_id)
                if not translation_key:
                    raise NotFoundError(f"Key with id {key_id} not found")
                language = session.get(Language, language_id)
                if not language:
                    raise NotFoundError(f"Language with id {language_id} not found")

                self._write_cell(session, key_id, language_id, value)

                translation = session.exec(
                    select(Translation).where(
                        Translation.translation_key_id == key_id,
                        Translation.language_id == language_id,
                    )
                ).one()
                cell = TranslationCellResponse(
                    id=translation.id,
                    value=translation.value,
                    translation_key_id=key_id,
                    language_id=language.id,
                    language_code=language.code,
                    language_name=language.name,
                )
        except IntegrityError as e:
            # The only constraint the upsert can still trip is a foreign key,
            # i.e. the key or language was deleted concurrently
            raise NotFoundError(
                f"Key {key_id} or language {language_id} no longer exists"
            ) from e

        logger.debug(f"Wrote translation for key {key_id}, language {language_id}")
        return cell

    def _write_cell(self, session: Session, key_id: int, language_id: int, value: str) -> None:
        dialect = session.get_bind().dialect.name
        insert = UPSERT_INSERTS.get(dialect)
        if insert is None:
            raise StorageFailure(f"Upsert is not supported on the '{dialect}' backend")

        statement = insert(Translation).values(
            translation_key_id=key_id,
            language_id=language_id,
            value=value,
        )
        statement = statement.on_conflict_do_update(
            index_elements=['translation_key_id', 'language_id'],
            set_={'value': statement.excluded['value']},
        )
        session.exec(statement)
