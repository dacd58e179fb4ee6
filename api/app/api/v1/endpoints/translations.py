"""
Translation table endpoints.
"""
from fastapi import APIRouter, Depends, Query, status, Response
from sqlalchemy.engine import Engine
from typing import List
from app.core.config import settings
from app.core.database import get_engine
from app.schemas.translation import (
    TableDataResponse,
    TranslationKeyResponse,
    TranslationCellResponse,
    CreateKeyRequest,
    UpdateTranslationRequest,
)
from app.services.translation_service import TranslationService
from app.services.translation_key_service import TranslationKeyService

router = APIRouter(prefix="/translations", tags=["translations"])


def get_translation_service(engine: Engine = Depends(get_engine)) -> TranslationService:
    return TranslationService(engine)


def get_key_service(engine: Engine = Depends(get_engine)) -> TranslationKeyService:
    return TranslationKeyService(engine)


@router.get("/table", response_model=TableDataResponse)
def get_table_data(
    page: int = Query(1, ge=1),
    page_size: int = Query(
        settings.default_page_size, ge=1, le=settings.max_page_size, alias="pageSize"
    ),
    service: TranslationService = Depends(get_translation_service)
):
    """Get one page of keys with their translations, plus all registered languages."""
    return service.page(page, page_size)


@router.post("/keys", response_model=TranslationKeyResponse, status_code=status.HTTP_201_CREATED)
def create_key(
    request: CreateKeyRequest,
    service: TranslationKeyService = Depends(get_key_service)
):
    """Add a translation key."""
    return service.add(request.key)


@router.get("/keys/{key_id}/translations", response_model=List[TranslationCellResponse])
def get_key_translations(
    key_id: int,
    service: TranslationKeyService = Depends(get_key_service)
):
    """Get all translations of one key."""
    return service.cells_for_key(key_id)


@router.delete("/keys/{key_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_key(
    key_id: int,
    service: TranslationKeyService = Depends(get_key_service)
):
    """Delete a key together with all of its translations."""
    service.remove(key_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/{key_id}/{language_id}", response_model=TranslationCellResponse)
def update_translation(
    key_id: int,
    language_id: int,
    request: UpdateTranslationRequest,
    service: TranslationService = Depends(get_translation_service)
):
    """Create or overwrite the translation of a key in a language."""
    return service.upsert(key_id, language_id, request.value)
