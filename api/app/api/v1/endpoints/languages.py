"""
Language catalog endpoints.
"""
from fastapi import APIRouter, Depends, status, Response
from sqlalchemy.engine import Engine
from typing import List
from app.core.database import get_engine
from app.schemas.language import (
    LanguageResponse,
    AvailableLanguageResponse,
    CreateLanguageRequest,
)
from app.services.language_service import LanguageService

router = APIRouter(prefix="/languages", tags=["languages"])


def get_language_service(engine: Engine = Depends(get_engine)) -> LanguageService:
    return LanguageService(engine)


@router.get("", response_model=List[LanguageResponse])
def get_languages(service: LanguageService = Depends(get_language_service)):
    """Get all registered languages."""
    return [LanguageResponse.model_validate(lang) for lang in service.list_registered()]


@router.get("/available", response_model=List[AvailableLanguageResponse])
def get_available_languages(service: LanguageService = Depends(get_language_service)):
    """Get known languages that can still be added."""
    return service.list_available()


@router.post("", response_model=LanguageResponse, status_code=status.HTTP_201_CREATED)
def create_language(
    request: CreateLanguageRequest,
    service: LanguageService = Depends(get_language_service)
):
    """Register a language."""
    language = service.register(request.code, request.name)
    return LanguageResponse.model_validate(language)


@router.delete("/{language_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_language(
    language_id: int,
    service: LanguageService = Depends(get_language_service)
):
    """Delete a language together with all of its translations."""
    service.unregister(language_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
