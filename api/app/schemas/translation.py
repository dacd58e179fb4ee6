"""
Translation table schemas.

Field names are serialized in camelCase for the browser table editor.
"""
from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from typing import List

from app.schemas.language import LanguageResponse


class CamelModel(BaseModel):
    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True


class TranslationCellResponse(CamelModel):
    """One translated value, joined with its language."""
    id: int
    value: str
    translation_key_id: int
    language_id: int
    language_code: str
    language_name: str


class TranslationKeyResponse(CamelModel):
    """A translation key with the cells it currently has."""
    id: int
    key: str
    translations: List[TranslationCellResponse] = []


class TableDataResponse(CamelModel):
    """
    One page of the translation table.

    Only existing cells are listed under each key; the caller builds the dense
    grid from `languages`.
    """
    keys: List[TranslationKeyResponse]
    languages: List[LanguageResponse]
    total_count: int
    current_page: int
    page_size: int


class CreateKeyRequest(BaseModel):
    """Request schema for adding a translation key."""
    key: str


class UpdateTranslationRequest(BaseModel):
    """Request schema for writing a cell value."""
    value: str
