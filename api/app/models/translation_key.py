"""
TranslationKey model.
"""
from sqlmodel import SQLModel, Field
from typing import Optional


class TranslationKey(SQLModel, table=True):
    """TranslationKey table - one row per localizable UI string identifier."""
    __tablename__ = "translation_keys"

    id: Optional[int] = Field(default=None, primary_key=True)
    key: str = Field(unique=True, index=True)  # e.g., 'ui_Play', 'ui_Settings'
