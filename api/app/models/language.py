"""
Language model.
"""
from sqlmodel import SQLModel, Field
from typing import Optional


class Language(SQLModel, table=True):
    """Language table - stores the languages registered for translation."""
    __tablename__ = "languages"

    id: Optional[int] = Field(default=None, primary_key=True)
    code: str = Field(max_length=2, unique=True, index=True)  # e.g., 'en', 'ru', 'tr'
    name: str  # English, Русский, Türkçe, etc.
