"""
Translation model - a single cell of the (key, language) matrix.
"""
from sqlmodel import SQLModel, Field
from sqlalchemy import UniqueConstraint
from typing import Optional


class Translation(SQLModel, table=True):
    """Translation table - the translated value of one key in one language."""
    __tablename__ = "translations"
    # At most one cell per (key, language); the upsert path resolves conflicts on it
    __table_args__ = (
        UniqueConstraint("translation_key_id", "language_id", name="uq_translation_key_language"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    translation_key_id: int = Field(foreign_key="translation_keys.id", index=True)
    language_id: int = Field(foreign_key="languages.id", index=True)
    value: str = ""  # May be empty
