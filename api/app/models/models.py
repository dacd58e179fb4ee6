"""
Models module - re-exports all models.

Keeps imports like:
    from app.models.models import Language
"""
from app.models.language import Language
from app.models.translation_key import TranslationKey
from app.models.translation import Translation

__all__ = [
    'Language',
    'TranslationKey',
    'Translation',
]
