"""
API v1 router aggregation.
"""
from fastapi import APIRouter
from app.api.v1.endpoints import languages, translations

api_router = APIRouter()

# Note: Each router already defines its own prefix, so we don't add another one here
api_router.include_router(languages.router)
api_router.include_router(translations.router)
