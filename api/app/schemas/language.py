from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class LanguageResponse(BaseModel):
    """Registered language response schema."""
    id: int
    code: str
    name: str

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True


class AvailableLanguageResponse(BaseModel):
    """Known language that has not been registered yet."""
    code: str
    name: str


class CreateLanguageRequest(BaseModel):
    """Request schema for registering a language."""
    code: str
    name: str = ""
