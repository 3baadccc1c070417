from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class TranslationsRequest(BaseModel):
    translations: Any = None


class PageRequest(BaseModel):
    name: Optional[str] = None
    slug: Optional[str] = None
    translations: Any = None


class ReviewRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    role: Optional[str] = None
    image: Optional[str] = None
    rating: Optional[float] = None
    review_text: Optional[str] = Field(default=None, alias="reviewText")


class SectionUpdateRequest(BaseModel):
    language: Optional[str] = None
    translations: Any = None


class CopyTranslationsRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    source_language: Optional[str] = Field(default=None, alias="sourceLanguage")
    target_language: Optional[str] = Field(default=None, alias="targetLanguage")
