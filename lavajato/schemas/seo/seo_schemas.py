# lavajato/schemas/seo/seo_schemas.py

from pydantic import BaseModel, Field
from typing import Optional, List, Dict, Any, Literal
from datetime import datetime

ContentType = Literal["guia", "tabela", "checklist", "servico", "cidade"]


class CityContext(BaseModel):
    name: str = Field(min_length=2, max_length=120)
    state: str = Field(min_length=2, max_length=2)
    region: Optional[str] = None
    population: Optional[int] = Field(default=None, ge=0)


class SeoContentRequest(BaseModel):
    topic: str = Field(min_length=2, max_length=150)
    content_type: ContentType
    city: Optional[CityContext] = None
    keywords: List[str] = []
    base_description: str = Field(default="", max_length=1000)
    force_regenerate: bool = False


class SeoContentOut(BaseModel):
    cache_key: str
    content: Dict[str, Any]
    from_cache: bool
    generated_by_ai: bool
    ai_model: Optional[str] = None
    expires_at: Optional[datetime] = None
