from sqlalchemy import Column, Integer, String, Boolean, DateTime, JSON
from lavajato.core.db import Base
from lavajato.models.base.mixins import TimestampMixin


class SeoContentCache(Base, TimestampMixin):
    """Generated marketing copy keyed by topic/content type/city. Platform wide, not per tenant."""

    __tablename__ = "seo_content_cache"

    id = Column(Integer, primary_key=True)
    cache_key = Column(String(255), nullable=False, unique=True, index=True)
    topic = Column(String(255), nullable=False)
    content_type = Column(String(30), nullable=False)
    content = Column(JSON, nullable=False)
    generated_by_ai = Column(Boolean, nullable=False, default=False)
    ai_model = Column(String(100), nullable=True)
    generation_ms = Column(Integer, nullable=True)
    expires_at = Column(DateTime(timezone=True), nullable=True, index=True)

    def __repr__(self):
        return f"<SeoContentCache key={self.cache_key} ai={self.generated_by_ai}>"
