from datetime import datetime, timezone
import uuid

from sqlalchemy import Column, String, Text, DateTime, Uuid

from storefront.data.database import Base


class NewsModel(Base):
    __tablename__ = "news"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    title = Column(String(300), nullable=False)
    summary = Column(Text, nullable=True)
    content = Column(Text, nullable=False)
    image = Column(String, nullable=True)
    date = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc), index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
