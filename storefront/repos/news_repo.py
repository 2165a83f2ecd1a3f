# storefront/repos/news_repo.py
from typing import Any, Dict, List
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.data.models.news import NewsModel


class NewsRepo:
    def __init__(self, db: Session):
        self.db = db

    def list_news(self) -> List[NewsModel]:
        return list(self.db.execute(select(NewsModel).order_by(NewsModel.date.desc())).scalars().all())

    def get_news(self, news_id: UUID) -> NewsModel | None:
        return self.db.get(NewsModel, news_id)

    def create_news(self, news: NewsModel) -> NewsModel:
        self.db.add(news)
        self.db.commit()
        self.db.refresh(news)
        return news

    def update_news(self, news: NewsModel, patch: Dict[str, Any]) -> NewsModel:
        for key, value in patch.items():
            setattr(news, key, value)
        self.db.commit()
        self.db.refresh(news)
        return news

    def delete_news(self, news: NewsModel) -> None:
        self.db.delete(news)
        self.db.commit()
