# storefront/services/news_service.py
from typing import List
from uuid import UUID

from sqlalchemy.orm import Session

from storefront.data.models.news import NewsModel
from storefront.domain.errors import StorageError
from storefront.domain.schemas import NewsIn, NewsUpdate
from storefront.repos.news_repo import NewsRepo
from storefront.services.catalog_service import image_path
from storefront.services.storage_client import StorageClient
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class NewsService:
    def __init__(self, db: Session, storage: StorageClient | None = None):
        self.repo = NewsRepo(db)
        self.storage = storage or StorageClient()

    def list_news(self) -> List[NewsModel]:
        return self.repo.list_news()

    def get_news(self, news_id: UUID) -> NewsModel:
        news = self.repo.get_news(news_id)
        if not news:
            raise LookupError("News not found")
        return news

    def create_news(self, payload: NewsIn) -> NewsModel:
        data = payload.model_dump(exclude_none=True)
        news = self.repo.create_news(NewsModel(**data))
        logger.info(f"News {news.id} '{news.title}' created")
        return news

    def update_news(self, news_id: UUID, payload: NewsUpdate) -> NewsModel:
        news = self.get_news(news_id)
        return self.repo.update_news(news, payload.model_dump(exclude_unset=True))

    def delete_news(self, news_id: UUID) -> None:
        news = self.get_news(news_id)
        image = news.image

        self.repo.delete_news(news)
        logger.info(f"News {news_id} deleted")

        if image:
            try:
                self.storage.remove_urls([image])
            except StorageError as e:
                logger.warning(f"Image of news {news_id} left behind: {e}")

    def upload_image(self, news_id: UUID, filename: str, data: bytes, content_type: str) -> str:
        news = self.get_news(news_id)
        url = self.storage.upload("news", image_path(filename), data, content_type)
        self.repo.update_news(news, {"image": url})
        return url
