#import wszystkich modeli zeby SQLAlchemy je zarejestrowal w base metadata

from storefront.data.models.category import CategoryModel
from storefront.data.models.product import ProductModel
from storefront.data.models.news import NewsModel
from storefront.data.models.order import OrderModel, ORDER_STATUSES
from storefront.data.models.order_item import OrderItemModel
from storefront.data.models.schema_version import SchemaVersionModel

__all__ = [
    "CategoryModel",
    "ProductModel",
    "NewsModel",
    "OrderModel",
    "OrderItemModel",
    "SchemaVersionModel",
    "ORDER_STATUSES",
]
