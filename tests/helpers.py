"""Test doubles shared by the test modules."""

from decimal import Decimal

from storefront.domain.schemas import ProductSnapshot
from storefront.services.storage_client import StorageClient

ADMIN_HEADERS = {"X-Admin-Token": "test-admin-token"}


class RecordingStorage(StorageClient):
    """StorageClient bez HTTP: zapisuje co zostalo wyslane/usuniete."""

    def __init__(self):
        super().__init__(base_url="http://storage.test/storage/v1", api_key="test-key")
        self.uploaded = []
        self.removed = []

    def _put(self, bucket, path, data, content_type):
        self.uploaded.append((bucket, path, data, content_type))

    def _delete(self, bucket, paths):
        self.removed.append((bucket, list(paths)))


class RecordingNotifications:
    def __init__(self):
        self.sent = []

    def send_order_placed(self, order_id, email, total):
        self.sent.append((order_id, email, total))


def snapshot(product_id, name, price, **kwargs):
    return ProductSnapshot(
        id=product_id,
        name=name,
        price=None if price is None else Decimal(str(price)),
        **kwargs,
    )


class RecordingRepo:
    """Repo zamowien bez bazy: zapisuje kolejnosc wywolan, opcjonalnie rzuca blad na wybranym kroku."""

    def __init__(self, fail_on=None, error=None):
        self.fail_on = fail_on
        self.error = error
        self.calls = []
        self.orders = []
        self.item_batches = []

    def ensure_schema_ready(self):
        self.calls.append("schema")
        if self.fail_on == "schema":
            raise self.error

    def create_order(self, order):
        self.calls.append("create_order")
        if self.fail_on == "order":
            raise self.error
        self.orders.append(order)
        return order

    def add_items(self, items):
        self.calls.append("add_items")
        if self.fail_on == "items":
            raise self.error
        self.item_batches.append(list(items))
        return items

    def commit(self):
        self.calls.append("commit")

    def rollback(self):
        self.calls.append("rollback")
