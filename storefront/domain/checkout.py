# storefront/domain/checkout.py
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from storefront.domain.errors import CheckoutIncompleteError
from storefront.domain.schemas import PersonalData, DeliveryData


class CheckoutStep(str, Enum):
    PERSONAL_INFO = "personal_info"
    DELIVERY = "delivery"
    PAYMENT = "payment"


_ORDER = [CheckoutStep.PERSONAL_INFO, CheckoutStep.DELIVERY, CheckoutStep.PAYMENT]


@dataclass
class CheckoutAggregate:
    personal_data: Optional[PersonalData] = None
    delivery_data: Optional[DeliveryData] = None

    def is_complete(self) -> bool:
        return self.personal_data is not None and self.delivery_data is not None


class CheckoutSequencer:
    """
    Liniowy checkout: PERSONAL_INFO -> DELIVERY -> PAYMENT.

    Dane formularzy sa juz zwalidowane (pydantic), tutaj pilnujemy tylko kolejnosci.
    Cofanie sie nie czysci wpisanych danych, reset() czysci wszystko.
    """

    def __init__(self, step: CheckoutStep = CheckoutStep.PERSONAL_INFO, aggregate: CheckoutAggregate | None = None):
        self.step = step
        self.aggregate = aggregate or CheckoutAggregate()

    def _expect(self, step: CheckoutStep) -> None:
        if self.step != step:
            raise ValueError(f"Checkout is at step '{self.step.value}', expected '{step.value}'")

    def submit_personal(self, data: PersonalData) -> CheckoutStep:
        self._expect(CheckoutStep.PERSONAL_INFO)
        self.aggregate.personal_data = data
        self.step = CheckoutStep.DELIVERY
        return self.step

    def submit_delivery(self, data: DeliveryData) -> CheckoutStep:
        self._expect(CheckoutStep.DELIVERY)
        self.aggregate.delivery_data = data
        self.step = CheckoutStep.PAYMENT
        return self.step

    def back(self) -> CheckoutStep:
        index = _ORDER.index(self.step)
        if index == 0:
            raise ValueError("Already at the first checkout step")
        self.step = _ORDER[index - 1]
        return self.step

    def reset(self) -> None:
        self.step = CheckoutStep.PERSONAL_INFO
        self.aggregate = CheckoutAggregate()

    def require_ready_for_payment(self) -> CheckoutAggregate:
        if not self.aggregate.is_complete():
            raise CheckoutIncompleteError("Personal and delivery data are required to place an order")
        if self.step != CheckoutStep.PAYMENT:
            raise CheckoutIncompleteError(
                f"Checkout is at step '{self.step.value}', complete it before paying"
            )
        return self.aggregate
