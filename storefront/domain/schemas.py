# storefront/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict, EmailStr, model_validator
from typing import ClassVar, List, Literal, Optional, Tuple
from decimal import Decimal
from datetime import datetime
from uuid import UUID


DeliveryMethod = Literal["novaposhta", "ukrposhta", "selfpickup"]
PaymentMethod = Literal["card", "cash"]
OrderStatus = Literal["pending", "processing", "completed", "cancelled", "refunded"]


# =====================================================
# KOSZYK
# =====================================================
class ProductSnapshot(BaseModel):
    """Kopia produktu z chwili dodania do koszyka. Cena moze byc pusta (stare rekordy)."""

    id: str
    name: str
    price: Optional[Decimal] = None
    category_id: Optional[str] = None
    image: Optional[str] = None


class CartItem(BaseModel):
    product: ProductSnapshot
    quantity: int = Field(..., gt=0)


class ItemIn(BaseModel):
    """Schema dla dodawania produktu do koszyka."""

    product_id: str = Field(..., min_length=1, description="ID produktu")
    quantity: int = Field(1, gt=0, description="Ilość produktu (musi być > 0)")


class QuantityIn(BaseModel):
    # bez gt=0, decyzje o niedodatnich ilosciach podejmuje CartStore
    quantity: int


class CartItemOut(BaseModel):
    product_id: str
    name: str
    quantity: int
    price: Optional[Decimal] = None
    image: Optional[str] = None


class CartOut(BaseModel):
    session_id: str
    items: List[CartItemOut]
    total_items: int
    total_price: Decimal


class SessionOut(BaseModel):
    session_id: str


# =====================================================
# CHECKOUT
# =====================================================
class PersonalData(BaseModel):
    first_name: str = Field(..., min_length=2, description="Imię (min. 2 znaki)")
    last_name: str = Field(..., min_length=2, description="Nazwisko (min. 2 znaki)")
    email: EmailStr
    phone: str = Field(..., min_length=10, description="Telefon (min. 10 znaków)")


class DeliveryData(BaseModel):
    method: DeliveryMethod
    city: str = Field(..., min_length=2)
    post_office: Optional[str] = None
    postal_code: Optional[str] = None
    address: Optional[str] = None
    notes: Optional[str] = None

    @model_validator(mode="after")
    def check_method_fields(self):
        # kazda metoda dostawy ma swoje wymagane pole, odbior osobisty nie ma zadnego
        if self.method == "novaposhta" and not (self.post_office or "").strip():
            raise ValueError("Post office number is required for Nova Poshta delivery")
        if self.method == "ukrposhta" and not (self.postal_code or "").strip():
            raise ValueError("Postal code is required for Ukrposhta delivery")
        return self


class PaymentData(BaseModel):
    method: PaymentMethod


class PaymentIn(BaseModel):
    payment: PaymentData
    user_id: Optional[UUID] = None  # brak = zamowienie goscia


class CheckoutOut(BaseModel):
    session_id: str
    step: str
    personal_data: Optional[PersonalData] = None
    delivery_data: Optional[DeliveryData] = None


# =====================================================
# ZAMOWIENIA
# =====================================================
class OrderItemOut(BaseModel):
    id: UUID
    product_id: UUID
    product_name: str
    quantity: int
    price: Decimal

    model_config = ConfigDict(from_attributes=True)


class OrderOut(BaseModel):
    id: UUID
    user_id: Optional[UUID] = None
    status: OrderStatus
    total: Decimal
    shipping_address: str
    phone: str
    full_name: str
    payment_method: str
    email: str
    created_at: datetime
    updated_at: datetime
    items: List[OrderItemOut] = []

    model_config = ConfigDict(from_attributes=True)


class OrderStatusIn(BaseModel):
    status: OrderStatus


# =====================================================
# KATALOG
# =====================================================
class PatchModel(BaseModel):
    """
    Baza dla PATCH: pominiete pole = bez zmian.
    Jawny null jest odrzucany dla pol, ktore w bazie sa NOT NULL.
    """

    not_null: ClassVar[Tuple[str, ...]] = ()

    @model_validator(mode="after")
    def check_explicit_nulls(self):
        nulls = [f for f in self.not_null if f in self.model_fields_set and getattr(self, f) is None]
        if nulls:
            raise ValueError(f"Fields cannot be null: {', '.join(nulls)}")
        return self


class ProductDetails(BaseModel):
    """Karta produktu: waga, wartosci odzywcze, opakowanie, sklad."""

    weight: Optional[str] = Field(None, max_length=50, description="np. 250 g")
    calories: Optional[int] = Field(None, ge=0, description="kcal / 100 g")
    proteins: Optional[float] = Field(None, ge=0)
    fats: Optional[float] = Field(None, ge=0)
    carbs: Optional[float] = Field(None, ge=0)
    packaging: Optional[str] = None
    expiration_days: Optional[int] = Field(None, ge=0)
    pieces_in_package: Optional[int] = Field(None, ge=0)
    storage_conditions: Optional[str] = None
    ingredients: Optional[str] = None
    manufacturer: Optional[str] = None


class CategoryIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    image: Optional[str] = None


class CategoryUpdate(PatchModel):
    not_null: ClassVar[Tuple[str, ...]] = ("name",)

    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    image: Optional[str] = None


class CategoryOut(BaseModel):
    id: UUID
    name: str
    description: Optional[str] = None
    image: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ProductIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2, allow_inf_nan=False)
    category_id: Optional[UUID] = None
    image: Optional[str] = None
    additional_images: List[str] = []
    in_stock: bool = True
    article_number: Optional[str] = Field(None, max_length=64)
    details: Optional[ProductDetails] = None


class ProductUpdate(PatchModel):
    not_null: ClassVar[Tuple[str, ...]] = ("name", "price", "additional_images", "in_stock")

    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2, allow_inf_nan=False)
    category_id: Optional[UUID] = None
    image: Optional[str] = None
    additional_images: Optional[List[str]] = None
    in_stock: Optional[bool] = None
    article_number: Optional[str] = Field(None, max_length=64)
    details: Optional[ProductDetails] = None


class ProductOut(BaseModel):
    id: UUID
    name: str
    description: Optional[str] = None
    price: Decimal
    category_id: Optional[UUID] = None
    image: Optional[str] = None
    additional_images: List[str] = []
    in_stock: bool
    article_number: Optional[str] = None
    details: Optional[ProductDetails] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class NewsIn(BaseModel):
    title: str = Field(..., min_length=1, max_length=300)
    summary: Optional[str] = None
    content: str = Field(..., min_length=1)
    image: Optional[str] = None
    date: Optional[datetime] = None


class NewsUpdate(PatchModel):
    not_null: ClassVar[Tuple[str, ...]] = ("title", "content", "date")

    title: Optional[str] = Field(None, min_length=1, max_length=300)
    summary: Optional[str] = None
    content: Optional[str] = Field(None, min_length=1)
    image: Optional[str] = None
    date: Optional[datetime] = None


class NewsOut(BaseModel):
    id: UUID
    title: str
    summary: Optional[str] = None
    content: str
    image: Optional[str] = None
    date: datetime
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ImageOut(BaseModel):
    url: str
