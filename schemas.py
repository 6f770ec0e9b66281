"""
Database Schemas for the Mithai storefront

Each Pydantic model corresponds to one MongoDB collection.
Collection name is the lowercase of the class name.
Request bodies that differ from the stored shape are declared next to them.
"""
from datetime import datetime, timezone
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator

Unit = Literal["gm", "kg", "piece", "dozen"]
Placement = Literal["popular", "latest", "none"]
CatalogKind = Literal["product", "box", "namkeen"]
EnquiryStatus = Literal["new", "in-progress", "completed", "cancelled"]
OrderStatus = Literal["confirmed", "delivered", "cancelled"]
PaymentStatus = Literal["pending", "paid"]
PaymentMethod = Literal["cash_on_delivery", "upi"]
SawamaniType = Literal["laddoo", "barfi", "other"]
SawamaniVariant = Literal[
    "moti boondi", "barik boondi", "motichoor",
    "besan", "moong", "mawa", "dilkhushal",
    "other",
]

ENQUIRY_STATUSES = ("new", "in-progress", "completed", "cancelled")
ORDER_STATUSES = ("confirmed", "delivered", "cancelled")

VARIANTS_BY_TYPE = {
    "laddoo": {"moti boondi", "barik boondi", "motichoor"},
    "barfi": {"besan", "moong", "mawa", "dilkhushal"},
}


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


# ----------------------- Catalog -----------------------
class PricingTier(BaseModel):
    quantity: float = Field(..., gt=0)
    unit: Unit
    price: float = Field(..., gt=0)


class Product(BaseModel):
    name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    image: str = ""
    type: Placement = "none"
    pricing: List[PricingTier] = Field(..., min_length=1, description="At least one pricing option is required")


class Namkeen(Product):
    pass


class Box(BaseModel):
    name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    image: str = ""
    type: Placement = "none"
    price: float = Field(..., gt=0)


class ProductCreateBody(Product):
    imageBase64: Optional[str] = None


class NamkeenCreateBody(Namkeen):
    imageBase64: Optional[str] = None


class BoxCreateBody(Box):
    imageBase64: Optional[str] = None


class ProductUpdateBody(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None
    imageBase64: Optional[str] = None
    type: Optional[Placement] = None
    pricing: Optional[List[PricingTier]] = Field(None, min_length=1)


class NamkeenUpdateBody(ProductUpdateBody):
    pass


class BoxUpdateBody(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None
    imageBase64: Optional[str] = None
    type: Optional[Placement] = None
    price: Optional[float] = Field(None, gt=0)


# ----------------------- Enquiries -----------------------
class Enquiry(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=2, max_length=100)
    email: EmailStr
    phone: str = Field(..., pattern=r"^[6-9]\d{9}$", description="10-digit Indian mobile number")
    product: str = Field(..., min_length=1, max_length=200)
    quantity: str = Field("Not specified", max_length=100)
    price: str = Field("Not specified", max_length=50)
    message: str = Field("No additional message", max_length=1000)
    status: EnquiryStatus = "new"

    @field_validator("email")
    @classmethod
    def lower_email(cls, v):
        return v.lower()

    @field_validator("quantity", "price", "message", mode="before")
    @classmethod
    def blank_to_default(cls, v, info):
        if v is None or (isinstance(v, str) and not v.strip()):
            return cls.model_fields[info.field_name].default
        return v


class EnquiryStatusBody(BaseModel):
    status: EnquiryStatus


# ----------------------- Cart -----------------------
class CartItem(BaseModel):
    kind: CatalogKind = "product"
    productId: str
    quantity: int = Field(..., ge=1)
    selectedPricing: Optional[PricingTier] = None


class Cart(BaseModel):
    userId: str
    items: List[CartItem] = []


class CartQuantityBody(BaseModel):
    kind: CatalogKind = "product"
    productId: str
    quantity: int = Field(..., ge=0)
    selectedPricing: Optional[PricingTier] = None


class CartRemoveBody(BaseModel):
    kind: CatalogKind = "product"
    productId: str
    selectedPricing: Optional[PricingTier] = None


# ----------------------- Orders -----------------------
class ShippingAddress(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    fullName: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    addressLine1: str = Field(..., min_length=1)
    addressLine2: Optional[str] = None
    city: str = Field(..., min_length=1)
    state: str = Field(..., min_length=1)
    pincode: Optional[str] = None
    landmark: Optional[str] = None


class OrderItem(BaseModel):
    kind: CatalogKind = "product"
    productId: str
    productName: str
    productImage: str = ""
    quantity: int = Field(..., ge=1)
    selectedPricing: PricingTier
    itemTotal: float = Field(..., ge=0)


class Order(BaseModel):
    orderId: str
    userId: str
    userEmail: Optional[str] = None
    items: List[OrderItem] = Field(..., min_length=1)
    shippingAddress: ShippingAddress
    orderStatus: OrderStatus = "confirmed"
    paymentStatus: PaymentStatus = "pending"
    paymentMethod: PaymentMethod
    subtotal: float = Field(..., ge=0)
    shippingCost: float = Field(0, ge=0)
    tax: float = Field(0, ge=0)
    totalAmount: float = Field(..., ge=0)
    notes: Optional[str] = None
    adminNotes: Optional[str] = None
    estimatedDelivery: Optional[datetime] = None
    deliveredAt: Optional[datetime] = None
    cancelledAt: Optional[datetime] = None
    cancellationReason: Optional[str] = None

    @model_validator(mode="after")
    def totals_add_up(self):
        expected = round(self.subtotal + self.shippingCost + self.tax, 2)
        if abs(self.totalAmount - expected) > 0.005:
            raise ValueError("totalAmount must equal subtotal + shippingCost + tax")
        return self


class CheckoutBody(BaseModel):
    shippingAddress: ShippingAddress
    paymentMethod: PaymentMethod
    notes: Optional[str] = None


class OrderUpdateBody(BaseModel):
    orderId: str
    orderStatus: Optional[OrderStatus] = None
    paymentStatus: Optional[PaymentStatus] = None
    adminNotes: Optional[str] = None


class OrderCancelBody(BaseModel):
    cancellationReason: Optional[str] = None


# ----------------------- Sawamani -----------------------
class SawamaniItem(BaseModel):
    type: SawamaniType
    variant: SawamaniVariant

    @model_validator(mode="after")
    def variant_matches_type(self):
        allowed = VARIANTS_BY_TYPE.get(self.type)
        if allowed is not None and self.variant not in allowed:
            raise ValueError("Invalid variant for the selected item type")
        return self


class PackingSelection(BaseModel):
    boxCount: int = Field(0, ge=0)
    totalWeight: float = Field(0, ge=0)


class Sawamani(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=100)
    phoneNumber: str = Field(..., pattern=r"^[0-9]{10}$", description="10-digit phone number")
    address: str = Field(..., min_length=1, max_length=500)
    item: SawamaniItem
    date: datetime
    packingSelections: Dict[str, PackingSelection]
    totalWeight: float = Field(0, ge=0)
    message: Optional[str] = Field(None, max_length=1000)

    @field_validator("date")
    @classmethod
    def not_in_past(cls, v):
        # compared with the wall clock at submission time
        v = as_utc(v)
        if v < utcnow():
            raise ValueError("Date cannot be in the past")
        return v
