# storefront/domain/schemas.py
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, ClassVar, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator

OrderStatus = Literal["pending", "confirmed", "processing", "shipped", "delivered", "cancelled"]
DiscountType = Literal["percentage", "fixed"]
Role = Literal["customer", "admin"]


def _as_utc(value: datetime | None) -> datetime | None:
    # naive input is taken as UTC
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class Pagination(BaseModel):
    total: int
    limit: int
    offset: int
    has_more: bool


class SuccessOut(BaseModel):
    success: bool = True


class PartialUpdate(BaseModel):
    """
    Only the fields that are sent get changed. An explicit null clears a
    nullable column and is ignored for the columns in `required_fields`.
    """

    required_fields: ClassVar[frozenset] = frozenset()

    def changes(self, exclude=()) -> Dict[str, Any]:
        return {
            field: value
            for field, value in self.model_dump(exclude_unset=True, exclude=set(exclude)).items()
            if value is not None or field not in self.required_fields
        }


# ---------------------------------------------------------------- users / auth

class SignupIn(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6, description="Password must be at least 6 characters")
    name: str = Field(..., min_length=1, max_length=255)


class SigninIn(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class UserOut(BaseModel):
    id: int
    email: str
    name: str
    phone: str | None = None
    address: str | None = None
    city: str | None = None
    postal_code: str | None = None
    country: str | None = None
    role: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UserResponse(BaseModel):
    user: UserOut | None


class AdminUserOut(UserOut):
    order_count: int = 0
    total_spent: Decimal = Decimal("0")


class UserListOut(BaseModel):
    users: List[AdminUserOut]
    pagination: Pagination


class ProfileUpdate(PartialUpdate):
    required_fields: ClassVar[frozenset] = frozenset({"name"})

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    postal_code: Optional[str] = None
    country: Optional[str] = None


class AdminUserUpdate(ProfileUpdate):
    required_fields: ClassVar[frozenset] = frozenset({"name", "email", "role"})

    email: Optional[EmailStr] = None
    role: Optional[Role] = None


# ---------------------------------------------------------------- catalog

class CategoryIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    slug: str = Field(..., min_length=1, max_length=255, pattern=r"^[a-z0-9-]+$")


class CategoryOut(BaseModel):
    id: int
    name: str
    slug: str

    model_config = ConfigDict(from_attributes=True)


class CategoryListOut(BaseModel):
    categories: List[CategoryOut]


class VariantIn(BaseModel):
    variant_name: str = Field(..., min_length=1, max_length=100)
    variant_value: str = Field(..., min_length=1, max_length=100)
    sku: Optional[str] = None
    price_modifier: Decimal = Decimal("0")
    stock_quantity: int = Field(0, ge=0)


class VariantOut(BaseModel):
    id: int
    variant_name: str
    variant_value: str
    sku: str | None = None
    price_modifier: Decimal
    stock_quantity: int

    model_config = ConfigDict(from_attributes=True)


class ProductCreate(BaseModel):
    category_id: Optional[int] = Field(None, gt=0)
    brand_id: Optional[int] = Field(None, gt=0)
    name: str = Field(..., min_length=1, max_length=255)
    slug: str = Field(..., min_length=1, max_length=255, pattern=r"^[a-z0-9-]+$")
    description: Optional[str] = None
    short_description: Optional[str] = None
    image_url: Optional[str] = None
    original_price: Decimal = Field(..., ge=0)
    current_price: Decimal = Field(..., ge=0)
    stock_quantity: int = Field(0, ge=0)
    is_featured: bool = False
    is_new_arrival: bool = False
    variants: List[VariantIn] = []


class ProductUpdate(PartialUpdate):
    """`variants`, when present, replaces the whole list."""

    required_fields: ClassVar[frozenset] = frozenset(
        {"name", "slug", "original_price", "current_price", "stock_quantity", "is_featured", "is_new_arrival"}
    )

    category_id: Optional[int] = Field(None, gt=0)
    brand_id: Optional[int] = Field(None, gt=0)
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    slug: Optional[str] = Field(None, min_length=1, max_length=255, pattern=r"^[a-z0-9-]+$")
    description: Optional[str] = None
    short_description: Optional[str] = None
    image_url: Optional[str] = None
    original_price: Optional[Decimal] = Field(None, ge=0)
    current_price: Optional[Decimal] = Field(None, ge=0)
    stock_quantity: Optional[int] = Field(None, ge=0)
    is_featured: Optional[bool] = None
    is_new_arrival: Optional[bool] = None
    variants: Optional[List[VariantIn]] = None


class ProductOut(BaseModel):
    id: int
    category_id: int | None = None
    category_name: str | None = None
    category_slug: str | None = None
    brand_id: int | None = None
    brand_name: str | None = None
    brand_slug: str | None = None
    brand_logo: str | None = None
    name: str
    slug: str
    description: str | None = None
    short_description: str | None = None
    image_url: str | None = None
    original_price: Decimal
    current_price: Decimal
    stock_quantity: int
    is_featured: bool
    is_new_arrival: bool
    created_at: datetime
    variants: List[VariantOut] = []


class ProductResponse(BaseModel):
    product: ProductOut


class ProductListOut(BaseModel):
    products: List[ProductOut]
    pagination: Pagination


class BulkProductIn(BaseModel):
    """One row of a bulk import. The category is given by id or by name."""

    category_id: Optional[int] = Field(None, gt=0)
    category_name: Optional[str] = Field(None, min_length=1, max_length=255)
    brand_id: Optional[int] = Field(None, gt=0)
    name: str = Field(..., min_length=1, max_length=255)
    slug: str = Field(..., min_length=1, max_length=255, pattern=r"^[a-z0-9-]+$")
    description: Optional[str] = None
    short_description: Optional[str] = None
    image_url: Optional[str] = None
    original_price: Decimal = Field(..., ge=0)
    current_price: Decimal = Field(..., ge=0)
    stock_quantity: int = Field(0, ge=0)
    is_featured: bool = False
    is_new_arrival: bool = False

    @model_validator(mode="after")
    def check_category(self):
        if self.category_id is None and not self.category_name:
            raise ValueError("Either category_id or category_name is required")
        return self


class BulkProductsIn(BaseModel):
    # rows are validated one by one so a bad row does not sink the batch
    products: List[Dict[str, Any]] = Field(..., min_length=1)


class BulkErrorOut(BaseModel):
    index: int
    product: str | None = None
    error: str


class BulkResultOut(BaseModel):
    success: int
    failed: int
    results: List[ProductOut]
    errors: List[BulkErrorOut]


# ---------------------------------------------------------------- merchandising

class BrandIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    slug: str = Field(..., min_length=1, max_length=255, pattern=r"^[a-z0-9-]+$")
    description: Optional[str] = None
    logo_url: Optional[str] = None
    website_url: Optional[str] = None
    contact_email: Optional[EmailStr] = None
    established_year: Optional[int] = Field(None, ge=1800, le=2100)
    is_featured: bool = False
    is_active: bool = True


class BrandUpdate(PartialUpdate):
    required_fields: ClassVar[frozenset] = frozenset({"name", "slug", "is_featured", "is_active"})

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    slug: Optional[str] = Field(None, min_length=1, max_length=255, pattern=r"^[a-z0-9-]+$")
    description: Optional[str] = None
    logo_url: Optional[str] = None
    website_url: Optional[str] = None
    contact_email: Optional[EmailStr] = None
    established_year: Optional[int] = Field(None, ge=1800, le=2100)
    is_featured: Optional[bool] = None
    is_active: Optional[bool] = None


class BrandOut(BaseModel):
    id: int
    name: str
    slug: str
    description: str | None = None
    logo_url: str | None = None
    website_url: str | None = None
    contact_email: str | None = None
    established_year: int | None = None
    is_featured: bool
    is_active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class BrandResponse(BaseModel):
    brand: BrandOut


class BrandListOut(BaseModel):
    brands: List[BrandOut]


class BundleItemIn(BaseModel):
    product_id: int = Field(..., gt=0)
    quantity: int = Field(1, gt=0)


class BundleCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    slug: str = Field(..., min_length=1, max_length=255, pattern=r"^[a-z0-9-]+$")
    description: Optional[str] = None
    image_url: Optional[str] = None
    bundle_price: Decimal = Field(..., ge=0)
    is_active: bool = True
    items: List[BundleItemIn] = []


class BundleUpdate(PartialUpdate):
    required_fields: ClassVar[frozenset] = frozenset({"name", "slug", "bundle_price", "is_active"})

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    slug: Optional[str] = Field(None, min_length=1, max_length=255, pattern=r"^[a-z0-9-]+$")
    description: Optional[str] = None
    image_url: Optional[str] = None
    bundle_price: Optional[Decimal] = Field(None, ge=0)
    is_active: Optional[bool] = None


class BundleItemOut(BaseModel):
    id: int
    product_id: int
    quantity: int
    product_name: str
    product_image: str | None = None
    product_price: Decimal


class BundleItemResponse(BaseModel):
    item: BundleItemOut


class BundleOut(BaseModel):
    id: int
    name: str
    slug: str
    description: str | None = None
    image_url: str | None = None
    bundle_price: Decimal
    is_active: bool
    created_at: datetime
    updated_at: datetime
    items: List[BundleItemOut] = []
    # live sum of current_price * quantity over the items
    original_price: Decimal


class BundleResponse(BaseModel):
    bundle: BundleOut


class BundleListOut(BaseModel):
    bundles: List[BundleOut]


class BannerIn(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    image_url: str = Field(..., min_length=1, max_length=1000)
    link_url: Optional[str] = None
    is_active: bool = True
    sort_order: int = 0


class BannerUpdate(PartialUpdate):
    required_fields: ClassVar[frozenset] = frozenset({"title", "image_url", "is_active", "sort_order"})

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    image_url: Optional[str] = Field(None, min_length=1, max_length=1000)
    link_url: Optional[str] = None
    is_active: Optional[bool] = None
    sort_order: Optional[int] = None


class BannerOut(BaseModel):
    id: int
    title: str
    description: str | None = None
    image_url: str
    link_url: str | None = None
    is_active: bool
    sort_order: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class BannerResponse(BaseModel):
    banner: BannerOut


class BannerListOut(BaseModel):
    banners: List[BannerOut]


# ---------------------------------------------------------------- cart

class CartAddIn(BaseModel):
    product_id: int = Field(..., gt=0)
    variant_id: Optional[int] = Field(None, gt=0)
    quantity: int = Field(1, gt=0)


class CartSetQuantityIn(BaseModel):
    """quantity <= 0 removes the line."""

    item_id: int = Field(..., gt=0)
    quantity: int


class CartItemUpdateIn(BaseModel):
    quantity: int = Field(..., ge=1)


class CartItemOut(BaseModel):
    id: int
    product_id: int
    variant_id: int | None = None
    quantity: int
    added_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CartItemResponse(BaseModel):
    item: CartItemOut


class CartLineOut(BaseModel):
    id: int
    product_id: int
    variant_id: int | None = None
    quantity: int
    added_at: datetime
    name: str
    slug: str
    image_url: str | None = None
    current_price: Decimal
    original_price: Decimal
    stock_quantity: int
    variant_name: str | None = None
    variant_value: str | None = None
    price_modifier: Decimal | None = None
    unit_price: Decimal
    line_total: Decimal


class CartOut(BaseModel):
    items: List[CartLineOut]
    subtotal: Decimal
    item_count: int


# ---------------------------------------------------------------- wishlist

class WishlistAddIn(BaseModel):
    product_id: int = Field(..., gt=0)


class WishlistLineOut(BaseModel):
    id: int
    product_id: int
    created_at: datetime
    name: str
    slug: str
    image_url: str | None = None
    current_price: Decimal
    original_price: Decimal
    stock_quantity: int
    category_name: str | None = None


class WishlistOut(BaseModel):
    items: List[WishlistLineOut]
    pagination: Pagination


# ---------------------------------------------------------------- discounts

class DiscountCreate(BaseModel):
    code: Optional[str] = Field(None, min_length=1, max_length=64)
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    discount_type: DiscountType
    discount_value: Decimal = Field(..., gt=0)
    min_purchase_amount: Optional[Decimal] = Field(Decimal("0"), ge=0)
    max_discount_amount: Optional[Decimal] = Field(None, gt=0)
    start_date: datetime
    end_date: datetime
    is_active: bool = True
    apply_to_all: bool = True

    @field_validator("start_date", "end_date")
    @classmethod
    def utc_dates(cls, value):
        return _as_utc(value)

    @model_validator(mode="after")
    def check_window(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class DiscountUpdate(PartialUpdate):
    required_fields: ClassVar[frozenset] = frozenset(
        {"name", "discount_type", "discount_value", "start_date", "end_date", "is_active", "apply_to_all"}
    )

    code: Optional[str] = Field(None, min_length=1, max_length=64)
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    discount_type: Optional[DiscountType] = None
    discount_value: Optional[Decimal] = Field(None, gt=0)
    min_purchase_amount: Optional[Decimal] = Field(None, ge=0)
    max_discount_amount: Optional[Decimal] = Field(None, gt=0)
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    is_active: Optional[bool] = None
    apply_to_all: Optional[bool] = None

    @field_validator("start_date", "end_date")
    @classmethod
    def utc_dates(cls, value):
        return _as_utc(value)

    @model_validator(mode="after")
    def check_window(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class DiscountOut(BaseModel):
    id: int
    code: str | None = None
    name: str
    description: str | None = None
    discount_type: str
    discount_value: Decimal
    min_purchase_amount: Decimal | None = None
    max_discount_amount: Decimal | None = None
    start_date: datetime
    end_date: datetime
    is_active: bool
    apply_to_all: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class DiscountResponse(BaseModel):
    discount: DiscountOut


class DiscountListOut(BaseModel):
    discounts: List[DiscountOut]


class ActiveDiscountOut(BaseModel):
    discount: DiscountOut | None = None
    reduction: Decimal | None = None


# ---------------------------------------------------------------- orders

class OrderCreate(BaseModel):
    shipping_address: str = Field(..., min_length=1, max_length=2000)
    payment_method: str = Field("cash_on_delivery", min_length=1, max_length=50)


class OrderStatusUpdate(BaseModel):
    status: OrderStatus


class OrderItemOut(BaseModel):
    id: int
    product_id: int
    variant_id: int | None = None
    quantity: int
    price_at_purchase: Decimal
    product_name: str | None = None
    product_image: str | None = None


class OrderOut(BaseModel):
    id: int
    order_number: str
    user_id: int
    subtotal: Decimal
    discount_applied: Decimal
    total_amount: Decimal
    status: str
    payment_method: str
    shipping_address: str | None = None
    created_at: datetime
    updated_at: datetime
    items: List[OrderItemOut] = []
    customer_name: str | None = None
    customer_email: str | None = None


class OrderResponse(BaseModel):
    order: OrderOut


class OrderListOut(BaseModel):
    orders: List[OrderOut]
    pagination: Pagination


# ---------------------------------------------------------------- analytics

class StatusCount(BaseModel):
    status: str
    count: int


class AnalyticsOverview(BaseModel):
    total_users: int
    total_orders: int
    total_revenue: Decimal
    total_products: int
    views_today: int


class AnalyticsOut(BaseModel):
    overview: AnalyticsOverview
    orders_by_status: List[StatusCount]
    recent_orders: List[OrderOut]
