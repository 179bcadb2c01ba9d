from typing import Any, Dict, List, Optional
from datetime import datetime
from pydantic import BaseModel, Field, EmailStr, field_validator

from storefront import templates


# --- Application input ---
class MerchantData(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone: str = Field(..., min_length=1, max_length=30)
    city: str = Field(..., min_length=1, max_length=100)
    business_name: str = Field(..., min_length=1, max_length=200)
    business_type: str = Field(..., min_length=1, max_length=100)


class StoreColors(BaseModel):
    primary: str = Field(..., min_length=1)
    secondary: str = Field(..., min_length=1)
    background: str = Field(..., min_length=1)


class StoreCustomization(BaseModel):
    store_name: str = Field("", max_length=200)
    store_description: str = Field("", max_length=2000)
    colors: StoreColors


class StoreConfig(BaseModel):
    template: str
    customization: StoreCustomization

    @field_validator("template")
    @classmethod
    def template_must_exist(cls, v: str) -> str:
        if templates.find_by_id(v) is None:
            raise ValueError(f"Unknown template: {v}")
        return v


class ApplicationCreate(BaseModel):
    merchant_data: MerchantData
    store_config: StoreConfig


class ApplicationReject(BaseModel):
    reason: str = Field(..., max_length=2000)


# --- Application output ---
class ApplicationResponse(BaseModel):
    id: str
    merchant_id: str
    merchant_data: Dict[str, Any]
    store_config: Dict[str, Any]
    status: str
    submitted_at: datetime
    reviewed_at: Optional[datetime] = None
    reviewed_by: Optional[str] = None
    rejection_reason: Optional[str] = None
    provisioning_status: Optional[str] = None
    provisioning_error: Optional[str] = None
    store_id: Optional[str] = None

    class Config:
        from_attributes = True


class ApplicationStats(BaseModel):
    total: int
    pending: int
    approved: int
    rejected: int


class ApplicationSubmitted(BaseModel):
    id: str
    status: str


class ReviewResponse(BaseModel):
    """Outcome of approve/reject/retry.

    ``provisioning_status`` separates "decision recorded and store ready"
    from "decision recorded, store setup needs retry".
    """

    application: ApplicationResponse
    provisioning_status: Optional[str] = None
    store_id: Optional[str] = None


# --- Store ---
class StoreResponse(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    subdomain: str
    owner_id: str
    template: str
    customization: Dict[str, Any]
    settings: Dict[str, Any]
    status: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class CategoryResponse(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    sort: int
    is_active: bool

    class Config:
        from_attributes = True


class ProductResponse(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    price: float
    original_price: Optional[float] = None
    category: Optional[str] = None
    sku: str
    stock: int
    images: List[str] = []
    specifications: Dict[str, str] = {}
    tags: List[str] = []
    rating: float
    review_count: int
    status: str
    featured: bool

    class Config:
        from_attributes = True


# --- Auth ---
class UserCreate(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=8)
    full_name: Optional[str] = None


class UserResponse(BaseModel):
    id: int
    email: EmailStr
    full_name: Optional[str] = None
    role: str
    is_active: bool

    class Config:
        from_attributes = True


class Token(BaseModel):
    access_token: str
    token_type: str
