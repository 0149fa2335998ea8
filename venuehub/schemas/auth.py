"""Auth API schemas."""

from pydantic import BaseModel, EmailStr, Field

from venuehub.domain.enums import BusinessCategory
from venuehub.schemas.business import BusinessResponse
from venuehub.schemas.user import UserResponse


class RegisterRequest(BaseModel):
    """Request body for registering a business with its owner account."""

    model_config = {"use_enum_values": True}

    business_name: str = Field(..., min_length=1, max_length=200)
    category: BusinessCategory = BusinessCategory.VENUE
    name: str = Field(..., min_length=1, max_length=128, description="Owner's name")
    email: EmailStr
    password: str = Field(..., min_length=8, description="Password (min 8 characters)")
    phone: str | None = Field(default=None, max_length=32)


class LoginRequest(BaseModel):
    """Request body for login."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    """JWT token response."""

    access_token: str
    token_type: str = "bearer"
    user: UserResponse


class RegisterResponse(TokenResponse):
    """Registration result: token for the owner plus the new business."""

    business: BusinessResponse


class MyPermissionsResponse(BaseModel):
    """Effective permissions of the current user."""

    is_super_admin: bool
    role_type: str
    permissions: list[str]
