from pydantic import BaseModel, EmailStr, Field
from datetime import datetime
from typing import Optional

from models.member import MemberRole


class MemberRegister(BaseModel):
    full_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr = Field(..., max_length=100)
    password: str = Field(..., min_length=6, max_length=100)
    preferred_category: Optional[str] = Field(None, max_length=50)


class MemberLogin(BaseModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    return_url: Optional[str] = None


class MemberResponse(BaseModel):
    id: str
    full_name: str
    email: str
    role: MemberRole
    preferred_category: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class MemberUpdate(BaseModel):
    """
    Admin edit form for a member
    role is accepted but never applied: edited records always stay members
    """
    full_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr = Field(..., max_length=100)
    preferred_category: Optional[str] = Field(None, max_length=50)
    role: Optional[str] = None
    new_password: Optional[str] = Field(None, max_length=100)
