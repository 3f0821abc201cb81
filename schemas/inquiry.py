from pydantic import BaseModel, EmailStr, Field
from datetime import datetime


class InquiryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr = Field(..., max_length=100)
    message: str = Field(..., min_length=1, max_length=1000)


class InquiryResponse(BaseModel):
    id: str
    name: str
    email: str
    message: str
    inquiry_date: datetime

    class Config:
        from_attributes = True
