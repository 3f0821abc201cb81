from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import Optional

from database.connection import get_db
from schemas.inquiry import InquiryCreate, InquiryResponse
from services import inquiry_service
from utils.gates import AuthContext, get_auth_context

router = APIRouter()


@router.get("/inquiries/create")
def inquiry_form(auth: Optional[AuthContext] = Depends(get_auth_context)):
    return {"inquiry": inquiry_service.inquiry_form(auth)}


@router.post("/inquiries/create")
def create_inquiry(data: InquiryCreate, db: Session = Depends(get_db)):
    """Open to guests and members alike"""
    inquiry = inquiry_service.create_inquiry(db, data)
    return {
        "success": True,
        "message": "Thank you for your inquiry! We will get back to you soon.",
        "inquiry": InquiryResponse.model_validate(inquiry),
        "redirect_to": "/",
    }
