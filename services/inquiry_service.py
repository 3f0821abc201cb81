from datetime import datetime
from typing import Optional

from loguru import logger
from sqlalchemy.orm import Session

from models.inquiry import Inquiry
from schemas.inquiry import InquiryCreate
from utils.gates import AuthContext


def inquiry_form(auth: Optional[AuthContext]) -> dict:
    """Blank form, pre-filled with the member's name and email when logged in"""
    if auth is None:
        return {"name": "", "email": "", "message": ""}
    return {"name": auth.full_name, "email": auth.email, "message": ""}


def create_inquiry(db: Session, data: InquiryCreate) -> Inquiry:
    inquiry = Inquiry(
        name=data.name.strip(),
        email=data.email,
        message=data.message,
        inquiry_date=datetime.utcnow(),
    )
    db.add(inquiry)
    db.commit()
    db.refresh(inquiry)

    logger.info(f"Inquiry received from {inquiry.email}")
    return inquiry
