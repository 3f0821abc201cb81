from database.connection import Base
from models.member import Member, MemberRole
from models.event import Event
from models.booking import Booking
from models.review import Review
from models.inquiry import Inquiry
from models.member_session import MemberSession

__all__ = ["Base", "Member", "MemberRole", "Event", "Booking", "Review", "Inquiry", "MemberSession"]
