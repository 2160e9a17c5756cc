from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, Integer, String, Text

from core.database import Base, utcnow


class ContentSubmission(Base):
    __tablename__ = "content_submissions"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    social_account_id = Column(Integer, ForeignKey("social_accounts.id"), nullable=True)
    content_url = Column(Text, nullable=False)
    platform = Column(String(50), nullable=False)
    content_type = Column(String(50))  # post, reel, video
    title = Column(Text)
    description = Column(Text)
    hashtags = Column(JSON, default=list)
    is_approved = Column(Boolean, default=False)
    approval_notes = Column(Text)
    validation_status = Column(String(50), default="pending")  # pending, approved, rejected
    content_data = Column(JSON)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)
