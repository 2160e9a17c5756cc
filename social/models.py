from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, Integer, Numeric, String, Text

from core.database import Base, utcnow


class SocialAccount(Base):
    __tablename__ = "social_accounts"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    platform = Column(String(50), nullable=False)  # instagram, youtube, facebook, twitter
    handle = Column(String(100), nullable=False)
    display_name = Column(String(100))
    profile_url = Column(Text)
    followers_count = Column(Integer, default=0)
    engagement_rate = Column(Numeric(5, 2), default=0)
    is_public = Column(Boolean, default=False)
    is_verified = Column(Boolean, default=False)
    verification_data = Column(JSON)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)
