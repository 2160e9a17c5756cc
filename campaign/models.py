from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint

from core.database import Base, utcnow


class CampaignParticipation(Base):
    __tablename__ = "campaign_participation"
    __table_args__ = (
        UniqueConstraint("user_id", "campaign_name", name="uq_participation_user_campaign"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    campaign_name = Column(String(100), default="glossy_transition", nullable=False)
    participation_date = Column(DateTime, default=utcnow)
    status = Column(String(50), default="active")  # active, completed, suspended
    content_count = Column(Integer, default=0)
    rewards_claimed = Column(Integer, default=0)
    total_engagement = Column(Integer, default=0)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)
