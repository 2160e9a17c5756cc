from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, Numeric, String, Text, UniqueConstraint

from core.database import Base, utcnow


class RewardClaim(Base):
    __tablename__ = "reward_claims"
    __table_args__ = (
        UniqueConstraint("user_id", "campaign_name", name="uq_reward_claim_user_campaign"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    content_submission_id = Column(Integer, ForeignKey("content_submissions.id"), nullable=True)
    campaign_name = Column(String(100), default="glossy_transition", nullable=False)
    reward_type = Column(String(50), default="glycolic_gloss_pack")
    reward_value = Column(Numeric(10, 2), default=500)
    delivery_address = Column(JSON, nullable=False)
    status = Column(String(50), default="pending")  # pending, confirmed, shipped, delivered
    tracking_id = Column(String(100), unique=True, index=True)
    carrier_name = Column(String(100))
    estimated_delivery = Column(DateTime)
    actual_delivery = Column(DateTime)
    notes = Column(Text)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)
