from decimal import Decimal

from core.schemas import CamelModel


class DashboardStats(CamelModel):
    followers: int
    engagement: Decimal
    content_submitted: int
    content_approved: int
    rewards_claimed: int
    campaign_status: str


class CampaignAnalytics(CamelModel):
    total_participants: int
    total_content_submissions: int
    total_rewards_claimed: int
    target_participants: int
    target_content: int
