"""Tests for reward claims and fulfillment status updates."""

import re
from datetime import datetime, timedelta

import pytest
from sqlalchemy import func
from sqlalchemy.future import select

from content import crud as content_crud
from core.config import Settings
from core.exceptions import BusinessRuleError, NotFoundError
from rewards import crud
from rewards.models import RewardClaim
from rewards.schemas import ClaimStatus, DeliveryAddress
from tests.conftest import VALID_ADDRESS, VALID_HASHTAGS, YOUTUBE_URL
from users import crud as user_crud

TRACKING_ID = re.compile(r"^GG\d+$")


def submit_approved(client):
    response = client.post("/api/content/submit", json={"url": YOUTUBE_URL, "hashtags": VALID_HASHTAGS})
    assert response.status_code == 200
    return response.json()["submission"]


class TestClaimReward:

    def test_claim_requires_session(self, client):
        response = client.post("/api/rewards/claim", json={"address": VALID_ADDRESS})
        assert response.status_code == 401

    def test_claim_without_approved_content(self, auth_client):
        response = auth_client.post("/api/rewards/claim", json={"address": VALID_ADDRESS})

        assert response.status_code == 400
        data = response.json()
        assert data["success"] is False
        assert data["code"] == "NO_APPROVED_CONTENT"

    def test_claim_with_only_pending_content(self, auth_client, settings):
        settings.auto_approve = False
        submit_approved(auth_client)

        response = auth_client.post("/api/rewards/claim", json={"address": VALID_ADDRESS})
        assert response.json()["code"] == "NO_APPROVED_CONTENT"

    def test_claim_success(self, auth_client):
        submission = submit_approved(auth_client)

        response = auth_client.post("/api/rewards/claim", json={"address": VALID_ADDRESS})

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        claim = data["claim"]
        assert claim["status"] == "confirmed"
        assert TRACKING_ID.match(claim["trackingId"])
        assert claim["carrierName"] == "Delhivery"
        assert claim["rewardType"] == "glycolic_gloss_pack"
        assert float(claim["rewardValue"]) == 500.0
        assert claim["contentSubmissionId"] == submission["id"]
        assert claim["deliveryAddress"] == VALID_ADDRESS

        created = datetime.fromisoformat(claim["createdAt"])
        eta = datetime.fromisoformat(claim["estimatedDelivery"])
        assert timedelta(days=6, hours=23) < eta - created < timedelta(days=7, hours=1)

    def test_claim_with_explicit_submission(self, auth_client):
        submission = submit_approved(auth_client)
        response = auth_client.post(
            "/api/rewards/claim",
            json={"address": VALID_ADDRESS, "contentSubmissionId": submission["id"]},
        )
        assert response.json()["claim"]["contentSubmissionId"] == submission["id"]

    def test_claim_with_unknown_submission(self, auth_client):
        submit_approved(auth_client)
        response = auth_client.post(
            "/api/rewards/claim", json={"address": VALID_ADDRESS, "contentSubmissionId": 9999}
        )

        assert response.status_code == 404
        assert response.json()["code"] == "NOT_FOUND"

    def test_second_claim_rejected(self, auth_client):
        submit_approved(auth_client)
        first = auth_client.post("/api/rewards/claim", json={"address": VALID_ADDRESS})
        second = auth_client.post("/api/rewards/claim", json={"address": VALID_ADDRESS})

        assert first.status_code == 200
        assert second.status_code == 400
        assert second.json()["code"] == "DUPLICATE_CLAIM"
        assert len(auth_client.get("/api/rewards/claims").json()["claims"]) == 1

    @pytest.mark.parametrize("field,value,message", [
        ("name", "", "Name is required"),
        ("phoneNumber", "12345", "Invalid phone number"),
        ("street", "  ", "Address is required"),
        ("city", "", "City is required"),
        ("pincode", "12345", "Invalid PIN code"),
        ("pincode", "56003a", "Invalid PIN code"),
    ])
    def test_address_validation(self, auth_client, field, value, message):
        submit_approved(auth_client)
        address = {**VALID_ADDRESS, field: value}

        response = auth_client.post("/api/rewards/claim", json={"address": address})

        assert response.status_code == 400
        data = response.json()
        assert data["code"] == "VALIDATION_ERROR"
        assert data["message"] == message

    def test_state_optional(self, auth_client):
        submit_approved(auth_client)
        address = {k: v for k, v in VALID_ADDRESS.items() if k != "state"}

        response = auth_client.post("/api/rewards/claim", json={"address": address})

        assert response.status_code == 200
        assert response.json()["claim"]["deliveryAddress"]["state"] is None


class TestTrackClaims:

    def test_list_and_track(self, auth_client):
        submit_approved(auth_client)
        claim = auth_client.post("/api/rewards/claim", json={"address": VALID_ADDRESS}).json()["claim"]

        claims = auth_client.get("/api/rewards/claims").json()["claims"]
        assert [c["trackingId"] for c in claims] == [claim["trackingId"]]

        response = auth_client.get(f"/api/rewards/claims/{claim['id']}")
        assert response.status_code == 200
        assert response.json()["claim"]["status"] == "confirmed"

    def test_track_unknown_claim(self, auth_client):
        response = auth_client.get("/api/rewards/claims/12345")
        assert response.status_code == 404
        assert response.json()["success"] is False


async def _claim(db):
    settings = Settings()
    otp = await user_crud.generate_otp(db, settings.test_phone_number, settings)
    user, _ = await user_crud.verify_otp(db, settings.test_phone_number, otp, settings.campaign_name)
    await content_crud.submit_content(db, user.id, YOUTUBE_URL, VALID_HASHTAGS)
    address = DeliveryAddress.model_validate(VALID_ADDRESS)
    return await crud.claim_reward(db, user.id, address, settings.campaign_name)


class TestClaimStatus:

    @pytest.mark.asyncio
    async def test_forward_transitions(self, db_session):
        claim = await _claim(db_session)
        assert claim.status == "confirmed"

        claim = await crud.update_claim_status(db_session, claim.id, ClaimStatus.SHIPPED)
        assert claim.status == "shipped"
        assert claim.actual_delivery is None

        claim = await crud.update_claim_status(db_session, claim.id, ClaimStatus.DELIVERED, notes="Left at door")
        assert claim.status == "delivered"
        assert claim.actual_delivery is not None
        assert claim.notes == "Left at door"

    @pytest.mark.asyncio
    async def test_no_regression(self, db_session):
        claim = await _claim(db_session)
        await crud.update_claim_status(db_session, claim.id, ClaimStatus.SHIPPED)

        with pytest.raises(BusinessRuleError) as exc_info:
            await crud.update_claim_status(db_session, claim.id, ClaimStatus.CONFIRMED)
        assert exc_info.value.code == "INVALID_STATUS_TRANSITION"

    @pytest.mark.asyncio
    async def test_same_status_rejected(self, db_session):
        claim = await _claim(db_session)
        with pytest.raises(BusinessRuleError):
            await crud.update_claim_status(db_session, claim.id, "confirmed")

    @pytest.mark.asyncio
    async def test_unknown_claim(self, db_session):
        with pytest.raises(NotFoundError):
            await crud.update_claim_status(db_session, 404, ClaimStatus.SHIPPED)

    def test_tracking_ids_unique(self):
        ids = {crud.generate_tracking_id() for _ in range(50)}
        assert all(i.startswith("GG") for i in ids)
        assert len(ids) > 1


class TestConcurrentClaim:

    @pytest.mark.asyncio
    async def test_lost_race_reported_as_duplicate(self, db_session, monkeypatch):
        first = await _claim(db_session)
        user_id = first.user_id
        campaign_name = Settings().campaign_name

        # Simulate a concurrent request that passed the pre-check before the first claim landed.
        real_lookup = crud.get_claim_for_campaign
        calls = []

        async def stale_lookup(db, uid, name):
            calls.append(uid)
            if len(calls) == 1:
                return None
            return await real_lookup(db, uid, name)

        monkeypatch.setattr(crud, "get_claim_for_campaign", stale_lookup)

        address = DeliveryAddress.model_validate(VALID_ADDRESS)
        with pytest.raises(BusinessRuleError) as exc_info:
            await crud.claim_reward(db_session, user_id, address, campaign_name)
        assert exc_info.value.code == "DUPLICATE_CLAIM"
        assert len(calls) == 2

        count = (await db_session.execute(
            select(func.count(RewardClaim.id)).where(RewardClaim.user_id == user_id)
        )).scalar_one()
        assert count == 1
