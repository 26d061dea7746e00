"""
End-to-end flow: a citizen submits observations and climbs the
leaderboard.

Runs once against the default database ledger store and once against
the in-memory store, to show both stores follow the same rules.
"""

from __future__ import annotations

import pytest
from rest_framework import status
from rest_framework.test import APIClient

from accounts.models import UserRole

OBSERVATIONS_URL = "/api/observations/"

COMPLETE = {
    "postcode": "EH1 1AA",
    "temperature": 12.5,
    "ph": 7.2,
    "alkalinity": 80.0,
    "turbidity": 1.5,
    "visual_observations": ["Clear"],
    "image_paths": ["uploads/river.jpg"],
}
PARTIAL = {"postcode": "EH1 1AA", "temperature": 12.5}
INVALID = {"postcode": "", "temperature": 12.5}


def _submit(client: APIClient, citizen_id: str, payload: dict):
    return client.post(OBSERVATIONS_URL, {"citizen_id": citizen_id, **payload}, format="json")


def _run_flow(api_client: APIClient, admin_header: dict[str, str]) -> None:
    for _ in range(5):
        assert _submit(api_client, "CIT-alice", COMPLETE).status_code == status.HTTP_201_CREATED
    assert _submit(api_client, "CIT-bob", PARTIAL).status_code == status.HTTP_201_CREATED
    assert _submit(api_client, "CIT-bob", INVALID).status_code == status.HTTP_400_BAD_REQUEST

    alice = api_client.get("/api/rewards/citizen/CIT-alice/").json()
    assert alice["total_points"] == 100
    assert alice["badges"] == ["Bronze"]
    assert alice["current_badge"] == "Bronze"
    assert alice["next_badge"] == "Silver"

    bob = api_client.get("/api/rewards/citizen/CIT-bob/").json()
    assert bob["total_points"] == 10
    assert bob["valid_observations"] == 1

    top = api_client.get("/api/rewards/leaderboard/top3/").json()
    assert [row["citizen_id"] for row in top] == ["CIT-alice", "CIT-bob"]
    assert api_client.get("/api/rewards/citizen/CIT-bob/rank/").json()["rank"] == 2

    # Admin adjustment skips badges; recalculation restores the derived state.
    api_client.credentials(HTTP_AUTHORIZATION=admin_header["Authorization"])
    adjusted = api_client.post(
        "/api/rewards/citizen/CIT-bob/points/", {"points": 300}, format="json"
    ).json()
    assert adjusted["total_points"] == 310
    assert adjusted["current_badge"] == "None"

    recalculated = api_client.post("/api/rewards/citizen/CIT-bob/calculate/").json()
    assert recalculated["total_points"] == 10
    assert recalculated["badges"] == []


@pytest.mark.django_db
class TestSubmissionFlow:

    def test_database_store(self, api_client, admin_header):
        _run_flow(api_client, admin_header)

    def test_in_memory_store(self, in_memory_rewards, api_client, admin_header):
        _run_flow(api_client, admin_header)

    def test_registered_citizen_submits_without_citizen_id(self, api_client, create_user):
        from rest_framework_simplejwt.tokens import AccessToken

        user = create_user(username="erin", role=UserRole.CITIZEN)
        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {AccessToken.for_user(user)}")
        resp = api_client.post(OBSERVATIONS_URL, COMPLETE, format="json")
        assert resp.status_code == status.HTTP_201_CREATED

        reward = api_client.get(f"/api/rewards/citizen/{user.citizen_id}/").json()
        assert reward["total_points"] == 20
