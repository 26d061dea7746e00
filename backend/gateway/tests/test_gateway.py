"""
Gateway tests.

``requests.request`` is patched with ``unittest.mock`` so no downstream
service is contacted.
"""

from __future__ import annotations

from unittest import mock

import pytest
import requests
from django.urls import reverse
from rest_framework import status

from core.domain.exceptions import ServiceUnavailable
from gateway.client import ServiceClient, get_client

GATEWAY_SETTINGS = {
    "TIMEOUT": 3.0,
    "SERVICES": {
        "observations": "http://obs.test/api/observations",
        "rewards": "http://rewards.test/api/rewards/",
    },
}


def _response(status_code: int = 200, payload=None, text: str | None = None) -> mock.Mock:
    response = mock.Mock(spec=requests.Response)
    response.status_code = status_code
    if payload is not None:
        response.content = b"{}"
        response.json.return_value = payload
    elif text is not None:
        response.content = text.encode()
        response.text = text
        response.json.side_effect = ValueError("not json")
    else:
        response.content = b""
    return response


@pytest.fixture(autouse=True)
def gateway_settings(settings):
    settings.GATEWAY = GATEWAY_SETTINGS


# ════════════════════════════════════════════════════════════════════
#  ServiceClient
# ════════════════════════════════════════════════════════════════════

class TestServiceClient:

    def test_url_joining(self):
        client = ServiceClient("rewards", "http://rewards.test/api/rewards/")
        assert client.url_for("leaderboard/") == "http://rewards.test/api/rewards/leaderboard/"
        assert client.url_for("") == "http://rewards.test/api/rewards/"

    def test_get_client_reads_settings(self):
        client = get_client("observations")
        assert client.base_url == "http://obs.test/api/observations"
        assert client.timeout == 3.0

    def test_unknown_service_is_unavailable(self):
        with pytest.raises(ServiceUnavailable):
            get_client("billing")

    @mock.patch("gateway.client.requests.request")
    def test_forwards_method_params_body_and_timeout(self, mock_request):
        mock_request.return_value = _response(201, {"id": "x"})
        result = ServiceClient("observations", "http://obs.test/api/observations", 3.0).request(
            "POST", "", params={"a": ["1"]}, json={"postcode": "EH1"},
            headers={"Authorization": "Bearer t"},
        )
        mock_request.assert_called_once_with(
            "POST",
            "http://obs.test/api/observations/",
            params={"a": ["1"]},
            json={"postcode": "EH1"},
            headers={"Authorization": "Bearer t"},
            timeout=3.0,
        )
        assert result.status_code == 201
        assert result.body == {"id": "x"}

    @mock.patch("gateway.client.requests.request")
    def test_non_json_body_is_wrapped(self, mock_request):
        mock_request.return_value = _response(500, text="Internal Server Error")
        result = get_client("rewards").request("GET", "leaderboard/")
        assert result.status_code == 500
        assert result.body == {"detail": "Internal Server Error"}

    @mock.patch("gateway.client.requests.request", side_effect=requests.ConnectionError("refused"))
    def test_connection_error_raises_service_unavailable(self, mock_request):
        with pytest.raises(ServiceUnavailable) as excinfo:
            get_client("rewards").request("GET", "leaderboard/")
        assert "refused" not in str(excinfo.value)
        assert excinfo.value.service == "rewards"


# ════════════════════════════════════════════════════════════════════
#  Gateway endpoints
# ════════════════════════════════════════════════════════════════════

class TestGatewayForwarding:

    @mock.patch("gateway.client.requests.request")
    def test_leaderboard_passes_through(self, mock_request, api_client):
        mock_request.return_value = _response(200, [{"citizen_id": "c-1", "total_points": 500}])
        resp = api_client.get(reverse("gateway:leaderboard"), {"topN": 3})
        assert resp.status_code == status.HTTP_200_OK
        assert resp.json() == [{"citizen_id": "c-1", "total_points": 500}]
        args, kwargs = mock_request.call_args
        assert args == ("GET", "http://rewards.test/api/rewards/leaderboard/")
        assert kwargs["params"] == {"limit": ["3"]}

    @mock.patch("gateway.client.requests.request")
    def test_submission_forwards_body_and_authorization(self, mock_request, api_client):
        mock_request.return_value = _response(201, {"message": "ok"})
        api_client.credentials(HTTP_AUTHORIZATION="Bearer abc")
        resp = api_client.post(
            reverse("gateway:observations"), {"postcode": "EH1 1AA", "ph": 7.0}, format="json"
        )
        assert resp.status_code == status.HTTP_201_CREATED
        _, kwargs = mock_request.call_args
        assert kwargs["json"] == {"postcode": "EH1 1AA", "ph": 7.0}
        assert kwargs["headers"] == {"Authorization": "Bearer abc"}

    @mock.patch("gateway.client.requests.request")
    def test_downstream_404_passes_through(self, mock_request, api_client):
        mock_request.return_value = _response(404, {"detail": "Citizen not found."})
        resp = api_client.get(reverse("gateway:citizen-reward", kwargs={"citizen_id": "ghost"}))
        assert resp.status_code == status.HTTP_404_NOT_FOUND
        assert resp.json() == {"detail": "Citizen not found."}
        args, _ = mock_request.call_args
        assert args[1] == "http://rewards.test/api/rewards/citizen/ghost/"

    @mock.patch("gateway.client.requests.request", side_effect=requests.Timeout("slow"))
    def test_unreachable_service_is_502(self, mock_request, api_client):
        resp = api_client.get(reverse("gateway:recent-observations"))
        assert resp.status_code == status.HTTP_502_BAD_GATEWAY
        assert resp.json() == {"detail": "The observations service is currently unavailable."}

    @mock.patch("gateway.client.requests.request")
    def test_calculate_is_forwarded_as_post(self, mock_request, api_client):
        mock_request.return_value = _response(200, {"citizen_id": "c-1", "total_points": 30})
        resp = api_client.post(reverse("gateway:citizen-calculate", kwargs={"citizen_id": "c-1"}))
        assert resp.status_code == status.HTTP_200_OK
        args, _ = mock_request.call_args
        assert args == ("POST", "http://rewards.test/api/rewards/citizen/c-1/calculate/")


class TestGatewayHealth:

    @mock.patch("gateway.client.requests.request")
    def test_all_up(self, mock_request, api_client):
        mock_request.return_value = _response(200, {"status": "UP"})
        resp = api_client.get(reverse("gateway:health"))
        assert resp.status_code == status.HTTP_200_OK
        assert resp.json() == {"gateway": "UP", "observations": "UP", "rewards": "UP"}

    @mock.patch("gateway.client.requests.request")
    def test_unreachable_service_is_down(self, mock_request, api_client):
        def fake_request(method, url, **kwargs):
            if url.startswith("http://rewards.test"):
                raise requests.ConnectionError("refused")
            return _response(200, {"status": "UP"})

        mock_request.side_effect = fake_request
        resp = api_client.get(reverse("gateway:health"))
        assert resp.status_code == status.HTTP_200_OK
        assert resp.json() == {"gateway": "UP", "observations": "UP", "rewards": "DOWN"}
