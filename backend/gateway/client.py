"""
HTTP client used by the gateway to reach the downstream services.

Base URLs and the timeout come from ``settings.GATEWAY``::

    GATEWAY = {
        "TIMEOUT": 10.0,
        "SERVICES": {
            "observations": "http://localhost:8000/api/observations",
            "rewards": "http://localhost:8000/api/rewards",
            "auth": "http://localhost:8000/api/auth",
        },
    }

Downstream HTTP errors (4xx / 5xx) are *returned*, not raised, so the
gateway can pass the status and body through unchanged.  Transport
failures (connection refused, timeout) raise
``core.domain.exceptions.ServiceUnavailable``.  There is no retry.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import requests
from django.conf import settings

from core.domain.exceptions import ServiceUnavailable

logger = logging.getLogger(__name__)


@dataclass
class ForwardedResponse:
    status_code: int
    body: Any


class ServiceClient:

    def __init__(self, name: str, base_url: str, timeout: float = 10.0) -> None:
        self.name = name
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def url_for(self, path: str) -> str:
        path = path.lstrip("/")
        return f"{self.base_url}/{path}" if path else f"{self.base_url}/"

    def request(
        self,
        method: str,
        path: str = "",
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> ForwardedResponse:
        url = self.url_for(path)
        logger.info("Forwarding %s %s to %s service", method, url, self.name)
        try:
            response = requests.request(
                method,
                url,
                params=params,
                json=json,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.warning("%s service unreachable at %s: %s", self.name, url, exc)
            raise ServiceUnavailable(self.name) from exc

        if response.status_code >= 400:
            logger.warning(
                "%s service answered %s for %s %s",
                self.name,
                response.status_code,
                method,
                url,
            )
        return ForwardedResponse(response.status_code, _parse_body(response))

    def is_up(self) -> bool:
        """Probe ``<base_url>/health/``; any transport failure or 5xx counts as down."""
        try:
            return self.request("GET", "health/").status_code < 500
        except ServiceUnavailable:
            return False


def _parse_body(response: requests.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return {"detail": response.text}


def get_client(name: str) -> ServiceClient:
    """Build the client for service ``name`` from ``settings.GATEWAY``."""
    config = settings.GATEWAY
    try:
        base_url = config["SERVICES"][name]
    except KeyError:
        raise ServiceUnavailable(name)
    return ServiceClient(name, base_url, timeout=config.get("TIMEOUT", 10.0))
