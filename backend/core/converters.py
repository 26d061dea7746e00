"""
Path converter for citizen identifiers.

Citizen ids are opaque strings shared by the accounts, observations and
rewards apps without a foreign key between them.  Validating their
shape once at the URL layer keeps malformed ids out of every service.

Registered in ``citizenscience/urls.py`` as the ``citizen`` converter::

    path("citizen/<citizen:citizen_id>/", ...)
"""

from __future__ import annotations

from core.constants import CITIZEN_ID_PATTERN


class CitizenIdConverter:
    regex = CITIZEN_ID_PATTERN

    def to_python(self, value: str) -> str:
        return value

    def to_url(self, value: str) -> str:
        return str(value)
