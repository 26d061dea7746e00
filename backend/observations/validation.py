"""
Observation validation rules.

Two pure predicates decide, at submission time, what happens to a
reading:

* ``validate``       — may the observation be stored at all?
* ``check_complete`` — does it also earn the completeness bonus?

Both accept any object exposing ``postcode``, ``temperature``, ``ph``,
``alkalinity``, ``turbidity``, ``visual_observations`` and
``image_paths`` (an unsaved ``Observation`` during submission, a
``SimpleNamespace`` in tests).  Neither touches the database.

Rules
-----
valid     ⇔  postcode is non-blank
             AND (any measurement is present OR at least one tag)
complete  ⇔  all four measurements present
             AND at least one tag AND at least one image

Whitespace-only tags and image paths do not count.  Every complete
observation with a postcode is therefore also valid.
"""

from __future__ import annotations

from typing import Any, Iterable

MEASUREMENT_FIELDS: tuple[str, ...] = ("temperature", "ph", "alkalinity", "turbidity")

MISSING_POSTCODE = "missing postcode"
MISSING_READING = "no measurement or visual observation"


def _non_blank(items: Iterable[Any] | None) -> list[str]:
    return [str(item) for item in (items or []) if item is not None and str(item).strip()]


def _measurements(observation: Any) -> list[Any]:
    return [getattr(observation, field, None) for field in MEASUREMENT_FIELDS]


def has_postcode(observation: Any) -> bool:
    postcode = getattr(observation, "postcode", None)
    return bool(postcode and str(postcode).strip())


def rejection_reason(observation: Any) -> str | None:
    """Return why ``observation`` is invalid, or ``None`` when it is valid."""
    if not has_postcode(observation):
        return MISSING_POSTCODE
    has_measurement = any(value is not None for value in _measurements(observation))
    if not has_measurement and not _non_blank(getattr(observation, "visual_observations", None)):
        return MISSING_READING
    return None


def validate(observation: Any) -> bool:
    return rejection_reason(observation) is None


def check_complete(observation: Any) -> bool:
    if any(value is None for value in _measurements(observation)):
        return False
    if not _non_blank(getattr(observation, "visual_observations", None)):
        return False
    return bool(_non_blank(getattr(observation, "image_paths", None)))
