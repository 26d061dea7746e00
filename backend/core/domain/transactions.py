"""
core.domain.transactions — Helpers for safe read-modify-write cycles.

Wraps ``select_for_update`` into a reusable "lock this row, creating it
if needed" step for read-modify-write cycles.

Usage::

    from django.db import transaction
    from core.domain.transactions import lock_or_create

    with transaction.atomic():
        row, created = lock_or_create(CitizenReward, citizen_id="c-1")
        row.total_points += 10
        row.save()
"""

from __future__ import annotations

from typing import Any, TypeVar

from django.db import IntegrityError, models, transaction

M = TypeVar("M", bound=models.Model)


def lock_or_create(
    model_class: type[M],
    *,
    defaults: dict[str, Any] | None = None,
    **lookup: Any,
) -> tuple[M, bool]:
    """
    Lock the row matching ``lookup``, creating it first when absent.

    Must be called inside an ``atomic()`` block.  Two callers racing to
    create the same row are resolved by the unique constraint on the
    lookup fields: the loser's insert fails inside a savepoint and it
    locks the winner's row instead.

    Returns:
        ``(instance, created)`` like ``get_or_create``.
    """
    try:
        return model_class.objects.select_for_update().get(**lookup), False
    except model_class.DoesNotExist:
        pass

    try:
        with transaction.atomic():
            instance = model_class.objects.create(**lookup, **(defaults or {}))
        return instance, True
    except IntegrityError:
        return model_class.objects.select_for_update().get(**lookup), False
