"""
core.domain — Shared domain utilities for cross-app service layers.

Modules
-------
exceptions         Domain-specific exceptions that map cleanly to HTTP responses.
exception_handler  DRF exception handler translating those exceptions.
access             Administrator guards and citizen-id lookup for the service layers.
transactions       Helpers for ``select_for_update`` row locking.

Usage from any app::

    from core.domain.exceptions import DomainError, NotFound
    from core.domain.transactions import lock_or_create
"""
