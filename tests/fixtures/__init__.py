"""Centralized test fixtures.

This module re-exports all fixtures from fixture modules so conftest.py can
star-import them.
"""

from .auth import (
    editor_headers,
    principal_headers,
    proposal_headers,
    reader_headers,
    validator_headers,
)
from .catalog import other_suds_type, seeded_catalog, suds_type
from .client import client
from .database import session_factory, test_engine
from .mocks import avoid_external_requests, clear_rate_limits, patch_redis
from .store import change_feed, store

__all__ = [
    "test_engine",
    "session_factory",
    "change_feed",
    "store",
    "client",
    "principal_headers",
    "editor_headers",
    "proposal_headers",
    "validator_headers",
    "reader_headers",
    "seeded_catalog",
    "suds_type",
    "other_suds_type",
    "avoid_external_requests",
    "patch_redis",
    "clear_rate_limits",
]
