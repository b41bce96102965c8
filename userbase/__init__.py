"""
userbase: a flat-file user store backed by a single JSON array.

    from userbase import open_store

    store = open_store("users.json")
    result = store.add({"username": {"value": "alice", "noDuplicate": True}})
    store.get({"username": "alice"})
"""

from userbase.core.security import new_id, new_token
from userbase.domain.rules import RuleCheck, check_rules
from userbase.services.user_store import (
    AddResult,
    ConfigurationError,
    RootFileError,
    UserStore,
    UserStoreError,
    open_store,
)

__all__ = [
    "AddResult",
    "ConfigurationError",
    "RootFileError",
    "RuleCheck",
    "UserStore",
    "UserStoreError",
    "check_rules",
    "new_id",
    "new_token",
    "open_store",
]
