"""
User store use cases: lookup, registration with field rules, removal and edits.

The whole collection lives in memory as a list of dicts and is written back to
the root file after every successful mutation.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional
import json
import logging

from userbase.core.config import get_settings
from userbase.core.security import new_id, new_token
from userbase.domain.rules import check_rules
from userbase.repositories import json_storage

logger = logging.getLogger("userbase.store")

Record = dict[str, Any]

_MISSING = object()

RESERVED_FIELDS = frozenset({"id", "token"})


class UserStoreError(Exception):
    """Base class for user store exceptions."""


class ConfigurationError(UserStoreError, ValueError):
    """Raised when a required argument (root file, filter, patch) is missing or invalid."""


class RootFileError(UserStoreError):
    def __init__(self, message: str, path: Path):
        super().__init__(message)
        self.message = message
        self.path = path


@dataclass
class AddResult:
    success: bool
    user: Optional[Record] = None
    message: Optional[str] = None

    def __bool__(self) -> bool:
        return self.success


def _value_kind(value: Any) -> type:
    # int and float are one JSON number; bool stays apart from both
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float
    return type(value)


def _strict_equal(left: Any, right: Any) -> bool:
    return _value_kind(left) is _value_kind(right) and left == right


def _matches(record: Mapping[str, Any], filters: Mapping[str, Any]) -> bool:
    for key, expected in filters.items():
        actual = record.get(key, _MISSING)
        if actual is _MISSING or not _strict_equal(actual, expected):
            return False
    return True


class UserStore:
    """Flat-file user collection bound to a single root file."""

    def __init__(
        self,
        root_file: str | Path | None,
        *,
        indent: int | None = None,
        atomic_writes: bool | None = None,
    ) -> None:
        if not root_file:
            raise ConfigurationError("No root file specified!")

        settings = get_settings()
        self.root_file = Path(root_file)
        self.indent = settings.json_indent if indent is None else indent
        self.atomic_writes = settings.atomic_writes if atomic_writes is None else atomic_writes

        json_storage.ensure_exists(self.root_file)
        try:
            data = json_storage.load(self.root_file)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise RootFileError(
                f"Invalid JSON stored in root file! ({exc}): {self.root_file}", self.root_file
            ) from exc
        if not isinstance(data, list):
            raise RootFileError(
                f"Root file must contain a JSON array, got {type(data).__name__}: {self.root_file}",
                self.root_file,
            )
        if not all(isinstance(record, dict) for record in data):
            raise RootFileError(
                f"Root file must contain only JSON objects: {self.root_file}", self.root_file
            )
        self.data: list[Record] = data
        logger.info("loaded %d user(s) from %s", len(self.data), self.root_file)

    def __len__(self) -> int:
        return len(self.data)

    def get(self, filters: Mapping[str, Any] | None = None) -> list[Record]:
        """Return users whose fields strictly equal every value in ``filters``.

        Without a filter the internal list itself is returned, so in-place
        changes to it are picked up by the next ``save()``.
        """
        if filters is None:
            return self.data
        return [record for record in self.data if _matches(record, filters)]

    def add(self, fields: Mapping[str, Mapping[str, Any]] | None) -> AddResult:
        """
        Register a user from a field specification.

        Each field is ``{"value": ..., "noDuplicate": bool, "rules": {...}}``.
        Fields are processed in order and the first rule violation or
        duplicate aborts the call with nothing stored. On success the user
        gets a fresh ``token`` and ``id`` and the store is saved.

        Example::

            store.add({
                "username": {
                    "value": "example",
                    "noDuplicate": True,
                    "rules": {"minLength": 3, "maxLength": 20, "noSpaces": True},
                },
            })
        """
        if fields is None:
            raise ConfigurationError("No input specified!")

        user: Record = {}
        for key, spec in fields.items():
            value = spec.get("value")

            rules = spec.get("rules")
            if rules:
                check = check_rules(value, rules)
                if not check.success:
                    logger.debug("add rejected: field %r failed rules", key)
                    return AddResult(success=False, message=check.message)

            if spec.get("noDuplicate") and self.get({key: value}):
                logger.debug("add rejected: duplicate %r", key)
                return AddResult(success=False, message=f"A user with this {key} already exists!")

            user[key] = value

        user["token"] = new_token()
        user["id"] = new_id()
        self.data.append(user)
        self.save()
        logger.info("added user %s", user["id"])
        return AddResult(success=True, user=user)

    def remove(self, filters: Mapping[str, Any] | None) -> bool:
        """Delete every user matching ``filters``. Returns False when nothing matched."""
        if not filters:
            raise ConfigurationError("No input specified!")

        matched = self.get(filters)
        if not matched:
            return False

        doomed = {id(record) for record in matched}
        self.data[:] = [record for record in self.data if id(record) not in doomed]
        self.save()
        logger.info("removed %d user(s)", len(matched))
        return True

    def modify(self, filters: Mapping[str, Any] | None, patch: Mapping[str, Any] | None) -> bool:
        """
        Overwrite ``patch`` keys on every user matching ``filters``.

        Rules and duplicate checks from ``add`` are not applied here. The
        generated ``id`` and ``token`` fields cannot be patched.
        """
        if filters is None:
            raise ConfigurationError("No find input specified!")
        if patch is None:
            raise ConfigurationError("No modify input specified!")
        reserved = RESERVED_FIELDS.intersection(patch)
        if reserved:
            raise ConfigurationError(f"Cannot modify reserved field(s): {', '.join(sorted(reserved))}")

        matched = self.get(filters)
        if not matched:
            return False

        for record in matched:
            record.update(patch)
        self.save()
        logger.info("modified %d user(s), fields=%s", len(matched), sorted(patch))
        return True

    def save(self) -> None:
        json_storage.save(self.root_file, self.data, indent=self.indent, atomic=self.atomic_writes)


def open_store(root_file: str | Path | None = None) -> UserStore:
    """Open a store on ``root_file``, falling back to USERBASE_ROOT_FILE when it is None."""
    if root_file is None:
        root_file = get_settings().root_file
    return UserStore(root_file)
