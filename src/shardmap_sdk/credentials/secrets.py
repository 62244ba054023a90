"""
Credential sources: where the shard map manager's out-of-band login lives.

A ``CredentialSource`` knows the two keys that hold the user id and the
password and turns them into a ``SecureCredential`` with ``load()``. The
password is read straight into the credential object; it never passes
through a connection string.

Example:
    >>> source = EnvCredentialSource("SMM_USER", "SMM_PASSWORD")
    >>> resolved = CredentialResolver().resolve(
    ...     "Data Source=srv1;Initial Catalog=ShardMapManager", source.load()
    ... )
"""

from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from typing import Mapping

from shardmap_sdk.credentials.credentials import SecureCredential
from shardmap_sdk.exceptions import CredentialError

logger = logging.getLogger(__name__)

DEFAULT_USER_ID_KEY = "SHARDMAP_USER_ID"
DEFAULT_PASSWORD_KEY = "SHARDMAP_PASSWORD"


class CredentialSource(ABC):
    """
    Loads a ``SecureCredential`` from a user id key and a password key.

    Subclasses only implement ``_lookup``. A missing or empty user id, or a
    missing password, is logged at WARNING (key name only) and raised as
    ``CredentialError``. An empty password is a valid password.
    """

    def __init__(
        self,
        user_id_key: str = DEFAULT_USER_ID_KEY,
        password_key: str = DEFAULT_PASSWORD_KEY,
    ) -> None:
        self.user_id_key = user_id_key
        self.password_key = password_key

    @abstractmethod
    def _lookup(self, key: str) -> str | None:
        """Return the raw value stored under ``key``, or None."""
        raise NotImplementedError

    def describe(self, key: str) -> str:
        """Human-readable location of ``key``, used in errors and logs."""
        return f"'{key}'"

    def load(self) -> SecureCredential:
        """
        Build the credential.

        Raises:
            CredentialError: If the user id or password cannot be found.
        """
        user_id = self._lookup(self.user_id_key)
        if not user_id:
            self._missing(self.user_id_key)
        password = self._lookup(self.password_key)
        if password is None:
            self._missing(self.password_key)
        return SecureCredential(user_id=user_id, password=password)

    def _missing(self, key: str) -> None:
        where = self.describe(key)
        logger.warning("%s: no value for %s", type(self).__name__, where)
        raise CredentialError(f"Credential value {where} is not set", key=key)


class EnvCredentialSource(CredentialSource):
    """
    Reads the credential from environment variables.

    With ``prefix="PROD_"`` the default keys become ``PROD_SHARDMAP_USER_ID``
    and ``PROD_SHARDMAP_PASSWORD``.
    """

    def __init__(
        self,
        user_id_key: str = DEFAULT_USER_ID_KEY,
        password_key: str = DEFAULT_PASSWORD_KEY,
        *,
        prefix: str = "",
    ) -> None:
        super().__init__(prefix + user_id_key, prefix + password_key)

    def _lookup(self, key: str) -> str | None:
        return os.environ.get(key)

    def describe(self, key: str) -> str:
        return f"environment variable '{key}'"


class MappingCredentialSource(CredentialSource):
    """Reads the credential from an in-memory mapping (tests, injected config)."""

    def __init__(
        self,
        values: Mapping[str, str],
        user_id_key: str = DEFAULT_USER_ID_KEY,
        password_key: str = DEFAULT_PASSWORD_KEY,
    ) -> None:
        super().__init__(user_id_key, password_key)
        self._values = dict(values)

    def _lookup(self, key: str) -> str | None:
        return self._values.get(key)

    def __repr__(self) -> str:
        return f"MappingCredentialSource(keys={sorted(self._values)!r})"
