"""
Credential resolution for the shard map manager.

``CredentialResolver`` takes the single connection string a caller supplies
for the shard map manager database (plus an optional out-of-band
``SecureCredential``), checks that exactly one authentication mode is in
use, and derives two connection strings from it:

- a manager-scope string that still points at the shard map manager
  database and is tagged with the manager application-name suffix;
- a shard-scope template with ``Data Source`` and ``Initial Catalog``
  removed, tagged with the shard suffix, to be combined with a shard's
  location before use.

Example:
    >>> resolved = resolve_credentials(
    ...     "Data Source=srv1;Initial Catalog=ShardMapManager;Integrated Security=True"
    ... )
    >>> resolved.location_descriptor
    '[DataSource=srv1 Database=ShardMapManager]'
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

from shardmap_sdk.config.settings import CredentialResolverConfig, MAX_APPLICATION_NAME_LENGTH
from shardmap_sdk.connection_string import (
    APPLICATION_NAME,
    AUTHENTICATION,
    DATA_SOURCE,
    INITIAL_CATALOG,
    ConnectionDescriptor,
    redact_connection_string,
)
from shardmap_sdk.exceptions import (
    CredentialError,
    DisallowedField,
    MissingRequiredField,
)

logger = logging.getLogger(__name__)

LOCATION_FORMAT = "[DataSource={data_source} Database={initial_catalog}]"

_DEFAULT_CONFIG = CredentialResolverConfig()


class AuthenticationMode(str, Enum):
    """Authentication mode derived from a connection string and credential."""

    INTEGRATED = "integrated"
    ACTIVE_DIRECTORY_INTEGRATED = "active_directory_integrated"
    USER_PASSWORD = "user_password"
    SECURE_CREDENTIAL = "secure_credential"


@dataclass(frozen=True, eq=False)
class SecureCredential:
    """
    User id and password supplied outside the connection string.

    The password is excluded from ``repr()`` and is never written into a
    derived connection string. Equality is identity: two credentials are
    never compared by secret.
    """

    user_id: str
    password: str = field(repr=False)

    def __post_init__(self) -> None:
        if not isinstance(self.user_id, str) or not self.user_id:
            raise CredentialError("SecureCredential requires a non-empty user_id")
        if not isinstance(self.password, str):
            raise CredentialError("SecureCredential password must be a string")


def add_application_name_suffix(
    application_name: str | None,
    suffix: str | None,
    max_length: int = MAX_APPLICATION_NAME_LENGTH,
) -> str:
    """
    Append a scope suffix to an application name.

    An empty name yields the bare suffix. When the combined length would
    exceed ``max_length`` the name is truncated so that the suffix is kept
    whole.
    """
    if not application_name:
        return suffix or ""
    if not suffix:
        return application_name
    room = max_length - len(suffix)
    if len(application_name) > room:
        application_name = application_name[:max(room, 0)]
    return application_name + suffix


def ensure_credential_consistency(
    descriptor: ConnectionDescriptor,
    secure_credential: SecureCredential | None,
    parameter_name: str = "connection_string",
    *,
    config: CredentialResolverConfig | None = None,
) -> AuthenticationMode:
    """
    Check that the connection string and credential agree on one auth mode.

    Integrated and Active Directory integrated authentication need nothing
    else. Otherwise the secret must come through exactly one channel: inline
    ``User ID``/``Password`` when no credential object is given, or the
    credential object alone when one is.

    Returns:
        The authentication mode in effect.

    Raises:
        MissingRequiredField: ``UserID``/``Password`` missing without a credential.
        DisallowedField: ``UserID``/``Password`` present alongside a credential.
    """
    config = config or _DEFAULT_CONFIG

    if descriptor.integrated_security_for(parameter_name):
        return AuthenticationMode.INTEGRATED

    if config.is_active_directory_integrated(descriptor.get_value(AUTHENTICATION)):
        return AuthenticationMode.ACTIVE_DIRECTORY_INTEGRATED

    if secure_credential is None:
        if not descriptor.user_id:
            raise MissingRequiredField("UserID", parameter_name)
        if not descriptor.password:
            raise MissingRequiredField("Password", parameter_name)
        return AuthenticationMode.USER_PASSWORD

    if descriptor.user_id:
        raise DisallowedField("UserID", parameter_name)
    if descriptor.password:
        raise DisallowedField("Password", parameter_name)
    return AuthenticationMode.SECURE_CREDENTIAL


@dataclass(frozen=True, repr=False)
class ResolvedCredentials:
    """
    Connection strings derived for the shard map manager and its shards.

    Attributes:
        manager_connection_string: Connection string for the shard map
            manager database.
        shard_connection_string: Template for shard connections; carries no
            ``Data Source`` or ``Initial Catalog``.
        credential: The caller's secure credential, passed through as-is.
        location_descriptor: ``[DataSource=... Database=...]`` for logging.
        authentication_mode: Mode the connection string resolved to.
    """

    manager_connection_string: str
    shard_connection_string: str
    credential: SecureCredential | None
    location_descriptor: str
    authentication_mode: AuthenticationMode

    def connection_string_for_shard(self, data_source: str, initial_catalog: str) -> str:
        """
        Combine the shard template with a shard's location.

        Raises:
            MissingRequiredField: If either location part is empty.
        """
        if not data_source:
            raise MissingRequiredField("DataSource", "data_source")
        if not initial_catalog:
            raise MissingRequiredField("InitialCatalog", "initial_catalog")
        template = ConnectionDescriptor.parse(self.shard_connection_string)
        located = ConnectionDescriptor(
            [(DATA_SOURCE, data_source), (INITIAL_CATALOG, initial_catalog), *template.items()]
        )
        return located.to_connection_string()

    def __repr__(self) -> str:
        return (
            f"ResolvedCredentials(location={self.location_descriptor!r}, "
            f"mode={self.authentication_mode.value!r}, "
            f"manager={redact_connection_string(self.manager_connection_string)!r}, "
            f"shard={redact_connection_string(self.shard_connection_string)!r}, "
            f"credential={self.credential!r})"
        )


class CredentialResolver:
    """
    Validates a shard map manager connection string and derives the
    manager-scope and shard-scope connection strings from it.

    Stateless apart from its configuration; a single instance may be shared
    across threads.
    """

    def __init__(self, config: CredentialResolverConfig | None = None) -> None:
        self.config = config or _DEFAULT_CONFIG
        self.config.validate()

    def resolve(
        self,
        connection_string: str,
        secure_credential: SecureCredential | None = None,
        parameter_name: str = "connection_string",
    ) -> ResolvedCredentials:
        """
        Parse, validate and derive credentials from ``connection_string``.

        Args:
            connection_string: Connection string for the shard map manager
                database.
            secure_credential: Optional credential supplied out-of-band.
            parameter_name: Name reported in validation errors.

        Raises:
            MalformedConnectionString: The string does not parse.
            MissingRequiredField: A required property is absent or empty.
            DisallowedField: ``UserID``/``Password`` given alongside a credential.
        """
        descriptor = ConnectionDescriptor.parse(connection_string, parameter_name)

        if not descriptor.data_source:
            raise MissingRequiredField("DataSource", parameter_name)
        if not descriptor.initial_catalog:
            raise MissingRequiredField("InitialCatalog", parameter_name)

        mode = ensure_credential_consistency(
            descriptor, secure_credential, parameter_name, config=self.config
        )

        max_length = self.config.max_application_name_length
        manager = descriptor.with_value(
            APPLICATION_NAME,
            add_application_name_suffix(
                descriptor.application_name, self.config.manager_suffix, max_length
            ),
        )
        shard = descriptor.without(DATA_SOURCE, INITIAL_CATALOG).with_value(
            APPLICATION_NAME,
            add_application_name_suffix(
                descriptor.application_name, self.config.shard_suffix, max_length
            ),
        )
        location = LOCATION_FORMAT.format(
            data_source=descriptor.data_source,
            initial_catalog=descriptor.initial_catalog,
        )

        logger.debug("Resolved shard map manager credentials for %s (mode=%s)", location, mode.value)

        return ResolvedCredentials(
            manager_connection_string=manager.to_connection_string(),
            shard_connection_string=shard.to_connection_string(),
            credential=secure_credential,
            location_descriptor=location,
            authentication_mode=mode,
        )


def resolve_credentials(
    connection_string: str,
    secure_credential: SecureCredential | None = None,
) -> ResolvedCredentials:
    """Convenience helper that resolves with the default configuration."""
    return CredentialResolver().resolve(connection_string, secure_credential)
