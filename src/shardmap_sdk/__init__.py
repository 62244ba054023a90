"""
Shard Map SDK - credential handling for a sharded SQL data tier.

Validates the connection string a caller supplies for the shard map manager
database and derives:
- a manager-scope connection string for the metadata store
- a shard-scope connection template to combine with each shard's location

Example:
    from shardmap_sdk import CredentialResolver, SecureCredential

    resolver = CredentialResolver()
    resolved = resolver.resolve(
        "Data Source=srv1;Initial Catalog=ShardMapManager",
        SecureCredential(user_id="smm_admin", password=secret),
    )
    shard_cs = resolved.connection_string_for_shard("srv2", "Shard01")
"""

__version__ = "0.1.0"

from shardmap_sdk.config import CredentialResolverConfig
from shardmap_sdk.connection_string import (
    ConnectionDescriptor,
    redact_connection_string,
)
from shardmap_sdk.credentials import (
    AuthenticationMode,
    CredentialResolver,
    CredentialSource,
    EnvCredentialSource,
    ResolvedCredentials,
    SecureCredential,
    ensure_credential_consistency,
    resolve_credentials,
)
from shardmap_sdk.exceptions import (
    ShardMapError,
    CredentialValidationError,
    MalformedConnectionString,
    MissingRequiredField,
    DisallowedField,
    CredentialError,
    ConfigError,
)

__all__ = [
    "CredentialResolverConfig",
    "ConnectionDescriptor",
    "redact_connection_string",
    "AuthenticationMode",
    "CredentialResolver",
    "CredentialSource",
    "EnvCredentialSource",
    "ResolvedCredentials",
    "SecureCredential",
    "ensure_credential_consistency",
    "resolve_credentials",
    "ShardMapError",
    "CredentialValidationError",
    "MalformedConnectionString",
    "MissingRequiredField",
    "DisallowedField",
    "CredentialError",
    "ConfigError",
]
