"""Credential resolution for the shard map manager and its shards."""

from shardmap_sdk.credentials.credentials import (
    AuthenticationMode,
    CredentialResolver,
    ResolvedCredentials,
    SecureCredential,
    add_application_name_suffix,
    ensure_credential_consistency,
    resolve_credentials,
)
from shardmap_sdk.credentials.secrets import (
    CredentialSource,
    EnvCredentialSource,
    MappingCredentialSource,
)

__all__ = [
    "AuthenticationMode",
    "CredentialResolver",
    "ResolvedCredentials",
    "SecureCredential",
    "add_application_name_suffix",
    "ensure_credential_consistency",
    "resolve_credentials",
    "CredentialSource",
    "EnvCredentialSource",
    "MappingCredentialSource",
]
