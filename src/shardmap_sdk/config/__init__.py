"""
Configuration module for the shard map manager SDK.

Provides the credential resolver configuration and the named constants it
defaults to.
"""

from shardmap_sdk.config.settings import (
    ACTIVE_DIRECTORY_INTEGRATED,
    MANAGER_SCOPE_SUFFIX,
    MAX_APPLICATION_NAME_LENGTH,
    SCOPE_DELIMITER,
    SHARD_SCOPE_SUFFIX,
    CredentialResolverConfig,
    load_config_from_env,
)

__all__ = [
    "ACTIVE_DIRECTORY_INTEGRATED",
    "MANAGER_SCOPE_SUFFIX",
    "MAX_APPLICATION_NAME_LENGTH",
    "SCOPE_DELIMITER",
    "SHARD_SCOPE_SUFFIX",
    "CredentialResolverConfig",
    "load_config_from_env",
]
