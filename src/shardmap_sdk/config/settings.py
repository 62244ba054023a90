"""
Configuration settings for the shard map manager SDK.

This module provides configuration management through environment variables
and programmatic configuration. The defaults are the named constants below;
most deployments never need to change them.
"""

import os
from dataclasses import dataclass
import logging

from dotenv import load_dotenv

from shardmap_sdk.exceptions import ConfigError

logger = logging.getLogger(__name__)

load_dotenv()

# Separates a user-chosen application name from the scope marker.
SCOPE_DELIMITER = "_"

MANAGER_SCOPE_MARKER = "ESC_SMM_GlobalAccess"
SHARD_SCOPE_MARKER = "ESC_SMM_LocalAccess"

MANAGER_SCOPE_SUFFIX = SCOPE_DELIMITER + MANAGER_SCOPE_MARKER
SHARD_SCOPE_SUFFIX = SCOPE_DELIMITER + SHARD_SCOPE_MARKER

# Value of the Authentication keyword that selects Active Directory integrated
# authentication. Comparison ignores case and spaces, so
# "Active Directory Integrated" matches as well.
ACTIVE_DIRECTORY_INTEGRATED = "ActiveDirectoryIntegrated"

# SQL Server truncates application names beyond this length.
MAX_APPLICATION_NAME_LENGTH = 128


@dataclass(frozen=True)
class CredentialResolverConfig:
    """
    Configuration for ``CredentialResolver``.

    Attributes:
        manager_suffix: Appended to ``Application Name`` on the manager-scope
            connection string.
        shard_suffix: Appended to ``Application Name`` on the shard-scope
            connection template.
        active_directory_integrated_marker: ``Authentication`` value that
            selects Active Directory integrated authentication.
        max_application_name_length: Upper bound for a suffixed application
            name; longer names are truncated before the suffix.

    Environment Variables:
        SHARDMAP_MANAGER_SUFFIX
        SHARDMAP_SHARD_SUFFIX
        SHARDMAP_AD_INTEGRATED_MARKER
        SHARDMAP_MAX_APPLICATION_NAME_LENGTH
    """
    manager_suffix: str = MANAGER_SCOPE_SUFFIX
    shard_suffix: str = SHARD_SCOPE_SUFFIX
    active_directory_integrated_marker: str = ACTIVE_DIRECTORY_INTEGRATED
    max_application_name_length: int = MAX_APPLICATION_NAME_LENGTH

    @classmethod
    def from_env(cls) -> "CredentialResolverConfig":
        """Load configuration from environment variables."""
        raw_length = os.getenv(
            "SHARDMAP_MAX_APPLICATION_NAME_LENGTH", str(MAX_APPLICATION_NAME_LENGTH)
        )
        try:
            max_length = int(raw_length)
        except ValueError as e:
            raise ConfigError(
                f"SHARDMAP_MAX_APPLICATION_NAME_LENGTH must be an integer, got '{raw_length}'"
            ) from e

        config = cls(
            manager_suffix=os.getenv("SHARDMAP_MANAGER_SUFFIX", MANAGER_SCOPE_SUFFIX),
            shard_suffix=os.getenv("SHARDMAP_SHARD_SUFFIX", SHARD_SCOPE_SUFFIX),
            active_directory_integrated_marker=os.getenv(
                "SHARDMAP_AD_INTEGRATED_MARKER", ACTIVE_DIRECTORY_INTEGRATED
            ),
            max_application_name_length=max_length,
        )
        config.validate()
        logger.debug(
            "Loaded credential resolver config (manager_suffix=%s, shard_suffix=%s)",
            config.manager_suffix,
            config.shard_suffix,
        )
        return config

    def validate(self) -> None:
        """
        Check that the configuration is usable.

        Raises:
            ConfigError: If a suffix is empty or contains ``;``, the two
                suffixes are identical, the marker is empty, or the suffixes
                do not fit within the application name limit.
        """
        for name, suffix in (("manager_suffix", self.manager_suffix), ("shard_suffix", self.shard_suffix)):
            if not suffix:
                raise ConfigError(f"{name} must not be empty")
            if ";" in suffix:
                raise ConfigError(f"{name} must not contain ';'")
            if len(suffix) > self.max_application_name_length:
                raise ConfigError(
                    f"{name} is longer than max_application_name_length "
                    f"({self.max_application_name_length})"
                )
        if self.manager_suffix == self.shard_suffix:
            raise ConfigError("manager_suffix and shard_suffix must differ")
        if not self.active_directory_integrated_marker.strip():
            raise ConfigError("active_directory_integrated_marker must not be empty")

    def is_active_directory_integrated(self, value: str) -> bool:
        """Return True if an ``Authentication`` value selects AD integrated auth."""
        def _norm(s: str) -> str:
            return "".join(s.split()).lower()
        return bool(value) and _norm(value) == _norm(self.active_directory_integrated_marker)


def load_config_from_env() -> CredentialResolverConfig:
    """Convenience function to load configuration from environment."""
    return CredentialResolverConfig.from_env()
