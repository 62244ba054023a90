"""
Unit tests for CredentialResolverConfig.
"""

import pytest

from shardmap_sdk.config import (
    ACTIVE_DIRECTORY_INTEGRATED,
    MANAGER_SCOPE_SUFFIX,
    SCOPE_DELIMITER,
    SHARD_SCOPE_SUFFIX,
    CredentialResolverConfig,
    load_config_from_env,
)
from shardmap_sdk.exceptions import ConfigError

ENV_VARS = (
    "SHARDMAP_MANAGER_SUFFIX",
    "SHARDMAP_SHARD_SUFFIX",
    "SHARDMAP_AD_INTEGRATED_MARKER",
    "SHARDMAP_MAX_APPLICATION_NAME_LENGTH",
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.mark.unit
class TestDefaults:
    def test_suffix_constants(self):
        assert MANAGER_SCOPE_SUFFIX.startswith(SCOPE_DELIMITER)
        assert SHARD_SCOPE_SUFFIX.startswith(SCOPE_DELIMITER)
        assert MANAGER_SCOPE_SUFFIX != SHARD_SCOPE_SUFFIX

    def test_default_config_is_valid(self):
        config = CredentialResolverConfig()
        config.validate()
        assert config.manager_suffix == MANAGER_SCOPE_SUFFIX
        assert config.shard_suffix == SHARD_SCOPE_SUFFIX
        assert config.active_directory_integrated_marker == ACTIVE_DIRECTORY_INTEGRATED
        assert config.max_application_name_length == 128


@pytest.mark.unit
class TestFromEnv:
    def test_defaults_without_env(self, clean_env):
        assert load_config_from_env() == CredentialResolverConfig()

    def test_overrides(self, clean_env):
        clean_env.setenv("SHARDMAP_MANAGER_SUFFIX", "-gsm")
        clean_env.setenv("SHARDMAP_SHARD_SUFFIX", "-lsm")
        clean_env.setenv("SHARDMAP_AD_INTEGRATED_MARKER", "AADIntegrated")
        clean_env.setenv("SHARDMAP_MAX_APPLICATION_NAME_LENGTH", "64")
        config = CredentialResolverConfig.from_env()
        assert config.manager_suffix == "-gsm"
        assert config.shard_suffix == "-lsm"
        assert config.active_directory_integrated_marker == "AADIntegrated"
        assert config.max_application_name_length == 64

    def test_bad_length(self, clean_env):
        clean_env.setenv("SHARDMAP_MAX_APPLICATION_NAME_LENGTH", "lots")
        with pytest.raises(ConfigError):
            CredentialResolverConfig.from_env()

    def test_invalid_env_config_rejected(self, clean_env):
        clean_env.setenv("SHARDMAP_MANAGER_SUFFIX", "same")
        clean_env.setenv("SHARDMAP_SHARD_SUFFIX", "same")
        with pytest.raises(ConfigError):
            CredentialResolverConfig.from_env()


@pytest.mark.unit
class TestValidate:
    @pytest.mark.parametrize(
        "kwargs",
        [
            {"manager_suffix": ""},
            {"shard_suffix": ""},
            {"manager_suffix": "_a;b"},
            {"manager_suffix": "_x", "shard_suffix": "_x"},
            {"active_directory_integrated_marker": "  "},
            {"max_application_name_length": 4},
        ],
    )
    def test_rejects(self, kwargs):
        with pytest.raises(ConfigError):
            CredentialResolverConfig(**kwargs).validate()

    def test_ad_marker_matching(self):
        config = CredentialResolverConfig()
        assert config.is_active_directory_integrated("Active Directory Integrated")
        assert config.is_active_directory_integrated("activedirectoryintegrated")
        assert not config.is_active_directory_integrated("ActiveDirectoryPassword")
        assert not config.is_active_directory_integrated("")
