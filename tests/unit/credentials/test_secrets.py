"""
Unit tests for CredentialSource implementations and SecureCredential.
"""

import logging

import pytest

from shardmap_sdk.credentials import (
    CredentialResolver,
    CredentialSource,
    EnvCredentialSource,
    MappingCredentialSource,
    SecureCredential,
)
from shardmap_sdk.exceptions import CredentialError


@pytest.mark.unit
class TestCredentialSources:
    def test_credential_source_is_abstract(self):
        with pytest.raises(TypeError):
            CredentialSource()  # type: ignore[abstract]

    def test_env_source_default_keys(self, monkeypatch):
        monkeypatch.setenv("SHARDMAP_USER_ID", "admin")
        monkeypatch.setenv("SHARDMAP_PASSWORD", "secret123")
        cred = EnvCredentialSource().load()
        assert cred.user_id == "admin"
        assert cred.password == "secret123"

    def test_env_source_custom_keys_and_prefix(self, monkeypatch):
        monkeypatch.setenv("PROD_SMM_USER", "admin")
        monkeypatch.setenv("PROD_SMM_PASSWORD", "pw")
        source = EnvCredentialSource("SMM_USER", "SMM_PASSWORD", prefix="PROD_")
        assert source.user_id_key == "PROD_SMM_USER"
        assert source.load().password == "pw"

    def test_env_source_missing_user(self, monkeypatch):
        monkeypatch.delenv("SMM_USER", raising=False)
        monkeypatch.setenv("SMM_PASSWORD", "pw")
        with pytest.raises(CredentialError) as exc_info:
            EnvCredentialSource("SMM_USER", "SMM_PASSWORD").load()
        assert exc_info.value.key == "SMM_USER"
        assert "environment variable 'SMM_USER'" in str(exc_info.value)

    def test_empty_user_rejected(self):
        source = MappingCredentialSource({"u": "", "p": "pw"}, "u", "p")
        with pytest.raises(CredentialError) as exc_info:
            source.load()
        assert exc_info.value.key == "u"

    def test_missing_password(self):
        source = MappingCredentialSource({"u": "admin"}, "u", "p")
        with pytest.raises(CredentialError) as exc_info:
            source.load()
        assert exc_info.value.key == "p"

    def test_empty_password_allowed(self):
        cred = MappingCredentialSource({"u": "admin", "p": ""}, "u", "p").load()
        assert cred.password == ""

    def test_missing_value_logged_as_warning(self, caplog):
        source = MappingCredentialSource({"u": "admin"}, "u", "p")
        with caplog.at_level(logging.WARNING, logger="shardmap_sdk.credentials.secrets"):
            with pytest.raises(CredentialError):
                source.load()
        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "'p'" in warnings[0].getMessage()

    def test_warning_never_contains_secret(self, caplog):
        source = MappingCredentialSource({"p": "hunter2"}, "u", "p")
        with caplog.at_level(logging.WARNING, logger="shardmap_sdk.credentials.secrets"):
            with pytest.raises(CredentialError):
                source.load()
        assert "hunter2" not in caplog.text

    def test_mapping_source_repr_hides_values(self):
        source = MappingCredentialSource({"u": "admin", "p": "hunter2"}, "u", "p")
        assert "hunter2" not in repr(source)

    def test_loaded_credential_resolves(self, credential_only_cs):
        source = MappingCredentialSource({"u": "admin", "p": "hunter2"}, "u", "p")
        resolved = CredentialResolver().resolve(credential_only_cs, source.load())
        assert resolved.credential.user_id == "admin"
        assert "hunter2" not in resolved.manager_connection_string
        assert "hunter2" not in resolved.shard_connection_string


@pytest.mark.unit
class TestSecureCredential:
    def test_repr_hides_password(self):
        cred = SecureCredential(user_id="admin", password="hunter2")
        assert "hunter2" not in repr(cred)
        assert "admin" in repr(cred)

    def test_equality_is_identity(self):
        a = SecureCredential(user_id="admin", password="x")
        b = SecureCredential(user_id="admin", password="x")
        assert a != b
        assert a == a

    def test_immutable(self):
        cred = SecureCredential(user_id="admin", password="x")
        with pytest.raises(AttributeError):
            cred.password = "y"

    @pytest.mark.parametrize("user_id", ["", None])
    def test_requires_user_id(self, user_id):
        with pytest.raises(CredentialError):
            SecureCredential(user_id=user_id, password="x")

    def test_requires_string_password(self):
        with pytest.raises(CredentialError):
            SecureCredential(user_id="admin", password=None)
