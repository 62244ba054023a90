"""
Root conftest.py: shared fixtures for all tests.
"""

import pytest

from shardmap_sdk.config import CredentialResolverConfig
from shardmap_sdk.credentials import CredentialResolver, SecureCredential


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast, isolated unit tests")


# ---------------------------------------------------------------------------
# Connection strings
# ---------------------------------------------------------------------------

@pytest.fixture
def user_password_cs():
    """Inline user/password connection string for the shard map manager."""
    return "Data Source=srv1;Initial Catalog=ShardMapManager;User ID=u;Password=p"


@pytest.fixture
def integrated_cs():
    """Trusted-connection connection string."""
    return "Data Source=srv1;Initial Catalog=ShardMapManager;Integrated Security=True"


@pytest.fixture
def credential_only_cs():
    """Connection string that expects an out-of-band credential."""
    return "Data Source=srv1;Initial Catalog=ShardMapManager"


# ---------------------------------------------------------------------------
# Credentials and resolvers
# ---------------------------------------------------------------------------

@pytest.fixture
def secure_credential():
    return SecureCredential(user_id="smm_admin", password="s3cr3t-P@ss")


@pytest.fixture
def resolver():
    return CredentialResolver()


@pytest.fixture
def custom_config():
    return CredentialResolverConfig(
        manager_suffix="|mgr",
        shard_suffix="|shard",
        active_directory_integrated_marker="AADIntegrated",
        max_application_name_length=32,
    )
