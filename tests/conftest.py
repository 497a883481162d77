"""Pytest configuration and fixtures."""

import pytest

from hubfeed.config import Settings


@pytest.fixture(scope="session")
def anyio_backend():
    """Configure anyio backend for async tests."""
    return "asyncio"


@pytest.fixture
def settings(tmp_path):
    return Settings(
        github_token="test-token",
        supabase_url="https://example.supabase.co",
        supabase_key="anon-key",
        data_dir=tmp_path,
    )
