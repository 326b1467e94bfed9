"""Shared fixtures: a scripted provider standing in for the generative model."""

import pytest
from unittest.mock import AsyncMock, MagicMock

from content.errors import ProviderError


@pytest.fixture
def mock_provider():
    """Provider whose complete() returns a fixed markdown body."""
    provider = MagicMock()
    provider.complete = AsyncMock(return_value="# Generated\n\nSome body text.")
    return provider


@pytest.fixture
def failing_provider():
    """Provider whose complete() always fails."""
    provider = MagicMock()
    provider.complete = AsyncMock(side_effect=ProviderError("quota exceeded"))
    return provider


@pytest.fixture
def resolver_for():
    """Factory for provider resolvers that always hand back one provider."""
    def _make(provider, api_model: str = "fake-model"):
        return MagicMock(return_value=(provider, api_model))
    return _make
