"""Tests for settings validation."""

import pytest
from pydantic import ValidationError

from src.config import Settings


def test_production_refuses_development_secrets():
    """Test production rejects the insecure fallback secrets."""
    with pytest.raises(ValidationError, match="JWT_SECRET"):
        Settings(environment="production", database_url="postgresql://db.internal/menu")
    with pytest.raises(ValidationError, match="INTERNAL_API_KEY"):
        Settings(
            environment="production",
            database_url="postgresql://db.internal/menu",
            jwt_secret="real-secret",
        )


def test_production_with_real_secrets():
    settings = Settings(
        environment="production",
        database_url="postgresql://db.internal/menu",
        jwt_secret="real-secret",
        internal_api_key="real-key",
    )
    assert settings.is_production
    assert not settings.uses_development_secrets


def test_development_allows_fallbacks():
    settings = Settings(environment="development")
    assert not settings.is_production
    assert settings.uses_development_secrets
