"""Tests for provider settings."""

import pytest
from pydantic import ValidationError

from laoidc.core.settings import PORT_DEFAULT, ProviderSettings


class TestPort:
    """Tests for the PORT override."""

    def test_default_port(self) -> None:
        assert ProviderSettings().port == PORT_DEFAULT

    def test_port_env_overrides_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PORT", "8080")
        assert ProviderSettings().port == 8080

    def test_empty_port_env_falls_back(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PORT", "")
        assert ProviderSettings().port == PORT_DEFAULT

    def test_non_numeric_port_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PORT", "eighty")
        with pytest.raises(ValidationError):
            ProviderSettings()

    def test_port_by_name(self) -> None:
        assert ProviderSettings(port=9000).port == 9000


class TestProviderSettings:
    """Tests for the remaining settings."""

    def test_issuer_strips_trailing_slash(self) -> None:
        settings = ProviderSettings(issuer_url="https://auth.example.com/")
        assert settings.issuer == "https://auth.example.com"

    def test_prefixed_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LAOIDC_ISSUER_URL", "https://id.example.org")
        monkeypatch.setenv("LAOIDC_ID_TOKEN_TTL", "120")
        settings = ProviderSettings()
        assert settings.issuer == "https://id.example.org"
        assert settings.id_token_ttl == 120

    def test_ttl_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            ProviderSettings(id_token_ttl=0)

    def test_list_parsing(self) -> None:
        settings = ProviderSettings(
            cors_origins="https://a.example, ,https://b.example",
            email_link_domains="example.com",
        )
        assert settings.get_cors_origin_list() == [
            "https://a.example",
            "https://b.example",
        ]
        assert settings.get_email_link_domain_list() == ["example.com"]
        assert ProviderSettings().get_email_link_domain_list() == []
