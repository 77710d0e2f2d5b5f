"""Tests for OIDC discovery document."""

import pytest
from pydantic import ValidationError

from laoidc.oidc.discovery import build_discovery


class TestBuildDiscovery:
    """Tests for discovery document generation."""

    def test_has_all_required_fields(self) -> None:
        doc = build_discovery("https://auth.example.com", "/jwks.json", "/authorize")
        assert doc.issuer == "https://auth.example.com"
        assert doc.authorization_endpoint == "https://auth.example.com/authorize"
        assert doc.jwks_uri == "https://auth.example.com/jwks.json"

    def test_supported_values(self) -> None:
        doc = build_discovery("https://auth.example.com", "/jwks.json", "/authorize")
        assert doc.scopes_supported == ["openid", "email"]
        assert doc.response_types_supported == ["id_token"]
        assert doc.response_modes_supported == ["form_post"]
        assert doc.grant_types_supported == ["implicit"]
        assert doc.subject_types_supported == ["public"]
        assert doc.id_token_signing_alg_values_supported == ["RS256"]
        assert doc.claims_supported == [
            "aud",
            "email",
            "email_verified",
            "exp",
            "iat",
            "iss",
            "sub",
        ]

    def test_trailing_slash_stripped(self) -> None:
        doc = build_discovery("https://auth.example.com/", "/jwks.json", "/authorize")
        assert doc.issuer == "https://auth.example.com"

    def test_document_is_immutable(self) -> None:
        doc = build_discovery("https://auth.example.com", "/jwks.json", "/authorize")
        with pytest.raises(ValidationError):
            doc.issuer = "https://evil.com"
