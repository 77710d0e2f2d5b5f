"""Provider settings loaded from environment variables."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ISSUER_URL_DEFAULT = "https://laoidc.herokuapp.com"
ADDRESS_DEFAULT = "0.0.0.0"
PORT_DEFAULT = 3333
ID_TOKEN_TTL_DEFAULT = 3600
AUTH_TIMEOUT_DEFAULT = 300.0


def _split_list(raw: str) -> list[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]


class ProviderSettings(BaseSettings):
    """OIDC provider settings.

    The listening port is read from the unprefixed ``PORT`` variable so that
    process managers which assign ports can override it. Empty variables fall
    back to the defaults.
    """

    model_config = SettingsConfigDict(
        env_prefix="LAOIDC_",
        env_ignore_empty=True,
        populate_by_name=True,
    )

    issuer_url: str = ISSUER_URL_DEFAULT
    address: str = ADDRESS_DEFAULT
    port: int = Field(default=PORT_DEFAULT, validation_alias="PORT")
    cors_origins: str = ""
    id_token_ttl: int = Field(default=ID_TOKEN_TTL_DEFAULT, gt=0)
    auth_timeout: float = Field(default=AUTH_TIMEOUT_DEFAULT, gt=0)
    email_link_domains: str = ""
    log_level: str = "INFO"

    @property
    def issuer(self) -> str:
        """Issuer identifier without a trailing slash."""
        return self.issuer_url.rstrip("/")

    def get_cors_origin_list(self) -> list[str]:
        """Parse comma-separated CORS origins."""
        return _split_list(self.cors_origins)

    def get_email_link_domain_list(self) -> list[str]:
        """Parse comma-separated email link domains. Empty means any domain."""
        return _split_list(self.email_link_domains)
