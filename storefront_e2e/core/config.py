"""Configuration management using Pydantic Settings."""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigurationError


# Timeout constants (in milliseconds)
BROWSER_TIMEOUT_DEFAULT = 30000
NAVIGATION_TIMEOUT_DEFAULT = 30000

# Site identifiers
SITE_ACTION = "action"
SITE_STG_RIJN_IJSSEL = "stg-rijn-ijssel"

# iDEAL hosts the payment page on a separate domain for staging shops
STAGING_PROCESSOR_DOMAIN = "ext.pay.ideal.nl"
PRODUCTION_PROCESSOR_DOMAIN = "pay.ideal.nl"


class SiteConfig(BaseModel):
    """Everything a test needs to know about one target site."""

    model_config = {"frozen": True}

    name: str
    base_url: str
    home_path: str = "/"
    requires_login: bool = False
    storage_state_path: Path
    payment_processor_domain: Optional[str] = None


class Settings(BaseSettings):
    """Suite settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Target sites
    action_base_url: str = Field(default="https://shop-staging.action.com", description="Action storefront base URL")
    stg_rijn_ijssel_base_url: str = Field(default="https://www.stgrijnijssel.nl", description="STG Rijn-IJssel base URL")
    payment_processor_domain: Optional[str] = Field(default=None, description="Override for the payment processor domain")

    # SSO credentials for the Action staging shop (Cloudflare Access + Azure AD)
    sso_username: Optional[str] = Field(default=None, description="SSO username")
    sso_password: Optional[str] = Field(default=None, description="SSO password")

    # Member portal credentials for STG Rijn-IJssel
    stg_rijn_ijssel_username: Optional[str] = Field(default=None, description="Member portal username")
    stg_rijn_ijssel_password: Optional[str] = Field(default=None, description="Member portal password")
    stg_rijn_ijssel_display_name: Optional[str] = Field(default=None, description="Name shown after login")

    # Checkout contact fields
    checkout_email: str = Field(default="test@example.com", description="Checkout e-mail address")
    checkout_firstname: str = Field(default="Jan", description="Checkout first name")
    checkout_lastname: str = Field(default="Jansen", description="Checkout last name")
    checkout_phone: str = Field(default="0612345678", description="Checkout phone number")
    checkout_postcode: str = Field(default="1234AB", description="Checkout postcode")
    checkout_city: str = Field(default="Amsterdam", description="Checkout city")

    # Browser Configuration
    headless: bool = Field(default=True, description="Run browser in headless mode")
    browser_timeout: int = Field(default=BROWSER_TIMEOUT_DEFAULT, description="Default action timeout in milliseconds")
    navigation_timeout: int = Field(default=NAVIGATION_TIMEOUT_DEFAULT, description="Navigation timeout in milliseconds")

    # Runner Configuration
    retries: int = Field(default=1, description="Whole-test reruns for browser tests")

    # Artifacts
    screenshot_dir: Path = Field(default=Path("screenshots"), description="Screenshot output directory")
    auth_dir: Path = Field(default=Path(".auth"), description="Authentication snapshot directory")

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    json_logs: bool = Field(default=False, description="Use JSON logging format")

    @field_validator("action_base_url", "stg_rijn_ijssel_base_url", mode="before")
    @classmethod
    def strip_trailing_slash(cls, v):
        """Normalize base URLs so relative paths join cleanly."""
        if isinstance(v, str):
            return v.rstrip("/")
        return v

    @field_validator("retries")
    @classmethod
    def validate_retries(cls, v):
        if v < 0:
            raise ValueError("retries must not be negative")
        return v

    def site(self, name: str) -> SiteConfig:
        """
        Build the configuration for a target site.

        Args:
            name: Site identifier (SITE_ACTION or SITE_STG_RIJN_IJSSEL)

        Returns:
            SiteConfig for the site

        Raises:
            ConfigurationError: If the site is unknown
        """
        if name == SITE_ACTION:
            return SiteConfig(
                name=SITE_ACTION,
                base_url=self.action_base_url,
                home_path="/nl-nl",
                requires_login=True,
                storage_state_path=self.auth_dir / f"{SITE_ACTION}.json",
                payment_processor_domain=self.resolve_processor_domain(self.action_base_url),
            )
        if name == SITE_STG_RIJN_IJSSEL:
            return SiteConfig(
                name=SITE_STG_RIJN_IJSSEL,
                base_url=self.stg_rijn_ijssel_base_url,
                home_path="/",
                requires_login=False,
                storage_state_path=self.auth_dir / f"{SITE_STG_RIJN_IJSSEL}.json",
            )
        raise ConfigurationError(f"Unknown site '{name}'")

    def resolve_processor_domain(self, base_url: str) -> str:
        """Return the payment processor domain expected after checkout."""
        if self.payment_processor_domain:
            return self.payment_processor_domain
        if "staging" in base_url:
            return STAGING_PROCESSOR_DOMAIN
        return PRODUCTION_PROCESSOR_DOMAIN

    def __repr__(self):
        """Redact sensitive fields in repr."""
        safe_dict = {}
        for key, value in self.model_dump().items():
            if any(sensitive in key.lower() for sensitive in ["password", "secret", "token"]):
                safe_dict[key] = "***REDACTED***" if value else value
            else:
                safe_dict[key] = value
        return f"Settings({safe_dict})"


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or create settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings() -> Settings:
    """Reload settings (useful for testing)."""
    global _settings
    _settings = None
    return get_settings()
