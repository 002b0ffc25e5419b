"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process
    - checkout_enabled is only False for the literal "false" (any case)
    - auto_free_promo_code defaults to FREE100 for sandbox (sk_test_) keys only

Design Decisions:
    - Missing stripe_secret_key does not fail startup: the checkout endpoint
      answers 500 instead, so health and catalog routes keep working
"""

from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


SANDBOX_KEY_PREFIX = "sk_test_"
SANDBOX_FREE_PROMO_CODE = "FREE100"


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Stripe
    stripe_secret_key: str | None = None
    stripe_price_ids: dict[str, str] = {}

    # Checkout
    domain: str | None = None
    checkout_enabled: bool = True
    auto_free_promo_code: str | None = None

    @field_validator("checkout_enabled", mode="before")
    @classmethod
    def parse_kill_switch(cls, v: object) -> bool:
        """Anything but "false" keeps checkout on."""
        if isinstance(v, bool):
            return v
        return str(v if v is not None else "true").strip().lower() != "false"

    @field_validator("stripe_secret_key", "domain", "auto_free_promo_code", mode="before")
    @classmethod
    def blank_to_none(cls, v: object) -> object:
        if isinstance(v, str) and not v.strip():
            return None
        return v.strip() if isinstance(v, str) else v

    @model_validator(mode="after")
    def default_sandbox_promo(self) -> "Settings":
        if (
            self.auto_free_promo_code is None
            and self.stripe_secret_key
            and self.stripe_secret_key.startswith(SANDBOX_KEY_PREFIX)
        ):
            self.auto_free_promo_code = SANDBOX_FREE_PROMO_CODE
        return self

    # API
    cors_origins: list[str] = ["http://localhost:4242"]
    port: int = 4242

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
