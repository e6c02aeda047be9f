"""
Explicit configuration objects for third-party integrations.

Every handler reads its credentials through these dataclasses instead of
looking at the process environment ad hoc. Views build them from Django
settings at call time with IntegrationConfig.from_settings(); tests can
either construct them directly or use pytest-django's ``settings`` fixture.

Recognized options:
    - Supabase: SUPABASE_URL, SUPABASE_SERVICE_ROLE_KEY, SUPABASE_PROBE_TABLE
    - Stripe: STRIPE_SECRET_KEY, STRIPE_API_VERSION, STRIPE_API_TIMEOUT_SECONDS,
      STRIPE_WEBHOOK_SECRET
    - Zapier: ZAPIER_WEBHOOK_SECRET, ZAPIER_WEBHOOK_URL, ZAPIER_TIMEOUT_SECONDS
    - Application: SITE_URL

Usage:
    from core.integrations import IntegrationConfig

    config = IntegrationConfig.from_settings()
    if not config.is_available("stripe"):
        ...

    errors = config.validate()
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from django.conf import settings as django_settings

if TYPE_CHECKING:
    from typing import Any

DEFAULT_STRIPE_API_VERSION = "2024-04-10"


class _RequiredFieldsMixin:
    """Report which required options of an integration are empty."""

    # Maps dataclass field name -> environment variable name
    required_fields: ClassVar[dict[str, str]] = {}

    def missing_settings(self) -> list[str]:
        return [
            env_name
            for field_name, env_name in self.required_fields.items()
            if not getattr(self, field_name)
        ]

    @property
    def is_configured(self) -> bool:
        return not self.missing_settings()


@dataclass(frozen=True)
class SupabaseConfig(_RequiredFieldsMixin):
    """Supabase admin connection settings."""

    url: str = ""
    service_role_key: str = ""
    probe_table: str = "users"

    required_fields: ClassVar[dict[str, str]] = {
        "url": "SUPABASE_URL",
        "service_role_key": "SUPABASE_SERVICE_ROLE_KEY",
    }


@dataclass(frozen=True)
class StripeConfig(_RequiredFieldsMixin):
    """Stripe client settings (API key, pinned API version, timeout, webhook secret)."""

    secret_key: str = ""
    api_version: str = DEFAULT_STRIPE_API_VERSION
    timeout_seconds: int = 10
    webhook_secret: str = ""

    required_fields: ClassVar[dict[str, str]] = {
        "secret_key": "STRIPE_SECRET_KEY",
    }


@dataclass(frozen=True)
class ZapierConfig(_RequiredFieldsMixin):
    """Zapier shared secret (inbound) and catch-hook URL (outbound)."""

    webhook_secret: str = ""
    webhook_url: str = ""
    timeout_seconds: int = 10

    required_fields: ClassVar[dict[str, str]] = {
        "webhook_secret": "ZAPIER_WEBHOOK_SECRET",
        "webhook_url": "ZAPIER_WEBHOOK_URL",
    }


@dataclass(frozen=True)
class IntegrationConfig:
    """
    All integration settings the service recognizes.

    Attributes:
        supabase: Supabase admin connection settings
        stripe: Stripe client settings
        zapier: Zapier webhook settings
        site_url: Public base URL of the web application (no trailing slash)
    """

    supabase: SupabaseConfig
    stripe: StripeConfig
    zapier: ZapierConfig
    site_url: str = ""

    INTEGRATIONS: ClassVar[tuple[str, ...]] = ("supabase", "stripe", "zapier")

    @classmethod
    def from_settings(cls, source: Any = None) -> IntegrationConfig:
        """
        Build the configuration from Django settings.

        Args:
            source: Settings object to read from (defaults to django.conf.settings)

        Returns:
            IntegrationConfig populated from the settings, missing options empty
        """
        source = source if source is not None else django_settings

        def read(name: str, default: Any = "") -> Any:
            value = getattr(source, name, default)
            return default if value is None else value

        return cls(
            supabase=SupabaseConfig(
                url=read("SUPABASE_URL"),
                service_role_key=read("SUPABASE_SERVICE_ROLE_KEY"),
                probe_table=read("SUPABASE_PROBE_TABLE", "users") or "users",
            ),
            stripe=StripeConfig(
                secret_key=read("STRIPE_SECRET_KEY"),
                api_version=read("STRIPE_API_VERSION", DEFAULT_STRIPE_API_VERSION)
                or DEFAULT_STRIPE_API_VERSION,
                timeout_seconds=int(read("STRIPE_API_TIMEOUT_SECONDS", 10)),
                webhook_secret=read("STRIPE_WEBHOOK_SECRET"),
            ),
            zapier=ZapierConfig(
                webhook_secret=read("ZAPIER_WEBHOOK_SECRET"),
                webhook_url=read("ZAPIER_WEBHOOK_URL"),
                timeout_seconds=int(read("ZAPIER_TIMEOUT_SECONDS", 10)),
            ),
            site_url=str(read("SITE_URL")).rstrip("/"),
        )

    def is_available(self, integration: str) -> bool:
        """
        Check whether every required option of an integration is set.

        Args:
            integration: One of "supabase", "stripe", "zapier"

        Raises:
            ValueError: Unknown integration name
        """
        if integration not in self.INTEGRATIONS:
            raise ValueError(f"Unknown integration: {integration}")
        return getattr(self, integration).is_configured

    def availability(self) -> dict[str, bool]:
        """Return {integration_name: available} for every integration."""
        return {name: self.is_available(name) for name in self.INTEGRATIONS}

    def validate(self) -> list[str]:
        """
        Validate the whole configuration.

        Missing values are reported once each; format rules only apply to
        values that are present.

        Returns:
            List of human-readable errors (empty when valid)
        """
        errors: list[str] = []

        for name in self.INTEGRATIONS:
            for env_name in getattr(self, name).missing_settings():
                errors.append(f"Missing required environment variable: {env_name}")
        if not self.site_url:
            errors.append("Missing required environment variable: SITE_URL")

        if self.supabase.url and not self.supabase.url.startswith("https://"):
            errors.append("SUPABASE_URL must be a valid HTTPS URL")
        if self.site_url and not self.site_url.startswith("http"):
            errors.append("SITE_URL must be a valid HTTP/HTTPS URL")
        if self.zapier.webhook_url and not self.zapier.webhook_url.startswith(
            "https://"
        ):
            errors.append("ZAPIER_WEBHOOK_URL must be a valid HTTPS URL")
        if self.stripe.secret_key and not self.stripe.secret_key.startswith("sk_"):
            errors.append(
                "STRIPE_SECRET_KEY must be a valid Stripe secret key (starts with sk_)"
            )

        return errors
