"""
Supabase adapter for the backing data store.

This module provides the SupabaseAdapter class which owns the admin
(service-role) Supabase client. The client bypasses row-level security, so
it is only ever used server-side and never refreshes or persists an auth
session.

Configuration (via settings, see core.integrations):
- SUPABASE_URL: Project URL (https://<ref>.supabase.co)
- SUPABASE_SERVICE_ROLE_KEY: Service-role key
- SUPABASE_PROBE_TABLE: Table read by the connectivity probe (default: users)

Tables written by the Stripe event handlers: users, payment_logs.

Usage:
    from datastore.adapters import get_supabase_adapter

    try:
        get_supabase_adapter().check_connection()
    except ExternalServiceError as e:
        logger.error(f"Supabase unreachable: {e.message}")
"""

from __future__ import annotations

import logging
import time
from functools import lru_cache
from typing import TYPE_CHECKING, Any, Callable

from postgrest.exceptions import APIError
from supabase import ClientOptions, create_client

from core.exceptions import ConfigurationError, ExternalServiceError
from core.integrations import IntegrationConfig, SupabaseConfig

if TYPE_CHECKING:
    from supabase import Client

USERS_TABLE = "users"
PAYMENT_LOGS_TABLE = "payment_logs"


class SupabaseAdapter:
    """
    Adapter for Supabase operations.

    The underlying client is created on first use and reused afterwards.

    Args:
        config: Supabase connection settings
        client_factory: Callable building a client from (url, key, options);
            defaults to supabase.create_client
    """

    def __init__(
        self,
        config: SupabaseConfig,
        client_factory: Callable[..., Client] = create_client,
    ):
        self.config = config
        self._client_factory = client_factory
        self._client: Client | None = None

    @classmethod
    def get_logger(cls) -> logging.Logger:
        """Get logger for this adapter."""
        return logging.getLogger(f"{cls.__module__}.{cls.__name__}")

    @property
    def client(self) -> Client:
        """
        Admin Supabase client.

        Raises:
            ConfigurationError: SUPABASE_URL or SUPABASE_SERVICE_ROLE_KEY not set
        """
        if self._client is None:
            missing = self.config.missing_settings()
            if missing:
                raise ConfigurationError(
                    f"{', '.join(missing)} is not set.",
                    details={"settings": missing},
                )
            self._client = self._client_factory(
                self.config.url,
                self.config.service_role_key,
                options=ClientOptions(
                    auto_refresh_token=False,
                    persist_session=False,
                ),
            )
        return self._client

    def check_connection(self) -> None:
        """
        Run one bounded read (limit 1) against the probe table.

        Raises:
            ConfigurationError: Connection settings missing
            ExternalServiceError: The store returned an error
                (error_code SUPABASE_QUERY_ERROR) or the client raised
                (error_code SUPABASE_CLIENT_ERROR). The message is the
                store's or the exception's own message.
        """
        self._execute(
            lambda client: client.table(self.config.probe_table)
            .select("id")
            .limit(1),
            {"operation": "check_connection", "table": self.config.probe_table},
        )
        self.get_logger().info(
            "Supabase connection check completed",
            extra={"table": self.config.probe_table},
        )

    def update_user(self, user_id: str, fields: dict[str, Any]) -> None:
        """
        Update one row of the ``users`` table.

        Args:
            user_id: Primary key of the user row
            fields: Column values to set

        Raises:
            ConfigurationError: Connection settings missing
            ExternalServiceError: The update failed
        """
        self._execute(
            lambda client: client.table(USERS_TABLE).update(fields).eq("id", user_id),
            {"operation": "update_user", "user_id": user_id},
        )

    def insert_payment_log(self, row: dict[str, Any]) -> None:
        """
        Append a row to the ``payment_logs`` table.

        Args:
            row: Column values (event_type, stripe_event_id, payload, ...)

        Raises:
            ConfigurationError: Connection settings missing
            ExternalServiceError: The insert failed
        """
        self._execute(
            lambda client: client.table(PAYMENT_LOGS_TABLE).insert(row),
            {
                "operation": "insert_payment_log",
                "event_type": row.get("event_type"),
            },
        )

    def _execute(
        self,
        build_query: Callable[[Client], Any],
        log_context: dict[str, Any],
    ) -> Any:
        """
        Build a query against the admin client and execute it.

        Raises:
            ConfigurationError: Connection settings missing
            ExternalServiceError: SUPABASE_QUERY_ERROR when the store reports
                an error, SUPABASE_CLIENT_ERROR when the client raises
        """
        client = self.client
        logger = self.get_logger()
        start_time = time.time()

        try:
            return build_query(client).execute()
        except APIError as e:
            logger.error(
                "Supabase query returned an error",
                extra={
                    **log_context,
                    "code": e.code,
                    "duration_ms": (time.time() - start_time) * 1000,
                },
            )
            raise ExternalServiceError(
                e.message or str(e),
                error_code="SUPABASE_QUERY_ERROR",
                details={"service": "supabase", "code": e.code},
            ) from e
        except Exception as e:
            logger.error(
                f"Unexpected error from Supabase: {type(e).__name__}",
                extra={
                    **log_context,
                    "duration_ms": (time.time() - start_time) * 1000,
                },
                exc_info=True,
            )
            raise ExternalServiceError(
                str(e),
                error_code="SUPABASE_CLIENT_ERROR",
                details={"service": "supabase"},
            ) from e



@lru_cache(maxsize=8)
def _adapter_for(config: SupabaseConfig) -> SupabaseAdapter:
    return SupabaseAdapter(config)


def get_supabase_adapter(config: SupabaseConfig | None = None) -> SupabaseAdapter:
    """
    Return the shared SupabaseAdapter for a configuration.

    Args:
        config: Explicit Supabase configuration (defaults to Django settings)
    """
    if config is None:
        config = IntegrationConfig.from_settings().supabase
    return _adapter_for(config)
