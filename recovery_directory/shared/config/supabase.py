# 📄 File: recovery_directory/shared/config/supabase.py
#
# 🧭 Purpose (Layman Explanation):
# Connects the directory to Supabase, the hosted service that handles logins
# and keeps facility photos and logos.
#
# 🧪 Purpose (Technical Summary):
# Lazily constructed Supabase clients: a service-role client shared for storage and
# admin auth calls, and short-lived anon clients for per-user password sign-in.
#
# 🔗 Dependencies:
# - supabase (create_client, ClientOptions)
# - recovery_directory.shared.config.settings
#
# 🔄 Connected Modules / Calls From:
# - shared.infrastructure.storage.supabase_storage
# - user_management.infrastructure.external.supabase_auth

import logging
from functools import lru_cache
from typing import Optional

from supabase import Client, ClientOptions, create_client

from .settings import get_settings

logger = logging.getLogger(__name__)


class SupabaseManager:
    """
    Supabase client manager.

    The service-role client is created once. Password sign-in mutates the
    client's session state, so auth flows get their own anon client instead.
    """

    def __init__(self):
        self._client: Optional[Client] = None
        self.settings = get_settings()

    def _options(self) -> ClientOptions:
        return ClientOptions(
            schema="public",
            headers={"User-Agent": f"RecoveryDirectory/{self.settings.APP_VERSION}"},
            auto_refresh_token=False,
            persist_session=False,
        )

    @property
    def client(self) -> Client:
        """Service-role client, created on first use."""
        if self._client is None:
            try:
                self._client = create_client(
                    self.settings.SUPABASE_URL,
                    self.settings.SUPABASE_SERVICE_ROLE_KEY,
                    options=self._options(),
                )
            except Exception as e:
                logger.error(f"Failed to initialize Supabase client: {e}")
                raise ConnectionError(f"Supabase initialization failed: {e}") from e
            logger.info("Supabase client initialized successfully")
        return self._client

    def create_anon_client(self) -> Client:
        """Fresh anon-key client for one sign-in / refresh exchange."""
        return create_client(
            self.settings.SUPABASE_URL,
            self.settings.SUPABASE_ANON_KEY,
            options=self._options(),
        )

    def get_storage_bucket(self, bucket_name: Optional[str] = None):
        """Storage file API for the configured bucket."""
        return self.client.storage.from_(bucket_name or self.settings.SUPABASE_STORAGE_BUCKET)

    def close(self):
        if self._client:
            self._client = None
            logger.info("Supabase client connections closed")


@lru_cache()
def get_supabase_manager() -> SupabaseManager:
    """
    Get cached Supabase manager instance.

    Returns:
        SupabaseManager: Singleton Supabase manager
    """
    return SupabaseManager()


async def cleanup_supabase():
    """Drop cached Supabase clients on application shutdown."""
    get_supabase_manager().close()
