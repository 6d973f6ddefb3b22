from supabase import create_client, Client, ClientOptions
from storefront.config.settings import settings


class SupabaseClient:
    """Process-wide Supabase clients for table queries and admin calls.
    No sign-in ever happens on these, so their headers never carry a user's JWT."""
    _client: Client = None
    _service_client: Client = None

    @staticmethod
    def _check_configured():
        if not settings.supabase_url or not settings.supabase_key:
            raise RuntimeError("SUPABASE_URL and SUPABASE_KEY must be configured")

    @classmethod
    def get_client(cls) -> Client:
        if cls._client is None:
            cls._check_configured()
            cls._client = create_client(settings.supabase_url, settings.supabase_key)
        return cls._client

    @classmethod
    def get_service_client(cls) -> Client:
        """Client with service_role key; bypasses RLS. Used by maintenance scripts and admin auth calls."""
        if cls._service_client is None and settings.supabase_service_role_key:
            cls._check_configured()
            cls._service_client = create_client(
                settings.supabase_url, settings.supabase_service_role_key
            )
        return cls._service_client or cls.get_client()


def create_auth_client() -> Client:
    """Fresh client for sign-up / sign-in / token checks.

    Signing in stores the session on the client and rewrites its Authorization
    header, so these calls never run on the shared client.
    """
    SupabaseClient._check_configured()
    return create_client(
        settings.supabase_url,
        settings.supabase_key,
        options=ClientOptions(persist_session=False, auto_refresh_token=False),
    )


def get_supabase() -> Client:
    return SupabaseClient.get_client()


def get_auth_client() -> Client:
    return create_auth_client()


def get_service_supabase() -> Client:
    return SupabaseClient.get_service_client()
