from supabase import create_client, Client
from pos_backend.config.settings import settings


class SupabaseClient:
    """Supabase client used only as the identity provider (Supabase Auth)."""

    _client: Client = None

    @classmethod
    def get_client(cls) -> Client:
        if cls._client is None:
            cls._client = create_client(settings.supabase_url, settings.supabase_key)
        return cls._client

    @classmethod
    def reset_client(cls):
        cls._client = None


def get_supabase() -> Client:
    return SupabaseClient.get_client()
