from supabase import create_client, Client, ClientOptions
from app.config.settings import settings


class SupabaseClient:
    _client: Client = None

    @classmethod
    def get_client(cls) -> Client:
        if cls._client is None:
            cls._client = create_client(settings.supabase_url, settings.supabase_key)
        return cls._client

    @classmethod
    def create_session_client(cls) -> Client:
        """Throwaway client for one sign-in, so no operator session is stored on the shared client"""
        return create_client(
            settings.supabase_url,
            settings.supabase_key,
            options=ClientOptions(persist_session=False, auto_refresh_token=False),
        )


def get_supabase() -> Client:
    return SupabaseClient.get_client()


def get_session_client() -> Client:
    return SupabaseClient.create_session_client()
