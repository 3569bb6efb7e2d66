"""Identity provider infrastructure package."""

from .supabase_auth_client import SupabaseAuthClient

__all__ = ["SupabaseAuthClient"]
