from teatro.stores.interfaces import Backend, IdentityProvider, TheaterStore
from teatro.stores.supabase_client import SupabaseClient
from teatro.stores.supabase_store import SupabaseBackend, SupabaseIdentity, SupabaseStore

__all__ = [
    "Backend",
    "IdentityProvider",
    "SupabaseBackend",
    "SupabaseClient",
    "SupabaseIdentity",
    "SupabaseStore",
    "TheaterStore",
]
