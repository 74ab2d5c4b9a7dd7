from functools import lru_cache

from supabase import create_client, Client

from ats_analytics import config


@lru_cache(maxsize=1)
def get_supabase_client() -> Client:
  """Return the process-wide Supabase client built from the environment."""
  if not config.SUPABASE_URL or not config.SUPABASE_KEY:
    raise ValueError("SUPABASE_URL and SUPABASE_KEY must be set")

  return create_client(config.SUPABASE_URL, config.SUPABASE_KEY)
