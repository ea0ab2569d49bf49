import os
from functools import lru_cache

from schemas import Settings


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    return Settings(
        listen_addr=os.getenv("LISTEN_ADDR") or "localhost",
        port=int(os.getenv("PORT") or "8080"),
        google_sheet_id=os.getenv("GOOGLE_SHEET_ID", ""),
        sheet_name=os.getenv("SHEET_NAME", ""),
        cache_ttl_seconds=float(os.getenv("CACHE_TTL_SECONDS", "5")),
        provider_timeout_seconds=float(os.getenv("PROVIDER_TIMEOUT_SECONDS", "10")),
        google_sheets_api_key=os.getenv("GOOGLE_SHEETS_API_KEY") or None,
        google_token_file=os.getenv("GOOGLE_TOKEN_FILE", "token.json"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        health_path=os.getenv("HEALTH_PATH") or None,
    )
