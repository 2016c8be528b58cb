from typing import Literal

from pydantic import PositiveInt
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SOURCE_LANG = "en"
MYMEMORY_URL = "https://api.mymemory.translated.net/get"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    listen_address: str = "[::]:6565"
    default_source_lang: str = DEFAULT_SOURCE_LANG
    mymemory_base_url: str = MYMEMORY_URL
    # Unset means upstream calls are bounded only by the inbound RPC deadline
    upstream_timeout: float | None = None
    concurrency_limit: PositiveInt = 20
    shutdown_grace: float = 5.0
    translator_backend: Literal["mymemory", "mock"] = "mymemory"
    log_level: str = "INFO"


settings = Settings()
