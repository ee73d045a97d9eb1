from typing import Literal

from pydantic_settings import BaseSettings
from dotenv import load_dotenv

load_dotenv(".env.local")

class Settings(BaseSettings):
    DATABASE_URL: str
    INVOICES_PATH: str = "/dashboard/invoices"
    PAGE_SIZE: int = 6
    # Cached list snapshots kept per path (one per search query and page)
    PAGE_CACHE_MAX_VARIANTS: int = 100

    # Bounds on every datastore round trip
    DB_STATEMENT_TIMEOUT_MS: int = 5000
    DB_POOL_MIN_SIZE: int = 1
    DB_POOL_MAX_SIZE: int = 10
    DB_POOL_TIMEOUT: float = 10.0

    # "lenient" restores the old update behaviour: a bad form aborts the request
    UPDATE_VALIDATION: Literal["strict", "lenient"] = "strict"
    LOG_LEVEL: str = "INFO"

settings = Settings()
