from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List


class Settings(BaseSettings):
    # Supabase (identity provider)
    supabase_url: str = ""
    supabase_key: str = ""

    # Tenancy store; points at the Supabase Postgres instance in deployment
    database_url: str = "sqlite:///./pos_backend.db"
    database_echo: bool = False

    # Provisioning defaults
    default_org_name: str = "My Organisation"
    default_branch_name: str = "Main Branch"
    default_plan_id: str = "free"
    provisioning_max_attempts: int = 3

    auth_cache_ttl_seconds: int = 60

    # Upper bound for list endpoint page size
    max_page_size: int = 500

    # App
    app_name: str = "pos-backend"
    debug: bool = False
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    cors_origins: str = "http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000,http://127.0.0.1:5173"
    rate_limit: str = "100/minute"  # slowapi format, e.g. "100/minute"
    auth_rate_limit: str = "20/minute"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def get_cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",  # No prefix needed
        extra="ignore"
    )


settings = Settings()
