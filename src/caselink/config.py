"""Application configuration via environment variables."""

from pydantic_settings import BaseSettings

APP_VERSION = "1.0.0"


class Settings(BaseSettings):
    # Database (in-memory by default: wiped on restart)
    database_url: str = "sqlite+aiosqlite:///:memory:"

    # Seed the demo tenant on startup when the database is empty
    seed_demo_data: bool = True

    # Routing
    api_prefix: str = "/api"

    # CORS
    cors_allowed_origins: list[str] = ["http://localhost:3000", "http://localhost:5173"]

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "info"
    json_logs: bool = False

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "CASELINK_",
    }

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


settings = Settings()
