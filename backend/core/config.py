import os
from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


class Settings:
    """Runtime settings read from the environment (and `.env`).

    Any attribute can be overridden by keyword, which is how tests point the
    app at a throwaway database.
    """

    def __init__(self, **overrides):
        self.database_url: str = os.getenv(
            "DATABASE_URL",
            "sqlite+aiosqlite:///./sweetshop.db"
        )
        self.database_echo: bool = _env_bool("DATABASE_ECHO", "False")

        # Claim signing
        self.jwt_secret: str = os.getenv("JWT_SECRET", "change-me-in-production")
        self.jwt_lifetime_seconds: int = int(os.getenv("JWT_LIFETIME_SECONDS", str(7 * 24 * 60 * 60)))

        self.cors_origins: list[str] = [
            o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()
        ]
        self.seed_on_startup: bool = _env_bool("SEED_ON_STARTUP", "True")
        self.log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()

        self.host: str = os.getenv("HOST", "0.0.0.0")
        self.port: int = int(os.getenv("PORT", "5000"))

        for key, value in overrides.items():
            if not hasattr(self, key):
                raise TypeError(f"Unknown setting: {key}")
            setattr(self, key, value)
