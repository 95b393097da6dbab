import os
from dataclasses import dataclass
from datetime import timedelta

from dotenv import load_dotenv

# Load the appropriate .env file on module import
env = os.environ.get("PAYSTORE_ENV", "development").lower()
env_file = f".env.{env}"
if os.path.exists(env_file):
    load_dotenv(env_file)
else:
    # Fall back to the default .env file
    load_dotenv()


def _flag(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Config:
    environment: str
    database_url: str
    db_pool_min_size: int
    db_pool_max_size: int
    vault_url: str
    vault_timeout: float
    session_ttl: timedelta
    log_level: str
    log_json: bool

    @classmethod
    def from_env(cls) -> "Config":
        return cls(
            environment=env,
            database_url=os.environ.get(
                "DATABASE_URL", "postgresql://localhost:5432/paystore"
            ),
            db_pool_min_size=int(os.environ.get("DB_POOL_MIN_SIZE", "1")),
            db_pool_max_size=int(os.environ.get("DB_POOL_MAX_SIZE", "10")),
            vault_url=os.environ.get("VAULT_URL", "http://localhost:8200"),
            vault_timeout=float(os.environ.get("VAULT_TIMEOUT", "10")),
            session_ttl=timedelta(
                seconds=int(os.environ.get("SESSION_TTL_SECONDS", "900"))
            ),
            log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
            log_json=_flag(os.environ.get("LOG_JSON", "false")),
        )


config = Config.from_env()
