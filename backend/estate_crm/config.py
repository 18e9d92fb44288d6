"""
Runtime configuration for the estate CRM.

Settings are read from the process environment. The store backend and its
credentials are resolved once at startup; missing credentials abort startup.
"""
import logging
import os
from dataclasses import dataclass, field
from typing import List, Optional


SUPPORTED_BACKENDS = ("supabase", "sql", "memory")


class ConfigurationError(RuntimeError):
    """Raised when the environment does not describe a usable store."""


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    """Application settings resolved from environment variables."""
    store_backend: str = "supabase"
    supabase_url: Optional[str] = None
    supabase_key: Optional[str] = None
    database_url: Optional[str] = None
    sql_echo: bool = False
    auto_seed: bool = True
    allowed_origins: List[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            store_backend=os.getenv("STORE_BACKEND", "supabase").strip().lower(),
            supabase_url=os.getenv("SUPABASE_URL") or None,
            supabase_key=os.getenv("SUPABASE_KEY") or None,
            database_url=os.getenv("DATABASE_URL") or None,
            sql_echo=_env_flag("SQL_ECHO", "false"),
            auto_seed=_env_flag("AUTO_SEED", "true"),
            allowed_origins=[o.strip() for o in os.getenv("ALLOWED_ORIGINS", "*").split(",") if o.strip()],
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def validate_logging(self) -> None:
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ConfigurationError(f"Unknown LOG_LEVEL '{self.log_level}'")

    def validate(self) -> None:
        """
        Check that the selected backend has everything it needs.

        Raises:
            ConfigurationError: unknown log level, unknown backend or missing credentials
        """
        self.validate_logging()
        if self.store_backend not in SUPPORTED_BACKENDS:
            raise ConfigurationError(
                f"Unknown STORE_BACKEND '{self.store_backend}'. "
                f"Expected one of: {', '.join(SUPPORTED_BACKENDS)}"
            )
        if self.store_backend == "supabase" and not (self.supabase_url and self.supabase_key):
            raise ConfigurationError(
                "Supabase credentials are not configured. Set SUPABASE_URL and SUPABASE_KEY."
            )
        if self.store_backend == "sql" and not self.database_url:
            raise ConfigurationError("DATABASE_URL must be set when STORE_BACKEND=sql.")
