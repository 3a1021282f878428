"""Runtime settings read from the environment."""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from churchbook.domain.user import DEFAULT_BCRYPT_ROUNDS

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    """Process-wide settings.

    Attributes:
        database_url: SQLAlchemy URL for the gateway; None means the default SQLite file
        log_level: Root log level name
        json_logs: Emit JSON log lines instead of console output
        bcrypt_rounds: bcrypt cost factor for new password hashes
    """

    database_url: Optional[str] = None
    log_level: str = "INFO"
    json_logs: bool = False
    bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from CHURCHBOOK_* environment variables.

        CHURCHBOOK_DATABASE_URL wins over CHURCHBOOK_DB_PATH; without either
        the database is ~/.churchbook/churchbook.db.

        Raises:
            ValueError: If CHURCHBOOK_BCRYPT_ROUNDS is not an integer between 4 and 31
        """
        env = os.environ if environ is None else environ

        database_url = env.get("CHURCHBOOK_DATABASE_URL")
        if not database_url:
            db_path = env.get("CHURCHBOOK_DB_PATH")
            database_url = f"sqlite:///{db_path}" if db_path else None

        rounds_raw = env.get("CHURCHBOOK_BCRYPT_ROUNDS")
        bcrypt_rounds = DEFAULT_BCRYPT_ROUNDS
        if rounds_raw:
            try:
                bcrypt_rounds = int(rounds_raw)
            except ValueError:
                raise ValueError(f"CHURCHBOOK_BCRYPT_ROUNDS must be an integer, got '{rounds_raw}'")
            if not 4 <= bcrypt_rounds <= 31:
                raise ValueError("CHURCHBOOK_BCRYPT_ROUNDS must be between 4 and 31")

        return cls(
            database_url=database_url,
            log_level=env.get("CHURCHBOOK_LOG_LEVEL", "INFO").upper(),
            json_logs=env.get("CHURCHBOOK_LOG_JSON", "").strip().lower() in _TRUE_VALUES,
            bcrypt_rounds=bcrypt_rounds,
        )
