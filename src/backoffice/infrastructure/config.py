"""Runtime settings read from the environment.

Only the composition root reads these; every other module receives
plain values.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


@dataclass(frozen=True)
class Settings:
    data_dir: Path = _DEFAULT_DATA_DIR
    log_level: str = "WARNING"
    retry_attempts: int = 3
    retry_backoff: float = 0.01

    @property
    def store_path(self) -> Path:
        return self.data_dir / "backoffice.json"

    @staticmethod
    def from_env(environ: dict[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ
        try:
            attempts = int(env.get("BACKOFFICE_RETRY_ATTEMPTS", "3"))
            backoff = float(env.get("BACKOFFICE_RETRY_BACKOFF", "0.01"))
        except ValueError as exc:
            raise ValueError(f"Invalid retry setting: {exc}") from exc
        if attempts < 1:
            raise ValueError("BACKOFFICE_RETRY_ATTEMPTS must be at least 1")
        return Settings(
            data_dir=Path(env.get("BACKOFFICE_DATA_DIR", str(_DEFAULT_DATA_DIR))),
            log_level=env.get("BACKOFFICE_LOG_LEVEL", "WARNING").upper(),
            retry_attempts=attempts,
            retry_backoff=max(backoff, 0.0),
        )
