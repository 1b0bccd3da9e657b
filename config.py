from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional
import os


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the decision helper.

    Built once at startup by ``load_settings`` and handed to the parts that
    need it; nothing else reads the environment.
    """

    data_dir: Path = Path("data")
    host: str = "127.0.0.1"
    port: int = 8080
    log_level: str = "INFO"


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    env = os.environ if environ is None else environ
    return Settings(
        data_dir=Path(env.get("DECISION_DATA_DIR", "data")),
        host=env.get("HOST", "127.0.0.1"),
        port=int(env.get("PORT", "8080")),
        log_level=env.get("LOG_LEVEL", "INFO").upper(),
    )
