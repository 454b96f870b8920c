from __future__ import annotations

import os
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel, Field


class Settings(BaseModel):
    # Ciphertext grouping
    group_size: int = Field(default=5, ge=1, le=64)
    groups_per_line: int = Field(default=12, ge=1, le=64)

    # Roundtrip evaluation
    roundtrip_vectors: int = Field(default=200, ge=1)
    message_length: int = Field(default=48, ge=1)

    # Reproducibility
    global_seed: int = Field(default=1337)

    # Logging
    log_level: str = Field(default="INFO")

    # Paths
    project_root: str = Field(default=os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir)))
    runs_dir: str = Field(default="runs")


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    # Load .env if present
    load_dotenv()

    return Settings(
        group_size=int(os.getenv("CIPHER_GROUP_SIZE", "5")),
        groups_per_line=int(os.getenv("CIPHER_LINE_GROUPS", "12")),
        roundtrip_vectors=int(os.getenv("ROUNDTRIP_VECTORS", "200")),
        message_length=int(os.getenv("ROUNDTRIP_MESSAGE_LENGTH", "48")),
        global_seed=int(os.getenv("GLOBAL_SEED", "1337")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        runs_dir=os.getenv("RUNS_DIR", "runs"),
    )
