from __future__ import annotations

import os
import time
from dataclasses import dataclass
from typing import Literal

AppEnv = Literal["dev", "test", "prod"]
LogLevel = Literal["debug", "info", "warning", "error"]

DEFAULT_CONTRACT_OWNER = "ST1PQHQKV0RJXZFY1DGX8MNSNYVE3VGZJSRTPGZGM"


def _getenv(name: str, default: str) -> str:
    return os.environ.get(name, default).strip()


def _getenv_int(name: str, default: str) -> int:
    raw = _getenv(name, default)
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer (got {raw!r})") from None


@dataclass(frozen=True)
class Settings:
    app_env: AppEnv
    log_level: LogLevel
    log_json: bool
    port: int
    contract_owner: str
    genesis_block_height: int
    genesis_block_time: int
    block_interval_seconds: int

    @property
    def is_dev(self) -> bool:
        return self.app_env == "dev"

    @property
    def is_test(self) -> bool:
        return self.app_env == "test"

    @property
    def is_prod(self) -> bool:
        return self.app_env == "prod"

    @property
    def revocation_registry_principal(self) -> str:
        """Contract principal of the revocation registry, fixed at deploy time."""
        return f"{self.contract_owner}.revocation-registry"


def load_settings() -> Settings:
    app_env_raw = _getenv("APP_ENV", "dev").lower()
    log_level_raw = _getenv("LOG_LEVEL", "info").lower()
    log_json_raw = _getenv("LOG_JSON", "false").lower()

    if app_env_raw not in ("dev", "test", "prod"):
        raise ValueError(f"APP_ENV must be dev|test|prod (got {app_env_raw!r})")

    if log_level_raw not in ("debug", "info", "warning", "error"):
        raise ValueError(
            f"LOG_LEVEL must be debug|info|warning|error (got {log_level_raw!r})"
        )

    if log_json_raw not in ("true", "false", "1", "0"):
        raise ValueError(f"LOG_JSON must be true|false (got {log_json_raw!r})")

    port = _getenv_int("PORT", "8000")

    contract_owner = _getenv("CONTRACT_OWNER", DEFAULT_CONTRACT_OWNER)
    if not contract_owner:
        raise ValueError("CONTRACT_OWNER must be non-empty")

    genesis_block_height = _getenv_int("GENESIS_BLOCK_HEIGHT", "0")
    # Unset genesis time starts the chain at the wall clock.
    genesis_block_time = _getenv_int("GENESIS_BLOCK_TIME", str(int(time.time())))
    block_interval_seconds = _getenv_int("BLOCK_INTERVAL_SECONDS", "600")

    if genesis_block_height < 0 or genesis_block_time < 0:
        raise ValueError("GENESIS_BLOCK_HEIGHT and GENESIS_BLOCK_TIME must be >= 0")
    if block_interval_seconds <= 0:
        raise ValueError(
            f"BLOCK_INTERVAL_SECONDS must be positive (got {block_interval_seconds})"
        )

    return Settings(  # type: ignore[arg-type]
        app_env=app_env_raw,
        log_level=log_level_raw,
        log_json=log_json_raw in ("true", "1"),
        port=port,
        contract_owner=contract_owner,
        genesis_block_height=genesis_block_height,
        genesis_block_time=genesis_block_time,
        block_interval_seconds=block_interval_seconds,
    )


SETTINGS = load_settings()
