from __future__ import annotations

import math
import os
from dataclasses import dataclass

from sdtw_barycenter.constants import DEFAULT_GAMMA, DEFAULT_REFINE_MAX_ITER, DEFAULT_REFINE_TOL


def _env_int(key: str, default: int) -> int:
    raw = os.getenv(key)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(key: str, default: float) -> float:
    raw = os.getenv(key)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_bool(key: str, default: bool) -> bool:
    raw = os.getenv(key)
    if raw is None:
        return default
    val = raw.strip().lower()
    if val in {"1", "true", "yes", "on"}:
        return True
    if val in {"0", "false", "no", "off"}:
        return False
    return default


def _env_str(key: str, default: str) -> str:
    raw = os.getenv(key)
    if raw is None:
        return default
    return raw


@dataclass(frozen=True)
class Settings:
    default_gamma: float = DEFAULT_GAMMA
    check_finite: bool = False
    refine_max_iter: int = DEFAULT_REFINE_MAX_ITER
    refine_tol: float = DEFAULT_REFINE_TOL
    log_level: str = "INFO"
    log_json: bool = True

    def __post_init__(self) -> None:
        errors: list[str] = []
        if not math.isfinite(self.default_gamma) or self.default_gamma <= 0:
            errors.append(f"default_gamma must be a finite value > 0, got {self.default_gamma}")
        if self.refine_max_iter < 1:
            errors.append(f"refine_max_iter must be >= 1, got {self.refine_max_iter}")
        if self.refine_tol <= 0:
            errors.append(f"refine_tol must be > 0, got {self.refine_tol}")
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if self.log_level not in valid_levels:
            errors.append(f"log_level must be one of {sorted(valid_levels)}, got {self.log_level!r}")
        if errors:
            raise ValueError("Settings validation failed:\n  - " + "\n  - ".join(errors))

    @staticmethod
    def from_env() -> "Settings":
        return Settings(
            default_gamma=_env_float("SDTW_DEFAULT_GAMMA", DEFAULT_GAMMA),
            check_finite=_env_bool("SDTW_CHECK_FINITE", False),
            refine_max_iter=_env_int("SDTW_REFINE_MAX_ITER", DEFAULT_REFINE_MAX_ITER),
            refine_tol=_env_float("SDTW_REFINE_TOL", DEFAULT_REFINE_TOL),
            log_level=_env_str("SDTW_LOG_LEVEL", "INFO").strip().upper() or "INFO",
            log_json=_env_bool("SDTW_LOG_JSON", True),
        )


def get_settings() -> Settings:
    return Settings.from_env()
