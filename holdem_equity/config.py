from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import find_dotenv, load_dotenv

ENV_PREFIX = "HOLDEM_"


def _env_bool(value: Optional[str], default: bool) -> bool:
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() not in ("0", "false", "no", "off")


def _env_int(value: Optional[str], default: int) -> int:
    if value is None or value.strip() == "":
        return default
    return int(value)


@dataclass(frozen=True)
class Settings:
    cache_db: str = "equity_cache.db"
    hot_cache_size: int = 1000
    eval_cache_size: int = 200_000
    native_enabled: bool = True
    native_min_combos: int = 50_000
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @staticmethod
    def from_env(environ: Optional[Mapping[str, str]] = None, dotenv: bool = True) -> "Settings":
        """
        Read HOLDEM_* variables. A .env file in the working directory is
        loaded first unless dotenv=False or an explicit mapping is given.
        """
        if environ is None:
            if dotenv:
                load_dotenv(find_dotenv(usecwd=True))
            environ = os.environ
        get = lambda name: environ.get(ENV_PREFIX + name)
        return Settings(
            cache_db=get("CACHE_DB") or Settings.cache_db,
            hot_cache_size=_env_int(get("HOT_CACHE_SIZE"), Settings.hot_cache_size),
            eval_cache_size=_env_int(get("EVAL_CACHE_SIZE"), Settings.eval_cache_size),
            native_enabled=_env_bool(get("NATIVE"), Settings.native_enabled),
            native_min_combos=_env_int(get("NATIVE_MIN_COMBOS"), Settings.native_min_combos),
            log_level=(get("LOG_LEVEL") or Settings.log_level).upper(),
            log_file=get("LOG_FILE") or None,
        )
