"""Runtime settings, read once from the environment."""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

_TRUTHY = {"1", "true", "yes", "on"}


def _int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Invalid %s=%r, using %d", name, raw, default)
        return default


def _float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Invalid %s=%r, using %s", name, raw, default)
        return default
    if value <= 0:
        logger.warning("%s must be positive, using %s", name, default)
        return default
    return value


def _flag(env: Mapping[str, str], name: str) -> bool:
    return (env.get(name) or "").strip().lower() in _TRUTHY


@dataclass(frozen=True)
class Settings:
    """Server settings.

    Attributes:
        host: bind address for ``python app.py``.
        port: listening port (``PORT``, default 3000).
        loglevel: logging level name (``LOGLEVEL``).
        heartbeat_seconds: Socket.IO ping interval for connected clients.
        strict_votes: reject vote deltas other than +1/-1 instead of
            counting them as -1.
        seed_demo: preload the demo questions at startup.
    """
    host: str = "127.0.0.1"
    port: int = 3000
    loglevel: str = "DEBUG"
    heartbeat_seconds: float = 15.0
    strict_votes: bool = False
    seed_demo: bool = False

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if env is None else env
        return cls(
            host=env.get("HOST") or cls.host,
            port=_int(env, "PORT", cls.port),
            loglevel=(env.get("LOGLEVEL") or cls.loglevel).upper(),
            heartbeat_seconds=_float(env, "HEARTBEAT_SECONDS", cls.heartbeat_seconds),
            strict_votes=_flag(env, "STRICT_VOTES"),
            seed_demo=_flag(env, "SEED_DEMO"),
        )
