"""Process-wide configuration, read once from the environment at import."""

from __future__ import annotations

import os


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


# Side length of the square board
BOARD_SIZE: int = _env_int("RENJUAI_BOARD_SIZE", 15)

# Search defaults used by the agents and the UI.
# DEFAULT_DEPTH = -1 selects time-budgeted iterative deepening.
DEFAULT_DEPTH: int = _env_int("RENJUAI_DEPTH", -1)
DEFAULT_TIME_LIMIT_MS: int = _env_int("RENJUAI_TIME_LIMIT_MS", 1000)

LOG_LEVEL: str = os.environ.get("RENJUAI_LOG_LEVEL", "INFO").upper()

if BOARD_SIZE < 5:
    raise ValueError(f"RENJUAI_BOARD_SIZE must be at least 5, got {BOARD_SIZE}")
