"""Paths, constants, and config.json resolution."""

import json
import os
from pathlib import Path

# ─────────────────────────────────────────────────────
# Home directory — config, cache and logs live here
# ─────────────────────────────────────────────────────
HOME_DIR = Path(os.environ.get("NEWSBOARD_HOME", Path.home() / ".newsboard"))
CACHE_DIR = HOME_DIR / "cache"
LOGS_DIR = HOME_DIR / "logs"
CONFIG_FILE = HOME_DIR / "config.json"

# ─────────────────────────────────────────────────────
# Cache + refresh timing
# ─────────────────────────────────────────────────────
CACHE_DURATION_MS = 30 * 60 * 1000
CACHE_KEY_PREFIX = "newsboard_news_"
AUTO_REFRESH_INTERVAL = 5 * 60  # seconds

# ─────────────────────────────────────────────────────
# Fetching
# ─────────────────────────────────────────────────────
REQUEST_TIMEOUT = 10.0  # seconds, per outbound request
MAX_WORKERS = 8
USER_AGENT = "newsboard/1.0 (+https://github.com/newsboard)"

# ─────────────────────────────────────────────────────
# Normalization limits
# ─────────────────────────────────────────────────────
DESCRIPTION_LIMIT = 100
FEED_CAP = 20
POLL_CAP = 15


# ─────────────────────────────────────────────────────
# Utilities
# ─────────────────────────────────────────────────────
def write_private_file(path: Path, content: str):
    """Write a file with 0600 permissions (owner read/write only).

    Uses os.open() with explicit mode to avoid a TOCTOU race where the file
    briefly exists with default (world-readable) permissions.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd = os.open(str(path), os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(fd, "w") as f:
        f.write(content)


# ─────────────────────────────────────────────────────
# config.json
# ─────────────────────────────────────────────────────
def load_config() -> dict:
    """Load the full config.json, including per-source overrides."""
    if CONFIG_FILE.exists():
        try:
            cfg = json.loads(CONFIG_FILE.read_text())
            if isinstance(cfg, dict):
                return cfg
        except Exception:
            pass
    return {}


def save_config(config: dict):
    """Save config.json with restricted permissions."""
    HOME_DIR.mkdir(parents=True, exist_ok=True)
    write_private_file(CONFIG_FILE, json.dumps(config, indent=2))


def _positive(config: dict, key: str, default: float) -> float:
    val = config.get(key)
    if isinstance(val, bool) or not isinstance(val, (int, float)) or val <= 0:
        return default
    return val


def get_cache_duration_ms(config: dict | None = None) -> int:
    config = load_config() if config is None else config
    minutes = _positive(config, "cache_minutes", CACHE_DURATION_MS / 60_000)
    return int(minutes * 60_000)


def get_refresh_interval(config: dict | None = None) -> float:
    """Auto-refresh interval in seconds."""
    config = load_config() if config is None else config
    minutes = _positive(config, "refresh_minutes", AUTO_REFRESH_INTERVAL / 60)
    return minutes * 60


def get_request_timeout(config: dict | None = None) -> float:
    config = load_config() if config is None else config
    return float(_positive(config, "request_timeout", REQUEST_TIMEOUT))


def get_source_overrides(config: dict | None = None) -> dict:
    """Per-source overrides from the `sources` section, e.g. {"weibo": {"enabled": false}}."""
    config = load_config() if config is None else config
    overrides = config.get("sources", {})
    return overrides if isinstance(overrides, dict) else {}
