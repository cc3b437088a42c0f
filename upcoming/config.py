"""Configuration — credential paths, OAuth scope, and tunable settings."""

from __future__ import annotations

import os
import re
from datetime import timedelta
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

load_dotenv()

PROJECT_ROOT = Path(__file__).resolve().parent.parent

# Read-only access is all the listing needs
SCOPES = ["https://www.googleapis.com/auth/calendar.readonly"]

# credentials.json (OAuth client secrets) and token.json (cached user token)
CREDENTIALS_DIR = Path(os.environ.get("UPCOMING_CREDENTIALS_DIR") or PROJECT_ROOT)
CREDENTIALS_FILE = CREDENTIALS_DIR / "credentials.json"
TOKEN_FILE = CREDENTIALS_DIR / "token.json"

SETTINGS_PATH = Path(
    os.environ.get("UPCOMING_SETTINGS")
    or Path(__file__).resolve().parent / "settings.yaml"
)

LOG_LEVEL = os.environ.get("LOG_LEVEL")

NO_EVENTS_MESSAGE = "No upcoming events found."

DEFAULTS: Dict[str, Any] = {
    "calendar_id": "primary",
    "lookahead": "168h",
    "max_results": 100,
    "summary_width": 40,
    "separator": "----------------------",
    "skip_colored": True,
}

# "1h30m", "168h", "2d", "90s" — units must appear largest first
_DURATION_PATTERN = re.compile(
    r'^(?:(?P<days>\d+(?:\.\d+)?)d)?'
    r'(?:(?P<hours>\d+(?:\.\d+)?)h)?'
    r'(?:(?P<minutes>\d+(?:\.\d+)?)m)?'
    r'(?:(?P<seconds>\d+(?:\.\d+)?)s)?$'
)


def load_settings(path: Optional[Path] = None) -> Dict[str, Any]:
    """Load settings.yaml layered over DEFAULTS.

    A missing file yields the defaults; malformed YAML or a file that is
    not a mapping is a ValueError.
    """
    path = Path(path) if path else SETTINGS_PATH
    settings = dict(DEFAULTS)
    if not path.exists():
        return settings

    with open(path) as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"{path}: invalid YAML: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping of settings, got {type(data).__name__}")

    settings.update(data)
    return settings


def parse_duration(text: str) -> timedelta:
    """Parse a duration such as ``168h`` or ``1h30m`` into a timedelta."""
    text = str(text).strip().lower() if text else ""
    match = _DURATION_PATTERN.match(text)
    if not text or not match:
        raise ValueError(f"invalid duration {text!r} (expected e.g. 168h, 2d, 1h30m)")

    parts = {unit: float(value) for unit, value in match.groupdict().items() if value}
    try:
        return timedelta(**parts)
    except OverflowError:
        raise ValueError(f"duration {text!r} is too large") from None
