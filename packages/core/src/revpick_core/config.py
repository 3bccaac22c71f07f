from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from revpick_core.errors import ConfigError

SELECTION_MODES = ("random", "balanced")
PARTICIPATION_CHECKS = ("reviewers", "comments")

DEFAULT_CONFIG: dict = {
    "reviewers": [],  # candidate pool; required
    "always_add": [],
    "min_reviewers": 2,
    "add_top_contributor": True,
    "selection_mode": "random",
    "balanced_lookback": 10,
    "participation_checks": list(PARTICIPATION_CHECKS),
}


@dataclass
class SelectionInputs:
    """Normalized reviewer selection settings consumed by the engine."""

    reviewer_list: list[str]
    always_add: list[str] = field(default_factory=list)
    min_reviewers: int = 2
    add_top_contributor: bool = True
    selection_mode: str = "random"
    balanced_lookback: int = 10
    participation_checks: list[str] = field(default_factory=lambda: list(PARTICIPATION_CHECKS))


def load_config(config_path: str = ".revpick.yml", cli_overrides: Optional[dict] = None) -> dict:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. .revpick.yml in the current directory
      3. CLI argument overrides
    """
    config = {
        **DEFAULT_CONFIG,
        "reviewers": list(DEFAULT_CONFIG["reviewers"]),
        "always_add": list(DEFAULT_CONFIG["always_add"]),
        "participation_checks": list(DEFAULT_CONFIG["participation_checks"]),
    }

    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            file_config = yaml.safe_load(f) or {}
        config.update(file_config)

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value

    return config


def _split_list(value) -> list[str]:
    """Accept a YAML list or a comma-separated string; trim and drop blanks."""
    if value is None or isinstance(value, (bool, dict)):
        return []
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, (list, tuple, set)):
        items = list(value)
    else:
        items = [value]
    result: list[str] = []
    for item in items:
        text = str(item).strip()
        if text and text not in result:
            result.append(text)
    return result


def _parse_int(value, default: int, minimum: int = 0) -> int:
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        return default
    if number < minimum:
        return default
    return number


def _parse_bool(value, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return default
    return str(value).strip().lower() == "true"


def parse_participation_checks(value) -> list[str]:
    """Keep only known checks; fall back to both when nothing valid remains."""
    checks = [c for c in _split_list(value) if c in PARTICIPATION_CHECKS]
    return checks or list(PARTICIPATION_CHECKS)


def parse_selection_inputs(config: dict) -> SelectionInputs:
    """Build SelectionInputs from a merged config dict.

    Malformed optional values are replaced by their defaults. Only the
    reviewer pool is mandatory.
    """
    reviewer_list = _split_list(config.get("reviewers"))
    if not reviewer_list:
        raise ConfigError("No reviewers configured. Set 'reviewers' in .revpick.yml or pass --reviewers.")

    mode = str(config.get("selection_mode") or "random").strip().lower()
    if mode not in SELECTION_MODES:
        mode = "random"

    return SelectionInputs(
        reviewer_list=reviewer_list,
        always_add=_split_list(config.get("always_add")),
        min_reviewers=_parse_int(config.get("min_reviewers"), DEFAULT_CONFIG["min_reviewers"]),
        add_top_contributor=_parse_bool(config.get("add_top_contributor"), DEFAULT_CONFIG["add_top_contributor"]),
        selection_mode=mode,
        balanced_lookback=_parse_int(config.get("balanced_lookback"), DEFAULT_CONFIG["balanced_lookback"], minimum=1),
        participation_checks=parse_participation_checks(config.get("participation_checks")),
    )
