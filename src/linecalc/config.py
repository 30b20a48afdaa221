"""Interpreter configuration and its YAML loader."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

from .numeric import NUMERIC_MODELS, NumericModel, get_numeric_model

CONFIG_ENV_VAR = "LINECALC_CONFIG"
NUMERIC_ENV_VAR = "LINECALC_NUMERIC"


class ConfigError(ValueError):
    """Invalid configuration document or value."""


@dataclass(frozen=True)
class CalcConfig:
    """Settings for evaluation and display of a document."""

    numeric: str = "float"                      # "float" or "decimal"
    precision: int = 28                         # significant digits for "decimal"
    strict_characters: bool = False             # unknown characters are errors
    group_thousands: bool = False               # 1234567 -> 1,234,567
    max_fraction_digits: Optional[int] = None   # round displayed values
    error_marker: str = "!"
    empty_marker: str = ""

    def __post_init__(self) -> None:
        if self.numeric not in NUMERIC_MODELS:
            raise ConfigError(
                f"numeric must be one of {', '.join(NUMERIC_MODELS)}, got {self.numeric!r}"
            )
        if isinstance(self.precision, bool) or not isinstance(self.precision, int) or self.precision < 1:
            raise ConfigError(f"precision must be a positive integer, got {self.precision!r}")
        if self.max_fraction_digits is not None and (
            isinstance(self.max_fraction_digits, bool)
            or not isinstance(self.max_fraction_digits, int)
            or self.max_fraction_digits < 0
        ):
            raise ConfigError(
                f"max_fraction_digits must be a non-negative integer, got {self.max_fraction_digits!r}"
            )
        for flag in ("strict_characters", "group_thousands"):
            if not isinstance(getattr(self, flag), bool):
                raise ConfigError(f"{flag} must be true or false, got {getattr(self, flag)!r}")
        for marker in ("error_marker", "empty_marker"):
            if not isinstance(getattr(self, marker), str):
                raise ConfigError(f"{marker} must be a string, got {getattr(self, marker)!r}")

    def numeric_model(self) -> NumericModel:
        return get_numeric_model(self.numeric, self.precision)

    def format_value(self, value: Any, model: NumericModel) -> str:
        return model.format(value, self.group_thousands, self.max_fraction_digits)

    def with_overrides(self, **overrides: Any) -> "CalcConfig":
        """Return a copy with the non-None overrides applied."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes) if changes else self


def config_from_mapping(data: Dict[str, Any]) -> CalcConfig:
    """Build a config from a parsed document, rejecting unknown keys."""
    if not isinstance(data, dict):
        raise ConfigError(f"configuration must be a mapping, got {type(data).__name__}")
    known = {f.name for f in fields(CalcConfig)}
    unknown = sorted(str(key) for key in data if key not in known)
    if unknown:
        raise ConfigError(f"unknown configuration keys: {', '.join(unknown)}")
    return CalcConfig(**data)


def load_config(path: Path | str) -> CalcConfig:
    """Load a YAML configuration file."""
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"configuration not found: {config_path}")
    import yaml

    try:
        with config_path.open("r", encoding="utf-8") as fp:
            data = yaml.safe_load(fp) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"invalid YAML in {config_path}: {exc}") from exc
    return config_from_mapping(data)


def config_from_env(environ: Optional[Dict[str, str]] = None) -> CalcConfig:
    """Configuration selected by LINECALC_CONFIG and LINECALC_NUMERIC."""
    env = os.environ if environ is None else environ
    path = env.get(CONFIG_ENV_VAR)
    config = load_config(path) if path else CalcConfig()
    numeric = env.get(NUMERIC_ENV_VAR)
    if numeric:
        config = config.with_overrides(numeric=numeric.lower())
    return config
