"""
Configuration schema using Pydantic.

Configuration can be loaded from YAML files or environment variables.
"""

import os
from pathlib import Path
from typing import Optional, List, Dict, Any

import yaml
from pydantic import BaseModel, Field

from screen_capture.compositor.canvas import StitchPolicy
from screen_capture.displays.resolver import DEFAULT_PRIMARY_DISPLAY_ID


class ConfigurationError(Exception):
    """Raised when configuration is invalid or missing required values."""

    def __init__(self, message: str, field: Optional[str] = None, suggestions: Optional[List[str]] = None):
        self.message = message
        self.field = field
        self.suggestions = suggestions or []
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        lines = [self.message]
        if self.field:
            lines.append(f"  Field: {self.field}")
        if self.suggestions:
            lines.append("  Suggestions:")
            for s in self.suggestions:
                lines.append(f"    - {s}")
        return "\n".join(lines)


class DisplayConfig(BaseModel):
    """Display resolution configuration."""

    primary_display_id: str = Field(
        default=DEFAULT_PRIMARY_DISPLAY_ID,
        min_length=1,
        description="Display id treated as primary when no display is requested",
    )


class CompositeConfig(BaseModel):
    """Multi-display compositing configuration."""

    stitch_policy: StitchPolicy = Field(
        default=StitchPolicy.OFFSET,
        description="offset = true desktop positions, horizontal = side by side",
    )
    concurrent_captures: bool = Field(
        default=False,
        description="Capture displays concurrently in combined captures",
    )


class BackendConfig(BaseModel):
    """Native capture backend configuration."""

    name: str = Field(
        default="mss",
        pattern="^(mss)$",
        description="Capture backend used when none is passed to ScreenCapture",
    )
    with_cursor: bool = Field(default=False)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR)$")
    log_file: Optional[str] = Field(default=None)

    @property
    def log_path(self) -> Optional[Path]:
        return Path(self.log_file).expanduser() if self.log_file else None


class CaptureConfig(BaseModel):
    """Root configuration for screen-capture."""

    displays: DisplayConfig = Field(default_factory=DisplayConfig)
    composite: CompositeConfig = Field(default_factory=CompositeConfig)
    backend: BackendConfig = Field(default_factory=BackendConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_config_path() -> Path:
    """Get default config file path."""
    return Path.home() / ".screen-capture" / "config.yaml"


def load_config(config_path: Optional[str] = None) -> CaptureConfig:
    """
    Load configuration from YAML file.

    Falls back to defaults if the default file doesn't exist.
    Environment variables override config file values.

    Args:
        config_path: Path to config file (optional)

    Returns:
        Loaded configuration

    Raises:
        ConfigurationError: If config file is missing or invalid
    """
    if config_path:
        path = Path(config_path)
        if not path.exists():
            raise ConfigurationError(
                f"Config file not found: {path}",
                suggestions=[
                    f"Create the config file at {path}",
                    "Or run without --config to use defaults",
                ]
            )
    else:
        path = get_default_config_path()

    data = {}

    if path.exists():
        try:
            with open(path, "r") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            mark = getattr(e, "problem_mark", None)
            raise ConfigurationError(
                f"Invalid YAML in config file: {path}",
                suggestions=[
                    f"Check syntax at line {mark.line + 1 if mark else 'unknown'}",
                    "Use a YAML validator to check your config",
                ]
            )

    env_overrides = _get_env_overrides()
    data = _deep_merge(data, env_overrides)

    try:
        config = CaptureConfig(**data)
    except Exception as e:
        raise ConfigurationError(
            f"Invalid configuration: {e}",
            suggestions=[
                "Check field names and values in your config",
                "stitch_policy must be 'offset' or 'horizontal'",
            ]
        )

    return config


def _get_env_overrides() -> Dict[str, Any]:
    """Get configuration overrides from environment variables."""
    overrides: Dict[str, Any] = {}

    env_mappings = {
        "SCREEN_CAPTURE_PRIMARY_DISPLAY": ("displays", "primary_display_id"),
        "SCREEN_CAPTURE_STITCH_POLICY": ("composite", "stitch_policy"),
        "SCREEN_CAPTURE_CONCURRENT": ("composite", "concurrent_captures"),
        "SCREEN_CAPTURE_LOG_LEVEL": ("logging", "level"),
        "SCREEN_CAPTURE_LOG_FILE": ("logging", "log_file"),
    }

    for env_key, (section, field) in env_mappings.items():
        value = os.environ.get(env_key)
        if value:
            if section not in overrides:
                overrides[section] = {}
            overrides[section][field] = value

    return overrides


def _deep_merge(base: Dict, overlay: Dict) -> Dict:
    """Deep merge two dictionaries."""
    result = base.copy()
    for key, value in overlay.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def save_config(config: CaptureConfig, config_path: Optional[str] = None) -> None:
    """Save configuration to YAML file."""
    if config_path:
        path = Path(config_path)
    else:
        path = get_default_config_path()

    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w") as f:
        yaml.safe_dump(config.model_dump(mode="json"), f, default_flow_style=False)
