"""Configuration management for hdrlang."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path

from .classifier.utils import DEFAULT_HEADER_SUFFIXES

logger = logging.getLogger("hdrlang.config")

RULES_FILE_ENV = "HDRLANG_RULES_FILE"


def get_config_dir() -> Path:
    """Get the hdrlang config directory."""
    config_dir = Path.home() / ".hdrlang"
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def get_config_path() -> Path:
    """Get the path to config.json."""
    return get_config_dir() / "config.json"


@dataclass
class RulesConfig:
    """Where the rule table comes from."""

    rules_file: str | None = None  # None = built-in reference rules


@dataclass
class FilterConfig:
    """Which documents are eligible for classification."""

    header_suffixes: list[str] = field(default_factory=lambda: list(DEFAULT_HEADER_SUFFIXES))
    allow_extensionless: bool = True
    max_text_length: int | None = None  # characters; None = whole document

    def __post_init__(self):
        """Validate configuration after initialization."""
        if isinstance(self.header_suffixes, str):
            self.header_suffixes = [self.header_suffixes]
        if self.max_text_length is not None and (
            not isinstance(self.max_text_length, int) or self.max_text_length <= 0
        ):
            logger.warning(
                "Invalid max_text_length %r, ignoring",
                self.max_text_length,
            )
            self.max_text_length = None


@dataclass
class LoggingConfig:
    """Logging preferences."""

    level: str = "WARNING"
    json_format: bool = False
    log_to_file: bool = False

    def __post_init__(self):
        """Validate configuration after initialization."""
        level = str(self.level).upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            logger.warning("Invalid log level %r, using WARNING", self.level)
            level = "WARNING"
        self.level = level


@dataclass
class Config:
    """Main configuration for hdrlang."""

    rules: RulesConfig = field(default_factory=RulesConfig)
    filters: FilterConfig = field(default_factory=FilterConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    # Set from HDRLANG_RULES_FILE; never written back to config.json
    env_rules_file: str | None = field(default=None, compare=False, repr=False)

    def save(self) -> None:
        """Save configuration to disk."""
        config_path = get_config_path()
        with open(config_path, "w") as f:
            json.dump(self._to_dict(), f, indent=2)

    def _to_dict(self) -> dict:
        """Convert config to dictionary for JSON serialization."""
        return {
            "rules": asdict(self.rules),
            "filters": asdict(self.filters),
            "logging": asdict(self.logging),
        }

    @classmethod
    def load(cls) -> Config:
        """Load configuration from disk."""
        config = cls()
        config_path = get_config_path()

        if config_path.exists():
            try:
                with open(config_path) as f:
                    data = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                logger.warning("Failed to read %s: %s. Using defaults.", config_path, e)
                data = {}
            if not isinstance(data, dict):
                logger.warning("Config file %s is not a JSON object. Using defaults.", config_path)
                data = {}

            for name, section_cls in (
                ("rules", RulesConfig),
                ("filters", FilterConfig),
                ("logging", LoggingConfig),
            ):
                if name not in data:
                    continue
                try:
                    setattr(config, name, section_cls(**data[name]))
                except TypeError as e:
                    logger.warning(
                        "Invalid '%s' section in config: %s. Using defaults.",
                        name,
                        e,
                    )

        # Environment variable overrides file config
        env_rules = os.environ.get(RULES_FILE_ENV)
        if env_rules:
            config.env_rules_file = env_rules

        return config

    @property
    def effective_rules_file(self) -> str | None:
        return self.env_rules_file or self.rules.rules_file

    @property
    def rules_path(self) -> Path | None:
        rules_file = self.effective_rules_file
        if not rules_file:
            return None
        return Path(rules_file).expanduser()
