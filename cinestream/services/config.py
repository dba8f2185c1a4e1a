"""Configuration service for managing application settings."""

import json
from pathlib import Path

import structlog

from ..models import AppConfig
from .errors import ConfigurationError

log = structlog.stdlib.get_logger()

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
MAX_OUTPUT_INDENT = 8


class ValidationResult:
    """Result of configuration validation."""

    def __init__(self, is_valid: bool, errors: list[str] | None = None) -> None:
        self.is_valid: bool = is_valid
        self.errors: list[str] = errors or []


class ConfigurationService:
    """Service for managing application configuration."""

    def __init__(self, config_path: Path | None = None) -> None:
        self.config_path: Path = config_path or Path.home() / ".config" / "cinestream" / "config.json"
        log.debug("Configuration service initialized", config_path=str(self.config_path))

    def load_config(self) -> AppConfig:
        """Load configuration from file or return default configuration."""
        if not self.config_path.exists():
            log.info("Configuration file not found, using defaults")
            return self._get_default_config()

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                data: dict[str, str | int | bool] = json.load(f)

            config = self._dict_to_config(data)
            validation_result = self.validate_config(config)

            if not validation_result.is_valid:
                log.warning("Invalid configuration loaded, using defaults", errors=validation_result.errors)
                return self._get_default_config()

            log.info("Configuration loaded successfully")
            return config

        except (json.JSONDecodeError, KeyError, TypeError, ValueError, AttributeError) as e:
            log.error("Failed to load configuration, using defaults", error=str(e))
            return self._get_default_config()

    def save_config(self, config: AppConfig) -> None:
        """Save configuration to file.

        Raises:
            ConfigurationError: if the configuration is invalid
        """
        validation_result = self.validate_config(config)
        if not validation_result.is_valid:
            raise ConfigurationError(
                f"Invalid configuration: {', '.join(validation_result.errors)}",
                expected="a configuration passing validate_config",
            )

        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        try:
            data = self._config_to_dict(config)
            with open(self.config_path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2, ensure_ascii=False)

            log.info("Configuration saved successfully")

        except OSError as e:
            log.error("Failed to save configuration", error=str(e))
            raise

    def validate_config(self, config: AppConfig) -> ValidationResult:
        """Validate configuration settings."""
        errors = []

        if config.log_level not in VALID_LOG_LEVELS:
            errors.append(f"log_level must be one of: {', '.join(VALID_LOG_LEVELS)}")

        # bool is an int subclass but not a valid indent
        if (
            not isinstance(config.output_indent, int)
            or isinstance(config.output_indent, bool)
            or config.output_indent < 0
        ):
            errors.append("output_indent must be a non-negative integer")
        elif config.output_indent > MAX_OUTPUT_INDENT:
            errors.append(f"output_indent should not exceed {MAX_OUTPUT_INDENT}")

        if not isinstance(config.skip_invalid_actions, bool):
            errors.append("skip_invalid_actions must be a boolean")

        return ValidationResult(len(errors) == 0, errors)

    def _get_default_config(self) -> AppConfig:
        """Get default configuration."""
        return AppConfig()

    def _config_to_dict(self, config: AppConfig) -> dict[str, str | int | bool]:
        """Convert AppConfig to dictionary for JSON serialization."""
        return {
            "log_level": config.log_level,
            "output_indent": config.output_indent,
            "skip_invalid_actions": config.skip_invalid_actions,
        }

    def _dict_to_config(self, data: dict[str, str | int | bool]) -> AppConfig:
        """Convert dictionary to AppConfig, falling back to defaults per field."""
        defaults = self._get_default_config()

        log_level_raw = data.get("log_level", defaults.log_level)
        log_level = str(log_level_raw).upper() if isinstance(log_level_raw, str) else defaults.log_level

        indent_raw = data.get("output_indent", defaults.output_indent)
        output_indent = indent_raw if isinstance(indent_raw, int) and not isinstance(indent_raw, bool) else defaults.output_indent

        skip_raw = data.get("skip_invalid_actions", defaults.skip_invalid_actions)
        skip_invalid_actions = skip_raw if isinstance(skip_raw, bool) else defaults.skip_invalid_actions

        return AppConfig(
            log_level=log_level,
            output_indent=output_indent,
            skip_invalid_actions=skip_invalid_actions,
        )
