"""Configuration data models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class AppConfig:
    """Application configuration settings."""
    log_level: str = "INFO"
    output_indent: int = 4  # 0 writes compact JSON
    skip_invalid_actions: bool = True  # False aborts the run on a bad action payload
