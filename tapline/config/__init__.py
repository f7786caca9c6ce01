"""
Reporter configuration

This package loads, validates and parses the optional YAML file that
tells a reporter where to write TAP and how to format diagnostics.

Usage:
    from tapline.config import load_config, validate_config_yaml

    # Load from file
    config, result = load_config("tapline.yaml")
    if not result.is_valid:
        print(result)

    # Or validate from string
    config, result = validate_config_yaml(yaml_string)
"""

# Public API
from .loader import load_config, validate_config_yaml

# Models (for type hints and isinstance checks)
from .models import (
    DEFAULT_POUND_TOKEN,
    DiagnosticsConfig,
    FileMode,
    FinishConfig,
    ReporterConfig,
    SinkConfig,
    SinkType,
)

# Validation (for custom validation if needed)
from .validation import ConfigValidator, ValidationError, ValidationResult

__all__ = [
    # Loader functions
    "load_config",
    "validate_config_yaml",
    # Models
    "DEFAULT_POUND_TOKEN",
    "ReporterConfig",
    "SinkConfig",
    "DiagnosticsConfig",
    "FinishConfig",
    "SinkType",
    "FileMode",
    # Validation
    "ValidationResult",
    "ValidationError",
    "ConfigValidator",
]
