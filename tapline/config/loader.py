"""
Config loader for tapline.

This module provides the public API for loading and validating
reporter configuration from disk or YAML strings.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from .models import ReporterConfig
from .parser import ConfigParser
from .validation import ConfigValidator, ValidationResult

logger = logging.getLogger(__name__)


def load_config(path: str | Path) -> tuple[ReporterConfig | None, ValidationResult]:
    """
    Load and validate reporter configuration from a YAML file.

    Args:
        path: Path to the YAML config file

    Returns:
        Tuple of (ReporterConfig or None, ValidationResult)
        If validation fails, ReporterConfig will be None.

    Example:
        config, result = load_config("tapline.yaml")
        if not result.is_valid:
            print(result)
            sys.exit(1)
        reporter = TapReporter.from_config(config)
    """
    path = Path(path)

    if not path.exists():
        result = ValidationResult()
        result.add_error(
            str(path),
            "File not found",
            suggestion="Check the file path is correct"
        )
        return None, result

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        result = ValidationResult()
        result.add_error(
            str(path),
            f"Invalid YAML syntax: {e}",
            suggestion="Check YAML formatting (indentation, colons, etc.)"
        )
        return None, result

    logger.debug(f"Loaded config file {path}")
    return _validate_and_parse(str(path), data)


def validate_config_yaml(yaml_string: str) -> tuple[ReporterConfig | None, ValidationResult]:
    """
    Validate reporter configuration from a YAML string (useful for testing).

    Args:
        yaml_string: YAML content as a string

    Returns:
        Tuple of (ReporterConfig or None, ValidationResult)
    """
    try:
        data = yaml.safe_load(yaml_string)
    except yaml.YAMLError as e:
        result = ValidationResult()
        result.add_error("yaml", f"Invalid YAML syntax: {e}")
        return None, result

    return _validate_and_parse("yaml", data)


def _validate_and_parse(source: str, data: Any) -> tuple[ReporterConfig | None, ValidationResult]:
    # An empty document means "all defaults"
    if data is None:
        data = {}

    if not isinstance(data, dict):
        result = ValidationResult()
        result.add_error(
            source,
            "Content must be a YAML object (not a list or scalar)",
            value=type(data).__name__
        )
        return None, result

    result = ConfigValidator(data).validate()
    if not result.is_valid:
        logger.debug(f"Config from {source} failed validation with {len(result.errors)} error(s)")
        return None, result

    return ConfigParser(data).parse(), result
