"""Load selector configuration from YAML or JSON files."""

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from affected_specs.models.config import SelectorConfig

log = logging.getLogger(__name__)

CONFIG_SECTION = "jest"


def load_selector_config(config_path: Path) -> SelectorConfig:
    """Load and validate the selector config.

    The file may hold the settings at its top level or under a ``jest``
    section, as project-wide JSON configs do.

    Args:
        config_path: Path to a YAML (or JSON) file

    Returns:
        Validated configuration, defaults when the file is empty

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is malformed or fails validation

    """
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        content = yaml.safe_load(config_path.read_text())
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {config_path}: {e}") from e

    if content is None:
        log.info("Config file %s is empty, using defaults", config_path)
        return SelectorConfig()

    if isinstance(content, dict) and isinstance(content.get(CONFIG_SECTION), dict):
        content = content[CONFIG_SECTION]

    try:
        return SelectorConfig.model_validate(content)
    except ValidationError as e:
        raise ValueError(
            f"Invalid selector config schema in {config_path}: {e}"
        ) from e
