"""
Configuration module for htmlpick.

Uses Pydantic models for parsing options, either from the command line or
from a JSON file, and collects validation errors before any I/O happens.
"""

import json
import logging
from pathlib import Path
from typing import List, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .exceptions import ConfigurationError
from .values import ValueList

logger = logging.getLogger(__name__)


class ExtractConfig(BaseModel):
    """Options for a single extraction run."""
    location: str = Field("", alias="url")
    timeout: float = 0.0
    query: str = ""
    values: List[str] = Field(default_factory=list)
    delim: str = ","

    model_config = ConfigDict(populate_by_name=True)

    def validation_errors(self) -> List[ConfigurationError]:
        """
        Check the options that must hold before anything is loaded.

        Returns:
            Every error found, in field order (empty when valid)
        """
        errors = []
        if self.timeout < 0:
            errors.append(ConfigurationError("timeout must be positive values"))
        if not self.values:
            errors.append(ConfigurationError(
                "values should be one of these: text, html, or an attribute name"
            ))
        return errors

    def value_list(self) -> ValueList:
        """Build the value specifiers for this run."""
        return ValueList.from_names(self.values, self.delim)


def load_config(config_path: Union[str, Path]) -> ExtractConfig:
    """
    Load options from a JSON file.

    Args:
        config_path: Path to configuration file

    Returns:
        Parsed configuration (not yet validated against run policy)

    Raises:
        ConfigurationError: If the file is missing, unreadable or malformed
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigurationError(f"Configuration file not found: {config_path}")

    logger.info(f"Loading configuration from: {config_path}")

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        return ExtractConfig.model_validate(data)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Cannot read configuration {config_path}: {e}") from e
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration {config_path}: {e}") from e
