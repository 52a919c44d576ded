#!/usr/bin/env python3
"""
Configuration utilities for jtg.

Options can be supplied through the environment, or a dotenv file chosen by
JTG_ENV (.env by default, .env.jtg.<name> otherwise):

    JTG_UNWRAP                 pointer applied to every sample, e.g. "/data/-"
    JTG_PROPERTY_NAME_FORMAT   identifier style, e.g. "snake_case"
    JTG_HINTS                  JSON object of pointer -> directives, e.g.
                               {"/id": {"use_type": "string"}}
"""

import json
import os
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv
from loguru import logger

from jtg.hints import hints_from_config
from jtg.options import Options
from jtg.word_case import StringTransform


ENV_VAR = "JTG_ENV"
DEFAULT_ENV_FILE = ".env"


def env_file_name(environment: Optional[str] = None) -> str:
    """
    Name of the dotenv file holding jtg settings for ``environment``.

    No environment means the plain ``.env``; ``"ci"`` means ``.env.jtg.ci``.

    Raises:
        ValueError: If the environment name is not a plain word
    """
    if not environment:
        return DEFAULT_ENV_FILE
    if not all(c.isalnum() or c in "-_" for c in environment):
        raise ValueError(f"Invalid {ENV_VAR} value: {environment!r}")
    return f".env.jtg.{environment}"


def load_environment_config(
    environment: Optional[str] = None, directory: Union[str, Path] = "."
) -> Optional[Path]:
    """
    Load jtg settings from a dotenv file into the process environment.

    Variables already set in the process keep their value.

    Args:
        environment: Environment name, or None to read JTG_ENV
        directory: Directory holding the dotenv files

    Returns:
        Path of the file that was loaded, or None when there was none
    """
    if environment is None:
        environment = os.getenv(ENV_VAR, "")

    env_file = Path(directory) / env_file_name(environment)
    if not env_file.is_file():
        if environment:
            logger.warning(f"No jtg settings file for environment '{environment}': {env_file}")
        return None

    load_dotenv(env_file, override=False)
    logger.info(f"Loaded jtg settings from {env_file}")
    return env_file


def get_property_name_format() -> Optional[StringTransform]:
    """
    Get the property name transform from JTG_PROPERTY_NAME_FORMAT.

    Returns:
        StringTransform, or None when the variable is unset

    Raises:
        ValueError: If the variable names an unknown transform
    """
    value = os.getenv("JTG_PROPERTY_NAME_FORMAT")
    if not value:
        return None
    transform = StringTransform.parse(value)
    if transform is None:
        raise ValueError(f"Unknown JTG_PROPERTY_NAME_FORMAT: {value!r}")
    return transform


def get_hints_from_env() -> list:
    """
    Get hints from the JTG_HINTS environment variable.

    Raises:
        ValueError: If JTG_HINTS is not a JSON object of directives
    """
    value = os.getenv("JTG_HINTS")
    if not value:
        return []
    try:
        config = json.loads(value)
    except json.JSONDecodeError as e:
        raise ValueError(f"JTG_HINTS is not valid JSON: {e}") from e
    if not isinstance(config, dict):
        raise ValueError("JTG_HINTS must be a JSON object")
    return hints_from_config(config)


def get_options_from_env(environment: Optional[str] = None) -> Options:
    """
    Build inference options from the environment.

    Args:
        environment: Passed to load_environment_config

    Returns:
        Options populated from JTG_* variables
    """
    load_environment_config(environment)
    options = Options(
        hints=get_hints_from_env(),
        unwrap=os.getenv("JTG_UNWRAP", ""),
        property_name_format=get_property_name_format(),
    )
    logger.debug(
        f"Options from environment: {len(options.hints)} hints, unwrap={options.unwrap!r}"
    )
    return options
