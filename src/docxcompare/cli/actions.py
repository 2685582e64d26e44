"""Custom argparse Action classes for the docxcompare CLI.

Every option can take its default from an environment variable named
``DOCXCOMPARE_<DEST>``, e.g. ``DOCXCOMPARE_REVIEWER=text``.
"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

from __future__ import annotations

import argparse
import logging
import os
from typing import Any

from docxcompare.constants import ENV_PREFIX

TRUE_VALUES = ("true", "1", "yes", "on")


def env_key_for(dest: str) -> str:
    """Return the environment variable that provides the default for ``dest``."""
    return f"{ENV_PREFIX}{dest.upper().replace('-', '_')}"


class EnvironmentAwareAction(argparse.Action):
    """Store action whose default can come from the environment."""

    def __init__(self, option_strings: Any, dest: str, **kwargs: Any):
        env_key = env_key_for(dest)
        env_value = os.environ.get(env_key)
        if env_value is not None:
            try:
                kwargs["default"] = self._convert_env_value(env_value, kwargs)
            except (ValueError, TypeError) as e:
                logging.warning(f"Invalid environment variable {env_key}={env_value}: {e}")

        super().__init__(option_strings, dest, **kwargs)

    @staticmethod
    def _convert_env_value(env_value: str, kwargs: dict[str, Any]) -> Any:
        converter = kwargs.get("type")
        value = converter(env_value) if converter is not None else env_value
        choices = kwargs.get("choices")
        if choices is not None and value not in choices:
            raise ValueError(f"must be one of {', '.join(map(str, choices))}")
        return value

    def __call__(self, parser, namespace, values, option_string=None):
        """Store the parsed value."""
        setattr(namespace, self.dest, values)


class EnvironmentAwareBooleanAction(argparse._StoreTrueAction):
    """Boolean flag whose default can come from the environment."""

    def __init__(self, option_strings: Any, dest: str, **kwargs: Any):
        env_value = os.environ.get(env_key_for(dest))
        if env_value is not None:
            kwargs["default"] = env_value.lower() in TRUE_VALUES

        super().__init__(option_strings, dest, **kwargs)


class EnvironmentAwareBooleanFalseAction(argparse._StoreFalseAction):
    """``--no-*`` flag whose default can come from the environment.

    The environment variable names the positive setting, so
    ``DOCXCOMPARE_REPLACE_EXPECTED=false`` has the same effect as passing
    ``--no-replace``.
    """

    def __init__(self, option_strings: Any, dest: str, **kwargs: Any):
        env_value = os.environ.get(env_key_for(dest))
        if env_value is not None:
            kwargs["default"] = env_value.lower() in TRUE_VALUES

        super().__init__(option_strings, dest, **kwargs)


class PositiveIntAction(EnvironmentAwareAction):
    """Integer option that must be greater than zero."""

    @staticmethod
    def _convert_env_value(env_value: str, kwargs: dict[str, Any]) -> Any:
        ivalue = int(env_value)
        if ivalue <= 0:
            raise ValueError("not a positive integer")
        return ivalue

    def __call__(self, parser, namespace, values, option_string=None):
        """Validate and store a positive integer."""
        try:
            ivalue = int(values)
        except (TypeError, ValueError):
            parser.error(f"argument {option_string}: {values} is not a valid integer")
        if ivalue <= 0:
            parser.error(f"argument {option_string}: {values} is not a positive integer")
        setattr(namespace, self.dest, ivalue)
