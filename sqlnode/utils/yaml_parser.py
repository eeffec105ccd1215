"""Invocation files: YAML with ``${VAR}`` environment substitution.

Credentials in particular are expected to come from the environment,
e.g. ``password: ${ORACLE_PASSWORD}``.
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from sqlnode.exceptions import ValidationError
from sqlnode.models.invocation import Invocation

# ${NAME} or ${NAME:-fallback}
ENV_REFERENCE = re.compile(r"\$\{([^}:]+)(?::-([^}]*))?\}")


def _resolve_reference(match: re.Match) -> str:
    name, fallback = match.group(1), match.group(2)
    if name in os.environ:
        return os.environ[name]
    if fallback is None:
        raise ValidationError(f"Environment variable '{name}' is not set and has no default")
    return fallback


def substitute_env_vars(data: Any) -> Any:
    """Expand ``${NAME}`` and ``${NAME:-fallback}`` in every string of ``data``.

    Mappings and lists are walked recursively; other values are returned
    unchanged.

    Raises:
        ValidationError: If a referenced variable is unset and has no fallback

    Examples:
        >>> os.environ["ORACLE_DSN"] = "db.internal/ORCLPDB1"
        >>> substitute_env_vars({"connect_string": "${ORACLE_DSN}", "user": "${ORACLE_USER:-hr}"})
        {'connect_string': 'db.internal/ORCLPDB1', 'user': 'hr'}
    """
    if isinstance(data, dict):
        return {key: substitute_env_vars(value) for key, value in data.items()}
    if isinstance(data, list):
        return [substitute_env_vars(value) for value in data]
    if isinstance(data, str):
        return ENV_REFERENCE.sub(_resolve_reference, data)
    return data


def load_yaml(path: Path) -> dict[str, Any]:
    """Read a YAML mapping from ``path`` and expand environment references.

    Raises:
        ValidationError: If the file is missing, unreadable, not YAML, empty,
            not a mapping, or references an unset variable
    """
    try:
        with open(path, "r") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise ValidationError(f"File not found: {path}")
    except yaml.YAMLError as e:
        raise ValidationError(f"Invalid YAML in {path}: {e}") from e
    except OSError as e:
        raise ValidationError(f"Cannot read {path}: {e}") from e

    if data is None:
        raise ValidationError(f"Empty YAML file: {path}")
    if not isinstance(data, dict):
        raise ValidationError(f"Expected a mapping at the top of {path}")
    return substitute_env_vars(data)


def load_invocation(path: Path) -> Invocation:
    """Load and validate an invocation from a YAML file.

    Expected layout::

        credentials:
          user: hr
          password: ${ORACLE_PASSWORD}
          connect_string: localhost/XEPDB1
        operation: insert
        parameters:
          table: employees
          columns: id, name
        items:
          - {id: 1, name: Ada}

    Raises:
        ValidationError: If the file cannot be loaded or the invocation is invalid
    """
    data = load_yaml(path)
    try:
        return Invocation(**data)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid invocation in {path}: {e}") from e
