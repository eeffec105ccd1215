"""sqlnode utilities package.

This package contains helpers for YAML loading, logging setup,
item projection and concurrent execution.
"""

from sqlnode.utils.fanout import gather_all
from sqlnode.utils.items import project_columns
from sqlnode.utils.log import configure_logging
from sqlnode.utils.yaml_parser import load_invocation, load_yaml, substitute_env_vars

__all__ = [
    "configure_logging",
    "gather_all",
    "load_invocation",
    "load_yaml",
    "project_columns",
    "substitute_env_vars",
]
