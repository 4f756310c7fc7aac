"""Configuration management for the call page session."""

from .environment import (
    get_env_config,
    describe_target,
)

__all__ = [
    "get_env_config",
    "describe_target",
]
