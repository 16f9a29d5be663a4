"""Shared utilities for Lambda functions."""

from .ssm import get_parameter, hydrate_env

__all__ = [
    "get_parameter",
    "hydrate_env",
]
