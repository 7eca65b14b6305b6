"""Shared utilities."""

from esendex.utils.logging import disable_logging, setup_logging

__all__ = ["disable_logging", "setup_logging"]
