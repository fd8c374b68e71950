"""Process initialization helpers."""

from distributor.initialization.logging import setup_logging

__all__ = ["setup_logging"]
