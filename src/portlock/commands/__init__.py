"""Command modules for portlock CLI."""

from .check import check
from .config import config
from .hold import hold
from .run import run
from .status import status

__all__ = [
    "check",
    "config",
    "hold",
    "run",
    "status",
]
