"""
Unity Package CLI Commands
Contains the executable modules for extracting and inspecting packages.
"""

from . import extract
from . import extract_batch
from . import inspect

__all__ = ["extract", "extract_batch", "inspect"]
