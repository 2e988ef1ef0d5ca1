"""
SLPy utilities package
"""

from .io_utils import read_source_file
from .escapes import de_escape, re_escape

__all__ = ["read_source_file", "de_escape", "re_escape"]
