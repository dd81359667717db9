"""
MD Compose - Utils Package

Utility modules for the application. The logger is imported from
mdcompose.utils.logger directly since it depends on mdcompose.config.
"""

from mdcompose.utils.format_utils import format_file_size
from mdcompose.utils.i18n import _, setup_i18n

__all__ = [
    "_",
    "setup_i18n",
    "format_file_size",
]
