#!/usr/bin/env python3
"""
MD Compose - Internationalization Module

This module initializes gettext for internationalization support.
"""

import gettext
import locale
import os
import sys
from collections.abc import Callable


def _dummy_translate(text: str) -> str:
    """Fallback translation function that returns the original text."""
    return text


_: Callable[[str], str] = _dummy_translate

try:
    try:
        locale.setlocale(locale.LC_ALL, "")
    except locale.Error:
        locale.setlocale(locale.LC_ALL, "C")

    locale_dirs = [
        "/usr/share/locale",
        os.path.join(sys.prefix, "share", "locale"),
        os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "locale"),
    ]

    for locale_dir in locale_dirs:
        if os.path.exists(locale_dir):
            gettext.bindtextdomain("mdcompose", locale_dir)

    gettext.textdomain("mdcompose")

    _ = gettext.gettext

except Exception:
    # Keep using the dummy function if gettext cannot be configured
    pass


def setup_i18n() -> Callable[[str], str]:
    """Reinitialize the internationalization system if needed.

    Returns:
        The translation function.
    """
    return _
