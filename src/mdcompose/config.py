#!/usr/bin/env python3
"""
MD Compose - Configuration Module

This module contains all configuration constants and paths used by the application.
"""

import argparse
import logging
import os
import sys
from typing import Final

from mdcompose.utils.i18n import _

# ============================================================================
# Application Constants
# ============================================================================

APP_NAME: Final[str] = "MD Compose"
APP_ID: Final[str] = "io.github.mdcompose"
APP_VERSION: Final[str] = "1.0.0"
APP_DESCRIPTION: Final[str] = _("Compose Markdown tasks with attached files")
APP_ICON_NAME: Final[str] = "text-editor-symbolic"


# ============================================================================
# Configuration Directory
# ============================================================================

CONFIG_DIR: Final[str] = os.path.expanduser("~/.config/mdcompose")
STORE_FILE_PATH: Final[str] = os.path.join(CONFIG_DIR, "storage.json")
SETTINGS_FILE_PATH: Final[str] = os.path.join(CONFIG_DIR, "settings.json")


# ============================================================================
# Persisted Keys
# ============================================================================

MARKDOWN_CONTENT_KEY: Final[str] = "markdownContent"
UPLOADED_FILES_KEY: Final[str] = "uploadedFiles"
SCROLL_KEY_PREFIX: Final[str] = "scrollPosition:"


# ============================================================================
# Persistence Limits
# ============================================================================

DEFAULT_DEBOUNCE_MS: Final[int] = 500

# Same ceiling browsers apply to origin-local storage
DEFAULT_STORE_QUOTA_BYTES: Final[int] = 5 * 1024 * 1024

# Attached files are kept whole inside the store
MAX_FILE_SIZE_BYTES: Final[int] = 5 * 1024 * 1024


# ============================================================================
# Logging Configuration
# ============================================================================

LOG_LEVEL: int = logging.INFO
LOG_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOGGER_NAME: Final[str] = "MdCompose"


# ============================================================================
# Window Configuration
# ============================================================================

DEFAULT_WINDOW_WIDTH: Final[int] = 960
DEFAULT_WINDOW_HEIGHT: Final[int] = 720
WINDOW_STATE_KEY: Final[str] = "window"
PREVIEW_DIALOG_WIDTH: Final[int] = 860
PREVIEW_DIALOG_HEIGHT: Final[int] = 640


# ============================================================================
# Keyboard Shortcuts
# ============================================================================

SHORTCUTS: Final[dict[str, str]] = {
    "add-files": "<Control>o",
    "clear-files": "<Control><Shift>Delete",
    "copy-prompt": "<Control><Shift>c",
    "quit": "<Control>q",
}


def parse_command_line(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Args:
        argv: Optional argument list (defaults to sys.argv[1:])

    Returns:
        Parsed command line arguments.
    """
    parser = argparse.ArgumentParser(description=APP_DESCRIPTION)
    parser.add_argument(
        "-v",
        "--version",
        action="store_true",
        help=_("Print version information and exit"),
    )
    parser.add_argument("-d", "--debug", action="store_true", help=_("Enable debug mode"))
    parser.add_argument(
        "--no-persist",
        action="store_true",
        help=_("Keep editor state in memory only"),
    )
    parser.add_argument("files", nargs="*", help=_("Files to attach on start-up"))

    return parser.parse_args(argv)


def setup_environment(argv: list[str] | None = None) -> argparse.Namespace:
    """Configure environment variables and settings.

    Returns:
        Parsed command line arguments.
    """
    global LOG_LEVEL

    args = parse_command_line(argv)

    if args.version:
        print(f"{APP_NAME} {APP_VERSION}")
        sys.exit(0)

    if args.debug:
        LOG_LEVEL = logging.DEBUG

    os.makedirs(CONFIG_DIR, exist_ok=True)

    return args
