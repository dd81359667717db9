"""
MD Compose - Python package for composing Markdown tasks

This package provides a GTK4 application for writing a Markdown task,
attaching a deduplicated list of text files and previewing them, with all
of that state restored on the next start.
"""

import sys

__version__ = "1.0.0"
__license__ = "GPL-3.0"


def _check_gtk_dependencies() -> bool:
    """Check if GTK dependencies are available.

    Returns:
        True if dependencies are met, False otherwise
    """
    try:
        import gi

        gi.require_version("Gtk", "4.0")
        gi.require_version("Adw", "1")

        from gi.repository import (
            Adw,  # noqa: F401
            Gtk,  # noqa: F401
        )

        return True
    except (ImportError, ValueError) as e:
        print(f"Error: Missing dependencies: {e}", file=sys.stderr)
        print("Please make sure GTK4 and libadwaita are installed", file=sys.stderr)
        return False


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the application.

    Returns:
        The application exit code.
    """
    from mdcompose import config
    from mdcompose.utils.logger import logger, setup_logger

    args = config.setup_environment(argv)
    setup_logger(config.LOG_LEVEL)

    if not _check_gtk_dependencies():
        return 1

    from mdcompose.application import MdComposeApp

    try:
        app = MdComposeApp(initial_files=args.files, persist=not args.no_persist)
        return app.run([sys.argv[0]])
    except Exception as e:
        logger.error(f"Critical error starting application: {e}")
        return 1


__all__ = ["main", "__version__", "__license__"]


if __name__ == "__main__":
    sys.exit(main())
