#!/usr/bin/env python3
"""
MD Compose - Entry point for python -m mdcompose
"""

import sys

from mdcompose import main

if __name__ == "__main__":
    sys.exit(main())
