#!/usr/bin/env python3
"""Countdown — entry point.

Run with:
    python main.py 5m
    python -m countdown 5m
"""

import sys

from countdown.__main__ import main


if __name__ == "__main__":
    sys.exit(main())
