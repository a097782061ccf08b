#!/usr/bin/env python3
"""Interval Trainer — entry point.

Run with:
    python main.py
    python -m intervaltrainer
"""

from intervaltrainer.__main__ import main


if __name__ == "__main__":
    main()
