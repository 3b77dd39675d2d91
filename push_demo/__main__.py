"""
Entry point for running push_demo as a module.

Usage:
    python -m push_demo run
    python -m push_demo run --step K-001 --window 6
    python -m push_demo list
"""

from .cli import main

if __name__ == "__main__":
    main()
