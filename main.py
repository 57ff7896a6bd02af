#!/usr/bin/env python3
"""
Minesweeper - Main entry point.

Usage:
    python main.py [--preset {beginner,intermediate,expert}] [--seed N]
                   [--log-level LEVEL]

Commands once running: h(help), n(new), r(reveal), f(flag), e(exit).
"""
from src.minesweeper.cli import main


if __name__ == "__main__":
    main()
