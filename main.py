#!/usr/bin/env python3
"""
tilemon - battle engine debug runner

Thin wrapper around ``tilemon.cli``: plays one automatic battle between two
packaged species and prints the battle log.

To run: python main.py [species_a] [species_b] [level] [seed]
"""

from tilemon.cli import run

if __name__ == "__main__":
    raise SystemExit(run())
