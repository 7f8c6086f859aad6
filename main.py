#!/usr/bin/env python3
"""
Wild Battle - terminal edition

Thin wrapper around :func:`wildbattle.cli.run`.

To run: python main.py
"""

from wildbattle.cli import run

if __name__ == "__main__":
    run()
