"""CLI command modules.

This package contains:
- menu: Interactive menu (list lights, turn on, turn off, exit)
"""
