"""Data models and utility functions.

This package contains:
- types: TypedDict definitions (DiscoveredBridge, Light)
- utils: Display helpers (boxes, light table)
"""
