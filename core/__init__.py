"""Core functionality for Hue Lights.

This package contains:
- auth: Bridge discovery and username provisioning
- config: Env file loading and username persistence
- controller: HueController class for API interaction
- exceptions: Error types raised by the above
"""
