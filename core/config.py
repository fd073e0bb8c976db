"""Configuration management for Hue Lights.

This module handles:
- Loading bridge IP and username from the env file and process environment
- Appending newly issued usernames to the env file
"""

import os
from dataclasses import dataclass, replace
from pathlib import Path

from dotenv import dotenv_values

# Env file location (relative to the working directory)
ENV_FILE = Path('.env')

# Keys in the env file
USERNAME_KEY = 'HUE_USERNAME'
BRIDGE_IP_KEY = 'BRIDGE_IP'

# Identity sent to the bridge when registering a new user
APP_NAME = 'hue-lights-app'
DEVICE_NAME = 'my-hue-device'


@dataclass(frozen=True)
class HueConfig:
    """Bridge address and credential for one run.

    Instances are never modified in place; registration returns a new
    instance via with_username().
    """
    bridge_ip: str | None = None
    username: str | None = None
    env_file: Path = ENV_FILE

    def with_username(self, username: str) -> 'HueConfig':
        """Return a copy of this config holding a new username."""
        return replace(self, username=username)


def _lookup(key: str, file_values: dict) -> str | None:
    """Process environment wins over the env file; empty values count as unset."""
    value = os.environ.get(key) or file_values.get(key) or ''
    return value.strip() or None


def load_config(env_file: Path | str = ENV_FILE) -> HueConfig:
    """Load configuration from the env file and environment.

    A missing env file is not an error: both values are then taken from
    the environment, or left unset.

    Args:
        env_file: Path to a KEY=VALUE file

    Returns:
        HueConfig with bridge_ip and username (either may be None)
    """
    env_file = Path(env_file)
    file_values = dotenv_values(env_file) if env_file.exists() else {}

    return HueConfig(
        bridge_ip=_lookup(BRIDGE_IP_KEY, file_values),
        username=_lookup(USERNAME_KEY, file_values),
        env_file=env_file,
    )


def save_username(config: HueConfig, username: str) -> HueConfig:
    """Append a username to the env file and return the updated config.

    Earlier HUE_USERNAME lines are left in place. When the file is read
    back the last entry wins.

    Args:
        config: Current configuration
        username: Username issued by the bridge

    Returns:
        New HueConfig holding the username
    """
    config.env_file.parent.mkdir(parents=True, exist_ok=True)

    with open(config.env_file, 'a') as f:
        f.write(f"\n{USERNAME_KEY}={username}")

    return config.with_username(username)
