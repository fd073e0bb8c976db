"""
Authentication module for Hue Bridge.

Handles bridge discovery, link button registration, and reuse of the
username stored in the env file.
"""

from collections.abc import Callable

import click
import requests

from core.config import APP_NAME, DEVICE_NAME, HueConfig, save_username
from core.controller import ERROR_LINK_BUTTON_NOT_PRESSED, HueController
from core.exceptions import (
    BridgeApiError,
    HueError,
    LinkButtonNotPressed,
    NoBridgeFound,
    RegistrationError,
)
from models.types import DiscoveredBridge
from models.utils import render_box

DISCOVERY_URL = 'https://discovery.meethue.com/'
DISCOVERY_TIMEOUT = 5


def wait_for_key_press() -> None:
    """Block until the operator acknowledges the last message."""
    click.pause('\nPress any key to continue...')


def discover_bridges() -> list[DiscoveredBridge]:
    """Discover Hue bridges on the network using N-UPnP.

    Uses the Philips discovery service at https://discovery.meethue.com/
    to find bridges on the same network. Bridges are returned in the
    order the service lists them.

    Returns:
        List of bridge dicts with keys: id, internalipaddress, name
        Empty list if discovery fails or no bridges found
    """
    try:
        response = requests.get(DISCOVERY_URL, timeout=DISCOVERY_TIMEOUT)
        response.raise_for_status()
        bridges = response.json()

        if not isinstance(bridges, list):
            click.echo(f"Unexpected discovery response: {bridges!r}", err=True)
            return []

        return [b for b in bridges if isinstance(b, dict) and b.get('internalipaddress')]

    except requests.exceptions.HTTPError as e:
        if e.response is not None and e.response.status_code == 429:
            click.secho("⚠ Philips discovery service rate limit reached", fg='yellow', err=True)
            click.echo("Set BRIDGE_IP in your .env file to skip discovery.", err=True)
        else:
            click.echo(f"Bridge discovery failed: {e}", err=True)
        return []
    except requests.exceptions.RequestException as e:
        click.echo(f"Bridge discovery failed: {e}", err=True)
        return []
    except ValueError as e:
        click.echo(f"Failed to parse discovery response: {e}", err=True)
        return []


def locate_bridge(config: HueConfig) -> str:
    """Resolve the bridge address.

    A configured BRIDGE_IP is returned as-is. Otherwise discovery runs once
    and the first bridge it reports is used.

    Raises:
        NoBridgeFound: If nothing is configured and discovery finds no bridge
    """
    if config.bridge_ip:
        return config.bridge_ip

    bridges = discover_bridges()
    if not bridges:
        click.secho("Failed to resolve any Hue Bridges", fg='red', err=True)
        raise NoBridgeFound()

    return bridges[0]['internalipaddress']


def register_user(bridge_ip: str, config: HueConfig,
                  acknowledge: Callable[[], None] = wait_for_key_press) -> HueConfig:
    """Create a new API user via link button authentication.

    On success the username is appended to the env file. On failure the
    reason is shown and the operator must acknowledge it before this
    returns; there is no automatic retry.

    Args:
        bridge_ip: Bridge IP address
        config: Current configuration
        acknowledge: Blocking confirmation step shown after a failure

    Returns:
        New HueConfig holding the created username

    Raises:
        LinkButtonNotPressed: If the bridge refused because the button was not pressed
        RegistrationError: For any other failure, including an env file that cannot be written
    """
    controller = HueController(bridge_ip)

    try:
        username = controller.create_user(APP_NAME, DEVICE_NAME)
    except BridgeApiError as e:
        if e.code == ERROR_LINK_BUTTON_NOT_PRESSED:
            click.clear()
            click.secho(render_box('ERROR'), fg='red', bold=True)
            click.secho(
                "The Link button on the bridge was not pressed. "
                "Please press the Link button and try again.",
                fg='red', err=True
            )
            acknowledge()
            raise LinkButtonNotPressed(e.code, e.message) from e

        click.secho(f"Unexpected error creating user: {e.message}", fg='red', err=True)
        acknowledge()
        raise RegistrationError(e.code, e.message) from e
    except HueError as e:
        click.secho(f"Unexpected error creating user: {e.message}", fg='red', err=True)
        acknowledge()
        raise RegistrationError(e.code, e.message) from e

    try:
        config = save_username(config, username)
    except OSError as e:
        click.secho(f"Created user {username} but failed to save it to {config.env_file}: {e}",
                    fg='red', err=True)
        click.echo(f"Add this line to your env file manually:\n  HUE_USERNAME={username}", err=True)
        acknowledge()
        raise RegistrationError(-1, f"Failed to save username to {config.env_file}: {e}") from e

    click.secho(f"✓ Created user: {username}", fg='green')
    return config


def connect(bridge_ip: str, config: HueConfig,
            acknowledge: Callable[[], None] = wait_for_key_press) -> tuple[HueController, HueConfig]:
    """Open an authorised session, registering a new user if needed.

    Flow:
    1. If a username is stored, try it against the bridge
    2. If there is none, or the bridge rejects it, register once

    Args:
        bridge_ip: Bridge IP address
        config: Current configuration
        acknowledge: Blocking confirmation step shown after a registration failure

    Returns:
        Tuple of (verified controller, config to use from now on)

    Raises:
        ProvisioningFailed: If registration did not produce a username
    """
    if config.username:
        controller = HueController(bridge_ip, config.username)
        try:
            controller.verify()
            return controller, config
        except HueError as e:
            click.secho(f"Failed to connect with existing username ({e.message}), "
                        "creating a new user...", fg='yellow', err=True)
    else:
        click.secho("No username found in env file, creating a new user...", fg='yellow', err=True)

    config = register_user(bridge_ip, config, acknowledge)

    controller = HueController(bridge_ip, config.username)
    controller.verify()
    return controller, config


def connect_to_bridge(config: HueConfig,
                      acknowledge: Callable[[], None] = wait_for_key_press) -> tuple[HueController, HueConfig]:
    """Locate the bridge and open an authorised session on it."""
    bridge_ip = locate_bridge(config)
    return connect(bridge_ip, config, acknowledge)
