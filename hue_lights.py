#!/usr/bin/env python3
"""
Hue Lights
Interactive terminal menu to list Philips Hue lights and switch them on or off.
"""

from pathlib import Path

import click

from commands.menu import run_menu
from core.config import ENV_FILE, load_config


@click.command(
    context_settings={
        'help_option_names': ['-h', '--help'],
    }
)
@click.version_option(version='0.1.0', prog_name='Hue Lights')
@click.option(
    '--env-file',
    type=click.Path(dir_okay=False, path_type=Path),
    default=ENV_FILE,
    show_default=True,
    help='KEY=VALUE file holding HUE_USERNAME and BRIDGE_IP'
)
def cli(env_file: Path):
    """Hue Lights - list your Philips Hue lights and switch them on or off.

Bridge: BRIDGE_IP from the environment or env file, otherwise discovered via meethue.com.
Authentication: HUE_USERNAME from the environment or env file, otherwise a new user
is registered (press the link button on the bridge first) and appended to the env file."""
    config = load_config(env_file)
    run_menu(config)


if __name__ == '__main__':
    cli()
