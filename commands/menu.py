"""
Interactive menu for listing lights and switching them on or off.

Every action reconnects to the bridge. The current HueConfig is carried
from one action to the next so a username created during one action is
used by the following ones.
"""

from collections.abc import Callable

import click

from core.auth import connect_to_bridge, wait_for_key_press
from core.config import HueConfig
from core.exceptions import HueError, InvalidLightId
from models.utils import render_box, render_light_table

DEFAULT_BRIGHTNESS = 100

MENU_OPTIONS = [
    ('1', 'List all lights'),
    ('2', 'Turn on light'),
    ('3', 'Turn off light'),
    ('4', 'Exit'),
]


def show_header(title: str):
    """Clear the screen and show a boxed title."""
    click.clear()
    click.secho(render_box(title), fg='cyan', bold=True)


def show_menu():
    """Display the main menu."""
    show_header('MENU')

    width = max(len(f"{key}. {label}") for key, label in MENU_OPTIONS) + 2
    click.echo('┌' + '─' * width + '┐')
    for key, label in MENU_OPTIONS:
        click.echo('│ ' + f"{key}. {label}".ljust(width - 1) + '│')
    click.echo('└' + '─' * width + '┘')


def list_lights_action(config: HueConfig, acknowledge: Callable[[], None]) -> HueConfig:
    """Show every light the bridge knows about."""
    controller, config = connect_to_bridge(config, acknowledge)
    lights = controller.get_lights()

    if lights:
        click.echo(render_light_table(lights))
    else:
        click.echo("No lights found.")

    acknowledge()
    return config


def switch_light_action(config: HueConfig, light_id: int, on: bool,
                        acknowledge: Callable[[], None]) -> HueConfig:
    """Turn a single light on (at full brightness) or off."""
    controller, config = connect_to_bridge(config, acknowledge)

    try:
        if on:
            controller.set_light_on(light_id, DEFAULT_BRIGHTNESS)
        else:
            controller.set_light_off(light_id)
    except InvalidLightId as e:
        click.secho(e.message, fg='red', err=True)
        acknowledge()
        return config

    status = "on" if on else "off"
    click.secho(f"✓ Light {light_id} turned {status}", fg='green')
    acknowledge()
    return config


def run_menu(config: HueConfig, acknowledge: Callable[[], None] = wait_for_key_press) -> HueConfig:
    """Run the menu until the operator picks Exit.

    Errors from a single action are shown and the menu is displayed again.

    Args:
        config: Configuration to start from
        acknowledge: Blocking "press any key" step

    Returns:
        The configuration in use when the menu was closed
    """
    while True:
        show_menu()
        action = click.prompt('Command »', default='', show_default=False, prompt_suffix=' ').strip()

        try:
            if action == '1':
                show_header('LIGHTS')
                config = list_lights_action(config, acknowledge)

            elif action in ('2', '3'):
                on = action == '2'
                show_header('TURN ON LIGHTS' if on else 'TURN OFF LIGHTS')
                light_id = click.prompt(
                    f"Enter the light ID to turn {'on' if on else 'off'}",
                    type=int,
                    prompt_suffix=': '
                )
                config = switch_light_action(config, light_id, on, acknowledge)

            elif action == '4':
                show_header('GOODBYE!')
                click.echo('Exiting...')
                return config

            else:
                click.secho('Invalid option', fg='yellow')
                acknowledge()

        except HueError as e:
            # Registration failures were already acknowledged once inside register_user
            click.secho(f"Unexpected error: {e.message}", fg='red', err=True)
            acknowledge()
        except click.Abort:
            raise
        except Exception as e:
            click.secho(f"Unexpected error: {e}", fg='red', err=True)
            acknowledge()
