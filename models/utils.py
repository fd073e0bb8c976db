"""Utility functions for Hue Lights.

This module contains helper functions used by the menu:
- display_width: Calculate terminal display width for Unicode/emojis
- pad_to_width: Pad or truncate text to a fixed display width
- render_box: Boxed title banner
- render_light_table: Table of lights with ID, name, status and hue
"""

import click

from models.types import Light

BOX_WIDTH = 21
NAME_WIDTH = 12


def display_width(text: str) -> int:
    """Calculate the display width of text accounting for wide characters.

    Emojis and certain Unicode characters take up 2 columns in the terminal.
    """
    width = 0
    for char in text:
        # Emoji characters are in these ranges
        if ord(char) > 0x1F300:
            width += 2
        else:
            width += 1
    return width


def pad_to_width(text: str, width: int) -> str:
    """Left-align text in a column of the given display width.

    Text that is too wide is cut and ends with an ellipsis.
    """
    if display_width(text) > width:
        while text and display_width(text) > width - 1:
            text = text[:-1]
        text += '…'
    return text + ' ' * (width - display_width(text))


def render_box(title: str, width: int = BOX_WIDTH) -> str:
    """Render a title inside a rounded box.

    Example:
        ╭─────────────────────╮
        │         MENU        │
        ╰─────────────────────╯
    """
    return '\n'.join([
        '╭' + '─' * width + '╮',
        '│' + title.center(width) + '│',
        '╰' + '─' * width + '╯',
    ])


def render_light_table(lights: list[Light]) -> str:
    """Render lights as a table with ID, Name, Status and Hue columns."""
    lines = [
        '╭──────┬──────────────┬───────────┬───────╮',
        '│  ID  │     Name     │   Status  │  Hue  │',
        '├──────┼──────────────┼───────────┼───────┤',
    ]

    for light in lights:
        status = 'on' if light['on'] else 'off'
        status_cell = click.style(status.ljust(9), fg='green' if light['on'] else 'red')
        hue = '-' if light['hue'] is None else str(light['hue'])

        lines.append(
            f"│ {str(light['id']).center(4)} │ {pad_to_width(light['name'], NAME_WIDTH)} │ "
            f"{status_cell} │ {hue.ljust(5)} │"
        )

    lines.append('╰──────┴──────────────┴───────────┴───────╯')
    return '\n'.join(lines)
