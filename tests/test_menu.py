"""
Tests for the interactive menu (commands/menu.py) and the CLI entry point.

connect_to_bridge is patched so menu actions run against a mock controller.
"""

import pytest
from click.testing import CliRunner
from unittest.mock import MagicMock, patch

from commands.menu import run_menu
from core.config import HueConfig
from core.controller import HueController
from core.exceptions import InvalidLightId, LinkButtonNotPressed, NoBridgeFound
from hue_lights import cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def mock_controller():
    controller = MagicMock()
    controller.get_lights.return_value = [
        {'id': 1, 'name': 'Living room', 'on': True, 'hue': 41000},
        {'id': 2, 'name': 'Desk', 'on': False, 'hue': None},
    ]
    return controller


@pytest.fixture
def mock_connect(mock_controller):
    """Patch connect_to_bridge to hand back the mock controller and the same config."""
    with patch('commands.menu.connect_to_bridge') as mock:
        mock.side_effect = lambda config, acknowledge: (mock_controller, config)
        yield mock


class TestCli:
    """Test the click entry point."""

    def test_help(self, runner):
        result = runner.invoke(cli, ['--help'])

        assert result.exit_code == 0
        assert '--env-file' in result.output

    def test_version(self, runner):
        result = runner.invoke(cli, ['--version'])

        assert result.exit_code == 0
        assert '0.1.0' in result.output

    def test_exit(self, runner, env_file):
        result = runner.invoke(cli, ['--env-file', str(env_file)], input='4\n')

        assert result.exit_code == 0
        assert 'MENU' in result.output
        assert '1. List all lights' in result.output
        assert 'GOODBYE!' in result.output
        assert 'Exiting...' in result.output

    def test_invalid_option(self, runner, env_file):
        result = runner.invoke(cli, ['--env-file', str(env_file)], input='9\n4\n')

        assert result.exit_code == 0
        assert 'Invalid option' in result.output

    def test_empty_input_is_invalid(self, runner, env_file):
        result = runner.invoke(cli, ['--env-file', str(env_file)], input='\n4\n')

        assert result.exit_code == 0
        assert 'Invalid option' in result.output

    def test_loads_env_file(self, runner, env_file, mock_connect):
        env_file.write_text("BRIDGE_IP=192.168.1.20\nHUE_USERNAME=stored-user\n")

        result = runner.invoke(cli, ['--env-file', str(env_file)], input='1\n4\n')

        assert result.exit_code == 0
        config = mock_connect.call_args.args[0]
        assert config.bridge_ip == '192.168.1.20'
        assert config.username == 'stored-user'


class TestMenuActions:
    """Test each menu command."""

    def test_list_lights(self, runner, env_file, mock_connect):
        result = runner.invoke(cli, ['--env-file', str(env_file)], input='1\n4\n')

        assert result.exit_code == 0
        assert 'LIGHTS' in result.output
        assert 'Living room' in result.output
        assert 'Desk' in result.output
        assert '41000' in result.output
        mock_connect.assert_called_once()

    def test_list_no_lights(self, runner, env_file, mock_connect, mock_controller):
        mock_controller.get_lights.return_value = []

        result = runner.invoke(cli, ['--env-file', str(env_file)], input='1\n4\n')

        assert 'No lights found.' in result.output

    def test_turn_on(self, runner, env_file, mock_connect, mock_controller):
        result = runner.invoke(cli, ['--env-file', str(env_file)], input='2\n1\n4\n')

        assert result.exit_code == 0
        assert 'TURN ON LIGHTS' in result.output
        assert 'Light 1 turned on' in result.output
        mock_controller.set_light_on.assert_called_once_with(1, 100)

    def test_turn_off(self, runner, env_file, mock_connect, mock_controller):
        result = runner.invoke(cli, ['--env-file', str(env_file)], input='3\n2\n4\n')

        assert result.exit_code == 0
        assert 'TURN OFF LIGHTS' in result.output
        assert 'Light 2 turned off' in result.output
        mock_controller.set_light_off.assert_called_once_with(2)

    def test_invalid_light_id(self, runner, env_file, mock_connect, mock_controller):
        mock_controller.set_light_off.side_effect = InvalidLightId(9)

        result = runner.invoke(cli, ['--env-file', str(env_file)], input='3\n9\n4\n')

        assert result.exit_code == 0
        assert 'Invalid light ID: 9' in result.output
        assert 'turned off' not in result.output

    def test_every_action_reconnects(self, runner, env_file, mock_connect):
        result = runner.invoke(cli, ['--env-file', str(env_file)], input='1\n2\n1\n4\n')

        assert result.exit_code == 0
        assert mock_connect.call_count == 2

    def test_error_returns_to_menu(self, runner, env_file):
        with patch('commands.menu.connect_to_bridge') as mock_connect:
            mock_connect.side_effect = NoBridgeFound()

            result = runner.invoke(cli, ['--env-file', str(env_file)], input='1\n4\n')

        assert result.exit_code == 0
        assert 'Unexpected error: Could not find a Hue Bridge' in result.output
        assert 'Exiting...' in result.output

    def test_malformed_lights_returns_to_menu(self, runner, env_file, mock_connect, make_response):
        """A bad /lights payload is reported and the menu keeps running."""
        controller = HueController('10.0.0.5', 'test-user')
        controller.session = MagicMock()
        controller.session.request.return_value = make_response({'abc': {'name': 'Lamp', 'state': {}}})
        mock_connect.side_effect = lambda config, acknowledge: (controller, config)

        result = runner.invoke(cli, ['--env-file', str(env_file)], input='1\n4\n')

        assert result.exit_code == 0
        assert 'Unexpected error: Failed to parse lights' in result.output
        assert 'Exiting...' in result.output

    def test_unexpected_exception_returns_to_menu(self, runner, env_file, mock_connect, mock_controller):
        mock_controller.get_lights.side_effect = AttributeError("'str' object has no attribute 'get'")

        result = runner.invoke(cli, ['--env-file', str(env_file)], input='1\n4\n')

        assert result.exit_code == 0
        assert "Unexpected error: 'str' object has no attribute 'get'" in result.output
        assert 'Exiting...' in result.output

    def test_unwritable_env_file_returns_to_menu(self, runner, tmp_path):
        """A username that cannot be saved ends the action, not the program."""
        blocker = tmp_path / 'blocker'
        blocker.write_text('')
        env_file = blocker / '.env'

        with patch('core.auth.HueController') as mock_class:
            mock_class.return_value.create_user.return_value = 'new-user'

            result = runner.invoke(
                cli, ['--env-file', str(env_file)],
                input='1\n4\n',
                env={'BRIDGE_IP': '10.0.0.5'}
            )

        assert result.exit_code == 0
        assert 'HUE_USERNAME=new-user' in result.output
        assert 'Unexpected error: Failed to save username' in result.output
        assert 'Exiting...' in result.output


class TestRunMenu:
    """Test run_menu() directly with a mocked prompt and acknowledgement."""

    def test_threads_updated_config(self, mock_controller):
        """A username created during one action should be used by the next."""
        start = HueConfig()
        registered = start.with_username('new-user')
        acknowledge = MagicMock()

        with patch('commands.menu.connect_to_bridge') as mock_connect, \
                patch('commands.menu.click.prompt') as mock_prompt:
            mock_connect.side_effect = [(mock_controller, registered), (mock_controller, registered)]
            mock_prompt.side_effect = ['1', '1', '4']

            result = run_menu(start, acknowledge)

        assert result == registered
        assert mock_connect.call_args_list[0].args[0] == start
        assert mock_connect.call_args_list[1].args[0] == registered
        assert acknowledge.call_count == 2

    def test_provisioning_failure_keeps_config(self):
        start = HueConfig()
        acknowledge = MagicMock()

        with patch('commands.menu.connect_to_bridge') as mock_connect, \
                patch('commands.menu.click.prompt') as mock_prompt:
            mock_connect.side_effect = LinkButtonNotPressed(101, 'link button not pressed')
            mock_prompt.side_effect = ['1', '4']

            result = run_menu(start, acknowledge)

        assert result == start
        acknowledge.assert_called_once_with()
