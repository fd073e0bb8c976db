"""HueController class for managing Hue Bridge API interactions.

This module contains the session handle that talks to a single Philips Hue
Bridge using the v1 REST API (numeric light IDs, username in the URL path).
"""

import requests
from requests.packages.urllib3.exceptions import InsecureRequestWarning

from core.exceptions import (
    BridgeApiError,
    BridgeRequestError,
    InvalidLightId,
    UnauthorizedUser,
)
from models.types import Light

# Bridge error types (v1 API)
ERROR_UNAUTHORIZED_USER = 1
ERROR_LINK_BUTTON_NOT_PRESSED = 101

# Brightness range accepted by the bridge
MIN_BRI = 1
MAX_BRI = 254

REQUEST_TIMEOUT = 5
REGISTRATION_TIMEOUT = 10

# Disable SSL warnings for self-signed certificate
requests.packages.urllib3.disable_warnings(InsecureRequestWarning)


def percent_to_bri(brightness: int) -> int:
    """Convert a 0-100 brightness percentage to the bridge's 1-254 range."""
    if not 0 <= brightness <= 100:
        raise ValueError(f"Brightness must be between 0 and 100, got {brightness}")
    return max(MIN_BRI, round(brightness * MAX_BRI / 100))


def _raise_for_bridge_error(result) -> None:
    """Raise if a v1 response contains an error entry.

    The bridge answers most failures with HTTP 200 and a body like
    [{"error": {"type": 1, "address": "/lights", "description": "unauthorized user"}}]
    """
    if not isinstance(result, list):
        return

    for entry in result:
        if isinstance(entry, dict) and 'error' in entry:
            error = entry['error']
            error_type = error.get('type', -1)
            description = error.get('description', 'Unknown error')

            if error_type == ERROR_UNAUTHORIZED_USER:
                raise UnauthorizedUser(error_type, description)
            raise BridgeApiError(error_type, description)


class HueController:
    """Manages connection and operations with a Philips Hue Bridge using API v1."""

    def __init__(self, bridge_ip: str, username: str | None = None):
        """Initialise HueController.

        Args:
            bridge_ip: Bridge IP address or hostname
            username: API username (None for an unauthenticated handle used to register)
        """
        self.bridge_ip = bridge_ip
        self.username = username
        self.base_url = f"https://{bridge_ip}/api"
        self.session = requests.Session()
        self.session.verify = False  # Accept self-signed certificate

    def _request(self, method: str, endpoint: str = '', data: dict | None = None,
                 timeout: int = REQUEST_TIMEOUT):
        """Make a request to the Hue Bridge API v1.

        Raises:
            BridgeRequestError: If the request fails or the body is not JSON
            BridgeApiError: If the bridge returns an error entry
        """
        url = f"{self.base_url}{endpoint}"

        try:
            response = self.session.request(method, url, json=data, timeout=timeout, verify=False)
            response.raise_for_status()
            result = response.json()
        except requests.exceptions.Timeout as e:
            raise BridgeRequestError(-1, f"{method} request to {url} timed out") from e
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else -1
            raise BridgeRequestError(status, f"{method} request to {url} failed with status code {status}") from e
        except (requests.exceptions.RequestException, ValueError) as e:
            raise BridgeRequestError(-1, f"{method} request to {url} failed: {e}") from e

        _raise_for_bridge_error(result)
        return result

    def _user_endpoint(self, path: str) -> str:
        if not self.username:
            raise UnauthorizedUser(ERROR_UNAUTHORIZED_USER, "No username set for this bridge")
        return f"/{self.username}{path}"

    def verify(self) -> None:
        """Check that the bridge accepts our username.

        Raises:
            UnauthorizedUser: If the username is unknown to the bridge
            BridgeRequestError: If the bridge cannot be reached
        """
        self.get_lights()

    def create_user(self, app_name: str, device_name: str) -> str:
        """Register a new API user on the bridge.

        The bridge only accepts this within 30 seconds of its link button
        being pressed.

        Args:
            app_name: Application name
            device_name: Device name

        Returns:
            The new username

        Raises:
            BridgeApiError: With code 101 if the link button was not pressed
        """
        payload = {"devicetype": f"{app_name}#{device_name}"}
        result = self._request('POST', '', payload, timeout=REGISTRATION_TIMEOUT)

        try:
            return result[0]['success']['username']
        except (IndexError, KeyError, TypeError) as e:
            raise BridgeRequestError(-1, f"Failed to parse registration response: {result!r}") from e

    def get_lights(self) -> list[Light]:
        """Get all lights with their current state, ordered by ID."""
        result = self._request('GET', self._user_endpoint('/lights'))
        if not isinstance(result, dict):
            raise BridgeRequestError(-1, f"Unexpected response from bridge at {self.bridge_ip}")

        lights = []
        try:
            for light_id, data in result.items():
                state = data.get('state', {})
                lights.append({
                    'id': int(light_id),
                    'name': data.get('name', 'Unknown'),
                    'on': bool(state.get('on', False)),
                    'hue': state.get('hue'),
                })
        except (ValueError, AttributeError, TypeError) as e:
            raise BridgeRequestError(-1, f"Failed to parse lights from bridge at {self.bridge_ip}: {e}") from e

        return sorted(lights, key=lambda light: light['id'])

    def get_light(self, light_id: int) -> Light | None:
        """Get a light by ID. Returns None if the bridge does not know it."""
        for light in self.get_lights():
            if light['id'] == light_id:
                return light
        return None

    def set_light_state(self, light_id: int, state: dict) -> None:
        """Set the state of a light (v1 API)."""
        self._request('PUT', self._user_endpoint(f'/lights/{light_id}/state'), state)

    def set_light_on(self, light_id: int, brightness: int = 100) -> Light:
        """Turn a light on at a brightness percentage (0-100).

        Raises:
            InvalidLightId: If the light does not exist; nothing is sent
        """
        bri = percent_to_bri(brightness)
        light = self.get_light(light_id)
        if light is None:
            raise InvalidLightId(light_id)

        self.set_light_state(light_id, {'on': True, 'bri': bri})
        return light

    def set_light_off(self, light_id: int) -> Light:
        """Turn a light off.

        Raises:
            InvalidLightId: If the light does not exist; nothing is sent
        """
        light = self.get_light(light_id)
        if light is None:
            raise InvalidLightId(light_id)

        self.set_light_state(light_id, {'on': False})
        return light
