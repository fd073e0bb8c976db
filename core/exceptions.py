"""Exceptions raised while talking to a Hue Bridge."""


class HueError(Exception):
    """Base exception for all Hue Lights errors."""

    def __init__(self, code: int, message: str):
        self.code = code
        self.message = message
        super().__init__(message)


class NoBridgeFound(HueError):
    """Raised when no bridge address is configured and discovery finds none."""

    def __init__(self, message: str = "Could not find a Hue Bridge"):
        super().__init__(-1, message)


class BridgeRequestError(HueError):
    """Raised when a request to the bridge fails at the transport level."""

    pass


class BridgeApiError(HueError):
    """Raised when the bridge answers with an error entry.

    The code is the bridge's error type (e.g. 1 for an unauthorized user,
    101 for a link button that was not pressed).
    """

    pass


class UnauthorizedUser(BridgeApiError):
    """Raised when the bridge does not recognise the username."""

    pass


class ProvisioningFailed(HueError):
    """Raised when no authorised session could be produced."""

    pass


class LinkButtonNotPressed(ProvisioningFailed):
    """Raised when registration was refused because the link button was not pressed."""

    pass


class RegistrationError(ProvisioningFailed):
    """Raised when registration failed for any other reason."""

    pass


class InvalidLightId(HueError):
    """Raised when a light ID is not known to the bridge."""

    def __init__(self, light_id: int):
        self.light_id = light_id
        super().__init__(-1, f"Invalid light ID: {light_id}")
