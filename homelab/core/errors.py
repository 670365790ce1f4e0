"""Errors raised while declaring the homelab."""
import pulumi


class HomelabError(Exception):
    """Base class for homelab errors."""


class ConfigValidationError(HomelabError):
    """Raised when stack configuration is malformed."""


class MissingInputError(HomelabError, pulumi.RunError):
    """Raised when a declaration is missing a required input.

    As a ``pulumi.RunError`` the engine reports only the message, without
    a Python traceback.
    """

    def __init__(self, declaration: str, field: str):
        self.declaration = declaration
        self.field = field
        super().__init__(f"{declaration}: {field} must be provided")
