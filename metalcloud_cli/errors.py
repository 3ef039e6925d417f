"""
Errors — Exception hierarchy for the CLI

Every error the CLI raises on its own derives from MetalCloudCLIError so the
front end can turn it into a message and an exit code. Errors raised by the
API client are never wrapped; they reach the front end unchanged.
"""


class MetalCloudCLIError(Exception):
    """Base class for all errors raised by the CLI itself."""


class ArgumentError(MetalCloudCLIError):
    """A flag is missing, empty, or holds an invalid value."""


class EntityNotFoundError(ArgumentError):
    """An id-or-label did not match any entity."""


class AmbiguousLabelError(ArgumentError):
    """A label matched more than one entity."""


NOT_CONFIRMED_MESSAGE = "Operation not confirmed. Aborting"


class NotConfirmedError(MetalCloudCLIError):
    """A destructive operation was declined at the confirmation prompt."""

    def __init__(self, message: str = NOT_CONFIRMED_MESSAGE):
        super().__init__(message)


class RenderError(MetalCloudCLIError):
    """Table data does not match its schema or cannot be serialized."""


class UnknownCommandError(MetalCloudCLIError):
    """No registered command matches the subject/predicate pair."""

    def __init__(self, subject: str, predicate: str, suggestion: str = None):
        self.subject = subject
        self.predicate = predicate
        self.suggestion = suggestion
        message = f"Unknown command: {subject} {predicate}"
        if suggestion:
            message += f". Did you mean: {suggestion}?"
        super().__init__(message)


class AmbiguousCommandError(MetalCloudCLIError):
    """More than one registered command matches the subject/predicate pair."""


class ConfigError(MetalCloudCLIError):
    """Configuration is invalid or the API client cannot be created."""
