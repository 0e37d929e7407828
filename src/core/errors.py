class NodeError(Exception):
    """Base exception for light node operations."""

    pass


class ConfigurationError(NodeError):
    """Raised when configuration is invalid."""

    pass


class NetworkError(NodeError):
    """Raised when the network event loop fails to answer a command."""

    pass


class EventStreamError(NodeError):
    """Raised when a block event stream lagged behind or was closed."""

    pass


class MaintenanceError(NodeError):
    """A hard maintenance failure, optionally annotated with what was attempted."""

    def __init__(self, context: str | None, cause: BaseException):
        self.context = context
        self.cause = cause
        cause_text = str(cause) or type(cause).__name__
        message = f"{context}: {cause_text}" if context else cause_text
        super().__init__(message)
