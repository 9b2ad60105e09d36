"""Custom exceptions for the search portal API."""


class PortalError(Exception):
    """Base exception for the search portal API."""

    pass


class ConfigurationError(PortalError):
    """Exception raised for configuration errors (e.g. a required API key is missing)."""

    pass


class UpstreamError(PortalError):
    """Exception raised when a required upstream API returns an error."""

    def __init__(self, source: str, status_code: int, message: str, response_text: str = ""):
        self.source = source
        self.status_code = status_code
        self.message = message
        self.response_text = response_text
        super().__init__(message)


class NetworkError(PortalError):
    """Exception raised for network/connection errors."""

    pass


class QueryValidationError(PortalError):
    """Exception raised when the request carries no usable query."""

    def __init__(self, message: str = "Query is required"):
        super().__init__(message)
