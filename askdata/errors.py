class AskDataError(Exception):
    """Base error class for query processing."""


class QueryValidationError(AskDataError):
    """Raised when the request body is missing its query or data."""


class ModelServiceError(AskDataError):
    """Raised when the language model call fails or is not configured."""
