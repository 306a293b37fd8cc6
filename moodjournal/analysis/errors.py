"""
Errors raised by the analysis pipeline. Each carries the HTTP status the API
layer answers with; the message is what the client sees under `error`.
"""


class AnalysisError(Exception):
    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InputError(AnalysisError):
    """Missing or empty journal text (or other required input)."""

    status_code = 400


class ConfigurationError(AnalysisError):
    """The AI gateway credential is not configured."""

    status_code = 503


class GatewayError(AnalysisError):
    """Generic upstream failure: non-2xx status, transport error, empty reply."""

    status_code = 500


class RateLimitedError(GatewayError):
    status_code = 429

    def __init__(self, message: str = "Rate limit exceeded. Please try again in a moment."):
        super().__init__(message)


class UsageLimitError(GatewayError):
    status_code = 402

    def __init__(self, message: str = "AI usage limit reached. Please add credits to continue."):
        super().__init__(message)


class SchemaViolationError(AnalysisError):
    """The model returned valid JSON that is missing required keys."""

    status_code = 500
