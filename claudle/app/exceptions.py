"""Custom exceptions for the game server."""


class ClaudleException(Exception):
    """Base class for game server exceptions with HTTP status code.

    Subclasses define their own status_code so the exception handlers in
    ``main`` can map them to responses consistently.
    """
    status_code: int = 500
    error_code: str = "internal_error"

    def __init__(self, message: str = "Game server error"):
        self.message = message
        super().__init__(message)


class InvalidInputError(ClaudleException):
    """Raised when a guess or target word is not five uppercase letters.

    Maps to HTTP 400 Bad Request.
    """
    status_code = 400
    error_code = "invalid_input"

    def __init__(self, field: str, value: object, message: str | None = None):
        self.field = field
        self.value = value
        super().__init__(
            message or f"{field} must be exactly 5 letters A-Z, got {value!r}"
        )


class GameOverError(ClaudleException):
    """Raised when a guess is submitted to a finished game.

    Maps to HTTP 409 Conflict.
    """
    status_code = 409
    error_code = "game_over"

    def __init__(self, game_state: str):
        self.game_state = game_state
        super().__init__(f"Game is already {game_state}")


class RateLimitExceededError(ClaudleException):
    """Raised when a client exhausts a route's request window.

    Maps to HTTP 429 Too Many Requests.
    """
    status_code = 429
    error_code = "rate_limit_exceeded"

    def __init__(self, route: str, retry_after: int):
        self.route = route
        self.retry_after = retry_after
        super().__init__("Too many requests. Try again later.")


class ProviderError(ClaudleException):
    """Raised when the LLM provider fails or returns an unusable reply.

    Maps to HTTP 502 Bad Gateway.
    """
    status_code = 502
    error_code = "provider_error"


class MissingApiKeyError(ProviderError):
    """Raised when no Anthropic API key is configured at call time.

    Maps to HTTP 503 Service Unavailable.
    """
    status_code = 503
    error_code = "missing_api_key"

    def __init__(self, message: str = "ANTHROPIC_API_KEY environment variable is required"):
        super().__init__(message)
