GENERIC_ERROR = "An error occurred processing your request. Please try again."

UPSTREAM_MESSAGES = {
    429: "Service is busy. Please try again shortly.",
    402: "Service unavailable. Please contact support.",
    400: "Invalid request. Please check your input.",
    500: "Service temporarily unavailable. Please try again.",
}


class GatewayError(Exception):
    """Base for failures that map to a stable JSON error response."""

    status = 500
    message = GENERIC_ERROR

    def __init__(self, message=None, status=None):
        if message is not None:
            self.message = message
        if status is not None:
            self.status = status
        super().__init__(self.message)

    def to_body(self) -> dict:
        return {"error": self.message}


class AuthenticationMissing(GatewayError):
    status = 401
    message = "Authentication required"


class InvalidInput(GatewayError):
    status = 400
    message = "Invalid input"

    def __init__(self, details):
        self.details = list(details)
        super().__init__()

    def to_body(self) -> dict:
        return {"error": self.message, "details": self.details}


class UpstreamRejected(GatewayError):
    """Upstream answered with a non-success status."""

    def __init__(self, upstream_status: int, upstream_body: str = ""):
        self.upstream_status = upstream_status
        self.upstream_body = upstream_body
        status = upstream_status if upstream_status in UPSTREAM_MESSAGES else 500
        message = UPSTREAM_MESSAGES[status]
        super().__init__(message, status)


class UpstreamUnavailable(GatewayError):
    """Upstream could not be reached or the gateway is not configured.

    The detail passed in is for the server log; the response keeps the
    generic message.
    """

    def __init__(self, detail: str = ""):
        self.detail = detail
        super().__init__()
