"""Exceptions raised by the usage reports SDK."""

import httpx

# Error body keys checked in order when building a message
_MESSAGE_KEYS = ("error", "message", "errorMessage", "error_description")


class ApiError(Exception):
    """Error returned by a service operation.

    ``code`` is the HTTP status code, or 0 when the request never got a
    response (connection failure, timeout).
    """

    def __init__(
        self,
        code: int,
        message: str | None = None,
        http_response: httpx.Response | None = None,
    ) -> None:
        self.code = code
        self.http_response = http_response
        self.headers = http_response.headers if http_response is not None else httpx.Headers()
        self.global_transaction_id = self.headers.get("X-Global-Transaction-Id")
        self.message = message or self._message_from_response(http_response)
        super().__init__(self.message)

    def __str__(self) -> str:
        text = f"Error: {self.message}, Status code: {self.code}"
        if self.global_transaction_id:
            text += f", X-Global-Transaction-Id: {self.global_transaction_id}"
        return text

    @staticmethod
    def _message_from_response(response: httpx.Response | None) -> str:
        if response is None:
            return "Unknown error"

        try:
            data = response.json()
        except ValueError:
            data = None

        if isinstance(data, dict):
            errors = data.get("errors")
            if isinstance(errors, list) and errors and isinstance(errors[0], dict):
                message = errors[0].get("message")
                if message:
                    return str(message)
            for key in _MESSAGE_KEYS:
                value = data.get(key)
                if isinstance(value, str) and value:
                    return value

        return response.reason_phrase or "Unknown error"


class AuthenticationError(ApiError):
    """Raised when credentials could not be obtained or were rejected."""


class PagerExhaustedError(Exception):
    """Raised when a pager is asked for a page after the last one."""
