"""
HTTP error taxonomy shared by repositories, controllers and gates.

Every user-facing failure is an ``HttpError`` carrying the HTTP status, the
short status phrase and a descriptive message. The error middleware is the
only place that turns one into a response.
"""


class HttpError(Exception):
    """Failure with an HTTP status, a status phrase and a message."""

    __slots__ = ("status", "status_message", "message")

    def __init__(self, status: int, status_message: str, message: str):
        super().__init__(message)
        object.__setattr__(self, "status", status)
        object.__setattr__(self, "status_message", status_message)
        object.__setattr__(self, "message", message)

    def __setattr__(self, name, value):
        if name in self.__slots__:
            raise AttributeError(f"HttpError.{name} is read-only")
        super().__setattr__(name, value)

    def __eq__(self, other):
        if not isinstance(other, HttpError):
            return NotImplemented
        return (self.status, self.status_message, self.message) == (
            other.status,
            other.status_message,
            other.message,
        )

    def __hash__(self):
        return hash((self.status, self.status_message, self.message))

    def __reduce__(self):
        return (type(self), (self.status, self.status_message, self.message))

    def __repr__(self):
        return (
            f"HttpError(status={self.status}, "
            f"status_message='{self.status_message}', message='{self.message}')"
        )


def not_found(message: str) -> HttpError:
    return HttpError(404, "Not Found", message)


def bad_request(message: str) -> HttpError:
    return HttpError(400, "Bad Request", message)


def unauthorized(message: str, status_message: str = "Not Authorized") -> HttpError:
    return HttpError(401, status_message, message)


def token_missing(message: str) -> HttpError:
    return HttpError(498, "Token not found", message)


__all__ = ["HttpError", "not_found", "bad_request", "unauthorized", "token_missing"]
