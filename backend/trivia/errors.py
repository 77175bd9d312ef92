"""Typed errors raised by the trivia services.

Route handlers translate these into JSON responses; anything that escapes a
handler is mapped to ``status_code`` by the app-level error handler.
"""


class TriviaError(Exception):
    status_code = 400

    def __init__(self, message):
        super().__init__(message)
        self.message = message

    def to_dict(self):
        return {'error': self.message}


class ValidationError(TriviaError):
    """Malformed or duplicate input."""
    status_code = 400


class AuthError(TriviaError):
    """Unknown credentials or access token."""
    status_code = 401


class NotFoundError(TriviaError):
    status_code = 404
