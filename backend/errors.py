"""Errors raised while extracting a workout.

Every error carries the HTTP status the endpoint answers with and a message
that is shown to the user as-is.
"""


class WorkoutError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInputError(WorkoutError):
    """Malformed URL, empty text, or nothing usable in manual input."""

    status_code = 400


class NotFoundError(WorkoutError):
    """No usable transcript, or no exercises found in it."""

    status_code = 404


class UpstreamError(WorkoutError):
    """The model or another remote service could not be reached."""

    status_code = 500


class ParseError(WorkoutError):
    """The model answered with something that is not a workout JSON object."""

    status_code = 500
