"""Error taxonomy for score submission and leaderboard queries.

Every error carries the HTTP status it maps to; the API blueprint turns
them into ``{"success": false, "error": ...}`` responses.
"""


class ScoreServerError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ScoreServerError):
    """A required field is missing, mistyped or empty."""
    status_code = 400


class FormatError(ScoreServerError):
    """The submitted timestamp does not decompose into six numeric fields."""
    status_code = 400


class IntegrityError(ScoreServerError):
    """The claimed digest does not match the recomputed one."""
    status_code = 403


class StorageError(ScoreServerError):
    """The durable store failed to read or write."""
    status_code = 500
