# gradebook/exceptions.py


class GradebookError(Exception):
    """Base class for errors raised by the gradebook."""

    status_code = 500

    def __init__(self, message: str, detail: dict = None):
        super().__init__(message)
        self.message = message
        self.detail = detail or {}


class InvalidInputError(GradebookError):
    """
    Input that breaks the grade engine's contract: a score outside
    [0, max_score], a weight outside (0, 100], a non-positive max score
    or a non-finite number.
    """

    status_code = 422


class NotFoundError(GradebookError):
    status_code = 404
