"""Exceptions métier, traduites en réponses HTTP dans app.main"""

from fastapi import status


class TickrError(Exception):
    status_code = status.HTTP_400_BAD_REQUEST
    kind = "error"
    default_message = "Request failed"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFound(TickrError):
    status_code = status.HTTP_404_NOT_FOUND
    kind = "not_found"
    default_message = "Not found"


class ConstraintViolation(TickrError):
    status_code = status.HTTP_409_CONFLICT
    kind = "constraint_violation"
    default_message = "Record already exists"


class AlreadyInFocus(TickrError):
    status_code = status.HTTP_400_BAD_REQUEST
    kind = "already_in_focus"
    default_message = "Task is already in focus mode"


class AggregationFailed(TickrError):
    # lecture seule : le client peut réessayer
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    kind = "aggregation_failed"
    default_message = "Failed to fetch analytics, please retry"


class ValidationError(TickrError):
    status_code = status.HTTP_400_BAD_REQUEST
    kind = "validation_error"
    default_message = "Invalid input"
