class DomainError(Exception):
    """Base exception for business rule violations."""

    code = "DOMAIN_ERROR"
    http_status = 400


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    code = "VALIDATION"


class NotFoundError(DomainError):
    code = "NOT_FOUND"
    http_status = 404


class AuthenticationError(DomainError):
    """Raised when the caller has no valid session."""

    code = "UNAUTHENTICATED"
    http_status = 401


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    code = "FORBIDDEN"
    http_status = 403


class InvalidPeriodError(ValidationError):
    """Reference year/month is not usable for the employee."""

    code = "INVALID_PERIOD"


class InvalidRangeError(ValidationError):
    """Leave end date lies before its start date, or covers no working day."""

    code = "INVALID_RANGE"


class NegativeSalaryError(ValidationError):
    code = "NEGATIVE_SALARY"


class OverlapError(DomainError):
    """Leave range intersects another non-rejected request of the employee."""

    code = "OVERLAP"
    http_status = 409


class InsufficientBalanceError(DomainError):
    code = "INSUFFICIENT_BALANCE"
    http_status = 422


class WrongStageError(DomainError):
    """Request is terminal, or the approver's step has already happened."""

    code = "WRONG_STAGE"
    http_status = 409


class UnauthorizedRoleError(AuthorizationError):
    """Approver role does not match the stage the request is waiting on."""

    code = "UNAUTHORIZED_ROLE"


class DuplicatePeriodError(DomainError):
    code = "DUPLICATE_PERIOD"
    http_status = 409


class OutOfBandError(DomainError):
    """Gross salary lies outside the position's salary band."""

    code = "OUT_OF_BAND"
    http_status = 422
