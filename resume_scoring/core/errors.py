from __future__ import annotations


class ScoringError(RuntimeError):
    def __init__(self, message: str, *, code: str = "scoring_error"):
        super().__init__(message)
        self.code = code


class ValidationError(ScoringError):
    """Input text rejected before any scoring work is done."""

    def __init__(self, field: str, minimum: int, *, actual: int | None = None):
        message = f"{field} must be at least {minimum} characters"
        if actual is not None:
            message = f"{message} (got {actual})"
        super().__init__(message, code="validation_error")
        self.field = field
        self.minimum = minimum
        self.actual = actual


class ExternalCallError(ScoringError):
    def __init__(self, message: str, *, code: str = "ai_unavailable"):
        super().__init__(message, code=code)


class ConfigurationIntegrityError(ScoringError):
    def __init__(self, message: str):
        super().__init__(message, code="weights_invalid")


class ConfigurationNotFoundError(ScoringError, KeyError):
    def __init__(self, config_id: str):
        super().__init__(f"Weight configuration '{config_id}' does not exist", code="config_not_found")
        self.config_id = config_id

    def __str__(self) -> str:
        return RuntimeError.__str__(self)
