"""Custom exceptions for pushrisk."""


class PushRiskError(Exception):
    """Base exception for all pushrisk errors."""


class InputError(PushRiskError):
    """The scoring request is malformed or fails validation."""


class InvariantError(PushRiskError):
    """The engine produced output outside its closed vocabulary or bounds.

    Always a defect in the engine, never a problem with the request.
    """


class ConfigError(PushRiskError):
    """Configuration-related errors."""


class EngineError(PushRiskError):
    """A subprocess invocation of the engine failed."""

    def __init__(self, reason: str, detail: str = ""):
        self.reason = reason
        self.detail = detail
        message = reason if not detail else f"{reason}: {detail}"
        super().__init__(message)
