"""Domain error codes for the checkout module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    INVALID_STEP = "INVALID_STEP"
    UNKNOWN_COMMAND = "UNKNOWN_COMMAND"
    INVALID_COMMAND = "INVALID_COMMAND"
    CHECKOUT_NOT_READY = "CHECKOUT_NOT_READY"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class InvalidStepError(DomainError):
    """Raised when a step name is not part of the wizard."""

    def __init__(self, step: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_STEP,
            message="Unknown checkout step",
        )
        object.__setattr__(self, "step", step)


class UnknownCommandError(DomainError):
    """Raised when a command type is not recognised."""

    def __init__(self, command_type: str) -> None:
        super().__init__(
            code=ErrorCode.UNKNOWN_COMMAND,
            message="Unknown checkout command",
        )
        object.__setattr__(self, "command_type", command_type)


class InvalidCommandError(DomainError):
    """Raised when a command payload fails validation."""

    def __init__(self, errors: dict) -> None:
        super().__init__(
            code=ErrorCode.INVALID_COMMAND,
            message="Invalid command payload",
        )
        object.__setattr__(self, "errors", errors)


class CheckoutNotReadyError(DomainError):
    """Raised when a registration is requested before the checkout is complete."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            code=ErrorCode.CHECKOUT_NOT_READY,
            message=reason,
        )
