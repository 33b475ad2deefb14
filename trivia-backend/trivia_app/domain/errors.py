from typing import Optional

# Open Trivia DB response codes
RESPONSE_CODE_MESSAGES = {
    1: "Not enough questions for the requested difficulty/amount",
    2: "Invalid parameter",
    3: "Session token not found",
    4: "Session token has returned all possible questions",
    5: "Rate limit exceeded",
}


class AcquisitionError(Exception):
    """A batch of questions could not be acquired. No partial results exist."""


class NetworkFailure(AcquisitionError):
    """The question fetch itself did not complete."""


class SourceUnavailable(AcquisitionError):
    """The trivia source answered but gave no usable questions."""

    def __init__(self, message: str, response_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.response_code = response_code

    @classmethod
    def from_response_code(cls, code: int) -> "SourceUnavailable":
        reason = RESPONSE_CODE_MESSAGES.get(code, "Unknown response code")
        return cls(f"Trivia source returned code {code}: {reason}", response_code=code)


class InvalidTransition(RuntimeError):
    """An engine operation was called in a state where it is not allowed."""


class NoActiveGame(InvalidTransition):
    pass
