# faraid/errors.py

from typing import Optional


class FaraidError(Exception):
    """Base error for every rejected calculation."""

    code = "FARAID_ERROR"
    status_code = 400

    def __init__(self, message: str, stage: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.stage = stage

    def to_detail(self) -> dict:
        return {"code": self.code, "message": self.message}


class InvalidInput(FaraidError):
    code = "INVALID_INPUT"
    status_code = 400


class NoEligibleHeirs(FaraidError):
    code = "NO_ELIGIBLE_HEIRS"
    status_code = 422


class ArithmeticInvariantViolation(FaraidError):
    # Always a defect in the rule tables, never a user error
    code = "ARITHMETIC_INVARIANT_VIOLATION"
    status_code = 500
