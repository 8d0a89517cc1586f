"""Errors raised while evaluating a round. Every one of them ends the run."""


class EvaluationError(Exception):
    """Base class. ``hint`` is a short remediation printed next to the message."""

    hint = "Check the logs above for details"

    def __init__(self, message, hint=None):
        super().__init__(message)
        if hint is not None:
            self.hint = hint


class ConfigError(EvaluationError):
    hint = "Set the PRIVATE_KEY environment variable"


class SourceNotFoundError(EvaluationError, FileNotFoundError):
    hint = "Ensure the CSV file exists and has the correct format"


class InvalidSourceError(EvaluationError, ValueError):
    hint = "Check input format: the CSV must be UTF-8 text with a header row"


class InvalidPercentageError(EvaluationError, ValueError):
    hint = "Check the '% of votes received' column"


class EmptyInputError(EvaluationError, ValueError):
    hint = "Check input format: no valid project rows"


class AllocationInvariantError(EvaluationError, ArithmeticError):
    hint = "Allocation totals are inconsistent; do not submit"


class SubmissionError(EvaluationError, RuntimeError):
    """Wraps any failure of the evaluate transaction."""

    def __init__(self, message, hint=None, tx_hash=None):
        super().__init__(message, hint=hint or suggest_fix(message))
        self.tx_hash = tx_hash


def suggest_fix(message):
    text = str(message)
    lowered = text.lower()
    if "UNPREDICTABLE_GAS_LIMIT" in text or "gas" in lowered:
        return "Try increasing gas limit or using a different RPC provider"
    if "CALL_EXCEPTION" in text or "revert" in lowered:
        return "Check contract state, permissions, and data format"
    return "Check RPC endpoint and credential"
