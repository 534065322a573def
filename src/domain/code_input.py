"""
One-time code input validation.

Pure functions applied to whatever the user types into the code field.
"""

CODE_LENGTH = 6


def normalize_code(raw: str) -> str:
    """
    Keep only ASCII digits from raw input, truncated to CODE_LENGTH.

    Total over its input: never raises, returns "" for empty input.
    """
    digits = "".join(ch for ch in raw if ch in "0123456789")
    return digits[:CODE_LENGTH]


def is_complete(code: str) -> bool:
    """True iff the code has exactly CODE_LENGTH characters."""
    return len(code) == CODE_LENGTH
