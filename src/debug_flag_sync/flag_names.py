"""Normalization and validation of debug flag names."""

import re

FLAG_NAME_PATTERN = re.compile(r"^[A-Z_][A-Z0-9_]*$")


def normalize_flag_name(raw: str) -> str:
    """Trim surrounding whitespace and canonicalize case to upper case."""
    return raw.strip().upper()


def is_valid_flag_name(name: str) -> bool:
    """Check whether an already-normalized name is a well-formed flag name."""
    return bool(FLAG_NAME_PATTERN.match(name))
