"""Identifier generation (CUID2) for primary keys."""

from cuid2 import cuid_wrapper

cuid_generator = cuid_wrapper()


def generate_cuid() -> str:
    """Return a new collision-resistant identifier (CUID2) for a row.

    Raises:
        TypeError: If the generator does not return a string.
    """
    value = cuid_generator()
    if not isinstance(value, str):
        raise TypeError(f"Expected str from cuid_generator, got {type(value).__name__}")
    return value
