"""
Order identifier generation.

Codes are short and human-shareable ("ST-4fK9x0LmQ2aZ"), not secrets. The
entropy source is passed in so callers can substitute a seeded generator.
"""
import random

from domain.constants import ORDER_ID_ALPHABET, ORDER_ID_LENGTH, ORDER_ID_PREFIX


def generate_order_id(
    rng: random.Random,
    *,
    prefix: str = ORDER_ID_PREFIX,
    length: int = ORDER_ID_LENGTH,
) -> str:
    """Draw `length` symbols uniformly from [0-9A-Za-z] and prepend `prefix`."""
    return prefix + "".join(rng.choice(ORDER_ID_ALPHABET) for _ in range(length))
