"""
Tests for order identifier generation.
"""
import random
import re

import pytest

from domain.constants import ORDER_ID_ALPHABET
from services.order_id import generate_order_id

_PATTERN = re.compile(r"ST-[0-9A-Za-z]{12}")


@pytest.mark.unit
def test_alphabet_has_62_symbols():
    assert len(ORDER_ID_ALPHABET) == 62
    assert len(set(ORDER_ID_ALPHABET)) == 62


@pytest.mark.unit
def test_format():
    rng = random.Random(2024)
    for _ in range(200):
        assert _PATTERN.fullmatch(generate_order_id(rng))


@pytest.mark.unit
def test_system_random_source():
    assert _PATTERN.fullmatch(generate_order_id(random.SystemRandom()))


@pytest.mark.unit
def test_same_seed_same_ids():
    a, b = random.Random(99), random.Random(99)
    assert [generate_order_id(a) for _ in range(5)] == [generate_order_id(b) for _ in range(5)]


@pytest.mark.unit
def test_custom_prefix_and_length():
    code = generate_order_id(random.Random(1), prefix="QA-", length=6)
    assert re.fullmatch(r"QA-[0-9A-Za-z]{6}", code)


@pytest.mark.unit
def test_draws_from_whole_alphabet():
    """Every symbol shows up given enough draws (uniform, not e.g. digits only)."""
    rng = random.Random(5)
    seen = set("".join(generate_order_id(rng)[3:] for _ in range(500)))
    assert seen == set(ORDER_ID_ALPHABET)
