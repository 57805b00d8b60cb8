from __future__ import annotations

import numpy as np
import pytest


def random_bits(length: int, seed: int = 2024) -> str:
    rng = np.random.default_rng(seed)
    return ''.join(map(str, rng.integers(0, 2, size=length)))


def balanced_bits(length: int, seed: int = 2024) -> str:
    """Random half followed by its complement, so the monobit gate always passes"""
    half = random_bits(length // 2, seed)
    return half + half.translate(str.maketrans('01', '10'))


@pytest.fixture
def balanced_sequence() -> str:
    return balanced_bits(20_000)
