"""Tests for the Overlapping Template Matching test."""

from __future__ import annotations

import numpy as np
import pytest
from scipy.special import gammaincc

from conftest import random_bits
from nist_sts.core.errors import InvalidInputError, InvalidParameterError
from nist_sts.services.nist.bit_string import to_bit_array
from nist_sts.services.nist.tests.overlapping_template_test import (
    OverlappingTemplateTest,
    count_matches,
    format_test_report,
    template_counts,
)


@pytest.mark.parametrize(
    ('block', 'template', 'expected'),
    [('111', '11', 2), ('1111', '11', 3), ('0101010', '010', 3), ('000', '11', 0)],
)
def test_count_matches_overlaps(block: str, template: str, expected: int) -> None:
    assert count_matches(block, template) == expected


def test_template_counts_overlaps() -> None:
    counts = template_counts(to_bit_array('111').reshape(1, 3), 2)

    # columns are templates 00, 01, 10, 11
    assert counts.tolist() == [[0, 0, 0, 2]]


def test_template_counts_agree_with_count_matches() -> None:
    m = 4
    blocks = to_bit_array(random_bits(2000)).reshape(2, 1000)
    counts = template_counts(blocks, m)

    assert counts.shape == (2, 1 << m)
    for block_index, block in enumerate(blocks):
        block_string = ''.join(map(str, block))
        for template in range(1 << m):
            assert counts[block_index, template] == count_matches(block_string, format(template, f'0{m}b'))
        assert counts[block_index].sum() == 1000 - m + 1


def test_all_zeros_matches_closed_form() -> None:
    n, N, m = 10_000, 8, 9
    M = n // N
    mean = (M - m + 1) / 2**m
    variance = M * (1 / 2**m - (2 * m - 1) / 2 ** (2 * m))

    chi_zero_template = N * (M - m + 1 - mean) ** 2 / variance
    chi_other_templates = N * mean**2 / variance
    expected = (
        gammaincc(N / 2, chi_zero_template / 2) + (2**m - 1) * gammaincc(N / 2, chi_other_templates / 2)
    ) / 2**m

    result = OverlappingTemplateTest(template_length=m, number_of_blocks=N).test('0' * n)

    assert result.statistics['M'] == M
    assert result.statistics['mean'] == pytest.approx(mean)
    assert result.statistics['variance'] == pytest.approx(variance)
    assert result.statistics['worst_template'] == '000000000'
    assert result.p_value == pytest.approx(expected)
    assert result.statistics['min_p_value'] < 1e-10


def test_random_sequence() -> None:
    result = OverlappingTemplateTest(template_length=9, number_of_blocks=8).test(random_bits(100_000))
    stats = result.statistics

    assert stats['number_of_templates'] == 512
    assert 0.0 <= stats['min_p_value'] <= result.p_value <= stats['max_p_value'] <= 1.0
    # below the recommended million bits
    assert len(result.advisories) == 1


def test_is_idempotent() -> None:
    sequence = random_bits(5000)
    test = OverlappingTemplateTest(template_length=5, number_of_blocks=4)

    assert test.test(sequence).p_value == test.test(sequence).p_value


def test_non_recommended_template_length_is_an_advisory() -> None:
    result = OverlappingTemplateTest(template_length=4, number_of_blocks=8).test(random_bits(4000))

    assert any('Recommended size for template length' in advisory for advisory in result.advisories)


@pytest.mark.parametrize(
    ('template_length', 'number_of_blocks', 'length'),
    [
        (1, 8, 10_000),
        (11, 8, 10_000),
        (9, 0, 10_000),
        (9, 100, 10_000),
        (9, 101, 10_000),
        # M = 0 <= n // 100
        (2, 99, 50),
        # M = 5 shorter than the template
        (9, 1, 5),
    ],
)
def test_invalid_parameters(template_length: int, number_of_blocks: int, length: int) -> None:
    test = OverlappingTemplateTest(template_length=template_length, number_of_blocks=number_of_blocks)

    with pytest.raises(InvalidParameterError) as excinfo:
        test.test(random_bits(length))

    assert excinfo.value.test_name == 'Overlapping Template Test'


def test_invalid_character_is_rejected() -> None:
    with pytest.raises(InvalidInputError):
        OverlappingTemplateTest().test('01x' * 1000)


def test_format_test_report() -> None:
    result = OverlappingTemplateTest(template_length=9, number_of_blocks=8).test('0' * 10_000)
    report = format_test_report(result)

    assert 'OVERLAPPING TEMPLATE MATCHING TEST' in report
    assert 'p_value = ' in report
    assert '000000000' in report


def test_template_counts_dtype() -> None:
    counts = template_counts(np.zeros((3, 20), dtype=np.uint8), 3)

    assert counts[:, 0].tolist() == [18, 18, 18]
    assert counts[:, 1:].sum() == 0


def test_zero_chi_squared_gives_p_value_one() -> None:
    """Every 2-bit template occurs exactly mean = 1 times in '00110'"""

    result = OverlappingTemplateTest(template_length=2, number_of_blocks=1).test('00110')

    assert result.statistics['mean'] == 1.0
    assert result.statistics['worst_template_chi_squared'] == 0.0
    assert result.statistics['min_p_value'] == 1.0
    assert result.p_value == 1.0
    assert result.success is True


def test_hundred_blocks_is_above_the_ceiling() -> None:
    test = OverlappingTemplateTest(template_length=10, number_of_blocks=100)

    with pytest.raises(InvalidParameterError) as excinfo:
        test.test(random_bits(100_000))

    assert 'between 1 and 99' in str(excinfo.value)
    assert excinfo.value.expected == (1, 99)


def test_ninety_nine_blocks_is_accepted() -> None:
    result = OverlappingTemplateTest(template_length=9, number_of_blocks=99).test(random_bits(100_000))

    assert result.statistics['N'] == 99
    assert result.statistics['M'] == 100_000 // 99
