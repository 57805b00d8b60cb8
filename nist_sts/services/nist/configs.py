"""Length dependent parameters for block structured tests.

The tables below are the constants published in NIST SP 800-22 (section 2.4
and the reference ``assess`` implementation). They are fixed data and must not
be re-derived.
"""

import math
from dataclasses import dataclass
from typing import Final

from nist_sts.core.errors import UnsupportedLengthError
from nist_sts.core.logger import get_logger

logger = get_logger(__name__)

LONGEST_RUN_TEST_NAME: Final[str] = 'Longest Runs of Ones Test'
LONGEST_RUN_MIN_LENGTH: Final[int] = 128


@dataclass(frozen=True)
class BlockConfig:
    """Partitioning of one length bucket, before the block count is known"""

    M: int  # Block length
    thresholds: tuple[int, int]  # Categories <= min and >= max are merged
    pi: tuple[float, ...]  # Theoretical probabilities, one per merged category

    def __post_init__(self) -> None:
        low, high = self.thresholds
        if high - low + 1 != len(self.pi):
            raise ValueError(f'Thresholds {self.thresholds} do not match {len(self.pi)} probabilities')
        if not math.isclose(sum(self.pi), 1.0, abs_tol=1e-6):
            raise ValueError(f'Probabilities sum to {sum(self.pi)}, expected 1')

    @property
    def K(self) -> int:
        """Degrees of freedom"""
        return len(self.pi) - 1


@dataclass(frozen=True)
class LengthBucket:
    start: int
    stop: int | None  # None means unbounded
    config: BlockConfig

    def __contains__(self, length: int) -> bool:
        return length >= self.start and (self.stop is None or length < self.stop)


@dataclass(frozen=True)
class LongestRunConfig:
    """Configuration bound to a concrete sequence length"""

    block_size: int
    number_of_blocks: int
    thresholds: tuple[int, int]
    pi_values: tuple[float, ...]

    @property
    def degrees_of_freedom(self) -> int:
        return len(self.pi_values) - 1

    @property
    def categories(self) -> tuple[int, ...]:
        low, high = self.thresholds
        return tuple(range(low, high + 1))


LONGEST_RUN_BUCKETS: Final[tuple[LengthBucket, ...]] = (
    LengthBucket(
        start=LONGEST_RUN_MIN_LENGTH,
        stop=6272,
        config=BlockConfig(M=8, thresholds=(1, 4), pi=(0.21484375, 0.3671875, 0.23046875, 0.1875)),
    ),
    LengthBucket(
        start=6272,
        stop=750000,
        config=BlockConfig(
            M=128,
            thresholds=(4, 9),
            pi=(0.1174035788, 0.242955959, 0.249363483, 0.17517706, 0.102701071, 0.112398847),
        ),
    ),
    LengthBucket(
        start=750000,
        stop=None,
        config=BlockConfig(
            M=10000,
            thresholds=(10, 16),
            pi=(0.0882, 0.2092, 0.2483, 0.1933, 0.1208, 0.0675, 0.0727),
        ),
    ),
)


def select_config(
    length: int,
    buckets: tuple[LengthBucket, ...],
    test_name: str,
) -> LongestRunConfig:
    """
    Pick the bucket holding ``length`` and bind its parameters to that length

    Args:
        length: Validated bit string length
        buckets: Ordered, contiguous length buckets
        test_name: Name of the calling test, used in messages

    Returns:
        LongestRunConfig: Block size, block count N = floor(length / M), thresholds and pi table

    Raises:
        UnsupportedLengthError: The length is below the first bucket
    """
    floor = buckets[0].start
    if length < floor:
        raise UnsupportedLengthError(
            f'Bit string needs at least {floor} bits! Actual length: {length}',
            test_name=test_name,
            observed=length,
            expected=floor,
        )

    bucket = next(bucket for bucket in buckets if length in bucket)
    config = LongestRunConfig(
        block_size=bucket.config.M,
        number_of_blocks=length // bucket.config.M,
        thresholds=bucket.config.thresholds,
        pi_values=bucket.config.pi,
    )
    logger.debug(f'{test_name}: Configured following values: {config}')
    return config


def select_longest_run_config(length: int) -> LongestRunConfig:
    return select_config(length, LONGEST_RUN_BUCKETS, LONGEST_RUN_TEST_NAME)


__all__ = [
    'LONGEST_RUN_BUCKETS',
    'LONGEST_RUN_MIN_LENGTH',
    'BlockConfig',
    'LengthBucket',
    'LongestRunConfig',
    'select_config',
    'select_longest_run_config',
]
