import numpy as np

from nist_sts.core.errors import InvalidInputError
from nist_sts.core.logger import get_logger

logger = get_logger(__name__)

ZERO: int = ord('0')
ONE: int = ord('1')


def normalize_bit_string(bit_string: str | bytes) -> str:
    """Return the sequence as ``str``; ASCII ``bytes`` are decoded, anything else is rejected"""
    if isinstance(bit_string, bytes):
        try:
            return bit_string.decode('ascii')
        except UnicodeDecodeError as e:
            raise InvalidInputError('Bit string contains non-ASCII data') from e
    if isinstance(bit_string, str):
        return bit_string
    raise InvalidInputError(f'Unsupported input format: {type(bit_string).__name__}')


def to_bit_array(bit_string: str) -> np.ndarray:
    """Convert an already validated bit string to a uint8 array of 0s and 1s"""
    return np.frombuffer(bit_string.encode('ascii'), dtype=np.uint8) - ZERO


def length_advisory(test_name: str, length: int, recommended_length: int) -> str | None:
    if length >= recommended_length:
        return None
    return (
        f'{test_name}: Recommended size is at least {recommended_length} bits, got {length}. '
        'Consider imprecision when interpreting the p-value'
    )


def evaluate_bit_string(test_name: str, bit_string: str | bytes, recommended_length: int) -> int:
    """
    Check that the bit string is usable by a test and return its length

    Args:
        test_name: Name of the calling test, used in messages
        bit_string: Candidate sequence of '0' and '1' characters
        recommended_length: Length below which results lose precision. Not an error

    Returns:
        int: Length of the bit string

    Raises:
        InvalidInputError: The sequence is empty or contains invalid characters
    """
    bit_string = normalize_bit_string(bit_string)
    if not bit_string:
        raise InvalidInputError('Bit string is empty', test_name=test_name, observed=0)

    try:
        raw = np.frombuffer(bit_string.encode('ascii'), dtype=np.uint8)
    except UnicodeEncodeError as e:
        raise InvalidInputError('Bit string contains invalid character(s)', test_name=test_name) from e

    invalid = np.flatnonzero((raw != ZERO) & (raw != ONE))
    if invalid.size:
        position = int(invalid[0])
        raise InvalidInputError(
            f"Bit string contains invalid character {bit_string[position]!r} at position {position}",
            test_name=test_name,
            observed=bit_string[position],
            expected="'0' or '1'",
        )

    length = len(bit_string)
    logger.debug(f'{test_name}: Bit string has the length {length}')

    advisory = length_advisory(test_name, length, recommended_length)
    if advisory:
        logger.warning(advisory)

    return length


__all__ = [
    'evaluate_bit_string',
    'length_advisory',
    'normalize_bit_string',
    'to_bit_array',
]
