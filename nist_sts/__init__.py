"""NIST SP 800-22 statistical test battery."""

from nist_sts.core.errors import InvalidInputError, InvalidParameterError, NistTestError, UnsupportedLengthError
from nist_sts.services.nist.models import TestResult
from nist_sts.services.nist.tests import FrequencyTest, LongestRunsTest, OverlappingTemplateTest

__all__ = [
    'FrequencyTest',
    'InvalidInputError',
    'InvalidParameterError',
    'LongestRunsTest',
    'NistTestError',
    'OverlappingTemplateTest',
    'TestResult',
    'UnsupportedLengthError',
]
