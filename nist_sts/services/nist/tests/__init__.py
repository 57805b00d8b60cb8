from nist_sts.services.nist.tests.frequency_test import FrequencyTest
from nist_sts.services.nist.tests.longest_run_ones_test import LongestRunsTest
from nist_sts.services.nist.tests.overlapping_template_test import OverlappingTemplateTest

__all__ = [
    'FrequencyTest',
    'LongestRunsTest',
    'OverlappingTemplateTest',
]
