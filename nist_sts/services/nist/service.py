import asyncio
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Final, Protocol

from fastapi import HTTPException, UploadFile

from nist_sts.core.config import app_config
from nist_sts.core.errors import InvalidInputError, NistTestError
from nist_sts.core.logger import get_logger
from nist_sts.services.nist.bit_string import normalize_bit_string
from nist_sts.services.nist.models import TestResult
from nist_sts.services.nist.tests import frequency_test, longest_run_ones_test, overlapping_template_test
from nist_sts.services.nist.tests.frequency_test import FrequencyTest
from nist_sts.services.nist.tests.longest_run_ones_test import LongestRunsTest
from nist_sts.services.nist.tests.overlapping_template_test import OverlappingTemplateTest

if TYPE_CHECKING:  # the presentation package imports this module through its routers
    from nist_sts.presentation.api.v1.nist.models import NistRequestSchema

logger = get_logger(__name__)

# Every other test assumes gross balance of ones and zeros, which this one checks
GATE_TEST: Final[str] = 'frequency'

REPORTERS: Final[dict[str, Callable[[TestResult], str]]] = {
    'frequency': frequency_test.format_test_report,
    'longest_runs': longest_run_ones_test.format_test_report,
    'overlapping_template': overlapping_template_test.format_test_report,
}


class NistTest(Protocol):
    name: str

    def test(self, binary_data: str | bytes) -> TestResult: ...


class NistService:
    def __init__(self, significance_level: float | None = None) -> None:
        self.significance_level = (
            app_config.SIGNIFICANCE_LEVEL if significance_level is None else significance_level
        )

    def build_tests(self, params: 'NistRequestSchema') -> dict[str, NistTest]:
        """Fresh test instances for one request, gate first"""
        tests: dict[str, NistTest] = {
            'frequency': FrequencyTest(significance_level=self.significance_level),
            'longest_runs': LongestRunsTest(significance_level=self.significance_level),
            'overlapping_template': OverlappingTemplateTest(
                template_length=params.template_length,
                number_of_blocks=params.number_of_blocks,
                significance_level=self.significance_level,
            ),
        }
        return {
            name: test for name, test in tests.items() if name == GATE_TEST or name in params.included_tests
        }

    async def check(self, params: 'NistRequestSchema', upload_file: UploadFile | None) -> dict:
        sequence = params.sequence

        if upload_file is not None:
            file_sequence = await upload_file.read()
            if file_sequence:
                sequence = file_sequence

        if not sequence:
            raise HTTPException(400, 'No sequence or file uploaded')

        try:
            sequence = normalize_bit_string(sequence).strip()
        except InvalidInputError as e:
            raise HTTPException(400, str(e)) from e

        if len(sequence) > app_config.MAX_SEQUENCE_LENGTH:
            raise HTTPException(
                400, f'Sequence length {len(sequence)} exceeds the maximum of {app_config.MAX_SEQUENCE_LENGTH}'
            )

        try:
            return await self.run_suite(sequence, params)
        except InvalidInputError as e:
            raise HTTPException(400, str(e)) from e

    async def run_suite(self, sequence: str, params: 'NistRequestSchema') -> dict[str, dict[str, Any]]:
        """
        Run the selected tests behind the monobit gate

        The frequency test runs first. When it fails, the other tests are reported as skipped.
        Otherwise they run concurrently on the same immutable sequence; a typed failure of one
        test is reported in its entry and does not affect the others.

        Raises:
            InvalidInputError: The sequence is not a usable bit string
        """
        tests = self.build_tests(params)
        gate = tests.pop(GATE_TEST)

        gate_result = gate.test(sequence)
        results: dict[str, dict[str, Any]] = {GATE_TEST: self._render(GATE_TEST, gate_result, params)}

        if not gate_result.success:
            logger.warning(
                f'{gate.name} failed with p-value {gate_result.p_value}, remaining tests are not executed'
            )
            for test_name in tests:
                results[test_name] = {
                    'success': False,
                    'skipped': True,
                    'reason': f'{gate.name} failed (p_value={gate_result.p_value:.6f})',
                }
            return results

        outcomes = await asyncio.gather(
            *(self._run_test(test_name, test, sequence, params) for test_name, test in tests.items())
        )
        results.update(zip(tests.keys(), outcomes, strict=True))
        return results

    async def _run_test(
        self,
        test_name: str,
        test: NistTest,
        sequence: str,
        params: 'NistRequestSchema',
    ) -> dict[str, Any]:
        try:
            result = await asyncio.to_thread(test.test, sequence)
        except NistTestError as e:
            logger.debug(f'Error: {e}')
            return {'success': False, 'error': str(e), 'error_type': type(e).__name__}

        return self._render(test_name, result, params)

    @staticmethod
    def _render(test_name: str, result: TestResult, params: 'NistRequestSchema') -> dict[str, Any]:
        rendered = result.to_dict()
        if params.report:
            rendered['report'] = REPORTERS[test_name](result)
        return rendered
