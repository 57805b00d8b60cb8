from typing import Any

from fastapi import APIRouter, File, UploadFile

from nist_sts.presentation.api.v1.nist.dep import NIST_SERVICE_DEP
from nist_sts.presentation.api.v1.nist.models import NIST_REQ_SCHEMA

nist_router = APIRouter(prefix='/nist', tags=['Nist'])


@nist_router.post('/check', summary='Run the selected NIST SP 800-22 tests on a bit string')
async def nist_check_sequence(
    nist_service: NIST_SERVICE_DEP,
    params: NIST_REQ_SCHEMA,
    file: UploadFile | None = File(default=None),  # noqa
) -> dict[str, dict[str, Any]]:
    """
    The sequence comes from the ``sequence`` query parameter or an uploaded text file, the file wins.
    Frequency always runs first; when it fails the other tests are reported as skipped.
    """
    return await nist_service.check(params=params, upload_file=file)
