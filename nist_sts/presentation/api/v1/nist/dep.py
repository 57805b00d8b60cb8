from typing import Annotated

from fastapi import Depends

from nist_sts.core.config import app_config
from nist_sts.services.nist.service import NistService


async def get_nist_service() -> NistService:
    return NistService(significance_level=app_config.SIGNIFICANCE_LEVEL)


NIST_SERVICE_DEP = Annotated[NistService, Depends(get_nist_service)]
