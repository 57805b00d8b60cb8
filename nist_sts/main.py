from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from nist_sts.core.config import app_config, env_config
from nist_sts.core.errors import NistTestError
from nist_sts.core.logger import get_logger
from nist_sts.presentation.api.v1 import v1_router
from nist_sts.presentation.middlewares.logging import RequestLoggingMiddleware

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(
    _app: FastAPI,
) -> AsyncGenerator[None]:
    base_url: str = f'http://{env_config.APP_HOST}:{env_config.APP_PORT}'
    logger.info(f'App started on {base_url}')
    logger.info(
        f'Significance level {app_config.SIGNIFICANCE_LEVEL}, '
        f'overlapping template m={app_config.OVERLAPPING_TEMPLATE_LENGTH} N={app_config.OVERLAPPING_TEMPLATE_BLOCKS}'
    )
    logger.info(f'See Swagger for more info: {base_url}/docs')
    yield
    logger.warning('Stopping app...')


async def nist_test_error_handler(_request: Request, exc: Exception) -> JSONResponse:
    """A test error that escaped the per-test reporting is a client error"""
    return JSONResponse(status_code=400, content={'detail': str(exc), 'error_type': type(exc).__name__})


def create_app() -> FastAPI:
    application = FastAPI(title=env_config.APP_NAME, debug=env_config.DEBUG, lifespan=lifespan)
    application.add_middleware(RequestLoggingMiddleware)
    application.add_exception_handler(NistTestError, nist_test_error_handler)
    application.include_router(v1_router)

    @application.get('/health')
    async def health() -> dict[str, str]:
        return {'status': 'ok'}

    return application


app = create_app()


def run() -> None:
    import uvicorn

    uvicorn.run(app, host=env_config.APP_HOST, port=env_config.APP_PORT, log_level=env_config.LOG_LEVEL.lower())


if __name__ == '__main__':
    run()
