import time
import uuid
from collections.abc import Callable
from typing import Any, Literal

from fastapi import Request, Response
from fastapi.responses import StreamingResponse
from starlette.middleware.base import BaseHTTPMiddleware

from nist_sts.core.logger import get_logger

logger = get_logger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware for logging HTTP requests and responses.
    Logs information about the request, execution time, and response status.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        context = await self.get_context(request)
        await logger.ainfo(f'Request started on {request.method} {request.url.path}', context=context)

        start_time = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as e:
            await self.create_final_log('failed', request, context, start_time, 500, e)
            raise

        response_size = self.get_response_size(response)
        context['response_size'] = response_size

        msg = 'successful' if response.status_code < 400 else 'failed'  # noqa: PLR2004
        await self.create_final_log(msg, request, context, start_time, response.status_code)

        response.headers['X-TRACE-ID'] = context['trace_id']
        response.headers['X-PROCESS-TIME'] = context['process_time']

        return response

    @staticmethod
    def get_response_size(response: Response | StreamingResponse) -> int:
        if isinstance(response, StreamingResponse):
            return -1
        response_size = response.headers.get('Content-Length')
        if response_size:
            return int(response_size)
        body = getattr(response, 'body', None)
        return len(body) if body is not None else -1

    @staticmethod
    async def create_final_log(  # noqa: PLR0913
        msg: Literal['successful', 'failed'],
        request: Request,
        context: dict,
        start_time: float,
        status: int | str,
        e: Exception | None = None,
    ) -> None:
        process_time = time.perf_counter() - start_time
        context['process_time'] = f'{process_time:.4f}'
        context['response_status'] = status

        if msg == 'successful':
            await logger.ainfo(
                f'Request completed {request.method} {request.url.path}',
                context=context,
            )
        else:
            await logger.aerror(
                f'Request failed {request.method} {request.url.path}',
                context=context,
                exc_info=e,
            )

    @staticmethod
    async def get_context(request: Request) -> dict[str, Any]:
        trace_id = str(uuid.uuid4())
        content_type = request.headers.get('Content-Type', '')
        body = await request.body()
        body = (
            'Not available for multipart/form-data'
            if 'multipart/form-data' in content_type
            else body.decode(errors='replace')
        )

        return {
            'trace_id': trace_id,
            'client': {
                'ip_address': request.client.host if request.client else None,
                'port': request.client.port if request.client else None,
                'user-agent': request.headers.get('User-Agent'),
            },
            'request': {'body': body, 'query': str(request.query_params)},
        }
