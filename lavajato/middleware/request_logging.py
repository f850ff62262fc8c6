import time
import uuid
import logging
from fastapi import Request

from lavajato.core.logging import request_id_var, car_wash_id_var

logger = logging.getLogger("access")

REQUEST_ID_HEADER = "X-Request-ID"
# health checks
QUIET_PATHS = {"/"}


async def request_logging_middleware(request: Request, call_next):
    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:12]
    request.state.request_id = request_id
    rid_token = request_id_var.set(request_id)
    cw_token = car_wash_id_var.set("-")
    started = time.perf_counter()

    try:
        response = await call_next(request)

        elapsed_ms = (time.perf_counter() - started) * 1000
        response.headers[REQUEST_ID_HEADER] = request_id

        if request.url.path not in QUIET_PATHS:
            user = getattr(request.state, "user", None)
            logger.info(
                "request",
                extra={
                    "client_addr": request.client.host if request.client else "unknown",
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": response.status_code,
                    "process_time_ms": round(elapsed_ms, 2),
                    "car_wash_id": user.car_wash_id if user else None,
                },
            )
        return response
    finally:
        car_wash_id_var.reset(cw_token)
        request_id_var.reset(rid_token)
