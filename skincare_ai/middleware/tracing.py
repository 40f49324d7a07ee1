import re
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

TRACE_ID_CTX_VAR: ContextVar[str] = ContextVar("trace_id", default="")
TRACE_HEADER = "x-trace-id"

_TRACE_ID_RE = re.compile(r"^[A-Za-z0-9\-]{8,64}$")


class TracingMiddleware(BaseHTTPMiddleware):
    """
    Tags every request with a trace id, reusing a well-formed one sent by the
    client. The id goes back in the x-trace-id header, into error envelopes
    and into every log line written while the request is handled.
    """
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        incoming = request.headers.get(TRACE_HEADER, "")
        trace_id = incoming if _TRACE_ID_RE.match(incoming) else str(uuid.uuid4())
        token = TRACE_ID_CTX_VAR.set(trace_id)
        request.state.trace_id = trace_id
        try:
            response = await call_next(request)
        finally:
            TRACE_ID_CTX_VAR.reset(token)

        response.headers[TRACE_HEADER] = trace_id
        return response
