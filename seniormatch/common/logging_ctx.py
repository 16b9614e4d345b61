from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Dict, Iterator, Optional

_request_ctx: ContextVar[Optional[Dict[str, Any]]] = ContextVar("request_ctx", default=None)


def get_request_ctx() -> Dict[str, Any]:
    return dict(_request_ctx.get() or {})


@contextmanager
def request_ctx_scope(
    *,
    request_id: Optional[str] = None,
    partition: Optional[str] = None,
) -> Iterator[None]:
    """Bind request id / partition for loguru `logger.bind(**get_request_ctx())` calls."""
    ctx = get_request_ctx()
    if request_id is not None:
        ctx["request_id"] = str(request_id)
    if partition is not None:
        ctx["partition"] = str(partition)
    token = _request_ctx.set(ctx)
    try:
        yield
    finally:
        _request_ctx.reset(token)
