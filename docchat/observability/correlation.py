"""
Request correlation ids.

A ContextVar carries the id of the request being served so log records
emitted anywhere below the middleware can be tied back to it. Incoming ids
are trimmed and capped; anything unusable is replaced by a fresh uuid4.
"""

import uuid
from contextvars import ContextVar, Token

MAX_CORRELATION_ID_LENGTH = 64

correlation_id_ctx: ContextVar[str] = ContextVar("correlation_id", default="")


def normalize_correlation_id(raw: str | None) -> str:
    """Incoming header value if usable, otherwise a new uuid4 string."""
    candidate = (raw or "").strip()
    if not candidate or not candidate.isprintable():
        return str(uuid.uuid4())
    return candidate[:MAX_CORRELATION_ID_LENGTH]


def set_correlation_id(correlation_id: str | None = None) -> str:
    """Bind an id to the current context and return it."""
    value = normalize_correlation_id(correlation_id)
    correlation_id_ctx.set(value)
    return value


def bind_correlation_id(correlation_id: str | None) -> tuple[str, Token]:
    """Like set_correlation_id, but also returns the token for reset_correlation_id."""
    value = normalize_correlation_id(correlation_id)
    return value, correlation_id_ctx.set(value)


def reset_correlation_id(token: Token) -> None:
    correlation_id_ctx.reset(token)


def get_correlation_id() -> str:
    return correlation_id_ctx.get()


def clear_correlation_id() -> None:
    correlation_id_ctx.set("")
