"""Request correlation ids.

The id lives in a contextvar, so every log line written while one request
is handled carries it. Incoming ids are accepted only when they look like
an opaque token; anything else is replaced by a fresh UUID4 so clients
cannot inject arbitrary text into the logs.
"""

import re
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any
from uuid import uuid4

MAX_CORRELATION_ID_LENGTH = 128
_ACCEPTED_ID = re.compile(r"^[A-Za-z0-9._:-]+$")

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")


def generate_correlation_id() -> str:
    return str(uuid4())


def accept_correlation_id(raw: str | None) -> str:
    """Return raw if it is a usable id, otherwise a new one."""
    if raw:
        candidate = raw.strip()
        if (
            len(candidate) <= MAX_CORRELATION_ID_LENGTH
            and _ACCEPTED_ID.match(candidate)
        ):
            return candidate
    return generate_correlation_id()


def get_correlation_id() -> str:
    """Current id, or "" outside a request."""
    return _correlation_id.get()


@contextmanager
def correlation_scope(correlation_id: str) -> Iterator[str]:
    """Bind correlation_id for the duration of the block, then restore."""
    token = _correlation_id.set(correlation_id)
    try:
        yield correlation_id
    finally:
        _correlation_id.reset(token)


def correlation_id_processor(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Structlog processor that stamps the current id on each entry.

    Entries that already carry a correlation_id keep it.
    """
    correlation_id = get_correlation_id()
    if correlation_id:
        event_dict.setdefault("correlation_id", correlation_id)
    return event_dict
