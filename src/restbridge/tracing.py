r"""Trace events emitted for outgoing requests and incoming responses.

Tracers are purely observational: a failing tracer is logged and
ignored, it never interrupts the request/response flow.

Example:
    ```pycon
    >>> from restbridge.tracing import CallbackTracer, Trace
    >>> seen = []
    >>> tracer = CallbackTracer(on_request=seen.append)
    >>> # Pass ``tracer=tracer`` to ``RestClient`` or ``ClientConfig``.

    ```
"""

from __future__ import annotations

__all__ = [
    "BaseTracer",
    "CallbackTracer",
    "LoggingTracer",
    "Trace",
    "TraceEvent",
    "invoke_tracer",
]

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from restbridge.utils.structured_logging import log_structured

if TYPE_CHECKING:
    from collections.abc import Callable

    import httpx

    from restbridge.models import HttpMethod

logger: logging.Logger = logging.getLogger(__name__)


class TraceEvent(Enum):
    """Direction of a trace."""

    REQUEST = "request"
    RESPONSE = "response"


@dataclass(frozen=True)
class Trace:
    """Observational record of a request or a response.

    Attributes:
        method: The HTTP method.
        url: The absolute URL of the request.
        data: The payload bytes (``None`` for a request without body).
        event: Whether this traces the request or the response.
        status_code: The response status code, ``None`` for requests.
        headers: The request or response headers.
    """

    method: HttpMethod
    url: str
    data: bytes | None
    event: TraceEvent
    status_code: int | None
    headers: httpx.Headers


class BaseTracer(ABC):
    """Abstract base class for trace sinks."""

    @abstractmethod
    def trace(self, trace: Trace) -> None:
        """Record a trace."""


class LoggingTracer(BaseTracer):
    r"""Tracer writing each trace to a standard library logger.

    The trace fields are attached to the log record as structured
    ``extra`` fields, so they are rendered by ``StructuredFormatter``.

    Args:
        logger: Logger to write to. Defaults to this module's logger.
        level: Log level of the trace records.
    """

    def __init__(self, logger: logging.Logger | None = None, level: int = logging.DEBUG) -> None:
        self._logger = logger if logger is not None else logging.getLogger(__name__)
        self._level = level

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(logger={self._logger.name!r}, "
            f"level={logging.getLevelName(self._level)})"
        )

    def trace(self, trace: Trace) -> None:
        if not self._logger.isEnabledFor(self._level):
            return
        if trace.event is TraceEvent.REQUEST:
            message = f"{trace.method.value} {trace.url}"
        else:
            message = f"{trace.method.value} {trace.url} -> {trace.status_code}"
        log_structured(
            self._logger,
            self._level,
            message,
            trace_event=trace.event.value,
            method=trace.method.value,
            url=trace.url,
            status_code=trace.status_code,
            headers=trace.headers,
            payload=trace.data,
            payload_size=0 if trace.data is None else len(trace.data),
        )


class CallbackTracer(BaseTracer):
    """Tracer forwarding request and response traces to callables.

    Args:
        on_request: Optional callable receiving request traces.
        on_response: Optional callable receiving response traces.
    """

    def __init__(
        self,
        on_request: Callable[[Trace], None] | None = None,
        on_response: Callable[[Trace], None] | None = None,
    ) -> None:
        self._on_request = on_request
        self._on_response = on_response

    def trace(self, trace: Trace) -> None:
        callback = self._on_request if trace.event is TraceEvent.REQUEST else self._on_response
        if callback is not None:
            callback(trace)


def invoke_tracer(tracer: BaseTracer | None, trace: Trace) -> None:
    """Send a trace to the tracer if one is configured.

    Exceptions raised by the tracer are logged as warnings and
    discarded.

    Args:
        tracer: The optional tracer.
        trace: The trace to record.
    """
    if tracer is None:
        return
    try:
        tracer.trace(trace)
    except Exception as e:  # noqa: BLE001
        logger.warning(f"Error in tracer {tracer!r} for {trace.event.value} trace: {e}")
