"""Integration lifecycle: subscribe, transform, dispatch, tear down."""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping

from vibepack.config import IntegrationConfig, resolve_config
from vibepack.core.models import DestinationEvent, SourceEvent
from vibepack.delivery import EventDispatcher
from vibepack.events import AgentEventStream, Unsubscribe, default_event_stream
from vibepack.exceptions import IntegrationConfigError
from vibepack.logging_setup import configure_logging
from vibepack.transform import EventTransformer, ToolCorrelationTable

logger = logging.getLogger(__name__)

Teardown = Callable[[], None]


class Integration:
    """One enabled bridge between a host event stream and the visualization server.

    The correlation table lives and dies with the instance, so independent
    integrations never share tool start times.
    """

    def __init__(
        self,
        config: IntegrationConfig,
        *,
        stream: AgentEventStream | None = None,
        dispatcher: EventDispatcher | None = None,
        cwd_provider: Callable[[], str] | None = None,
    ) -> None:
        self.config = config
        self.stream = stream
        self.correlation = ToolCorrelationTable(
            ttl_ms=config.correlation_ttl_ms,
            max_entries=config.correlation_max_entries,
        )
        self.transformer = EventTransformer(
            correlation=self.correlation,
            cwd=config.cwd,
            cwd_provider=cwd_provider,
        )
        self.dispatcher = dispatcher or EventDispatcher(config)
        self._unsubscribe: Unsubscribe | None = None
        self._closed = False

    @property
    def enabled(self) -> bool:
        return self.config.enabled

    @property
    def subscribed(self) -> bool:
        return self._unsubscribe is not None

    def start(self) -> "Integration":
        if not self.config.enabled or self._closed or self._unsubscribe is not None:
            return self
        if self.stream is not None:
            self._unsubscribe = self.stream.subscribe(self.handle_event)
        logger.debug("vibekit integration active (server=%s)", self.config.server_url)
        return self

    def handle_event(self, event: SourceEvent) -> DestinationEvent | None:
        """Transform one source event and dispatch the result, if any.

        Malformed source events raise from the transform step.
        """
        if not self.config.enabled:
            return None
        destination = self.transformer.transform(event)
        if destination is not None:
            self.dispatcher.dispatch(destination)
        return destination

    def emit(self, destination: DestinationEvent) -> None:
        if self.config.enabled:
            self.dispatcher.dispatch(destination)

    def flush(self, timeout: float | None = None) -> bool:
        return self.dispatcher.flush(timeout)

    def teardown(self) -> None:
        if self._unsubscribe is not None:
            logger.debug("Cleaning up vibekit integration")
            self._unsubscribe()
            self._unsubscribe = None
        self.correlation.clear()
        self._closed = True


def setup_integration(
    options: Mapping[str, Any] | None = None,
    *,
    stream: AgentEventStream | None = None,
    environ: Mapping[str, str] | None = None,
) -> Teardown:
    """Enable the integration on ``stream`` and return its teardown function.

    Without an explicit stream the process-wide default stream is used. Invalid
    options are logged and leave the integration off instead of raising.
    """
    integration = try_create_integration(
        options,
        stream=stream if stream is not None else default_event_stream(),
        environ=environ,
    )
    if integration is None or not integration.enabled:
        logger.debug("vibekit integration disabled")
        return _noop_teardown
    integration.start()
    return integration.teardown


def create_integration(
    options: Mapping[str, Any] | None = None,
    *,
    stream: AgentEventStream | None = None,
    environ: Mapping[str, str] | None = None,
) -> Integration:
    config = resolve_config(options, environ=environ)
    configure_logging(debug=config.debug)
    return Integration(config, stream=stream)


def try_create_integration(
    options: Mapping[str, Any] | None = None,
    *,
    stream: AgentEventStream | None = None,
    environ: Mapping[str, str] | None = None,
) -> Integration | None:
    try:
        return create_integration(options, stream=stream, environ=environ)
    except IntegrationConfigError as error:
        logger.warning("vibekit integration not enabled: %s", error)
        return None


def _noop_teardown() -> None:
    return None
