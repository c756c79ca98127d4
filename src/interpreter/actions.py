"""
Action Executor
Runs the declarative actions attached to node events against a variable store.
"""

import asyncio
import time
from collections.abc import Mapping
from typing import Any, Callable

import httpx

from blueprint import (
    AlertAction,
    ApiRequestAction,
    BaseAction,
    SetAction,
    ToggleAction,
    parse_action,
)
from core import get_logger, safe_json_dumps
from monitoring import metrics_collector

from .store import VariableStore


logger = get_logger(__name__)

Notifier = Callable[[str], None]

# Stored when a response body is not JSON
FALLBACK_PAYLOAD: dict[str, Any] = {"status": "ok", "data": "Mock Data"}


class ActionExecutor:
    """
    Executes toggle, set, alert and apiRequest actions.

    Malformed actions (missing target, url or message) are inert. Network
    failures are logged and leave the store unchanged; nothing is raised to
    the caller. Concurrent requests are last-write-wins.
    """

    def __init__(
        self,
        store: VariableStore,
        notifier: Notifier | None = None,
        client: httpx.AsyncClient | None = None,
        request_delay: float = 0.0,
        timeout: float = 10.0,
    ) -> None:
        self.store = store
        self.notifier = notifier
        self.request_delay = request_delay
        self.timeout = timeout
        self._client = client
        self._owns_client = client is None

    async def __aenter__(self) -> "ActionExecutor":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout, follow_redirects=True)
        return self._client

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def execute(self, action: BaseAction | Mapping[str, Any] | None) -> None:
        """Run one action; raw mappings are parsed first and dropped if invalid."""
        if not isinstance(action, BaseAction):
            action = parse_action(action)
        if action is None:
            return

        action_type = getattr(action, "type", "unknown")
        if not action.is_executable:
            logger.debug("action_inert", action=action_type)
            metrics_collector.record_action(action_type, "inert")
            return

        if isinstance(action, ToggleAction):
            value = self.store.toggle(action.target)
            logger.debug("action_toggle", target=action.target, value=value)
        elif isinstance(action, SetAction):
            self.store.set(action.target, action.value)
            logger.debug("action_set", target=action.target)
        elif isinstance(action, AlertAction):
            self._notify(action.message)
        elif isinstance(action, ApiRequestAction):
            await self._api_request(action)
            return
        metrics_collector.record_action(action_type, "success")

    def _notify(self, message: str) -> None:
        logger.info("action_alert", message=message[:100])
        if self.notifier is not None:
            self.notifier(message)

    async def _api_request(self, action: ApiRequestAction) -> None:
        issued_value = self.store.get(action.target) if action.target else None

        if self.request_delay > 0:
            await asyncio.sleep(self.request_delay)

        start_time = time.time()
        try:
            response = await self._get_client().request(action.method, action.url)
        except httpx.HTTPError as e:
            logger.error("api_request_failed", url=action.url, method=action.method, error=str(e))
            metrics_collector.record_action("apiRequest", "error")
            metrics_collector.record_error("network_error", "action_executor")
            return
        finally:
            metrics_collector.record_api_request(action.method, time.time() - start_time)

        # Error statuses still carry a body and are stored the same way
        try:
            data = response.json()
        except ValueError:
            data = FALLBACK_PAYLOAD

        logger.info(
            "api_request_complete",
            url=action.url,
            method=action.method,
            status=response.status_code,
        )
        metrics_collector.record_action("apiRequest", "success")

        if not action.target:
            return
        if self.store.get(action.target) != issued_value:
            logger.warning("api_request_overwrite", target=action.target)
        self.store.set(action.target, safe_json_dumps(data, indent=2))
