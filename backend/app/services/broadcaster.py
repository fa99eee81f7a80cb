import asyncio
import logging
from typing import Any, Protocol

from app.services.events import BroadcastEvent, to_wire

logger = logging.getLogger(__name__)


class Observer(Protocol):
    async def send_json(self, data: Any) -> None: ...


class Broadcaster:
    """
    Fan-out of change events to every connected observer.

    Delivery is fire-and-forget: no persistence, no replay, no ack. An
    observer that connects after an event was published never sees it.
    ``connect`` and ``disconnect`` are the only places the observer set
    changes.

    Observers are written to concurrently. Each observer receives events
    in publish order; one that fails or takes longer than
    ``send_timeout`` seconds for a single send is dropped.
    """

    def __init__(self, send_timeout: float = 5.0) -> None:
        self.send_timeout = send_timeout
        self._observers: set[Observer] = set()

    @property
    def observer_count(self) -> int:
        return len(self._observers)

    def connect(self, observer: Observer) -> None:
        self._observers.add(observer)
        logger.info("Observer connected (%d open)", len(self._observers))

    def disconnect(self, observer: Observer) -> None:
        if observer in self._observers:
            self._observers.discard(observer)
            logger.info("Observer disconnected (%d open)", len(self._observers))

    async def _send(self, observer: Observer, messages: list[dict]) -> None:
        for message in messages:
            try:
                await asyncio.wait_for(observer.send_json(message), timeout=self.send_timeout)
            except Exception:
                # the mutation has already committed; a dead or stalled observer is just dropped
                logger.debug("Dropping observer after failed %s delivery", message["event"], exc_info=True)
                self.disconnect(observer)
                return

    async def publish(self, event: BroadcastEvent) -> None:
        await self.publish_all(event)

    async def publish_all(self, *events: BroadcastEvent) -> None:
        messages = [to_wire(event) for event in events]
        if not messages:
            return
        await asyncio.gather(
            *(self._send(observer, messages) for observer in list(self._observers)),
            return_exceptions=True,
        )
