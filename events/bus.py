# events/bus.py
import logging
from enum import Enum
from typing import Any, Callable, Dict, List

log = logging.getLogger(__name__)

Handler = Callable[[Any], None]

class Topic(str, Enum):
    PATTERN_SELECTED = "pattern-selected"
    TEMPO_CHANGED = "tempo-changed"
    PLAY_STATE_CHANGED = "play-state-changed"
    NOTE_ACTIVATED = "note-activated"
    PLAYBACK_STARTED = "playback-started"


class EventChannel:
    """In-process publish/subscribe.

    publish() calls every handler of the topic synchronously, in registration
    order, in the caller's frame. A handler that publishes recurses.
    """
    def __init__(self):
        self._handlers: Dict[Topic, List[Handler]] = {}

    def subscribe(self, topic: Topic, handler: Handler) -> None:
        self._handlers.setdefault(topic, []).append(handler)

    def unsubscribe(self, topic: Topic, handler: Handler) -> None:
        hs = self._handlers.get(topic)
        if hs and handler in hs:
            hs.remove(handler)

    def publish(self, topic: Topic, payload: Any = None) -> None:
        hs = self._handlers.get(topic)
        if not hs:
            return
        log.debug("publish %s -> %d handler(s)", topic.value, len(hs))
        for h in list(hs):
            h(payload)

    def clear(self) -> None:
        self._handlers.clear()
