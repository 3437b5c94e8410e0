# context.py
from dataclasses import dataclass, field
from config import AppConfig
from events.bus import EventChannel
from timeline.scheduler import Scheduler
from transport.state import TransportState

@dataclass
class SessionContext:
    """Shared collaborators handed to each component. Owned by Session."""
    cfg: AppConfig = field(default_factory=AppConfig)
    bus: EventChannel = field(default_factory=EventChannel)
    scheduler: Scheduler = field(default_factory=Scheduler)
    state: TransportState = field(default_factory=TransportState)
