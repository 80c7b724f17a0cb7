"""Mutable game state records."""
import time
import uuid
from dataclasses import dataclass, field

from neon_grid.game_data_loader import BUILDING_IDS

LOG_TYPES = ('info', 'alert', 'system', 'ai')


def now_ms():
    """Current wall-clock time as epoch milliseconds."""
    return int(time.time() * 1000)


@dataclass
class BuildingState:
    """Level and power switch of one building kind."""
    level: int = 0
    active: bool = True

    def to_dict(self):
        return {'level': self.level, 'active': self.active}


def default_buildings():
    """Every building kind at level 0, powered on."""
    return {building_id: BuildingState() for building_id in BUILDING_IDS}


@dataclass(frozen=True)
class LogEntry:
    """One line of the in-game terminal. Never persisted."""
    message: str
    type: str = 'info'
    timestamp: int = field(default_factory=now_ms)
    id: str = field(default_factory=lambda: uuid.uuid4().hex[:8])

    def __post_init__(self):
        if self.type not in LOG_TYPES:
            raise ValueError(f"Unknown log type: {self.type}")

    def to_dict(self):
        return {
            'id': self.id,
            'timestamp': self.timestamp,
            'message': self.message,
            'type': self.type,
        }
