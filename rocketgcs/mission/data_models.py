# rocketgcs/mission/data_models.py
"""
State records owned by the MissionStore.

Every record is frozen. The reducer builds new records with
dataclasses.replace, so a snapshot handed to a reader never changes under it.
"""
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple, Any

from ..constants.mission import MissionConstants
from ..telemetry.data_models import TelemetrySample
from .phases import FlightPhase

@dataclass(frozen=True)
class MissionState:
    is_active: bool = False
    mission_time: int = 0
    flight_phase: FlightPhase = FlightPhase.PRELAUNCH
    packet_count: int = 0

@dataclass(frozen=True)
class TelemetryState:
    """Latest sample plus the sliding-window history."""
    current: Optional[TelemetrySample] = None
    history: Tuple[TelemetrySample, ...] = ()
    max_history_length: int = MissionConstants.HISTORY_CAPACITY

@dataclass(frozen=True)
class SystemStatus:
    """Derived display fields, last write wins."""
    signal_strength: float = MissionConstants.SYSTEM['SIGNAL_STRENGTH_PCT']
    range: float = MissionConstants.SYSTEM['RANGE_KM']
    last_update: Optional[str] = None

@dataclass(frozen=True)
class ChecklistState:
    items: Mapping[int, bool] = field(default_factory=lambda: MappingProxyType({}))
    total_items: int = MissionConstants.CHECKLIST_SIZE

    def __post_init__(self):
        # Readers get a read-only view of a private copy
        object.__setattr__(self, 'items', MappingProxyType(dict(self.items)))

@dataclass(frozen=True)
class GroundStationState:
    """Aggregate state for one ground station."""
    mission: MissionState = field(default_factory=MissionState)
    telemetry: TelemetryState = field(default_factory=TelemetryState)
    system: SystemStatus = field(default_factory=SystemStatus)
    checklist: ChecklistState = field(default_factory=ChecklistState)

    def to_dict(self) -> Dict[str, Any]:
        current = self.telemetry.current
        return {
            'mission': {
                'is_active': self.mission.is_active,
                'mission_time': self.mission.mission_time,
                'flight_phase': self.mission.flight_phase.value,
                'packet_count': self.mission.packet_count
            },
            'telemetry': {
                'current': current.to_dict() if current else None,
                'history': [sample.to_dict() for sample in self.telemetry.history],
                'max_history_length': self.telemetry.max_history_length
            },
            'system': {
                'signal_strength': self.system.signal_strength,
                'range': self.system.range,
                'last_update': self.system.last_update
            },
            'checklist': {
                'items': {str(index): checked for index, checked in self.checklist.items.items()},
                'total_items': self.checklist.total_items
            }
        }


def initial_state(history_capacity: int = MissionConstants.HISTORY_CAPACITY,
                  checklist_size: int = MissionConstants.CHECKLIST_SIZE) -> GroundStationState:
    return GroundStationState(
        telemetry=TelemetryState(max_history_length=history_capacity),
        checklist=ChecklistState(total_items=checklist_size)
    )
