# rocketgcs/mission/actions.py
"""
Closed set of actions accepted by the mission store.

START, STOP, RESET and UPDATE_CHECKLIST are issued by the dashboard; the
remaining three are issued only by the MissionDriver.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Union

from ..telemetry.data_models import TelemetrySample
from .phases import FlightPhase

class ActionType(Enum):
    START_MISSION = 'START_MISSION'
    STOP_MISSION = 'STOP_MISSION'
    RESET_MISSION = 'RESET_MISSION'
    UPDATE_TELEMETRY = 'UPDATE_TELEMETRY'
    UPDATE_MISSION_TIME = 'UPDATE_MISSION_TIME'
    UPDATE_CHECKLIST = 'UPDATE_CHECKLIST'
    UPDATE_SYSTEM_STATUS = 'UPDATE_SYSTEM_STATUS'

@dataclass(frozen=True)
class Action:
    # A plain string type is allowed and treated as unknown by the reducer
    type: Union[ActionType, str]
    payload: Dict[str, Any] = field(default_factory=dict)


def start_mission() -> Action:
    return Action(ActionType.START_MISSION)

def stop_mission() -> Action:
    return Action(ActionType.STOP_MISSION)

def reset_mission() -> Action:
    return Action(ActionType.RESET_MISSION)

def update_telemetry(sample: TelemetrySample) -> Action:
    return Action(ActionType.UPDATE_TELEMETRY, {'sample': sample})

def update_mission_time(mission_time: int, flight_phase: FlightPhase, packet_count: int) -> Action:
    return Action(ActionType.UPDATE_MISSION_TIME, {
        'mission_time': mission_time,
        'flight_phase': flight_phase,
        'packet_count': packet_count
    })

def update_checklist(index: int, checked: bool) -> Action:
    return Action(ActionType.UPDATE_CHECKLIST, {'index': index, 'checked': checked})

def update_system_status(**fields) -> Action:
    """Partial update, e.g. update_system_status(signal_strength=92.0)."""
    return Action(ActionType.UPDATE_SYSTEM_STATUS, fields)
