# rocketgcs/mission/store.py
"""
Mission store: a pure transition function plus the owned state handle.

reduce() is total over every Action. Unknown action types and out-of-range
checklist indices return the input state unchanged.
"""
import logging
import threading
from dataclasses import replace, fields
from typing import Callable, List, Optional

from .actions import Action, ActionType
from .config import MissionConfig
from .data_models import GroundStationState, MissionState, SystemStatus, initial_state
from .phases import FlightPhase

logger = logging.getLogger(__name__)

_SYSTEM_FIELDS = {f.name for f in fields(SystemStatus)}

def append_with_eviction(history: tuple, sample, capacity: int) -> tuple:
    """Sliding window: keeps the newest `capacity` samples in insertion order."""
    return (history + (sample,))[-capacity:]

def reduce(state: GroundStationState, action: Action) -> GroundStationState:
    """Applies one action and returns the next state."""
    kind = action.type
    payload = action.payload

    if kind == ActionType.START_MISSION:
        return replace(
            state,
            mission=replace(state.mission, is_active=True, mission_time=0, packet_count=0),
            telemetry=replace(state.telemetry, history=())
        )

    if kind == ActionType.STOP_MISSION:
        return replace(state, mission=replace(state.mission, is_active=False))

    if kind == ActionType.RESET_MISSION:
        return replace(
            state,
            mission=MissionState(is_active=False, mission_time=0,
                                 flight_phase=FlightPhase.PRELAUNCH, packet_count=0),
            telemetry=replace(state.telemetry, current=None, history=())
        )

    if kind == ActionType.UPDATE_TELEMETRY:
        sample = payload['sample']
        telemetry = state.telemetry
        return replace(
            state,
            telemetry=replace(
                telemetry,
                current=sample,
                history=append_with_eviction(telemetry.history, sample, telemetry.max_history_length)
            ),
            system=replace(state.system, last_update=sample.timestamp)
        )

    if kind == ActionType.UPDATE_MISSION_TIME:
        return replace(state, mission=replace(
            state.mission,
            mission_time=payload['mission_time'],
            flight_phase=payload['flight_phase'],
            packet_count=payload['packet_count']
        ))

    if kind == ActionType.UPDATE_CHECKLIST:
        index = payload.get('index')
        checklist = state.checklist
        if not isinstance(index, int) or not 0 <= index < checklist.total_items:
            logger.warning(f"Ignoring checklist update for out-of-range index {index!r}")
            return state
        items = dict(checklist.items)
        items[index] = bool(payload.get('checked'))
        return replace(state, checklist=replace(checklist, items=items))

    if kind == ActionType.UPDATE_SYSTEM_STATUS:
        unknown = set(payload) - _SYSTEM_FIELDS
        if unknown:
            logger.warning(f"Ignoring unknown system status fields: {sorted(unknown)}")
        known = {k: v for k, v in payload.items() if k in _SYSTEM_FIELDS}
        return replace(state, system=replace(state.system, **known))

    return state


class MissionStore:
    """
    Sole owner of the ground-station state. All mutation goes through dispatch().

    The store only transforms state; it never ticks. A START dispatched here
    directly marks the mission active but nothing advances it, so control
    actions from the dashboard go through MissionDriver.start/stop/reset.
    """

    def __init__(self, config: Optional[MissionConfig] = None,
                 state: Optional[GroundStationState] = None):
        self.config = (config or MissionConfig()).validate()
        self._state = state or initial_state(self.config.history_capacity, self.config.checklist_size)
        self._subscribers: List[Callable[[GroundStationState], None]] = []
        # Reentrant so the driver can hold it across one tick's dispatches
        self.lock = threading.RLock()

    @property
    def state(self) -> GroundStationState:
        """Read-only snapshot."""
        return self._state

    def dispatch(self, action: Action) -> GroundStationState:
        with self.lock:
            previous = self._state
            self._state = reduce(previous, action)
            current = self._state
            subscribers = list(self._subscribers)
        if current is not previous:
            for callback in subscribers:
                callback(current)
        return current

    def subscribe(self, callback: Callable[[GroundStationState], None]) -> Callable[[], None]:
        """Registers callback for state changes. Returns an unsubscribe function."""
        with self.lock:
            self._subscribers.append(callback)

        def unsubscribe():
            with self.lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)
        return unsubscribe
