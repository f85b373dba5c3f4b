# rocketgcs/mission/phases.py
"""
Flight-phase state machine.

The current phase is a pure function of mission time: phase i is active for
t in [sum(durations[:i]), sum(durations[:i+1])). Once every threshold has
passed, the terminal phase repeats indefinitely.
"""
from enum import Enum
from itertools import accumulate
from typing import Iterable, List, Tuple

from ..constants.mission import MissionConstants

class FlightPhase(Enum):
    PRELAUNCH = 'PRELAUNCH'
    LAUNCH = 'LAUNCH'
    ASCENT = 'ASCENT'
    APOGEE = 'APOGEE'
    SEPARATION = 'SEPARATION'
    DESCENT = 'DESCENT'
    IMPACT = 'IMPACT'

    @property
    def label(self) -> str:
        return MissionConstants.PHASE_LABELS[self.value]

    @property
    def order(self) -> int:
        return _PHASE_ORDER.index(self)

_PHASE_ORDER = list(FlightPhase)


class PhaseTable:
    """Ordered (phase, duration) table with cumulative upper bounds."""

    def __init__(self, durations: Iterable[Tuple[str, float]] = MissionConstants.PHASE_DURATIONS):
        self.entries: List[Tuple[FlightPhase, float]] = [
            (FlightPhase(name) if not isinstance(name, FlightPhase) else name, duration)
            for name, duration in durations
        ]
        if not self.entries:
            raise ValueError("Phase table needs at least one phase")
        self.thresholds = list(accumulate(duration for _, duration in self.entries))

    @property
    def terminal(self) -> FlightPhase:
        return self.entries[-1][0]

    def phase_at(self, mission_time: float) -> FlightPhase:
        """First phase whose cumulative upper bound exceeds mission_time."""
        for (phase, _), upper in zip(self.entries, self.thresholds):
            if mission_time < upper:
                return phase
        return self.terminal

    def phase_start(self, phase: FlightPhase) -> float:
        """Mission time at which the given phase begins."""
        start = 0
        for entry_phase, duration in self.entries:
            if entry_phase == phase:
                return start
            start += duration
        raise KeyError(phase)

    def phase_duration(self, phase: FlightPhase) -> float:
        for entry_phase, duration in self.entries:
            if entry_phase == phase:
                return duration
        raise KeyError(phase)

    def __len__(self):
        return len(self.entries)


DEFAULT_PHASE_TABLE = PhaseTable()

def get_flight_phase(mission_time: float) -> FlightPhase:
    """Phase for mission_time under the default durations."""
    return DEFAULT_PHASE_TABLE.phase_at(mission_time)
