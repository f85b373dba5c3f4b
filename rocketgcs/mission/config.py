# rocketgcs/mission/config.py

from dataclasses import dataclass, field
from typing import Optional, Tuple

from ..constants.mission import MissionConstants
from .exceptions import InvalidMissionConfigError
from .phases import PhaseTable

@dataclass
class MissionConfig:
    """Runtime knobs for one ground-station engine instance."""
    tick_interval_s: float = MissionConstants.TICK_INTERVAL_S
    history_capacity: int = MissionConstants.HISTORY_CAPACITY
    checklist_size: int = MissionConstants.CHECKLIST_SIZE
    phase_durations: Tuple[Tuple[str, float], ...] = field(
        default_factory=lambda: tuple(MissionConstants.PHASE_DURATIONS)
    )
    team_id: str = MissionConstants.TEAM_ID
    seed: Optional[int] = None

    def validate(self) -> 'MissionConfig':
        if self.tick_interval_s <= 0:
            raise InvalidMissionConfigError('tick_interval_s', self.tick_interval_s)
        if self.history_capacity <= 0:
            raise InvalidMissionConfigError('history_capacity', self.history_capacity)
        if self.checklist_size <= 0:
            raise InvalidMissionConfigError('checklist_size', self.checklist_size)
        if not self.phase_durations:
            raise InvalidMissionConfigError('phase_durations', self.phase_durations)
        for name, duration in self.phase_durations:
            if duration < 0:
                raise InvalidMissionConfigError(f'phase_durations[{name}]', duration)
        return self

    def phase_table(self) -> PhaseTable:
        try:
            return PhaseTable(self.phase_durations)
        except ValueError as e:
            raise InvalidMissionConfigError('phase_durations', self.phase_durations, str(e)) from e
