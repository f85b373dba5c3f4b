"""
mission - Flight-phase state machine, mission store and tick driver
"""

from .phases import FlightPhase, PhaseTable, get_flight_phase
from .config import MissionConfig
from .actions import Action, ActionType
from .store import MissionStore, reduce
from .driver import MissionDriver
from .exceptions import MissionError, InvalidMissionConfigError, DriverShutdownError

__all__ = [
    'FlightPhase',
    'PhaseTable',
    'get_flight_phase',
    'MissionConfig',
    'Action',
    'ActionType',
    'MissionStore',
    'reduce',
    'MissionDriver',
    'MissionError',
    'InvalidMissionConfigError',
    'DriverShutdownError'
]
