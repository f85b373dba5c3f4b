# rocketgcs/telemetry/status.py
"""
Derived status values for the dashboard: link quality, sensor health
classification, checklist progress and the mission clock.
"""
import math
from typing import Optional, Tuple

from ..constants.mission import MissionConstants

GOOD = 'good'
WARNING = 'warning'
CRITICAL = 'critical'
INACTIVE = 'inactive'

def signal_strength_at(mission_time: float) -> float:
    """Simulated link quality in percent, floored."""
    system = MissionConstants.SYSTEM
    swing = math.sin(mission_time / system['SIGNAL_PERIOD_DIVISOR_S']) * system['SIGNAL_SWING_PCT']
    return max(system['SIGNAL_FLOOR_PCT'], system['SIGNAL_STRENGTH_PCT'] + swing)

def link_range_km(altitude_m: float) -> float:
    system = MissionConstants.SYSTEM
    return system['RANGE_KM'] + (altitude_m / 1000) * system['RANGE_KM_PER_KM_ALT']

def channel_status(value: float, minimum: float, maximum: float) -> str:
    """critical outside [minimum, maximum], warning within 10% of a bound."""
    if value < minimum or value > maximum:
        return CRITICAL
    if value < minimum * 1.1 or value > maximum * 0.9:
        return WARNING
    return GOOD

def voltage_status(voltage: Optional[float]) -> str:
    if voltage is None:
        return INACTIVE
    battery = MissionConstants.BATTERY
    if voltage < battery['CRITICAL_VOLTAGE']:
        return CRITICAL
    if voltage < battery['WARNING_VOLTAGE']:
        return WARNING
    return GOOD

def satellite_status(satellites: Optional[int]) -> str:
    if satellites is None:
        return INACTIVE
    return WARNING if satellites < MissionConstants.GNSS['MIN_SATELLITES'] else GOOD

def altitude_status(altitude: Optional[float]) -> str:
    if altitude is None:
        return INACTIVE
    return WARNING if altitude > MissionConstants.ALTITUDE_WARNING_M else GOOD

def mission_status(is_active: bool) -> str:
    return GOOD if is_active else INACTIVE

def format_mission_time(seconds: int) -> str:
    """Mission clock as MM:SS."""
    minutes, secs = divmod(int(seconds), 60)
    return f"{minutes:02d}:{secs:02d}"

def checklist_progress(checklist) -> Tuple[int, int, int]:
    """(completed, total, percent rounded half up) for a ChecklistState."""
    completed = sum(1 for checked in checklist.items.values() if checked)
    total = checklist.total_items
    percent = math.floor(completed * 100 / total + 0.5) if total else 0
    return completed, total, percent
