# rocketgcs/telemetry/data_models.py
"""
Immutable telemetry records produced once per tick by the synthesizer.
Samples are frozen, so the history can hold them without copying.
"""
from dataclasses import dataclass, asdict
from typing import Dict, Any

from ..mission.phases import FlightPhase

@dataclass(frozen=True)
class Vector3:
    x: float
    y: float
    z: float

@dataclass(frozen=True)
class GNSSFix:
    """Simulated receiver fix near the launch pad."""
    latitude: float
    longitude: float
    altitude: float
    satellites: int
    time: str

@dataclass(frozen=True)
class TelemetrySample:
    """One synthesized telemetry packet."""
    team_id: str
    timestamp: str
    mission_time: int
    packet_count: int
    flight_phase: FlightPhase

    # Primary sensors
    altitude: float
    pressure: float
    temperature: float
    voltage: float
    velocity: float

    gnss: GNSSFix
    acceleration: Vector3
    gyroscope: Vector3

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['flight_phase'] = self.flight_phase.value
        return data
