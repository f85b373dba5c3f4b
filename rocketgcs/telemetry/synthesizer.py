# rocketgcs/telemetry/synthesizer.py
"""
Synthesizes plausible CanSat telemetry for a given mission time and phase.

Each channel is a deterministic phase-specific curve plus bounded uniform
noise. The synthesizer keeps no state between calls apart from its random
generator, which can be seeded for reproducible runs.
"""
import math
from datetime import datetime, timezone
from typing import Callable, Optional, Union

import numpy as np

from ..constants.mission import MissionConstants
from ..mission.phases import FlightPhase, PhaseTable, DEFAULT_PHASE_TABLE
from .data_models import TelemetrySample, GNSSFix, Vector3

RandomSource = Union[None, int, np.random.Generator]

def _utc_now() -> datetime:
    return datetime.now(timezone.utc)

def _by_phase(table: dict, phase: FlightPhase):
    return table.get(phase.value, table['DEFAULT'])


class TelemetrySynthesizer:
    """Maps (mission time, phase) to one TelemetrySample."""

    def __init__(
        self,
        rng: RandomSource = None,
        phase_table: PhaseTable = DEFAULT_PHASE_TABLE,
        team_id: str = MissionConstants.TEAM_ID,
        clock: Callable[[], datetime] = _utc_now
    ):
        self.rng = rng if isinstance(rng, np.random.Generator) else np.random.default_rng(rng)
        self.phase_table = phase_table
        self.team_id = team_id
        self.clock = clock
        self.const = MissionConstants

    def noise(self, half_width: float = 1.0) -> float:
        """Uniform perturbation in [-half_width, half_width)."""
        return float(self.rng.uniform(-half_width, half_width))

    def synthesize(
        self,
        mission_time: int,
        phase: FlightPhase,
        packet_count: Optional[int] = None
    ) -> TelemetrySample:
        altitude = max(0.0, self._altitude(mission_time, phase))
        atmosphere = self.const.ATMOSPHERE
        battery = self.const.BATTERY
        noise = self.const.NOISE
        timestamp = self.clock().isoformat()

        voltage = (battery['FULL_VOLTAGE']
                   - mission_time * battery['DRAIN_V_PER_S']
                   + self.noise(noise['VOLTAGE']))

        return TelemetrySample(
            team_id=self.team_id,
            timestamp=timestamp,
            mission_time=mission_time,
            # Standalone samples assume 10 packets per second
            packet_count=packet_count if packet_count is not None else int(mission_time * 10),
            flight_phase=phase,
            altitude=altitude,
            pressure=(atmosphere['SEA_LEVEL_PRESSURE_PA']
                      - altitude * atmosphere['PRESSURE_LAPSE_PA_PER_M']
                      + self.noise(noise['PRESSURE'])),
            temperature=(atmosphere['SEA_LEVEL_TEMP_C']
                         - altitude * atmosphere['TEMP_LAPSE_C_PER_M']
                         + self.noise(noise['TEMPERATURE'])),
            voltage=max(battery['FLOOR_VOLTAGE'], voltage),
            velocity=self._velocity(phase),
            gnss=self._gnss(altitude, timestamp),
            acceleration=self._acceleration(phase),
            gyroscope=self._gyroscope(phase)
        )

    def _altitude(self, mission_time: float, phase: FlightPhase) -> float:
        traj = self.const.TRAJECTORY
        noise = self.noise(_by_phase(self.const.NOISE['ALTITUDE'], phase))
        elapsed = 0.0
        if phase in (FlightPhase.LAUNCH, FlightPhase.ASCENT, FlightPhase.DESCENT):
            # Clamped so fractional powers stay real
            elapsed = max(0.0, mission_time - self.phase_table.phase_start(phase))

        if phase == FlightPhase.LAUNCH:
            duration = self.phase_table.phase_duration(phase) or 1
            return (elapsed / duration) ** traj['LAUNCH_EXPONENT'] * traj['LAUNCH_SCALE_M'] + noise
        if phase == FlightPhase.ASCENT:
            progress = elapsed / (self.phase_table.phase_duration(phase) or 1)
            return (traj['ASCENT_BASE_M']
                    + traj['ASCENT_GAIN_M'] * progress
                    - progress ** traj['ASCENT_EXPONENT'] * traj['ASCENT_FALLOFF_M']
                    + noise)
        if phase in (FlightPhase.APOGEE, FlightPhase.SEPARATION):
            return traj['APOGEE_M'] + noise
        if phase == FlightPhase.DESCENT:
            return traj['APOGEE_M'] - elapsed * elapsed * traj['DESCENT_RATE'] + noise
        return noise

    def _velocity(self, phase: FlightPhase) -> float:
        noise = self.noise(_by_phase(self.const.NOISE['VELOCITY'], phase))
        return self.const.VELOCITY.get(phase.value, 0.0) + noise

    def _gnss(self, altitude: float, timestamp: str) -> GNSSFix:
        gnss = self.const.GNSS
        spread = self.const.NOISE['GNSS_POSITION']
        satellites = math.floor(gnss['NOMINAL_SATELLITES'] + self.noise(self.const.NOISE['SATELLITES']))
        return GNSSFix(
            latitude=self.const.PAD['LATITUDE'] + self.noise(spread),
            longitude=self.const.PAD['LONGITUDE'] + self.noise(spread),
            altitude=altitude,
            satellites=max(gnss['MIN_SATELLITES'], satellites),
            time=timestamp
        )

    def _acceleration(self, phase: FlightPhase) -> Vector3:
        noise = self.const.NOISE
        xy = _by_phase(noise['ACCEL_XY'], phase)
        return Vector3(
            x=self.noise(xy),
            y=self.noise(xy),
            z=_by_phase(self.const.ACCEL_Z_BASELINE, phase) + self.noise(_by_phase(noise['ACCEL_Z'], phase))
        )

    def _gyroscope(self, phase: FlightPhase) -> Vector3:
        noise = self.const.NOISE
        xy = _by_phase(noise['GYRO_XY'], phase)
        return Vector3(
            x=self.noise(xy),
            y=self.noise(xy),
            z=self.noise(_by_phase(noise['GYRO_Z'], phase))
        )


def synthesize(mission_time: int, phase: FlightPhase, rng: RandomSource = None) -> TelemetrySample:
    """One-off synthesis with the default phase table."""
    return TelemetrySynthesizer(rng).synthesize(mission_time, phase)
