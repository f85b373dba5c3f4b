"""
rocketgcs - Ground control engine for a simulated rocket flight.

Exposes the mission store, the tick driver and the telemetry synthesizer.
"""

from .mission import MissionStore, MissionDriver, MissionConfig, FlightPhase
from .telemetry import TelemetrySynthesizer, TelemetrySample

__all__ = [
    'MissionStore',
    'MissionDriver',
    'MissionConfig',
    'FlightPhase',
    'TelemetrySynthesizer',
    'TelemetrySample'
]
