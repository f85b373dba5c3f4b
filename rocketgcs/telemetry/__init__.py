"""
telemetry - Telemetry synthesis, status classification and CSV export
"""

from .data_models import TelemetrySample, GNSSFix, Vector3
from .synthesizer import TelemetrySynthesizer, synthesize
from .export import CSV_HEADERS, export_csv, export_filename
from .exceptions import TelemetryError, NoTelemetryError

__all__ = [
    'TelemetrySample',
    'GNSSFix',
    'Vector3',
    'TelemetrySynthesizer',
    'synthesize',
    'CSV_HEADERS',
    'export_csv',
    'export_filename',
    'TelemetryError',
    'NoTelemetryError'
]
