# rocketgcs/telemetry/export.py
"""
CSV export of a single telemetry sample.

The header and the field order are fixed by the ground-station packet
format; values are rounded to the precision the dashboard displays.
"""
import csv
import io
import time
from typing import List, Optional

from .data_models import TelemetrySample
from .exceptions import NoTelemetryError

CSV_HEADERS = [
    'TEAM_ID', 'TIME_STAMPING', 'PACKET_COUNT', 'ALTITUDE', 'PRESSURE', 'TEMP',
    'VOLTAGE', 'GNSS_TIME', 'GNSS_LATITUDE', 'GNSS_LONGITUDE', 'GNSS_ALTITUDE',
    'GNSS_SATS', 'ACCELEROMETER_DATA_X', 'ACCELEROMETER_DATA_Y', 'ACCELEROMETER_DATA_Z',
    'GYRO_SPIN_RATE_X', 'GYRO_SPIN_RATE_Y', 'GYRO_SPIN_RATE_Z', 'FLIGHT_SOFTWARE_STATE'
]

def flatten_sample(sample: TelemetrySample) -> List[str]:
    """One CSV row in CSV_HEADERS order."""
    return [
        sample.team_id,
        str(sample.mission_time),
        str(sample.packet_count),
        f"{sample.altitude:.1f}",
        f"{sample.pressure:.0f}",
        f"{sample.temperature:.1f}",
        f"{sample.voltage:.2f}",
        sample.gnss.time,
        f"{sample.gnss.latitude:.4f}",
        f"{sample.gnss.longitude:.4f}",
        f"{sample.gnss.altitude:.1f}",
        str(sample.gnss.satellites),
        f"{sample.acceleration.x:.2f}",
        f"{sample.acceleration.y:.2f}",
        f"{sample.acceleration.z:.2f}",
        f"{sample.gyroscope.x:.1f}",
        f"{sample.gyroscope.y:.1f}",
        f"{sample.gyroscope.z:.1f}",
        sample.flight_phase.value
    ]

def export_csv(sample: Optional[TelemetrySample]) -> str:
    """Header row plus one data row, newline separated."""
    if sample is None:
        raise NoTelemetryError("No telemetry to export")
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator='\n')
    writer.writerow(CSV_HEADERS)
    writer.writerow(flatten_sample(sample))
    return buffer.getvalue().rstrip('\n')

def export_filename(team_id: str, now: Optional[float] = None) -> str:
    millis = round((time.time() if now is None else now) * 1000)
    return f"Flight_{team_id}_{millis}.csv"
