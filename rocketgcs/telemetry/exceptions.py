"""rocketgcs/telemetry/exceptions.py"""

class TelemetryError(Exception):
    """Base exception for telemetry synthesis and export errors."""
    pass

class NoTelemetryError(TelemetryError):
    """Raised when an export is requested before any sample exists."""
    pass
