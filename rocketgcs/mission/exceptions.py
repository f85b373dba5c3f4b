"""rocketgcs/mission/exceptions.py"""

class MissionError(Exception):
    """Base exception for mission engine errors."""
    pass

class InvalidMissionConfigError(MissionError):
    """Raised when a MissionConfig value is out of range"""
    def __init__(self, field_name, value, message="Invalid mission configuration"):
        self.field_name = field_name
        self.value = value
        super().__init__(f"{message}: {field_name}={value!r}")

class DriverShutdownError(MissionError):
    """Raised when a shut-down driver is asked to start a mission."""
    pass
