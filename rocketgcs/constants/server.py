# rocketgcs/constants/server.py

class ServerConstants:
    """Shared constants for the dashboard API."""

    DEFAULT_HOST = "127.0.0.1"
    DEFAULT_PORT = 5000
    EXPORT_DIR = "exports"
