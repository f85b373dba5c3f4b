"""rocketgcs/constants/mission.py"""

class MissionConstants:
    """Nominal parameters for the simulated CanSat rocket flight"""

    TEAM_ID = "ASI-DTU"

    # ===== FLIGHT PHASES =====
    # Ordered (name, duration in seconds). IMPACT's duration is never reached,
    # it is the fallback once every threshold has passed.
    PHASE_DURATIONS = (
        ('PRELAUNCH', 30),
        ('LAUNCH', 10),
        ('ASCENT', 45),
        ('APOGEE', 5),
        ('SEPARATION', 2),
        ('DESCENT', 120),
        ('IMPACT', 5)
    )

    PHASE_LABELS = {
        'PRELAUNCH': 'Pre-Launch',
        'LAUNCH': 'Launch',
        'ASCENT': 'Ascent',
        'APOGEE': 'Apogee',
        'SEPARATION': 'Separation',
        'DESCENT': 'Descent',
        'IMPACT': 'Impact'
    }

    # ===== DRIVER =====
    TICK_INTERVAL_S = 1.0
    HISTORY_CAPACITY = 200

    # ===== LAUNCH SITE =====
    PAD = {
        'LATITUDE': 28.7041,
        'LONGITUDE': 77.1025
    }

    # ===== TRAJECTORY SHAPE =====
    TRAJECTORY = {
        'LAUNCH_EXPONENT': 2.2,
        'LAUNCH_SCALE_M': 200,
        'ASCENT_BASE_M': 200,
        'ASCENT_GAIN_M': 800,
        'ASCENT_EXPONENT': 2.5,
        'ASCENT_FALLOFF_M': 300,
        'APOGEE_M': 1000,
        'DESCENT_RATE': 0.12          # m per s^2 of descent time
    }

    # ===== ATMOSPHERE (linearised standard atmosphere) =====
    ATMOSPHERE = {
        'SEA_LEVEL_PRESSURE_PA': 101325,
        'PRESSURE_LAPSE_PA_PER_M': 12,
        'SEA_LEVEL_TEMP_C': 15,
        'TEMP_LAPSE_C_PER_M': 0.0065
    }

    # ===== POWER =====
    BATTERY = {
        'FULL_VOLTAGE': 12.6,
        'DRAIN_V_PER_S': 0.008,
        'FLOOR_VOLTAGE': 10.5,
        'CRITICAL_VOLTAGE': 11.0,
        'WARNING_VOLTAGE': 11.5
    }

    # ===== GNSS =====
    GNSS = {
        'NOMINAL_SATELLITES': 8,
        'MIN_SATELLITES': 4,
        'MAX_SATELLITES': 12
    }

    # ===== VELOCITY (m/s) =====
    VELOCITY = {
        'ASCENT': 50,
        'DESCENT': -30
    }

    # Uniform noise half-widths per channel
    NOISE = {
        'ALTITUDE': {
            'LAUNCH': 2, 'ASCENT': 5, 'APOGEE': 3, 'SEPARATION': 4,
            'DESCENT': 8, 'DEFAULT': 0.5
        },
        'PRESSURE': 15,
        'TEMPERATURE': 1,
        'VOLTAGE': 0.15,
        'GNSS_POSITION': 0.001,
        'SATELLITES': 2,
        'VELOCITY': {'ASCENT': 10, 'DESCENT': 8, 'DEFAULT': 5},
        'ACCEL_XY': {'LAUNCH': 25, 'DEFAULT': 3},
        'ACCEL_Z': {'LAUNCH': 8, 'DEFAULT': 2},
        'GYRO_XY': {'ASCENT': 80, 'DEFAULT': 15},
        'GYRO_Z': {'ASCENT': 120, 'DEFAULT': 20}
    }

    ACCEL_Z_BASELINE = {
        'LAUNCH': 18.0,
        'DEFAULT': -9.8
    }

    # ===== GROUND LINK =====
    SYSTEM = {
        'SIGNAL_STRENGTH_PCT': 95,
        'SIGNAL_FLOOR_PCT': 85,
        'SIGNAL_SWING_PCT': 10,
        'SIGNAL_PERIOD_DIVISOR_S': 10,
        'RANGE_KM': 2.4,
        'RANGE_KM_PER_KM_ALT': 1.5
    }

    ALTITUDE_WARNING_M = 1100

    # Control panel bands, (min, max)
    STATUS_RANGES = {
        'GNSS': (4, 12),
        'POWER': (11, 13)
    }

    # ===== PRE-LAUNCH CHECKLIST =====
    CHECKLIST_ITEMS = (
        'Battery voltage check (>11V)',
        'Communication link established',
        'GNSS lock acquired (≥4 satellites)',
        'Sensors responding normally',
        'Ground station antenna elevated',
        'Launch pad angle verified (80°-85°)',
        'Recovery system armed',
        'Flight software ready',
        'Payload separation tested',
        'Emergency procedures reviewed',
        'Team ready for launch'
    )
    CHECKLIST_SIZE = len(CHECKLIST_ITEMS)
