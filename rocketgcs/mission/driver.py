# rocketgcs/mission/driver.py
"""
Mission driver: advances mission time once per tick while the mission is
active and publishes the result into the store.

One tick, in order: time+1, phase lookup, UPDATE_MISSION_TIME, UPDATE_TELEMETRY,
UPDATE_SYSTEM_STATUS. The sample is synthesized before anything is dispatched,
so a failed synthesis leaves the state untouched. The whole sequence runs
under the store lock, so a STOP either lands before the tick (and the tick is
skipped) or after all three dispatches.
"""
import logging
import threading
from typing import Optional

from ..telemetry.status import signal_strength_at, link_range_km
from ..telemetry.synthesizer import TelemetrySynthesizer
from .actions import (
    start_mission, stop_mission, reset_mission,
    update_mission_time, update_telemetry, update_system_status
)
from .exceptions import DriverShutdownError
from .store import MissionStore

logger = logging.getLogger(__name__)

class MissionDriver:
    """
    Owns the single recurring ticker for one MissionStore.

    Only start() creates a ticker. START, STOP and RESET should be issued
    through this class rather than dispatched on the store, or the ticker
    will not follow the mission state.
    """

    def __init__(self, store: MissionStore,
                 synthesizer: Optional[TelemetrySynthesizer] = None,
                 tick_interval_s: Optional[float] = None):
        self.store = store
        self.config = store.config
        self.phase_table = self.config.phase_table()
        self.synthesizer = synthesizer or TelemetrySynthesizer(
            rng=self.config.seed,
            phase_table=self.phase_table,
            team_id=self.config.team_id
        )
        self.tick_interval_s = tick_interval_s or self.config.tick_interval_s

        self._ticker: Optional[threading.Thread] = None
        self._cancel: Optional[threading.Event] = None
        self._ticker_lock = threading.Lock()
        self._is_shut_down = False

    # --- Control actions ---

    def start(self, background: bool = True):
        """Starts (or restarts) the mission. Never creates a second ticker."""
        if self._is_shut_down:
            raise DriverShutdownError("Driver has been shut down; create a new one")
        self.store.dispatch(start_mission())
        logger.info("Mission started.")
        if background:
            self._ensure_ticker()

    def stop(self):
        self.store.dispatch(stop_mission())
        self._cancel_ticker()
        logger.info(f"Mission stopped at T+{self.store.state.mission.mission_time}s.")

    def reset(self):
        self.store.dispatch(reset_mission())
        self._cancel_ticker()
        logger.info("Mission reset.")

    def shutdown(self):
        """Tears down the ticker for good. Further start() calls raise."""
        self._is_shut_down = True
        if self.store.state.mission.is_active:
            self.store.dispatch(stop_mission())
        self._cancel_ticker()
        logger.info("Mission driver shut down.")

    @property
    def is_ticking(self) -> bool:
        ticker = self._ticker
        return ticker is not None and ticker.is_alive()

    # --- Ticking ---

    def tick(self) -> bool:
        """Runs one tick. Returns False, dispatching nothing, if the mission is inactive."""
        with self.store.lock:
            mission = self.store.state.mission
            if not mission.is_active:
                return False

            new_time = mission.mission_time + 1
            new_phase = self.phase_table.phase_at(new_time)
            new_packet_count = mission.packet_count + 1
            sample = self.synthesizer.synthesize(new_time, new_phase, packet_count=new_packet_count)

            self.store.dispatch(update_mission_time(new_time, new_phase, new_packet_count))
            self.store.dispatch(update_telemetry(sample))

            self.store.dispatch(update_system_status(
                signal_strength=signal_strength_at(new_time),
                range=link_range_km(sample.altitude),
                last_update=sample.timestamp
            ))

        if new_phase != mission.flight_phase:
            logger.info(f"T+{new_time}s: phase {mission.flight_phase.value} -> {new_phase.value}")
        logger.debug(f"Tick T+{new_time}s packet={new_packet_count} alt={sample.altitude:.1f}m")
        return True

    def advance(self, ticks: int) -> int:
        """Runs up to `ticks` ticks synchronously. Returns how many fired."""
        fired = 0
        for _ in range(ticks):
            if not self.tick():
                break
            fired += 1
        return fired

    def _ensure_ticker(self):
        with self._ticker_lock:
            if self._ticker is not None and self._ticker.is_alive():
                return
            self._cancel = threading.Event()
            self._ticker = threading.Thread(
                target=self._run, args=(self._cancel,), name="mission-ticker", daemon=True
            )
            self._ticker.start()

    def _cancel_ticker(self):
        with self._ticker_lock:
            ticker, cancel = self._ticker, self._cancel
            self._ticker, self._cancel = None, None
        if cancel is not None:
            cancel.set()
        if ticker is not None and ticker is not threading.current_thread():
            ticker.join()

    def _run(self, cancel: threading.Event):
        # Cancellation is checked before every tick fires
        while not cancel.wait(self.tick_interval_s):
            try:
                if not self.tick() and self._detach(cancel):
                    break
            except Exception as e:
                logger.error(f"FATAL ERROR in mission ticker: {e}", exc_info=True)
                self.store.dispatch(stop_mission())
                self._detach(cancel)
                break

    def _detach(self, cancel: threading.Event) -> bool:
        """Retires the calling ticker unless a START raced in since its last tick."""
        with self._ticker_lock:
            if self.store.state.mission.is_active and not cancel.is_set():
                return False
            if self._cancel is cancel:
                self._ticker, self._cancel = None, None
            return True
