#!/usr/bin/env python3
# rocketgcs/mission/tests/test_driver.py

import sys
import threading
import time
from pathlib import Path
import unittest
from unittest.mock import MagicMock

# Add project root
project_root = Path(__file__).resolve().parents[3]
sys.path.append(str(project_root))

from rocketgcs.mission.actions import start_mission, stop_mission
from rocketgcs.mission.config import MissionConfig
from rocketgcs.mission.driver import MissionDriver
from rocketgcs.mission.exceptions import DriverShutdownError
from rocketgcs.mission.phases import FlightPhase
from rocketgcs.mission.store import MissionStore

def wait_for(predicate, timeout=3.0):
    deadline = time.time() + timeout
    while time.time() < deadline:
        if predicate():
            return True
        time.sleep(0.005)
    return predicate()


class TestDriverTicks(unittest.TestCase):
    """Synchronous ticking, no background thread involved"""

    def setUp(self):
        self.store = MissionStore(MissionConfig(seed=1))
        self.driver = MissionDriver(self.store)

    def test_tick_when_inactive_does_nothing(self):
        before = self.store.state
        self.assertFalse(self.driver.tick())
        self.assertIs(self.store.state, before)

    def test_end_to_end_45_ticks(self):
        self.driver.start(background=False)
        self.assertEqual(self.driver.advance(45), 45)
        state = self.store.state
        self.assertEqual(state.mission.mission_time, 45)
        self.assertEqual(state.mission.packet_count, 45)
        self.assertEqual(state.mission.flight_phase, FlightPhase.ASCENT)
        self.assertEqual(len(state.telemetry.history), 45)
        self.assertEqual(state.telemetry.current.mission_time, 45)
        self.assertEqual(state.telemetry.current.packet_count, 45)
        self.assertEqual(state.telemetry.current.flight_phase, FlightPhase.ASCENT)

    def test_history_capped_at_capacity(self):
        store = MissionStore(MissionConfig(seed=1, history_capacity=20))
        driver = MissionDriver(store)
        driver.start(background=False)
        driver.advance(45)
        history = store.state.telemetry.history
        self.assertEqual(len(history), 20)
        self.assertEqual([s.mission_time for s in history], list(range(26, 46)))

    def test_system_status_follows_tick(self):
        self.driver.start(background=False)
        self.driver.advance(1)
        state = self.store.state
        self.assertEqual(state.system.last_update, state.telemetry.current.timestamp)
        self.assertGreaterEqual(state.system.signal_strength, 85)
        self.assertAlmostEqual(state.system.range, 2.4 + state.telemetry.current.altitude / 1000 * 1.5)

    def test_keeps_ticking_in_impact(self):
        self.driver.start(background=False)
        self.driver.advance(300)
        self.assertEqual(self.store.state.mission.mission_time, 300)
        self.assertEqual(self.store.state.mission.flight_phase, FlightPhase.IMPACT)

    def test_stop_halts_advance(self):
        self.driver.start(background=False)
        self.driver.advance(5)
        self.driver.stop()
        self.assertEqual(self.driver.advance(5), 0)
        self.assertEqual(self.store.state.mission.mission_time, 5)
        self.assertEqual(len(self.store.state.telemetry.history), 5)

    def test_failed_synthesis_leaves_state_untouched(self):
        synthesizer = MagicMock()
        synthesizer.synthesize.side_effect = RuntimeError("sensor model exploded")
        driver = MissionDriver(self.store, synthesizer=synthesizer)
        driver.start(background=False)
        before = self.store.state
        with self.assertRaises(RuntimeError):
            driver.tick()
        self.assertIs(self.store.state, before)
        self.assertEqual(self.store.state.mission.mission_time, 0)
        self.assertEqual(self.store.state.mission.packet_count, 0)
        self.assertIsNone(self.store.state.telemetry.current)

    def test_reset_then_start_begins_at_zero(self):
        self.driver.start(background=False)
        self.driver.advance(35)
        self.driver.reset()
        self.assertEqual(self.store.state.mission.flight_phase, FlightPhase.PRELAUNCH)
        self.driver.start(background=False)
        self.driver.advance(1)
        self.assertEqual(self.store.state.mission.mission_time, 1)
        self.assertEqual(len(self.store.state.telemetry.history), 1)


class TestDriverTicker(unittest.TestCase):
    """Background ticker lifecycle"""

    def setUp(self):
        self.store = MissionStore(MissionConfig(seed=2, tick_interval_s=0.01))
        self.driver = MissionDriver(self.store)

    def tearDown(self):
        self.driver.shutdown()

    def _tickers(self):
        return [t for t in threading.enumerate() if t.name == "mission-ticker" and t.is_alive()]

    def test_ticker_advances_mission(self):
        self.driver.start()
        self.assertTrue(wait_for(lambda: self.store.state.mission.packet_count >= 3))
        self.assertTrue(self.driver.is_ticking)

    def test_restart_does_not_double_schedule(self):
        self.driver.start()
        first = self.driver._ticker
        self.driver.start()
        self.assertIs(self.driver._ticker, first)
        self.assertEqual(len(self._tickers()), 1)

    def test_stop_cancels_ticker(self):
        self.driver.start()
        self.assertTrue(wait_for(lambda: self.store.state.mission.packet_count >= 2))
        self.driver.stop()
        self.assertFalse(self.driver.is_ticking)
        frozen = self.store.state.mission.packet_count
        time.sleep(0.05)
        self.assertEqual(self.store.state.mission.packet_count, frozen)
        self.assertEqual(self._tickers(), [])

    def test_start_after_stop_creates_fresh_ticker(self):
        self.driver.start()
        self.driver.stop()
        self.driver.start()
        self.assertTrue(self.driver.is_ticking)
        self.assertTrue(wait_for(lambda: self.store.state.mission.packet_count >= 1))

    def test_shutdown_is_final(self):
        self.driver.start()
        self.driver.shutdown()
        self.assertFalse(self.store.state.mission.is_active)
        self.assertFalse(self.driver.is_ticking)
        with self.assertRaises(DriverShutdownError):
            self.driver.start()

    def test_ticker_retires_when_store_stops_mission(self):
        self.driver.start()
        self.assertTrue(wait_for(lambda: self.store.state.mission.packet_count >= 1))
        self.store.dispatch(stop_mission())
        self.assertTrue(wait_for(lambda: not self.driver.is_ticking))
        self.assertTrue(wait_for(lambda: self._tickers() == []))

    def test_start_right_after_store_stop_keeps_one_ticker(self):
        self.driver.start()
        self.assertTrue(wait_for(lambda: self.store.state.mission.packet_count >= 1))
        self.store.dispatch(stop_mission())
        self.driver.start()
        self.assertTrue(wait_for(lambda: self.store.state.mission.packet_count >= 3))
        self.assertTrue(wait_for(lambda: len(self._tickers()) == 1))
        self.assertTrue(self.driver.is_ticking)

    def test_live_ticker_is_kept_while_mission_active(self):
        self.driver.start()
        ticker, cancel = self.driver._ticker, self.driver._cancel
        self.assertFalse(self.driver._detach(cancel))
        self.assertIs(self.driver._ticker, ticker)
        self.assertIs(self.driver._cancel, cancel)

    def test_store_start_alone_does_not_tick(self):
        """Ticking only follows MissionDriver.start"""
        self.driver.start()
        self.store.dispatch(stop_mission())
        self.assertTrue(wait_for(lambda: not self.driver.is_ticking))
        self.store.dispatch(start_mission())
        time.sleep(0.05)
        self.assertEqual(self.store.state.mission.packet_count, 0)
        self.assertFalse(self.driver.is_ticking)

        self.driver.start()
        self.assertTrue(wait_for(lambda: self.store.state.mission.packet_count >= 1))

    def test_tick_failure_stops_mission(self):
        synthesizer = MagicMock()
        synthesizer.synthesize.side_effect = RuntimeError("sensor model exploded")
        driver = MissionDriver(self.store, synthesizer=synthesizer)
        try:
            driver.start()
            self.assertTrue(wait_for(lambda: not self.store.state.mission.is_active))
            self.assertTrue(wait_for(lambda: not driver.is_ticking))
        finally:
            driver.shutdown()

if __name__ == '__main__':
    unittest.main()
