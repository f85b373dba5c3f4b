# run_mission.py
"""
Headless mission run: ticks the driver and prints one status line per
packet, then optionally writes the final CSV export.
"""
import argparse
import logging
import os
import time

from rocketgcs.constants.server import ServerConstants
from rocketgcs.mission import MissionConfig, MissionDriver, MissionStore
from rocketgcs.telemetry import export_csv, export_filename
from rocketgcs.telemetry.status import format_mission_time

def print_packet(state):
    sample = state.telemetry.current
    if sample is None:
        return
    print(
        f"  T+{format_mission_time(state.mission.mission_time)} | "
        f"{state.mission.flight_phase.label:<10} | "
        f"Alt: {sample.altitude:7.1f} m | "
        f"Vel: {sample.velocity:6.1f} m/s | "
        f"Batt: {sample.voltage:5.2f} V | "
        f"Sats: {sample.gnss.satellites:2d} | "
        f"Signal: {state.system.signal_strength:5.1f}%"
    )

def main():
    parser = argparse.ArgumentParser(description="Run a simulated rocket mission without the dashboard")
    parser.add_argument('--ticks', type=int, default=230, help="Number of ticks to run")
    parser.add_argument('--seed', type=int, default=None)
    parser.add_argument('--realtime', action='store_true', help="Tick on the wall clock instead of instantly")
    parser.add_argument('--export', action='store_true', help="Write the final packet as CSV")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')

    store = MissionStore(MissionConfig(seed=args.seed))
    driver = MissionDriver(store)
    unsubscribe = None

    print("--- Starting Mission ---")
    print("-" * 40)
    try:
        if args.realtime:
            last_update = [None]

            def on_change(state):
                # UPDATE_SYSTEM_STATUS is the last dispatch of a tick
                if state.system.last_update and state.system.last_update != last_update[0]:
                    last_update[0] = state.system.last_update
                    print_packet(state)

            unsubscribe = store.subscribe(on_change)
            driver.start()
            while store.state.mission.packet_count < args.ticks:
                time.sleep(0.1)
            driver.stop()
        else:
            driver.start(background=False)
            for _ in range(args.ticks):
                driver.tick()
                print_packet(store.state)
            driver.stop()
    except KeyboardInterrupt:
        print("\n[QUIT] Shutting down...")
    finally:
        if unsubscribe:
            unsubscribe()
        driver.shutdown()

    print("-" * 40)
    print(f"Packets: {store.state.mission.packet_count}, history: {len(store.state.telemetry.history)}")

    if args.export and store.state.telemetry.current is not None:
        os.makedirs(ServerConstants.EXPORT_DIR, exist_ok=True)
        path = os.path.join(ServerConstants.EXPORT_DIR, export_filename(store.config.team_id))
        with open(path, 'w') as f:
            f.write(export_csv(store.state.telemetry.current) + '\n')
        print(f"Export saved to {path}")

    print("\n--- Mission Complete ---")

if __name__ == "__main__":
    main()
