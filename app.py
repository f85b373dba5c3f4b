# app.py
import argparse
import atexit
import logging
import time
from typing import Any, Dict, Optional

from flask import Flask, Response, jsonify, request

from rocketgcs.constants.mission import MissionConstants
from rocketgcs.constants.server import ServerConstants
from rocketgcs.mission import MissionConfig, MissionDriver, MissionStore
from rocketgcs.mission.actions import update_checklist
from rocketgcs.telemetry import NoTelemetryError, export_csv, export_filename
from rocketgcs.telemetry import status

log = logging.getLogger('werkzeug')
log.setLevel(logging.WARNING)


def _format_response(success: bool, message: str, data: Optional[Dict] = None) -> Dict[str, Any]:
    """Standardized JSON response."""
    return {
        "module": "mission",
        "success": success,
        "message": message,
        "data": data or {},
        "timestamp": time.time()
    }

def _ranged_status(value, channel: str) -> str:
    if value is None:
        return status.INACTIVE
    low, high = MissionConstants.STATUS_RANGES[channel]
    return status.channel_status(value, low, high)

def _display(state) -> Dict[str, Any]:
    """Values the dashboard shows next to the raw state."""
    current = state.telemetry.current
    completed, total, percent = status.checklist_progress(state.checklist)
    return {
        'mission_clock': status.format_mission_time(state.mission.mission_time),
        'phase_label': state.mission.flight_phase.label,
        'mission_status': status.mission_status(state.mission.is_active),
        'altitude_status': status.altitude_status(current.altitude if current else None),
        'voltage_status': status.voltage_status(current.voltage if current else None),
        'gnss_status': status.satellite_status(current.gnss.satellites if current else None),
        'gnss_link_status': _ranged_status(current.gnss.satellites if current else None, 'GNSS'),
        'power_status': _ranged_status(current.voltage if current else None, 'POWER'),
        'checklist': {'completed': completed, 'total': total, 'percent': percent}
    }


def create_app(config: Optional[MissionConfig] = None) -> Flask:
    app = Flask(__name__)
    store = MissionStore(config)
    driver = MissionDriver(store)
    app.extensions['mission_store'] = store
    app.extensions['mission_driver'] = driver

    @app.route('/')
    @app.route('/state')
    def get_state():
        state = store.state
        data = state.to_dict()
        data['display'] = _display(state)
        return jsonify(data)

    @app.route('/mission/start', methods=['POST'])
    def start():
        driver.start()
        return jsonify(_format_response(True, "Mission started", store.state.to_dict()['mission']))

    @app.route('/mission/stop', methods=['POST'])
    def stop():
        driver.stop()
        return jsonify(_format_response(True, "Mission stopped", store.state.to_dict()['mission']))

    @app.route('/mission/reset', methods=['POST'])
    def reset():
        driver.reset()
        return jsonify(_format_response(True, "Mission reset", store.state.to_dict()['mission']))

    @app.route('/checklist')
    def checklist():
        items = store.state.checklist.items
        return jsonify([
            {'index': index, 'text': text, 'checked': items.get(index, False)}
            for index, text in enumerate(MissionConstants.CHECKLIST_ITEMS)
        ])

    @app.route('/checklist/<int:index>', methods=['POST'])
    def toggle_checklist_item(index):
        total = store.state.checklist.total_items
        if index >= total:
            return jsonify(_format_response(
                False, f"Invalid checklist index {index}. Valid range: 0-{total - 1}"
            )), 400
        body = request.get_json(silent=True)
        if body is None:
            body = {}
        if not isinstance(body, dict):
            return jsonify(_format_response(False, "Request body must be a JSON object")), 400
        checked = body.get('checked', not store.state.checklist.items.get(index, False))
        store.dispatch(update_checklist(index, bool(checked)))
        return jsonify(_format_response(True, f"Checklist item {index} set to {bool(checked)}",
                                        {'index': index, 'checked': bool(checked)}))

    @app.route('/export')
    def export():
        try:
            csv_text = export_csv(store.state.telemetry.current)
        except NoTelemetryError as e:
            return jsonify({'error': str(e)}), 404
        filename = export_filename(store.config.team_id)
        logging.info(f"Exported telemetry as {filename}")
        return Response(csv_text, mimetype='text/csv',
                        headers={'Content-Disposition': f'attachment; filename={filename}'})

    return app


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description="Rocket ground-station dashboard API")
    parser.add_argument('--host', default=ServerConstants.DEFAULT_HOST)
    parser.add_argument('--port', type=int, default=ServerConstants.DEFAULT_PORT)
    parser.add_argument('--seed', type=int, default=None, help="Seed for reproducible telemetry")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
    app = create_app(MissionConfig(seed=args.seed))
    atexit.register(app.extensions['mission_driver'].shutdown)
    app.run(host=args.host, port=args.port, debug=False, use_reloader=False)
