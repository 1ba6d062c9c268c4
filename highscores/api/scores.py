from flask import Blueprint, current_app, jsonify, request

from highscores import socketio
from highscores.errors import ScoreServerError, StorageError, ValidationError

scores = Blueprint('scores', __name__)

LEADERBOARD_ROOM = 'leaderboard'


def _services():
    return current_app.extensions['highscores']


def _log_payload(data) -> None:
    if current_app.config.get('LOG_PAYLOADS', True):
        current_app.logger.info(f"[payload] path={request.path} body={data}")


@scores.errorhandler(ScoreServerError)
def handle_score_error(exc):
    if exc.status_code >= 500:
        current_app.logger.error(f"[error] path={request.path} kind={type(exc).__name__} message={exc.message}")
    else:
        current_app.logger.info(f"[rejected] path={request.path} kind={type(exc).__name__} message={exc.message}")
    return jsonify({'success': False, 'error': exc.message}), exc.status_code


@scores.route('/submit_high_score', methods=['POST'])
def submit_high_score():
    data = request.get_json(silent=True)
    _log_payload(data)
    services = _services()
    record = services.ingestor.submit(data)

    socketio.emit(
        'leaderboard_update',
        {
            'initials': record.initials,
            'score': record.score,
            'timestamp': services.normalizer.format_display(record.submitted_at),
        },
        to=LEADERBOARD_ROOM,
        namespace='/ws',
    )
    return jsonify({'success': True, 'message': 'High score submitted successfully'})


@scores.route('/get_high_scores', methods=['POST'])
def get_high_scores():
    data = request.get_json(silent=True) or {}
    _log_payload(data)
    player_id = data.get('uniqueid') if isinstance(data, dict) else None
    if not isinstance(player_id, str) or not player_id:
        raise ValidationError('Missing unique ID')

    rows = _services().leaderboard.player_scores(
        player_id,
        limit=data.get('limit'),
        offset=data.get('offset', 0),
    )
    current_app.logger.info(f"[query] player uniqueid={player_id} rows={len(rows)}")
    return jsonify({'success': True, 'scores': rows})


@scores.route('/get_top_10_scores', methods=['GET'])
def get_top_10_scores():
    rows = _services().leaderboard.top_10()
    current_app.logger.info(f"[query] top10 rows={len(rows)}")
    return jsonify({'success': True, 'scores': rows})


@scores.route('/api/top_100', methods=['GET'])
def get_top_100():
    try:
        rows = _services().leaderboard.top_100_raw()
    except StorageError:
        return jsonify({'error': 'Error retrieving high scores.'}), 500
    return jsonify(rows)


@scores.route('/health', methods=['GET'])
def health():
    return jsonify({'status': 'ok', 'scores': _services().store.count()})
