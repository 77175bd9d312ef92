from flask import Blueprint, request, jsonify, current_app
from sqlalchemy.exc import SQLAlchemyError
from trivia import db
from trivia.errors import ValidationError
from trivia.services import ScoreLedger

highscores = Blueprint('highscores', __name__)


def _ledger():
    return ScoreLedger(db.session, policy=current_app.config.get('HIGHSCORE_POLICY', 'overwrite'))


def _json_body():
    """The request body as a dict; arrays, scalars and invalid JSON count as empty."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


@highscores.route('/highscore', methods=['GET'])
def get_highscores():
    limit = int(current_app.config.get('HIGHSCORE_LIMIT', 10))
    try:
        entries = _ledger().get_top_scores(limit)
    except SQLAlchemyError as exc:
        db.session.rollback()
        return jsonify({'success': False, 'message': 'Could not get highscores', 'errors': str(exc)}), 400
    return jsonify([entry.to_dict() for entry in entries])


@highscores.route('/highscore', methods=['POST'])
def post_highscore():
    data = _json_body()
    try:
        entry = _ledger().submit_score(data.get('name'), data.get('score'))
    except (ValidationError, SQLAlchemyError) as exc:
        db.session.rollback()
        return jsonify({'success': False, 'message': 'Could not post highscore', 'errors': str(exc)}), 400

    current_app.logger.info(f"[highscore] name={entry.name!r} score={entry.score}")
    return jsonify(entry.to_dict()), 201
