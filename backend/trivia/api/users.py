from flask import Blueprint, request, jsonify, current_app
from flask_login import login_required, current_user
from sqlalchemy.exc import SQLAlchemyError
from trivia import db, bcrypt
from trivia.errors import AuthError, NotFoundError, ValidationError
from trivia.services import AccountService

users = Blueprint('users', __name__)


def _accounts():
    return AccountService(db.session, bcrypt)


def _json_body():
    """The request body as a dict; arrays, scalars and invalid JSON count as empty."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _caller_matches(data):
    """A body userId, when given, must name the token's owner."""
    requested = data.get('userId')
    return requested is None or str(requested) == str(current_user.id)


@users.route('/users', methods=['POST'])
def create_user():
    data = _json_body()
    try:
        account = _accounts().create_account(data.get('name'), data.get('password'))
    except (ValidationError, SQLAlchemyError) as exc:
        db.session.rollback()
        current_app.logger.info(f"[signup-failed] name={data.get('name')!r} reason={exc}")
        return jsonify({'message': 'Could not create user', 'errors': str(exc)}), 400

    current_app.logger.info(f"[signup] account={account.id} name={account.name!r}")
    return jsonify({'userId': account.id, 'accessToken': account.access_token}), 200


@users.route('/sessions', methods=['POST'])
def create_session():
    data = _json_body()
    try:
        account = _accounts().login(data.get('name'), data.get('password'))
    except (AuthError, SQLAlchemyError):
        db.session.rollback()
        current_app.logger.info(f"[login-failed] name={data.get('name')!r}")
        return jsonify({'error': 'User not found'}), 404

    current_app.logger.info(f"[login] account={account.id}")
    return jsonify({
        'userId': account.id,
        'accessToken': account.access_token,
        'score': account.score,
        'userName': account.name,
    }), 200


@users.route('/logout', methods=['POST'])
@login_required
def logout():
    data = _json_body()
    if not _caller_matches(data):
        return jsonify({'error': 'Login failed, try again'}), 401
    try:
        account = _accounts().logout(current_user.id)
    except (NotFoundError, SQLAlchemyError) as exc:
        db.session.rollback()
        return jsonify({'error': str(exc), 'message': 'Could not log out'}), 400

    current_app.logger.info(f"[logout] account={account.id}")
    return jsonify({'userId': account.id, 'accessToken': account.access_token}), 200


@users.route('/userscore', methods=['POST'])
@login_required
def update_user_score():
    data = _json_body()
    if not _caller_matches(data):
        return jsonify({'error': 'Login failed, try again'}), 401
    try:
        score = _accounts().increment_score(current_user.id, data.get('scoreNumber'))
    except (ValidationError, NotFoundError, SQLAlchemyError) as exc:
        db.session.rollback()
        return jsonify({'error': str(exc), 'message': 'Could not update score'}), 400

    current_app.logger.info(f"[score] account={current_user.id} delta={data.get('scoreNumber')} total={score}")
    return jsonify({'score': score}), 200


@users.route('/password', methods=['POST'])
@login_required
def change_password():
    data = _json_body()
    try:
        account = _accounts().update_password(
            current_user.id, data.get('currentPassword'), data.get('newPassword')
        )
    except AuthError as exc:
        return jsonify({'error': str(exc)}), 401
    except (ValidationError, NotFoundError, SQLAlchemyError) as exc:
        db.session.rollback()
        return jsonify({'error': str(exc), 'message': 'Could not change password'}), 400

    current_app.logger.info(f"[password] account={account.id} token rotated")
    return jsonify({'userId': account.id, 'accessToken': account.access_token}), 200
