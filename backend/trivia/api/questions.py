from flask import Blueprint, jsonify
from sqlalchemy.exc import SQLAlchemyError
from trivia import db
from trivia.services import QuestionCatalog

questions = Blueprint('questions', __name__)


@questions.route('/questions', methods=['GET'])
def list_questions():
    try:
        items = QuestionCatalog(db.session).list_questions()
    except SQLAlchemyError as exc:
        db.session.rollback()
        return jsonify({'success': False, 'message': 'Could not get questions', 'errors': str(exc)}), 400
    return jsonify([q.to_dict() for q in items])
