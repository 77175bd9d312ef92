import json
import os

from trivia.models import Question

SEED_PATH = os.path.join(os.path.dirname(os.path.dirname(__file__)), 'seed', 'questions.json')


def load_seed(path=None):
    with open(path or SEED_PATH, encoding='utf-8') as fh:
        return json.load(fh)


class QuestionCatalog:
    def __init__(self, session):
        self.session = session

    def list_questions(self):
        return self.session.query(Question).order_by(Question.id.asc()).all()

    def reseed(self, seed_data) -> int:
        """Replace every stored question with ``seed_data``; returns the count inserted."""
        self.session.query(Question).delete()
        questions = [Question.from_seed(item) for item in seed_data]
        self.session.add_all(questions)
        self.session.commit()
        return len(questions)
