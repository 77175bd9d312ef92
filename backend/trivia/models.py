from trivia import db
from flask_login import UserMixin


class Account(UserMixin, db.Model):
    __tablename__ = 'account'
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(64), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(128), nullable=False)
    access_token = db.Column(db.String(256), unique=True, nullable=True, index=True)
    score = db.Column(db.Integer, default=0, nullable=False)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'score': self.score,
        }

    def __repr__(self):
        return f'<Account {self.id} {self.name!r}>'


class Highscore(db.Model):
    __tablename__ = 'highscore'
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(64), unique=True, nullable=False, index=True)
    score = db.Column(db.Integer, default=0, nullable=False)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'score': self.score,
        }


class Question(db.Model):
    __tablename__ = 'question'
    id = db.Column(db.Integer, primary_key=True)
    description = db.Column(db.Text, nullable=True)
    question = db.Column(db.Text, nullable=True)
    answers = db.Column(db.JSON, nullable=True)  # strings or {id, text, correct} objects
    correct_answer = db.Column(db.JSON, nullable=True)
    why = db.Column(db.Text, nullable=True)

    @classmethod
    def from_seed(cls, item):
        """Build a question from a seed entry, ignoring unknown keys."""
        return cls(
            description=item.get('description'),
            question=item.get('question'),
            answers=item.get('answers') or [],
            correct_answer=item.get('correctAnswer') or [],
            why=item.get('why'),
        )

    def to_dict(self):
        return {
            'id': self.id,
            'description': self.description,
            'question': self.question,
            'answers': self.answers,
            'correctAnswer': self.correct_answer,
            'why': self.why,
        }
