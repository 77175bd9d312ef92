import secrets
from typing import Optional

from sqlalchemy.exc import IntegrityError

from trivia.errors import AuthError, NotFoundError, ValidationError
from trivia.models import Account
from trivia.services.validation import INT_MAX, INT_MIN, require_int

MIN_PASSWORD_LENGTH = 5
TOKEN_BYTES = 128


def generate_access_token() -> str:
    return secrets.token_hex(TOKEN_BYTES)


def coerce_account_id(value) -> int:
    """Turn a body/path id into an int, raising NotFoundError for junk."""
    if isinstance(value, bool):
        raise NotFoundError('User not found')
    try:
        account_id = int(value)
    except (TypeError, ValueError):
        raise NotFoundError('User not found')
    if not INT_MIN <= account_id <= INT_MAX:
        raise NotFoundError('User not found')
    return account_id


class AccountService:
    """Account lifecycle: signup, login, logout, score and token checks.

    ``session`` is the SQLAlchemy session used for every read and write and
    ``hasher`` is a ``flask_bcrypt.Bcrypt`` instance. Passwords are hashed
    explicitly here; the model has no save hooks.
    """

    def __init__(self, session, hasher):
        self.session = session
        self.hasher = hasher

    def _get(self, account_id) -> Account:
        account = self.session.get(Account, coerce_account_id(account_id))
        if account is None:
            raise NotFoundError('User not found')
        return account

    def _hash(self, password: str) -> str:
        return self.hasher.generate_password_hash(password).decode('utf-8')

    def _check_password(self, account: Account, password) -> bool:
        if not isinstance(password, str) or not password:
            return False
        return self.hasher.check_password_hash(account.password_hash, password)

    @staticmethod
    def _validate_password(password) -> None:
        if not isinstance(password, str) or len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f'Password must be at least {MIN_PASSWORD_LENGTH} characters')

    def find_by_name(self, name) -> Optional[Account]:
        return self.session.query(Account).filter_by(name=name).first()

    def create_account(self, name, password) -> Account:
        if not isinstance(name, str) or not name.strip():
            raise ValidationError('Name is required')
        name = name.strip()
        self._validate_password(password)
        if self.find_by_name(name) is not None:
            raise ValidationError('Name already taken')

        account = Account(name=name, score=0)
        account.password_hash = self._hash(password)
        account.access_token = generate_access_token()
        self.session.add(account)
        try:
            self.session.commit()
        except IntegrityError:
            # Lost a race with a concurrent signup for the same name
            self.session.rollback()
            raise ValidationError('Name already taken')
        return account

    def login(self, name, password) -> Account:
        account = self.find_by_name(name.strip()) if isinstance(name, str) else None
        if account is None or not self._check_password(account, password):
            raise AuthError('User not found')

        previous = account.access_token
        token = generate_access_token()
        while token == previous:
            token = generate_access_token()
        account.access_token = token
        self.session.commit()
        return account

    def logout(self, account_id) -> Account:
        account = self._get(account_id)
        account.access_token = None
        self.session.commit()
        return account

    def increment_score(self, account_id, delta) -> int:
        require_int(delta)
        account_id = coerce_account_id(account_id)
        updated = (
            self.session.query(Account)
            .filter(Account.id == account_id)
            .update({Account.score: Account.score + delta}, synchronize_session=False)
        )
        if not updated:
            self.session.rollback()
            raise NotFoundError('User not found')
        self.session.commit()
        return self.session.query(Account.score).filter(Account.id == account_id).scalar()

    def update_password(self, account_id, current_password, new_password) -> Account:
        account = self._get(account_id)
        if not self._check_password(account, current_password):
            raise AuthError('Current password is incorrect')
        self._validate_password(new_password)
        account.password_hash = self._hash(new_password)
        # Existing sessions die with the old password
        account.access_token = generate_access_token()
        self.session.commit()
        return account

    def authenticate(self, token) -> Account:
        if not isinstance(token, str) or not token:
            raise AuthError('Missing access token')
        account = self.session.query(Account).filter_by(access_token=token).first()
        if account is None:
            raise AuthError('Invalid access token')
        return account
