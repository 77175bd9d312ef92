import pytest

from trivia import db
from trivia.errors import AuthError, NotFoundError, ValidationError
from trivia.models import Account, Highscore
from trivia.services import ScoreLedger, scores


def test_create_account_token_authenticates(accounts):
    account = accounts.create_account('bob', 'secret')
    assert account.id is not None
    assert len(account.access_token) == 256
    assert accounts.authenticate(account.access_token).id == account.id
    # Never stored in plaintext
    assert account.password_hash != 'secret'
    assert account.score == 0


@pytest.mark.parametrize('name,password', [
    (None, 'secret'),
    ('   ', 'secret'),
    ('bob', None),
    ('bob', 'abcd'),
    (42, 'secret'),
])
def test_create_account_rejects_invalid_input(accounts, name, password):
    with pytest.raises(ValidationError):
        accounts.create_account(name, password)


def test_create_account_rejects_duplicate_name(accounts):
    accounts.create_account('bob', 'secret')
    with pytest.raises(ValidationError):
        accounts.create_account('bob', 'another')
    assert db.session.query(Account).filter_by(name='bob').count() == 1


def test_login_issues_new_token(accounts):
    account = accounts.create_account('bob', 'secret')
    previous = account.access_token
    logged_in = accounts.login('bob', 'secret')
    assert logged_in.access_token != previous
    # Only the newest token is valid
    with pytest.raises(AuthError):
        accounts.authenticate(previous)
    assert accounts.authenticate(logged_in.access_token).id == account.id


def test_login_with_wrong_password_keeps_token(accounts):
    account = accounts.create_account('bob', 'secret')
    previous = account.access_token
    with pytest.raises(AuthError):
        accounts.login('bob', 'wrong')
    with pytest.raises(AuthError):
        accounts.login('nobody', 'secret')
    assert db.session.get(Account, account.id).access_token == previous


def test_logout_clears_token(accounts):
    account = accounts.create_account('bob', 'secret')
    token = account.access_token
    logged_out = accounts.logout(account.id)
    assert logged_out.access_token is None
    with pytest.raises(AuthError):
        accounts.authenticate(token)


def test_logout_unknown_id(accounts):
    with pytest.raises(NotFoundError):
        accounts.logout(999)
    with pytest.raises(NotFoundError):
        accounts.logout('not-an-id')


def test_increment_score_is_additive(accounts):
    account = accounts.create_account('bob', 'secret')
    assert accounts.increment_score(account.id, 7) == 7
    assert accounts.increment_score(account.id, 5) == 12
    assert accounts.increment_score(account.id, -5) == 7


def test_increment_score_errors(accounts):
    account = accounts.create_account('bob', 'secret')
    with pytest.raises(NotFoundError):
        accounts.increment_score(999, 1)
    with pytest.raises(ValidationError):
        accounts.increment_score(account.id, '5')
    with pytest.raises(ValidationError):
        accounts.increment_score(account.id, True)


def test_update_password_rotates_token(accounts):
    account = accounts.create_account('bob', 'secret')
    old_token = account.access_token
    with pytest.raises(AuthError):
        accounts.update_password(account.id, 'wrong', 'newsecret')
    with pytest.raises(ValidationError):
        accounts.update_password(account.id, 'secret', 'abc')

    updated = accounts.update_password(account.id, 'secret', 'newsecret')
    assert updated.access_token != old_token
    with pytest.raises(AuthError):
        accounts.login('bob', 'secret')
    assert accounts.login('bob', 'newsecret').id == account.id


def test_authenticate_rejects_missing_token(accounts):
    with pytest.raises(AuthError):
        accounts.authenticate(None)
    with pytest.raises(AuthError):
        accounts.authenticate('deadbeef')


def test_submit_score_overwrites(ledger):
    ledger.submit_score('alice', 10)
    entry = ledger.submit_score('alice', 3)
    assert entry.score == 3
    assert db.session.query(Highscore).filter_by(name='alice').count() == 1


def test_submit_score_max_policy_keeps_best(app_ctx):
    ledger = ScoreLedger(db.session, policy='max')
    ledger.submit_score('alice', 10)
    assert ledger.submit_score('alice', 3).score == 10
    assert ledger.submit_score('alice', 12).score == 12


def test_submit_score_without_native_upsert(ledger, monkeypatch):
    monkeypatch.setattr(scores, '_UPSERT_INSERTS', {})
    ledger.submit_score('alice', 10)
    entry = ledger.submit_score('alice', 3)
    assert entry.score == 3
    assert db.session.query(Highscore).filter_by(name='alice').count() == 1


def test_submit_score_validation(ledger):
    with pytest.raises(ValidationError):
        ledger.submit_score('', 3)
    with pytest.raises(ValidationError):
        ledger.submit_score('alice', '3')
    with pytest.raises(ValidationError):
        ledger.submit_score('alice', 2.5)


def test_unknown_policy(app_ctx):
    with pytest.raises(ValueError):
        ScoreLedger(db.session, policy='average')


def test_top_scores_descending_and_limited(ledger):
    for i in range(15):
        ledger.submit_score(f'player{i}', i * 10)
    top = ledger.get_top_scores(10)
    assert len(top) == 10
    assert top[0].score == 140
    values = [e.score for e in top]
    assert values == sorted(values, reverse=True)
    assert values[-1] == 50


def test_reseed_and_list_questions(catalog, seed):
    assert catalog.reseed(seed) == len(seed)
    listed = [q.to_dict() for q in catalog.list_questions()]
    for item in listed:
        item.pop('id')
    assert listed == seed


def test_reseed_replaces_existing(catalog, seed):
    catalog.reseed(seed)
    catalog.reseed(seed[:2])
    assert len(catalog.list_questions()) == 2


def test_long_password_round_trip(accounts):
    account = accounts.create_account('bob', 'p' * 100)
    with pytest.raises(AuthError):
        accounts.login('bob', 'p' * 99 + 'q')
    assert accounts.login('bob', 'p' * 100).id == account.id


def test_scores_outside_int64_are_rejected(accounts, ledger):
    account = accounts.create_account('bob', 'secret')
    with pytest.raises(ValidationError):
        accounts.increment_score(account.id, 2 ** 63)
    with pytest.raises(ValidationError):
        accounts.increment_score(account.id, -(2 ** 63) - 1)
    with pytest.raises(ValidationError):
        ledger.submit_score('alice', 10 ** 20)
    with pytest.raises(NotFoundError):
        accounts.logout(10 ** 20)
    assert ledger.submit_score('alice', 2 ** 63 - 1).score == 2 ** 63 - 1


def test_login_strips_name(accounts):
    account = accounts.create_account('  bob ', 'secret')
    assert account.name == 'bob'
    assert accounts.login(' bob  ', 'secret').id == account.id
