from typing import List

from sqlalchemy import case
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError

from trivia.errors import ValidationError
from trivia.models import Highscore
from trivia.services.validation import require_int

POLICY_OVERWRITE = 'overwrite'
POLICY_MAX = 'max'
POLICIES = (POLICY_OVERWRITE, POLICY_MAX)

# Dialects with INSERT ... ON CONFLICT DO UPDATE
_UPSERT_INSERTS = {
    'sqlite': sqlite_insert,
    'postgresql': pg_insert,
}
UPSERT_ATTEMPTS = 3


class ScoreLedger:
    """Best-score-per-name leaderboard.

    With the ``overwrite`` policy a later submission replaces the stored score
    even when it is lower; ``max`` keeps the larger of the two.
    """

    def __init__(self, session, policy: str = POLICY_OVERWRITE):
        if policy not in POLICIES:
            raise ValueError(f'Unknown highscore policy: {policy!r}')
        self.session = session
        self.policy = policy

    def get_top_scores(self, n: int = 10) -> List[Highscore]:
        return (
            self.session.query(Highscore)
            .order_by(Highscore.score.desc(), Highscore.id.asc())
            .limit(n)
            .all()
        )

    def submit_score(self, name, score) -> Highscore:
        if not isinstance(name, str) or not name.strip():
            raise ValidationError('Name is required')
        require_int(score)
        name = name.strip()

        insert = _UPSERT_INSERTS.get(self.session.get_bind(mapper=Highscore).dialect.name)
        if insert is not None:
            self._atomic_upsert(insert, name, score)
        else:
            self._optimistic_upsert(name, score)
        return self.session.query(Highscore).filter_by(name=name).one()

    def _atomic_upsert(self, insert, name: str, score: int) -> None:
        stmt = insert(Highscore).values(name=name, score=score)
        new_score = stmt.excluded.score
        if self.policy == POLICY_MAX:
            new_score = case((stmt.excluded.score > Highscore.score, stmt.excluded.score), else_=Highscore.score)
        stmt = stmt.on_conflict_do_update(index_elements=['name'], set_={'score': new_score})
        self.session.execute(stmt)
        self.session.commit()

    def _optimistic_upsert(self, name: str, score: int) -> None:
        for attempt in range(1, UPSERT_ATTEMPTS + 1):
            entry = self.session.query(Highscore).filter_by(name=name).first()
            if entry is None:
                self.session.add(Highscore(name=name, score=score))
            elif self.policy == POLICY_OVERWRITE or score > entry.score:
                entry.score = score
            try:
                self.session.commit()
                return
            except IntegrityError:
                # Someone inserted the same name in between; retry as an update
                self.session.rollback()
                if attempt == UPSERT_ATTEMPTS:
                    raise
