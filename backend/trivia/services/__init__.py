"""Trivia domain services: accounts, score ledger and question catalog.

Services take their SQLAlchemy session (and any collaborators) in the
constructor and are imported by HTTP routes and CLI commands, keeping
transport concerns out of the account and scoring rules.
"""

from .accounts import AccountService
from .questions import QuestionCatalog, load_seed
from .scores import ScoreLedger

__all__ = ['AccountService', 'QuestionCatalog', 'ScoreLedger', 'load_seed']
