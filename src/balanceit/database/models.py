"""SQLAlchemy models for balanceit database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    Numeric,
    create_engine,
)
from sqlalchemy.orm import declarative_base, sessionmaker, Session

Base = declarative_base()

# Converted amounts can carry more than two decimals (e.g. JPY at 0.0068).
MONEY = Numeric(18, 6, asdecimal=True)


class Account(Base):
    """Ledger account model."""

    __tablename__ = "accounts"

    id = Column(String, primary_key=True)
    code = Column(String, nullable=False, index=True)
    name = Column(String, nullable=False)
    type = Column(String, nullable=False)
    category = Column(String, nullable=False, default="")
    debit = Column(MONEY, nullable=False, default=0)
    credit = Column(MONEY, nullable=False, default=0)
    note = Column(String, nullable=True)
    # Weak reference: groups may be deleted, accounts are then cleared.
    custom_group_id = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Transaction(Base):
    """Transaction model.

    account_id is deliberately not a foreign key: a transaction may be
    recorded against an account id that is not in the ledger.
    """

    __tablename__ = "transactions"

    seq = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String, unique=True, nullable=False)
    account_id = Column(String, nullable=False, index=True)
    date = Column(String, nullable=False)
    description = Column(String, nullable=False, default="")
    amount = Column(MONEY, nullable=False)
    reference = Column(String, nullable=True)
    original_currency = Column(String, nullable=True)
    original_amount = Column(MONEY, nullable=True)
    exchange_rate = Column(MONEY, nullable=True)
    posted_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class CustomGroup(Base):
    """Custom account group model."""

    __tablename__ = "custom_groups"

    id = Column(String, primary_key=True)
    name = Column(String, nullable=False)


class Setting(Base):
    """Ledger-wide setting, such as the currency balances are kept in."""

    __tablename__ = "settings"

    key = Column(String, primary_key=True)
    value = Column(String, nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
