"""SQLAlchemy models for the debtbook store.

Each collection keeps the record exactly as it was written in a JSON
``payload`` column. The remaining columns are lookup keys extracted from the
payload so they can carry secondary indexes.
"""

from sqlalchemy import Column, String, JSON, Index
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class Client(Base):
    """Stored client record."""

    __tablename__ = "clients"

    id = Column(String, primary_key=True)
    name = Column(String, nullable=False, default="")
    payload = Column(JSON, nullable=False)

    __table_args__ = (Index("ix_clients_name", "name"),)


class Transaction(Base):
    """Stored ledger entry record (canonical or legacy layout)."""

    __tablename__ = "transactions"

    id = Column(String, primary_key=True)
    debtor_id = Column(String, nullable=True)
    date = Column(String, nullable=True)
    payload = Column(JSON, nullable=False)

    __table_args__ = (
        Index("ix_transactions_debtor_id", "debtor_id"),
        Index("ix_transactions_date", "date"),
    )


class StoreMeta(Base):
    """Key/value metadata, currently only the schema version."""

    __tablename__ = "store_meta"

    key = Column(String, primary_key=True)
    value = Column(String, nullable=False)
