"""SQLAlchemy models for the bank account ledger."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Index,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(UTC)


class BankAccount(Base):
    """Unified bank account model."""

    __tablename__ = "bank_accounts"

    id = Column(Integer, primary_key=True)
    description = Column(Text, nullable=True)
    data_raw = Column(Text, nullable=True)
    # JSON object, decoded by the mapper layer
    data_parsed = Column(Text, nullable=True)
    created_date = Column(DateTime, default=_utcnow, nullable=True)
    modified_date = Column(DateTime, default=_utcnow, nullable=True)

    # Relationships
    references = relationship("BankAccountReference", back_populates="account")


class BankAccountReference(Base):
    """External identifier (IBAN, card token, ...) pointing at a bank account."""

    __tablename__ = "bank_account_references"

    id = Column(Integer, primary_key=True)
    reference = Column(String, nullable=False)
    reference_type_id = Column(Integer, nullable=False)
    ba_id = Column(Integer, ForeignKey("bank_accounts.id"), nullable=False)
    contact_id = Column(Integer, ForeignKey("contacts.id"), nullable=True)
    modified_date = Column(DateTime, default=_utcnow, onupdate=_utcnow, nullable=False)

    __table_args__ = (Index("ix_reference_type", "reference", "reference_type_id"),)

    # Relationships
    account = relationship("BankAccount", back_populates="references")


class BankTransaction(Base):
    """Bank transaction model; only the account links matter here."""

    __tablename__ = "bank_transactions"

    id = Column(Integer, primary_key=True)
    bank_reference = Column(String, nullable=False)
    amount = Column(Numeric(10, 2), nullable=False)
    value_date = Column(Date, nullable=True)
    purpose = Column(Text, nullable=True)
    ba_id = Column(Integer, ForeignKey("bank_accounts.id"), nullable=True)
    party_ba_id = Column(Integer, ForeignKey("bank_accounts.id"), nullable=True)


class Contact(Base):
    """Contact (identity owner) model."""

    __tablename__ = "contacts"

    id = Column(Integer, primary_key=True)
    display_name = Column(String, nullable=False)
    contact_type = Column(String, default="Individual", nullable=False)


class OptionValue(Base):
    """Numeric code to label mapping, grouped by option group name."""

    __tablename__ = "option_values"

    id = Column(Integer, primary_key=True)
    group_name = Column(String, nullable=False)
    value = Column(Integer, nullable=False)
    label = Column(String, nullable=False)

    __table_args__ = (UniqueConstraint("group_name", "value", name="uq_option_group_value"),)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
