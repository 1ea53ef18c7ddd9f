"""SQLAlchemy models for paydesk database."""

from datetime import datetime, UTC
from sqlalchemy import (
    JSON,
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


def _now() -> datetime:
    return datetime.now(UTC)


class Client(Base):
    """Client model.

    bank_account and platform_details hold lists of JSON objects.
    """

    __tablename__ = "clients"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    phone = Column(String, nullable=True)
    bank_account = Column(JSON, nullable=True)
    platform_details = Column(JSON, nullable=True)
    commission_percentage = Column(Numeric(7, 4), nullable=False, default=0)
    preferred_payout_currency = Column(String(3), nullable=False, default="THB")
    created_at = Column(DateTime, default=_now, nullable=False)
    updated_at = Column(DateTime, default=_now, onupdate=_now, nullable=False)

    # Relationships
    transactions = relationship("Transaction", back_populates="client")
    invoices = relationship("Invoice", back_populates="client")


class Transaction(Base):
    """Incoming payment model."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    client_id = Column(Integer, ForeignKey("clients.id"), nullable=False)
    incoming_amount_thb = Column(Numeric(14, 2), nullable=False)
    original_amount_usd = Column(Numeric(14, 2), nullable=True)
    fees = Column(Numeric(14, 2), nullable=False, default=0)
    exchange_rate_mmk = Column(Numeric(12, 4), nullable=False, default=0)
    payout_currency = Column(String(3), nullable=False)
    payout_amount = Column(Numeric(16, 2), nullable=True)
    transaction_date = Column(Date, nullable=False)
    notes = Column(String, nullable=True)
    source_platform = Column(String, nullable=True)
    source_platform_payout_id = Column(String, nullable=True)
    payment_destination = Column(JSON, nullable=True)
    created_at = Column(DateTime, default=_now, nullable=False)
    updated_at = Column(DateTime, default=_now, onupdate=_now, nullable=False)

    # Relationships
    client = relationship("Client", back_populates="transactions")
    invoices = relationship("Invoice", back_populates="transaction")


class Invoice(Base):
    """Invoice model.

    transaction_id is intentionally not unique; one invoice per transaction
    is enforced by the invoice service.
    """

    __tablename__ = "invoices"

    id = Column(Integer, primary_key=True)
    client_id = Column(Integer, ForeignKey("clients.id"), nullable=False)
    transaction_id = Column(Integer, ForeignKey("transactions.id"), nullable=False)
    invoice_number = Column(String, unique=True, nullable=False)
    total_amount = Column(Numeric(14, 2), nullable=False)
    commission_amount = Column(Numeric(14, 2), nullable=False)
    net_amount = Column(Numeric(14, 2), nullable=False)
    created_at = Column(DateTime, default=_now, nullable=False)

    # Relationships
    client = relationship("Client", back_populates="invoices")
    transaction = relationship("Transaction", back_populates="invoices")


class InvoiceNumberSequence(Base):
    """Single-row counter backing invoice number allocation."""

    __tablename__ = "invoice_number_sequence"

    id = Column(Integer, primary_key=True)
    last_value = Column(Integer, nullable=False, default=0)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
