"""
SQLAlchemy database models for the estate CRM.

Defines the clients, properties, transactions and contracts tables. Column
names are snake_case; enum-like fields are plain strings whose allowed values
are enforced by the request schemas.
"""
import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, Integer, DateTime, Text, Numeric, Index
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def _utcnow():
    return datetime.now(timezone.utc)


def _new_id():
    return str(uuid.uuid4())


class Client(Base):
    """Client model; status drives the pipeline board column."""
    __tablename__ = "clients"

    id = Column(String(64), primary_key=True, default=_new_id)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=False)
    status = Column(String(20), nullable=False, default="Lead")
    last_contacted = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    __table_args__ = (
        Index('idx_client_created_at', 'created_at'),
        Index('idx_client_status', 'status'),
    )

    def __repr__(self):
        return f"<Client(id={self.id}, name='{self.name}', status='{self.status}')>"


class Property(Base):
    """Property listing model."""
    __tablename__ = "properties"

    id = Column(String(64), primary_key=True, default=_new_id)
    name = Column(String(255), nullable=False)
    address = Column(Text, nullable=False)
    price = Column(Numeric(14, 2, asdecimal=False), nullable=False)
    status = Column(String(20), nullable=False, default="For Sale")
    image_url = Column(Text, nullable=False)
    bedrooms = Column(Integer, nullable=False, default=0)
    bathrooms = Column(Integer, nullable=False, default=0)
    sqft = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    __table_args__ = (
        Index('idx_property_created_at', 'created_at'),
    )

    def __repr__(self):
        return f"<Property(id={self.id}, name='{self.name}', status='{self.status}')>"


class Transaction(Base):
    """Ledger entry; amount is signed and type is stored alongside it."""
    __tablename__ = "transactions"

    id = Column(String(64), primary_key=True, default=_new_id)
    date = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    description = Column(Text, nullable=False)
    category = Column(String(20), nullable=False, default="Other")
    amount = Column(Numeric(14, 2, asdecimal=False), nullable=False)
    type = Column(String(10), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    __table_args__ = (
        Index('idx_transaction_date', 'date'),
    )

    def __repr__(self):
        return f"<Transaction(id={self.id}, amount={self.amount}, type='{self.type}')>"


class Contract(Base):
    """
    Contract between a client and a property.

    property_id and client_id are plain strings: references are not enforced
    and may dangle after the referenced record is deleted.
    """
    __tablename__ = "contracts"

    id = Column(String(64), primary_key=True, default=_new_id)
    property_id = Column(String(64), nullable=False)
    client_id = Column(String(64), nullable=False)
    status = Column(String(20), nullable=False, default="Draft")
    signing_date = Column(DateTime(timezone=True), nullable=True)
    expiry_date = Column(DateTime(timezone=True), nullable=False)
    amount = Column(Numeric(14, 2, asdecimal=False), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    __table_args__ = (
        Index('idx_contract_created_at', 'created_at'),
        Index('idx_contract_client', 'client_id'),
        Index('idx_contract_property', 'property_id'),
    )

    def __repr__(self):
        return f"<Contract(id={self.id}, status='{self.status}', client_id={self.client_id})>"
