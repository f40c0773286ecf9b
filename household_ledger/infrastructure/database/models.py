"""SQLAlchemy ORM models for the household ledger store"""

from sqlalchemy import Column, String, Boolean, DateTime, Integer, Numeric, Text, JSON
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class LedgerTransaction(Base):
    """Stored transaction record; anchor date kept in its DD/MM/YYYY text form"""

    __tablename__ = "ledger_transaction"

    id = Column(String(64), primary_key=True)
    title = Column(Text, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    category = Column(Text, nullable=False)
    date = Column(String(10), nullable=False)
    spender_id = Column(Text, nullable=False, index=True)
    type = Column(String(16), nullable=False)
    emoji = Column(Text, nullable=False, default="")
    is_fixed = Column(Boolean, nullable=False, default=False)
    is_paid = Column(Boolean, nullable=False, default=False)
    paid_months = Column(JSON, nullable=False, default=list)
    installments_current = Column(Integer, nullable=True)
    installments_total = Column(Integer, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class HouseholdMemberRecord(Base):
    """Household member and declared monthly income"""

    __tablename__ = "household_member"

    id = Column(String(16), primary_key=True)
    name = Column(Text, nullable=False)
    income = Column(Numeric(12, 2), nullable=False, default=0)
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())


class HouseholdSettingsRecord(Base):
    """Single-row household settings"""

    __tablename__ = "household_settings"

    id = Column(Integer, primary_key=True)
    family_name = Column(Text, nullable=False)
    alert_threshold = Column(Integer, nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())
