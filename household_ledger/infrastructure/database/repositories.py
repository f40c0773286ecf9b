"""Data access layer for ledger entities"""

from decimal import Decimal
from typing import List
from sqlalchemy.orm import Session
from household_ledger.config import settings
from household_ledger.domain.exceptions import DuplicateTransactionError, TransactionNotFoundError
from household_ledger.domain.models import HouseholdMember, HouseholdSettings, InstallmentInfo, Transaction
from household_ledger.infrastructure.database.models import (
    HouseholdMemberRecord,
    HouseholdSettingsRecord,
    LedgerTransaction,
)

_SETTINGS_ROW_ID = 1


def to_domain(row: LedgerTransaction) -> Transaction:
    """Map an ORM row to an immutable domain record"""
    installments = None
    if row.installments_total is not None:
        installments = InstallmentInfo(current=row.installments_current or 1, total=row.installments_total)

    return Transaction(
        id=row.id,
        title=row.title,
        amount=Decimal(row.amount),
        category=row.category,
        date=row.date,
        spender_id=row.spender_id,
        type=row.type,
        is_fixed=row.is_fixed,
        is_paid=row.is_paid,
        paid_months=frozenset(row.paid_months or []),
        installments=installments,
        emoji=row.emoji or "",
    )


def _apply(row: LedgerTransaction, transaction: Transaction) -> None:
    row.title = transaction.title
    row.amount = transaction.amount
    row.category = transaction.category
    row.date = transaction.date
    row.spender_id = transaction.spender_id
    row.type = transaction.type
    row.emoji = transaction.emoji
    row.is_fixed = transaction.is_fixed
    row.is_paid = transaction.is_paid
    row.paid_months = sorted(transaction.paid_months)
    row.installments_current = transaction.installments.current if transaction.installments else None
    row.installments_total = transaction.installments.total if transaction.installments else None


class TransactionRepository:
    """Repository for household transactions"""

    def __init__(self, db: Session):
        self.db = db

    def create(self, transaction: Transaction) -> Transaction:
        """Persist a new transaction; ids must be unique"""
        if self.db.get(LedgerTransaction, transaction.id) is not None:
            raise DuplicateTransactionError(f"Transaction {transaction.id} already exists")

        row = LedgerTransaction(id=transaction.id)
        _apply(row, transaction)
        self.db.add(row)
        self.db.flush()
        return to_domain(row)

    def _get_row(self, transaction_id: str) -> LedgerTransaction:
        row = self.db.get(LedgerTransaction, transaction_id)
        if row is None:
            raise TransactionNotFoundError(f"Transaction {transaction_id} not found")
        return row

    def get(self, transaction_id: str) -> Transaction:
        """Fetch one transaction or raise TransactionNotFoundError"""
        return to_domain(self._get_row(transaction_id))

    def list_all(self) -> List[Transaction]:
        """Snapshot of every stored transaction, oldest first"""
        rows = (
            self.db.query(LedgerTransaction)
            .order_by(LedgerTransaction.created_at, LedgerTransaction.id)
            .all()
        )
        return [to_domain(row) for row in rows]

    def save(self, transaction: Transaction) -> Transaction:
        """Overwrite an existing transaction with the given record"""
        row = self._get_row(transaction.id)
        _apply(row, transaction)
        self.db.flush()
        return to_domain(row)

    def delete(self, transaction_id: str) -> None:
        """Remove a transaction"""
        self.db.delete(self._get_row(transaction_id))
        self.db.flush()


class HouseholdRepository:
    """Repository for household members and their declared incomes"""

    def __init__(self, db: Session):
        self.db = db

    def list_members(self) -> List[HouseholdMember]:
        """Stored members, falling back to configured defaults for missing ones"""
        rows = {row.id: row for row in self.db.query(HouseholdMemberRecord).all()}
        members = []

        for member_id, default_income in settings.default_member_incomes.items():
            row = rows.get(member_id)
            if row is None:
                members.append(HouseholdMember(id=member_id, name=member_id, income=Decimal(default_income)))
            else:
                members.append(HouseholdMember(id=row.id, name=row.name, income=Decimal(row.income)))

        return members

    def upsert_member(self, member_id: str, name: str, income: Decimal) -> HouseholdMember:
        """Create or update a member's name and income"""
        row = self.db.get(HouseholdMemberRecord, member_id)
        if row is None:
            row = HouseholdMemberRecord(id=member_id)
            self.db.add(row)
        row.name = name
        row.income = income
        self.db.flush()
        return HouseholdMember(id=row.id, name=row.name, income=Decimal(row.income))

    def base_income(self) -> Decimal:
        """Combined declared income of all members"""
        return sum((m.income for m in self.list_members()), Decimal("0"))

    def get_settings(self) -> HouseholdSettings:
        """Saved household settings, or the configured defaults"""
        row = self.db.get(HouseholdSettingsRecord, _SETTINGS_ROW_ID)
        if row is None:
            return HouseholdSettings(
                family_name=settings.default_family_name,
                alert_threshold=settings.default_alert_threshold,
            )
        return HouseholdSettings(family_name=row.family_name, alert_threshold=row.alert_threshold)

    def update_settings(self, family_name: str, alert_threshold: int) -> HouseholdSettings:
        row = self.db.get(HouseholdSettingsRecord, _SETTINGS_ROW_ID)
        if row is None:
            row = HouseholdSettingsRecord(id=_SETTINGS_ROW_ID)
            self.db.add(row)
        row.family_name = family_name
        row.alert_threshold = alert_threshold
        self.db.flush()
        return HouseholdSettings(family_name=row.family_name, alert_threshold=row.alert_threshold)
