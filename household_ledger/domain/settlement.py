"""Per-month settlement state for one-off and fixed transactions"""

from dataclasses import replace
from household_ledger.domain.exceptions import SettlementOutOfRangeError
from household_ledger.domain.models import Transaction
from household_ledger.utils.date_utils import parse_anchor_date, parse_month_key


def is_settled(transaction: Transaction, month_key: str) -> bool:
    """
    Whether an occurrence has been marked paid.

    Fixed transactions are settled per month (membership of month_key in
    paid_months); one-off transactions use the is_paid flag.
    """
    if transaction.is_fixed:
        return month_key in transaction.paid_months
    return transaction.is_paid


def toggle_paid(transaction: Transaction, month_key: str) -> Transaction:
    """
    Return a copy of the transaction with its settlement flipped.

    For fixed transactions only the given month changes; other months keep
    their state. month_key is ignored for one-off transactions.

    Raises:
        SettlementOutOfRangeError: Marking a fixed transaction paid for a month
            before its anchor month
        InvalidDateFormatError: The transaction's anchor date is malformed
    """
    if transaction.is_fixed:
        if month_key in transaction.paid_months:
            paid_months = transaction.paid_months - {month_key}
        else:
            anchor = parse_anchor_date(transaction.date, transaction.id)
            if parse_month_key(month_key) < (anchor.year, anchor.month):
                raise SettlementOutOfRangeError(
                    f"Transaction {transaction.id} starts in {anchor.year}-{anchor.month}; "
                    f"cannot settle {month_key}"
                )
            paid_months = transaction.paid_months | {month_key}
        return replace(transaction, paid_months=frozenset(paid_months))

    return replace(transaction, is_paid=not transaction.is_paid)
