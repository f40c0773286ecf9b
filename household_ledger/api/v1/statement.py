"""GET /v1/statement - Monthly statement with paid/pending totals"""

import time
from typing import Tuple
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from household_ledger.api.dependencies import get_request_id, get_target_month
from household_ledger.api.v1.schemas import MonthlyStatsSchema, StatementItem, StatementResponse, TransactionResponse
from household_ledger.domain.ledger import monthly_stats, relevant_transactions
from household_ledger.domain.settlement import is_settled
from household_ledger.infrastructure.database.repositories import HouseholdRepository, TransactionRepository
from household_ledger.infrastructure.database.session import get_db
from household_ledger.infrastructure.observability.logging import log_aggregation
from household_ledger.infrastructure.observability.metrics import record_aggregation
from household_ledger.utils.date_utils import month_key

router = APIRouter()


@router.get("/statement", response_model=StatementResponse)
def get_statement(
    request: Request,
    target: Tuple[int, int] = Depends(get_target_month),
    db: Session = Depends(get_db),
):
    """
    Transactions that count toward the target month, newest first, with totals.

    Fixed transactions anchored in earlier months are projected into the
    target month; each item carries its settlement state for that month.
    """
    start_time = time.time()
    year, month = target
    key = month_key(year, month)

    snapshot = TransactionRepository(db).list_all()
    relevant = relevant_transactions(snapshot, year, month)
    stats = monthly_stats(relevant, HouseholdRepository(db).base_income(), key)

    duration_ms = (time.time() - start_time) * 1000
    record_aggregation("statement")
    log_aggregation(get_request_id(request), "statement", key, len(relevant), duration_ms)

    return StatementResponse(
        month_key=key,
        transactions=[
            StatementItem(**TransactionResponse.from_domain(t).model_dump(), settled=is_settled(t, key))
            for t in relevant
        ],
        stats=MonthlyStatsSchema.from_domain(stats),
    )
