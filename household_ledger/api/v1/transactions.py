"""CRUD and settlement toggle for /v1/transactions"""

import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response
from sqlalchemy.orm import Session

from household_ledger.api.dependencies import get_request_id
from household_ledger.api.v1.schemas import TransactionRequest, TransactionResponse
from household_ledger.domain.exceptions import (
    DuplicateTransactionError,
    SettlementOutOfRangeError,
    TransactionNotFoundError,
)
from household_ledger.domain.settlement import toggle_paid
from household_ledger.infrastructure.database.repositories import TransactionRepository
from household_ledger.infrastructure.database.session import get_db
from household_ledger.utils.date_utils import month_key

router = APIRouter()


@router.post("/transactions", response_model=TransactionResponse, status_code=201)
def create_transaction(
    request_body: TransactionRequest,
    request: Request,
    db: Session = Depends(get_db),
):
    """Record a new expense or revenue"""
    request_id = get_request_id(request)
    repo = TransactionRepository(db)

    try:
        transaction = repo.create(request_body.to_domain())
        db.commit()
    except DuplicateTransactionError as e:
        db.rollback()
        logging.warning(f"Create failed: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=409, detail=str(e))

    logging.info(
        "Transaction created",
        extra={"request_id": request_id, "transaction_id": transaction.id, "is_fixed": transaction.is_fixed},
    )
    return TransactionResponse.from_domain(transaction)


@router.get("/transactions", response_model=List[TransactionResponse])
def list_transactions(db: Session = Depends(get_db)):
    """Every stored transaction, unfiltered"""
    return [TransactionResponse.from_domain(t) for t in TransactionRepository(db).list_all()]


@router.put("/transactions/{transaction_id}", response_model=TransactionResponse)
def replace_transaction(
    transaction_id: str,
    request_body: TransactionRequest,
    request: Request,
    db: Session = Depends(get_db),
):
    """Overwrite a transaction; the id in the path wins over any id in the body"""
    request_id = get_request_id(request)

    try:
        transaction = TransactionRepository(db).save(request_body.to_domain(transaction_id))
        db.commit()
    except TransactionNotFoundError as e:
        db.rollback()
        logging.warning(f"Update failed: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=404, detail=str(e))

    return TransactionResponse.from_domain(transaction)


@router.delete("/transactions/{transaction_id}", status_code=204)
def delete_transaction(transaction_id: str, request: Request, db: Session = Depends(get_db)):
    """Remove a transaction"""
    request_id = get_request_id(request)

    try:
        TransactionRepository(db).delete(transaction_id)
        db.commit()
    except TransactionNotFoundError as e:
        db.rollback()
        logging.warning(f"Delete failed: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=404, detail=str(e))

    return Response(status_code=204)


@router.post("/transactions/{transaction_id}/toggle-paid", response_model=TransactionResponse)
def toggle_transaction_paid(
    transaction_id: str,
    request: Request,
    year: Optional[int] = Query(None, ge=1, le=9999, description="Month being settled (fixed items)"),
    month: Optional[int] = Query(None, ge=1, le=12, description="Month being settled (fixed items)"),
    db: Session = Depends(get_db),
):
    """
    Flip the paid state of a transaction.

    Fixed transactions are settled per month, so year and month are required
    for them; one-off transactions ignore both.
    """
    request_id = get_request_id(request)
    repo = TransactionRepository(db)

    try:
        transaction = repo.get(transaction_id)
        if transaction.is_fixed and (year is None or month is None):
            raise HTTPException(status_code=422, detail="year and month are required for fixed transactions")

        key = month_key(year, month) if year is not None and month is not None else ""
        updated = repo.save(toggle_paid(transaction, key))
        db.commit()
    except TransactionNotFoundError as e:
        db.rollback()
        logging.warning(f"Toggle failed: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=404, detail=str(e))
    except SettlementOutOfRangeError as e:
        db.rollback()
        logging.warning(f"Toggle rejected: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    logging.info(
        "Settlement toggled",
        extra={"request_id": request_id, "transaction_id": transaction_id, "month_key": key},
    )
    return TransactionResponse.from_domain(updated)
