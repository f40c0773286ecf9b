"""Household members and the base income every view starts from"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from household_ledger.api.dependencies import get_request_id
from household_ledger.api.v1.schemas import (
    HouseholdResponse,
    HouseholdSettingsSchema,
    MemberSchema,
    MemberUpdateRequest,
)
from household_ledger.config import settings
from household_ledger.infrastructure.database.repositories import HouseholdRepository
from household_ledger.infrastructure.database.session import get_db

router = APIRouter()


@router.get("/household", response_model=HouseholdResponse)
def get_household(db: Session = Depends(get_db)):
    """Both members with their declared incomes, the combined base income and household settings"""
    repo = HouseholdRepository(db)
    members = repo.list_members()

    return HouseholdResponse(
        members=[MemberSchema.from_domain(m) for m in members],
        base_income=float(sum(m.income for m in members)),
        settings=HouseholdSettingsSchema.from_domain(repo.get_settings()),
    )


@router.put("/household/members/{member_id}", response_model=MemberSchema)
def update_member(
    member_id: str,
    request_body: MemberUpdateRequest,
    request: Request,
    db: Session = Depends(get_db),
):
    """Update a member's name and declared monthly income"""
    if member_id not in settings.default_member_incomes:
        raise HTTPException(status_code=404, detail=f"Unknown household member {member_id}")

    member = HouseholdRepository(db).upsert_member(member_id, request_body.name, request_body.income)
    db.commit()

    logging.info("Member income updated", extra={"request_id": get_request_id(request), "member_id": member_id})
    return MemberSchema.from_domain(member)


@router.put("/household/settings", response_model=HouseholdSettingsSchema)
def update_household_settings(
    request_body: HouseholdSettingsSchema,
    request: Request,
    db: Session = Depends(get_db),
):
    """Rename the household or change the spending alert threshold"""
    household_settings = HouseholdRepository(db).update_settings(
        request_body.family_name, request_body.alert_threshold
    )
    db.commit()

    logging.info(
        "Household settings updated",
        extra={"request_id": get_request_id(request), "alert_threshold": household_settings.alert_threshold},
    )
    return HouseholdSettingsSchema.from_domain(household_settings)
