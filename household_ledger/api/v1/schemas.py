"""Pydantic schemas for API request/response validation"""

from decimal import Decimal
from typing import List, Literal, Optional
from uuid import uuid4
from pydantic import BaseModel, Field, field_validator, model_validator

from household_ledger.domain.exceptions import InvalidDateFormatError
from household_ledger.domain.models import (
    HealthReport,
    HomeSummary,
    HouseholdMember,
    HouseholdSettings,
    InstallmentInfo,
    MonthlyStats,
    Transaction,
    TrendBucket,
)
from household_ledger.utils.date_utils import month_key, parse_anchor_date, parse_month_key


class InstallmentSchema(BaseModel):
    """Position inside an installment plan"""

    current: int = Field(..., ge=1)
    total: int = Field(..., ge=2)

    @model_validator(mode="after")
    def current_within_total(self) -> "InstallmentSchema":
        if self.current > self.total:
            raise ValueError("current installment cannot exceed total")
        return self


class TransactionRequest(BaseModel):
    """Request body for creating or replacing a transaction"""

    id: Optional[str] = Field(None, min_length=1, max_length=64, description="Client-chosen id")
    title: str = Field(..., min_length=1)
    amount: Decimal = Field(..., ge=0, description="Full per-occurrence amount")
    category: str = Field(..., min_length=1)
    date: str = Field(..., description="Anchor date, DD/MM/YYYY")
    spender_id: str = Field(..., min_length=1)
    type: Literal["expense", "revenue"]
    is_fixed: bool = False
    is_paid: bool = False
    paid_months: List[str] = Field(default_factory=list, description="Month-keys settled, YEAR-MONTH")
    installments: Optional[InstallmentSchema] = None
    emoji: str = ""

    @field_validator("date")
    @classmethod
    def validate_date(cls, value: str) -> str:
        try:
            parse_anchor_date(value)
        except InvalidDateFormatError as e:
            raise ValueError(str(e)) from e
        return value

    @field_validator("paid_months")
    @classmethod
    def validate_paid_months(cls, value: List[str]) -> List[str]:
        # Stored keys must match the unpadded form used for lookups
        return [month_key(*parse_month_key(key)) for key in value]

    def to_domain(self, transaction_id: str | None = None) -> Transaction:
        installments = None
        if self.installments is not None:
            installments = InstallmentInfo(current=self.installments.current, total=self.installments.total)

        return Transaction(
            id=transaction_id or self.id or f"tx_{uuid4().hex}",
            title=self.title,
            amount=self.amount,
            category=self.category,
            date=self.date,
            spender_id=self.spender_id,
            type=self.type,
            is_fixed=self.is_fixed,
            is_paid=self.is_paid,
            paid_months=frozenset(self.paid_months),
            installments=installments,
            emoji=self.emoji,
        )


class TransactionResponse(BaseModel):
    """Stored transaction"""

    id: str
    title: str
    amount: float
    category: str
    date: str
    spender_id: str
    type: str
    is_fixed: bool
    is_paid: bool
    paid_months: List[str]
    installments: Optional[InstallmentSchema] = None
    emoji: str

    @classmethod
    def from_domain(cls, transaction: Transaction) -> "TransactionResponse":
        installments = None
        if transaction.installments is not None:
            installments = InstallmentSchema(
                current=transaction.installments.current,
                total=transaction.installments.total,
            )

        return cls(
            id=transaction.id,
            title=transaction.title,
            amount=float(transaction.amount),
            category=transaction.category,
            date=transaction.date,
            spender_id=transaction.spender_id,
            type=transaction.type,
            is_fixed=transaction.is_fixed,
            is_paid=transaction.is_paid,
            paid_months=sorted(transaction.paid_months),
            installments=installments,
            emoji=transaction.emoji,
        )


class StatementItem(TransactionResponse):
    """Transaction as it appears in one month's statement"""

    settled: bool


class MonthlyStatsSchema(BaseModel):
    """Aggregated totals for a month"""

    effective_income: float
    paid_total: float
    pending_total: float
    balance: float
    expense_ratio: float
    health_score: float

    @classmethod
    def from_domain(cls, stats: MonthlyStats) -> "MonthlyStatsSchema":
        return cls(
            effective_income=float(stats.effective_income),
            paid_total=float(stats.paid_total),
            pending_total=float(stats.pending_total),
            balance=float(stats.balance),
            expense_ratio=stats.expense_ratio,
            health_score=stats.health_score,
        )


class StatementResponse(BaseModel):
    """Response for GET /v1/statement"""

    month_key: str
    transactions: List[StatementItem]
    stats: MonthlyStatsSchema


class TrendBucketSchema(BaseModel):
    """One month of the trend chart"""

    year: int
    month: int
    month_key: str
    income: float
    expenses: float
    balance: float

    @classmethod
    def from_domain(cls, bucket: TrendBucket) -> "TrendBucketSchema":
        return cls(
            year=bucket.year,
            month=bucket.month,
            month_key=bucket.month_key,
            income=float(bucket.income),
            expenses=float(bucket.expenses),
            balance=float(bucket.balance),
        )


class AnalyticsResponse(BaseModel):
    """Response for GET /v1/analytics"""

    month_key: str
    status: str
    display_score: int
    stats: MonthlyStatsSchema
    trend: List[TrendBucketSchema]

    @classmethod
    def from_domain(cls, report: HealthReport, trend: List[TrendBucket]) -> "AnalyticsResponse":
        return cls(
            month_key=report.month_key,
            status=report.status,
            display_score=report.display_score,
            stats=MonthlyStatsSchema.from_domain(report.stats),
            trend=[TrendBucketSchema.from_domain(b) for b in trend],
        )


class HomeResponse(BaseModel):
    """Response for GET /v1/home"""

    month_key: str
    effective_income: float
    total_expenses: float
    balance: float
    expense_percentage: float
    recent_transactions: List[TransactionResponse]

    @classmethod
    def from_domain(cls, summary: HomeSummary) -> "HomeResponse":
        return cls(
            month_key=summary.month_key,
            effective_income=float(summary.effective_income),
            total_expenses=float(summary.total_expenses),
            balance=float(summary.balance),
            expense_percentage=summary.expense_percentage,
            recent_transactions=[TransactionResponse.from_domain(t) for t in summary.recent_transactions],
        )


class MemberUpdateRequest(BaseModel):
    """Request body for PUT /v1/household/members/{member_id}"""

    name: str = Field(..., min_length=1)
    income: Decimal = Field(..., ge=0, description="Declared monthly income")


class MemberSchema(BaseModel):
    """Household member"""

    id: str
    name: str
    income: float

    @classmethod
    def from_domain(cls, member: HouseholdMember) -> "MemberSchema":
        return cls(id=member.id, name=member.name, income=float(member.income))


class HouseholdSettingsSchema(BaseModel):
    """Family display name and the share of income that triggers a spending alert"""

    family_name: str = Field(..., min_length=1)
    alert_threshold: int = Field(..., ge=0, le=100, description="Percent of effective income")

    @classmethod
    def from_domain(cls, household_settings: HouseholdSettings) -> "HouseholdSettingsSchema":
        return cls(family_name=household_settings.family_name, alert_threshold=household_settings.alert_threshold)


class HouseholdResponse(BaseModel):
    """Response for GET /v1/household"""

    members: List[MemberSchema]
    base_income: float
    settings: HouseholdSettingsSchema
