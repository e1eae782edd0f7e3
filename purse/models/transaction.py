"""
Ledger Transaction Models

A transaction is the only thing the ledger stores. Everything else
(budget usage, savings statistics, category summaries) is derived from
the full list of transactions on demand.

DESIGN DECISION: Amounts are signed Decimals. Positive is money in
(income, savings deposit), negative is money out. There is no currency
field; one ledger file is one currency.
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)


UNCATEGORIZED = "Uncategorized"


def as_utc(value: datetime) -> datetime:
    """Naive datetimes are taken to be UTC already."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Transaction(BaseModel):
    """
    A single ledger entry.

    CRITICAL: `id` never changes after creation. Edits produce a new
    Transaction object carrying the same id.

    `category` stays None when not given. Consumers show it as
    "Uncategorized" (see `display_category`) but it is never written
    that way.
    """
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
    )

    id: str = Field(
        ...,
        min_length=1,
        description="Unique id within one ledger"
    )
    amount: Decimal = Field(
        ...,
        allow_inf_nan=False,
        description="Signed amount; negative is an expense"
    )
    description: str = Field(
        default="",
        description="Free text, may be empty"
    )
    date: datetime = Field(
        default_factory=utc_now,
        description="When the transaction happened (UTC)"
    )
    category: Optional[str] = None
    is_savings: bool = Field(
        default=False,
        alias="isSavings",
        description="Counts toward the savings pool instead of budget spend"
    )

    @field_validator('date')
    @classmethod
    def normalize_date(cls, v: datetime) -> datetime:
        return as_utc(v)

    @field_validator('category')
    @classmethod
    def empty_category_is_none(cls, v: Optional[str]) -> Optional[str]:
        return v or None

    @property
    def display_category(self) -> str:
        return self.category or UNCATEGORIZED

    @property
    def is_expense(self) -> bool:
        return self.amount < 0

    @property
    def is_savings_deposit(self) -> bool:
        """Only positive savings-flagged entries feed savings statistics."""
        return self.is_savings and self.amount > 0


class TransactionUpdate(BaseModel):
    """
    Partial update for an existing transaction.

    A field left out of the constructor is not touched. A field passed
    explicitly is written, so `TransactionUpdate(category=None)` clears the
    category while `TransactionUpdate()` changes nothing.
    """
    model_config = ConfigDict(populate_by_name=True)

    amount: Optional[Decimal] = Field(default=None, allow_inf_nan=False)
    description: Optional[str] = None
    date: Optional[datetime] = None
    category: Optional[str] = None
    is_savings: Optional[bool] = Field(default=None, alias="isSavings")

    @model_validator(mode='after')
    def reject_cleared_required_fields(self) -> 'TransactionUpdate':
        """Only category may be cleared; the other fields always hold a value."""
        for name in ("amount", "description", "date", "is_savings"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be cleared")
        return self

    @property
    def is_empty(self) -> bool:
        return not self.model_fields_set

    def changes(self) -> dict:
        """Fields explicitly provided, keyed by field name."""
        return self.model_dump(exclude_unset=True, by_alias=False)

    def apply(self, transaction: Transaction) -> Transaction:
        """Return a copy of `transaction` with this update applied."""
        merged = transaction.model_dump(by_alias=False)
        merged.update(self.changes())
        merged["id"] = transaction.id
        return Transaction.model_validate(merged)
