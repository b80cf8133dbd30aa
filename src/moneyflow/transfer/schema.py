"""Snapshot document schema.

A snapshot is one owner's complete ledger as a portable JSON document:

    {
      "version": 1,
      "exportDate": "...",
      "accounts": [...],
      "categories": [...],
      "transactions": [...]
    }

Record keys follow the portable backup format (``type``, ``date``,
``category_id`` ...). ``user_id`` keys are accepted and ignored; the importer
re-stamps every row with the caller's owner id.
"""

import json
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError

from moneyflow.core.timezone import parse_calendar_date, parse_datetime_utc
from moneyflow.domain.balance import MAX_BALANCE, MAX_MONEY
from moneyflow.domain.models.enums import AccountKind, TransactionKind

SNAPSHOT_VERSION = 1
COLLECTION_KEYS = ("transactions", "categories", "accounts")


class SnapshotRecord(BaseModel):
    """Base for snapshot rows."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(..., min_length=1)

    @field_validator("id", mode="before")
    @classmethod
    def stringify_id(cls, v: Any) -> Any:
        return str(v) if isinstance(v, int) and not isinstance(v, bool) else v


class AccountRecord(SnapshotRecord):
    name: str = Field(..., min_length=1, max_length=255)
    kind: AccountKind = Field(..., alias="type")
    balance: Decimal = Field(..., ge=-MAX_BALANCE, le=MAX_BALANCE)
    goal: Optional[Decimal] = Field(default=None, ge=0, le=MAX_MONEY)
    description: Optional[str] = None


class CategoryRecord(SnapshotRecord):
    name: str = Field(..., min_length=1, max_length=255)
    kind: TransactionKind = Field(..., alias="type")


class TransactionRecord(SnapshotRecord):
    kind: TransactionKind = Field(..., alias="type")
    amount: Decimal = Field(..., gt=0, le=MAX_MONEY)
    category_id: str = Field(..., min_length=1)
    account_id: str = Field(..., min_length=1)
    description: Optional[str] = None
    txn_date: date = Field(..., alias="date")
    created_at: Optional[datetime] = None

    @field_validator("category_id", "account_id", mode="before")
    @classmethod
    def stringify_reference(cls, v: Any) -> Any:
        return str(v) if isinstance(v, int) and not isinstance(v, bool) else v

    @field_validator("txn_date", mode="before")
    @classmethod
    def parse_date(cls, v: Any) -> Any:
        if isinstance(v, str):
            return parse_calendar_date(v)
        return v

    @field_validator("created_at", mode="before")
    @classmethod
    def parse_created_at(cls, v: Any) -> Any:
        if isinstance(v, str):
            return parse_datetime_utc(v)
        return v


class SnapshotDocument(BaseModel):
    """One owner's ledger: accounts, categories and transactions."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    version: int = SNAPSHOT_VERSION
    exported_at: Optional[datetime] = Field(default=None, alias="exportDate")
    accounts: list[AccountRecord]
    categories: list[CategoryRecord]
    transactions: list[TransactionRecord]

    @field_validator("exported_at", mode="before")
    @classmethod
    def parse_exported_at(cls, v: Any) -> Any:
        if isinstance(v, str):
            return parse_datetime_utc(v)
        return v

    @field_validator("version")
    @classmethod
    def supported_version(cls, v: int) -> int:
        if v < 1 or v > SNAPSHOT_VERSION:
            raise ValueError(f"unsupported snapshot version {v}")
        return v

    @model_validator(mode="after")
    def check_consistency(self) -> "SnapshotDocument":
        problems = _consistency_problems(self)
        if problems:
            raise ValueError("; ".join(problems))
        return self

    def to_json(self) -> str:
        """Serialize using the portable key names."""
        return self.model_dump_json(by_alias=True, indent=2)


def _duplicates(values: list) -> list:
    seen = set()
    dupes = []
    for value in values:
        if value in seen and value not in dupes:
            dupes.append(value)
        seen.add(value)
    return dupes


def _consistency_problems(doc: SnapshotDocument) -> list[str]:
    problems = []

    for name, records in (
        ("accounts", doc.accounts),
        ("categories", doc.categories),
        ("transactions", doc.transactions),
    ):
        for dup in _duplicates([r.id for r in records]):
            problems.append(f"duplicate {name} id '{dup}'")

    for dup in _duplicates([a.name for a in doc.accounts]):
        problems.append(f"duplicate account name '{dup}'")
    for name, kind in _duplicates([(c.name, c.kind) for c in doc.categories]):
        problems.append(f"duplicate {kind.value} category name '{name}'")

    accounts = {a.id for a in doc.accounts}
    categories = {c.id: c for c in doc.categories}
    for txn in doc.transactions:
        if txn.account_id not in accounts:
            problems.append(f"transaction '{txn.id}' references unknown account '{txn.account_id}'")
        category = categories.get(txn.category_id)
        if category is None:
            problems.append(f"transaction '{txn.id}' references unknown category '{txn.category_id}'")
        elif category.kind != txn.kind:
            problems.append(
                f"transaction '{txn.id}' is {txn.kind.value} but category "
                f"'{category.name}' is {category.kind.value}"
            )

    return problems


@dataclass
class SnapshotCheck:
    """Result of validating a snapshot payload: a document or a list of errors."""

    snapshot: Optional[SnapshotDocument] = None
    errors: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return self.snapshot is not None and not self.errors


def validate_snapshot(payload: Any) -> SnapshotCheck:
    """
    Check a decoded snapshot payload against the schema.

    Never raises for malformed input; problems are returned in
    ``SnapshotCheck.errors``.
    """
    if not isinstance(payload, dict):
        return SnapshotCheck(errors=["snapshot must be a JSON object"])

    errors = []
    for key in COLLECTION_KEYS:
        if key not in payload:
            errors.append(f"missing collection '{key}'")
        elif not isinstance(payload[key], list):
            errors.append(f"collection '{key}' must be a list")
    if errors:
        return SnapshotCheck(errors=errors)

    try:
        snapshot = SnapshotDocument.model_validate(payload)
    except PydanticValidationError as exc:
        return SnapshotCheck(errors=[_format_error(err) for err in exc.errors()])
    return SnapshotCheck(snapshot=snapshot)


def validate_snapshot_json(text: str) -> SnapshotCheck:
    """Decode JSON text and validate it."""
    try:
        payload = json.loads(text)
    except (json.JSONDecodeError, TypeError) as exc:
        return SnapshotCheck(errors=[f"invalid JSON: {exc}"])
    return validate_snapshot(payload)


def _format_error(err: dict) -> str:
    location = ".".join(str(part) for part in err.get("loc", ()))
    message = err.get("msg", "invalid value")
    return f"{location}: {message}" if location else message
