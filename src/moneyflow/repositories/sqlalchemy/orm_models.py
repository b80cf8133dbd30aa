"""SQLAlchemy ORM model definitions."""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    BigInteger,
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    String,
    Text,
    TypeDecorator,
    UniqueConstraint,
    Enum as SqlEnum,
)
from sqlalchemy.orm import relationship

from moneyflow.repositories.sqlalchemy.database import Base
from moneyflow.domain.models.enums import AccountKind, TransactionKind

CENTS_PER_UNIT = Decimal("100")


class Money(TypeDecorator):
    """
    Decimal amount persisted as an integer number of cents.

    Arithmetic done by the database (``balance + :delta``) stays exact on
    backends without a fixed-point type.
    """

    impl = BigInteger
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return int((Decimal(str(value)) * CENTS_PER_UNIT).to_integral_value())

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return (Decimal(value) / CENTS_PER_UNIT).quantize(Decimal("0.01"))


MONEY = Money()


def _enum(enum_cls) -> SqlEnum:
    # Store the lowercase values ("income"), not the member names
    return SqlEnum(enum_cls, values_callable=lambda e: [m.value for m in e])


class AccountORM(Base):
    """SQLAlchemy model for Account."""

    __tablename__ = "accounts"
    __table_args__ = (
        UniqueConstraint("owner_id", "name", name="uq_accounts_owner_name"),
    )

    account_id = Column(String(36), primary_key=True)
    owner_id = Column(String(255), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    kind = Column(_enum(AccountKind), nullable=False, default=AccountKind.REGULAR)
    balance = Column(MONEY, nullable=False, default=Decimal("0"))
    opening_balance = Column(MONEY, nullable=False, default=Decimal("0"))
    goal = Column(MONEY, nullable=True)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=True)

    transactions = relationship("TransactionORM", back_populates="account")


class CategoryORM(Base):
    """SQLAlchemy model for Category."""

    __tablename__ = "categories"
    __table_args__ = (
        UniqueConstraint("owner_id", "name", "kind", name="uq_categories_owner_name_kind"),
    )

    category_id = Column(String(36), primary_key=True)
    owner_id = Column(String(255), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    kind = Column(_enum(TransactionKind), nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    transactions = relationship("TransactionORM", back_populates="category")


class TransactionORM(Base):
    """SQLAlchemy model for Transaction."""

    __tablename__ = "transactions"
    __table_args__ = (
        CheckConstraint("amount >= 0", name="ck_transactions_amount_non_negative"),
        Index("ix_transactions_owner_date", "owner_id", "txn_date"),
    )

    txn_id = Column(String(36), primary_key=True)
    owner_id = Column(String(255), nullable=False)
    kind = Column(_enum(TransactionKind), nullable=False)
    amount = Column(MONEY, nullable=False)
    category_id = Column(
        String(36), ForeignKey("categories.category_id"), nullable=False, index=True
    )
    account_id = Column(
        String(36), ForeignKey("accounts.account_id"), nullable=False, index=True
    )
    description = Column(Text, nullable=True)
    txn_date = Column(Date, nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=True)

    account = relationship("AccountORM", back_populates="transactions")
    category = relationship("CategoryORM", back_populates="transactions")
