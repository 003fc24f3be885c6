"""SQLAlchemy ORM models."""
from sqlalchemy import BigInteger, CheckConstraint, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from wallet_ledger.infrastructure.database.base import Base


class Wallet(Base):
    __tablename__ = "wallet"
    __table_args__ = (
        CheckConstraint("length(address) = 64", name="ck_wallet_address_length"),
        CheckConstraint("balance_cents >= 0", name="ck_wallet_balance_non_negative"),
    )
    __mapper_args__ = {"eager_defaults": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    address = Column(String(64), unique=True, nullable=False, index=True)
    balance_cents = Column(BigInteger, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    sent = relationship(
        "Transaction", foreign_keys="Transaction.from_address", back_populates="sender"
    )
    received = relationship(
        "Transaction", foreign_keys="Transaction.to_address", back_populates="recipient"
    )


class Transaction(Base):
    __tablename__ = "transactions"
    __table_args__ = (
        CheckConstraint("amount_cents > 0", name="ck_transactions_amount_positive"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    from_address = Column(String(64), ForeignKey("wallet.address"), nullable=False, index=True)
    to_address = Column(String(64), ForeignKey("wallet.address"), nullable=False, index=True)
    amount_cents = Column(BigInteger, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, index=True)

    sender = relationship("Wallet", foreign_keys=[from_address], back_populates="sent")
    recipient = relationship("Wallet", foreign_keys=[to_address], back_populates="received")
