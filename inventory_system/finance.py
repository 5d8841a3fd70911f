"""Transactions, payment processors and accounts."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import List, Optional

from .repository import ErrorKind, KeyedRepository
from .services import OperationResult

logger = logging.getLogger(__name__)


class InsufficientFundsError(ValueError):
    """Raised when a savings account would be overdrawn."""


@dataclass(frozen=True, slots=True)
class Transaction:
    id: int
    booked_on: date
    amount: Decimal
    category: str

    def __post_init__(self) -> None:
        if self.amount <= 0:
            raise ValueError("Transaction amount must be positive")


def format_money(amount: Decimal) -> str:
    return f"{amount:,.2f}"


class TransactionProcessor:
    """Base class for payment channels; subclasses describe the transfer."""

    channel = "generic"

    def describe(self, transaction: Transaction) -> str:
        raise NotImplementedError

    def process(self, transaction: Transaction) -> str:
        message = self.describe(transaction)
        logger.info("[%s] %s", self.channel, message)
        return message


class BankTransferProcessor(TransactionProcessor):
    channel = "bank"

    def describe(self, transaction: Transaction) -> str:
        return f"Processing bank transfer of {format_money(transaction.amount)} for {transaction.category}."


class MobileMoneyProcessor(TransactionProcessor):
    channel = "mobile"

    def describe(self, transaction: Transaction) -> str:
        return f"Sending mobile money: {format_money(transaction.amount)} for {transaction.category}."


class CryptoWalletProcessor(TransactionProcessor):
    channel = "crypto"

    def describe(self, transaction: Transaction) -> str:
        return (
            f"Transferring crypto: {format_money(transaction.amount)} for "
            f"{transaction.category} (volatile, but processed!)."
        )


class Account:
    """Plain account; transactions are deducted without a balance check."""

    def __init__(self, account_number: str, initial_balance: Decimal) -> None:
        self.account_number = account_number
        self._balance = Decimal(initial_balance)

    @property
    def balance(self) -> Decimal:
        return self._balance

    def apply_transaction(self, transaction: Transaction) -> Decimal:
        self._balance -= transaction.amount
        return self._balance


class SavingsAccount(Account):
    """Account that refuses to go below zero."""

    def apply_transaction(self, transaction: Transaction) -> Decimal:
        if transaction.amount > self._balance:
            raise InsufficientFundsError(
                f"Insufficient funds: Cannot deduct {format_money(transaction.amount)} "
                f"from balance of {format_money(self._balance)}."
            )
        return super().apply_transaction(transaction)


class FinanceService:
    """Routes transactions through a processor onto an account and records them.

    Only transactions that were applied to the account are recorded.
    """

    def __init__(
        self,
        account: Account,
        transaction_repo: Optional[KeyedRepository[Transaction]] = None,
    ) -> None:
        self.account = account
        self.transactions = transaction_repo if transaction_repo is not None else KeyedRepository()

    def submit(self, transaction: Transaction, processor: TransactionProcessor) -> OperationResult:
        if transaction.id in self.transactions:
            logger.warning("Transaction %r already recorded", transaction.id)
            return OperationResult.failure(
                f"Transaction {transaction.id} was already recorded.", ErrorKind.DUPLICATE_KEY
            )

        processor.process(transaction)
        try:
            balance = self.account.apply_transaction(transaction)
        except InsufficientFundsError as exc:
            logger.warning("Account %s rejected transaction %r: %s", self.account.account_number, transaction.id, exc)
            return OperationResult.failure(str(exc))

        self.transactions.add(transaction)
        return OperationResult.success(f"Transaction applied. Updated balance: {format_money(balance)}")

    def recorded(self) -> List[Transaction]:
        return self.transactions.list()


__all__ = [
    "Transaction",
    "TransactionProcessor",
    "BankTransferProcessor",
    "MobileMoneyProcessor",
    "CryptoWalletProcessor",
    "Account",
    "SavingsAccount",
    "FinanceService",
    "InsufficientFundsError",
]
