"""Bank reconciliation domain service.

Pairs bank statement lines with ledger transactions for one account.

Matching is greedy and follows statement order: each bank line takes the
best still-available ledger transaction, and that transaction is then gone
for every later line. This is not a globally optimal assignment. When two
lines collide on amount with ambiguous dates and text, reordering the
statement can change which pairs are chosen.
"""

import logging
import re
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from balanceit.domain.classification import is_bank_account
from balanceit.domain.entities import (
    Account,
    BankTransaction,
    ReconciliationMatch,
    ReconciliationResult,
    ReconciliationSummary,
    Transaction,
)
from balanceit.domain.errors import NotFoundError, account_not_found
from balanceit.domain.ledger import LedgerService
from balanceit.utils.amount_parser import to_decimal
from balanceit.utils.date_parser import days_between

logger = logging.getLogger(__name__)

AMOUNT_TOLERANCE = Decimal("0.01")
TEXT_MATCH_WEIGHT = 5
MIN_TOKEN_LENGTH = 3

_NON_WORD = re.compile(r"[^a-z0-9 ]")


def amounts_match(bank_amount, ledger_amount) -> bool:
    """Amount admission filter. Nothing outside the tolerance is ever a candidate."""
    return abs(to_decimal(ledger_amount) - to_decimal(bank_amount)) < AMOUNT_TOLERANCE


def date_score(days: int) -> int:
    """Score date proximity in whole days."""
    if days == 0:
        return 20
    if days <= 2:
        return 10
    if days <= 5:
        return 5
    if days <= 7:
        return 1
    return -10


def description_tokens(text: str | None) -> list[str]:
    """Lowercase, drop punctuation and keep words of three or more characters."""
    cleaned = _NON_WORD.sub("", (text or "").lower())
    return [w for w in cleaned.split() if len(w) >= MIN_TOKEN_LENGTH]


def description_match_score(bank_description: str, ledger_description: str) -> int:
    """Count bank words that overlap some ledger word by substring, either way."""
    bank_words = description_tokens(bank_description)
    ledger_words = description_tokens(ledger_description)
    if not bank_words or not ledger_words:
        return 0
    return sum(
        1 for w in bank_words if any(w in other or other in w for other in ledger_words)
    )


def score_candidate(bank: BankTransaction, candidate: Transaction) -> int:
    """Total score of a same-amount candidate: date proximity plus weighted text overlap."""
    days = days_between(candidate.date, bank.date)
    text = description_match_score(bank.description, candidate.description)
    return date_score(days) + text * TEXT_MATCH_WEIGHT


def match_transactions(
    bank_lines: Iterable[BankTransaction], ledger_transactions: Iterable[Transaction]
) -> ReconciliationResult:
    """Partition bank lines and ledger transactions into matched and unmatched.

    Args:
        bank_lines: Statement lines, in statement order
        ledger_transactions: Transactions already posted to the same account

    Returns:
        ReconciliationResult with matched pairs, unmatched bank lines and
        the ledger transactions no bank line claimed
    """
    available = list(ledger_transactions)
    matched: list[ReconciliationMatch] = []
    unmatched_bank: list[BankTransaction] = []

    for bank in bank_lines:
        best: Optional[Transaction] = None
        best_score = None
        for candidate in available:
            if not amounts_match(bank.amount, candidate.amount):
                continue
            score = score_candidate(bank, candidate)
            # Strictly greater keeps the first of several equal candidates.
            if best_score is None or score > best_score:
                best, best_score = candidate, score

        if best is not None and best_score > 0:
            available.remove(best)
            matched.append(ReconciliationMatch(bank=bank, ledger=best, score=best_score))
            logger.debug("Bank line %s matched %s (score %d)", bank.id, best.id, best_score)
        else:
            unmatched_bank.append(bank)
            if best is not None:
                logger.debug(
                    "Bank line %s rejected best candidate %s (score %d)",
                    bank.id,
                    best.id,
                    best_score,
                )

    return ReconciliationResult(
        matched=tuple(matched),
        unmatched_bank=tuple(unmatched_bank),
        unmatched_ledger=tuple(available),
    )


class ReconciliationService:
    """Service reconciling a bank statement against one ledger account."""

    def __init__(self, ledger: LedgerService):
        """Initialize reconciliation service.

        Args:
            ledger: Ledger service holding the account's transactions
        """
        self.ledger = ledger

    def reconcilable_accounts(self) -> list[Account]:
        """List accounts that look like bank, cash or card accounts."""
        return [a for a in self.ledger.list_accounts() if is_bank_account(a)]

    def reconcile_account(
        self, account_id: str, bank_lines: Sequence[BankTransaction]
    ) -> ReconciliationResult:
        """Match a statement against the account's posted transactions.

        Never mutates the ledger.

        Raises:
            NotFoundError: If the account does not exist
        """
        if self.ledger.get_account(account_id) is None:
            raise NotFoundError(account_not_found(account_id))
        result = match_transactions(bank_lines, self.ledger.transactions_for_account(account_id))
        logger.info(
            "Reconciled account %s: %d matched, %d bank unmatched, %d ledger unmatched",
            account_id,
            len(result.matched),
            len(result.unmatched_bank),
            len(result.unmatched_ledger),
        )
        return result

    def summarize(
        self,
        account_id: str,
        result: ReconciliationResult,
    ) -> ReconciliationSummary:
        """Headline figures: book balance against the statement total.

        Raises:
            NotFoundError: If the account does not exist
        """
        account = self.ledger.get_account(account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))
        statement_lines = [m.bank for m in result.matched] + list(result.unmatched_bank)
        return ReconciliationSummary(
            account_id=account_id,
            book_balance=account.net_debit,
            statement_total=sum((to_decimal(b.amount) for b in statement_lines), Decimal("0")),
            matched_count=len(result.matched),
            unmatched_bank_count=len(result.unmatched_bank),
            unmatched_ledger_count=len(result.unmatched_ledger),
        )

    def add_to_ledger(
        self,
        account_id: str,
        bank_line: BankTransaction,
        currency: Optional[str] = None,
    ) -> Transaction:
        """Post an unmatched bank line to the ledger.

        Args:
            account_id: Account to post to
            bank_line: Statement line to record
            currency: Currency the statement is in; defaults to base currency

        Raises:
            NotFoundError: If the account does not exist
        """
        if self.ledger.get_account(account_id) is None:
            raise NotFoundError(account_not_found(account_id))
        currency = currency or self.ledger.base_currency
        return self.ledger.add_transaction(
            account_id=account_id,
            date=bank_line.date,
            description=bank_line.description,
            amount=bank_line.amount,
            original_amount=bank_line.amount,
            original_currency=currency,
        )
