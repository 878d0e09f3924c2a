"""Heuristic classification of free-text account types and categories.

Keyword matching is inherently approximate. Each rule is a standalone pure
function so reports can swap one out without touching their own logic.
"""

from balanceit.domain.entities import Account, AccountType

# Order matters: the first key contained in the raw type wins.
ACCOUNT_TYPE_KEYWORDS = (
    ("asset", AccountType.ASSET),
    ("assets", AccountType.ASSET),
    ("liability", AccountType.LIABILITY),
    ("liabilities", AccountType.LIABILITY),
    ("equity", AccountType.EQUITY),
    ("revenue", AccountType.REVENUE),
    ("income", AccountType.REVENUE),
    ("expense", AccountType.EXPENSE),
    ("expenses", AccountType.EXPENSE),
)

CURRENT_ASSET_KEYWORDS = ("current", "cash", "bank", "receivable", "inventory", "stock", "prepaid")
CURRENT_LIABILITY_KEYWORDS = ("current", "payable", "tax", "vat", "gst", "accrued", "short")
NON_CURRENT_MARKERS = ("non-current", "non current", "noncurrent")
COST_OF_SALES_CATEGORIES = ("Cost of Sales", "Cost of Goods Sold")


def parse_account_type(raw_type: str | None) -> AccountType:
    """Map a free-text type to an AccountType by substring.

    Unrecognised or empty input defaults to Asset.
    """
    text = (raw_type or "").strip().lower()
    for keyword, account_type in ACCOUNT_TYPE_KEYWORDS:
        if keyword in text:
            return account_type
    return AccountType.ASSET


def _is_non_current(category: str) -> bool:
    return any(marker in category for marker in NON_CURRENT_MARKERS)


def is_current_asset(category: str | None) -> bool:
    """Return True if an asset category reads as current."""
    c = (category or "").lower()
    if _is_non_current(c):
        return False
    return any(keyword in c for keyword in CURRENT_ASSET_KEYWORDS)


def is_current_liability(category: str | None) -> bool:
    """Return True if a liability category reads as current."""
    c = (category or "").lower()
    if _is_non_current(c):
        return False
    return any(keyword in c for keyword in CURRENT_LIABILITY_KEYWORDS)


def is_cost_of_sales(category: str | None) -> bool:
    return category in COST_OF_SALES_CATEGORIES


def is_bank_account(account: Account) -> bool:
    """Return True if an account is a plausible target for bank reconciliation."""
    name = account.name.lower()
    if account.type == AccountType.ASSET and "asset" in account.category.lower():
        return True
    if account.type == AccountType.LIABILITY and "card" in name:
        return True
    return "bank" in name or "cash" in name
