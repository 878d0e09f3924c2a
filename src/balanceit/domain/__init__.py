"""Domain layer for balanceit application."""

from balanceit.domain.ledger import LedgerService
from balanceit.domain.reconciliation import ReconciliationService
from balanceit.domain.csv_import import CSVImportService, ImportMode
from balanceit.domain.csv_templates import generate_template, generate_bank_template
from balanceit.domain.reports import ReportService

__all__ = [
    "LedgerService",
    "ReconciliationService",
    "CSVImportService",
    "ImportMode",
    "ReportService",
    "generate_template",
    "generate_bank_template",
]
