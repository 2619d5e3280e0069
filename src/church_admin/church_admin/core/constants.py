"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

DEFAULT_LESSON_COUNT = 13
DAYS_PER_WEEK = 7

# Trial balance / balance sheet are consistent below this gap.
BALANCE_TOLERANCE = Decimal("0.01")

ASSETS_PREFIX = "1."
LIABILITIES_PREFIX = "2."
EQUITY_PREFIX = "3."
REVENUE_PREFIX = "4.1."
EXPENSE_PREFIX = "4.2."

CASH_ACCOUNT_CODE = "1.1.1.01"  # Caixa Geral
BANK_ACCOUNT_CODE = "1.1.2.01"  # Contas Correntes
OPENING_EQUITY_CODE = "3.1.1.01"  # Fundo Patrimonial
CASH_BOX_ID = "caixa_geral"

TRANSFER_HISTORY_PREFIX = "Transferência:"
DEFAULT_TRANSFER_LIMIT = 50
