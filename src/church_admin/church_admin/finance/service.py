from __future__ import annotations

from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Optional, Sequence

from ..accounting.repository import ChartOfAccountsRepository, JournalRepository
from ..common.logging_utils import get_logger
from ..common.results import OperationResult
from ..common.validators import require_non_empty, require_positive_amount
from ..core.constants import (
    BANK_ACCOUNT_CODE,
    CASH_ACCOUNT_CODE,
    CASH_BOX_ID,
    DEFAULT_TRANSFER_LIMIT,
    OPENING_EQUITY_CODE,
    TRANSFER_HISTORY_PREFIX,
)
from ..core.exceptions import NotFoundError, ValidationError
from .model import BankAccount, Transfer
from .repository import BankAccountRepository, FinancialEntryRepository

logger = get_logger(__name__)

CASH_BOX_LABEL = "Caixa Geral"


def _require_church(church_id: Optional[str]) -> str:
    if not church_id:
        raise ValidationError("Igreja não identificada")
    return str(church_id)


class LedgerService:
    """Use case: post one double-entry journal line."""

    def __init__(self, chart: ChartOfAccountsRepository, journal: JournalRepository):
        self._chart = chart
        self._journal = journal

    def _require_analytic(self, code: str, side: str) -> None:
        account = self._chart.get_by_code(code)
        if not account:
            raise NotFoundError(f"Conta de {side} não encontrada: {code}")
        if account.is_synthetic:
            raise ValidationError(f"Conta de {side} é sintética e não recebe lançamentos: {code}")

    def post_entry(
        self,
        *,
        church_id: str,
        entry_date: Optional[date],
        debit_account: str,
        credit_account: str,
        amount,
        history: str,
        document: Optional[str] = None,
        financial_entry_id: Optional[int] = None,
        expense_id: Optional[int] = None,
        allow_same_account: bool = False,
    ) -> int:
        church_id = _require_church(church_id)
        if not entry_date:
            raise ValidationError("Data do lançamento é obrigatória")
        value = require_positive_amount(amount)
        history = require_non_empty(history, "Histórico")
        debit_account = require_non_empty(debit_account, "Conta de débito")
        credit_account = require_non_empty(credit_account, "Conta de crédito")

        if debit_account == credit_account and not allow_same_account:
            raise ValidationError("Conta de débito e crédito não podem ser iguais")

        self._require_analytic(debit_account, "débito")
        self._require_analytic(credit_account, "crédito")

        return self._journal.create(
            church_id=church_id,
            entry_date=entry_date,
            debit_account=debit_account,
            credit_account=credit_account,
            amount=value,
            history=history,
            document=document,
            financial_entry_id=financial_entry_id,
            expense_id=expense_id,
        )


class BankAccountService:
    """Use case: register bank accounts and their opening balance."""

    def __init__(
        self,
        bank_accounts: BankAccountRepository,
        ledger: LedgerService,
        financial_entries: FinancialEntryRepository,
    ):
        self._bank_accounts = bank_accounts
        self._ledger = ledger
        self._financial_entries = financial_entries

    @staticmethod
    def _parse_balance(value) -> Decimal:
        if value in (None, ""):
            return Decimal("0")
        try:
            balance = Decimal(str(value).strip().replace(",", "."))
        except InvalidOperation:
            raise ValidationError("Saldo inicial inválido")
        if not balance.is_finite() or balance < 0:
            raise ValidationError("Saldo inicial não pode ser negativo")
        return balance

    def list_accounts(self, *, church_id: str) -> Sequence[BankAccount]:
        return self._bank_accounts.list_for_church(church_id=_require_church(church_id))

    def open_account(
        self,
        *,
        church_id: str,
        bank_name: str,
        agency: str,
        account_number: str,
        account_type: str,
        initial_balance=None,
        initial_balance_date: Optional[date] = None,
    ) -> OperationResult:
        """Create the account; post the opening balance as best-effort follow-ups.

        The bank account row is the primary write. The journal entry and the
        dashboard financial entry are attempted afterwards; their failures are
        returned as warnings and the account is kept.
        """
        church_id = _require_church(church_id)
        bank_name = require_non_empty(bank_name, "Banco")
        account_number = require_non_empty(account_number, "Número da conta")
        balance = self._parse_balance(initial_balance)
        if balance > 0 and not initial_balance_date:
            raise ValidationError("Informe a data do saldo inicial")

        account_id = self._bank_accounts.create(
            church_id=church_id,
            bank_name=bank_name,
            agency=(agency or "").strip(),
            account_number=account_number,
            account_type=(account_type or "").strip(),
            initial_balance=balance,
            initial_balance_date=initial_balance_date,
        )
        result = OperationResult(id=account_id)
        if balance <= 0:
            return result

        try:
            self._ledger.post_entry(
                church_id=church_id,
                entry_date=initial_balance_date,
                debit_account=BANK_ACCOUNT_CODE,
                credit_account=OPENING_EQUITY_CODE,
                amount=balance,
                history=f"Lançamento de Saldo Inicial - {bank_name}",
                document=f"Abertura de Conta - {account_number}",
            )
        except Exception:
            logger.exception("opening journal entry failed church=%s bank_account=%s", church_id, account_id)
            result.warnings.append(
                "Conta cadastrada, mas houve um erro ao registrar o saldo inicial no sistema contábil."
            )
            return result

        payment_account = f"{bank_name} - Ag: {(agency or '').strip()} - Conta: {account_number}"
        try:
            self._financial_entries.create(
                church_id=church_id,
                entry_date=initial_balance_date,
                kind=BANK_ACCOUNT_CODE,
                description=f"Saldo inicial da conta bancária - {bank_name}",
                amount=balance,
                payment_account=payment_account,
            )
        except Exception:
            logger.exception("dashboard financial entry failed church=%s bank_account=%s", church_id, account_id)
            result.warnings.append(
                "Conta cadastrada, mas houve um erro ao integrar o saldo inicial com o Dashboard financeiro."
            )

        return result


class TransferService:
    """Use case: move money between the cash box and bank accounts."""

    def __init__(self, ledger: LedgerService, journal: JournalRepository, bank_accounts: BankAccountRepository):
        self._ledger = ledger
        self._journal = journal
        self._bank_accounts = bank_accounts

    @staticmethod
    def _account_key(ref: str):
        """'caixa_geral' stays as is; anything else must be a bank account id."""
        if ref == CASH_BOX_ID:
            return ref
        try:
            return int(ref)
        except (TypeError, ValueError):
            raise ValidationError("Conta inválida")

    def _resolve(self, church_id: str, key) -> tuple[str, str]:
        """Return (account code, label) for the cash box or a bank account id."""
        if key == CASH_BOX_ID:
            return CASH_ACCOUNT_CODE, CASH_BOX_LABEL
        account = self._bank_accounts.get_by_id(church_id=church_id, account_id=key)
        if not account:
            raise NotFoundError("Conta bancária não encontrada")
        return BANK_ACCOUNT_CODE, account.label

    def transfer(
        self,
        *,
        church_id: str,
        from_account: str,
        to_account: str,
        amount,
        transfer_date: Optional[date],
        description: Optional[str] = None,
    ) -> int:
        church_id = _require_church(church_id)
        from_account = str(from_account or "").strip()
        to_account = str(to_account or "").strip()
        if not from_account or not to_account or amount in (None, "") or not transfer_date:
            raise ValidationError("Preencha todos os campos obrigatórios.")
        source = self._account_key(from_account)
        destination = self._account_key(to_account)
        if source == destination:
            raise ValidationError("A conta de origem e destino não podem ser iguais.")
        value = require_positive_amount(amount)

        source_code, source_label = self._resolve(church_id, source)
        destination_code, destination_label = self._resolve(church_id, destination)
        text = (description or "").strip() or f"De {source_label} para {destination_label}"

        # Debit the destination (asset grows), credit the source.
        return self._ledger.post_entry(
            church_id=church_id,
            entry_date=transfer_date,
            debit_account=destination_code,
            credit_account=source_code,
            amount=value,
            history=f"{TRANSFER_HISTORY_PREFIX} {text}",
            allow_same_account=True,
        )

    def list_transfers(self, *, church_id: str, limit: int = DEFAULT_TRANSFER_LIMIT) -> list[Transfer]:
        entries = self._journal.list_by_history_prefix(
            church_id=_require_church(church_id), prefix=TRANSFER_HISTORY_PREFIX, limit=limit
        )
        return [
            Transfer(
                entry_id=e.entry_id,
                transfer_date=e.entry_date,
                amount=e.amount,
                source_account=e.credit_account,
                destination_account=e.debit_account,
                history=e.history,
            )
            for e in entries
        ]
