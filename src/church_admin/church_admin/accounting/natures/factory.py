from __future__ import annotations

from dataclasses import dataclass

from ...core.enums import AccountNature
from ..model import Account
from .base import NatureRule
from .creditor_rule import CreditorRule
from .debtor_rule import DebtorRule

_RULES: dict[AccountNature, NatureRule] = {
    AccountNature.DEBTOR: DebtorRule(),
    AccountNature.CREDITOR: CreditorRule(),
}


@dataclass
class NatureRuleFactory:
    """Factory Pattern: choose the balance rule from the account's declared nature."""

    def for_nature(self, nature: AccountNature) -> NatureRule:
        return _RULES[nature]

    def for_account(self, account: Account) -> NatureRule:
        return self.for_nature(account.nature)
