from __future__ import annotations

from decimal import Decimal

from src.church_admin.church_admin.accounting.model import Account
from src.church_admin.church_admin.accounting.natures.creditor_rule import CreditorRule
from src.church_admin.church_admin.accounting.natures.debtor_rule import DebtorRule
from src.church_admin.church_admin.accounting.natures.factory import NatureRuleFactory
from src.church_admin.church_admin.core.enums import AccountNature, AccountType


def test_debtor_grows_with_debits():
    rule = DebtorRule()
    assert rule.closing(opening=Decimal("100"), debits=Decimal("50"), credits=Decimal("30")) == Decimal("120")
    assert rule.signed(Decimal("-40")) == Decimal("-40")


def test_creditor_grows_with_credits():
    rule = CreditorRule()
    assert rule.closing(opening=Decimal("100"), debits=Decimal("50"), credits=Decimal("30")) == Decimal("80")
    # raw net (debits - credits) of -40 is a creditor balance of 40
    assert rule.signed(Decimal("-40")) == Decimal("40")


def test_factory_picks_rule_by_account_nature():
    factory = NatureRuleFactory()
    cash = Account("1.1.1.01", "Caixa Geral", AccountNature.DEBTOR, AccountType.ANALYTIC)
    tithes = Account("4.1.1.01", "Dízimos", AccountNature.CREDITOR, AccountType.ANALYTIC)

    assert isinstance(factory.for_account(cash), DebtorRule)
    assert isinstance(factory.for_account(tithes), CreditorRule)


def test_account_level_and_ancestry():
    group = Account("1.1", "Ativo Circulante", AccountNature.DEBTOR, AccountType.SYNTHETIC)

    assert group.level == 1
    assert group.is_synthetic
    assert group.is_ancestor_of("1.1.1.01")
    assert not group.is_ancestor_of("1.10.1")
    assert not group.is_ancestor_of("1.1")
