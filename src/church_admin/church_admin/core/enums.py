from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Papel do usuário gravado em user_roles."""

    ADMIN = "admin"
    EBD_MANAGER = "gerente_ebd"
    TREASURER = "tesoureiro"
    SECRETARY = "secretario"
    SUPERINTENDENT = "superintendente"
    CLIENT = "client"
    USER = "user"


class AccountNature(str, Enum):
    """Natureza da conta: define de que lado o saldo aumenta."""

    DEBTOR = "Devedora"
    CREDITOR = "Credora"


class AccountType(str, Enum):
    SYNTHETIC = "Sintética"
    ANALYTIC = "Analítica"


class JournalKind(str, Enum):
    """Filter used by the journal book (livro diário)."""

    ALL = "all"
    INCOME = "entrada"
    EXPENSE = "despesa"


class Module(str, Enum):
    CHURCHES = "REOBOTE IGREJAS"
    ASSOCIATIONS = "REOBOTE ASSOCIAÇÕES"
    EBD = "REOBOTE EBD"


class UserKind(str, Enum):
    """Resolved landing variant, one per user after authentication."""

    ADMIN = "admin"
    MANAGER = "manager"
    FINANCE = "finance"
    SALESPERSON = "salesperson"
    RESELLER = "reseller"
    SUPERINTENDENT = "superintendent"
    REACTIVATION_LEAD = "reactivation_lead"
    TEACHER = "teacher"
    STUDENT = "student"
    FINANCIAL_MODULE = "financial_module"
    SCHOOL_MODULE = "school_module"
    DEFAULT = "default"


class DiscountKind(str, Enum):
    CATEGORY = "categoria"
    SALESPERSON = "vendedor"
    ADVEC = "advec"
    SETUP = "setup"
    RESELLER = "revendedor"
    NONE = "nenhum"
