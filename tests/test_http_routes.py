from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest
from werkzeug.security import generate_password_hash

from src.church_admin.church_admin.access.service import ModuleService, RedirectService
from src.church_admin.church_admin.accounting.model import Account, JournalEntry
from src.church_admin.church_admin.accounting.service import AccountingReportService
from src.church_admin.church_admin.container import Container
from src.church_admin.church_admin.core.enums import AccountNature, AccountType
from src.church_admin.church_admin.ebd.model import Classroom, LessonPlan, Magazine
from src.church_admin.church_admin.ebd.service import LessonPlanService
from src.church_admin.church_admin.finance.model import BankAccount
from src.church_admin.church_admin.finance.service import BankAccountService, LedgerService, TransferService
from src.church_admin.church_admin.main import create_app
from src.church_admin.church_admin.users.model import User
from src.church_admin.church_admin.users.service import AuthService


class Users:
    def __init__(self):
        self.users = [
            User(1, "Admin", "admin@igreja.org", generate_password_hash("admin123"), "admin", "c1"),
            User(2, "Professor", "prof@igreja.org", generate_password_hash("prof123"), None, "c1"),
        ]

    def get_by_id(self, user_id):
        return next((u for u in self.users if u.user_id == user_id), None)

    def get_by_email(self, email):
        return next((u for u in self.users if u.email == email.strip().lower()), None)


class Lookups:
    def is_salesperson(self, email):
        return False

    def client_type(self, user_id):
        return None

    def is_superintendent(self, user_id):
        return False

    def is_promoted_superintendent(self, user_id):
        return False

    def is_reactivation_lead(self, email):
        return False

    def is_teacher(self, user_id):
        return user_id == 2

    def is_student(self, user_id):
        return False

    def church_for_user(self, user_id):
        return "c1"

    def active_modules(self, church_id):
        return ["REOBOTE EBD"]


class Chart:
    accounts = [
        Account("1.1.1.01", "Caixa Geral", AccountNature.DEBTOR, AccountType.ANALYTIC),
        Account("1.1.2.01", "Bancos Conta Movimento", AccountNature.DEBTOR, AccountType.ANALYTIC),
        Account("3.1.1.01", "Patrimônio Social Inicial", AccountNature.CREDITOR, AccountType.ANALYTIC),
        Account("4.1.1.01", "Dízimos", AccountNature.CREDITOR, AccountType.ANALYTIC),
    ]

    def list_all(self):
        return list(self.accounts)

    def get_by_code(self, code):
        return next((a for a in self.accounts if a.code == code), None)


class Journal:
    def __init__(self):
        self.entries = [
            JournalEntry(1, "c1", date(2025, 1, 5), "1.1.1.01", "4.1.1.01", Decimal("500"), "Dízimos de janeiro"),
        ]

    def list_between(self, *, church_id, start, end):
        return [e for e in self.entries if e.church_id == church_id and start <= e.entry_date <= end]

    def list_before(self, *, church_id, before):
        return [e for e in self.entries if e.church_id == church_id and e.entry_date < before]

    def list_until(self, *, church_id, as_of):
        return [e for e in self.entries if e.church_id == church_id and e.entry_date <= as_of]

    def list_by_history_prefix(self, *, church_id, prefix, limit):
        return [e for e in self.entries if e.history.startswith(prefix)][:limit]

    def create(self, *, church_id, entry_date, debit_account, credit_account, amount, history, **kw):
        entry_id = len(self.entries) + 1
        self.entries.append(
            JournalEntry(entry_id, church_id, entry_date, debit_account, credit_account, amount, history)
        )
        return entry_id


class BankAccounts:
    def __init__(self):
        self.accounts = {}

    def create(self, *, church_id, **fields):
        account_id = len(self.accounts) + 1
        self.accounts[account_id] = BankAccount(account_id=account_id, church_id=church_id, **fields)
        return account_id

    def get_by_id(self, *, church_id, account_id):
        account = self.accounts.get(account_id)
        return account if account and account.church_id == church_id else None

    def list_for_church(self, *, church_id):
        return [a for a in self.accounts.values() if a.church_id == church_id]


class BrokenFinancialEntries:
    def create(self, **kw):
        raise RuntimeError("dashboard table locked")


class LessonPlans:
    def __init__(self):
        self.magazines = {1: Magazine(1, "Revista Jovens", lesson_count=4)}
        self.plans = {}
        self.rosters = {}

    def get_magazine(self, magazine_id):
        return self.magazines.get(magazine_id)

    def list_lessons(self, magazine_id):
        return []

    def get_classroom(self, *, church_id, class_id):
        return Classroom(7, "c1", "Jovens") if (church_id, class_id) == ("c1", 7) else None

    def active_teacher_ids(self, *, church_id):
        return {2}

    def create_plan_with_roster(self, *, roster, **fields):
        plan_id = len(self.plans) + 1
        self.plans[plan_id] = LessonPlan(plan_id=plan_id, **fields)
        self.rosters[plan_id] = list(roster)
        return plan_id

    def get_plan(self, *, church_id, plan_id):
        plan = self.plans.get(plan_id)
        return plan if plan and plan.church_id == church_id else None

    def list_roster(self, plan_id):
        return self.rosters.get(plan_id, [])

    def list_plans_for_churches(self, church_ids):
        return [p for p in self.plans.values() if p.church_id in church_ids]


@pytest.fixture()
def client(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    chart, journal, banks = Chart(), Journal(), BankAccounts()
    ledger = LedgerService(chart, journal)
    container = Container(
        conn=None,
        auth_service=AuthService(Users()),
        redirect_service=RedirectService(Lookups()),
        module_service=ModuleService(Lookups()),
        accounting_report_service=AccountingReportService(chart, journal),
        ledger_service=ledger,
        bank_account_service=BankAccountService(banks, ledger, BrokenFinancialEntries()),
        transfer_service=TransferService(ledger, journal, banks),
        lesson_plan_service=LessonPlanService(LessonPlans()),
    )
    app = create_app(container)
    return app.test_client()


def _login(client, email="admin@igreja.org", password="admin123"):
    return client.post("/login", json={"email": email, "password": password})


def test_api_requires_login(client):
    resp = client.get("/api/me/landing")
    assert resp.status_code == 401
    assert "error" in resp.get_json()


def test_login_returns_landing_path(client):
    resp = _login(client, "prof@igreja.org", "prof123")
    assert resp.status_code == 200
    assert resp.get_json()["redirect"] == "/ebd/professor"

    me = client.get("/api/me/landing").get_json()
    assert me == {"kind": "teacher", "path": "/ebd/professor"}
    assert client.get("/api/me/modules").get_json() == {"modules": ["REOBOTE EBD"]}


def test_bad_login_is_401(client):
    resp = _login(client, password="wrong")
    assert resp.status_code == 401
    assert resp.get_json()["error"] == "E-mail ou senha inválidos"


def test_trial_balance_report(client):
    _login(client)

    resp = client.get("/api/reports/trial-balance?start=2025-01-01&end=2025-01-31")

    body = resp.get_json()
    assert resp.status_code == 200
    assert body["is_consistent"] is True
    assert body["total_debits"] == "500.00"
    assert body["message"] == "Balancete consistente: Débitos = Créditos"


def test_report_period_validation(client):
    _login(client)

    resp = client.get("/api/reports/income-statement?start=2025-02-01&end=2025-01-01")
    assert resp.status_code == 400

    resp = client.get("/api/reports/balance-sheet?date=31/01/2025")
    assert resp.status_code == 400


def test_journal_csv_download(client):
    _login(client)

    resp = client.get("/api/reports/journal.csv?start=2025-01-01&end=2025-01-31")

    assert resp.status_code == 200
    assert resp.mimetype == "text/csv"
    assert "livro_diario_2025-01-01_2025-01-31.csv" in resp.headers["Content-Disposition"]
    assert resp.get_data(as_text=True).startswith("\ufeff")


def test_transfer_validation_error(client):
    _login(client)

    resp = client.post(
        "/api/transfers",
        json={"from_account": "caixa_geral", "to_account": "caixa_geral", "amount": "10", "date": "2025-01-10"},
    )

    assert resp.status_code == 400
    assert resp.get_json()["error"] == "A conta de origem e destino não podem ser iguais."


def test_remaining_lessons_is_admin_only(client):
    _login(client, "prof@igreja.org", "prof123")

    assert client.get("/api/ebd/remaining?churches=c1").status_code == 403


def test_order_quote(client):
    _login(client)

    resp = client.post(
        "/api/orders/quote",
        json={"items": [{"id": "1", "title": "Kit", "unit_price": "700.00", "quantity": 1}], "client_type": "REVENDEDOR"},
    )

    quote = resp.get_json()["quote"]
    assert quote["kind"] == "revendedor"
    assert quote["total"] == "490.00"
    assert quote["tier"] == "Ouro (30%)"


def test_order_quote_rejects_non_object_items(client):
    _login(client)

    resp = client.post("/api/orders/quote", json={"items": ["Kit"]})

    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Item inválido"


def _plan_payload(**overrides):
    payload = {
        "magazine_id": 1,
        "class_id": 7,
        "start": "2025-01-01",
        "weekday": "Domingo",
        "assignments": {"1": 2, "2": 2, "3": 2},
        "no_class": [4],
    }
    payload.update(overrides)
    return payload


def test_plan_preview_lists_dated_lessons(client):
    _login(client)

    resp = client.get("/api/ebd/plans/preview?magazine_id=1&start=2025-01-01&weekday=Domingo")

    lessons = resp.get_json()["lessons"]
    assert resp.status_code == 200
    assert [l["lesson_date"] for l in lessons] == ["2025-01-05", "2025-01-12", "2025-01-19", "2025-01-26"]
    assert lessons[0]["title"] == "Lição 1"


def test_create_plan_then_follow_progress(client):
    _login(client)

    resp = client.post("/api/ebd/plans", json=_plan_payload())
    assert resp.status_code == 201
    plan_id = resp.get_json()["id"]

    body = client.get(f"/api/ebd/plans/{plan_id}/progress").get_json()
    assert body["progress"] == {"total": 4, "completed": 4, "percentage": 100, "remaining": 0}
    assert body["teachers"] == [{"teacher_id": 2, "assigned": 3, "taught": 3, "percentage": 100}]

    assert client.get("/api/ebd/plans/99/progress").status_code == 404


@pytest.mark.parametrize(
    "overrides",
    [
        {"no_class": ["x"]},
        {"no_class": "4"},
        {"assignments": {"um": 3}},
        {"assignments": [2, 2, 2]},
    ],
)
def test_create_plan_rejects_malformed_lesson_numbers(client, overrides):
    _login(client)

    resp = client.post("/api/ebd/plans", json=_plan_payload(**overrides))

    assert resp.status_code == 400
    assert "error" in resp.get_json()


def test_open_bank_account_reports_partial_success(client):
    _login(client)

    resp = client.post(
        "/api/bank-accounts",
        json={
            "bank_name": "Caixa",
            "agency": "0001",
            "account_number": "555",
            "account_type": "Corrente",
            "initial_balance": "1000,00",
            "initial_balance_date": "2025-01-02",
        },
    )

    body = resp.get_json()
    assert resp.status_code == 201
    assert body["id"] == 1
    assert body["partial"] is True
    assert body["warnings"] == [
        "Conta cadastrada, mas houve um erro ao integrar o saldo inicial com o Dashboard financeiro."
    ]

    [account] = client.get("/api/bank-accounts").get_json()["accounts"]
    assert account["initial_balance"] == "1000.00"

    resp = client.post(
        "/api/transfers",
        json={"from_account": "1", "to_account": "caixa_geral", "amount": "200", "date": "2025-01-10"},
    )
    assert resp.status_code == 201
    [transfer] = client.get("/api/transfers").get_json()["transfers"]
    assert transfer["amount"] == "200.00"
    assert transfer["source_account"] == "1.1.2.01"
