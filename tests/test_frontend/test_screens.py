"""Tests for screen lifecycle wiring."""
import pytest

from shared.enums import ViewState
from src.ledger_app.screens.expenses import BudgetDetailScreen, ExpenseDetailScreen, ExpensesListScreen
from src.ledger_app.screens.family import FamilyCircleDetailScreen, MemberDetailScreen
from src.ledger_app.screens.overview import CoParentingScreen, DashboardScreen, DocumentsScreen
from src.ledger_app.services.errors import ServerError
from src.ledger_app.viewmodels.budgets import BudgetsViewModel
from src.ledger_app.viewmodels.coparenting import CoParentingViewModel
from src.ledger_app.viewmodels.dashboard import DashboardViewModel
from src.ledger_app.viewmodels.documents import DocumentsViewModel
from src.ledger_app.viewmodels.expenses import ExpensesViewModel
from src.ledger_app.viewmodels.family import FamilyViewModel
from src.ledger_app.viewmodels.member_records import MemberRecordsViewModel


@pytest.fixture
def expenses_screen(fake_api, expense_payload):
    fake_api.on('GET', '/expenses', {'expenses': [expense_payload]})
    fake_api.on('GET', '/expenses/categories', [{'id': 3, 'name': 'Food'}])
    fake_api.on('GET', '/budgets', [{'id': 7, 'name': 'Household'}])
    return ExpensesListScreen(ExpensesViewModel(fake_api))


class TestLifecycle:

    def test_appear_loads_everything(self, expenses_screen, fake_api):
        results = expenses_screen.on_appear().result()

        assert results == [True, True, True]
        assert expenses_screen.visible is True
        assert expenses_screen.state == ViewState.LOADED
        assert sorted(fake_api.paths()) == ['/budgets', '/expenses', '/expenses/categories']

    def test_dismissed_scope_skips_work(self, expenses_screen, fake_api):
        expenses_screen.on_dismiss()

        future = expenses_screen.view_model.refresh_expenses(scope=expenses_screen.scope)

        assert future.cancelled()
        assert fake_api.calls == []
        assert expenses_screen.visible is False

    def test_reappear_gets_fresh_scope(self, expenses_screen, fake_api):
        expenses_screen.on_dismiss()
        old_scope = expenses_screen.scope

        expenses_screen.on_appear()

        assert expenses_screen.scope is not old_scope
        assert not expenses_screen.scope.closed
        assert '/expenses' in fake_api.paths()

    def test_retry_clears_error(self, fake_api, expense_payload):
        fake_api.fail('GET', '/expenses/1', ServerError('Try later'))
        screen = ExpenseDetailScreen(ExpensesViewModel(fake_api), 1)
        screen.on_appear()
        assert screen.error_message == 'Try later'
        assert screen.state == ViewState.ERROR

        fake_api.on('GET', '/expenses/1', {'expense': expense_payload})
        assert screen.on_retry().result() is True
        assert screen.error_message is None
        assert screen.state == ViewState.LOADED

    def test_refresh_uses_silent_path(self, expenses_screen, fake_api):
        expenses_screen.on_appear()
        fake_api.fail('GET', '/expenses', ServerError('x'))
        assert expenses_screen.on_refresh().result() is False
        assert expenses_screen.error_message is None

    def test_search(self, expenses_screen):
        expenses_screen.on_appear()
        assert [e.id for e in expenses_screen.on_search('groc')] == [1]


class TestDetailScreens:

    def test_budget_progress(self, fake_api):
        fake_api.on('GET', '/budgets/1', {'budget': {'id': 1, 'name': 'Food', 'spent_percentage': 40}})
        screen = BudgetDetailScreen(BudgetsViewModel(fake_api), 1)
        assert screen.progress == 0.0
        screen.on_appear()
        assert screen.progress == 0.4

    def test_circle_detail_loads_tabs(self, fake_api):
        fake_api.on('GET', '/family-circles/1', {'family_circle': {'id': 1, 'name': 'Riveras'}})
        fake_api.on('GET', '/family-circles/1/resources', {'family_resources': []})
        fake_api.fail('GET', '/family-circles/1/legal-documents', ServerError('x'))
        screen = FamilyCircleDetailScreen(FamilyViewModel(fake_api), 1)

        results = screen.on_appear().result()

        assert results == [True, [True, False]]
        assert screen.error_message is None

    def test_member_detail(self, fake_api, member_payload):
        fake_api.on('GET', '/family-circles/1/members/42', {'member': member_payload})
        screen = MemberDetailScreen(MemberRecordsViewModel(fake_api, 1, 42))

        screen.on_appear()

        assert screen.masked_ssn == 'XXX-XX-6789'
        assert screen.blood_type == 'O Positive (O+)'

    def test_allergy_chips_wrap(self, fake_api):
        screen = MemberDetailScreen(MemberRecordsViewModel(fake_api, 1, 42))
        positions, size = screen.allergy_chips([(50, 20), (60, 20), (40, 20)], max_width=120)
        assert positions == [(0.0, 0.0), (58.0, 0.0), (0.0, 28.0)]
        assert size == (118.0, 48.0)


class TestOverviewScreens:

    def test_dashboard(self, fake_api):
        fake_api.on('GET', '/dashboard', {'stats': {'family_members': 3}})
        fake_api.on('GET', '/reminders', {})
        fake_api.on('POST', '/reminders/2/complete')
        screen = DashboardScreen(DashboardViewModel(fake_api))

        screen.on_appear()
        assert screen.on_complete_reminder(2).result() is True
        assert fake_api.paths() == ['/dashboard', '/reminders', '/reminders/2/complete', '/reminders']

    def test_documents_empty_state(self, fake_api):
        fake_api.on('GET', '/documents', {'insurance_policies': [], 'tax_returns': []})
        screen = DocumentsScreen(DocumentsViewModel(fake_api))
        screen.on_appear()
        assert screen.state == ViewState.EMPTY

    def test_coparenting_send(self, fake_api):
        fake_api.on('GET', '/coparenting', {'children': []})
        screen = CoParentingScreen(CoParentingViewModel(fake_api))
        screen.on_appear()
        assert screen.on_send(1, '').result() is False
        assert screen.error_message == 'Please enter a message'
