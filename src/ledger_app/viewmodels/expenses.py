"""Expenses list, detail and entry form."""
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

from shared.enums import ExpenseStatus, PaymentMethod, RecurringFrequency
from shared.schemas import (
    Budget, BudgetsListResponse, CategoriesListResponse, CreateExpenseRequest, Expense,
    ExpenseCategory, ExpenseDetailResponse, ExpensesResponse,
)
from shared.utils import encode_data_uri
from shared.validation import ValidationError, Validator
from ..services import endpoints
from .base import ResourceViewModel


@dataclass
class ExpenseForm:
    """Bindings for the add/edit expense form."""
    amount: str = ''
    description: str = ''
    category_id: Optional[int] = None
    budget_id: Optional[int] = None
    transaction_date: str = field(default_factory=lambda: date.today().isoformat())
    payment_method: Optional[PaymentMethod] = None
    is_recurring: bool = False
    recurring_frequency: RecurringFrequency = RecurringFrequency.MONTHLY
    notes: str = ''
    receipt_data: Optional[bytes] = None
    receipt_mime_type: str = 'image/jpeg'

    def to_request(self) -> CreateExpenseRequest:
        """Validate the form and build the request body.

        Raises:
            ValidationError: With the message to show next to the form
        """
        amount = Validator.validate_amount(self.amount)
        if not self.description or not self.description.strip():
            raise ValidationError("Please enter a description")

        receipt = None
        if self.receipt_data:
            receipt = encode_data_uri(self.receipt_data, self.receipt_mime_type)

        return CreateExpenseRequest(
            description=Validator.validate_string_length(self.description, "Description", 1, 255),
            amount=amount,
            category_id=self.category_id,
            budget_id=self.budget_id,
            transaction_date=self.transaction_date,
            payment_method=self.payment_method,
            is_recurring=self.is_recurring,
            recurring_frequency=self.recurring_frequency if self.is_recurring else None,
            notes=(self.notes or "").strip(),
            receipt=receipt,
        )


class ExpensesViewModel(ResourceViewModel):
    """State and operations for the expenses screens."""

    parse_error_message = "Failed to parse expense data"

    def __init__(self, api, dispatcher=None):
        super().__init__(api, dispatcher)
        self.stats = None
        self.categories: List[ExpenseCategory] = []
        self.budgets: List[Budget] = []
        self.spending_by_category = []
        self.form = ExpenseForm()

    @property
    def expenses(self) -> List[Expense]:
        return self.items

    def _apply_list(self, response: ExpensesResponse):
        self.items = response.expenses or []
        self.stats = response.stats
        if response.categories is not None:
            self.categories = response.categories
        if response.budgets is not None:
            self.budgets = response.budgets
        self.spending_by_category = response.spending_by_category or []

    def _fetch_list(self):
        return self.api.request(endpoints.expenses(), model=ExpensesResponse)

    def load_expenses(self, scope=None):
        return self.run_load(self._fetch_list, self._apply_list, "Failed to load expenses",
                             scope=scope, show_loading=not self.items)

    def refresh_expenses(self, scope=None):
        return self.run_refresh(self._fetch_list, self._apply_list, scope=scope)

    def load_expense(self, expense_id, scope=None):
        def fetch():
            return self.api.request(endpoints.expense(expense_id), model=ExpenseDetailResponse).expense

        def apply(expense):
            self.selected = expense

        return self.run_load(fetch, apply, "Failed to load expense details", scope=scope)

    def reload_expense(self, expense_id, scope=None):
        """Fetch an expense after a mutation and swap it into the list."""
        def fetch():
            return self.api.request(endpoints.expense(expense_id), model=ExpenseDetailResponse).expense

        return self.run_load(fetch, self._replace, "Failed to load expense details", scope=scope,
                             show_loading=False)

    def load_categories(self, scope=None):
        def fetch():
            payload = self.api.request(endpoints.expense_categories())
            return self.decode_wrapped_or_list(CategoriesListResponse, 'categories', ExpenseCategory, payload)

        def apply(categories):
            self.categories = categories

        return self.run_secondary(fetch, apply, scope=scope)

    def load_budgets(self, scope=None):
        """Budgets for the picker on the expense form."""
        def fetch():
            payload = self.api.request(endpoints.budgets())
            return self.decode_wrapped_or_list(BudgetsListResponse, 'budgets', Budget, payload)

        def apply(budgets):
            self.budgets = budgets

        return self.run_secondary(fetch, apply, scope=scope)

    def create_expense(self, scope=None):
        try:
            body = self.form.to_request()
        except ValidationError as e:
            return self.fail_validation(e)

        def fetch():
            return self.api.request(endpoints.create_expense(), json=body)

        def apply(_):
            self.clear_form()
            self.load_expenses(scope=scope)

        return self.run_mutation(fetch, apply, lambda e: f"Failed to create expense: {e}",
                                 scope=scope, success_message="Expense added")

    def update_expense(self, expense_id, scope=None):
        try:
            body = self.form.to_request()
        except ValidationError as e:
            return self.fail_validation(e)

        def fetch():
            self.api.request(endpoints.update_expense(expense_id), json=body)

        def apply(_):
            self.clear_form()
            self.reload_expense(expense_id, scope=scope)

        return self.run_mutation(fetch, apply, "Failed to update expense", scope=scope,
                                 success_message="Expense updated")

    def delete_expense(self, expense_id, scope=None):
        def fetch():
            self.api.request_empty(endpoints.delete_expense(expense_id))

        def apply(_):
            self.items = [e for e in self.items if e.id != expense_id]
            if self.selected is not None and self.selected.id == expense_id:
                self.selected = None

        return self.run_mutation(fetch, apply, "Failed to delete expense", scope=scope)

    def settle_expense(self, expense_id, scope=None):
        def fetch():
            self.api.request_empty(endpoints.settle_expense(expense_id))

        def apply(_):
            self.reload_expense(expense_id, scope=scope)

        return self.run_mutation(fetch, apply, "Failed to settle expense", scope=scope,
                                 success_message="Expense settled")

    def _replace(self, expense: Expense):
        """Swap the refreshed copy into the list and the detail slot."""
        self.items = [expense if e == expense else e for e in self.items]
        if self.selected is None or self.selected == expense:
            self.selected = expense

    def edit(self, expense: Expense):
        """Populate the form from an existing expense."""
        self.form = ExpenseForm(
            amount=f"{expense.amount:.2f}" if expense.amount is not None else '',
            description=expense.description or '',
            category_id=expense.category_id,
            budget_id=expense.budget_id,
            transaction_date=(expense.transaction_date or date.today().isoformat())[:10],
            payment_method=_payment_method(expense.payment_method),
            is_recurring=bool(expense.is_recurring),
            notes=expense.notes or '',
        )
        if expense.recurring_frequency:
            try:
                self.form.recurring_frequency = RecurringFrequency(expense.recurring_frequency)
            except ValueError:
                self.logger.warning(f"Unknown recurring frequency {expense.recurring_frequency!r}")

    def clear_form(self):
        self.form = ExpenseForm()

    # Local queries
    def filter_by_status(self, status: ExpenseStatus) -> List[Expense]:
        return [e for e in self.items if e.status == status]

    def filter_by_category(self, category_id) -> List[Expense]:
        return [e for e in self.items if e.category_id == category_id
                or (e.category is not None and e.category.id == category_id)]

    def search(self, query) -> List[Expense]:
        query = (query or '').strip().lower()
        if not query:
            return list(self.items)
        return [
            e for e in self.items
            if any(query in (text or '').lower() for text in (e.description, e.payee, e.notes))
        ]

    def expenses_by_budget(self, budget_id) -> List[Expense]:
        return [e for e in self.items if e.budget_id == budget_id]

    @property
    def pending_total(self) -> float:
        return sum(e.amount or 0.0 for e in self.filter_by_status(ExpenseStatus.PENDING))


def _payment_method(value) -> Optional[PaymentMethod]:
    if not value:
        return None
    try:
        return PaymentMethod(value)
    except ValueError:
        return None
