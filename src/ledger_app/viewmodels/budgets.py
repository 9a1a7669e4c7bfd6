"""Budgets list, detail and the create-budget wizard."""
from dataclasses import dataclass, field
from datetime import date
from typing import List

from shared.enums import BudgetPeriod, BudgetType
from shared.schemas import (
    Budget, BudgetCategoryRequest, BudgetDetailResponse, BudgetsListResponse, CreateBudgetRequest,
)
from shared.validation import ValidationError, Validator
from ..services import endpoints
from .base import ResourceViewModel


@dataclass
class CategoryAllocationForm:
    name: str = ''
    icon: str = '📁'
    color: str = '#6366F1'
    allocated_amount: str = ''


@dataclass
class BudgetForm:
    """Wizard fields: basics, then (envelope only) category allocations."""
    name: str = ''
    type: BudgetType = BudgetType.ENVELOPE
    period: BudgetPeriod = BudgetPeriod.MONTHLY
    total_amount: str = ''
    start_date: str = field(default_factory=lambda: date.today().isoformat())
    categories: List[CategoryAllocationForm] = field(default_factory=list)

    def allocated_total(self) -> float:
        total = 0.0
        for category in self.categories:
            if not category.name.strip():
                continue
            try:
                total += Validator.validate_non_negative(category.allocated_amount, category.name)
            except ValidationError:
                continue
        return total

    def to_request(self) -> CreateBudgetRequest:
        if not self.name or not self.name.strip():
            raise ValidationError("Please enter a budget name")
        total = Validator.validate_amount(self.total_amount)

        categories = None
        if self.type is BudgetType.ENVELOPE:
            categories = [
                BudgetCategoryRequest(
                    name=c.name.strip(),
                    icon=c.icon,
                    color=c.color,
                    allocated_amount=Validator.validate_non_negative(c.allocated_amount, c.name.strip()),
                )
                for c in self.categories
                if c.name and c.name.strip()
            ]

        return CreateBudgetRequest(
            name=self.name.strip(),
            type=self.type,
            period=self.period,
            total_amount=total,
            start_date=self.start_date,
            categories=categories,
        )


class BudgetsViewModel(ResourceViewModel):
    """State and operations for budget screens.

    Every mutation reloads from the server, since spent/remaining totals are
    computed there.
    """

    parse_error_message = "Failed to parse budget data"

    def __init__(self, api, dispatcher=None):
        super().__init__(api, dispatcher)
        self.allocations = []
        self.budget_expenses = []
        self.form = BudgetForm()

    @property
    def budgets(self) -> List[Budget]:
        return self.items

    def _fetch_list(self):
        payload = self.api.request(endpoints.budgets())
        return self.decode_wrapped_or_list(BudgetsListResponse, 'budgets', Budget, payload)

    def _apply_list(self, budgets):
        self.items = budgets

    def load_budgets(self, scope=None):
        return self.run_load(self._fetch_list, self._apply_list, "Failed to load budgets",
                             scope=scope, show_loading=not self.items)

    def refresh_budgets(self, scope=None):
        return self.run_refresh(self._fetch_list, self._apply_list, scope=scope)

    def load_budget(self, budget_id, scope=None):
        def fetch():
            return self.api.request(endpoints.budget(budget_id), model=BudgetDetailResponse)

        def apply(response: BudgetDetailResponse):
            self.selected = response.budget
            self.allocations = response.categories or []
            self.budget_expenses = response.expenses or []

        return self.run_load(fetch, apply, "Failed to load budget details", scope=scope)

    def create_budget(self, scope=None):
        try:
            body = self.form.to_request()
        except ValidationError as e:
            return self.fail_validation(e)

        def fetch():
            return self.api.request(endpoints.create_budget(), json=body)

        def apply(_):
            self.form = BudgetForm()
            self.load_budgets(scope=scope)

        return self.run_mutation(fetch, apply, "Failed to create budget", scope=scope,
                                 success_message="Budget created")

    def update_budget(self, budget_id, scope=None):
        try:
            body = self.form.to_request()
        except ValidationError as e:
            return self.fail_validation(e)

        def fetch():
            return self.api.request(endpoints.update_budget(budget_id), json=body)

        def apply(_):
            self.load_budget(budget_id, scope=scope)
            self.load_budgets(scope=scope)

        return self.run_mutation(fetch, apply, "Failed to update budget", scope=scope,
                                 success_message="Budget updated")

    def delete_budget(self, budget_id, scope=None):
        def fetch():
            self.api.request_empty(endpoints.delete_budget(budget_id))

        def apply(_):
            if self.selected is not None and self.selected.id == budget_id:
                self.selected = None
                self.allocations = []
                self.budget_expenses = []
            self.load_budgets(scope=scope)

        return self.run_mutation(fetch, apply, "Failed to delete budget", scope=scope)

    # Wizard helpers
    def add_category(self, name='', icon='📁', color='#6366F1', allocated_amount=''):
        self.form.categories.append(CategoryAllocationForm(name, icon, color, allocated_amount))
        self.notify()

    def remove_category(self, index):
        if 0 <= index < len(self.form.categories):
            del self.form.categories[index]
            self.notify()

    @property
    def unallocated_amount(self) -> float:
        try:
            total = Validator.validate_amount(self.form.total_amount)
        except ValidationError:
            return 0.0
        return total - self.form.allocated_total()

    @staticmethod
    def progress_for(budget) -> float:
        """Progress bar fraction for a budget, clamped to [0, 1]."""
        return budget.progress
