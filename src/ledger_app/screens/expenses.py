"""Expense and budget screens."""
from ..services.network_queue import gather
from .base import Screen


class ExpensesListScreen(Screen):
    """Expense list with summary stats; the form pickers load alongside."""

    def load(self):
        return gather([
            self.view_model.load_expenses(scope=self.scope),
            self.view_model.load_categories(scope=self.scope),
            self.view_model.load_budgets(scope=self.scope),
        ])

    def refresh(self):
        return self.view_model.refresh_expenses(scope=self.scope)

    def on_search(self, query):
        return self.view_model.search(query)

    def on_save(self):
        return self.view_model.create_expense(scope=self.scope)


class ExpenseDetailScreen(Screen):

    def __init__(self, view_model, expense_id):
        super().__init__(view_model)
        self.expense_id = expense_id

    def load(self):
        return self.view_model.load_expense(self.expense_id, scope=self.scope)

    def on_settle(self):
        return self.view_model.settle_expense(self.expense_id, scope=self.scope)

    def on_delete(self):
        return self.view_model.delete_expense(self.expense_id, scope=self.scope)


class BudgetDetailScreen(Screen):

    def __init__(self, view_model, budget_id):
        super().__init__(view_model)
        self.budget_id = budget_id

    def load(self):
        return self.view_model.load_budget(self.budget_id, scope=self.scope)

    @property
    def progress(self):
        budget = self.view_model.selected
        return budget.progress if budget is not None else 0.0

    def on_delete(self):
        return self.view_model.delete_budget(self.budget_id, scope=self.scope)
