"""Insurance policies and tax returns."""
from typing import List, Optional

from shared.schemas import (
    DocumentsResponse, InsurancePolicy, InsurancePolicyRequest, InsurancePolicyResponse, TaxReturn,
    TaxReturnRequest, TaxReturnResponse,
)
from ..services import endpoints
from .base import ResourceViewModel


class DocumentsViewModel(ResourceViewModel):
    """Two parallel lists behind one screen; ``items`` holds both for state derivation."""

    parse_error_message = "Failed to parse document data"

    def __init__(self, api, dispatcher=None):
        super().__init__(api, dispatcher)
        self.insurance_policies: List[InsurancePolicy] = []
        self.tax_returns: List[TaxReturn] = []
        self.selected_policy: Optional[InsurancePolicy] = None
        self.selected_tax_return: Optional[TaxReturn] = None

    def _fetch_all(self):
        return self.api.request(endpoints.documents(), model=DocumentsResponse)

    def _apply_all(self, response: DocumentsResponse):
        self.insurance_policies = response.insurance_policies or []
        self.tax_returns = response.tax_returns or []
        self.items = [*self.insurance_policies, *self.tax_returns]

    def load_documents(self, scope=None):
        return self.run_load(self._fetch_all, self._apply_all, "Failed to load documents",
                             scope=scope, show_loading=not self.items)

    def refresh_documents(self, scope=None):
        return self.run_refresh(self._fetch_all, self._apply_all, scope=scope)

    # Insurance
    def load_policy(self, policy_id, scope=None):
        def fetch():
            return self.api.request(endpoints.insurance_policy(policy_id), model=InsurancePolicyResponse)

        def apply(response):
            self.selected_policy = response.insurance_policy
            self.selected = response.insurance_policy

        return self.run_load(fetch, apply, "Failed to load insurance policy", scope=scope)

    def create_policy(self, request: InsurancePolicyRequest, scope=None):
        def fetch():
            return self.api.request(endpoints.create_insurance_policy(), json=request)

        return self.run_mutation(fetch, lambda _: self.load_documents(scope=scope),
                                 "Failed to save insurance policy", scope=scope,
                                 success_message="Insurance policy saved")

    def update_policy(self, policy_id, request: InsurancePolicyRequest, scope=None):
        def fetch():
            return self.api.request(endpoints.update_insurance_policy(policy_id), json=request)

        def apply(_):
            self.load_policy(policy_id, scope=scope)
            self.load_documents(scope=scope)

        return self.run_mutation(fetch, apply, "Failed to update insurance policy", scope=scope,
                                 success_message="Insurance policy updated")

    def delete_policy(self, policy_id, scope=None):
        def fetch():
            self.api.request_empty(endpoints.delete_insurance_policy(policy_id))

        def apply(_):
            self.insurance_policies = [p for p in self.insurance_policies if p.id != policy_id]
            self.items = [*self.insurance_policies, *self.tax_returns]
            if self.selected_policy is not None and self.selected_policy.id == policy_id:
                self.selected_policy = None
                self.selected = None

        return self.run_mutation(fetch, apply, "Failed to delete insurance policy", scope=scope)

    # Tax returns
    def load_tax_return(self, tax_return_id, scope=None):
        def fetch():
            return self.api.request(endpoints.tax_return(tax_return_id), model=TaxReturnResponse)

        def apply(response):
            self.selected_tax_return = response.tax_return
            self.selected = response.tax_return

        return self.run_load(fetch, apply, "Failed to load tax return", scope=scope)

    def create_tax_return(self, request: TaxReturnRequest, scope=None):
        def fetch():
            return self.api.request(endpoints.create_tax_return(), json=request)

        return self.run_mutation(fetch, lambda _: self.load_documents(scope=scope),
                                 "Failed to save tax return", scope=scope,
                                 success_message="Tax return saved")

    def update_tax_return(self, tax_return_id, request: TaxReturnRequest, scope=None):
        def fetch():
            return self.api.request(endpoints.update_tax_return(tax_return_id), json=request)

        def apply(_):
            self.load_tax_return(tax_return_id, scope=scope)
            self.load_documents(scope=scope)

        return self.run_mutation(fetch, apply, "Failed to update tax return", scope=scope,
                                 success_message="Tax return updated")

    def delete_tax_return(self, tax_return_id, scope=None):
        def fetch():
            self.api.request_empty(endpoints.delete_tax_return(tax_return_id))

        def apply(_):
            self.tax_returns = [t for t in self.tax_returns if t.id != tax_return_id]
            self.items = [*self.insurance_policies, *self.tax_returns]
            if self.selected_tax_return is not None and self.selected_tax_return.id == tax_return_id:
                self.selected_tax_return = None
                self.selected = None

        return self.run_mutation(fetch, apply, "Failed to delete tax return", scope=scope)

    def tax_returns_for_year(self, year) -> List[TaxReturn]:
        return [t for t in self.tax_returns if t.tax_year == year]
