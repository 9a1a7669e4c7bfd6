"""Pets with their vaccination and medication records."""
from typing import List

from shared.schemas import Pet, PetDetailResponse, PetMedicationRequest, PetsResponse, PetVaccinationRequest
from ..services import endpoints
from .base import ResourceViewModel


class PetsViewModel(ResourceViewModel):
    """Pet list and detail; record writes reload the pet so derived counts stay in step."""

    parse_error_message = "Failed to parse pet data"

    def __init__(self, api, dispatcher=None):
        super().__init__(api, dispatcher)
        self.total_pets = 0
        self.upcoming_vaccinations_count = 0
        self.overdue_vaccinations_count = 0
        self.vaccinations = []
        self.medications = []
        self.stats = None

    @property
    def pets(self) -> List[Pet]:
        return self.items

    def _fetch_list(self):
        return self.api.request(endpoints.pets(), model=PetsResponse)

    def _apply_list(self, response: PetsResponse):
        self.items = response.pets or []
        self.total_pets = response.total_pets or len(self.items)
        self.upcoming_vaccinations_count = response.upcoming_vaccinations or 0
        self.overdue_vaccinations_count = response.overdue_vaccinations or 0

    def load_pets(self, scope=None):
        return self.run_load(self._fetch_list, self._apply_list, "Failed to load pets",
                             scope=scope, show_loading=not self.items)

    def refresh_pets(self, scope=None):
        return self.run_refresh(self._fetch_list, self._apply_list, scope=scope)

    def load_pet(self, pet_id, scope=None):
        def fetch():
            return self.api.request(endpoints.pet(pet_id), model=PetDetailResponse)

        def apply(response: PetDetailResponse):
            self.selected = response.pet
            self.vaccinations = response.vaccinations or []
            self.medications = response.medications or []
            self.stats = response.stats
            self.items = [response.pet if p == response.pet else p for p in self.items]

        return self.run_load(fetch, apply, "Failed to load pet", scope=scope)

    def delete_pet(self, pet_id, scope=None):
        def fetch():
            self.api.request_empty(endpoints.delete_pet(pet_id))

        def apply(_):
            self.items = [p for p in self.items if p.id != pet_id]
            if self.selected is not None and self.selected.id == pet_id:
                self.selected = None
                self.vaccinations = []
                self.medications = []
                self.stats = None

        return self.run_mutation(fetch, apply, "Failed to delete pet", scope=scope)

    # Vaccinations
    def add_vaccination(self, pet_id, request: PetVaccinationRequest, scope=None):
        return self._write(pet_id, lambda: self.api.request(endpoints.add_pet_vaccination(pet_id), json=request),
                           "Failed to add vaccination", "Vaccination added", scope)

    def update_vaccination(self, pet_id, vaccination_id, request: PetVaccinationRequest, scope=None):
        endpoint = endpoints.update_pet_vaccination(pet_id, vaccination_id)
        return self._write(pet_id, lambda: self.api.request(endpoint, json=request),
                           "Failed to update vaccination", "Vaccination updated", scope)

    def delete_vaccination(self, pet_id, vaccination_id, scope=None):
        endpoint = endpoints.delete_pet_vaccination(pet_id, vaccination_id)
        return self._write(pet_id, lambda: self.api.request_empty(endpoint),
                           "Failed to delete vaccination", None, scope)

    # Medications
    def add_medication(self, pet_id, request: PetMedicationRequest, scope=None):
        return self._write(pet_id, lambda: self.api.request(endpoints.add_pet_medication(pet_id), json=request),
                           "Failed to add medication", "Medication added", scope)

    def update_medication(self, pet_id, medication_id, request: PetMedicationRequest, scope=None):
        endpoint = endpoints.update_pet_medication(pet_id, medication_id)
        return self._write(pet_id, lambda: self.api.request(endpoint, json=request),
                           "Failed to update medication", "Medication updated", scope)

    def delete_medication(self, pet_id, medication_id, scope=None):
        endpoint = endpoints.delete_pet_medication(pet_id, medication_id)
        return self._write(pet_id, lambda: self.api.request_empty(endpoint),
                           "Failed to delete medication", None, scope)

    def _write(self, pet_id, fetch, fallback, success_message, scope):
        def apply(_):
            self.load_pet(pet_id, scope=scope)

        return self.run_mutation(fetch, apply, fallback, scope=scope, success_message=success_message)

    # Local queries
    @property
    def living_pets(self) -> List[Pet]:
        return [p for p in self.items if not p.is_passed_away]

    @property
    def pets_needing_attention(self) -> List[Pet]:
        return [p for p in self.items if p.needs_attention]

    @property
    def active_medications(self):
        return [m for m in self.medications if m.is_active]

    @property
    def overdue_vaccinations(self):
        return [v for v in self.vaccinations if v.is_overdue]
