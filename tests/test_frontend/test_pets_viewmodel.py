"""Tests for the pets view-model."""
import pytest

from shared.schemas import PetMedicationRequest, PetVaccinationRequest
from src.ledger_app.services.errors import NotFoundError
from src.ledger_app.viewmodels.pets import PetsViewModel

PETS = {
    'pets': [
        {'id': 1, 'name': 'Biscuit', 'species': 'dog', 'weight': '12.4',
         'overdue_vaccinations': [{'id': 3, 'name': 'Rabies', 'status': 'overdue'}]},
        {'id': 2, 'name': 'Pepper', 'species': 'cat'},
        {'id': 3, 'name': 'Goldie', 'species': 'fish', 'is_passed_away': True},
    ],
    'total_pets': 3,
    'upcoming_vaccinations': 2,
    'overdue_vaccinations': 1,
}

DETAIL = {
    'pet': {'id': 1, 'name': 'Biscuit', 'species': 'dog'},
    'vaccinations': [
        {'id': 3, 'name': 'Rabies', 'status': 'overdue'},
        {'id': 4, 'name': 'Distemper', 'status': 'current'},
    ],
    'medications': [
        {'id': 8, 'name': 'Heartworm', 'is_active': True},
        {'id': 9, 'name': 'Antibiotic', 'is_active': False},
    ],
    'stats': {'overdue_vaccinations': 1, 'active_medications': 1},
}


@pytest.fixture
def vm(fake_api):
    return PetsViewModel(fake_api)


class TestLoad:

    def test_load_pets(self, vm, fake_api):
        fake_api.on('GET', '/pets', PETS)

        assert vm.load_pets().result() is True

        assert [p.name for p in vm.pets] == ['Biscuit', 'Pepper', 'Goldie']
        assert vm.pets[0].weight == 12.4
        assert vm.total_pets == 3
        assert vm.upcoming_vaccinations_count == 2
        assert vm.overdue_vaccinations_count == 1

    def test_counts_default_when_missing(self, vm, fake_api):
        fake_api.on('GET', '/pets', {'pets': PETS['pets'][:2]})
        vm.load_pets()
        assert vm.total_pets == 2
        assert vm.overdue_vaccinations_count == 0

    def test_load_failure(self, vm, fake_api):
        fake_api.fail('GET', '/pets', RuntimeError())
        vm.load_pets()
        assert vm.error_message == 'Failed to load pets'

    def test_malformed_pet(self, vm, fake_api):
        fake_api.on('GET', '/pets', {'pets': [{'id': 1}]})
        vm.load_pets()
        assert vm.error_message == 'Failed to parse pet data'

    def test_load_pet_detail(self, vm, fake_api):
        fake_api.on('GET', '/pets', PETS)
        vm.load_pets()
        fake_api.on('GET', '/pets/1', DETAIL)

        vm.load_pet(1)

        assert vm.selected.name == 'Biscuit'
        assert [v.name for v in vm.overdue_vaccinations] == ['Rabies']
        assert [m.name for m in vm.active_medications] == ['Heartworm']
        assert vm.stats.overdue_vaccinations == 1
        # detail replaces the list copy, which carried no overdue records
        assert vm.pets[0].needs_attention is False

    def test_load_pet_not_found(self, vm, fake_api):
        fake_api.fail('GET', '/pets/9', NotFoundError())
        vm.load_pet(9)
        assert vm.error_message == 'Resource not found'


class TestQueries:

    @pytest.fixture(autouse=True)
    def loaded(self, vm, fake_api):
        fake_api.on('GET', '/pets', PETS)
        vm.load_pets()

    def test_living_pets(self, vm):
        assert [p.id for p in vm.living_pets] == [1, 2]

    def test_needing_attention(self, vm):
        assert [p.id for p in vm.pets_needing_attention] == [1]


class TestRecords:

    @pytest.fixture(autouse=True)
    def loaded(self, vm, fake_api):
        fake_api.on('GET', '/pets', PETS)
        fake_api.on('GET', '/pets/1', DETAIL)
        vm.load_pets()
        vm.load_pet(1)

    def test_add_vaccination_reloads_pet(self, vm, fake_api):
        fake_api.on('POST', '/pets/1/vaccinations', {})
        request = PetVaccinationRequest(name='Bordetella', next_due_date='2025-06-01')

        assert vm.add_vaccination(1, request).result() is True

        assert fake_api.body_for('POST', '/pets/1/vaccinations') == {
            'name': 'Bordetella', 'next_due_date': '2025-06-01',
        }
        assert fake_api.paths('GET').count('/pets/1') == 2
        assert vm.success_message == 'Vaccination added'

    def test_update_vaccination(self, vm, fake_api):
        fake_api.on('PUT', '/pets/1/vaccinations/3', {})
        vm.update_vaccination(1, 3, PetVaccinationRequest(name='Rabies', administered_date='2024-05-01'))
        assert vm.success_message == 'Vaccination updated'

    def test_delete_vaccination_has_no_success_message(self, vm, fake_api):
        fake_api.on('DELETE', '/pets/1/vaccinations/4')
        assert vm.delete_vaccination(1, 4).result() is True
        assert vm.success_message is None

    def test_add_medication_failure(self, vm, fake_api):
        fake_api.fail('POST', '/pets/1/medications', RuntimeError())
        vm.add_medication(1, PetMedicationRequest(name='Heartworm', dosage='1 chew'))
        assert vm.error_message == 'Failed to add medication'
        assert fake_api.paths('GET').count('/pets/1') == 1

    def test_update_and_delete_medication(self, vm, fake_api):
        fake_api.on('PUT', '/pets/1/medications/8', {})
        fake_api.on('DELETE', '/pets/1/medications/9')
        vm.update_medication(1, 8, PetMedicationRequest(name='Heartworm', is_active=False))
        assert vm.success_message == 'Medication updated'
        vm.delete_medication(1, 9)
        assert fake_api.paths('DELETE') == ['/pets/1/medications/9']

    def test_delete_pet_clears_detail(self, vm, fake_api):
        fake_api.on('DELETE', '/pets/1')

        vm.delete_pet(1)

        assert [p.id for p in vm.pets] == [2, 3]
        assert vm.selected is None
        assert vm.vaccinations == []
        assert vm.medications == []
        assert vm.stats is None
