"""Tests for household resources, legal documents, insurance and tax returns."""
import pytest

from shared.enums import LegalDocumentStatus, ResourceType
from shared.schemas import InsurancePolicyRequest, ResourceFile, ResourceRequest, TaxReturnRequest
from src.ledger_app.services.errors import NotFoundError, ServerError
from src.ledger_app.viewmodels.documents import DocumentsViewModel
from src.ledger_app.viewmodels.legal_documents import LegalDocumentsViewModel
from src.ledger_app.viewmodels.resources import ResourcesViewModel

RESOURCES = {
    'resources': [
        {'id': 1, 'name': 'Fire plan', 'document_type': 'fire_extinguisher', 'files_count': 2},
        {'id': 2, 'name': 'Lease', 'document_type': 'rental_agreement', 'notes': '<p>Renew in <b>May</b></p>'},
    ],
    'counts': {'total': 2, 'fire': 1, 'rental': 1},
}


class TestResources:

    @pytest.fixture
    def vm(self, fake_api):
        return ResourcesViewModel(fake_api)

    def test_load(self, vm, fake_api):
        fake_api.on('GET', '/resources', RESOURCES)
        assert vm.load_resources().result() is True
        assert [r.name for r in vm.resources] == ['Fire plan', 'Lease']
        assert vm.counts.fire == 1
        assert vm.resources[0].total_files_count == 2
        assert vm.resources[1].notes_text == 'Renew in May'

    def test_load_by_type(self, vm, fake_api):
        fake_api.on('GET', '/resources/type/home_warranty', {'resources': []})
        vm.load_resources(ResourceType.HOME_WARRANTY)
        assert fake_api.paths() == ['/resources/type/home_warranty']
        assert vm.resources == []

    def test_load_failure(self, vm, fake_api):
        fake_api.fail('GET', '/resources', RuntimeError())
        vm.load_resources()
        assert vm.error_message == 'Failed to load resources'

    def test_filter_by_type(self, vm, fake_api):
        fake_api.on('GET', '/resources', RESOURCES)
        vm.load_resources()
        assert [r.id for r in vm.filter_by_type(ResourceType.RENTAL_AGREEMENT)] == [2]

    def test_load_resource_files(self, vm, fake_api):
        fake_api.on('GET', '/resources/1', {
            'resource': {'id': 1, 'name': 'Fire plan'},
            'files': [{'id': 5, 'original_name': 'plan.pdf', 'download_url': '/files/5'}],
        })
        vm.load_resource(1)
        assert vm.selected.name == 'Fire plan'
        assert vm.files[0].display_name == 'plan.pdf'

    def test_load_resource_falls_back_to_embedded_files(self, vm, fake_api):
        fake_api.on('GET', '/resources/1', {
            'resource': {'id': 1, 'name': 'Fire plan', 'files': [{'id': 6, 'name': 'photo.jpg'}]},
        })
        vm.load_resource(1)
        assert [f.id for f in vm.files] == [6]

    def test_create_reloads_current_filter(self, vm, fake_api):
        fake_api.on('GET', '/resources/type/fire_extinguisher', RESOURCES)
        vm.load_resources(ResourceType.FIRE_EXTINGUISHER)
        fake_api.on('POST', '/resources', {'resource': {'id': 3, 'name': 'Garage'}})

        request = ResourceRequest(name='Garage', document_type=ResourceType.FIRE_EXTINGUISHER)
        assert vm.create_resource(request).result() is True

        assert fake_api.body_for('POST', '/resources') == {'name': 'Garage', 'document_type': 'fire_extinguisher'}
        assert fake_api.paths('GET') == ['/resources/type/fire_extinguisher'] * 2
        assert vm.success_message == 'Resource created'

    def test_update_reloads_detail(self, vm, fake_api):
        fake_api.on('PUT', '/resources/1', {})
        fake_api.on('GET', '/resources/1', {'resource': {'id': 1, 'name': 'Fire plan v2'}})
        vm.update_resource(1, ResourceRequest(name='Fire plan v2', document_type=ResourceType.OTHER))
        assert vm.selected.name == 'Fire plan v2'

    def test_delete(self, vm, fake_api):
        fake_api.on('GET', '/resources', RESOURCES)
        vm.load_resources()
        fake_api.on('DELETE', '/resources/1')
        vm.delete_resource(1)
        assert [r.id for r in vm.resources] == [2]

    def test_delete_failure(self, vm, fake_api):
        fake_api.fail('DELETE', '/resources/1', ServerError('Locked'))
        vm.delete_resource(1)
        assert vm.error_message == 'Locked'

    def test_download(self, vm, fake_api, tmp_path):
        path = vm.download(ResourceFile(id=5, name='plan.pdf', view_url='/files/5/view'), dest_dir=tmp_path)
        assert path == '/files/5/view'
        assert fake_api.calls == [('DOWNLOAD', '/files/5/view', tmp_path)]

    def test_download_without_link(self, vm):
        with pytest.raises(ValueError, match='plan.pdf'):
            vm.download(ResourceFile(id=5, name='plan.pdf'))


class TestLegalDocuments:

    @pytest.fixture
    def vm(self, fake_api):
        return LegalDocumentsViewModel(fake_api)

    def test_load_and_queries(self, vm, fake_api):
        fake_api.on('GET', '/legal-documents', {'legal_documents': [
            {'id': 1, 'name': 'Will', 'status': 'active', 'is_expiring_soon': False},
            {'id': 2, 'name': 'POA', 'status': 'active', 'is_expiring_soon': True},
            {'id': 3, 'name': 'Old trust', 'status': 'revoked'},
        ]})

        assert vm.load_documents().result() is True

        assert [d.id for d in vm.expiring_soon] == [2]
        assert [d.id for d in vm.active_documents()] == [1, 2]
        assert vm.documents[2].status == LegalDocumentStatus.REVOKED

    def test_load_failure(self, vm, fake_api):
        fake_api.fail('GET', '/legal-documents', RuntimeError())
        vm.load_documents()
        assert vm.error_message == 'Failed to load legal documents'

    def test_load_detail(self, vm, fake_api):
        fake_api.on('GET', '/legal-documents/1', {
            'legal_document': {'id': 1, 'name': 'Will', 'execution_date': '2021-03-07'},
            'files': [{'id': 8, 'name': 'will.pdf'}],
            'family_circle': {'id': 4, 'name': 'Riveras'},
        })
        vm.load_document(1)
        assert vm.selected.formatted_execution_date == 'Mar 7, 2021'
        assert vm.files[0].name == 'will.pdf'
        assert vm.family_circle.name == 'Riveras'

    def test_load_detail_not_found(self, vm, fake_api):
        fake_api.fail('GET', '/legal-documents/9', NotFoundError())
        vm.load_document(9)
        assert vm.error_message == 'Resource not found'

    def test_refresh_failure_silent(self, vm, fake_api):
        fake_api.fail('GET', '/legal-documents', ServerError('x'))
        assert vm.refresh_documents().result() is False
        assert vm.error_message is None


class TestHouseholdDocuments:

    @pytest.fixture
    def vm(self, fake_api):
        fake_api.on('GET', '/documents', {
            'insurance_policies': [
                {'id': 1, 'insurance_type': 'health', 'provider_name': 'Acme'},
                {'id': 2, 'insurance_type': 'pet', 'provider_name': 'Paws'},
            ],
            'tax_returns': [{'id': 7, 'tax_year': 2023}, {'id': 8, 'tax_year': 2022}],
        })
        return DocumentsViewModel(fake_api)

    def test_load_splits_lists(self, vm):
        assert vm.load_documents().result() is True
        assert [p.id for p in vm.insurance_policies] == [1, 2]
        assert [t.id for t in vm.tax_returns] == [7, 8]
        assert len(vm.items) == 4
        assert vm.insurance_policies[0].insurance_type_name == 'Health Insurance'

    def test_tax_returns_for_year(self, vm):
        vm.load_documents()
        assert [t.id for t in vm.tax_returns_for_year(2022)] == [8]

    def test_load_failure(self, fake_api):
        fake_api.fail('GET', '/documents', RuntimeError())
        vm = DocumentsViewModel(fake_api)
        vm.load_documents()
        assert vm.error_message == 'Failed to load documents'

    def test_load_policy(self, vm, fake_api):
        fake_api.on('GET', '/documents/insurance/1', {'insurance_policy': {'id': 1, 'provider_name': 'Acme'}})
        vm.load_policy(1)
        assert vm.selected_policy.provider_name == 'Acme'
        assert vm.selected is vm.selected_policy

    def test_create_policy_reloads(self, vm, fake_api):
        fake_api.on('POST', '/documents/insurance', {})
        request = InsurancePolicyRequest(insurance_type='auto', provider_name='Roadside', premium_amount=120.5)

        assert vm.create_policy(request).result() is True

        assert fake_api.body_for('POST', '/documents/insurance') == {
            'insurance_type': 'auto', 'provider_name': 'Roadside', 'premium_amount': 120.5,
        }
        assert fake_api.paths('GET') == ['/documents']
        assert vm.success_message == 'Insurance policy saved'

    def test_update_policy(self, vm, fake_api):
        fake_api.on('PUT', '/documents/insurance/1', {})
        fake_api.on('GET', '/documents/insurance/1', {'insurance_policy': {'id': 1, 'provider_name': 'Acme Plus'}})
        vm.update_policy(1, InsurancePolicyRequest(insurance_type='health', provider_name='Acme Plus'))
        assert fake_api.paths('GET') == ['/documents/insurance/1', '/documents']
        assert vm.selected_policy.provider_name == 'Acme Plus'

    def test_delete_policy(self, vm, fake_api):
        vm.load_documents()
        fake_api.on('GET', '/documents/insurance/1', {'insurance_policy': {'id': 1}})
        vm.load_policy(1)
        fake_api.on('DELETE', '/documents/insurance/1')

        vm.delete_policy(1)

        assert [p.id for p in vm.insurance_policies] == [2]
        assert len(vm.items) == 3
        assert vm.selected_policy is None

    def test_tax_return_crud(self, vm, fake_api):
        vm.load_documents()
        fake_api.on('POST', '/documents/tax-returns', {})
        vm.create_tax_return(TaxReturnRequest(tax_year=2024, filing_status='married_joint'))
        assert fake_api.body_for('POST', '/documents/tax-returns') == {
            'tax_year': 2024, 'filing_status': 'married_joint',
        }

        fake_api.on('DELETE', '/documents/tax-returns/7')
        vm.delete_tax_return(7)
        assert [t.id for t in vm.tax_returns] == [8]

    def test_tax_return_failure(self, vm, fake_api):
        fake_api.fail('GET', '/documents/tax-returns/3', RuntimeError())
        vm.load_tax_return(3)
        assert vm.error_message == 'Failed to load tax return'
