"""Tests for the REST API client."""
from unittest.mock import MagicMock, Mock

import pytest
import requests

from shared.schemas import CreateExpenseRequest, Expense, ExpenseCategory, ExpensesResponse
from src.ledger_app.services import endpoints
from src.ledger_app.services.api_service import APIService
from src.ledger_app.services.errors import (
    APIError, DecodingError, ForbiddenError, InvalidDataError, InvalidResponseError, NotFoundError,
    ServerError, UnauthorizedError, UnknownStatusError, ValidationFailedError,
)
from tests.conftest import envelope, make_response


class TestRequestBuilding:

    def test_url_headers_and_timeout(self, api_service, mock_session):
        auth = Mock()
        auth.get_headers.return_value = {'Authorization': 'Bearer tok'}
        api_service.auth_service = auth
        mock_session.request.return_value = make_response(200, envelope({'expenses': []}))

        api_service.request(endpoints.expenses(status='pending'))

        method, url = mock_session.request.call_args.args
        kwargs = mock_session.request.call_args.kwargs
        assert method == 'GET'
        assert url == 'http://test.local/api/v1/expenses'
        assert kwargs['headers']['Authorization'] == 'Bearer tok'
        assert kwargs['headers']['Content-Type'] == 'application/json'
        assert kwargs['params'] == {'status': 'pending'}
        assert kwargs['timeout'] == 5.0

    def test_public_endpoint_has_no_token(self, api_service, mock_session):
        auth = Mock()
        auth.get_headers.return_value = {'Authorization': 'Bearer tok'}
        api_service.auth_service = auth
        mock_session.request.return_value = make_response(200, envelope({}))

        api_service.request(endpoints.login(), json={'email': 'a@b.co'})

        kwargs = mock_session.request.call_args.kwargs
        assert 'Authorization' not in kwargs['headers']
        assert kwargs['json'] == {'email': 'a@b.co'}

    def test_request_model_serialized(self, api_service, mock_session):
        mock_session.request.return_value = make_response(201, envelope({'expense': None}))

        api_service.request(endpoints.create_expense(),
                            json=CreateExpenseRequest(description='Milk', amount=2, transaction_date='2024-01-01'))

        sent = mock_session.request.call_args.kwargs['json']
        assert sent['description'] == 'Milk'
        assert 'budget_id' not in sent

    def test_search_query_sent_as_params(self, api_service, mock_session):
        mock_session.request.return_value = make_response(200, envelope({'people': []}))

        api_service.request(endpoints.search_people('rosa'))

        _, url = mock_session.request.call_args.args
        assert url == 'http://test.local/api/v1/people/search'
        assert mock_session.request.call_args.kwargs['params'] == {'q': 'rosa'}

    def test_path_parameters(self):
        assert endpoints.assets_by_category('vehicle').path == '/assets/category/vehicle'
        assert endpoints.shopping_list(3).path == '/shopping/3'


class TestEnvelope:

    def test_success_returns_data(self, api_service, mock_session):
        mock_session.request.return_value = make_response(200, envelope({'id': 3}))
        assert api_service.request(endpoints.expense(3)) == {'id': 3}

    def test_decodes_into_model(self, api_service, mock_session):
        mock_session.request.return_value = make_response(200, envelope({'expenses': [{'id': 1}]}))
        result = api_service.request(endpoints.expenses(), model=ExpensesResponse)
        assert result.expenses == [Expense(id=1)]

    def test_bare_body_used_directly(self, api_service, mock_session):
        mock_session.request.return_value = make_response(200, [{'id': 1, 'name': 'Food'}])
        result = api_service.request(endpoints.expense_categories(), model=ExpenseCategory, many=True)
        assert result[0].name == 'Food'

    def test_failed_envelope_with_errors(self, api_service, mock_session):
        body = envelope(success=False, errors={'amount': ['Amount is required']})
        mock_session.request.return_value = make_response(200, body)
        with pytest.raises(ValidationFailedError) as exc:
            api_service.request(endpoints.create_expense())
        assert exc.value.description == 'Amount is required'

    def test_failed_envelope_message(self, api_service, mock_session):
        mock_session.request.return_value = make_response(200, envelope(success=False, message='Budget locked'))
        with pytest.raises(ServerError, match='Budget locked'):
            api_service.request(endpoints.budgets())

    def test_decoding_failure(self, api_service, mock_session):
        mock_session.request.return_value = make_response(200, envelope({'id': 'abc'}))
        with pytest.raises(DecodingError) as exc:
            api_service.request(endpoints.expense(1), model=Expense)
        assert exc.value.description.startswith('Failed to process response: ')
        assert exc.value.errors

    def test_non_json_body(self, api_service, mock_session):
        mock_session.request.return_value = make_response(200, raw=b'<html>oops</html>')
        with pytest.raises(InvalidResponseError):
            api_service.request(endpoints.dashboard())
        with pytest.raises(DecodingError):
            api_service.request(endpoints.expense(1), model=Expense)

    def test_request_empty_ignores_body(self, api_service, mock_session):
        mock_session.request.return_value = make_response(204)
        assert api_service.request_empty(endpoints.delete_expense(1)) is None


class TestStatusMapping:

    def test_401_authed_calls_handler(self, mock_session):
        on_unauthorized = Mock()
        api = APIService('http://test.local/api/v1', session=mock_session, on_unauthorized=on_unauthorized)
        mock_session.request.return_value = make_response(401, {'message': 'Unauthenticated.'})

        with pytest.raises(UnauthorizedError) as exc:
            api.request(endpoints.dashboard())

        on_unauthorized.assert_called_once()
        assert exc.value.description == 'Session expired. Please login again.'

    def test_401_login_is_server_error(self, mock_session):
        on_unauthorized = Mock()
        api = APIService('http://test.local/api/v1', session=mock_session, on_unauthorized=on_unauthorized)
        mock_session.request.return_value = make_response(401, {'message': 'Wrong password'})

        with pytest.raises(ServerError, match='Wrong password'):
            api.request(endpoints.login())
        on_unauthorized.assert_not_called()

    def test_401_login_default_message(self, api_service, mock_session):
        mock_session.request.return_value = make_response(401)
        with pytest.raises(ServerError, match='Invalid credentials'):
            api_service.request(endpoints.login())

    @pytest.mark.parametrize('status,error,description', [
        (403, ForbiddenError, "You don't have permission to access this resource"),
        (404, NotFoundError, 'Resource not found'),
        (422, InvalidDataError, 'Invalid data received'),
        (500, ServerError, 'Server error occurred'),
        (503, ServerError, 'Server error occurred'),
        (418, UnknownStatusError, 'Unknown error occurred (Status: 418)'),
    ])
    def test_status_codes(self, api_service, mock_session, status, error, description):
        mock_session.request.return_value = make_response(status)
        with pytest.raises(error) as exc:
            api_service.request(endpoints.expenses())
        assert isinstance(exc.value, APIError)
        assert exc.value.description == description

    def test_422_with_errors(self, api_service, mock_session):
        body = {'message': 'Invalid', 'errors': {'name': ['Name is required'], 'amount': ['Too small']}}
        mock_session.request.return_value = make_response(422, body)
        with pytest.raises(ValidationFailedError) as exc:
            api_service.request(endpoints.create_budget())
        assert exc.value.description == 'Name is required\nToo small'
        assert exc.value.errors['amount'] == ['Too small']

    def test_500_with_message(self, api_service, mock_session):
        mock_session.request.return_value = make_response(500, {'message': 'Database unavailable'})
        with pytest.raises(ServerError, match='Database unavailable'):
            api_service.request(endpoints.expenses())

    def test_network_errors_propagate(self, api_service, mock_session):
        mock_session.request.side_effect = requests.exceptions.ConnectionError('refused')
        with pytest.raises(requests.exceptions.ConnectionError):
            api_service.request(endpoints.expenses())
        assert mock_session.request.call_count == 1


class TestDownload:

    def test_streams_to_disk(self, api_service, mock_session, tmp_path):
        response = MagicMock()
        response.status_code = 200
        response.iter_content.return_value = [b'abc', b'', b'def']
        mock_session.get.return_value.__enter__.return_value = response

        path = api_service.download_file('https://files.example.com/docs/will%20v2.pdf', dest_dir=tmp_path)

        assert path == tmp_path / 'will v2.pdf'
        assert path.read_bytes() == b'abcdef'
        assert mock_session.get.call_args.kwargs['headers'] == {}

    def test_relative_url_uses_base_and_auth(self, api_service, mock_session, tmp_path):
        auth = Mock()
        auth.get_headers.return_value = {'Authorization': 'Bearer tok'}
        api_service.auth_service = auth
        response = MagicMock()
        response.status_code = 200
        response.iter_content.return_value = [b'x']
        mock_session.get.return_value.__enter__.return_value = response

        api_service.download_file('/resources/1/files/2/download', dest_dir=tmp_path)

        assert mock_session.get.call_args.args[0] == 'http://test.local/api/v1/resources/1/files/2/download'
        assert mock_session.get.call_args.kwargs['headers'] == {'Authorization': 'Bearer tok'}

    def test_missing_file(self, api_service, mock_session, tmp_path):
        response = MagicMock()
        response.status_code = 404
        mock_session.get.return_value.__enter__.return_value = response
        with pytest.raises(NotFoundError):
            api_service.download_file('https://files.example.com/x.pdf', dest_dir=tmp_path)
