"""Pytest configuration and fixtures for Family Ledger tests."""
import json
from unittest.mock import MagicMock

import pytest
import requests

from shared.schemas import parse_list, parse_model
from src.ledger_app.services.api_service import APIService
from src.ledger_app.services.errors import DecodingError


def make_response(status_code=200, body=None, raw=None):
    """Build a fake ``requests.Response`` with a JSON (or raw) body."""
    response = MagicMock(spec=requests.Response)
    response.status_code = status_code
    if raw is not None:
        response.content = raw
        response.json.side_effect = ValueError("not json")
    elif body is None:
        response.content = b''
        response.json.side_effect = ValueError("empty")
    else:
        response.content = json.dumps(body).encode()
        response.json.return_value = body
    return response


def envelope(data=None, success=True, message="", errors=None):
    return {'success': success, 'message': message, 'data': data, 'errors': errors}


class FakeAPI:
    """Stands in for APIService in view-model tests.

    Routes map ``(method, path)`` to a payload, or to an exception to raise.
    Decoding with ``model`` behaves like the real client.
    """

    def __init__(self):
        self.routes = {}
        self.calls = []

    def on(self, method, path, payload=None):
        self.routes[(method, path)] = payload
        return self

    def fail(self, method, path, error):
        self.routes[(method, path)] = error
        return self

    def _dispatch(self, endpoint, json_body):
        if hasattr(json_body, 'to_payload'):
            json_body = json_body.to_payload()
        self.calls.append((endpoint.method, endpoint.path, json_body))
        key = (endpoint.method, endpoint.path)
        if key not in self.routes:
            raise AssertionError(f"Unexpected request {key}")
        payload = self.routes[key]
        if isinstance(payload, Exception):
            raise payload
        return payload

    def request(self, endpoint, json=None, params=None, model=None, many=False):
        payload = self._dispatch(endpoint, json)
        if model is None:
            return payload
        result = parse_list(model, payload) if many else parse_model(model, payload)
        if not result.ok:
            raise DecodingError("; ".join(result.errors), result.errors)
        return result.value

    def request_empty(self, endpoint, json=None):
        self._dispatch(endpoint, json)

    def download_file(self, url, dest_dir=None):
        self.calls.append(('DOWNLOAD', url, dest_dir))
        return url

    def paths(self, method=None):
        return [path for m, path, _ in self.calls if method is None or m == method]

    def body_for(self, method, path):
        for m, p, body in self.calls:
            if m == method and p == path:
                return body
        return None


@pytest.fixture
def fake_api():
    return FakeAPI()


@pytest.fixture
def mock_session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def api_service(mock_session):
    """API client pointed at a fake host with an injected session."""
    return APIService('http://test.local/api/v1/', timeout=5.0, session=mock_session)


@pytest.fixture
def expense_payload():
    return {
        'id': 1,
        'description': 'Groceries',
        'amount': '82.50',
        'status': 'pending',
        'category_id': 3,
        'budget_id': 7,
        'payee': 'Corner Market',
        'transaction_date': '2024-01-05T10:00:00Z',
    }


@pytest.fixture
def member_payload():
    return {
        'id': 42,
        'first_name': 'Maya',
        'last_name': 'Lopez',
        'age': 9,
        'is_minor': True,
        'relationship': 'child',
        'medical_info': {'blood_type': 'o+'},
        'social_security': {'id': 5, 'document_type': 'social_security', 'document_number': '123456789'},
        'contacts': [
            {'id': 1, 'name': 'Ana', 'is_emergency_contact': True},
            {'id': 2, 'name': 'Ben', 'is_emergency_contact': False},
        ],
        'allergies': [{'id': 9, 'allergen_name': 'Peanuts', 'severity': 'severe'}],
    }
