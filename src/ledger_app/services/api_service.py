"""API service for HTTP client abstraction."""
import logging
import os
from pathlib import Path
from urllib.parse import unquote, urlparse

import requests

from shared.schemas import APIEnvelope, parse_list, parse_model
from .errors import (
    DecodingError, ForbiddenError, InvalidResponseError, InvalidURLError, NotFoundError,
    ServerError, UnauthorizedError, UnknownStatusError, ValidationFailedError, InvalidDataError,
)

DEFAULT_BASE_URL = 'http://127.0.0.1:8000/api/v1'


class APIService:
    """HTTP client for the backend REST API.

    Builds requests from ``Endpoint`` descriptors, attaches the bearer token
    for authenticated routes, maps status codes to typed ``APIError``s and
    unwraps the ``{success, message, data, errors}`` envelope. Requests are
    sent once; there is no retry.

    Network-level failures (timeouts, refused connections) propagate as the
    underlying ``requests`` exceptions.
    """

    def __init__(self, base_url=DEFAULT_BASE_URL, timeout=30.0, auth_service=None, session=None,
                 on_unauthorized=None, downloads_dir=None):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.auth_service = auth_service
        self.session = session or requests.Session()
        self.on_unauthorized = on_unauthorized
        self.downloads_dir = downloads_dir
        self.logger = logging.getLogger(self.__class__.__name__)

    def _get_auth_headers(self):
        """Authorization header from the auth service, if a token is held."""
        if self.auth_service:
            return self.auth_service.get_headers()
        return {}

    def _build_headers(self, endpoint):
        headers = {
            'Content-Type': 'application/json',
            'Accept': 'application/json',
        }
        if endpoint.requires_auth:
            headers.update(self._get_auth_headers())
        return headers

    def _build_url(self, path):
        if not path.startswith('/'):
            raise InvalidURLError()
        return f"{self.base_url}{path}"

    def _send(self, endpoint, json=None, params=None):
        url = self._build_url(endpoint.path)
        query = dict(endpoint.params or {})
        query.update(params or {})

        self.logger.debug(f"{endpoint.method} {url}")
        try:
            response = self.session.request(
                endpoint.method,
                url,
                headers=self._build_headers(endpoint),
                json=json,
                params=query or None,
                timeout=self.timeout,
            )
        except (requests.exceptions.InvalidURL, requests.exceptions.MissingSchema) as e:
            raise InvalidURLError() from e
        self.logger.debug(f"{endpoint.method} {url} -> {response.status_code}")
        return response

    @staticmethod
    def _parse_body(response):
        """JSON body or None when the body is empty or not JSON."""
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return None

    @staticmethod
    def _body_message(body):
        if isinstance(body, dict):
            message = body.get('message')
            if isinstance(message, str) and message:
                return message
        return None

    @staticmethod
    def _body_errors(body):
        if isinstance(body, dict) and isinstance(body.get('errors'), dict) and body['errors']:
            return body['errors']
        return None

    def _check_status(self, endpoint, response, body):
        status = response.status_code
        if 200 <= status < 300:
            return

        if status == 401:
            if endpoint.requires_auth:
                self.logger.warning(f"Unauthorized response from {endpoint.path}")
                if self.on_unauthorized:
                    self.on_unauthorized()
                raise UnauthorizedError()
            raise ServerError(self._body_message(body) or "Invalid credentials", status_code=status)
        if status == 403:
            raise ForbiddenError()
        if status == 404:
            raise NotFoundError()
        if status == 422:
            errors = self._body_errors(body)
            if errors:
                raise ValidationFailedError(errors, status_code=status)
            raise InvalidDataError(status_code=status)
        if 500 <= status < 600:
            raise ServerError(self._body_message(body) or "Server error occurred", status_code=status)
        raise UnknownStatusError(status)

    def _unwrap(self, body):
        """Return the payload, unwrapping an envelope when the body is one."""
        if isinstance(body, dict) and isinstance(body.get('success'), bool):
            envelope = APIEnvelope.model_validate(body)
            if envelope.success:
                return envelope.data
            if envelope.errors:
                raise ValidationFailedError(envelope.errors)
            raise ServerError(envelope.message or None)
        return body

    def _decode(self, payload, model, many):
        result = parse_list(model, payload) if many else parse_model(model, payload)
        if not result.ok:
            self.logger.error(f"Failed to decode {model.__name__}: {result.errors}")
            raise DecodingError("; ".join(result.errors), result.errors)
        if result.errors:
            self.logger.warning(f"Dropped malformed sections decoding {model.__name__}: {result.errors}")
        return result.value

    def request(self, endpoint, json=None, params=None, model=None, many=False):
        """Send ``endpoint`` and return the unwrapped payload.

        Args:
            endpoint: Route descriptor from ``endpoints``
            json: Request body (dict or pydantic request model)
            params: Extra query parameters
            model: Optional schema class the payload is decoded into
            many: Decode the payload as a list of ``model``

        Raises:
            APIError: For non-2xx statuses, failed envelopes and undecodable bodies
        """
        if hasattr(json, 'to_payload'):
            json = json.to_payload()
        response = self._send(endpoint, json=json, params=params)
        body = self._parse_body(response)
        self._check_status(endpoint, response, body)

        if response.content and body is None:
            if model is not None:
                raise DecodingError("response body is not valid JSON")
            raise InvalidResponseError()

        payload = self._unwrap(body)
        if model is None:
            return payload
        return self._decode(payload, model, many)

    def request_empty(self, endpoint, json=None):
        """Send ``endpoint`` and discard any response body."""
        if hasattr(json, 'to_payload'):
            json = json.to_payload()
        response = self._send(endpoint, json=json)
        body = self._parse_body(response)
        self._check_status(endpoint, response, body)
        if isinstance(body, dict) and body.get('success') is False:
            self._unwrap(body)

    def download_file(self, url, dest_dir=None):
        """Stream an attachment to disk and return the saved path.

        Relative URLs are resolved against the base URL and carry the auth
        header; absolute URLs (e.g. pre-signed storage links) are fetched as-is.
        """
        if url.startswith('/'):
            full_url = f"{self.base_url}{url}"
            headers = self._get_auth_headers()
        else:
            parsed = urlparse(url)
            if parsed.scheme not in ('http', 'https') or not parsed.netloc:
                raise InvalidURLError()
            full_url = url
            headers = {}

        target_dir = Path(dest_dir or self.downloads_dir or os.getcwd())
        target_dir.mkdir(parents=True, exist_ok=True)
        filename = unquote(os.path.basename(urlparse(full_url).path)) or 'download'
        target = target_dir / filename

        self.logger.debug(f"Downloading {full_url} -> {target}")
        with self.session.get(full_url, headers=headers, stream=True, timeout=self.timeout) as response:
            status = response.status_code
            if status == 401:
                raise UnauthorizedError()
            if status == 403:
                raise ForbiddenError()
            if status == 404:
                raise NotFoundError()
            if not 200 <= status < 300:
                raise UnknownStatusError(status)
            with open(target, 'wb') as f:
                for chunk in response.iter_content(chunk_size=8192):
                    if chunk:
                        f.write(chunk)
        return target
