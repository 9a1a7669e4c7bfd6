"""Authentication service: login flows and bearer token persistence."""
import json
import logging
import os
from pathlib import Path

import requests
from appdirs import user_data_dir

from shared.schemas import AuthResponse, LoginRequest, OTPRequest, ResetPasswordRequest
from shared.validation import Validator
from . import endpoints
from .errors import APIError


class AuthService:
    """Holds the session token and talks to the /auth routes.

    The token and user are stored as JSON in the per-user data directory so
    a restart keeps the session.
    """

    def __init__(self, api, data_dir=None, device_name='python-client'):
        self.api = api
        self.device_name = device_name
        self.token = None
        self.user = None
        self.logger = logging.getLogger(self.__class__.__name__)
        self.data_dir = Path(data_dir) if data_dir else Path(user_data_dir("family_ledger", "family_ledger"))
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.token_file = self.data_dir / "auth_token.json"
        self._load_token()

    def _load_token(self):
        if not self.token_file.exists():
            return
        try:
            with open(self.token_file, 'r') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            self.logger.warning(f"Ignoring unreadable token file {self.token_file}: {e}")
            return
        self.token = data.get('token')
        self.user = data.get('user')

    def _save_token(self):
        with open(self.token_file, 'w') as f:
            json.dump({'token': self.token, 'user': self.user}, f)

    def _store_session(self, auth: AuthResponse):
        self.token = auth.token
        self.user = auth.user.model_dump(mode='json')
        self._save_token()
        self.logger.info(f"Authenticated as {auth.user.email}")
        return auth

    def login(self, email, password):
        """Password login; returns the decoded ``AuthResponse``."""
        body = LoginRequest(email=Validator.validate_email(email), password=password,
                            device_name=self.device_name)
        auth = self.api.request(endpoints.login(), json=body, model=AuthResponse)
        return self._store_session(auth)

    def request_otp(self, email):
        """Ask the server to email a one-time passcode."""
        body = OTPRequest(email=Validator.validate_email(email), device_name=self.device_name)
        self.api.request_empty(endpoints.request_otp(), json=body)

    def resend_otp(self, email):
        body = OTPRequest(email=Validator.validate_email(email), device_name=self.device_name)
        self.api.request_empty(endpoints.resend_otp(), json=body)

    def verify_otp(self, email, code):
        """Exchange a passcode for a session token."""
        body = OTPRequest(email=Validator.validate_email(email), device_name=self.device_name,
                          code=Validator.validate_otp(code))
        auth = self.api.request(endpoints.verify_otp(), json=body, model=AuthResponse)
        return self._store_session(auth)

    def forgot_password(self, email):
        self.api.request_empty(endpoints.forgot_password(), json={'email': Validator.validate_email(email)})

    def resend_password_code(self, email):
        self.api.request_empty(endpoints.resend_password_code(), json={'email': Validator.validate_email(email)})

    def reset_password(self, email, code, password, password_confirmation):
        Validator.validate_password_reset(password, password_confirmation)
        body = ResetPasswordRequest(
            email=Validator.validate_email(email),
            code=Validator.validate_otp(code),
            password=password,
            password_confirmation=password_confirmation,
        )
        self.api.request_empty(endpoints.reset_password(), json=body)

    def logout(self):
        """Revoke the token server-side (best effort) and forget it locally."""
        if self.token:
            try:
                self.api.request_empty(endpoints.logout())
            except (APIError, requests.RequestException) as e:
                self.logger.warning(f"Server logout failed: {e}")
        self.clear_session()

    def clear_session(self):
        """Drop the local token; used when the server reports it expired."""
        self.token = None
        self.user = None
        if self.token_file.exists():
            os.remove(self.token_file)

    def get_headers(self):
        if self.token:
            return {'Authorization': f'Bearer {self.token}'}
        return {}

    def is_authenticated(self):
        return self.token is not None
