"""Family Ledger client - application wiring."""
import logging

from .config_manager import ConfigManager
from .logging_config import setup_logging
from .services.api_service import APIService
from .services.auth_service import AuthService
from .services.network_queue import NetworkQueue
from .state import SessionState
from .viewmodels.assets import AssetsViewModel
from .viewmodels.budgets import BudgetsViewModel
from .viewmodels.coparenting import CoParentingViewModel
from .viewmodels.dashboard import DashboardViewModel
from .viewmodels.documents import DocumentsViewModel
from .viewmodels.expenses import ExpensesViewModel
from .viewmodels.family import FamilyViewModel
from .viewmodels.goals import GoalsViewModel
from .viewmodels.journal import JournalViewModel
from .viewmodels.legal_documents import LegalDocumentsViewModel
from .viewmodels.member_records import MemberRecordsViewModel
from .viewmodels.people import PeopleViewModel
from .viewmodels.pets import PetsViewModel
from .viewmodels.resources import ResourcesViewModel
from .viewmodels.shopping import ShoppingViewModel


class LedgerApp:
    """Builds the services once and hands them to every view-model.

    The host UI loop must call ``process_results()`` regularly (e.g. from a
    timer) so network completions are applied on its thread.
    """

    def __init__(self, config=None, session=None, data_dir=None):
        self.logger = logging.getLogger(self.__class__.__name__)
        self.config = config
        self._session = session
        self._data_dir = data_dir
        self.state = SessionState()
        self.api_service = None
        self.auth_service = None
        self.network_queue = None

    def startup(self):
        """Initialize logging, configuration and services."""
        if self.config is None:
            self.config = ConfigManager()
        setup_logging(self.config)
        self.logger.info(f"Configuration loaded: API URL={self.config.api_base_url}")

        self.api_service = APIService(
            self.config.api_base_url,
            timeout=self.config.api_timeout,
            session=self._session,
            on_unauthorized=self.handle_unauthorized,
            downloads_dir=self.config.downloads_dir or None,
        )
        self.auth_service = AuthService(self.api_service, data_dir=self._data_dir,
                                        device_name=self.config.device_name)
        self.api_service.auth_service = self.auth_service
        self.state.current_user = self.auth_service.user

        self.network_queue = NetworkQueue(max_workers=self.config.network_workers)
        self.logger.info("Services initialized")
        return self

    def handle_unauthorized(self):
        """Server rejected the token: drop it and flag the session for re-login."""
        self.logger.warning("Session expired; clearing stored token")
        self.auth_service.clear_session()
        self.state.reset()
        self.state.session_expired = True

    def login(self, email, password):
        auth = self.auth_service.login(email, password)
        self.state.current_user = self.auth_service.user
        self.state.session_expired = False
        return auth

    def logout(self):
        self.auth_service.logout()
        self.state.reset()

    def process_results(self):
        return self.network_queue.process_results()

    def shutdown(self):
        if self.network_queue is not None:
            self.network_queue.stop()

    # View-model factories
    def expenses(self):
        return ExpensesViewModel(self.api_service, self.network_queue)

    def budgets(self):
        return BudgetsViewModel(self.api_service, self.network_queue)

    def family(self):
        return FamilyViewModel(self.api_service, self.network_queue)

    def member_records(self, circle_id, member_id):
        return MemberRecordsViewModel(self.api_service, circle_id, member_id, self.network_queue)

    def resources(self):
        return ResourcesViewModel(self.api_service, self.network_queue)

    def legal_documents(self):
        return LegalDocumentsViewModel(self.api_service, self.network_queue)

    def documents(self):
        return DocumentsViewModel(self.api_service, self.network_queue)

    def dashboard(self):
        return DashboardViewModel(self.api_service, self.network_queue)

    def coparenting(self):
        return CoParentingViewModel(self.api_service, self.network_queue)

    def goals(self):
        return GoalsViewModel(self.api_service, self.network_queue)

    def assets(self):
        return AssetsViewModel(self.api_service, self.network_queue)

    def people(self):
        return PeopleViewModel(self.api_service, self.network_queue)

    def pets(self):
        return PetsViewModel(self.api_service, self.network_queue)

    def journal(self):
        return JournalViewModel(self.api_service, self.network_queue)

    def shopping(self):
        return ShoppingViewModel(self.api_service, self.network_queue)
