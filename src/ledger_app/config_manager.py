"""Configuration Manager for the Family Ledger client."""
from pydantic_settings import BaseSettings


class ConfigManager(BaseSettings):
    """Manages application configuration settings using Pydantic BaseSettings."""

    # API settings
    api_base_url: str = 'http://127.0.0.1:8000/api/v1'
    api_timeout: float = 30.0  # seconds, applies to every request

    # Background network pool
    network_workers: int = 4

    # Auth settings
    device_name: str = 'python-client'

    # Storage settings (empty means the per-user data dir)
    downloads_dir: str = ''

    # Logging settings
    log_level: str = 'INFO'
    log_colors: bool = True  # only honoured on a TTY

    class Config:
        env_prefix = 'LEDGER_'
        case_sensitive = False

    def get(self, key, default=None):
        """Get a configuration value."""
        return getattr(self, key, default)

    def set(self, key, value):
        """Set a configuration value."""
        setattr(self, key, value)

    def get_all(self):
        """Get all configuration values as dictionary."""
        return self.model_dump()
