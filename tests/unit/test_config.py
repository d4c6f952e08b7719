"""Tests for environment-driven configuration"""
import pytest
from unittest.mock import Mock

from config import (
    Config, ProductionConfig, TestingConfig, ConfigurationError, get_config, _database_uri
)


class TestGetConfig:

    def test_named_config(self):
        assert get_config('testing') is TestingConfig
        assert get_config('production') is ProductionConfig

    def test_unknown_name_falls_back_to_development(self):
        assert get_config('staging').__name__ == 'DevelopmentConfig'

    def test_reads_flask_env(self, monkeypatch):
        monkeypatch.setenv('FLASK_ENV', 'testing')
        assert get_config() is TestingConfig


class TestDatabaseUri:

    def test_postgres_scheme_is_normalized(self, monkeypatch):
        monkeypatch.setenv('DATABASE_URL', 'postgres://casa:secret@db/casa')
        assert _database_uri('DATABASE_URL') == 'postgresql://casa:secret@db/casa'

    def test_first_present_key_wins(self, monkeypatch):
        monkeypatch.delenv('POSTGRES_URI', raising=False)
        monkeypatch.setenv('DATABASE_URL', 'postgresql://second')
        assert _database_uri('POSTGRES_URI', 'DATABASE_URL') == 'postgresql://second'

    def test_default_when_nothing_set(self, monkeypatch):
        monkeypatch.delenv('NOT_A_DB_URL', raising=False)
        assert _database_uri('NOT_A_DB_URL', default='sqlite://') == 'sqlite://'


class TestValidation:

    def test_known_timezone_accepted(self):
        assert Config.validate_timezone('America/Chicago') == 'America/Chicago'

    def test_unknown_timezone_rejected(self):
        with pytest.raises(ConfigurationError, match='Mars/Olympus_Mons'):
            Config.validate_timezone('Mars/Olympus_Mons')

    def test_init_app_checks_timezone(self):
        app = Mock()
        app.config = {'CASA_TIMEZONE': 'Nowhere/Special'}
        with pytest.raises(ConfigurationError):
            Config.init_app(app)

    def test_production_requires_mail_and_database(self, monkeypatch):
        monkeypatch.setenv('FLASK_ENV', 'production')
        monkeypatch.delenv('SKIP_ENV_VALIDATION', raising=False)
        monkeypatch.setenv('SECRET_KEY', 'not-so-secret')
        monkeypatch.delenv('MAIL_SERVER', raising=False)
        monkeypatch.delenv('DATABASE_URL', raising=False)
        monkeypatch.delenv('POSTGRES_URI', raising=False)

        with pytest.raises(ConfigurationError) as exc_info:
            ProductionConfig.validate_required_config()

        assert 'MAIL_SERVER' in str(exc_info.value)
        assert 'DATABASE_URL' in str(exc_info.value)

    def test_validation_skipped_when_testing(self, monkeypatch):
        monkeypatch.setenv('FLASK_ENV', 'testing')
        ProductionConfig.validate_required_config()
