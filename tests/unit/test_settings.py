import pytest
from pydantic import ValidationError

from docworker.config.settings import Settings


class TestSettingsDefaults:
    def test_default_app_env(self) -> None:
        s = Settings()
        assert s.app_env == "dev"

    def test_default_db_port(self) -> None:
        s = Settings()
        assert s.db_port == 5432

    def test_default_queue_backend(self) -> None:
        s = Settings()
        assert s.queue_backend == "postgres"

    def test_default_job_poll_interval(self) -> None:
        s = Settings()
        assert s.job_poll_interval_seconds == 5

    def test_default_error_backoff(self) -> None:
        s = Settings()
        assert s.worker_error_backoff_seconds == 5

    def test_default_lease_timeout(self) -> None:
        s = Settings()
        assert s.job_lease_timeout_seconds == 3600

    def test_default_pdf_engine(self) -> None:
        s = Settings()
        assert s.pdf_engine == "pdfplumber"

    def test_default_summarization_limits(self) -> None:
        s = Settings()
        assert s.summarization_max_chunk_length == 512
        assert s.summarization_min_length == 40
        assert s.summarization_max_length == 150

    def test_reset_on_startup_is_off(self) -> None:
        s = Settings()
        assert s.reset_queue_on_startup is False


class TestSettingsFromEnv:
    def test_loads_log_level(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        s = Settings()
        assert s.log_level == "DEBUG"

    def test_loads_queue_backend(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("QUEUE_BACKEND", "redis")
        s = Settings()
        assert s.queue_backend == "redis"

    def test_loads_redis_url(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("REDIS_URL", "redis://cache:6379/3")
        s = Settings()
        assert s.redis_url == "redis://cache:6379/3"

    def test_loads_reset_flag(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RESET_QUEUE_ON_STARTUP", "true")
        s = Settings()
        assert s.reset_queue_on_startup is True

    def test_loads_summarization_provider(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SUMMARIZATION_PROVIDER", "none")
        s = Settings()
        assert s.summarization_provider == "none"


class TestSettingsValidation:
    def test_invalid_db_port_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DB_PORT", "not_a_number")
        with pytest.raises(ValidationError):
            Settings()

    def test_invalid_poll_interval_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("JOB_POLL_INTERVAL_SECONDS", "soon")
        with pytest.raises(ValidationError):
            Settings()
