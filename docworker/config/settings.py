from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "docworker"
    db_username: str = "docworker"
    db_password: str = "secret"
    db_connect_timeout_seconds: int = 30
    db_statement_timeout_ms: int = 30000
    db_pool_max_size: int = 10
    db_auto_migrate: bool = True

    queue_backend: str = "postgres"
    redis_url: str = "redis://localhost:6379/0"
    redis_socket_timeout_seconds: int = 30
    reset_queue_on_startup: bool = False

    job_poll_interval_seconds: int = 5
    worker_error_backoff_seconds: int = 5
    job_lease_timeout_seconds: int = 3600

    blob_root: str = "/app/files"

    pdf_engine: str = "pdfplumber"
    ocr_languages: str = "eng"

    summarization_provider: str = "transformers"
    summarization_model_name: str = "sshleifer/distilbart-cnn-12-6"
    summarization_min_length: int = 40
    summarization_max_length: int = 150
    summarization_max_chunk_length: int = 512
    summarization_max_workers: int = 4

    summarization_openai_api_key: str = ""
    summarization_openai_model_name: str = "gpt-4o-mini"
    summarization_openai_timeout_seconds: int = 30
    summarization_openai_compatible_base_url: str = ""
