from pathlib import Path

from pydantic_settings import BaseSettings

_DEFAULT_PUBLIC_DIR = Path(__file__).resolve().parent.parent / "public"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Server
    host: str = "0.0.0.0"
    port: int = 3000

    # "production" hides unhandled error detail from clients
    environment: str = "development"

    # Logging
    log_level: str = "info"

    # CORS
    cors_origins: str = "*"

    # Static assets
    public_dir: Path = _DEFAULT_PUBLIC_DIR

    # Compression
    gzip_minimum_size: int = 1024

    # Telemetry provider: "mock" or "psutil"
    metrics_provider: str = "mock"
    disk_path: str = "/"

    # Lifecycle control: "simulated" or "systemd"
    control_backend: str = "simulated"
    control_unit: str | None = None
    control_start_delay: float = 1.0
    control_stop_delay: float = 1.0
    control_restart_delay: float = 2.0

    model_config = {"env_prefix": "", "case_sensitive": False, "env_file": ".env", "env_file_encoding": "utf-8"}

    @property
    def is_production(self) -> bool:
        return self.environment.strip().lower() == "production"


settings = Settings()
