from __future__ import annotations

import os
import shlex
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

_DOTENV_PATH = find_dotenv(usecwd=True)
load_dotenv(_DOTENV_PATH)

DEFAULT_SMOKE_CHECKS_PATH = Path(__file__).resolve().parent / "smoke_checks.yml"


class Settings:
    API_HOST: str = os.getenv("API_HOST", "localhost")
    API_PORT: int = int(os.getenv("API_PORT", "3001"))
    API_HEALTH_PATH: str = os.getenv("API_HEALTH_PATH", "/api/health")
    API_REQUEST_TIMEOUT_S: float = float(os.getenv("API_REQUEST_TIMEOUT_S", "5"))
    # relative backend dirs resolve here: the .env directory, else the cwd
    API_PROJECT_ROOT: str = os.getenv(
        "API_PROJECT_ROOT",
        str(Path(_DOTENV_PATH).parent) if _DOTENV_PATH else os.getcwd(),
    )
    API_BACKEND_DIR: str = os.getenv("API_BACKEND_DIR", "backend")
    API_START_COMMAND: str = os.getenv("API_START_COMMAND", "npm run api")
    API_SETTLE_DELAY_S: float = float(os.getenv("API_SETTLE_DELAY_S", "3"))
    API_WAIT_STRATEGY: str = os.getenv("API_WAIT_STRATEGY", "settle")
    API_POLL_INTERVAL_S: float = float(os.getenv("API_POLL_INTERVAL_S", "0.3"))
    API_POLL_TIMEOUT_S: float = float(os.getenv("API_POLL_TIMEOUT_S", "10"))
    SMOKE_CHECKS_PATH: str = os.getenv(
        "SMOKE_CHECKS_PATH", str(DEFAULT_SMOKE_CHECKS_PATH)
    )
    DB_HOST: str = os.getenv("DB_HOST", "localhost")
    DB_PORT: int = int(os.getenv("DB_PORT", "5432"))
    DB_NAME: str = os.getenv("DB_NAME", "hemera_db")
    DB_USER: str = os.getenv("DB_USER", "hemera_user")
    DB_PASSWORD: str = os.getenv("DB_PASSWORD", "hemera_password")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")


settings = Settings()


@dataclass
class ApiTarget:
    """Where the backend lives and how to bring it up."""

    host: str = "localhost"
    port: int = 3001
    health_path: str = "/api/health"
    timeout_s: float | None = 5.0
    backend_dir: Path = Path("backend")
    start_command: list[str] = field(default_factory=lambda: ["npm", "run", "api"])
    settle_delay_s: float = 3.0
    wait_strategy: str = "settle"
    poll_interval_s: float = 0.3
    poll_timeout_s: float = 10.0

    @property
    def base_url(self) -> str:
        return f"http://{self.host}:{self.port}"

    @property
    def health_url(self) -> str:
        return self.url_for(self.health_path)

    def url_for(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"


@dataclass
class DatabaseTarget:
    host: str = "localhost"
    port: int = 5432
    name: str = "hemera_db"
    user: str = "hemera_user"
    password: str = field(default="hemera_password", repr=False)


def build_api_target(s: Settings = settings) -> ApiTarget:
    timeout_s = s.API_REQUEST_TIMEOUT_S if s.API_REQUEST_TIMEOUT_S > 0 else None
    return ApiTarget(
        host=s.API_HOST,
        port=s.API_PORT,
        health_path=s.API_HEALTH_PATH,
        timeout_s=timeout_s,
        backend_dir=Path(s.API_PROJECT_ROOT) / s.API_BACKEND_DIR,
        start_command=shlex.split(s.API_START_COMMAND),
        settle_delay_s=s.API_SETTLE_DELAY_S,
        wait_strategy=s.API_WAIT_STRATEGY,
        poll_interval_s=s.API_POLL_INTERVAL_S,
        poll_timeout_s=s.API_POLL_TIMEOUT_S,
    )


def build_database_target(s: Settings = settings) -> DatabaseTarget:
    return DatabaseTarget(
        host=s.DB_HOST,
        port=s.DB_PORT,
        name=s.DB_NAME,
        user=s.DB_USER,
        password=s.DB_PASSWORD,
    )
