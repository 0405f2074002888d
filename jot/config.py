"""Jot Server Configuration."""

import secrets
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Server
    server_name: str = "Jot Server"
    host: str = "127.0.0.1"
    port: int = 8080
    debug: bool = False
    log_level: str = "INFO"

    # Paths
    data_dir: Path = Path.home() / "jot" / "data"

    # Database
    db_path: Path = Path.home() / "jot" / "data" / "jot.db"

    # JWT
    jwt_secret: str = ""
    jwt_algorithm: str = "HS256"
    token_expire_days: int = 90
    cookie_name: str = "token"

    # Device authorization
    device_code_expire_minutes: int = 10
    purge_on_startup: bool = True

    model_config = SettingsConfigDict(env_prefix="JOT_", env_file=".env", extra="ignore")

    @property
    def database_url(self) -> str:
        return f"sqlite:///{self.db_path}"

    def ensure_dirs(self) -> None:
        """Create the data directory and the database's parent directory."""
        for d in [self.data_dir, self.db_path.parent]:
            d.mkdir(parents=True, exist_ok=True)

    def ensure_secrets(self) -> None:
        """Fill in the JWT secret from ``data_dir/jwt.secret``, creating it once.

        A secret given through the environment always wins and is never written
        to disk.
        """
        if self.jwt_secret:
            return

        secret_file = self.data_dir / "jwt.secret"
        if secret_file.is_file():
            self.jwt_secret = secret_file.read_text().strip()
        if not self.jwt_secret:
            self.jwt_secret = secrets.token_urlsafe(32)
            secret_file.write_text(self.jwt_secret + "\n")
            secret_file.chmod(0o600)


def load_settings() -> Settings:
    """Build settings from the environment and prepare the data directory."""
    settings = Settings()
    settings.ensure_dirs()
    settings.ensure_secrets()
    return settings
