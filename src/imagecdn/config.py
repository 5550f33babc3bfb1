import os
from dataclasses import dataclass, field
from typing import Optional, Tuple

from flask import current_app

DEFAULT_ALLOWED_TYPES = ("image/jpeg", "image/png", "image/webp")


def _split_list(raw: str) -> Tuple[str, ...]:
    return tuple(item.strip() for item in raw.split(",") if item.strip())


def _int_env(env, name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


@dataclass(frozen=True)
class Settings:
    port: int = 4000
    host: str = "0.0.0.0"
    upload_dir: str = field(default_factory=lambda: os.path.abspath("uploads"))
    public_base_url: str = "http://127.0.0.1:4000/uploads"
    allowed_origins: Tuple[str, ...] = ("http://localhost:3000",)
    max_files: int = 20
    max_file_size: int = 2 * 1024 * 1024
    allowed_types: Tuple[str, ...] = DEFAULT_ALLOWED_TYPES
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @classmethod
    def from_env(cls, environ=None) -> "Settings":
        """
        Build settings from environment variables.
        Unset or blank variables fall back to the defaults.
        """
        env = os.environ if environ is None else environ

        port = _int_env(env, "PORT", 4000)
        base_url = env.get("UPLOADS_URL") or f"http://127.0.0.1:{port}/uploads"

        return cls(
            port=port,
            host=env.get("HOST") or "0.0.0.0",
            upload_dir=os.path.abspath(env.get("UPLOADS_DIR") or "uploads"),
            public_base_url=base_url.rstrip("/"),
            allowed_origins=_split_list(env.get("ALLOWED_ORIGINS") or "http://localhost:3000"),
            max_files=_int_env(env, "MAX_FILES", 20),
            max_file_size=_int_env(env, "MAX_FILE_SIZE", 2 * 1024 * 1024),
            allowed_types=_split_list(env.get("ALLOWED_TYPES") or ",".join(DEFAULT_ALLOWED_TYPES)),
            log_level=(env.get("LOG_LEVEL") or "INFO").upper(),
            log_file=env.get("LOG_FILE") or None,
        )

    def public_url(self, filename: str) -> str:
        return f"{self.public_base_url}/{filename}"


def get_settings() -> Settings:
    return current_app.config["SETTINGS"]
