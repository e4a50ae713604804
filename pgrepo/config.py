from dataclasses import dataclass
import os
from typing import Mapping
from urllib.parse import quote

from dotenv import load_dotenv

# ==================================================
# Environment Configuration
# ==================================================


@dataclass(frozen=True)
class DatabaseSettings:
    """
    Connection settings resolved from the environment.
    """

    dsn: str | None = None
    connect_timeout_seconds: float | None = None

    @property
    def configured(self) -> bool:
        return self.dsn is not None

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        *,
        load_dotenv_file: bool = True,
    ) -> "DatabaseSettings":
        """
        Reads DATABASE_URL, or builds a URL from DB_HOST, DB_PORT, DB_NAME, DB_USER and DB_PASSWORD.
        A .env file is loaded first unless `load_dotenv_file` is False or `environ` is given.
        """
        if environ is None:
            if load_dotenv_file:
                load_dotenv()
            environ = os.environ

        dsn = environ.get("DATABASE_URL") or _dsn_from_parts(environ)

        timeout = environ.get("DB_CONNECT_TIMEOUT")
        return cls(
            dsn=dsn,
            connect_timeout_seconds=float(timeout) if timeout else None,
        )


def _dsn_from_parts(environ: Mapping[str, str]) -> str | None:
    host = environ.get("DB_HOST")
    name = environ.get("DB_NAME")
    if not host or not name:
        return None

    user = environ.get("DB_USER")
    password = environ.get("DB_PASSWORD")
    port = environ.get("DB_PORT")

    auth = ""
    if user:
        auth = quote(user, safe="")
        if password:
            auth += f":{quote(password, safe='')}"
        auth += "@"

    netloc = f"{host}:{port}" if port else host
    return f"postgresql://{auth}{netloc}/{name}"
