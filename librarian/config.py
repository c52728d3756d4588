# librarian/config.py
"""Application configuration.

Configuration is read from a TOML file whose path is given on the command line
or through the ``LIBRARIAN_CONFIG`` environment variable. Every key is optional.
``DATABASE_URL`` in the environment always wins over the file, like the
:class:`~librarian.sa.database.Database` default.

Example::

    database_url = "postgresql://@/librarian"

    [metadata]
    providers = ["openlibrary", "calibre"]
    default_provider = "openlibrary"
    image_dir = "/var/lib/librarian/images"

    [calibre]
    fetcher = "fetch-ebook-metadata"

    [openlibrary]
    contact = "me@example.com"
"""
import os
import tomllib
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field

from librarian.metadata.types import MetadataProvider

CONFIG_ENV = "LIBRARIAN_CONFIG"


class MetadataConfig(BaseModel):
    # None means every provider is available, an empty list disables lookups
    providers: Optional[List[MetadataProvider]] = None
    default_provider: Optional[MetadataProvider] = None
    image_dir: Path = Path("data/images")

    def available_providers(self) -> List[MetadataProvider]:
        if self.providers is None:
            return list(MetadataProvider)
        return list(self.providers)

    def pick_default(self) -> MetadataProvider:
        """Provider used when a request does not name one"""
        providers = self.available_providers()
        if len(providers) == 1:
            return providers[0]
        return self.default_provider or MetadataProvider.CALIBRE


class CalibreConfig(BaseModel):
    fetcher: str = "fetch-ebook-metadata"
    timeout: float = 120.0


class OpenLibraryConfig(BaseModel):
    contact: str = "unknown"
    timeout: float = 10.0


class AuthConfig(BaseModel):
    # Header set by the authenticating reverse proxy
    user_header: str = "Remote-User"


class ScannerConfig(BaseModel):
    device: int = 0
    interval: float = 0.2
    base_url: str = "http://localhost:8000/add"


class Config(BaseModel):
    database_url: str = Field(default_factory=lambda: os.getenv("DATABASE_URL", "sqlite:///librarian.db"))
    metadata: MetadataConfig = MetadataConfig()
    calibre: CalibreConfig = CalibreConfig()
    openlibrary: OpenLibraryConfig = OpenLibraryConfig()
    auth: AuthConfig = AuthConfig()
    scanner: ScannerConfig = ScannerConfig()


def load_config(path: Optional[str] = None) -> Config:
    """Load the configuration from ``path``, ``$LIBRARIAN_CONFIG`` or defaults.

    Raises:
        FileNotFoundError: If the named configuration file does not exist
        tomllib.TOMLDecodeError: If the file is not valid TOML
    """
    path = path or os.getenv(CONFIG_ENV)
    data = {}
    if path:
        with open(path, "rb") as f:
            data = tomllib.load(f)

    if os.getenv("DATABASE_URL"):
        data["database_url"] = os.environ["DATABASE_URL"]

    return Config.model_validate(data)


@lru_cache
def get_config() -> Config:
    """Process-wide configuration, also used as a FastAPI dependency"""
    return load_config()
