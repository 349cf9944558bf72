"""Shared test fixtures."""

from pathlib import Path

import pytest
from aiohttp import web
from aiohttp.test_utils import TestClient
from mngr.config import Config, DataConfig, LoggingConfig, NamesConfig, ServerConfig
from mngr.server import create_app


@pytest.fixture
def data_root(tmp_path: Path) -> Path:
    """Create a data root with a small tree of pages."""
    root = tmp_path / "data"
    root.mkdir()
    (root / "readme.txt").write_text("Hello mngr")
    (root / ".hidden").write_text("secret")

    docs = root / "docs"
    docs.mkdir()
    (docs / "guide.txt").write_text("Guide content")
    (docs / "drafts").mkdir()
    return root


@pytest.fixture
def test_config(data_root: Path) -> Config:
    """Create a test configuration pointing at the data root."""
    return Config(
        server=ServerConfig(),
        data=DataConfig(root=data_root),
        names=NamesConfig(),
        logging=LoggingConfig(),
    )


@pytest.fixture
def app(test_config: Config) -> web.Application:
    return create_app(test_config)


@pytest.fixture
async def client(aiohttp_client, app: web.Application) -> TestClient:
    """Create test client with configured app."""
    return await aiohttp_client(app)
