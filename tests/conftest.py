import pytest

from clgbooks.app import create_app
from clgbooks.config import Settings
from clgbooks.models import CatalogItem


@pytest.fixture(autouse=True)
def _isolated_paths(tmp_path, monkeypatch):
    monkeypatch.setattr(Settings, "DB_PATH", str(tmp_path / "data" / "clgbooks.db"))
    monkeypatch.setattr(Settings, "LOG_PATH", str(tmp_path / "logs" / "app.log"))


@pytest.fixture
def app():
    app = create_app()
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    with app.test_client() as client:
        yield client


@pytest.fixture
def make_item():
    counter = iter(range(1, 10_000))

    def _make(title, **fields):
        return CatalogItem(id=f"pdf-{next(counter)}", title=title, **fields)

    return _make
