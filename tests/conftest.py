import io

import pytest

from damage_server.app import create_app, get_store


class _Cfg:
    DEBUG = False
    MAX_CONTENT_LENGTH = 1024 * 1024
    LOG_LEVEL = "INFO"
    PORT = 3000


@pytest.fixture
def cfg(tmp_path):
    c = _Cfg()
    c.DB_URI = f"sqlite:///{tmp_path / 'reports.db'}"
    c.UPLOAD_DIR = str(tmp_path / "uploads")
    return c


@pytest.fixture
def app(cfg):
    app = create_app(cfg)
    app.config["TESTING"] = True
    yield app
    get_store(app).close()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def store(app):
    return get_store(app)


@pytest.fixture
def submit(client):
    def _submit(number="WM-12", location="Field A", filename="blade.jpg", type=None, data=b"\xff\xd8fake-jpeg"):
        form = {}
        if number is not None:
            form["windmillNumber"] = number
        if location is not None:
            form["location"] = location
        if type is not None:
            form["type"] = type
        if filename is not None:
            form["image"] = (io.BytesIO(data), filename)
        return client.post("/predict", data=form, content_type="multipart/form-data")
    return _submit
