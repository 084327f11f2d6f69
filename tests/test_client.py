import json

import pytest
import requests

import damage_client.client as client


class FakeResponse:
    def __init__(self, status_code=200, payload=None, content=b""):
        self.status_code = status_code
        self._payload = payload
        self.content = content
        self.text = json.dumps(payload) if payload is not None else content.decode()

    def json(self):
        return self._payload


@pytest.fixture(autouse=True)
def isolated_cfg(monkeypatch, tmp_path):
    path = tmp_path / "client.json"
    monkeypatch.setattr(client, "CFG_PATHS", [path])
    monkeypatch.setenv("DAMAGE_CLIENT_CONFIG", str(path))
    return path


def test_set_server_persists_url(isolated_cfg, monkeypatch):
    calls = []
    monkeypatch.setattr(client.requests, "get", lambda url, **kw: calls.append(url) or FakeResponse(payload=[]))
    client.set_server("http://inspect.local:8080/")
    assert json.loads(isolated_cfg.read_text()) == {"server_url": "http://inspect.local:8080"}
    client.list_reports()
    assert calls == ["http://inspect.local:8080/reports"]


def test_submit_inspection_posts_multipart(tmp_path, monkeypatch):
    image = tmp_path / "blade.jpg"
    image.write_bytes(b"jpeg")
    seen = {}

    def fake_post(url, data=None, files=None, timeout=None):
        seen["url"] = url
        seen["data"] = data
        name, fh = files["image"]
        seen["file"] = (name, fh.read())
        return FakeResponse(payload={"windmillNumber": "WM-12", "damage": "Yes"})

    monkeypatch.setattr(client.requests, "post", fake_post)
    out = client.submit_inspection("WM-12", "Field A", str(image))
    assert out["damage"] == "Yes"
    assert seen["url"] == "http://127.0.0.1:3000/predict"
    assert seen["data"] == {"windmillNumber": "WM-12", "location": "Field A", "type": "windmill"}
    assert seen["file"] == ("blade.jpg", b"jpeg")


def test_submit_inspection_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        client.submit_inspection("WM-1", "X", str(tmp_path / "nope.jpg"))


def test_list_reports_passes_type(monkeypatch):
    seen = {}

    def fake_get(url, params=None, timeout=None):
        seen["params"] = params
        return FakeResponse(payload=[{"id": 1, "panel_id": "SP-1"}])

    monkeypatch.setattr(client.requests, "get", fake_get)
    assert client.list_reports("solar", server_url="http://h") == [{"id": 1, "panel_id": "SP-1"}]
    assert seen["params"] == {"type": "solar"}


def test_download_csv_writes_dest(tmp_path, monkeypatch):
    body = b"id,panel_id,damage,location,image_path,timestamp\n"
    monkeypatch.setattr(client.requests, "get", lambda url, params=None, timeout=None: FakeResponse(content=body))
    dest = tmp_path / "out.csv"
    assert client.download_csv("solar", dest=str(dest)) == body
    assert dest.read_bytes() == body


def test_download_image_into_directory(tmp_path, monkeypatch):
    seen = []
    monkeypatch.setattr(
        client.requests, "get", lambda url, timeout=None: seen.append(url) or FakeResponse(content=b"img")
    )
    written = client.download_image("uploads/17-blade.jpg", str(tmp_path))
    assert seen == ["http://127.0.0.1:3000/uploads/17-blade.jpg"]
    assert (tmp_path / "17-blade.jpg").read_bytes() == b"img"
    assert written == str(tmp_path / "17-blade.jpg")


def test_error_status_raises(monkeypatch):
    monkeypatch.setattr(
        client.requests, "get",
        lambda url, params=None, timeout=None: FakeResponse(status_code=400, payload={"error": "Location is required"}),
    )
    with pytest.raises(requests.HTTPError, match="400"):
        client.list_reports("x")
