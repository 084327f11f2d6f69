import os
import json
from pathlib import Path
from typing import Optional, Dict, Any, List
import requests

DEFAULT_SERVER_URL = "http://127.0.0.1:3000"

CFG_PATHS = [
    Path(os.getenv("DAMAGE_CLIENT_CONFIG", "")) if os.getenv("DAMAGE_CLIENT_CONFIG") else None,
    Path.home() / ".damage_client.json",
    Path.cwd() / ".damage_client.json",
]
CFG_PATHS = [p for p in CFG_PATHS if p is not None]


def _read_cfg() -> dict:
    """Return the client configuration from the first readable config path.

    Search order:
      1) env var DAMAGE_CLIENT_CONFIG (if set)
      2) ~/.damage_client.json
      3) ./.damage_client.json

    Returns:
        dict: Parsed JSON configuration or {} if not found.
    """
    for p in CFG_PATHS:
        try:
            if p.exists():
                with open(p, "r") as f:
                    return json.load(f)
        except (OSError, ValueError):
            continue
    return {}


def _write_cfg(data: dict) -> None:
    """Write client configuration to DAMAGE_CLIENT_CONFIG or ~/.damage_client.json."""
    if os.getenv("DAMAGE_CLIENT_CONFIG"):
        target = Path(os.getenv("DAMAGE_CLIENT_CONFIG"))
    else:
        target = Path.home() / ".damage_client.json"
    target.parent.mkdir(parents=True, exist_ok=True)
    with open(target, "w") as f:
        json.dump(data, f, indent=2)


def set_server(server_url: str) -> None:
    """Persist the default server URL for this client.

    Subsequent calls can then omit `server_url`.

    Args:
        server_url: Base URL of the server (e.g., "http://127.0.0.1:3000").
    """
    data = _read_cfg()
    data["server_url"] = server_url.rstrip("/")
    _write_cfg(data)


def _get_server(server_url: Optional[str]) -> str:
    if server_url:
        return server_url.rstrip("/")
    return _read_cfg().get("server_url", DEFAULT_SERVER_URL)


def _check(r: requests.Response, what: str) -> None:
    if r.status_code >= 400:
        raise requests.HTTPError(f"{what} failed ({r.status_code}): {r.text}", response=r)


def submit_inspection(
    asset_number: str,
    location: str,
    image: str,
    type: str = "windmill",
    server_url: Optional[str] = None,
) -> Dict[str, Any]:
    """Upload an inspection image and record a damage report.

    Posts the image with its metadata to `/predict`. The server stores the
    image, runs its damage assessment and inserts a report into the table
    for `type`.

    Args:
        asset_number: Windmill number or solar panel id.
        location: Free-text location of the asset.
        image: Path to the image file to upload.
        type: "windmill" (default) or "solar".
        server_url: Optional override for the server base URL.

    Raises:
        FileNotFoundError: If `image` does not exist.
        requests.HTTPError: If the server rejects the upload.

    Returns:
        dict: {"windmillNumber", "location", "damage", "timestamp", "predictions"}.
    """
    if not os.path.isfile(image):
        raise FileNotFoundError(f"File not found: {image}")

    url = _get_server(server_url) + "/predict"
    data_payload = {"windmillNumber": asset_number, "location": location, "type": type}
    with open(image, "rb") as fh:
        files_payload = {"image": (os.path.basename(image), fh)}
        r = requests.post(url, data=data_payload, files=files_payload, timeout=300)
    _check(r, "Upload")
    return r.json()


def list_reports(type: str = "windmill", server_url: Optional[str] = None) -> List[Dict[str, Any]]:
    """Return all reports of one asset type, newest first."""
    url = _get_server(server_url) + "/reports"
    r = requests.get(url, params={"type": type}, timeout=120)
    _check(r, "List")
    return r.json()


def download_csv(type: str = "windmill", dest: Optional[str] = None, server_url: Optional[str] = None) -> bytes:
    """Fetch the CSV export for `type`; also written to `dest` when given."""
    url = _get_server(server_url) + "/reports/csv"
    r = requests.get(url, params={"type": type}, timeout=120)
    _check(r, "CSV download")
    if dest:
        Path(dest).write_bytes(r.content)
    return r.content


def download_image(image_path: str, dest: str, server_url: Optional[str] = None) -> str:
    """Download a stored upload referenced by a report's `image_path`.

    Returns the path written.
    """
    name = Path(image_path).name
    url = _get_server(server_url) + "/uploads/" + name
    r = requests.get(url, timeout=300)
    _check(r, "Image download")
    target = Path(dest)
    if target.is_dir():
        target = target / name
    target.write_bytes(r.content)
    return str(target)
