import os, json, logging
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

SERVER_CFG_PATHS = [
    Path(os.getenv("DAMAGE_SERVER_CONFIG", "")) if os.getenv("DAMAGE_SERVER_CONFIG") else None,
    Path.home() / ".damage_server.json",
    Path.cwd() / ".damage_server.json",
]
SERVER_CFG_PATHS = [p for p in SERVER_CFG_PATHS if p is not None]

TRUTHY = {"1", "true", "True", "yes", "on"}

def _read_cfg_file() -> dict:
    for p in SERVER_CFG_PATHS:
        try:
            if p.exists():
                with open(p, "r") as f:
                    return json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Skipping unreadable config file %s: %s", p, e)
            continue
    return {}

def _write_cfg_file(data: dict) -> None:
    if os.getenv("DAMAGE_SERVER_CONFIG"):
        target = Path(os.getenv("DAMAGE_SERVER_CONFIG"))
    else:
        target = Path.home() / ".damage_server.json"
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        with open(target, "w") as f:
            json.dump(data, f, indent=2)
    except OSError as e:
        logger.warning("Could not write server config: %s", e)

class Config:
    DB_URI: str = "sqlite:///windmill_damage.db"
    UPLOAD_DIR: str = "uploads"
    PORT: int = 3000
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    MAX_CONTENT_LENGTH: int = int(os.getenv("DAMAGE_MAX_UPLOAD_BYTES", str(32 * 1024 * 1024)))

    @classmethod
    def load(cls, cli_port: Optional[int] = None, cli_db_uri: Optional[str] = None,
             cli_upload_dir: Optional[str] = None):
        cfg = _read_cfg_file()
        db_uri = cli_db_uri or os.getenv("DAMAGE_DB_URI") or cfg.get("db_uri") or cls.DB_URI
        upload_dir = cli_upload_dir or os.getenv("DAMAGE_UPLOAD_DIR") or cfg.get("upload_dir") or cls.UPLOAD_DIR
        port = cli_port or os.getenv("PORT") or cfg.get("port") or cls.PORT
        debug_env = os.getenv("DAMAGE_DEBUG", "0")
        debug_file = cfg.get("debug", False)
        debug = (debug_env in TRUTHY) or bool(debug_file)
        log_level = (os.getenv("DAMAGE_LOG_LEVEL") or cfg.get("log_level") or cls.LOG_LEVEL).upper()
        C = type("C", (), {})()
        C.DB_URI = db_uri
        C.UPLOAD_DIR = upload_dir
        C.PORT = int(port)
        C.DEBUG = debug
        C.LOG_LEVEL = log_level
        C.MAX_CONTENT_LENGTH = cls.MAX_CONTENT_LENGTH
        return C

    @staticmethod
    def persist(port: Optional[int] = None, db_uri: Optional[str] = None,
                upload_dir: Optional[str] = None, debug: Optional[bool] = None):
        data = _read_cfg_file()
        if port is not None:
            data["port"] = int(port)
        if db_uri is not None:
            data["db_uri"] = db_uri
        if upload_dir is not None:
            data["upload_dir"] = upload_dir
        if debug is not None:
            data["debug"] = bool(debug)
        _write_cfg_file(data)
