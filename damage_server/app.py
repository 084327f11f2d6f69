import argparse
import logging
import os
from datetime import datetime, timezone
from typing import Optional

from flask import Flask, Response, request, jsonify, send_from_directory
from flask_cors import CORS

from .assessment import assess
from .assets import get_asset_kind
from .config import Config
from .errors import StorageError, ValidationError
from .reports import export_csv, list_reports
from .store import ReportStore
from .uploads import discard_upload, save_upload

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def _require(form, field: str, message: str) -> str:
    value = (form.get(field) or "").strip()
    if not value:
        raise ValidationError(message)
    return value


def get_store(app: Flask) -> ReportStore:
    return app.extensions["report_store"]


def create_app(cfg, store: Optional[ReportStore] = None) -> Flask:
    app = Flask(__name__)
    app.config["MAX_CONTENT_LENGTH"] = cfg.MAX_CONTENT_LENGTH
    upload_dir = cfg.UPLOAD_DIR

    # browsers need Content-Disposition to name CSV downloads
    CORS(app, expose_headers=["Content-Disposition"])

    if store is None:
        store = ReportStore(cfg.DB_URI, echo=cfg.DEBUG)
    store.ensure_schema()
    app.extensions["report_store"] = store

    @app.before_request
    def log_request():
        logger.info("%s %s", request.method, request.full_path.rstrip("?"))

    @app.post("/predict")
    def predict():
        try:
            file = request.files.get("image")
            if file is None or file.filename == "":
                raise ValidationError("No image uploaded")
            asset_number = _require(request.form, "windmillNumber", "Windmill number is required")
            location = _require(request.form, "location", "Location is required")
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        kind = get_asset_kind(request.form.get("type"))

        logger.info("Processing prediction for %s: %s", kind.name, asset_number)
        received_at = datetime.now(timezone.utc)
        stored = None
        try:
            stored = save_upload(file, upload_dir, received_ms=int(received_at.timestamp() * 1000))
            result = assess(stored.path)
            row = store.add(kind, asset_number, result.damage, location, stored.path)
            logger.info("Inserted %s report %s", kind.name, row["id"])
        except StorageError as e:
            discard_upload(stored)
            return jsonify({"error": "Database error", "details": str(e)}), 500
        except Exception as e:
            logger.exception("Prediction error")
            if stored is not None:
                discard_upload(stored)
            return jsonify({"error": "Failed to process image", "details": str(e)}), 500

        return jsonify({
            "windmillNumber": asset_number,
            "location": location,
            "damage": result.damage,
            "timestamp": received_at.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "predictions": result.predictions(),
        })

    @app.get("/reports")
    def reports():
        kind = get_asset_kind(request.args.get("type"))
        try:
            items = list_reports(store, kind)
        except StorageError:
            return jsonify({"error": "Failed to fetch reports"}), 500
        return jsonify(items)

    @app.get("/reports/csv")
    def reports_csv():
        kind = get_asset_kind(request.args.get("type"))
        try:
            body = export_csv(store, kind)
        except StorageError:
            return Response("Failed to fetch reports", status=500, mimetype="text/plain")
        return Response(
            body,
            mimetype="text/csv",
            headers={"Content-Disposition": f'attachment; filename="{kind.csv_filename}"'},
        )

    @app.get("/uploads/<path:filename>")
    def uploaded_file(filename):
        return send_from_directory(os.path.abspath(upload_dir), filename)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app

def create_app_from_env():
    """Gunicorn-friendly factory that loads config from env/files."""
    C = Config.load()
    logging.basicConfig(level=C.LOG_LEVEL, format=LOG_FORMAT)
    return create_app(C)

def main_cli():
    parser = argparse.ArgumentParser(description="Run the inspection damage report server (Flask + SQLAlchemy).")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", default=None, type=int)
    parser.add_argument("--db-uri", default=None, help="SQLAlchemy database URI.")
    parser.add_argument("--upload-dir", default=None, help="Directory where uploaded images are stored.")
    parser.add_argument("--save", action="store_true", help="Persist the given options to the server config file.")
    args = parser.parse_args()

    C = Config.load(cli_port=args.port, cli_db_uri=args.db_uri, cli_upload_dir=args.upload_dir)
    logging.basicConfig(level=C.LOG_LEVEL, format=LOG_FORMAT)
    if args.save:
        Config.persist(port=args.port, db_uri=args.db_uri, upload_dir=args.upload_dir)

    store = ReportStore(C.DB_URI, echo=C.DEBUG)
    try:
        app = create_app(C, store=store)
        logger.info("Server running on http://%s:%s", args.host, C.PORT)
        app.run(host=args.host, port=C.PORT, debug=C.DEBUG)
    finally:
        store.close()

if __name__ == "__main__":
    main_cli()
