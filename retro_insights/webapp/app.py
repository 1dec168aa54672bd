"""Web application for Retro Insights.

This module provides a Flask-based upload dashboard: upload a release
export, then browse velocity, burn-up, module and efficiency charts
rendered with Bokeh.
"""

import logging
import os
import os.path
import secrets
import threading
import time

import jinja2
from bokeh.embed import components
from bokeh.resources import CDN
from dotenv import load_dotenv
from flask import (
    Flask,
    flash,
    jsonify,
    redirect,
    render_template,
    request,
    session,
    url_for,
)

from ..exceptions import DecodeError, EmptyInputError
from ..reader import SUPPORTED_EXTENSIONS
from .helpers import aggregate_upload, dashboard_figures

load_dotenv()

template_folder = os.path.join(os.path.dirname(__file__), "templates")

app = Flask("retro-insights", template_folder=template_folder)

app.config["MAX_CONTENT_LENGTH"] = 16 * 1024 * 1024
# Uploaded datasets kept in memory at once, and for how long (seconds)
app.config["MAX_DATASETS"] = 10
app.config["DATASET_TTL"] = 86400

TABS = ("summary", "deep")


# Add security headers
@app.after_request
def add_security_headers(response):
    """Add security headers to all responses."""
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["X-XSS-Protection"] = "1; mode=block"
    response.headers["Strict-Transport-Security"] = (
        "max-age=31536000; includeSubDomains"
    )
    return response


app.jinja_loader = jinja2.PackageLoader("retro_insights.webapp", "templates")

logger = logging.getLogger(__name__)

# Uploaded datasets by session token as (dataset, timestamp), held in
# memory only (thread-safe)
datasets = {}
datasets_lock = threading.Lock()

app.secret_key = os.environ.get("FLASK_SECRET_KEY")
if not app.secret_key:
    logger.warning(
        "FLASK_SECRET_KEY environment variable not set. "
        "Using a random key for this session only. "
        "Set FLASK_SECRET_KEY for production use."
    )
    app.secret_key = secrets.token_hex(32)


def current_dataset():
    """The dataset uploaded in this session, or None if missing or expired."""
    token = session.get("dataset")
    if token is None:
        return None
    now = time.time()
    with datasets_lock:
        if token not in datasets:
            return None
        dataset, timestamp = datasets[token]
        if now - timestamp >= app.config["DATASET_TTL"]:
            del datasets[token]
            return None
        return dataset


def _evict_datasets(now, keep):
    """Drop expired datasets, then the oldest ones beyond the size cap.

    Must be called with `datasets_lock` held. `keep` is never evicted.
    """
    ttl = app.config["DATASET_TTL"]
    for token, (_, timestamp) in list(datasets.items()):
        if token != keep and now - timestamp >= ttl:
            del datasets[token]

    others = sorted(
        (timestamp, token) for token, (_, timestamp) in datasets.items() if token != keep
    )
    excess = len(others) + 1 - app.config["MAX_DATASETS"]
    for _, token in others[: max(excess, 0)]:
        del datasets[token]

    logger.debug("Holding %d uploaded datasets", len(datasets))


def store_dataset(filename, aggregates):
    token = session.get("dataset") or secrets.token_hex(16)
    now = time.time()
    with datasets_lock:
        _evict_datasets(now, keep=token)
        datasets[token] = ({"filename": filename, "aggregates": aggregates}, now)
    session["dataset"] = token


def drop_dataset():
    token = session.pop("dataset", None)
    if token is not None:
        with datasets_lock:
            datasets.pop(token, None)


@app.route("/")
def index():
    """Display the upload page."""
    return render_template("index.html", accept=", ".join(SUPPORTED_EXTENSIONS))


@app.route("/upload", methods=["POST"])
def upload():
    """Decode, normalize and aggregate an uploaded export."""
    file_storage = request.files.get("file")
    if file_storage is None or not file_storage.filename:
        flash("Please choose a file to upload.", "warning")
        return redirect(url_for("index"))

    try:
        aggregates = aggregate_upload(file_storage)
    except (DecodeError, EmptyInputError) as e:
        logger.error("Unable to ingest %s: %s", file_storage.filename, e)
        flash(str(e), "danger")
        return redirect(url_for("index"))

    store_dataset(file_storage.filename, aggregates)
    logger.info(
        "Ingested %s with %d items",
        file_storage.filename,
        aggregates.summary.total_items,
    )
    return redirect(url_for("dashboard"))


@app.route("/dashboard")
def dashboard():
    """Show KPIs and the charts of the selected tab."""
    dataset = current_dataset()
    if dataset is None:
        return redirect(url_for("index"))

    tab = request.args.get("tab", "summary")
    if tab not in TABS:
        tab = "summary"

    aggregates = dataset["aggregates"]
    script, divs = components(dashboard_figures(aggregates, tab))
    return render_template(
        "dashboard.html",
        filename=dataset["filename"],
        tab=tab,
        summary=aggregates.summary,
        release_count=aggregates.release_count,
        resources=CDN.render(),
        script=script,
        divs=divs,
    )


@app.route("/dashboard.json")
def dashboard_json():
    """The aggregates of the current upload as JSON."""
    dataset = current_dataset()
    if dataset is None:
        return jsonify({"error": "No data uploaded"}), 404
    return jsonify(dataset["aggregates"].to_dict())


@app.route("/clear", methods=["POST"])
def clear():
    """Forget the uploaded dataset."""
    drop_dataset()
    return redirect(url_for("index"))
