"""Tests for the Flask web application.

This module contains unit tests for the upload and dashboard routes.
"""

import io
import itertools

import pytest

from retro_insights.webapp import app as app_module
from retro_insights.webapp.app import app as webapp

EXPORT_CSV = b"""\
Epic Link,Issue key,Component,Assignee,Story Points,Fix Version,Sprint Count
EP-1,APP-1,Payments,Alice,5,R1,2
EP-1,APP-2,Payments,Bob,3,R1,1
EP-2,APP-3,Search,Alice,8,R2,3
EP-2,APP-4,Search,Carol,2,R2,1
"""


@pytest.fixture(name="flask_app")
def test_app():
    """Create and configure a test Flask app."""
    webapp.config["TESTING"] = True
    webapp.config["SECRET_KEY"] = "test-secret-key"
    return webapp


@pytest.fixture(name="test_client")
def client_fixture(flask_app):
    """Create a test client for the Flask app."""
    yield flask_app.test_client()
    with app_module.datasets_lock:
        app_module.datasets.clear()


def upload(client, content, filename="export.csv", follow_redirects=True):
    return client.post(
        "/upload",
        data={"file": (io.BytesIO(content), filename)},
        content_type="multipart/form-data",
        follow_redirects=follow_redirects,
    )


def test_index_renders(test_client):
    """Test that the index route renders successfully."""
    response = test_client.get("/")
    assert response.status_code == 200
    assert b"Agile Insight Engine" in response.data
    assert b".csv, .xlsx, .xlsm, .xls" in response.data


def test_security_headers_added(test_client):
    """Ensure standard security headers are present on responses."""
    response = test_client.get("/")
    assert response.headers.get("X-Content-Type-Options") == "nosniff"
    assert response.headers.get("X-Frame-Options") == "DENY"
    assert response.headers.get("X-XSS-Protection") == "1; mode=block"
    assert (
        response.headers.get("Strict-Transport-Security")
        == "max-age=31536000; includeSubDomains"
    )


def test_dashboard_without_upload_redirects(test_client):
    response = test_client.get("/dashboard")
    assert response.status_code == 302
    assert response.headers["Location"].endswith("/")


def test_dashboard_json_without_upload(test_client):
    response = test_client.get("/dashboard.json")
    assert response.status_code == 404
    assert response.get_json() == {"error": "No data uploaded"}


class TestUploadRoute:
    """Test cases for the upload route."""

    def test_upload_redirects_to_dashboard(self, test_client):
        response = upload(test_client, EXPORT_CSV, follow_redirects=False)
        assert response.status_code == 302
        assert response.headers["Location"].endswith("/dashboard")

    def test_upload_shows_summary_tab(self, test_client):
        response = upload(test_client, EXPORT_CSV)

        assert response.status_code == 200
        html = response.data.decode("utf-8")
        assert '"export.csv" Analysis' in html
        assert "<h2>Release Velocity</h2>" in html
        assert "<h3>Burn-Up Trajectory</h3>" in html
        assert "<strong>2</strong> unique release cycles" in html
        assert "Knowledge Radar" not in html

    def test_upload_without_file(self, test_client):
        response = test_client.post(
            "/upload", data={}, content_type="multipart/form-data", follow_redirects=True
        )
        assert response.status_code == 200
        assert b"Please choose a file to upload." in response.data

    def test_upload_empty_export(self, test_client):
        response = upload(test_client, b"Epic,Story Points,Fix Version\n")

        assert b"The uploaded file is empty." in response.data
        assert b"flash-danger" in response.data

    def test_upload_undecodable_export(self, test_client):
        response = upload(test_client, b"not a workbook", filename="export.xlsx")

        assert b"Failed to parse file." in response.data
        assert test_client.get("/dashboard.json").status_code == 404

    def test_upload_replaces_previous_dataset(self, test_client):
        upload(test_client, EXPORT_CSV)
        upload(test_client, b"Story Points,Fix Version\n1,R9\n", filename="second.csv")

        data = test_client.get("/dashboard.json").get_json()
        assert data["summary"]["total_items"] == 1
        assert len(app_module.datasets) == 1


class TestDashboardRoute:
    """Test cases for the dashboard tabs."""

    def test_deep_dive_tab(self, test_client):
        upload(test_client, EXPORT_CSV)

        response = test_client.get("/dashboard?tab=deep")
        assert response.status_code == 200
        html = response.data.decode("utf-8")
        assert "<h2>Knowledge Radar</h2>" in html
        assert "<h2>Efficiency Scatter</h2>" in html
        assert "Release Velocity</h2>" not in html

    def test_unknown_tab_falls_back_to_summary(self, test_client):
        upload(test_client, EXPORT_CSV)

        response = test_client.get("/dashboard?tab=nonsense")
        assert b"<h2>Release Velocity</h2>" in response.data

    def test_kpis(self, test_client):
        upload(test_client, EXPORT_CSV)

        html = test_client.get("/dashboard").data.decode("utf-8")
        assert '<div class="kpi-value">18</div>' in html
        assert '<div class="kpi-value">4.5</div>' in html

    def test_dashboard_json(self, test_client):
        upload(test_client, EXPORT_CSV)

        data = test_client.get("/dashboard.json").get_json()
        assert data["summary"] == {
            "total_points": 18.0,
            "total_items": 4,
            "avg_complexity": 4.5,
            "distinct_release_sprint_pairs": 4,
        }
        assert [point["release"] for point in data["velocity"]] == ["R1", "R2"]
        assert data["burnup"][-1]["cumulative_points"] == 18.0
        assert data["module_assignee"]["modules"] == ["Payments", "Search"]
        assert data["module_assignee"]["assignees"] == ["Alice", "Bob", "Carol"]
        assert data["module_assignee"]["points"]["Search"]["Bob"] == 0.0
        assert len(data["efficiency"]) == 4


def test_clear(test_client):
    upload(test_client, EXPORT_CSV)

    response = test_client.post("/clear")
    assert response.status_code == 302
    assert test_client.get("/dashboard.json").status_code == 404
    assert app_module.datasets == {}


def test_clear_requires_post(test_client):
    assert test_client.get("/clear").status_code == 405


def test_sessions_are_isolated(flask_app, test_client):
    upload(test_client, EXPORT_CSV)

    other_client = flask_app.test_client()
    assert other_client.get("/dashboard.json").status_code == 404


class TestDatasetStore:
    """Test the in-memory store of uploaded datasets stays bounded."""

    def test_store_is_capped_across_clients(self, flask_app, test_client, mocker):
        mock_time = mocker.patch("retro_insights.webapp.app.time")
        mock_time.time.side_effect = itertools.count(1000.0)

        clients = [flask_app.test_client() for _ in range(50)]
        for client in clients:
            upload(client, EXPORT_CSV)

        assert len(app_module.datasets) == flask_app.config["MAX_DATASETS"]
        # The most recent upload survives, the oldest one is evicted
        assert clients[-1].get("/dashboard.json").status_code == 200
        assert clients[0].get("/dashboard.json").status_code == 404
        assert clients[0].get("/dashboard").status_code == 302

    def test_reupload_does_not_grow_store(self, test_client):
        for _ in range(5):
            upload(test_client, EXPORT_CSV)

        assert len(app_module.datasets) == 1

    def test_expired_dataset_is_dropped(self, test_client, mocker):
        mock_time = mocker.patch("retro_insights.webapp.app.time")
        mock_time.time.return_value = 1000.0
        upload(test_client, EXPORT_CSV)

        mock_time.time.return_value = 1000.0 + webapp.config["DATASET_TTL"]

        assert test_client.get("/dashboard.json").status_code == 404
        assert app_module.datasets == {}

    def test_expired_datasets_evicted_on_upload(self, flask_app, mocker):
        mock_time = mocker.patch("retro_insights.webapp.app.time")
        mock_time.time.return_value = 1000.0
        stale = flask_app.test_client()
        upload(stale, EXPORT_CSV)

        mock_time.time.return_value = 1000.0 + flask_app.config["DATASET_TTL"] + 1
        fresh = flask_app.test_client()
        upload(fresh, EXPORT_CSV)

        assert len(app_module.datasets) == 1
        assert fresh.get("/dashboard.json").status_code == 200
