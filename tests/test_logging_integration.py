"""
Activity decorators, request middleware and the logging setup.
"""

import logging
import os

import pytest

from app.core.logging_config import build_logging_config, setup_logging
from app.utils.logging_decorator import extract_id_from_result, log_create, log_delete, log_view


class Created:
    id = 42


def test_log_create_records_action_and_id(caplog):
    @log_create("contacts", "Created new contact")
    def create(db, payload):
        return Created()

    with caplog.at_level(logging.INFO, logger="app.activity"):
        result = create(object(), {"name": "x"})

    assert isinstance(result, Created)
    assert "CREATE contacts #42: Created new contact" in caplog.text


def test_log_delete_uses_the_id_argument(caplog):
    @log_delete("attendance")
    def delete(db, attendance_id):
        return None

    with caplog.at_level(logging.INFO, logger="app.activity"):
        delete(object(), 7)

    assert "DELETE attendance #7" in caplog.text


def test_failed_operation_is_not_logged_as_activity(caplog):
    @log_view("contacts")
    def explode(db):
        raise RuntimeError("boom")

    with caplog.at_level(logging.INFO, logger="app.activity"):
        with pytest.raises(RuntimeError):
            explode(object())

    assert "VIEW contacts" not in caplog.text


def test_broken_record_id_does_not_mask_result(caplog):
    class Exploding:
        @property
        def id(self):
            raise ValueError("no id yet")

    @log_create("contacts")
    def create(db):
        return Exploding()

    with caplog.at_level(logging.WARNING, logger="app.activity"):
        result = create(object())

    assert isinstance(result, Exploding)
    assert "Failed to log activity for create" in caplog.text


def test_extract_id_from_result_handles_dicts_and_missing_ids():
    assert extract_id_from_result({"id": 3}) == 3
    assert extract_id_from_result({"name": "x"}) is None
    assert extract_id_from_result(None) is None


def test_mutating_requests_are_logged_by_middleware(client, auth_headers, caplog):
    with caplog.at_level(logging.INFO, logger="app.core.logging_middleware"):
        client.post("/contacts/search", json={"query": "anyone"}, headers=auth_headers)
        client.get("/health")

    assert "Request: POST /contacts/search - Status: 200" in caplog.text
    assert "/health" not in caplog.text


def test_failed_reads_are_logged_by_middleware(client, caplog):
    with caplog.at_level(logging.INFO, logger="app.core.logging_middleware"):
        client.get("/contacts/", headers={"Authorization": "Bearer bad"})

    assert "Request: GET /contacts/ - Status: 401" in caplog.text


def test_logging_config_writes_into_log_dir(tmp_path):
    config = build_logging_config(str(tmp_path))

    assert config["handlers"]["file_info"]["filename"] == os.path.join(str(tmp_path), "app_info.log")
    assert config["handlers"]["file_error"]["level"] == "ERROR"


def test_setup_logging_creates_log_files(tmp_path):
    log_dir = tmp_path / "logs"
    try:
        setup_logging(log_dir=str(log_dir), environment="testing")
        logging.getLogger("app.test").info("hello from the test suite")

        assert log_dir.is_dir()
        assert "hello from the test suite" in (log_dir / "app_info.log").read_text()
        assert logging.getLogger("app").level == logging.INFO
    finally:
        for name in ("", "app", "uvicorn"):
            logger = logging.getLogger(name)
            for handler in list(logger.handlers):
                handler.close()
                logger.removeHandler(handler)
        logging.getLogger("app").propagate = True
