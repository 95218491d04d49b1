import logging
import uuid

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from core.error_handling import register_exception_handlers, translate_exception
from core.exceptions import (
    ConflictError,
    ErrorKind,
    ModifyDatabaseError,
    NotFoundError,
    UnauthorizedError,
    UnexpectedError,
)
from core.logging_config import CorrelationIdFilter, get_logger


@pytest.mark.parametrize("exc, status, error", [
    (NotFoundError("Property not found"), 404, "Not Found"),
    (ConflictError("The e-mail is already registered."), 409, "Conflict"),
    (UnauthorizedError("Unauthorized access"), 401, "Unauthorized"),
    (ModifyDatabaseError(IOError("disk full")), 500, "Conflict"),
    (UnexpectedError(RuntimeError("boom")), 500, "Internal Server Error"),
])
def test_known_kinds(exc, status, error):
    status_code, body = translate_exception(exc)
    assert status_code == status
    assert body["error"] == error
    assert body["message"]


def test_kinds_are_distinct():
    kinds = {NotFoundError("x").kind, ConflictError("x").kind, UnauthorizedError("x").kind,
             ModifyDatabaseError(ValueError()).kind, UnexpectedError(ValueError()).kind}
    assert kinds == set(ErrorKind)


def test_foreign_exception_uses_its_own_message():
    status_code, body = translate_exception(Exception("Something went wrong"))
    assert status_code == 500
    assert body == {"error": "Internal Server Error", "message": "Something went wrong"}


def test_empty_message_is_never_returned():
    _, body = translate_exception(KeyError())
    assert body["message"] == "KeyError"
    _, body = translate_exception(UnexpectedError(ValueError()))
    assert body["message"] == "ValueError"


@pytest.fixture
def client():
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/ok")
    async def ok():
        return {"fine": True}

    @app.get("/conflict")
    async def conflict():
        raise ConflictError("The e-mail is already registered.")

    @app.get("/logs")
    async def logs():
        get_logger("tests.handler").info("handling request")
        return {"logged": True}

    @app.get("/crash")
    async def crash():
        raise Exception("Something went wrong")

    return TestClient(app)


def test_success_passes_through(client):
    resp = client.get("/ok")
    assert resp.status_code == 200
    assert resp.json() == {"fine": True}


def test_domain_error_response(client):
    resp = client.get("/conflict")
    assert resp.status_code == 409
    assert resp.headers["content-type"] == "application/json"
    assert resp.json() == {"error": "Conflict", "message": "The e-mail is already registered."}


def test_unhandled_error_response(client):
    resp = client.get("/crash")
    assert resp.status_code == 500
    assert resp.json() == {"error": "Internal Server Error", "message": "Something went wrong"}


def test_unknown_route_keeps_error_shape(client):
    resp = client.get("/nope")
    assert resp.status_code == 404
    assert resp.json()["error"] == "Not Found"


def test_correlation_id_is_reused(client):
    cid = str(uuid.uuid4())
    resp = client.get("/ok", headers={"X-Correlation-ID": cid})
    assert resp.headers["X-Correlation-ID"] == cid


def test_correlation_id_is_generated(client):
    resp = client.get("/ok")
    uuid.UUID(resp.headers["X-Correlation-ID"])


def test_correlation_id_on_failures(client):
    cid = "abc-123"
    assert client.get("/crash", headers={"X-Correlation-ID": cid}).headers["X-Correlation-ID"] == cid
    assert client.get("/conflict", headers={"X-Correlation-ID": cid}).headers["X-Correlation-ID"] == cid


def test_correlation_id_is_bound_to_log_records(client, caplog):
    caplog.handler.addFilter(CorrelationIdFilter())
    caplog.set_level(logging.INFO, logger="tests.handler")

    client.get("/logs", headers={"X-Correlation-ID": "req-42"})

    records = [r for r in caplog.records if r.name == "tests.handler"]
    assert len(records) == 1
    assert records[0].correlation_id == "req-42"
