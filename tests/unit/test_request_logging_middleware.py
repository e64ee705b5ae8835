from __future__ import annotations

import pytest
from fastapi import FastAPI
from starlette.testclient import TestClient

from moodlog.app.core.logging import configure_logging
from moodlog.app.metrics import REQUEST_COUNT, REQUEST_ERRORS
from moodlog.app.middleware import RequestLoggingMiddleware


def _metric_value(counter, **labels) -> float:
    for family in counter.collect():
        for sample in family.samples:
            if all(sample.labels.get(key) == value for key, value in labels.items()):
                return sample.value
    return 0.0


def _app_with_middleware() -> FastAPI:
    configure_logging()
    app = FastAPI()
    app.add_middleware(RequestLoggingMiddleware)
    return app


def test_request_logging_success_adds_header() -> None:
    app = _app_with_middleware()

    @app.get("/ping")
    async def ping() -> dict[str, str]:  # pragma: no cover - executed via client
        return {"pong": "ok"}

    before = _metric_value(REQUEST_COUNT, method="GET", path="/ping", status="200")
    with TestClient(app) as client:
        response = client.get("/ping")
    after = _metric_value(REQUEST_COUNT, method="GET", path="/ping", status="200")

    assert response.status_code == 200
    assert response.headers.get("X-Request-ID")
    assert after == pytest.approx(before + 1.0)


def test_request_logging_failure_logs_error() -> None:
    app = _app_with_middleware()

    @app.get("/boom")
    async def boom() -> dict[str, str]:  # pragma: no cover - executed via client
        raise RuntimeError("boom")

    before_count = _metric_value(REQUEST_COUNT, method="GET", path="/boom", status="500")
    before_errors = _metric_value(REQUEST_ERRORS, method="GET", path="/boom", status="500")

    with TestClient(app) as client:
        with pytest.raises(RuntimeError):
            client.get("/boom")

    after_count = _metric_value(REQUEST_COUNT, method="GET", path="/boom", status="500")
    after_errors = _metric_value(REQUEST_ERRORS, method="GET", path="/boom", status="500")

    assert after_count == pytest.approx(before_count + 1.0)
    assert after_errors == pytest.approx(before_errors + 1.0)


def test_request_logging_reuses_incoming_request_id() -> None:
    app = _app_with_middleware()

    @app.get("/echo")
    async def echo() -> dict[str, str]:  # pragma: no cover - executed via client
        return {"ok": "yes"}

    with TestClient(app) as client:
        response = client.get("/echo", headers={"X-Request-ID": "req-fixed"})

    assert response.status_code == 200
    assert response.headers["X-Request-ID"] == "req-fixed"


def test_request_logging_labels_routes_by_template() -> None:
    app = _app_with_middleware()

    @app.get("/entries/{entry_id}")
    async def entry(entry_id: int) -> dict[str, int]:  # pragma: no cover - executed via client
        if entry_id < 0:
            raise RuntimeError("negative id")
        return {"id": entry_id}

    template = "/entries/{entry_id}"
    before_ok = _metric_value(REQUEST_COUNT, method="GET", path=template, status="200")
    before_err = _metric_value(REQUEST_ERRORS, method="GET", path=template, status="500")

    with TestClient(app) as client:
        assert client.get("/entries/7?verbose=1").status_code == 200
        with pytest.raises(RuntimeError):
            client.get("/entries/-1")

    assert _metric_value(
        REQUEST_COUNT, method="GET", path=template, status="200"
    ) == pytest.approx(before_ok + 1.0)
    assert _metric_value(
        REQUEST_ERRORS, method="GET", path=template, status="500"
    ) == pytest.approx(before_err + 1.0)
    assert _metric_value(REQUEST_COUNT, method="GET", path="/entries/7", status="200") == 0.0
