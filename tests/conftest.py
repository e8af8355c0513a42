import pytest

import app as checker_app
import lookup


class FakeResponse:
    def __init__(self, status_code, body=None):
        self.status_code = status_code
        self._body = body

    def json(self):
        if self._body is None:
            raise ValueError("No JSON body")
        return self._body


@pytest.fixture
def app():
    flask_app = checker_app.app
    flask_app.config.update(
        TESTING=True,
        NAMESLOL_API_URL="https://lookup.test",
        ENVIRONMENT="development",
    )
    return flask_app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def fake_api(monkeypatch):
    """Route lookup.requests.get to a canned response and record calls."""
    calls = []
    state = {"response": FakeResponse(404)}

    def fake_get(url, headers=None, timeout=None):
        calls.append(url)
        result = state["response"]
        if isinstance(result, Exception):
            raise result
        return result

    def respond(status_code, body=None):
        state["response"] = FakeResponse(status_code, body)

    def fail(exc):
        state["response"] = exc

    monkeypatch.setattr(lookup.requests, "get", fake_get)
    fake_get.calls = calls
    fake_get.respond = respond
    fake_get.fail = fail
    return fake_get
