import importlib
import logging

serve = importlib.import_module("matchcentre.api.__main__")


def _capture(monkeypatch):
    calls = {}
    monkeypatch.setattr(serve.uvicorn, "run", lambda target, **kwargs: calls.update(target=target, **kwargs))
    monkeypatch.setattr(serve.logging, "basicConfig", lambda **kwargs: calls.update(logging=kwargs))
    return calls


def test_main_configures_logging_and_runs_uvicorn(monkeypatch):
    calls = _capture(monkeypatch)

    assert serve.main(["--port", "9001", "--log-level", "debug"]) == 0

    assert calls["target"] == "matchcentre.api.app:app"
    assert calls["port"] == 9001
    assert calls["host"] == "127.0.0.1"
    assert calls["reload"] is False
    assert calls["log_level"] == "debug"
    assert calls["logging"]["level"] == logging.DEBUG


def test_unknown_log_level_falls_back_to_info(monkeypatch):
    calls = _capture(monkeypatch)

    serve.main(["--log-level", "chatty"])

    assert calls["log_level"] == "info"
    assert calls["logging"]["level"] == logging.INFO
