import json
import logging

from todo_api import __main__ as entry
from todo_api.generate_openapi import generate_openapi
from todo_api.logging_config import LOG_FORMAT, setup_logging


def test_generate_openapi_writes_schema(tmp_path):
    out = tmp_path / "interfaces" / "openapi.json"
    written = generate_openapi(str(out))
    assert written == str(out)

    schema = json.loads(out.read_text(encoding="utf-8"))
    assert "/todos/paginated" in schema["paths"]
    assert "todos" in {tag["name"] for tag in schema["tags"]}


def test_setup_logging_attaches_one_handler():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    for handler in saved_handlers:
        root.removeHandler(handler)
    try:
        setup_logging("debug")
        setup_logging("warning")

        assert len(root.handlers) == 1
        assert root.handlers[0].formatter._fmt == LOG_FORMAT
        assert root.level == logging.WARNING
    finally:
        for handler in root.handlers[:]:
            root.removeHandler(handler)
        for handler in saved_handlers:
            root.addHandler(handler)
        root.setLevel(saved_level)


def test_main_serves_on_configured_port(monkeypatch):
    served = []

    class FakeServer:
        def __init__(self, config):
            self.config = config

        def run(self):
            served.append(self.config)

    monkeypatch.setenv("PORT", "8123")
    monkeypatch.setenv("HOST", "127.0.0.1")
    monkeypatch.setattr(entry, "Server", FakeServer)
    monkeypatch.setattr(entry, "setup_logging", lambda level: None)

    entry.main()

    assert len(served) == 1
    assert served[0].app == "todo_api.main:app"
    assert served[0].host == "127.0.0.1"
    assert served[0].port == 8123
