"""Tests for the command-line entrypoint."""

import pytest

from burnit import main as main_module


def test_main_runs_uvicorn_with_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[tuple[str, dict[str, object]]] = []

    def fake_run(app: str, **kwargs: object) -> None:
        calls.append((app, kwargs))

    monkeypatch.setenv("HOST", "0.0.0.0")
    monkeypatch.setenv("PORT", "4000")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setattr(main_module.uvicorn, "run", fake_run)

    main_module.main()

    assert calls == [
        (
            "burnit.api.asgi:app",
            {"host": "0.0.0.0", "port": 4000, "log_level": "debug"},
        )
    ]
