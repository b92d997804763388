from __future__ import annotations

import runpy
from pathlib import Path

import termite_app.__main__ as desktop_main


def test_main_without_args_passes_empty_list(monkeypatch) -> None:
    calls: list[list[str]] = []
    monkeypatch.setattr(desktop_main, "_cli_main", lambda argv=None: calls.append(list(argv)) or 0)

    rc = desktop_main.main([])
    assert rc == 0
    assert calls == [[]]


def test_main_passes_through_args(monkeypatch) -> None:
    calls: list[list[str]] = []
    monkeypatch.setattr(desktop_main, "_cli_main", lambda argv=None: calls.append(list(argv)) or 0)

    rc = desktop_main.main(["-e", "htop", "--hold"])
    assert rc == 0
    assert calls == [["-e", "htop", "--hold"]]


def test_main_returns_cli_exit_code(monkeypatch) -> None:
    monkeypatch.setattr(desktop_main, "_cli_main", lambda argv=None: 1)
    assert desktop_main.main(["-d", "/nonexistent"]) == 1


def test_main_module_runpath_without_package_context() -> None:
    main_path = (
        Path(__file__).resolve().parents[1]
        / "apps"
        / "desktop"
        / "termite_app"
        / "__main__.py"
    )
    result = runpy.run_path(str(main_path))
    assert "main" in result
