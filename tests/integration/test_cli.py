"""Integration tests for the ``python -m container_hooks`` command line."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path

import pytest

from container_hooks.__main__ import build_parser, main
from container_hooks.config import Settings

MakeHook = Callable[[str], str]


def _write_config(bundle: Path, hooks: dict[str, list[dict[str, object]]] | None) -> Path:
    config: dict[str, object] = {"ociVersion": "1.0.2"}
    if hooks is not None:
        config["hooks"] = hooks
    path = bundle / "config.json"
    path.write_text(json.dumps(config))
    return path


def _exit_code(argv: list[str]) -> int:
    with pytest.raises(SystemExit) as exc_info:
        main(argv)
    return int(exc_info.value.code or 0)


@pytest.mark.integration
class TestCli:
    def test_parser_phases(self) -> None:
        args = build_parser().parse_args(["poststart", "--bundle", "/b", "--id", "c1"])
        assert args.command == "poststart"
        assert args.config is None

    def test_no_hooks_section(self, tmp_path: Path, test_settings: Settings) -> None:
        _write_config(tmp_path, None)
        assert _exit_code(["prestart", "--bundle", str(tmp_path), "--id", "c1"]) == 0

    def test_runs_phase_hooks(
        self, make_hook: MakeHook, tmp_path: Path, test_settings: Settings
    ) -> None:
        out = tmp_path / "state.json"
        _write_config(tmp_path, {"poststart": [{"path": make_hook(f'cat > "{out}"')}]})

        assert _exit_code(["poststart", "--bundle", str(tmp_path), "--id", "c1"]) == 0
        assert json.loads(out.read_text())["bundlePath"] == str(tmp_path)

    def test_explicit_config(
        self, make_hook: MakeHook, tmp_path: Path, test_settings: Settings
    ) -> None:
        config = _write_config(tmp_path, {"poststop": [{"path": make_hook("exit 0")}]})
        bundle = tmp_path / "elsewhere"
        bundle.mkdir()
        argv = ["poststop", "--bundle", str(bundle), "--id", "c1", "--config", str(config)]
        assert _exit_code(argv) == 0

    def test_hook_failure_exit_code(
        self,
        make_hook: MakeHook,
        tmp_path: Path,
        test_settings: Settings,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        path = make_hook("echo nope >&2\nexit 4")
        _write_config(tmp_path, {"prestart": [{"path": path}]})

        assert _exit_code(["prestart", "--bundle", str(tmp_path), "--id", "c1"]) == 1
        err = capsys.readouterr().err
        assert f"pre-start hook {path} failed" in err
        assert "exit status 4" in err

    def test_missing_config_exit_code(
        self, tmp_path: Path, test_settings: Settings, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert _exit_code(["prestart", "--bundle", str(tmp_path), "--id", "c1"]) == 2
        assert "config.json" in capsys.readouterr().err

    def test_version(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert _exit_code(["--version"]) == 0
        assert capsys.readouterr().out.startswith("container-hooks ")

    def test_no_command_prints_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert _exit_code([]) == 1
        assert "usage:" in capsys.readouterr().out
