import io
import json
import textwrap
from pathlib import Path

import pytest

from envconf.cli.envconf import (
    EXIT_ERROR,
    EXIT_OK,
    build_parser,
    load_record_class,
    main,
    run_show,
    run_vars,
)

SETTINGS_MODULE = textwrap.dedent(
    """
    from dataclasses import dataclass, field

    from envconf import envfield


    @dataclass
    class Database:
        host: str = envfield("localhost", default="")
        port: int = envfield("5432", default=0)


    @dataclass
    class Settings:
        api_port: int = envfield("8080", default=0)
        hosts: list[str] = envfield("a,b", default_factory=list)
        token: bytes = envfield("abc", default=b"")
        database: Database = field(default_factory=Database)


    NOT_A_RECORD = 3
    """
)


@pytest.fixture
def settings_module(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> str:
    (tmp_path / "cli_settings_mod.py").write_text(SETTINGS_MODULE)
    monkeypatch.syspath_prepend(str(tmp_path))
    for name in ("CLI_API_PORT", "CLI_HOSTS", "CLI_TOKEN", "CLI_DATABASE_HOST", "CLI_DATABASE_PORT"):
        monkeypatch.delenv(name, raising=False)
    return "cli_settings_mod"


def test_build_parser():
    p = build_parser()
    assert p.prog == "envconf"
    args = p.parse_args(
        [
            "show",
            "pkg.mod:Settings",
            "--prefix",
            "MYAPP",
            "--item-delimiter",
            ";",
        ]
    )
    assert args.command == "show"
    assert args.record == "pkg.mod:Settings"
    assert args.prefix == "MYAPP"
    assert args.item_delimiter == ";"
    assert args.kv_delimiter == ":"
    assert args.log_level == "WARNING"


def test_build_parser_requires_prefix():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["vars", "pkg.mod:Settings"])


# --- load_record_class ---------------------------------------------------------------------------


def test_load_record_class(settings_module):
    cls = load_record_class(f"{settings_module}:Settings")
    assert cls.__name__ == "Settings"


@pytest.mark.parametrize("path", ["no_colon", ":Settings", "module:"])
def test_load_record_class_bad_format(path):
    with pytest.raises(ValueError):
        load_record_class(path)


def test_load_record_class_not_a_record(settings_module):
    with pytest.raises(TypeError):
        load_record_class(f"{settings_module}:NOT_A_RECORD")


# --- run_vars / run_show -------------------------------------------------------------------------


def test_run_vars_lists_variables(settings_module):
    cls = load_record_class(f"{settings_module}:Settings")
    out = io.StringIO()

    assert run_vars(cls, "CLI", out) == EXIT_OK

    lines = out.getvalue().splitlines()
    assert lines[0] == "CLI_API_PORT=8080  # api_port (int64)"
    assert lines[-1] == "CLI_DATABASE_PORT=5432  # database.port (int64)"
    assert len(lines) == 5


def test_run_show_prints_json(settings_module, monkeypatch):
    monkeypatch.setenv("CLI_DATABASE_PORT", "6543")
    cls = load_record_class(f"{settings_module}:Settings")
    out = io.StringIO()

    assert run_show(cls, "CLI", ",", ":", out) == EXIT_OK

    payload = json.loads(out.getvalue())
    assert payload == {
        "api_port": 8080,
        "hosts": ["a", "b"],
        "token": "abc",
        "database": {"host": "localhost", "port": 6543},
    }


# --- main ----------------------------------------------------------------------------------------


def test_main_show(settings_module, monkeypatch, capsys):
    monkeypatch.setenv("CLI_API_PORT", "9090")

    code = main(["show", f"{settings_module}:Settings", "--prefix", "CLI", "--indent", "0"])

    assert code == EXIT_OK
    assert json.loads(capsys.readouterr().out)["api_port"] == 9090


def test_main_reports_conversion_errors(settings_module, monkeypatch, capsys):
    monkeypatch.setenv("CLI_API_PORT", "not-a-port")

    code = main(["show", f"{settings_module}:Settings", "--prefix", "CLI"])

    assert code == EXIT_ERROR
    err = capsys.readouterr().err
    assert err.startswith("envconf: error: invalid syntax for integer")
    assert "CLI_API_PORT" in err


def test_main_reports_missing_module(capsys):
    code = main(["vars", "does_not_exist_mod:Settings", "--prefix", "CLI"])

    assert code == EXIT_ERROR
    assert "envconf: error:" in capsys.readouterr().err
