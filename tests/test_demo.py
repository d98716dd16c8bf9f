import pytest

import optfold
from optfold import const, demo
from optfold.errors import InvalidValue, MissingValue, UnknownOption


def test_defaults():
    args = demo.parseArgs([])
    assert args == demo.DemoArgs()


def test_flags_and_counter():
    args = demo.parseArgs(["-ab", "-vvv", "-zv", "file"])
    assert args.a and args.b and args.z
    assert args.v == 4
    assert args.positional == ["file"]


def test_foo_forms():
    assert demo.parseArgs(["--foo", "x"]).foo == "x"
    assert demo.parseArgs(["--foo=x"]).foo == "x"
    assert demo.parseArgs(["-f", "x"]).foo == "x"
    assert demo.parseArgs(["-fx"]).foo == "x"
    assert demo.parseArgs(["-afx"]).foo == "x"


def test_jobs():
    assert demo.parseArgs(["-j4"]).jobs == 4
    assert demo.parseArgs(["--jobs", "2"]).jobs == 2


def test_jobs_rejects_bad_values():
    with pytest.raises(InvalidValue) as e:
        demo.parseArgs(["--jobs=many"])
    assert str(e.value) == "Invalid value for jobs: 'many' is not a number"

    with pytest.raises(InvalidValue) as e:
        demo.parseArgs(["-j", "0"])
    assert e.value.name == "j"


def test_unknown_option():
    with pytest.raises(UnknownOption) as e:
        demo.parseArgs(["-aq"])
    assert str(e.value) == "Invalid option: q"


def test_missing_value():
    with pytest.raises(MissingValue):
        demo.parseArgs(["--foo"])


def test_end_of_options():
    args = demo.parseArgs(["-a", "--", "-b", "--help"])
    assert args.a and not args.b and not args.help
    assert args.positional == ["-b", "--help"]


def test_usage():
    assert demo.usage() == (
        f"{const.ARGV0} [-abzv] [--foo|-f VALUE] [--jobs|-j N] [--graph FILE]"
        " [--verbose] [--version] [--help|-h] [ARGS...]"
    )


def test_report():
    args = demo.parseArgs(["-fbar", "-vv", "one", "two"])
    assert demo.report(args).splitlines() == [
        "foo: 'bar'",
        "a: False",
        "b: False",
        "z: False",
        "v: 2",
        "jobs: 1",
        "positional: one, two",
    ]


# --- Entry Point ------------------------------------------------------------ #


def test_main_reports(capsys, monkeypatch):
    monkeypatch.delenv(const.EXTRA_ARGS_ENV, raising=False)
    assert optfold.main(["-a", "x"]) == 0
    out = capsys.readouterr().out
    assert "a: True" in out
    assert "positional: x" in out


def test_main_error(capsys, monkeypatch):
    monkeypatch.delenv(const.EXTRA_ARGS_ENV, raising=False)
    assert optfold.main(["--nope"]) == 1
    captured = capsys.readouterr()
    assert "Invalid option: nope" in captured.err
    assert "Usage:" in captured.out


def test_main_help(capsys, monkeypatch):
    monkeypatch.delenv(const.EXTRA_ARGS_ENV, raising=False)
    assert optfold.main(["-h"]) == 0
    out = capsys.readouterr().out
    assert "--jobs N" in out


def test_main_version(capsys, monkeypatch):
    monkeypatch.delenv(const.EXTRA_ARGS_ENV, raising=False)
    assert optfold.main(["--version"]) == 0
    assert const.VERSION_STR in capsys.readouterr().out


def test_main_extra_args(capsys, monkeypatch):
    monkeypatch.setenv(const.EXTRA_ARGS_ENV, "-z -j 3")
    assert optfold.main(["pos"]) == 0
    out = capsys.readouterr().out
    assert "z: True" in out
    assert "jobs: 3" in out


def test_main_graph(capsys, monkeypatch, tmp_path):
    pytest.importorskip("graphviz")
    monkeypatch.delenv(const.EXTRA_ARGS_ENV, raising=False)
    path = tmp_path / "out.gv"
    assert optfold.main(["--graph", str(path)]) == 0
    assert path.exists()


def test_main_graph_unwritable(capsys, monkeypatch, tmp_path):
    pytest.importorskip("graphviz")
    monkeypatch.delenv(const.EXTRA_ARGS_ENV, raising=False)
    blocker = tmp_path / "blocker"
    blocker.write_text("")
    assert optfold.main(["--graph", str(blocker / "out.gv")]) == 1
    assert "Failed to write" in capsys.readouterr().err


def test_verbose_format_honors_no_color(monkeypatch):
    monkeypatch.setenv("NO_COLOR", "1")
    fmt = optfold.logger.verboseFormat()
    assert "\033[" not in fmt
    assert fmt == "%(asctime)s %(levelname)s %(name)s: %(message)s"
