from types import SimpleNamespace

import pytest

from conftest import FakeSession, media
from savedlinks_components import cli


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    monkeypatch.setattr(cli, "configure_logging", lambda *a, **k: None)


def test_unreadable_export_exits_with_1(tmp_path):
    assert cli.main([str(tmp_path / "missing.html"), "-o", str(tmp_path / "out")]) == 1
    assert not (tmp_path / "out").exists()


def test_run_downloads_and_exits_with_0(tmp_path, monkeypatch):
    export = tmp_path / "export.html"
    export.write_text(
        '<li><a href="https://i.redd.it/abc.jpg">a</a>'
        '<a href="https://www.reddit.com/r/forest/comments/abc123/">p</a></li>'
        '<li><a href="https://example.org/x">a</a>'
        '<a href="https://www.reddit.com/r/forest/comments/xyz/">p</a></li>',
        encoding="utf-8",
    )
    session = FakeSession({"https://i.redd.it/abc.jpg": media(b"jpeg")})
    monkeypatch.setattr(cli, "SessionFactory", lambda: SimpleNamespace(get=lambda: session))

    code = cli.main([str(export), "-o", str(tmp_path / "out"), "-w", "2", "--timeout", "5", "--no-pretty"])

    assert code == 0
    assert (tmp_path / "out" / "forest" / "abc123.jpg").exists()
    _, kwargs = session.calls[0]
    assert kwargs["timeout"] == (15, 5)


def test_parse_args_defaults():
    args = cli.parse_args(["export.html"])
    assert args.output == "downloads"
    assert args.workers == 4
    assert args.timeout == 120
    assert not args.no_pretty
