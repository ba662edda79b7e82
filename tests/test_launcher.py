import io
import subprocess
import sys
from pathlib import Path

from docopen.core import OpenError, Shell
from docopen.viewer import ResolvedViewer, SystemOpener, launch, resolve_viewer


def _index(tmp_path: Path) -> Path:
    path = tmp_path / "index.html"
    path.write_text("<html></html>", encoding="utf-8")
    return path


def test_configured_viewer_takes_precedence_over_browser_env(tmp_path: Path, fake_opener) -> None:
    index = _index(tmp_path)
    configured = ResolvedViewer(Path("/usr/bin/firefox"), ("--new-window",))

    launch(index, configured, Shell(stream=io.StringIO()), env={"BROWSER": "/usr/bin/chromium"}, opener=fake_opener)

    assert fake_opener.spawned == [["/usr/bin/firefox", "--new-window", str(index)]]
    assert fake_opener.defaults == []


def test_browser_env_used_without_extra_args(tmp_path: Path, fake_opener) -> None:
    index = _index(tmp_path)

    launch(index, None, Shell(stream=io.StringIO()), env={"BROWSER": "/usr/bin/chromium"}, opener=fake_opener)

    assert fake_opener.spawned == [["/usr/bin/chromium", str(index)]]
    assert fake_opener.defaults == []


def test_default_opener_invoked_once_without_config_or_env(tmp_path: Path, fake_opener) -> None:
    index = _index(tmp_path)

    launch(index, None, Shell(stream=io.StringIO()), env={}, opener=fake_opener)

    assert fake_opener.defaults == [index]
    assert fake_opener.spawned == []


def test_empty_browser_env_falls_through_to_default(tmp_path: Path, fake_opener) -> None:
    index = _index(tmp_path)

    launch(index, None, Shell(stream=io.StringIO()), env={"BROWSER": ""}, opener=fake_opener)

    assert fake_opener.defaults == [index]


def test_resolve_viewer_chain() -> None:
    configured = ResolvedViewer(Path("w3m"))
    assert resolve_viewer(configured, {"BROWSER": "lynx"}) == configured
    assert resolve_viewer(None, {"BROWSER": "lynx"}) == ResolvedViewer(Path("lynx"))
    assert resolve_viewer(None, {}) is None


def test_missing_program_produces_one_warning(tmp_path: Path) -> None:
    index = _index(tmp_path)
    missing = tmp_path / "no-such-browser"
    out = io.StringIO()

    launch(index, ResolvedViewer(missing), Shell(stream=out), env={}, opener=SystemOpener())

    warnings = [line for line in out.getvalue().splitlines() if line.startswith("warning:")]
    assert len(warnings) == 1
    assert f"Couldn't open docs with {missing}" in warnings[0]


def test_nonzero_exit_produces_one_warning(tmp_path: Path) -> None:
    index = _index(tmp_path)
    viewer = ResolvedViewer(Path(sys.executable), ("-c", "raise SystemExit(3)"))
    out = io.StringIO()

    launch(index, viewer, Shell(stream=out), env={}, opener=SystemOpener())

    text = out.getvalue()
    assert text.count("warning:") == 1
    assert f"Couldn't open docs with {sys.executable}" in text
    assert "exit status 3" in text


def test_spawn_error_from_env_browser_is_a_warning(tmp_path: Path, fake_opener) -> None:
    index = _index(tmp_path)
    fake_opener.spawn_error = subprocess.CalledProcessError(1, ["/bin/false"])
    out = io.StringIO()

    launch(index, None, Shell(stream=out), env={"BROWSER": "/bin/false"}, opener=fake_opener)

    assert out.getvalue().count("warning:") == 1
    assert "Couldn't open docs with /bin/false" in out.getvalue()


def test_default_opener_failure_is_a_warning_with_cause(tmp_path: Path, fake_opener) -> None:
    index = _index(tmp_path)
    error = OpenError(f"failed to open {index}")
    error.__cause__ = FileNotFoundError("xdg-open not found")
    fake_opener.default_error = error
    out = io.StringIO()

    launch(index, None, Shell(stream=out), env={}, opener=fake_opener)

    text = out.getvalue()
    assert text.startswith("warning: couldn't open docs")
    assert "Caused by:" in text
    assert "xdg-open not found" in text
    assert fake_opener.defaults == [index]


def test_null_byte_in_configured_program_is_a_warning(tmp_path: Path) -> None:
    index = _index(tmp_path)
    viewer = ResolvedViewer(Path("fire\x00fox"), ("--new-window",))
    out = io.StringIO()

    launch(index, viewer, Shell(stream=out), env={}, opener=SystemOpener())

    text = out.getvalue()
    assert text.count("warning:") == 1
    assert "Couldn't open docs with fire" in text
    assert "null byte" in text
