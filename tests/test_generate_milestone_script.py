import importlib.util
from pathlib import Path
from unittest.mock import patch

from badges.milestone_badge import RenderSpec
from core.errors import NotFound

SCRIPT = Path(__file__).parent.parent / "scripts" / "generate_milestone.py"
_spec = importlib.util.spec_from_file_location("generate_milestone", SCRIPT)
cli = importlib.util.module_from_spec(_spec)
_spec.loader.exec_module(cli)


def test_writes_svg_and_prints_snippet(tmp_path, capsys):
    spec = RenderSpec(None, "100 Stars Milestone", "Achieved on 2023-06-15")
    out = tmp_path / "badge.svg"

    with patch.object(cli, "resolve_render_spec", return_value=spec) as resolve:
        code = cli.main(["https://github.com/octo/hello", "100", "--out", str(out), "--base-url", "https://b.test"])

    assert code == 0
    req = resolve.call_args.args[0]
    assert (req.owner, req.repo, req.milestone, req.logo_url) == ("octo", "hello", 100, None)
    assert "Achieved on 2023-06-15" in out.read_text(encoding="utf-8")
    printed = capsys.readouterr().out
    assert "[![Star Milestone](https://b.test/api/milestone?owner=octo&repo=hello&milestone=100)]" in printed
    assert "(https://github.com/octo/hello)" in printed


def test_bad_repo_url(capsys):
    assert cli.main(["https://example.com/x", "10"]) == 1
    assert "Invalid GitHub URL" in capsys.readouterr().err


def test_bad_milestone(capsys):
    assert cli.main(["https://github.com/octo/hello", "0"]) == 1
    assert "Invalid milestone" in capsys.readouterr().err


def test_upstream_failure(capsys):
    with patch.object(cli, "resolve_render_spec", side_effect=NotFound("GET /repos/octo/hello returned 404")):
        assert cli.main(["https://github.com/octo/hello", "10"]) == 1
    assert "returned 404" in capsys.readouterr().err


def test_oversized_milestone(capsys):
    assert cli.main(["https://github.com/octo/hello", "9" * 5000]) == 1
    assert "Invalid milestone" in capsys.readouterr().err
