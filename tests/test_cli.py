"""CLI integration tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from lf.cli import _parse_args, main


@pytest.fixture
def project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A small project tree as the working directory, with an empty home."""
    root = tmp_path / "project"
    (root / "src").mkdir(parents=True)
    (root / "src" / "main.txt").write_text("fn main(){}\n")
    (root / "src" / "App.java").write_text("import a;\nimport b;\nclass App {}\n")
    (root / "node_modules").mkdir()
    (root / "node_modules" / "pkg.json").write_text("{}\n")
    (root / "debug.log").write_text("log\n")
    (root / ".gitignore").write_text("node_modules\n")
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(root)
    return root


def test_help_includes_tagline(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc:
        main(["--help"])
    assert exc.value.code == 0
    out = capsys.readouterr().out
    assert "lf: List files with line and token counts" in out
    assert "--mask-java-imports" in out
    assert "--no-gitignore" in out


def test_no_patterns_is_an_error(capsys: pytest.CaptureFixture[str]) -> None:
    assert main([]) == 1
    captured = capsys.readouterr()
    assert "At least one pattern must be provided" in captured.err
    assert captured.out == ""


def test_parse_args_tracks_explicit_flags() -> None:
    options, explicit = _parse_args(["src", "-n", "--no-tokens", "--mask-java-imports"])
    assert options.patterns == ["src"]
    assert options.no_clipboard is True
    assert options.count_tokens is False
    assert options.mask_imports == ["java"]
    assert explicit == {"no_clipboard", "count_tokens", "mask_imports"}

    options, explicit = _parse_args(["src"])
    assert options.no_clipboard is False
    assert options.respect_gitignore is True
    assert options.count_tokens is True
    assert explicit == set()


def test_stdout_run(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["**/*", "-n", "--no-tokens"]) == 0
    out = capsys.readouterr().out
    assert "src/main.txt\nfn main(){}\n\n\n" in out
    assert "node_modules" not in out
    assert out.endswith("Lines: 5\n")
    assert "Tokens" not in out


def test_exclusion_and_masking(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["**/*", "~*.log", "-n", "--no-tokens", "--mask-java-imports"]) == 0
    out = capsys.readouterr().out
    assert "debug.log" not in out
    assert "src/App.java\nimport ...\nclass App {}\n\n\n" in out


def test_no_gitignore_flag(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["**/*", "-n", "--no-tokens", "--no-gitignore"]) == 0
    assert "node_modules/pkg.json" in capsys.readouterr().out


def test_output_file(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["src", "-o", "ctx.txt", "--no-tokens"]) == 0
    out = capsys.readouterr().out
    assert out == "Lines: 4\n"
    content = (project / "ctx.txt").read_text()
    assert content.startswith("src/App.java\n")
    assert "src/main.txt\nfn main(){}\n\n\n" in content


def test_no_matches(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["*.rs", "-n", "--no-tokens"]) == 0
    assert capsys.readouterr().out == "No files found matching the patterns.\n"


def test_invalid_pattern(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["src", "~", "-n", "--no-tokens"]) == 1
    captured = capsys.readouterr()
    assert captured.err.startswith("Error: ")
    assert captured.out == ""


def test_unreadable_file_fails(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (project / "src" / "bad.txt").write_bytes(b"\xff\xfe\xfa\n")
    assert main(["src", "-n", "--no-tokens"]) == 1
    err = capsys.readouterr().err
    assert "bad.txt" in err


def test_config_file_is_applied(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (project / ".lf.toml").write_text(
        'output = "from-config.txt"\ncount-tokens = false\nexclude = ["*.log"]\n'
    )
    assert main(["."]) == 0
    assert capsys.readouterr().out == "Lines: 4\n"
    content = (project / "from-config.txt").read_text()
    assert "debug.log" not in content
    assert "src/main.txt" in content


def test_cli_flag_beats_config(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (project / "lf.toml").write_text('output = "from-config.txt"\ncount-tokens = false\n')
    assert main(["src", "-o", "from-cli.txt"]) == 0
    assert (project / "from-cli.txt").exists()
    assert not (project / "from-config.txt").exists()


def test_invalid_config_file(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (project / "lf.toml").write_text("jobs = = 1\n")
    assert main(["src", "-n", "--no-tokens"]) == 1
    assert "Invalid config file" in capsys.readouterr().err


def test_config_value_of_wrong_type(project: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (project / "lf.toml").write_text('jobs = "4"\n')
    assert main(["src", "-n", "--no-tokens"]) == 1
    err = capsys.readouterr().err
    assert "Invalid config file" in err
    assert "jobs must be an integer" in err
