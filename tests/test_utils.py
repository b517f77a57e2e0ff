"""
Unit tests for buildops.utils
"""
import subprocess
from pathlib import Path
from unittest.mock import patch, MagicMock

import pytest

from buildops.utils import (
    backup_file,
    copy_path,
    format_command,
    read_text_file,
    remove_path,
    run_command,
    write_text_file,
)


class TestRunCommand:

    def test_argument_list_runs_without_shell(self):
        assert run_command(["echo", "hello world"], capture_output=True) == "hello world"

    def test_string_runs_through_shell(self):
        assert run_command("echo one && echo two", capture_output=True) == "one\ntwo"

    def test_cwd_applies_to_the_invocation(self, tmp_path):
        output = run_command(["pwd"], cwd=str(tmp_path), capture_output=True)
        assert Path(output).resolve() == tmp_path.resolve()

    def test_no_capture_returns_none(self):
        assert run_command(["true"]) is None

    def test_failure_raises_when_checked(self):
        with pytest.raises(subprocess.CalledProcessError) as excinfo:
            run_command(["false"])
        assert excinfo.value.returncode == 1

    def test_failure_ignored_without_check(self):
        assert run_command(["false"], capture_output=True, check=False) == ""

    def test_missing_executable(self):
        with pytest.raises(subprocess.CalledProcessError) as excinfo:
            run_command(["definitely-not-a-real-tool-xyz"])
        assert excinfo.value.returncode == 127

    def test_missing_executable_without_check(self):
        assert run_command(["definitely-not-a-real-tool-xyz"], capture_output=True, check=False) == ""

    @patch("buildops.utils.subprocess.run")
    def test_dry_run_does_not_execute(self, mock_run):
        assert run_command(["rm", "-rf", "/"], dry_run=True, capture_output=True) == "Dry run output"
        assert run_command(["rm", "-rf", "/"], dry_run=True) is None
        mock_run.assert_not_called()

    @patch("buildops.utils.subprocess.run")
    def test_arguments_are_stringified(self, mock_run):
        mock_run.return_value = MagicMock(returncode=0, stdout="ok\n", stderr="")
        run_command(["docker", "build", Path("ctx")], cwd="/work", capture_output=True)

        args, kwargs = mock_run.call_args
        assert args[0] == ["docker", "build", "ctx"]
        assert kwargs["shell"] is False
        assert kwargs["cwd"] == "/work"

    def test_format_command(self):
        assert format_command(["git", "commit", "-m", "a message"]) == "git commit -m 'a message'"
        assert format_command("make all") == "make all"


class TestFileHelpers:

    def test_read_write_keep_line_endings(self, tmp_path):
        path = tmp_path / "file.txt"
        write_text_file(path, "a\r\nb\n")
        assert path.read_bytes() == b"a\r\nb\n"
        assert read_text_file(path) == "a\r\nb\n"

    def test_backup_file(self, tmp_path):
        path = tmp_path / "AssemblyInfo.cs"
        path.write_text("original")
        backup = backup_file(path)

        assert backup == tmp_path / "AssemblyInfo.cs.backup"
        assert backup.read_text() == "original"

    def test_copy_file_creates_parents(self, tmp_path):
        source = tmp_path / "a.txt"
        source.write_text("x")
        destination = copy_path(source, tmp_path / "out" / "nested" / "a.txt")
        assert destination.read_text() == "x"

    def test_copy_tree_merges(self, tmp_path):
        (tmp_path / "src" / "sub").mkdir(parents=True)
        (tmp_path / "src" / "sub" / "f.txt").write_text("new")
        (tmp_path / "dst").mkdir()
        (tmp_path / "dst" / "keep.txt").write_text("keep")

        copy_path(tmp_path / "src", tmp_path / "dst")
        assert (tmp_path / "dst" / "sub" / "f.txt").read_text() == "new"
        assert (tmp_path / "dst" / "keep.txt").exists()

    def test_copy_dry_run(self, tmp_path):
        source = tmp_path / "a.txt"
        source.write_text("x")
        copy_path(source, tmp_path / "b.txt", dry_run=True)
        assert not (tmp_path / "b.txt").exists()

    def test_remove_path(self, tmp_path):
        tree = tmp_path / "bin"
        (tree / "Release").mkdir(parents=True)
        (tree / "Release" / "app.dll").write_bytes(b"")

        assert remove_path(tree, dry_run=True)
        assert tree.exists()
        assert remove_path(tree)
        assert not tree.exists()
        assert not remove_path(tree)
