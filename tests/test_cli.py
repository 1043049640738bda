"""
Critical CLI tests: focus on data safety, correct file selection, and deletion logic.
These tests prevent catastrophic bugs that could cause data loss.
"""
import os
import sys
from unittest import mock
import pytest

from find_duplicates.cli import CLIApplication
from find_duplicates.services.file_service import FileService


def run_cli(*argv):
    CLIApplication().run(list(argv))


class TestArgumentParsing:
    def test_defaults(self):
        args = CLIApplication.parse_args(["-i", "/data"])

        assert args.roots == ["/data"]
        assert args.min_size == "1"
        assert args.excluded_dirs == []
        assert args.excluded_patterns == []
        assert not args.no_recurse
        assert args.keep is None

    def test_multiple_roots_and_patterns(self):
        args = CLIApplication.parse_args(["-i", "/a", "/b", "-x", "*/build", "*.o", "-m", "500KB"])

        assert args.roots == ["/a", "/b"]
        assert args.excluded_patterns == ["*/build", "*.o"]
        assert args.min_size == "500KB"

    def test_input_is_required(self):
        with pytest.raises(SystemExit):
            CLIApplication.parse_args([])

    def test_keep_choices(self):
        with pytest.raises(SystemExit):
            CLIApplication.parse_args(["-i", "/a", "--keep", "largest"])


class TestValidation:
    def test_force_needs_an_action(self, temp_dir, capsys):
        with pytest.raises(SystemExit) as exc:
            run_cli("-i", str(temp_dir), "--force")

        assert exc.value.code == 1
        assert "--force can only be used" in capsys.readouterr().err

    def test_permanent_needs_keep(self, temp_dir):
        with pytest.raises(SystemExit):
            run_cli("-i", str(temp_dir), "--permanent", "--save", str(temp_dir / "out.txt"))

    def test_missing_directory(self, temp_dir, capsys):
        with pytest.raises(SystemExit):
            run_cli("-i", str(temp_dir / "missing"))

        assert "Directory not found" in capsys.readouterr().err

    def test_invalid_size(self, temp_dir, capsys):
        with pytest.raises(SystemExit):
            run_cli("-i", str(temp_dir), "-m", "lots")

        assert "Invalid size format" in capsys.readouterr().err

    def test_keep_without_force_in_pipe(self, temp_dir, capsys):
        """Never wait for a confirmation nobody can type."""
        with mock.patch("sys.stdin") as stdin:
            stdin.isatty.return_value = False
            with pytest.raises(SystemExit):
                run_cli("-i", str(temp_dir), "--keep", "first")

        assert "non-interactive" in capsys.readouterr().err

    def test_malformed_pattern_reports_and_exits(self, temp_dir, capsys):
        with pytest.raises(SystemExit) as exc:
            run_cli("-i", str(temp_dir), "-x", "*/[abc")

        assert exc.value.code == 1
        assert "Invalid exclusion pattern" in capsys.readouterr().err


class TestListing:
    def test_prints_groups_and_status(self, test_files, temp_dir, capsys):
        run_cli("-i", str(temp_dir))

        out = capsys.readouterr().out
        assert "2 x 2048  (2048 wasted)" in out
        assert "3 x 1024  (2048 wasted)" in out
        assert str(test_files["sub_dup"]) in out
        assert str(test_files["unique1"]) not in out
        assert out.rstrip().endswith("7.17 kB wasted in 3 files (in 2 groups)")

    def test_larger_waste_listed_first(self, test_files, temp_dir, capsys):
        run_cli("-i", str(temp_dir))

        out = capsys.readouterr().out
        assert out.index(str(test_files["dup2_a"])) < out.index(str(test_files["dup1_a"]))

    def test_quiet_prints_status_only(self, test_files, temp_dir, capsys):
        run_cli("-i", str(temp_dir), "-q")

        assert capsys.readouterr().out == "7.17 kB wasted in 3 files (in 2 groups)\n"

    def test_no_duplicates(self, temp_dir, capsys):
        (temp_dir / "only.txt").write_bytes(b"x")

        run_cli("-i", str(temp_dir))

        assert capsys.readouterr().out == "0 B wasted in 0 files (in 0 groups)\n"

    def test_min_size_filters(self, test_files, temp_dir, capsys):
        run_cli("-i", str(temp_dir), "-m", "2KB", "-q")

        assert capsys.readouterr().out == "4.1 kB wasted in 1 files (in 1 groups)\n"

    def test_no_recurse(self, test_files, temp_dir, capsys):
        run_cli("-i", str(temp_dir), "--no-recurse")

        assert str(test_files["sub_dup"]) not in capsys.readouterr().out

    def test_excluded_dirs(self, test_files, temp_dir, capsys):
        run_cli("-i", str(temp_dir), "-e", str(temp_dir / "subdir"))

        assert str(test_files["sub_dup"]) not in capsys.readouterr().out

    def test_excluded_dir_under_symlinked_root(self, temp_dir):
        """An excluded directory given through a symlinked root still prunes the walk."""
        real = temp_dir / "real"
        (real / "skip").mkdir(parents=True)
        (real / "skip" / "a.bin").write_bytes(b"same")
        (real / "skip" / "b.bin").write_bytes(b"same")
        link = temp_dir / "link"
        link.symlink_to(real, target_is_directory=True)

        app = CLIApplication()
        args = app.parse_args(["-i", str(link), "-e", str(link / "skip")])
        groups = app.run_search(app.create_params(args))

        assert groups == []

    def test_symlinked_root_reports_real_paths(self, temp_dir, capsys):
        real = temp_dir / "real"
        real.mkdir()
        (real / "a.bin").write_bytes(b"same")
        (real / "b.bin").write_bytes(b"same")
        link = temp_dir / "link"
        link.symlink_to(real, target_is_directory=True)

        run_cli("-i", str(link))

        out = capsys.readouterr().out
        assert str(real / "a.bin") in out
        assert str(link / "a.bin") not in out


class TestKeep:
    def test_keep_first_trashes_all_but_first(self, test_files, temp_dir):
        with mock.patch.object(FileService, "move_to_trash") as mock_trash:
            run_cli("-i", str(temp_dir), "--keep", "first", "--force")

        deleted = {call.args[0] for call in mock_trash.call_args_list}
        assert deleted == {str(test_files["dup2_b"]), str(test_files["dup1_b"]), str(test_files["sub_dup"])}

    def test_permanent_removes_files(self, test_files, temp_dir, capsys):
        run_cli("-i", str(temp_dir), "--keep", "first", "--force", "--permanent")

        assert test_files["dup1_a"].exists()
        assert not test_files["dup1_b"].exists()
        assert not test_files["sub_dup"].exists()
        assert "3 items deleted" in capsys.readouterr().out

    def test_keep_newest(self, test_files, temp_dir):
        os.utime(test_files["dup2_b"], (10_000, 10_000))
        os.utime(test_files["dup2_a"], (20_000, 20_000))

        with mock.patch.object(FileService, "move_to_trash") as mock_trash:
            run_cli("-i", str(temp_dir), "--keep", "newest", "--force", "-q")

        deleted = {call.args[0] for call in mock_trash.call_args_list}
        assert str(test_files["dup2_b"]) in deleted
        assert str(test_files["dup2_a"]) not in deleted

    def test_declined_confirmation_deletes_nothing(self, test_files, temp_dir):
        app = CLIApplication()
        groups = app.run_search(app.create_params(app.parse_args(["-i", str(temp_dir)])))

        with mock.patch("builtins.input", return_value="n"), \
                mock.patch.object(FileService, "delete_files") as delete:
            deleted = app.execute_keep(groups, "first", permanent=False, force=False)

        assert deleted == set()
        delete.assert_not_called()

    def test_deletion_errors_are_reported(self, test_files, temp_dir, capsys):
        with mock.patch.object(FileService, "move_to_trash", side_effect=RuntimeError("trash is full")):
            run_cli("-i", str(temp_dir), "--keep", "first", "--force")

        out = capsys.readouterr().out
        assert "0 items deleted" in out
        assert "trash is full" in out


class TestSave:
    def test_save_all_listed_paths(self, test_files, temp_dir):
        dest = temp_dir / "out" / "list.txt"
        dest.parent.mkdir()

        run_cli("-i", str(temp_dir), "--save", str(dest), "-q")

        lines = dest.read_text(encoding="utf-8").splitlines()
        assert len(lines) == 5
        assert str(test_files["unique1"]) not in lines

    def test_save_refuses_overwrite_without_force(self, test_files, temp_dir, capsys):
        dest = temp_dir / "existing.txt"
        dest.write_text("keep")

        with pytest.raises(SystemExit):
            run_cli("-i", str(temp_dir), "--save", str(dest))

        assert dest.read_text() == "keep"
        assert "Cannot save file list" in capsys.readouterr().err

    def test_save_with_keep_lists_selected(self, test_files, temp_dir):
        dest = temp_dir / "selected.txt"

        with mock.patch.object(FileService, "move_to_trash"):
            run_cli("-i", str(temp_dir), "--keep", "first", "--save", str(dest), "--force", "-q")

        lines = set(dest.read_text(encoding="utf-8").splitlines())
        assert lines == {str(test_files["dup2_b"]), str(test_files["dup1_b"]), str(test_files["sub_dup"])}
