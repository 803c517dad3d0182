"""Tests for clonekit.mirror."""

from __future__ import annotations

import os
import shutil
from unittest.mock import patch

import pytest

from clonekit.errors import NotFoundError, SelfCopyError
from clonekit.mirror import CopyResult, copy_tree, directory_size


@pytest.fixture
def tree(tmp_path):
    src = tmp_path / "src"
    (src / "sub" / "deep").mkdir(parents=True)
    (src / "a.bin").write_bytes(b"a" * 100)
    (src / "b.bin").write_bytes(b"b" * 50)
    (src / "sub" / "c.bin").write_bytes(b"c" * 25)
    (src / "sub" / "deep" / "d.bin").write_bytes(b"d" * 25)
    return src


class TestDirectorySize:
    def test_recursive_total(self, tree):
        assert directory_size(tree) == 200

    def test_empty(self, tmp_path):
        assert directory_size(tmp_path) == 0


class TestCopyTree:
    def test_copies_everything(self, tree, tmp_path):
        dst = tmp_path / "dst"
        result = copy_tree(tree, dst)
        assert (dst / "a.bin").read_bytes() == b"a" * 100
        assert (dst / "sub" / "deep" / "d.bin").read_bytes() == b"d" * 25
        assert result.total_bytes == 200
        assert result.copied_bytes == 200
        assert result.files_copied == 4
        assert result.fraction == 1.0
        assert not result.cancelled
        assert result.skipped == []

    def test_overwrites_existing(self, tree, tmp_path):
        dst = tmp_path / "dst"
        dst.mkdir()
        (dst / "a.bin").write_text("stale")
        (dst / "extra.txt").write_text("kept")
        copy_tree(tree, dst)
        assert (dst / "a.bin").read_bytes() == b"a" * 100
        assert (dst / "extra.txt").read_text() == "kept"

    def test_progress_monotonic_and_complete(self, tree, tmp_path):
        seen = []
        copy_tree(tree, tmp_path / "dst", lambda path, fraction: seen.append(fraction))
        assert len(seen) == 4
        assert seen == sorted(seen)
        assert all(0.0 <= f <= 1.0 for f in seen)
        assert seen[-1] == 1.0

    def test_files_before_subdirectories(self, tree, tmp_path):
        order = []
        copy_tree(tree, tmp_path / "dst", lambda path, fraction: order.append(path.name))
        assert order == ["a.bin", "b.bin", "c.bin", "d.bin"]

    def test_cancel_stops_immediately(self, tree, tmp_path):
        dst = tmp_path / "dst"
        calls = []

        def cancel_after_first(path, fraction):
            calls.append(path)
            return True

        result = copy_tree(tree, dst, cancel_after_first)
        assert result.cancelled
        assert len(calls) == 1
        assert result.files_copied == 1
        # Partial state is left in place.
        assert (dst / "a.bin").exists()
        assert not (dst / "b.bin").exists()
        assert not (dst / "sub").exists()

    def test_cancel_inside_subdirectory(self, tree, tmp_path):
        dst = tmp_path / "dst"
        result = copy_tree(tree, dst, lambda path, fraction: path.name == "c.bin")
        assert result.cancelled
        assert (dst / "sub" / "c.bin").exists()
        assert not (dst / "sub" / "deep").exists()

    def test_self_copy_rejected(self, tree):
        with pytest.raises(SelfCopyError):
            copy_tree(tree, tree)

    def test_self_copy_case_insensitive(self, tree):
        with pytest.raises(SelfCopyError):
            copy_tree(tree, str(tree).upper())

    def test_self_copy_does_no_work(self, tree):
        before = sorted(os.listdir(tree))
        with pytest.raises(SelfCopyError):
            copy_tree(tree, tree)
        assert sorted(os.listdir(tree)) == before

    def test_missing_source(self, tmp_path):
        with pytest.raises(NotFoundError):
            copy_tree(tmp_path / "nope", tmp_path / "dst")

    def test_busy_file_skipped_and_counted(self, tree, tmp_path):
        real_copyfile = shutil.copyfile

        def flaky(src, dst, *args, **kwargs):
            if os.path.basename(src) == "b.bin":
                raise PermissionError("in use")
            return real_copyfile(src, dst, *args, **kwargs)

        dst = tmp_path / "dst"
        with patch("clonekit.mirror.shutil.copyfile", side_effect=flaky):
            result = copy_tree(tree, dst)

        assert [p.name for p in result.skipped] == ["b.bin"]
        assert result.copied_bytes == 200
        assert result.files_copied == 3
        assert not (dst / "b.bin").exists()
        assert (dst / "sub" / "deep" / "d.bin").exists()

    def test_unlistable_directory_skipped(self, tree, tmp_path):
        real_scandir = os.scandir
        locked = tree / "sub"

        def guarded(path="."):
            if os.fspath(path) == os.fspath(locked):
                raise PermissionError(13, "Permission denied", os.fspath(path))
            return real_scandir(path)

        dst = tmp_path / "dst"
        with patch("clonekit.mirror.os.scandir", side_effect=guarded):
            assert directory_size(tree) == 150
            result = copy_tree(tree, dst)

        assert result.skipped == [locked]
        assert result.total_bytes == 150
        assert result.fraction == 1.0
        assert (dst / "a.bin").exists()
        assert (dst / "b.bin").exists()
        assert not (dst / "sub" / "deep").exists()

    def test_symlinks_recreated_not_followed(self, tree, tmp_path):
        outside = tmp_path / "outside"
        outside.mkdir()
        (outside / "big.bin").write_bytes(b"z" * 1000)
        os.symlink(outside, tree / "linked_dir")

        dst = tmp_path / "dst"
        result = copy_tree(tree, dst)
        assert os.path.islink(dst / "linked_dir")
        assert os.readlink(dst / "linked_dir") == str(outside)
        assert result.total_bytes == 200

    def test_empty_source(self, tmp_path):
        src = tmp_path / "empty"
        src.mkdir()
        result = copy_tree(src, tmp_path / "dst")
        assert (tmp_path / "dst").is_dir()
        assert result.fraction == 1.0


class TestCopyResult:
    def test_fraction_clamped(self):
        assert CopyResult(total_bytes=10, copied_bytes=25).fraction == 1.0

    def test_fraction_partial(self):
        assert CopyResult(total_bytes=200, copied_bytes=50).fraction == 0.25
