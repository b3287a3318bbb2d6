#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Tests for walletpack.archive - ZIP assembly."""

from __future__ import annotations

import io
import stat
import zipfile

import pytest

from walletpack.archive import ArchiveEntry, pass_entries, read_archive, write_archive
from walletpack.assets import assets_from_files
from walletpack.exceptions import ArchiveWriteError, AssetConflictError


@pytest.mark.unit
class TestPassEntries:
    """Test the fixed archive layout."""

    def test_layout(self) -> None:
        pass_assets = assets_from_files([("pass.json", b"{}"), ("icon.png", b"i"), ("logo.png", b"l")])

        entries = pass_entries(pass_assets, b"MANIFEST", b"SIG")

        assert [entry.name for entry in entries] == [
            "pass.json",
            "manifest.json",
            "signature",
            "icon.png",
            "logo.png",
        ]
        assert entries[0].data == b"{}"
        assert entries[1].data == b"MANIFEST"
        assert entries[2].data == b"SIG"
        assert entries[3].data == b"i"


@pytest.mark.unit
class TestWriteArchive:
    """Test writing entries into a ZIP."""

    def test_entries_written_in_order_verbatim(self) -> None:
        binary = bytes(range(256)) * 4
        data = write_archive([ArchiveEntry("pass.json", b"{}"), ArchiveEntry("icon.png", binary)])

        with zipfile.ZipFile(io.BytesIO(data)) as archive:
            assert archive.namelist() == ["pass.json", "icon.png"]
            assert archive.read("icon.png") == binary
            assert archive.testzip() is None
            assert all(info.compress_type == zipfile.ZIP_DEFLATED for info in archive.infolist())

    def test_no_directory_entries(self) -> None:
        data = write_archive([ArchiveEntry("pass.json", b"{}")])

        with zipfile.ZipFile(io.BytesIO(data)) as archive:
            assert not any(info.is_dir() or "/" in info.filename for info in archive.infolist())

    def test_entries_are_regular_files(self) -> None:
        data = write_archive([ArchiveEntry("pass.json", b"{}")])

        with zipfile.ZipFile(io.BytesIO(data)) as archive:
            mode = archive.getinfo("pass.json").external_attr >> 16

        assert stat.S_ISREG(mode)
        assert stat.S_IMODE(mode) == 0o644

    def test_reproducible_bytes(self) -> None:
        entries = [ArchiveEntry("pass.json", b"{}"), ArchiveEntry("signature", b"sig")]

        assert write_archive(entries) == write_archive(list(entries))

    def test_duplicate_entries_conflict(self) -> None:
        with pytest.raises(AssetConflictError, match="icon.png"):
            write_archive([ArchiveEntry("icon.png", b"a"), ArchiveEntry("icon.png", b"b")])

    def test_write_failure_wrapped(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def failing_writestr(*args: object, **kwargs: object) -> None:
            raise OSError("disk full")

        monkeypatch.setattr(zipfile.ZipFile, "writestr", failing_writestr)

        with pytest.raises(ArchiveWriteError, match="disk full"):
            write_archive([ArchiveEntry("pass.json", b"{}")])

    def test_empty_entry(self) -> None:
        data = write_archive([ArchiveEntry("pass.json", b"{}"), ArchiveEntry("empty.txt", b"")])

        assert read_archive(data)["empty.txt"] == b""


@pytest.mark.unit
def test_read_archive_preserves_order() -> None:
    data = write_archive([ArchiveEntry("b", b"2"), ArchiveEntry("a", b"1")])

    assert list(read_archive(data).items()) == [("b", b"2"), ("a", b"1")]


# 🎫📦🔚
