import pytest

from titlekit.fs import (
    FILE_PATH_MAX,
    ArchiveRefs,
    MediaType,
    encode_utf16_path,
    ensure_dir,
    filter_cias,
    filter_tickets,
    get_3dsx_path,
    get_title_destination,
    is_dir,
    make_3dsx_path,
    make_smdh_path,
    set_3dsx_path,
)


def test_archive_refs_counts_and_closes_on_last_release():
    closed = []
    refs = ArchiveRefs(closed.append)
    refs.ref("sd")
    refs.ref("sd")
    assert refs.refcount("sd") == 2
    refs.close("sd")
    assert closed == []
    assert refs.refcount("sd") == 1
    refs.close("sd")
    assert closed == ["sd"]
    assert refs.refcount("sd") == 0


def test_archive_refs_close_untracked_calls_closer():
    closed = []
    refs = ArchiveRefs(lambda a: closed.append(a) or "done")
    assert refs.close("nand") == "done"
    assert closed == ["nand"]


def test_archive_refs_open():
    closed = []
    refs = ArchiveRefs(closed.append)
    archive = refs.open(lambda kind, n: (kind, n), "ext", 7)
    assert archive == ("ext", 7)
    assert refs.refcount(archive) == 1
    refs.close(archive)
    assert closed == [("ext", 7)]


def test_archive_refs_open_failure_propagates():
    refs = ArchiveRefs(lambda a: None)

    def opener():
        raise OSError("cannot open")

    with pytest.raises(OSError):
        refs.open(opener)


def test_is_dir_and_ensure_dir(tmp_path):
    assert is_dir(tmp_path, "/fbi") is False
    created = ensure_dir(tmp_path, "/fbi")
    assert created.is_dir()
    assert is_dir(tmp_path, "/fbi") is True
    assert ensure_dir(tmp_path, "/fbi") == created


def test_ensure_dir_replaces_file(tmp_path):
    (tmp_path / "seed").write_text("data")
    assert is_dir(tmp_path, "/seed") is False
    ensure_dir(tmp_path, "/seed")
    assert is_dir(tmp_path, "/seed") is True


def test_ensure_dir_missing_parent_raises(tmp_path):
    with pytest.raises(OSError):
        ensure_dir(tmp_path, "/missing/child")


def test_encode_utf16_path():
    encoded = encode_utf16_path("ab")
    assert encoded == b"a\x00b\x00\x00\x00"
    assert encoded[:-2].decode("utf-16-le") == "ab"


def test_3dsx_path_strips_prefix():
    set_3dsx_path("sdmc:/3ds/app/app.3dsx")
    assert get_3dsx_path() == "/3ds/app/app.3dsx"
    set_3dsx_path("/other.3dsx")
    assert get_3dsx_path() == "/other.3dsx"


def test_3dsx_path_empty_is_none():
    set_3dsx_path("")
    assert get_3dsx_path() is None


def test_3dsx_path_truncated():
    set_3dsx_path("/" + "a" * 1000)
    assert len(get_3dsx_path()) == FILE_PATH_MAX - 1


def test_make_paths_escape_name():
    assert make_3dsx_path("My:App") == "/3ds/My_App/My_App.3dsx"
    assert make_smdh_path("My:App") == "/3ds/My_App/My_App.smdh"


@pytest.mark.parametrize(
    "title_id, expected",
    [
        (0x0003000000000000, MediaType.NAND),
        (0x0004001000020000, MediaType.NAND),
        (0x0004800000000000, MediaType.NAND),
        (0x0004000000000002, MediaType.NAND),
        (0x0004000000030000, MediaType.SD),
        (0x0004008C00000000, MediaType.SD),
        (0x0005000000000000, MediaType.SD),
    ],
)
def test_title_destination(title_id, expected):
    assert get_title_destination(title_id) is expected


@pytest.mark.parametrize(
    "name, is_directory, expected",
    [("game.cia", False, True), ("GAME.CIA", False, True), ("game.cia", True, False),
     ("cia", False, False), ("game.cia.bak", False, False)],
)
def test_filter_cias(name, is_directory, expected):
    assert filter_cias(name, is_directory) is expected


@pytest.mark.parametrize(
    "name, expected",
    [("a.tik", True), ("A.CETK", True), ("a.cia", False), ("tik", False)],
)
def test_filter_tickets(name, expected):
    assert filter_tickets(name, False) is expected


def test_filters_respect_parent():
    def reject(name, is_directory):
        return False

    def accept(name, is_directory):
        return True

    assert filter_cias("game.cia", False, reject) is False
    assert filter_cias("game.cia", False, accept) is True
    assert filter_tickets("a.tik", False, reject) is False
    assert filter_tickets("a.tik", False, accept) is True