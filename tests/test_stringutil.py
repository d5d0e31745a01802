import pytest

from titlekit.stringutil import (
    escape_file_name,
    file_stem,
    is_empty,
    parent_path,
    path_file,
    truncate,
)


@pytest.mark.parametrize("text, expected", [("", True), ("   ", True), (" a ", False), ("abc", False)])
def test_is_empty(text, expected):
    assert is_empty(text) is expected


def test_truncate_keeps_room_for_terminator():
    assert truncate("abcdef", 4) == "abc"
    assert truncate("ab", 10) == "ab"
    assert truncate("abc", 0) == ""


def test_file_stem_uses_last_dot():
    assert file_stem("archive.tar.gz", 256) == "archive.tar"
    assert file_stem("noext", 256) == "noext"
    assert file_stem("game.cia", 3) == "ga"


def test_escape_file_name_replaces_reserved():
    escaped = escape_file_name('a<b>c:d"e/f\\g|h?i*j')
    assert escaped == "a_b_c_d_e_f_g_h_i_j"
    assert escape_file_name("plain name") == "plain name"


def test_escape_preserves_length():
    name = "x/y:z"
    assert len(escape_file_name(name)) == len(name)


def test_path_file():
    assert path_file("/a/b/c.txt", 256) == "c.txt"
    assert path_file("/a/b/", 256) == "b"
    assert path_file("/", 256) == "/"
    assert path_file("name", 256) == "name"


def test_path_file_truncates():
    assert path_file("/dir/longname", 5) == "long"


def test_parent_path():
    assert parent_path("/a/b/c", 256) == "/a/b/"
    assert parent_path("/a/b/", 256) == "/a/"
    assert parent_path("/", 256) == "/"
    assert parent_path("name", 256) == ""


def test_parent_path_is_prefix():
    path = "/3ds/app/icon.smdh"
    parent = parent_path(path, 512)
    assert path.startswith(parent)
    assert parent.endswith("/")
    assert parent + path_file(path, 512) == path