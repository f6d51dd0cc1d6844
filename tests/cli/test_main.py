"""Unit tests for the CLI main module."""

import os
from unittest.mock import patch

import pytest

from dir2playlist.cli.main import format_counts, main


def run_main(monkeypatch, *argv):
    """Run main() with the given arguments and return its exit code."""
    monkeypatch.setattr("sys.argv", ["dir2playlist", *map(str, argv)])
    try:
        main()
    except SystemExit as e:
        return e.code
    return 0


def test_format_counts():
    assert format_counts({"groups": 3, "tracks": 2, "warnings": 0}) == "Groups: 3\nTracks: 2\nWarnings: 0"


def test_playlist_to_stdout(monkeypatch, capfd, library, parse_playlist):
    assert run_main(monkeypatch, "-r", library) == 0
    out, err = capfd.readouterr()
    playlist = parse_playlist(out)
    assert [title for _, _, title in playlist.tracks] == ["1.mp4", "2.mkv"]
    assert err == ""


def test_positional_roots_follow_option_roots(monkeypatch, capfd, tmp_path, make_files, parse_playlist):
    base = tmp_path.resolve()
    make_files(base, "movies/m.mkv", "shows/s.mkv")
    assert run_main(monkeypatch, base / "movies", "-r", base / "shows") == 0
    playlist = parse_playlist(capfd.readouterr().out)
    assert [group[0] for group in playlist.groups] == ["shows", "movies"]


def test_playlist_to_file(monkeypatch, capfd, library, tmp_path, parse_playlist):
    output = tmp_path / "library.xspf"
    assert run_main(monkeypatch, "-r", library, "-s", library / "A", "--title", "Movies", "-o", output) == 0
    out, _ = capfd.readouterr()
    assert out == ""
    playlist = parse_playlist(output.read_text(encoding="utf-8"))
    assert playlist.title == "Movies"
    assert playlist.groups == [("movies", [("B", [0])])]


def test_ignore_pattern(monkeypatch, capfd, library, make_files, parse_playlist):
    make_files(library, "A/trailer.sample.mkv")
    assert run_main(monkeypatch, "-r", library, "-i", "*.sample.mkv") == 0
    playlist = parse_playlist(capfd.readouterr().out)
    assert [title for _, _, title in playlist.tracks] == ["1.mp4", "2.mkv"]


def test_summary(monkeypatch, capfd, library):
    assert run_main(monkeypatch, "-r", library, "--summary") == 0
    _, err = capfd.readouterr()
    assert "Groups: 3\nTracks: 2\nWarnings: 0" in err


def test_tree(monkeypatch, capfd, library):
    assert run_main(monkeypatch, "-r", library, "--tree") == 0
    out, _ = capfd.readouterr()
    assert out == "movies/\n├── A/\n│   └── 1.mp4\n└── B/\n    └── 2.mkv\n"


def test_empty_playlist_warns(monkeypatch, capfd, tmp_path, parse_playlist):
    assert run_main(monkeypatch, "-r", tmp_path) == 0
    out, err = capfd.readouterr()
    assert parse_playlist(out).tracks == []
    assert "No video files found" in err


def test_missing_root(monkeypatch, capfd, tmp_path):
    assert run_main(monkeypatch, "-r", tmp_path / "missing") == 2
    out, err = capfd.readouterr()
    assert out == ""
    assert err.startswith("Error: ")


def test_no_roots(monkeypatch, capfd):
    assert run_main(monkeypatch) == 2
    assert "At least one root directory is required" in capfd.readouterr().err


def test_tree_into_playlist_file(monkeypatch, capfd, library, tmp_path):
    assert run_main(monkeypatch, "-r", library, "--tree", "-o", tmp_path / "out.xspf") == 1
    assert "--tree" in capfd.readouterr().err
    assert not (tmp_path / "out.xspf").exists()


def test_serialization_error_writes_nothing(monkeypatch, capfd, tmp_path, make_files):
    base = tmp_path.resolve() / "lib"
    make_files(base, "ok.mkv")
    try:
        (base / "bad\x01.mkv").touch()
    except OSError:
        pytest.skip("Filesystem does not accept control characters in names")
    output = tmp_path / "out" / "library.xspf"
    output.parent.mkdir()
    output.write_text("previous")

    assert run_main(monkeypatch, "-r", base, "-o", output) == 1
    _, err = capfd.readouterr()
    assert "Cannot serialize" in err
    assert "No playlist was written." in err
    assert output.read_text() == "previous"
    assert os.listdir(output.parent) == ["library.xspf"]


def test_permission_warning(monkeypatch, capfd, library, permissions_enforced, parse_playlist):
    if not permissions_enforced:
        pytest.skip("Permission checks are not enforced for this user/platform")
    locked = library / "A"
    locked.chmod(0o000)
    try:
        assert run_main(monkeypatch, "-r", library) == 0
        out, err = capfd.readouterr()
        assert f"Warning: Permission denied, skipping directory: {locked}" in err
        assert [title for _, _, title in parse_playlist(out).tracks] == ["2.mkv"]

        assert run_main(monkeypatch, "-r", library, "-P", "ignore") == 0
        assert "Warning" not in capfd.readouterr().err

        assert run_main(monkeypatch, "-r", library, "-P", "fail") == 126
        out, err = capfd.readouterr()
        assert out == ""
        assert err.startswith("Error: ")
    finally:
        locked.chmod(0o755)


def test_broken_pipe(monkeypatch, library):
    with patch("dir2playlist.cli.main.SafeWriter.write", side_effect=BrokenPipeError), patch(
        "dir2playlist.cli.main._silence_stdout"
    ) as silence:
        assert run_main(monkeypatch, "-r", library) == 141
    silence.assert_called_once_with()


def test_keyboard_interrupt(monkeypatch, library):
    with patch("dir2playlist.cli.main.Dir2Playlist.render", side_effect=KeyboardInterrupt):
        assert run_main(monkeypatch, "-r", library) == 130


def test_unexpected_error(monkeypatch, capfd, library):
    with patch("dir2playlist.cli.main.Dir2Playlist.render", side_effect=RuntimeError("disk on fire")):
        assert run_main(monkeypatch, "-r", library) == 1
    assert "Error: disk on fire" in capfd.readouterr().err


def test_output_path_is_a_directory(monkeypatch, capfd, library, tmp_path):
    output = tmp_path / "out" / "library.xspf"
    output.mkdir(parents=True)

    assert run_main(monkeypatch, "-r", library, "-o", output) == 1
    assert "Error: Cannot write output" in capfd.readouterr().err
    assert os.listdir(output.parent) == ["library.xspf"]
    assert output.is_dir()


def test_unwritable_output_directory_is_not_a_traversal_failure(
    monkeypatch, capfd, library, tmp_path, permissions_enforced
):
    if not permissions_enforced:
        pytest.skip("Permission checks are not enforced for this user/platform")
    locked = tmp_path / "locked"
    locked.mkdir()
    locked.chmod(0o500)
    try:
        assert run_main(monkeypatch, "-r", library, "-o", locked / "library.xspf") == 1
        assert "Error: Cannot write output" in capfd.readouterr().err
        assert os.listdir(locked) == []
    finally:
        locked.chmod(0o755)
