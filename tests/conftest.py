"""Test configuration and fixtures for dir2playlist."""

import os
import xml.etree.ElementTree as ET
from types import SimpleNamespace

import pytest

XSPF_NS = "{http://xspf.org/ns/0/}"
VLC_NS = "{http://www.videolan.org/vlc/playlist/ns/0/}"


def _group_members(element):
    members = []
    for child in element:
        if child.tag == VLC_NS + "node":
            members.append((child.get("title"), _group_members(child)))
        elif child.tag == VLC_NS + "item":
            members.append(int(child.get("tid")))
    return members


@pytest.fixture
def parse_playlist():
    """Return a function that parses an XSPF document into plain Python values.

    The parsed value has ``title``, ``tracks`` (a list of ``(id, location, title)``
    tuples in document order) and ``groups`` (nested ``(title, members)`` tuples where
    members are group tuples or integer track ids).
    """

    def parse(document):
        root = ET.fromstring(document.encode("utf-8"))
        tracks = []
        for track in root.find(XSPF_NS + "trackList"):
            identifier = track.find(f"{XSPF_NS}extension/{VLC_NS}id")
            tracks.append(
                (
                    int(identifier.text),
                    track.find(XSPF_NS + "location").text,
                    track.find(XSPF_NS + "title").text,
                )
            )
        extension = root.find(XSPF_NS + "extension")
        return SimpleNamespace(
            title=root.find(XSPF_NS + "title").text,
            tracks=tracks,
            groups=_group_members(extension),
        )

    return parse


@pytest.fixture
def make_files():
    """Return a function that creates empty files (and their parents) under a base path."""

    def make(base, *relative_paths):
        for relative_path in relative_paths:
            path = base / relative_path
            path.parent.mkdir(parents=True, exist_ok=True)
            path.touch()
        return base

    return make


@pytest.fixture
def library(tmp_path, make_files):
    """A small movie library: two video directories, one text file, one empty directory."""
    base = tmp_path.resolve() / "lib" / "movies"
    make_files(base, "A/1.mp4", "A/notes.txt", "B/2.mkv")
    (base / "C").mkdir()
    return base


@pytest.fixture
def symlinks_supported(tmp_path):
    try:
        os.symlink(tmp_path, tmp_path / "probe")
    except (OSError, NotImplementedError):
        return False
    os.unlink(tmp_path / "probe")
    return True


@pytest.fixture
def permissions_enforced():
    """Whether chmod-based access denial works for the current user."""
    return hasattr(os, "geteuid") and os.geteuid() != 0
