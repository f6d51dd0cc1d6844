"""Unit tests for the TrackRegistry class."""

from concurrent.futures import ThreadPoolExecutor

from dir2playlist.file_system_tree.track_registry import TrackRegistry


def test_first_claim_wins():
    registry = TrackRegistry()
    assert registry.claim("/lib/a.mkv")
    assert not registry.claim("/lib/a.mkv")
    assert len(registry) == 1
    assert "/lib/a.mkv" in registry
    assert "/lib/b.mkv" not in registry


def test_identifiers_follow_claim_order():
    registry = TrackRegistry()
    for path in ["/lib/z.mkv", "/lib/a.mkv", "/lib/m.mp4"]:
        registry.claim(path)
    registry.claim("/lib/a.mkv")
    assert [registry.identifier_of(p) for p in ["/lib/z.mkv", "/lib/a.mkv", "/lib/m.mp4"]] == [0, 1, 2]
    assert registry.identifier_of("/lib/unknown.mkv") is None
    assert list(registry) == ["/lib/z.mkv", "/lib/a.mkv", "/lib/m.mp4"]


def test_concurrent_claims_have_one_winner():
    registry = TrackRegistry()
    with ThreadPoolExecutor(max_workers=8) as executor:
        results = list(executor.map(registry.claim, ["/lib/same.mkv"] * 64))
    assert results.count(True) == 1
    assert len(registry) == 1
