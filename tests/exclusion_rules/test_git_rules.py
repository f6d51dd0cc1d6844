"""Unit tests for gitignore-style exclusion rules."""

import pytest

from dir2playlist.exclusion_rules.git_rules import GitIgnoreExclusionRules


@pytest.fixture
def rules_file(tmp_path):
    path = tmp_path / ".playlistignore"
    path.write_text("# samples and extras\n*.sample.mkv\nExtras/\n")
    return path


def test_empty_rules():
    rules = GitIgnoreExclusionRules()
    assert not rules.has_rules()
    assert not rules.exclude("movie.mkv")


def test_load_rules_from_file(rules_file):
    rules = GitIgnoreExclusionRules(rules_file)
    assert rules.has_rules()
    assert rules.exclude("Show/trailer.sample.mkv")
    assert rules.exclude("Show/Extras/")
    assert rules.exclude("Extras/")
    assert not rules.exclude("Show/S01E01.mkv")


def test_load_multiple_files(tmp_path, rules_file):
    second = tmp_path / "more.ignore"
    second.write_text("*.mp4\n")
    rules = GitIgnoreExclusionRules([rules_file, second])
    assert rules.exclude("clip.mp4")
    assert rules.exclude("a.sample.mkv")


def test_missing_rules_file(tmp_path):
    with pytest.raises(FileNotFoundError, match="Rules file not found"):
        GitIgnoreExclusionRules(tmp_path / "missing")


def test_add_rule_and_negation():
    rules = GitIgnoreExclusionRules()
    rules.add_rule("*.mkv")
    rules.add_rule("!keep.mkv")
    assert rules.exclude("drop.mkv")
    assert not rules.exclude("keep.mkv")


def test_directory_pattern_only_matches_directories():
    rules = GitIgnoreExclusionRules()
    rules.add_rule("Extras/")
    assert rules.exclude("Extras/")
    assert not rules.exclude("Extras")


def test_rules_added_after_matching_take_effect():
    rules = GitIgnoreExclusionRules()
    assert not rules.exclude("trailer.sample.mkv")
    rules.add_rule("*.sample.mkv")
    assert rules.exclude("trailer.sample.mkv")
    rules.add_rule("!trailer.sample.mkv")
    assert not rules.exclude("trailer.sample.mkv")


def test_loaded_and_added_rules_combine_in_order(rules_file):
    rules = GitIgnoreExclusionRules(rules_file)
    rules.add_rule("!keep.sample.mkv")
    assert rules.exclude("drop.sample.mkv")
    assert not rules.exclude("keep.sample.mkv")


def test_comment_only_file_has_no_rules(tmp_path):
    path = tmp_path / "empty.ignore"
    path.write_text("# nothing here\n\n")
    assert not GitIgnoreExclusionRules(path).has_rules()
