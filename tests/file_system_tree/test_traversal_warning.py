"""Unit tests for the TraversalWarning class."""

from dir2playlist.file_system_tree.traversal_warning import TraversalWarning, WarningReason


def test_traversal_warning():
    warning1 = TraversalWarning("/lib/locked", WarningReason.PERMISSION_DENIED, "Permission denied")
    warning2 = TraversalWarning("/lib/locked", WarningReason.PERMISSION_DENIED, "Permission denied")
    warning3 = TraversalWarning("/lib", WarningReason.SYMLINK_CYCLE, "Symlink cycle detected")

    assert warning1 == warning2
    assert warning1 != warning3
    assert warning1 != "not a warning"
    assert len({warning1, warning2, warning3}) == 2

    assert str(warning1) == "Permission denied: /lib/locked"
    assert repr(warning3) == (
        "TraversalWarning(path='/lib', reason='symlink_cycle', message='Symlink cycle detected')"
    )


def test_traversal_warning_with_undecodable_path():
    warning = TraversalWarning("/lib/bad\udcff", WarningReason.UNREADABLE, "Cannot read directory")
    assert str(warning) == "Cannot read directory: /lib/bad\\udcff"
    assert WarningReason("unreadable") is WarningReason.UNREADABLE
