"""Unit tests for the permission_action module."""

from dir2playlist.file_system_tree.permission_action import PermissionAction


def test_permission_action_enum():
    assert PermissionAction.IGNORE == "ignore"
    assert PermissionAction.RAISE == "raise"
    assert PermissionAction("ignore") == PermissionAction.IGNORE
    assert PermissionAction("raise") == PermissionAction.RAISE
