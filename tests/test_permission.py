from spotlink.playlist.permission import Capabilities


def test_from_message_reads_every_field():
    caps = Capabilities.from_message(
        {
            "can_view": True,
            "can_administrate_permissions": True,
            "grantable_level": ["VIEWER", "CONTRIBUTOR"],
            "can_edit_metadata": True,
            "can_edit_items": False,
            "can_cancel_membership": True,
        }
    )
    assert caps.can_view is True
    assert caps.can_administrate_permissions is True
    assert caps.grantable_levels == ["VIEWER", "CONTRIBUTOR"]
    assert caps.can_edit_metadata is True
    assert caps.can_edit_items is False
    assert caps.can_cancel_membership is True


def test_empty_message_gives_defaults():
    caps = Capabilities.from_message({})
    assert caps == Capabilities()
    assert caps.grantable_levels == []
    assert caps.can_view is False