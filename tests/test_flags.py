import pytest
import guildperms


def test_flags():
    permissions = guildperms.Permissions()
    assert permissions.value == 0

    permissions.manage_messages = True
    assert permissions.manage_messages is True
    assert permissions.value == 8192

    permissions.manage_messages = False
    assert permissions.manage_messages is False
    assert permissions.value == 0

    permissions = guildperms.Permissions(manage_messages=True)
    assert permissions.manage_messages is True
    assert permissions.value == 8192

    permissions.manage_messages = False
    assert permissions.manage_messages is False
    assert permissions.value == 0


def test_unknown_flag():
    with pytest.raises(TypeError):
        guildperms.Permissions(administrator=True)


def test_offsets():
    assert guildperms.Permissions.create_invites.offset == 0
    assert guildperms.Permissions.manage_roles.offset == 3
    assert guildperms.Permissions.read_messages.offset == 10
    assert guildperms.Permissions.use_voice_activation.offset == 25

    for name, f in guildperms.Permissions.FLAGS.items():
        assert f.value == 1 << f.offset, name
        assert f.offset < guildperms.Permissions.BITS


def test_groups_cover_all_flags():
    Permissions = guildperms.Permissions
    assert Permissions.general() | Permissions.text() | Permissions.voice() == Permissions.all()
    assert not Permissions.general() & Permissions.text()
    assert not Permissions.text() & Permissions.voice()


def test_from_offset():
    assert guildperms.Permissions.from_offset(21) == guildperms.Permissions(speak=True)

    with pytest.raises(ValueError):
        guildperms.Permissions.from_offset(7)

    with pytest.raises(ValueError):
        guildperms.Permissions.from_offset(32)


def test_from_kinds():
    permissions = guildperms.Permissions.from_kinds('connect', 'speak')
    assert permissions.connect and permissions.speak
    assert permissions.value == (1 << 20) | (1 << 21)


def test_invert_stays_in_width():
    permissions = ~guildperms.Permissions(read_messages=True)
    assert permissions.value == 0xFFFFFFFF ^ (1 << 10)
    assert not permissions.read_messages


def test_flag_outside_width_is_rejected():
    with pytest.raises(guildperms.InvalidFlags) as exc_info:

        class TooWide(guildperms.BaseFlags, bits=8):
            __slots__ = ()

            @guildperms.flag()
            def overflow(cls) -> int:
                return 1 << 8

    assert exc_info.value.name == 'overflow'


def test_flag_must_be_single_bit():
    with pytest.raises(guildperms.InvalidFlags):

        class Combined(guildperms.BaseFlags, bits=8):
            __slots__ = ()

            @guildperms.flag()
            def both(cls) -> int:
                return 0b11


def test_bypass_is_manage_roles():
    assert guildperms.BYPASS_PERMISSIONS == guildperms.Permissions(manage_roles=True)
    assert guildperms.BYPASS_PERMISSIONS not in guildperms.DEFAULT_PERMISSIONS
