import itertools

import pytest
import guildperms

from guildperms import PermissionOverride, Permissions

VIEW = 0
SPEAK = 1


def make_channel(default_permissions: int = 0b0001, *roles: guildperms.Role) -> guildperms.TextChannel:
    everyone = guildperms.Role(id='G', guild_id='G', name='@everyone', raw_permissions=default_permissions)
    guild = guildperms.Guild(
        id='G',
        name='Test',
        owner_id='OWNER',
        default_role=everyone,
        roles={role.id: role for role in roles},
    )
    return guildperms.TextChannel(id='C', guild=guild, name='general')


def add_member(channel: guildperms.BaseGuildChannel, user_id: str, *role_ids: str) -> guildperms.User:
    channel.guild.members[user_id] = guildperms.Member(guild_id=channel.guild.id, id=user_id, roles=list(role_ids))
    return guildperms.User(id=user_id, name=user_id.lower())


def role(id: str, *, permissions: int = 0, rank: int = 0) -> guildperms.Role:
    return guildperms.Role(id=id, guild_id='G', name=id.title(), raw_permissions=permissions, rank=rank)


def test_role_override_grants():
    channel = make_channel(0b0001, role('R'))
    user = add_member(channel, 'U', 'R')
    channel.set_role_override('R', PermissionOverride(allow=0b0010))

    resolver = guildperms.PermissionResolver()
    assert resolver.resolve(user, channel, SPEAK) is True
    assert resolver.resolve(user, channel, VIEW) is True
    assert resolver.resolve(user, channel, Permissions.ban_members) is False


def test_user_override_restores_denied_bit():
    channel = make_channel(0b0011, role('R'))
    user = add_member(channel, 'U', 'R')
    channel.set_role_override('R', PermissionOverride(deny=0b0001))
    channel.set_user_override(user, PermissionOverride(allow=0b0001))

    assert channel.permissions_for(user).value == 0b0011

    channel.remove_user_override(user)
    assert channel.permissions_for(user).value == 0b0010


def test_user_override_beats_role_override():
    channel = make_channel(0, role('R'))
    user = add_member(channel, 'U', 'R')
    channel.set_role_override('R', PermissionOverride(deny=Permissions(speak=True)))
    channel.set_user_override(user, PermissionOverride(allow=Permissions(speak=True)))

    assert channel.has_permission(user, Permissions.speak)


def test_no_roles_gets_default_permissions():
    channel = make_channel(int(guildperms.DEFAULT_PERMISSIONS))
    user = add_member(channel, 'U')
    stranger = guildperms.User(id='S', name='stranger')

    assert channel.permissions_for(user) == guildperms.DEFAULT_PERMISSIONS
    assert channel.permissions_for(stranger) == guildperms.DEFAULT_PERMISSIONS

    for name, f in Permissions.FLAGS.items():
        assert channel.has_permission(user, f) is (f in guildperms.DEFAULT_PERMISSIONS), name


def test_default_role_override():
    channel = make_channel(0b0011, role('R'))
    user = add_member(channel, 'U', 'R')
    channel.set_role_override('G', PermissionOverride(allow=0b0100, deny=0b0001))

    assert channel.default_permissions == PermissionOverride(allow=0b0100, deny=0b0001)
    assert channel.permissions_for(user).value == 0b0110


def test_default_role_override_then_role_override():
    channel = make_channel(0b0001, role('R'))
    user = add_member(channel, 'U', 'R')
    channel.set_role_override('G', PermissionOverride(deny=0b0001))
    channel.set_role_override('R', PermissionOverride(allow=0b0001))

    assert channel.has_permission(user, VIEW)


def test_higher_role_wins_conflicts():
    channel = make_channel(0, role('TOP', rank=0), role('BOTTOM', rank=10))
    user = add_member(channel, 'U', 'TOP', 'BOTTOM')
    channel.set_role_override('TOP', PermissionOverride(allow=Permissions(speak=True)))
    channel.set_role_override('BOTTOM', PermissionOverride(deny=Permissions(speak=True)))
    assert channel.has_permission(user, Permissions.speak)

    channel.set_role_override('TOP', PermissionOverride(deny=Permissions(speak=True)))
    channel.set_role_override('BOTTOM', PermissionOverride(allow=Permissions(speak=True)))
    assert not channel.has_permission(user, Permissions.speak)


def test_role_order_does_not_depend_on_membership_order():
    roles = [role(f'R{i}', rank=i) for i in range(4)]
    channel = make_channel(0, *roles)
    for i, r in enumerate(roles):
        if i % 2:
            channel.set_role_override(r, PermissionOverride(allow=0b1 << i, deny=0b1111 ^ (0b1 << i)))
        else:
            channel.set_role_override(r, PermissionOverride(deny=0b1111))

    results = set()
    for order in itertools.permutations(r.id for r in roles):
        user = add_member(channel, 'U', *order)
        results.add(channel.permissions_for(user).value)
    assert len(results) == 1


@pytest.mark.parametrize('holder', ['owner', 'default', 'role'])
def test_bypass_supremacy(holder):
    admin = role('ADMIN', permissions=int(guildperms.BYPASS_PERMISSIONS))
    channel = make_channel(0, admin)
    if holder == 'owner':
        user = add_member(channel, 'OWNER')
    elif holder == 'default':
        channel.guild.default_role.raw_permissions |= int(guildperms.BYPASS_PERMISSIONS)
        user = add_member(channel, 'U')
    else:
        user = add_member(channel, 'U', 'ADMIN')

    channel.set_role_override('G', PermissionOverride(deny=Permissions.all()))
    channel.set_role_override('ADMIN', PermissionOverride(deny=Permissions.all()))
    channel.set_user_override(user, PermissionOverride(deny=Permissions.all()))

    assert channel.permissions_for(user) == Permissions.all()
    for f in Permissions.FLAGS.values():
        assert channel.has_permission(user, f)
        assert channel.has_permission(user, f.offset)


def test_owner_without_ownership_bypass():
    channel = make_channel(0b0001)
    owner = add_member(channel, 'OWNER')
    channel.set_user_override(owner, PermissionOverride(deny=0b0001))

    resolver = guildperms.PermissionResolver(with_ownership=False)
    assert not resolver.resolve(owner, channel, VIEW)
    assert guildperms.DEFAULT_RESOLVER.resolve(owner, channel, VIEW)


def test_custom_bypass():
    channel = make_channel(0, role('R', permissions=int(Permissions(manage_server=True))))
    user = add_member(channel, 'U', 'R')

    assert not guildperms.DEFAULT_RESOLVER.resolve(user, channel, Permissions.speak)

    resolver = guildperms.PermissionResolver(bypass=Permissions.manage_server)
    assert resolver.bypass == Permissions(manage_server=True)
    assert resolver.resolve(user, channel, Permissions.speak)

    resolver = guildperms.PermissionResolver(bypass=Permissions.none())
    channel.guild.roles['R'].raw_permissions = int(guildperms.BYPASS_PERMISSIONS)
    assert not resolver.resolve(user, channel, Permissions.speak)


def test_missing_role_handling():
    channel = make_channel(0b0001)
    user = add_member(channel, 'U', 'GONE')

    assert guildperms.PermissionResolver().resolve(user, channel, VIEW)
    with pytest.raises(guildperms.NoData):
        guildperms.PermissionResolver(safe=True).resolve(user, channel, VIEW)


def test_resolve_rejects_unknown_actions():
    channel = make_channel()
    user = add_member(channel, 'U')

    with pytest.raises(ValueError):
        guildperms.DEFAULT_RESOLVER.resolve(user, channel, 7)
    with pytest.raises(ValueError):
        guildperms.DEFAULT_RESOLVER.resolve(user, channel, Permissions.none())
    with pytest.raises(TypeError):
        guildperms.DEFAULT_RESOLVER.resolve(user, channel, 'speak')


def test_resolve_requires_every_given_permission():
    channel = make_channel(int(Permissions(connect=True)))
    user = add_member(channel, 'U')

    assert channel.has_permission(user, Permissions(connect=True))
    assert not channel.has_permission(user, Permissions(connect=True, speak=True))


def test_calculate_channel_permissions():
    roles = [role('A'), role('B')]
    result = guildperms.calculate_channel_permissions(
        Permissions(0b0111),
        roles,
        default_permissions=PermissionOverride(deny=0b0001),
        role_permissions={
            'A': PermissionOverride(deny=0b0010),
            'B': PermissionOverride(allow=0b1000, deny=0b0100),
        },
        user_permissions=PermissionOverride(allow=0b0001),
    )
    assert result == Permissions(0b1001)

    result = guildperms.calculate_channel_permissions(
        Permissions(0b0111),
        [],
        default_permissions=None,
        role_permissions={},
        user_permissions=None,
    )
    assert result == Permissions(0b0111)


def test_override_snapshots_are_not_mutated():
    channel = make_channel(0b0001, role('R'))
    snapshot = channel.role_permissions

    channel.set_role_override('R', PermissionOverride(allow=0b0010))
    assert 'R' not in snapshot
    assert channel.get_role_override('R') == PermissionOverride(allow=0b0010)

    with pytest.raises(TypeError):
        channel.role_permissions['R'] = PermissionOverride()  # type: ignore

    assert channel.remove_role_override('R') == PermissionOverride(allow=0b0010)
    assert channel.remove_role_override('R') is None
    assert channel.get_role_override('R') is None
    assert channel.get_user_override('U') is None


def test_channels_satisfy_protocols():
    voice = guildperms.VoiceChannel(
        id='V',
        guild=make_channel().guild,
        name='voice',
        user_limit=5,
        role_permissions={'G': PermissionOverride(deny=Permissions(speak=True))},
    )
    assert voice.type is guildperms.ChannelType.voice
    assert isinstance(voice, guildperms.abc.PermissionScope)
    assert isinstance(voice.guild, guildperms.abc.GroupContext)
    assert isinstance(voice.guild.default_role, guildperms.abc.PermissionHolder)
    assert voice.default_permissions == PermissionOverride(deny=Permissions(speak=True))
    assert make_channel().type is guildperms.ChannelType.text
