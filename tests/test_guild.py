import logging

import pytest
import guildperms


def make_guild() -> guildperms.Guild:
    everyone = guildperms.Role(id='G', guild_id='G', name='@everyone', raw_permissions=0b0001)
    guild = guildperms.Guild(
        id='G',
        name='Test',
        owner_id='OWNER',
        default_role=everyone,
        roles={
            'ADMIN': guildperms.Role(id='ADMIN', guild_id='G', name='Admin', raw_permissions=0b1000, rank=0),
            'MOD': guildperms.Role(id='MOD', guild_id='G', name='Mod', raw_permissions=0, rank=1),
            'MEMBER': guildperms.Role(id='MEMBER', guild_id='G', name='Member', raw_permissions=0, rank=2),
        },
    )
    guild.members['U'] = guildperms.Member(guild_id='G', id='U', roles=['MEMBER', 'ADMIN', 'G', 'MOD'])
    return guild


def test_sort_member_roles():
    guild = make_guild()
    roles = guildperms.sort_member_roles(['MOD', 'ADMIN', 'MEMBER'], guild_roles=guild.roles)
    assert [role.id for role in roles] == ['MEMBER', 'MOD', 'ADMIN']


def test_sort_member_roles_ties_by_id():
    roles = {
        'B': guildperms.Role(id='B', guild_id='G', name='B', raw_permissions=0, rank=5),
        'A': guildperms.Role(id='A', guild_id='G', name='A', raw_permissions=0, rank=5),
    }
    assert [role.id for role in guildperms.sort_member_roles(['A', 'B'], guild_roles=roles)] == ['B', 'A']
    assert [role.id for role in guildperms.sort_member_roles(['B', 'A'], guild_roles=roles)] == ['B', 'A']


def test_sort_member_roles_missing(caplog):
    guild = make_guild()

    with pytest.raises(guildperms.NoData) as exc_info:
        guildperms.sort_member_roles(['MOD', 'GONE'], safe=True, guild_roles=guild.roles)
    assert exc_info.value.what == 'GONE'
    assert exc_info.value.type == 'role'

    with caplog.at_level(logging.WARNING, logger='guildperms.guild'):
        roles = guildperms.sort_member_roles(['MOD', 'GONE'], safe=False, guild_roles=guild.roles)
    assert [role.id for role in roles] == ['MOD']
    assert 'GONE' in caplog.text


def test_get_roles_for():
    guild = make_guild()
    user = guildperms.User(id='U', name='user')

    roles = guild.get_roles_for(user)
    assert [role.id for role in roles] == ['MEMBER', 'MOD', 'ADMIN']
    assert guild.default_role not in roles

    assert guild.get_roles_for(guild.members['U']) == roles
    assert guild.get_roles_for('STRANGER') == []


def test_lookups():
    guild = make_guild()
    assert guild.is_owner('OWNER')
    assert guild.is_owner(guildperms.User(id='OWNER', name='owner'))
    assert not guild.is_owner('U')

    assert guild.get_role('G') is guild.default_role
    assert guild.get_role('MOD') is guild.roles['MOD']
    assert guild.get_role('GONE') is None

    assert guild.get_member('U') == guildperms.User(id='U', name='user')
    assert guild.default_permissions == guildperms.Permissions(create_invites=True)


def test_role_has_permission():
    guild = make_guild()
    admin = guild.roles['ADMIN']
    assert admin.has_permission(guildperms.Permissions.manage_roles)
    assert admin.has_permission(guildperms.BYPASS_PERMISSIONS)
    assert not guild.default_role.has_permission(guildperms.Permissions.manage_roles)
