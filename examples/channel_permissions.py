import logging

import guildperms

logging.basicConfig(level=logging.DEBUG)

everyone = guildperms.Role(
    id='GUILD',
    guild_id='GUILD',
    name='@everyone',
    raw_permissions=int(guildperms.DEFAULT_PERMISSIONS),
)
moderator = guildperms.Role(
    id='MOD',
    guild_id='GUILD',
    name='Moderator',
    raw_permissions=int(guildperms.Permissions(kick_members=True, manage_messages=True)),
    rank=1,
)
admin = guildperms.Role(
    id='ADMIN',
    guild_id='GUILD',
    name='Admin',
    raw_permissions=int(guildperms.BYPASS_PERMISSIONS),
    rank=0,
)

guild = guildperms.Guild(
    id='GUILD',
    name='Lounge',
    owner_id='OWNER',
    default_role=everyone,
    roles={role.id: role for role in (moderator, admin)},
)

alice = guildperms.User(id='ALICE', name='alice')
bob = guildperms.User(id='BOB', name='bob')
carol = guildperms.User(id='CAROL', name='carol')

guild.members[alice.id] = guildperms.Member(guild_id=guild.id, id=alice.id, roles=[moderator.id])
guild.members[bob.id] = guildperms.Member(guild_id=guild.id, id=bob.id)
guild.members[carol.id] = guildperms.Member(guild_id=guild.id, id=carol.id, roles=[admin.id])

# Only moderators may talk in #staff, and bob is muted there.
staff = guildperms.TextChannel(id='STAFF', guild=guild, name='staff')
staff.set_role_override(everyone, guildperms.PermissionOverride(deny=guildperms.Permissions(read_messages=True)))
staff.set_role_override(moderator, guildperms.PermissionOverride(allow=guildperms.Permissions(read_messages=True)))
staff.set_user_override(bob, guildperms.PermissionOverride(deny=guildperms.Permissions(send_messages=True)))

for user in (alice, bob, carol):
    permissions = staff.permissions_for(user)
    print(f'{user.name}: read={permissions.read_messages} send={permissions.send_messages}')
