import random
import timeit

import guildperms


def make_guild(role_count: int, member_count: int) -> guildperms.TextChannel:
    rng = random.Random(role_count)
    everyone = guildperms.Role(
        id='G', guild_id='G', name='@everyone', raw_permissions=int(guildperms.DEFAULT_PERMISSIONS)
    )
    roles = {
        f'R{i}': guildperms.Role(id=f'R{i}', guild_id='G', name=f'Role {i}', raw_permissions=0, rank=i)
        for i in range(role_count)
    }
    guild = guildperms.Guild(id='G', name='Bench', owner_id='OWNER', default_role=everyone, roles=roles)
    for i in range(member_count):
        held = rng.sample(list(roles), k=min(len(roles), rng.randint(0, 10)))
        guild.members[f'U{i}'] = guildperms.Member(guild_id='G', id=f'U{i}', roles=held)

    everything = int(guildperms.Permissions.all())
    channel = guildperms.TextChannel(id='C', guild=guild, name='bench')
    channel.role_permissions = {
        role_id: guildperms.PermissionOverride(
            allow=rng.getrandbits(32) & everything,
            deny=rng.getrandbits(32) & everything,
        )
        for role_id in roles
        if rng.random() < 0.5
    }
    return channel


def bench_resolver():
    resolver = guildperms.PermissionResolver()

    for role_count in (1, 10, 100):
        channel = make_guild(role_count, 1000)
        members = list(channel.guild.members)

        def resolve_all():
            for member_id in members:
                resolver.resolve(member_id, channel, guildperms.Permissions.send_messages)

        number = 20
        elapsed = timeit.timeit(resolve_all, number=number)
        per_call = elapsed / (number * len(members))
        print(f'{role_count:>4} roles: {per_call * 1e6:.2f}us per resolve')
