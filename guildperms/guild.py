"""
The MIT License (MIT)

Copyright (c) 2024-present MCausc78

Permission is hereby granted, free of charge, to any person obtaining a
copy of this software and associated documentation files (the "Software"),
to deal in the Software without restriction, including without limitation
the rights to use, copy, modify, merge, publish, distribute, sublicense,
and/or sell copies of the Software, and to permit persons to whom the
Software is furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in
all copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS
OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING
FROM, OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER
DEALINGS IN THE SOFTWARE.
"""

from __future__ import annotations

from attrs import define, field
import logging
import typing

from .base import Base
from .core import IDOr, resolve_id
from .errors import NoData
from .flags import Permissions

if typing.TYPE_CHECKING:
    from collections.abc import Iterable

    from .flags import flag

_L = logging.getLogger(__name__)

_new_permissions = Permissions.__new__


@define(slots=True, eq=False)
class User(Base):
    """Represents a user that can be a member of guilds."""

    name: str = field(repr=True, kw_only=True)
    """:class:`str`: The user's name."""

    bot: bool = field(repr=True, kw_only=True, default=False)
    """:class:`bool`: Whether the user is a bot account."""

    @property
    def mention(self) -> str:
        """:class:`str`: The user mention."""
        return f'<@{self.id}>'


@define(slots=True)
class Role(Base):
    """Represents a role in a guild."""

    guild_id: str = field(repr=True, kw_only=True)
    """:class:`str`: The guild's ID the role belongs to."""

    name: str = field(repr=True, kw_only=True)
    """:class:`str`: The role's name."""

    raw_permissions: int = field(repr=True, kw_only=True)
    """:class:`int`: The raw value of permissions granted by this role."""

    rank: int = field(repr=True, kw_only=True, default=0)
    """:class:`int`: The role's rank. Lower rank means higher position in the role hierarchy."""

    def __hash__(self) -> int:
        return hash(self.id)

    def __eq__(self, other: object, /) -> bool:
        return self is other or isinstance(other, Role) and self.id == other.id

    @property
    def permissions(self) -> Permissions:
        """:class:`.Permissions`: The permissions granted by this role."""
        ret = _new_permissions(Permissions)
        ret.value = self.raw_permissions
        return ret

    def has_permission(self, permission: typing.Union[Permissions, flag[Permissions], int], /) -> bool:
        """Checks whether this role carries all of the given permissions.

        Parameters
        ----------
        permission: Union[:class:`.Permissions`, :class:`.flag`, :class:`int`]
            The permission(s) to check. Integers are treated as raw bitmasks.

        Returns
        -------
        :class:`bool`
            Whether every given permission bit is set on this role.
        """
        return permission in self.permissions


@define(slots=True)
class Member:
    """Represents a member of a :class:`.Guild`."""

    guild_id: str = field(repr=True, kw_only=True)
    """:class:`str`: The guild's ID the member is in."""

    id: str = field(repr=True, kw_only=True)
    """:class:`str`: The user's ID."""

    roles: list[str] = field(repr=True, kw_only=True, factory=list)
    """List[:class:`str`]: The IDs of roles the member holds, in no particular order."""

    nick: typing.Optional[str] = field(repr=True, kw_only=True, default=None)
    """Optional[:class:`str`]: The member's nick."""

    def __eq__(self, other: object, /) -> bool:
        return (
            self is other
            or (isinstance(other, Member) and self.id == other.id and self.guild_id == other.guild_id)
            or isinstance(other, User)
            and self.id == other.id
        )

    def __hash__(self) -> int:
        return hash((self.guild_id, self.id))


def sort_member_roles(
    target_roles: Iterable[str],
    /,
    *,
    safe: bool = True,
    guild_roles: dict[str, Role],
) -> list[Role]:
    """Sorts the member roles into the order their channel overrides are applied in.

    Roles are ordered by descending :attr:`Role.rank`, so the highest positioned
    role comes last and its overrides win. Roles with equal rank are ordered by ID.

    Parameters
    ----------
    target_roles: Iterable[:class:`str`]
        The IDs of roles to sort (:attr:`.Member.roles`).
    safe: :class:`bool`
        Whether to raise exception or not if role is missing in guild.
    guild_roles: Dict[:class:`str`, :class:`.Role`]
        The mapping of role IDs to role objects (:attr:`.Guild.roles`).

    Raises
    ------
    NoData
        The role is not found in guild.

    Returns
    -------
    List[:class:`.Role`]
        The sorted result.
    """
    if not safe:
        roles = []
        for tr in target_roles:
            role = guild_roles.get(tr)
            if role is None:
                _L.warning('Skipping unknown role %s', tr)
            else:
                roles.append(role)
        return sorted(roles, key=lambda role: (role.rank, role.id), reverse=True)
    try:
        return sorted(
            (guild_roles[tr] for tr in target_roles),
            key=lambda role: (role.rank, role.id),
            reverse=True,
        )
    except KeyError as ke:
        raise NoData(ke.args[0], 'role')


@define(slots=True, eq=False)
class Guild(Base):
    """Represents a guild: a group of members sharing roles and channels."""

    name: str = field(repr=True, kw_only=True)
    """:class:`str`: The guild's name."""

    owner_id: str = field(repr=True, kw_only=True)
    """:class:`str`: The user's ID who owns this guild."""

    default_role: Role = field(repr=True, kw_only=True)
    """:class:`.Role`: The role every member implicitly has. Its permissions are the guild's fallback permissions."""

    roles: dict[str, Role] = field(repr=True, kw_only=True, factory=dict)
    """Dict[:class:`str`, :class:`.Role`]: The guild's roles, excluding :attr:`default_role`."""

    members: dict[str, Member] = field(repr=False, kw_only=True, factory=dict)
    """Dict[:class:`str`, :class:`.Member`]: The guild's members, keyed by user ID."""

    @property
    def default_permissions(self) -> Permissions:
        """:class:`.Permissions`: The permissions everyone in the guild has."""
        return self.default_role.permissions

    def is_owner(self, subject: IDOr[typing.Union[User, Member]], /) -> bool:
        """:class:`bool`: Whether the given user owns this guild."""
        return resolve_id(subject) == self.owner_id

    def get_role(self, role_id: str, /) -> typing.Optional[Role]:
        """Optional[:class:`.Role`]: Retrieves a role by its ID, including the default role."""
        if role_id == self.default_role.id:
            return self.default_role
        return self.roles.get(role_id)

    def get_member(self, subject: IDOr[typing.Union[User, Member]], /) -> typing.Optional[Member]:
        """Optional[:class:`.Member`]: Retrieves a member by user ID."""
        return self.members.get(resolve_id(subject))

    def get_roles_for(self, subject: IDOr[typing.Union[User, Member]], /, *, safe: bool = False) -> list[Role]:
        """Returns the roles held by the given user, in override application order.

        The default role is never included. Users that are not members hold no roles.

        Parameters
        ----------
        subject: Union[:class:`str`, :class:`.User`, :class:`.Member`]
            The user to look up.
        safe: :class:`bool`
            Whether to raise exception or not if the member references a role missing in guild.

        Raises
        ------
        :class:`NoData`
            The role is not found in guild.

        Returns
        -------
        List[:class:`.Role`]
            The sorted roles.
        """
        member = subject if isinstance(subject, Member) else self.get_member(subject)
        if member is None:
            return []

        default_role_id = self.default_role.id
        return sort_member_roles(
            (role_id for role_id in member.roles if role_id != default_role_id),
            safe=safe,
            guild_roles=self.roles,
        )


__all__ = (
    'User',
    'Role',
    'Member',
    'sort_member_roles',
    'Guild',
)
