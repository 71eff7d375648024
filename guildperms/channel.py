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
from types import MappingProxyType
import typing

from .base import Base
from .core import IDOr, resolve_id
from .enums import ChannelType

if typing.TYPE_CHECKING:
    from collections.abc import Mapping

    from .flags import Permissions, flag
    from .guild import Guild, Member, Role, User
    from .permissions import PermissionOverride
    from .resolver import PermissionResolver


def _freeze(overrides: Mapping[str, PermissionOverride], /) -> Mapping[str, PermissionOverride]:
    if isinstance(overrides, MappingProxyType):
        return overrides
    return MappingProxyType(dict(overrides))


@define(slots=True)
class BaseGuildChannel(Base):
    """Represents a channel inside a guild.

    The override mappings are read-only snapshots. Editing an override replaces
    the whole mapping, so a resolver that already grabbed the previous one keeps
    seeing a consistent view.
    """

    guild: Guild = field(repr=False, kw_only=True)
    """:class:`.Guild`: The guild the channel belongs to."""

    name: str = field(repr=True, kw_only=True)
    """:class:`str`: The channel's name."""

    position: int = field(repr=True, kw_only=True, default=0)
    """:class:`int`: The channel's position in the channel list."""

    role_permissions: Mapping[str, PermissionOverride] = field(
        repr=True, kw_only=True, factory=dict, converter=_freeze
    )
    """Mapping[:class:`str`, :class:`.PermissionOverride`]: The permission overrides for roles, keyed by role ID.

    The entry for the guild's default role is exposed as :attr:`default_permissions`.
    """

    user_permissions: Mapping[str, PermissionOverride] = field(
        repr=True, kw_only=True, factory=dict, converter=_freeze
    )
    """Mapping[:class:`str`, :class:`.PermissionOverride`]: The permission overrides for users, keyed by user ID."""

    def __hash__(self) -> int:
        return hash(self.id)

    def __eq__(self, other: object, /) -> bool:
        return self is other or isinstance(other, BaseGuildChannel) and self.id == other.id

    @property
    def type(self) -> ChannelType:
        """:class:`.ChannelType`: The channel's type."""
        raise NotImplementedError

    @property
    def default_permissions(self) -> typing.Optional[PermissionOverride]:
        """Optional[:class:`.PermissionOverride`]: The permission override for the guild's default role."""
        return self.role_permissions.get(self.guild.default_role.id)

    def get_role_override(self, role: IDOr[Role], /) -> typing.Optional[PermissionOverride]:
        """Optional[:class:`.PermissionOverride`]: Retrieves the override for a role, if there is one."""
        return self.role_permissions.get(resolve_id(role))

    def get_user_override(self, user: IDOr[typing.Union[User, Member]], /) -> typing.Optional[PermissionOverride]:
        """Optional[:class:`.PermissionOverride`]: Retrieves the override for a user, if there is one."""
        return self.user_permissions.get(resolve_id(user))

    def set_role_override(self, role: IDOr[Role], override: PermissionOverride, /) -> None:
        """Sets the override for a role, replacing :attr:`role_permissions` with an updated copy."""
        overrides = dict(self.role_permissions)
        overrides[resolve_id(role)] = override
        self.role_permissions = overrides

    def remove_role_override(self, role: IDOr[Role], /) -> typing.Optional[PermissionOverride]:
        """Removes the override for a role, replacing :attr:`role_permissions` with an updated copy.

        Returns
        -------
        Optional[:class:`.PermissionOverride`]
            The removed override, if there was one.
        """
        overrides = dict(self.role_permissions)
        removed = overrides.pop(resolve_id(role), None)
        if removed is not None:
            self.role_permissions = overrides
        return removed

    def set_user_override(self, user: IDOr[typing.Union[User, Member]], override: PermissionOverride, /) -> None:
        """Sets the override for a user, replacing :attr:`user_permissions` with an updated copy."""
        overrides = dict(self.user_permissions)
        overrides[resolve_id(user)] = override
        self.user_permissions = overrides

    def remove_user_override(
        self, user: IDOr[typing.Union[User, Member]], /
    ) -> typing.Optional[PermissionOverride]:
        """Removes the override for a user, replacing :attr:`user_permissions` with an updated copy.

        Returns
        -------
        Optional[:class:`.PermissionOverride`]
            The removed override, if there was one.
        """
        overrides = dict(self.user_permissions)
        removed = overrides.pop(resolve_id(user), None)
        if removed is not None:
            self.user_permissions = overrides
        return removed

    def permissions_for(
        self,
        target: IDOr[typing.Union[User, Member]],
        /,
        *,
        resolver: typing.Optional[PermissionResolver] = None,
    ) -> Permissions:
        """Calculate permissions for given user.

        Parameters
        ----------
        target: Union[:class:`str`, :class:`.User`, :class:`.Member`]
            The member or user to calculate permissions for.
        resolver: Optional[:class:`.PermissionResolver`]
            The resolver to use. Defaults to :data:`.DEFAULT_RESOLVER`.

        Returns
        -------
        :class:`.Permissions`
            The calculated permissions.
        """
        if resolver is None:
            from .resolver import DEFAULT_RESOLVER as resolver

        return resolver.permissions_for(target, self)

    def has_permission(
        self,
        target: IDOr[typing.Union[User, Member]],
        permission: typing.Union[Permissions, flag[Permissions], int],
        /,
        *,
        resolver: typing.Optional[PermissionResolver] = None,
    ) -> bool:
        """Checks whether the given user is allowed to perform an action in this channel.

        Parameters
        ----------
        target: Union[:class:`str`, :class:`.User`, :class:`.Member`]
            The member or user to check.
        permission: Union[:class:`.Permissions`, :class:`.flag`, :class:`int`]
            The action to check. Integers are treated as bit offsets.
        resolver: Optional[:class:`.PermissionResolver`]
            The resolver to use. Defaults to :data:`.DEFAULT_RESOLVER`.

        Returns
        -------
        :class:`bool`
            Whether the action is permitted.
        """
        if resolver is None:
            from .resolver import DEFAULT_RESOLVER as resolver

        return resolver.resolve(target, self, permission)


@define(slots=True, eq=False)
class TextChannel(BaseGuildChannel):
    """Represents a text channel inside a guild."""

    topic: typing.Optional[str] = field(repr=True, kw_only=True, default=None)
    """Optional[:class:`str`]: The channel's topic."""

    @property
    def type(self) -> typing.Literal[ChannelType.text]:
        """Literal[:attr:`ChannelType.text`]: The channel's type."""
        return ChannelType.text


@define(slots=True, eq=False)
class VoiceChannel(BaseGuildChannel):
    """Represents a voice channel inside a guild."""

    user_limit: int = field(repr=True, kw_only=True, default=0)
    """:class:`int`: The maximum amount of users allowed in the voice channel at once.

    Zero means an infinite amount of users can connect to voice channel.
    """

    @property
    def type(self) -> typing.Literal[ChannelType.voice]:
        """Literal[:attr:`ChannelType.voice`]: The channel's type."""
        return ChannelType.voice


GuildChannel = typing.Union[TextChannel, VoiceChannel]

__all__ = (
    'BaseGuildChannel',
    'TextChannel',
    'VoiceChannel',
    'GuildChannel',
)
