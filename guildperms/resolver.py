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

import logging
import typing

from .core import resolve_id
from .flags import BYPASS_PERMISSIONS, Permissions, flag
from .permissions import PermissionOverride

if typing.TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from .abc import GroupContext, PermissionHolder, PermissionScope
    from .core import IDOr, HasID

_L = logging.getLogger(__name__)

_new_permissions = Permissions.__new__


def has_bypass(
    guild: GroupContext,
    subject: IDOr[HasID],
    roles: Iterable[PermissionHolder],
    /,
    *,
    bypass: Permissions = BYPASS_PERMISSIONS,
    with_ownership: bool = True,
) -> bool:
    """Checks whether the subject skips override evaluation entirely.

    This is the case for the guild owner, when the guild's default role carries
    the bypass permissions, or when any of the subject's roles carries them.

    Parameters
    ----------
    guild: :class:`.GroupContext`
        The guild to check in.
    subject: Union[:class:`str`, :class:`.User`, :class:`.Member`]
        The subject to check.
    roles: Iterable[:class:`.PermissionHolder`]
        The roles held by the subject.
    bypass: :class:`.Permissions`
        The permissions that grant bypass. Empty means only ownership does.
    with_ownership: :class:`bool`
        Whether to account for ownership.

    Returns
    -------
    :class:`bool`
        Whether the subject bypasses overrides.
    """
    if with_ownership and resolve_id(subject) == guild.owner_id:
        return True
    if not bypass:
        return False
    if bypass in guild.default_role.permissions:
        return True
    return any(bypass in role.permissions for role in roles)


def calculate_channel_permissions(
    initial_permissions: Permissions,
    roles: Iterable[PermissionHolder],
    /,
    *,
    default_permissions: typing.Optional[PermissionOverride],
    role_permissions: Mapping[str, PermissionOverride],
    user_permissions: typing.Optional[PermissionOverride],
) -> Permissions:
    """Calculates the permissions in channel scope, ignoring bypass.

    Parameters
    ----------
    initial_permissions: :class:`.Permissions`
        The initial permissions to use. Should be :attr:`.Guild.default_permissions`.
    roles: Iterable[:class:`.PermissionHolder`]
        The subject's roles, in the order their overrides are folded. Later roles win.
        Should be ``guild.get_roles_for(subject)``.
    default_permissions: Optional[:class:`.PermissionOverride`]
        The channel override for the default role (:attr:`.BaseGuildChannel.default_permissions`).
    role_permissions: Mapping[:class:`str`, :class:`.PermissionOverride`]
        The permission overrides for roles in the channel (:attr:`.BaseGuildChannel.role_permissions`).
    user_permissions: Optional[:class:`.PermissionOverride`]
        The channel override for the subject itself, if any.

    Returns
    -------
    :class:`.Permissions`
        The calculated permissions.
    """
    result = initial_permissions.value

    if default_permissions is not None:
        result = default_permissions.apply(result)

    override = PermissionOverride.compose(role_permissions.get(role.id) for role in roles)
    if override is not None:
        result = override.apply(result)

    if user_permissions is not None:
        result = user_permissions.apply(result)

    ret = _new_permissions(Permissions)
    ret.value = result
    return ret


def _mask_of(action: typing.Union[Permissions, flag[Permissions], int], /) -> int:
    if isinstance(action, flag):
        return action.value
    elif isinstance(action, Permissions):
        if not action:
            raise ValueError('Cannot check an empty set of permissions')
        return action.value
    elif isinstance(action, int):
        return Permissions.from_offset(action).value
    else:
        raise TypeError(f'cannot check {action.__class__.__name__} as permission')


class PermissionResolver:
    """Resolves effective permissions of users in guild channels.

    The resolver keeps no state besides its options, so a single instance can be
    shared between threads. It does expect the guild and channel it is given not
    to change during a call.

    Parameters
    ----------
    bypass: Union[:class:`.Permissions`, :class:`.flag`]
        The permissions whose holders see everything regardless of overrides.
        Defaults to :data:`.BYPASS_PERMISSIONS`.
    with_ownership: :class:`bool`
        Whether the guild owner bypasses overrides. Defaults to ``True``.
    safe: :class:`bool`
        Whether to raise :class:`.NoData` when a member references a role missing in guild.
        Defaults to ``False``, which skips such roles.
    """

    __slots__ = ('bypass', 'with_ownership', 'safe')

    def __init__(
        self,
        *,
        bypass: typing.Union[Permissions, flag[Permissions]] = BYPASS_PERMISSIONS,
        with_ownership: bool = True,
        safe: bool = False,
    ) -> None:
        self.bypass: Permissions = Permissions(int(bypass))
        self.with_ownership: bool = with_ownership
        self.safe: bool = safe

    def __repr__(self) -> str:
        return (
            f'<PermissionResolver bypass={self.bypass!r} with_ownership={self.with_ownership!r} safe={self.safe!r}>'
        )

    def permissions_for(self, subject: IDOr[HasID], resource: PermissionScope, /) -> Permissions:
        """Calculate the full set of permissions a user has in a channel.

        Parameters
        ----------
        subject: Union[:class:`str`, :class:`.User`, :class:`.Member`]
            The user to calculate permissions for.
        resource: :class:`.PermissionScope`
            The channel to calculate permissions in.

        Raises
        ------
        :class:`NoData`
            The member references a role missing in guild, and :attr:`safe` is ``True``.

        Returns
        -------
        :class:`.Permissions`
            The calculated permissions. :meth:`Permissions.all` if the user bypasses overrides.
        """
        guild = resource.guild
        subject_id = resolve_id(subject)
        roles = guild.get_roles_for(subject, safe=self.safe)

        if has_bypass(guild, subject_id, roles, bypass=self.bypass, with_ownership=self.with_ownership):
            _L.debug('%s bypasses overrides in %s', subject_id, getattr(resource, 'id', resource))
            return Permissions.all()

        default_role = guild.default_role
        role_permissions = resource.role_permissions
        result = calculate_channel_permissions(
            default_role.permissions,
            roles,
            default_permissions=role_permissions.get(default_role.id),
            role_permissions=role_permissions,
            user_permissions=resource.user_permissions.get(subject_id),
        )
        if _L.isEnabledFor(logging.DEBUG):
            _L.debug(
                'Resolved permissions of %s in %s with %d role(s): %#x',
                subject_id,
                getattr(resource, 'id', resource),
                len(roles),
                result.value,
            )
        return result

    def resolve(
        self,
        subject: IDOr[HasID],
        resource: PermissionScope,
        action: typing.Union[Permissions, flag[Permissions], int],
        /,
    ) -> bool:
        """Checks whether a user is allowed to perform an action in a channel.

        Parameters
        ----------
        subject: Union[:class:`str`, :class:`.User`, :class:`.Member`]
            The user to check.
        resource: :class:`.PermissionScope`
            The channel to check in.
        action: Union[:class:`.Permissions`, :class:`.flag`, :class:`int`]
            The action to check. Integers are treated as bit offsets, for example
            ``Permissions.speak.offset``. When several permissions are given, all of them are required.

        Raises
        ------
        :class:`ValueError`
            No permission is defined at the given offset.
        :class:`NoData`
            The member references a role missing in guild, and :attr:`safe` is ``True``.

        Returns
        -------
        :class:`bool`
            Whether the action is permitted.
        """
        mask = _mask_of(action)
        return (self.permissions_for(subject, resource).value & mask) == mask


DEFAULT_RESOLVER: typing.Final[PermissionResolver] = PermissionResolver()

__all__ = (
    'has_bypass',
    'calculate_channel_permissions',
    'PermissionResolver',
    'DEFAULT_RESOLVER',
)
