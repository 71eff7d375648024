from __future__ import annotations

import typing

from .flags import Permissions

if typing.TYPE_CHECKING:
    from collections.abc import Iterable

_new_permissions = Permissions.__new__
_new_permission_override = object.__new__

P = typing.TypeVar('P', Permissions, int)


def _raw(value: typing.Union[Permissions, int], /) -> int:
    if isinstance(value, int):
        return value
    return value.value


class PermissionOverride:
    """Represents a single permission override.

    Applying an override to a bitmask ``p`` yields ``(p & ~deny) | allow``.
    Nothing stops a bit from being both allowed and denied; in that case
    the bit ends up allowed.

    Parameters
    ----------
    allow: Union[:class:`.Permissions`, :class:`int`]
        The permissions to grant.
    deny: Union[:class:`.Permissions`, :class:`int`]
        The permissions to revoke.

    Attributes
    ----------
    raw_allow: :class:`int`
        The raw value of allowed permissions.
    raw_deny: :class:`int`
        The raw value of denied permissions.
    """

    __slots__ = ('raw_allow', 'raw_deny')

    def __init__(
        self,
        allow: typing.Union[Permissions, int] = 0,
        deny: typing.Union[Permissions, int] = 0,
    ) -> None:
        self.raw_allow: int = _raw(allow)
        self.raw_deny: int = _raw(deny)

    @classmethod
    def _from_raw(cls, allow: int, deny: int, /) -> PermissionOverride:
        ret = _new_permission_override(cls)
        ret.raw_allow = allow
        ret.raw_deny = deny
        return ret

    @property
    def allow(self) -> Permissions:
        """:class:`.Permissions`: The permissions to grant."""
        ret = _new_permissions(Permissions)
        ret.value = self.raw_allow
        return ret

    @property
    def deny(self) -> Permissions:
        """:class:`.Permissions`: The permissions to revoke."""
        ret = _new_permissions(Permissions)
        ret.value = self.raw_deny
        return ret

    def is_empty(self) -> bool:
        """:class:`bool`: Whether applying this override changes nothing."""
        return not self.raw_allow and not self.raw_deny

    def apply(self, permissions: P, /) -> P:
        """Applies this override on top of the given permissions.

        Parameters
        ----------
        permissions: Union[:class:`.Permissions`, :class:`int`]
            The incoming permissions.

        Returns
        -------
        Union[:class:`.Permissions`, :class:`int`]
            The resulting permissions, of the same type as the input.
        """
        result = (_raw(permissions) & ~self.raw_deny) | self.raw_allow
        if isinstance(permissions, int):
            return result
        ret = _new_permissions(permissions.__class__)
        ret.value = result
        return ret

    def after(self, earlier: PermissionOverride, /) -> PermissionOverride:
        """Composes this override with one that is applied before it.

        The result has the same effect as applying ``earlier`` and then ``self``,
        so bits touched by ``self`` take precedence.

        Parameters
        ----------
        earlier: :class:`.PermissionOverride`
            The lower-priority override.

        Returns
        -------
        :class:`.PermissionOverride`
            The composed override.
        """
        return self._from_raw(
            (earlier.raw_allow & ~self.raw_deny) | self.raw_allow,
            earlier.raw_deny | self.raw_deny,
        )

    def then(self, later: PermissionOverride, /) -> PermissionOverride:
        """Composes this override with one that is applied after it. Equivalent to ``later.after(self)``."""
        return later.after(self)

    @classmethod
    def compose(cls, overrides: Iterable[typing.Optional[PermissionOverride]], /) -> typing.Optional[PermissionOverride]:
        """Folds overrides in application order, skipping ``None`` entries.

        Parameters
        ----------
        overrides: Iterable[Optional[:class:`.PermissionOverride`]]
            The overrides, from lowest to highest priority.

        Returns
        -------
        Optional[:class:`.PermissionOverride`]
            The composed override, or ``None`` if there were no overrides.
        """
        result = None
        for override in overrides:
            if override is None:
                continue
            result = override if result is None else override.after(result)
        return result

    def __eq__(self, other: object, /) -> bool:
        return (
            self is other
            or isinstance(other, PermissionOverride)
            and self.raw_allow == other.raw_allow
            and self.raw_deny == other.raw_deny
        )

    def __hash__(self) -> int:
        return hash((self.raw_allow, self.raw_deny))

    def __repr__(self) -> str:
        return f'PermissionOverride(allow={self.allow!r}, deny={self.deny!r})'


__all__ = ('PermissionOverride',)
