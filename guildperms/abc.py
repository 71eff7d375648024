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

import typing

if typing.TYPE_CHECKING:
    from collections.abc import Mapping

    from .core import IDOr, HasID
    from .flags import Permissions
    from .permissions import PermissionOverride


@typing.runtime_checkable
class PermissionHolder(typing.Protocol):
    """An object with an identity and a base set of permissions, such as :class:`.Role`."""

    id: str

    @property
    def permissions(self) -> Permissions: ...


@typing.runtime_checkable
class GroupContext(typing.Protocol):
    """The guild-level data a permission resolver reads.

    :class:`.Guild` implements this.
    """

    owner_id: str

    @property
    def default_role(self) -> PermissionHolder: ...

    def get_roles_for(self, subject: IDOr[HasID], /, *, safe: bool = ...) -> list[PermissionHolder]:
        """Returns the roles held by the subject in the order their overrides should be folded."""
        ...


@typing.runtime_checkable
class PermissionScope(typing.Protocol):
    """A resource owning its own override tables, such as :class:`.TextChannel`."""

    @property
    def guild(self) -> GroupContext: ...

    @property
    def role_permissions(self) -> Mapping[str, PermissionOverride]: ...

    @property
    def user_permissions(self) -> Mapping[str, PermissionOverride]: ...


__all__ = (
    'PermissionHolder',
    'GroupContext',
    'PermissionScope',
)
