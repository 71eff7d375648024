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


class GuildPermsError(Exception):
    """Base exception class for guildperms

    Ideally speaking, this could be caught to handle any exceptions raised from this library.
    """

    __slots__ = ()


class InvalidFlags(GuildPermsError):
    """Exception that's raised when a flags class defines a flag that does not fit its bitmask.

    Attributes
    ----------
    name: :class:`str`
        The offending flag's name.
    value: :class:`int`
        The offending flag's value.
    """

    __slots__ = ('name', 'value')

    def __init__(self, name: str, value: int, reason: str, /) -> None:
        self.name: str = name
        self.value: int = value
        super().__init__(f'Flag {name} ({value:#x}) {reason}')


class NoData(GuildPermsError):
    __slots__ = ('what', 'type')

    def __init__(self, what: str, type: str) -> None:
        self.what = what
        self.type = type
        super().__init__(f'Unable to find {type} {what} in guild')


__all__ = (
    'GuildPermsError',
    'InvalidFlags',
    'NoData',
)
