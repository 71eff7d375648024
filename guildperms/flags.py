from __future__ import annotations

import inspect
import typing

from .errors import InvalidFlags
from .utils import MISSING

if typing.TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from typing_extensions import Self

BF = typing.TypeVar('BF', bound='BaseFlags')


class flag(typing.Generic[BF]):
    __slots__ = (
        '__doc__',
        '_func',
        '_parent',
        'name',
        'value',
        'offset',
    )

    def __init__(self) -> None:
        self.__doc__: typing.Optional[str] = None
        self._func: Callable[[BF], int] = MISSING
        self._parent: type[BF] = MISSING
        self.name: str = ''
        self.value: int = 0
        self.offset: int = -1

    def __call__(self, func: Callable[[BF], int], /) -> Self:
        self._func = func
        self.__doc__ = func.__doc__
        self.name = func.__name__
        return self

    @typing.overload
    def __get__(self, instance: None, owner: type[BF], /) -> Self: ...

    @typing.overload
    def __get__(self, instance: BF, owner: type[BF], /) -> bool: ...

    def __get__(self, instance: typing.Optional[BF], owner: type[BF], /) -> typing.Union[bool, Self]:
        if instance is None:
            return self
        else:
            return instance._get(self)

    def __set__(self, instance: BF, value: bool, /) -> None:
        instance._set(self, value)

    def __and__(self, other: typing.Union[BF, flag[BF], int], /) -> BF:
        return self._parent(self.value) & other

    def __or__(self, other: typing.Union[BF, flag[BF], int], /) -> BF:
        return self._parent(self.value) | other

    def __xor__(self, other: typing.Union[BF, flag[BF], int], /) -> BF:
        return self._parent(self.value) ^ other

    def __invert__(self) -> BF:
        return ~self._parent(self.value)

    def __int__(self) -> int:
        return self.value

    def __repr__(self) -> str:
        return f'<flag {self.name}: offset={self.offset}>'


class BaseFlags:
    """Base class for flags.

    Subclasses may pass ``bits`` to declare the width of the bitmask. Every flag
    must be a single bit whose offset is below that width, otherwise defining
    the class raises :class:`InvalidFlags`.
    """

    if typing.TYPE_CHECKING:
        ALL_VALUE: typing.ClassVar[int]
        BITS: typing.ClassVar[int]
        VALID_FLAGS: typing.ClassVar[dict[str, int]]

        ALL: typing.ClassVar[Self]
        NONE: typing.ClassVar[Self]
        FLAGS: typing.ClassVar[dict[str, flag]]

    __slots__ = ('value',)

    def __init_subclass__(cls, *, bits: int = 53) -> None:
        valid_flags = {}
        flags = {}
        for _, f in inspect.getmembers(cls):
            if isinstance(f, flag):
                value = f._func(cls)
                if value <= 0 or value & (value - 1):
                    raise InvalidFlags(f.name, value, 'is not a single bit')
                offset = value.bit_length() - 1
                if offset >= bits:
                    raise InvalidFlags(f.name, value, f'does not fit into {bits}-bit {cls.__name__}')

                f.value = value
                f.offset = offset
                f._parent = cls
                valid_flags[f.name] = value
                flags[f.name] = f

        all = 0
        for value in valid_flags.values():
            all |= value

        cls.ALL_VALUE = all
        cls.BITS = bits
        cls.VALID_FLAGS = valid_flags
        cls.ALL = cls(cls.ALL_VALUE)
        cls.NONE = cls(0)
        cls.FLAGS = flags

    def __init__(self, value: int = 0, /, **kwargs: bool) -> None:
        self.value = value

        if kwargs:
            for k, f in kwargs.items():
                if k not in self.VALID_FLAGS:
                    raise TypeError(f'Unknown flag {k}')
                setattr(self, k, f)

    def _get(self, other: flag[Self], /) -> bool:
        ov = other.value
        return (self.value & ov) == ov

    def _set(self, flag: flag[Self], value: bool, /) -> None:
        if value:
            self.value |= flag.value
        else:
            self.value &= ~flag.value

    @classmethod
    def all(cls) -> Self:
        """Returns instance with all flags."""
        return cls(cls.ALL_VALUE)

    @classmethod
    def none(cls) -> Self:
        """Returns instance with no flags."""
        return cls(0)

    @classmethod
    def from_value(cls, value: int, /) -> Self:
        self = cls.__new__(cls)
        self.value = value
        return self

    @classmethod
    def from_offset(cls, offset: int, /) -> Self:
        """Returns instance with only the flag at the given bit offset.

        Raises
        ------
        :class:`ValueError`
            The offset is outside the bitmask width, or no flag is defined there.
        """
        if offset < 0 or offset >= cls.BITS:
            raise ValueError(f'Offset {offset} is out of range for {cls.BITS}-bit {cls.__name__}')
        value = 1 << offset
        if not cls.ALL_VALUE & value:
            raise ValueError(f'No {cls.__name__} flag is defined at offset {offset}')
        return cls(value)

    @classmethod
    def from_kinds(cls, *names: str) -> Self:
        """Returns instance with the flags of the given names enabled."""
        return cls(**dict.fromkeys(names, True))

    def __hash__(self) -> int:
        return hash(self.value)

    def __iter__(self) -> Iterator[tuple[str, bool]]:
        for name in self.FLAGS:
            yield (name, getattr(self, name))

    def __repr__(self, /) -> str:
        return f'<{self.__class__.__name__}: {self.value}>'

    def copy(self) -> Self:
        """Copies the flag value."""
        return self.__class__(self.value)

    def _value_of(self, other: typing.Union[Self, flag[Self], int], /) -> int:
        if isinstance(other, int):
            return other
        elif isinstance(other, (flag, self.__class__)):
            return other.value
        else:
            raise TypeError(f'cannot get {other.__class__.__name__} value')

    def is_subset(self, other: typing.Union[Self, flag[Self], int], /) -> bool:
        """:class:`bool`: Returns ``True`` if self has the same or fewer flags as other."""
        return (self.value & self._value_of(other)) == self.value

    def is_superset(self, other: typing.Union[Self, flag[Self], int], /) -> bool:
        """:class:`bool`: Returns ``True`` if self has the same or more flags as other."""
        return (self.value | self._value_of(other)) == self.value

    def is_strict_subset(self, other: typing.Union[Self, flag[Self], int], /) -> bool:
        """:class:`bool`: Returns ``True`` if the flags on other are a strict subset of those on self."""
        return self.is_subset(other) and self != other

    def is_strict_superset(self, other: typing.Union[Self, flag[Self], int], /) -> bool:
        """:class:`bool`: Returns ``True`` if the flags on other are a strict superset of those on self."""
        return self.is_superset(other) and self != other

    __le__ = is_subset
    __ge__ = is_superset
    __lt__ = is_strict_subset
    __gt__ = is_strict_superset

    def __and__(self, other: typing.Union[Self, flag[Self], int], /) -> Self:
        return self.__class__(self.value & self._value_of(other))

    def __bool__(self) -> bool:
        return self.value != 0

    def __contains__(self, other: typing.Union[Self, flag[Self], int], /) -> bool:
        ov = self._value_of(other)
        return (self.value & ov) == ov

    def __eq__(self, other: object, /) -> bool:
        return self is other or isinstance(other, self.__class__) and self.value == other.value

    def __iand__(self, other: typing.Union[Self, flag[Self], int], /) -> Self:
        self.value &= self._value_of(other)
        return self

    def __int__(self) -> int:
        return self.value

    def __invert__(self) -> Self:
        # stay inside the declared width so the result is still a valid bitmask
        return self.from_value(self.value ^ ((1 << self.BITS) - 1))

    def __ior__(self, other: typing.Union[Self, flag[Self], int], /) -> Self:
        self.value |= self._value_of(other)
        return self

    def __ixor__(self, other: typing.Union[Self, flag[Self], int], /) -> Self:
        self.value ^= self._value_of(other)
        return self

    def __ne__(self, other: object, /) -> bool:
        return not self.__eq__(other)

    def __or__(self, other: typing.Union[Self, flag[Self], int], /) -> Self:
        return self.__class__(self.value | self._value_of(other))

    def __xor__(self, other: typing.Union[Self, flag[Self], int], /) -> Self:
        return self.__class__(self.value ^ self._value_of(other))


def doc_flags(
    intro: str,
    /,
    *,
    added_in: typing.Optional[str] = None,
) -> Callable[[type[BF]], type[BF]]:
    """Document flag classes.

    Parameters
    ----------
    intro: :class:`str`
        The intro.
    added_in: Optional[:class:`str`]
        The version the flags were added in.

    Returns
    -------
    Callable[[Type[BF]], Type[BF]]
        The documented class.
    """

    def decorator(cls: type[BF]) -> type[BF]:
        directives = ''

        if added_in:
            directives += '    \n    .. versionadded:: {}\n'.format(added_in)
        cls.__doc__ = f"""{intro}
{directives}
    .. container:: operations

        .. describe:: x == y

            Checks if two flags are equal.
        .. describe:: x != y

            Checks if two flags are not equal.
        .. describe:: x | y, x |= y

            Returns a {cls.__name__} instance with all enabled flags from
            both x and y.
        .. describe:: x & y, x &= y

            Returns a {cls.__name__} instance with only flags enabled on
            both x and y.
        .. describe:: x ^ y, x ^= y

            Returns a {cls.__name__} instance with only flags enabled on
            only one of x or y, not on both.
        .. describe:: ~x

            Returns a {cls.__name__} instance with every bit of the
            {cls.BITS}-bit mask inverted from x.
        .. describe:: hash(x)

            Return the flag's hash.
        .. describe:: iter(x)

            Returns an iterator of ``(name, value)`` pairs. This allows it
            to be, for example, constructed as a dict or a list of pairs.
        .. describe:: bool(b)

            Returns whether any flag is set to ``True``.

    Attributes
    ----------
    value: :class:`int`
        The raw value. This value is a bit array field of a {cls.BITS}-bit integer
        representing the currently available flags. You should query
        flags via the properties rather than using this raw value.
"""
        return cls

    return decorator


@doc_flags('Wraps up a guild Permission flag value.', added_in='0.1')
class Permissions(BaseFlags, bits=32):
    __slots__ = ()

    # * General permissions

    @flag()
    def create_invites(cls) -> int:
        """:class:`bool`: Whether the user can create invites to the guild."""
        return 1 << 0

    @flag()
    def kick_members(cls) -> int:
        """:class:`bool`: Whether the user can kick other members."""
        return 1 << 1

    @flag()
    def ban_members(cls) -> int:
        """:class:`bool`: Whether the user can ban other members."""
        return 1 << 2

    @flag()
    def manage_roles(cls) -> int:
        """:class:`bool`: Whether the user can manage roles in the guild.

        Holding this permission bypasses every channel override.
        """
        return 1 << 3

    @flag()
    def manage_channels(cls) -> int:
        """:class:`bool`: Whether the user can edit, delete, or create channels in the guild."""
        return 1 << 4

    @flag()
    def manage_server(cls) -> int:
        """:class:`bool`: Whether the user can edit guild properties."""
        return 1 << 5

    @classmethod
    def general(cls) -> Self:
        """:class:`Permissions`: Returns general permissions."""
        return cls(0b00000000_00000000_00000000_00111111)

    # % 4 bits reserved

    # * Text permissions

    @flag()
    def read_messages(cls) -> int:
        """:class:`bool`: Whether the user can see a channel and read its messages."""
        return 1 << 10

    @flag()
    def send_messages(cls) -> int:
        """:class:`bool`: Whether the user can send messages."""
        return 1 << 11

    @flag()
    def send_tts_messages(cls) -> int:
        """:class:`bool`: Whether the user can send text-to-speech messages."""
        return 1 << 12

    @flag()
    def manage_messages(cls) -> int:
        """:class:`bool`: Whether the user can delete other's messages in a channel."""
        return 1 << 13

    @flag()
    def embed_links(cls) -> int:
        """:class:`bool`: Whether links sent by the user are embedded."""
        return 1 << 14

    @flag()
    def attach_files(cls) -> int:
        """:class:`bool`: Whether the user can send attachments and media in a channel."""
        return 1 << 15

    @flag()
    def read_message_history(cls) -> int:
        """:class:`bool`: Whether the user can read a channel's past message history."""
        return 1 << 16

    @flag()
    def mention_everyone(cls) -> int:
        """:class:`bool`: Whether the user can mention everyone in a channel."""
        return 1 << 17

    @classmethod
    def text(cls) -> Self:
        """:class:`Permissions`: Returns text-related permissions."""
        return cls(0b00000000_00000011_11111100_00000000)

    # % 2 bits reserved

    # * Voice permissions

    @flag()
    def connect(cls) -> int:
        """:class:`bool`: Whether the user can connect to a voice channel."""
        return 1 << 20

    @flag()
    def speak(cls) -> int:
        """:class:`bool`: Whether the user can speak in a voice channel."""
        return 1 << 21

    @flag()
    def mute_members(cls) -> int:
        """:class:`bool`: Whether the user can mute other members in a voice channel."""
        return 1 << 22

    @flag()
    def deafen_members(cls) -> int:
        """:class:`bool`: Whether the user can deafen other members in a voice channel."""
        return 1 << 23

    @flag()
    def move_members(cls) -> int:
        """:class:`bool`: Whether the user can move members between voice channels."""
        return 1 << 24

    @flag()
    def use_voice_activation(cls) -> int:
        """:class:`bool`: Whether the user can speak using voice activity detection."""
        return 1 << 25

    @classmethod
    def voice(cls) -> Self:
        """:class:`Permissions`: Returns voice-related permissions."""
        return cls(0b00000011_11110000_00000000_00000000)

    # % Bits 26 to 31: free area


BYPASS_PERMISSIONS: typing.Final[Permissions] = Permissions(manage_roles=True)
VIEW_ONLY_PERMISSIONS: typing.Final[Permissions] = Permissions(
    read_messages=True,
    read_message_history=True,
)
DEFAULT_PERMISSIONS: typing.Final[Permissions] = VIEW_ONLY_PERMISSIONS | Permissions(
    create_invites=True,
    send_messages=True,
    send_tts_messages=True,
    embed_links=True,
    attach_files=True,
    mention_everyone=True,
    connect=True,
    speak=True,
    use_voice_activation=True,
)


__all__ = (
    'flag',
    'BaseFlags',
    'doc_flags',
    'Permissions',
    'BYPASS_PERMISSIONS',
    'VIEW_ONLY_PERMISSIONS',
    'DEFAULT_PERMISSIONS',
)
