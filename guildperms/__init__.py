"""
Guild Permissions
~~~~~~~~~~~~~~~~~

Resolves what users are allowed to do in guild channels,
given roles and per-channel permission overrides.

:copyright: (c) 2024-present MCausc78
:license: MIT, see LICENSE for more details.

"""

from . import (
    abc as abc,
    utils as utils,
)

from .base import *
from .channel import *
from .core import *
from .enums import *
from .errors import *
from .flags import *
from .guild import *
from .permissions import *
from .resolver import *
