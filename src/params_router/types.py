"""
Type definitions for params-router.
"""

from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any, TypeAlias

if TYPE_CHECKING:
    from params_router.location import Location

# Parameter Types
ParamDict: TypeAlias = dict[str, Any]
ParamsInput: TypeAlias = Mapping[str, Any]
UpdaterFn: TypeAlias = Callable[[ParamDict], ParamsInput]
State: TypeAlias = Mapping[str, Any]

# Subscription Types
Listener: TypeAlias = Callable[["Location"], None]
Unsubscribe: TypeAlias = Callable[[], None]
Navigate: TypeAlias = Callable[..., None]
