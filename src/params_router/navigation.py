"""
Link click interception.
Turns plain primary-button clicks on links into in-app navigations and
leaves everything else (new tabs, modified clicks) to the browser.
"""

from dataclasses import dataclass
from typing import Any

from params_router.types import Navigate

# Attribute values that leave ``replace`` switched off
_NOT_REPLACE: tuple[Any, ...] = (False, "false", None)


@dataclass(slots=True)
class ClickEvent:
    """
    A click on a link element.

    ``href``, ``target`` and ``replace`` carry the element's attributes;
    ``replace`` is None when the attribute is absent.
    """

    href: Any = None
    button: int = 0
    target: str | None = None
    replace: Any = None
    meta_key: bool = False
    alt_key: bool = False
    ctrl_key: bool = False
    shift_key: bool = False
    default_prevented: bool = False

    @property
    def is_modified(self) -> bool:
        return self.meta_key or self.alt_key or self.ctrl_key or self.shift_key

    def prevent_default(self) -> None:
        self.default_prevented = True


def intercept_click(event: ClickEvent, navigate: Navigate) -> bool:
    """
    Navigate in-app for a link click when the browser should not.

    Returns True when the click was handled.
    """
    if (
        event.default_prevented
        or event.button != 0
        or event.is_modified
        or event.target not in (None, "", "_self")
        or not isinstance(event.href, str)
    ):
        return False

    event.prevent_default()
    navigate(event.href, replace=event.replace not in _NOT_REPLACE)
    return True
