"""
Shared fixtures and helpers for params-router tests.
"""

from typing import Any

import pytest

from params_router.history import MemoryHistory
from params_router.patterns import clear_cache
from params_router.router import ParamsRouter


@pytest.fixture(autouse=True)
def fresh_pattern_cache() -> None:
    """Start every test with an empty pattern cache."""
    clear_cache()


@pytest.fixture
def history() -> MemoryHistory:
    return MemoryHistory(["/"])


@pytest.fixture
def router(history: MemoryHistory) -> ParamsRouter:
    return ParamsRouter(history=history)


class NavigateRecorder:
    """Captures calls to a navigate function for assertions."""

    def __init__(self) -> None:
        self.calls: list[tuple[Any, dict[str, Any]]] = []

    def __call__(self, destination: Any, **options: Any) -> None:
        self.calls.append((destination, options))

    @property
    def last(self) -> tuple[Any, dict[str, Any]]:
        return self.calls[-1]


@pytest.fixture
def recorder() -> NavigateRecorder:
    return NavigateRecorder()
