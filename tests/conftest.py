"""Shared fixtures: fake controller packages and generated-module loading."""

import sys
import types
from collections.abc import Callable

import pytest


class RecordingController:
    """Controller base that returns what each action was called with."""

    def __getattr__(self, action: str) -> Callable[..., object]:
        if action.startswith("__"):
            raise AttributeError(action)

        def invoke(call: object, *args: object) -> object:
            return {"controller": type(self).__name__, "action": action, "args": args}

        return invoke


def _make_controller(name: str) -> type:
    return type(name, (RecordingController,), {})


@pytest.fixture
def fake_app(monkeypatch: pytest.MonkeyPatch) -> types.ModuleType:
    """Register ``fakeapp`` and ``fakeapp.controllers`` on sys.modules.

    ``fakeapp.controllers`` holds recording controllers whose actions
    return a dict of the arguments they received.
    """
    package = types.ModuleType("fakeapp")
    package.__path__ = []  # type: ignore[attr-defined]
    controllers = types.ModuleType("fakeapp.controllers")
    for name in (
        "HomeController",
        "UserController",
        "BlogController",
        "ApiController",
        "SearchController",
    ):
        setattr(controllers, name, _make_controller(name))
    package.controllers = controllers  # type: ignore[attr-defined]
    package.RootController = _make_controller("RootController")  # type: ignore[attr-defined]
    monkeypatch.setitem(sys.modules, "fakeapp", package)
    monkeypatch.setitem(sys.modules, "fakeapp.controllers", controllers)
    return controllers


@pytest.fixture
def load_module() -> Callable[[str], types.ModuleType]:
    """Execute generated source as the module ``fakeapp.generated_routes``."""

    def load(source: str) -> types.ModuleType:
        module = types.ModuleType("fakeapp.generated_routes")
        exec(compile(source, "<generated>", "exec"), module.__dict__)
        return module

    return load
