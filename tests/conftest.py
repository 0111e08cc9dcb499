# topmark:header:start
#
#   project      : webext-typings
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the webext-typings test suite.

This file sets up global fixtures and customizes the logging configuration for test runs,
ensuring consistent and verbose logging output during testing.

Notes:
    Tests should respect the immutable/mutable configuration split:

    - Build configs using `webext_typings.config.model.MutableConfig` (mutable),
      then `freeze()` into a `webext_typings.config.model.Config` for engine calls.
    - Do **not** mutate a frozen `Config`. If you need to tweak one,
      call `Config.thaw()`, edit the returned `MutableConfig`,
      then `freeze()` again.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Any, TypeVar, cast

import pytest

from webext_typings.config import logging
from webext_typings.config.model import MutableConfig
from webext_typings.constants import LOG_LEVEL_ENV_VAR
from webext_typings.diagnostic.model import DiagnosticLog
from webext_typings.generator.context import GenerationContext, GeneratorContext
from webext_typings.schema.catalog import merge_fragments

if TYPE_CHECKING:
    from webext_typings.config.model import Config
    from webext_typings.schema.catalog import SchemaCatalog

F = TypeVar("F", bound=Callable[..., object])

# This defines the type for the decorator function itself:
# It takes a Callable (F) and returns the same Callable (F).
DecoratorType = Callable[[F], F]


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type.

    Args:
        mark (Any): A pytest mark decorator such as `pytest.mark.integration`.

    Returns:
        DecoratorType[Any]: A decorator that preserves the wrapped function's type.
    """

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


mark_integration: DecoratorType[Any] = as_typed_mark(pytest.mark.integration)


def parametrize(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.mark.parametrize`.

    Args:
        *args (Any): Positional arguments forwarded to `pytest.mark.parametrize`.
        **kwargs (Any): Keyword arguments forwarded to `pytest.mark.parametrize`.

    Returns:
        Callable[[F], F]: A decorator that preserves the wrapped function's type.
    """
    mark: pytest.MarkDecorator = pytest.mark.parametrize(*args, **kwargs)
    return as_typed_mark(mark)


def hookimpl(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.hookimpl`.

    Args:
        *args (Any): Positional arguments forwarded to `pytest.hookimpl`.
        **kwargs (Any): Keyword arguments forwarded to `pytest.hookimpl`.

    Returns:
        Callable[[F], F]: A decorator that preserves the wrapped function's type.
    """
    return as_typed_mark(pytest.hookimpl(*args, **kwargs))


def fixture(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.fixture`.

    Args:
        *args (Any): Positional arguments forwarded to `pytest.fixture`.
        **kwargs (Any): Keyword arguments forwarded to `pytest.fixture`.

    Returns:
        Callable[[F], F]: A decorator that preserves the wrapped function's type.
    """
    return as_typed_mark(pytest.fixture(*args, **kwargs))


@pytest.fixture(autouse=True)
def silence_webext_typings_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure the runtime log level is not forced via env during tests.

    This avoids accidental DEBUG/TRACE noise when the developer has exported
    WEBEXT_TYPINGS_LOG_LEVEL in their shell.

    Args:
        monkeypatch (pytest.MonkeyPatch): Pytest monkeypatch fixture used to manipulate
            environment variables.
    """
    monkeypatch.delenv(LOG_LEVEL_ENV_VAR, raising=False)


@hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Set the logging level to TRACE for all tests.

    Args:
        config (pytest.Config): The pytest configuration object.
    """
    logging.setup_logging(level=logging.TRACE_LEVEL)


@pytest.fixture
def isolation(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run the test in an isolated, empty project directory.

    Keeps config discovery (``pyproject.toml``, ``webext-typings.toml``) from
    picking up files of the repository the tests run from.

    Args:
        tmp_path (Path): The pytest-provided temporary directory for the test.
        monkeypatch (pytest.MonkeyPatch): Fixture to change the working directory.

    Returns:
        Path: The isolated working directory.
    """
    cwd: Path = tmp_path / "proj"
    cwd.mkdir()
    monkeypatch.chdir(cwd)
    return cwd


def make_config(**overrides: Any) -> Config:
    """Return a frozen `Config` built from defaults and overrides.

    Args:
        **overrides (Any): Keyword overrides applied to the mutable builder before freezing.

    Returns:
        Config: An immutable configuration snapshot for use in tests.
    """
    m: MutableConfig = make_mutable_config(**overrides)
    return m.freeze()


def make_mutable_config(**overrides: Any) -> MutableConfig:
    """Return a mutable builder for scenarios that need staged edits.

    Args:
        **overrides (Any): Keyword overrides to apply to the mutable builder.

    Returns:
        MutableConfig: A mutable configuration object ready to be frozen or further edited.
    """
    m: MutableConfig = MutableConfig.from_defaults()
    for k, v in overrides.items():
        setattr(m, k, v)
    return m


# --- Schema helpers ---


def make_catalog(
    *fragments: dict[str, Any], diagnostics: DiagnosticLog | None = None
) -> SchemaCatalog:
    """Merge ``fragments`` (as if read from ``test.json``) into a catalog."""
    return merge_fragments(
        [("test.json", fragment) for fragment in fragments],
        diagnostics if diagnostics is not None else DiagnosticLog(),
    )


def make_context(
    catalog: SchemaCatalog,
    namespace: str,
    *,
    context: GenerationContext = GenerationContext.NAMESPACE,
    diagnostics: DiagnosticLog | None = None,
) -> GeneratorContext:
    """Return a generator context positioned on ``namespace`` of ``catalog``."""
    return GeneratorContext(
        current_namespace=namespace,
        known_types=catalog[namespace].types if namespace in catalog else (),
        catalog=catalog,
        diagnostics=diagnostics if diagnostics is not None else DiagnosticLog(),
        context=context,
    )


def write_schema(directory: Path, name: str, fragments: list[dict[str, Any]] | str) -> Path:
    """Write a schema file (a JSON array of fragments, or raw text) into ``directory``."""
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / name
    text = fragments if isinstance(fragments, str) else json.dumps(fragments, indent=2)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def empty_context() -> GeneratorContext:
    """A context on namespace ``test`` of an otherwise empty catalog."""
    return make_context(make_catalog({"namespace": "test"}), "test")
