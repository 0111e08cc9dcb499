# topmark:header:start
#
#   project      : webext-typings
#   file         : model.py
#   file_relpath : src/webext_typings/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration model for webext-typings.

`MutableConfig` is the builder used while discovering and merging layers
(built-in defaults, ``pyproject.toml``, ``webext-typings.toml``, ``--config``
files, CLI options). `MutableConfig.freeze` validates the result and returns
the immutable `Config` snapshot consumed by the engine.

TOML parsing lives in `webext_typings.config.io`; this module only holds the
merge policy.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from webext_typings.config.io import (
    ConfigError,
    TomlTable,
    check_unknown_keys,
    discover_config_files,
    extract_tool_table,
    get_string_list_or_none,
    get_string_value_or_none,
    get_table_value,
    load_defaults_dict,
    load_toml_dict,
    resolve_config_path,
)
from webext_typings.config.keys import Toml
from webext_typings.config.logging import get_logger
from webext_typings.constants import (
    DEFAULT_EVENT_INTERFACE,
    DEFAULT_HOST_INTERFACE,
    DEFAULT_ROOT_NAMESPACE,
    PYPROJECT_FILE_NAME,
)
from webext_typings.declarations.identifiers import is_reserved_word, is_valid_identifier
from webext_typings.diagnostic.model import DiagnosticLog

if TYPE_CHECKING:
    from webext_typings.config.logging import WebextLogger
    from webext_typings.diagnostic.model import Diagnostic

ArgsLike = Mapping[str, Any]

CLI_OVERRIDE_MARKER: str = "<CLI overrides>"

logger: WebextLogger = get_logger(__name__)


# ------------------ Immutable runtime config ------------------


@dataclass(frozen=True, slots=True)
class Config:
    """Immutable runtime configuration.

    Attributes:
        root_namespace (str): Name of the ambient namespace holding the API.
        alias_namespace (str | None): Optional second root re-exporting the API.
        ignored_namespaces (tuple[str, ...]): Catalog namespaces left out of the artifact.
        host_interface (str): Global interface extended with the root namespace(s).
        event_interface (str): Name of the generic event interface.
        schema_dir (Path | None): Directory holding the schema fragments.
        outfile (Path | None): Path of the generated declaration file.
        config_files (tuple[Path | str, ...]): Configuration sources, in merge order.
        diagnostics (tuple[Diagnostic, ...]): Warnings collected while loading
            and merging the configuration.
    """

    root_namespace: str = DEFAULT_ROOT_NAMESPACE
    alias_namespace: str | None = None
    ignored_namespaces: tuple[str, ...] = ()
    host_interface: str = DEFAULT_HOST_INTERFACE
    event_interface: str = DEFAULT_EVENT_INTERFACE
    schema_dir: Path | None = None
    outfile: Path | None = None
    config_files: tuple[Path | str, ...] = ()
    diagnostics: tuple[Diagnostic, ...] = ()

    @property
    def root_namespaces(self) -> tuple[str, ...]:
        """Return the root namespace followed by the alias namespace, if any."""
        if self.alias_namespace:
            return (self.root_namespace, self.alias_namespace)
        return (self.root_namespace,)

    def to_toml_dict(self) -> TomlTable:
        """Return the generator and I/O settings as a TOML-shaped dict."""
        generator: TomlTable = {
            Toml.KEY_ROOT_NAMESPACE: self.root_namespace,
            Toml.KEY_IGNORED_NAMESPACES: list(self.ignored_namespaces),
            Toml.KEY_HOST_INTERFACE: self.host_interface,
            Toml.KEY_EVENT_INTERFACE: self.event_interface,
        }
        if self.alias_namespace is not None:
            generator[Toml.KEY_ALIAS_NAMESPACE] = self.alias_namespace
        io: TomlTable = {}
        if self.schema_dir is not None:
            io[Toml.KEY_SCHEMA_DIR] = str(self.schema_dir)
        if self.outfile is not None:
            io[Toml.KEY_OUTFILE] = str(self.outfile)
        return {Toml.SECTION_GENERATOR: generator, Toml.SECTION_IO: io}

    def thaw(self) -> MutableConfig:
        """Return a mutable copy of this frozen config."""
        return MutableConfig(
            root_namespace=self.root_namespace,
            alias_namespace=self.alias_namespace,
            ignored_namespaces=list(self.ignored_namespaces),
            host_interface=self.host_interface,
            event_interface=self.event_interface,
            schema_dir=self.schema_dir,
            outfile=self.outfile,
            config_files=list(self.config_files),
            diagnostics=DiagnosticLog(items=list(self.diagnostics)),
        )


# -------------------------- Mutable builder --------------------------


@dataclass
class MutableConfig:
    """Mutable configuration used during discovery and merging.

    ``None`` means "not set by this layer"; `merge_with` lets the later layer
    win whenever it sets a value.
    """

    root_namespace: str | None = None
    alias_namespace: str | None = None
    ignored_namespaces: list[str] | None = None
    host_interface: str | None = None
    event_interface: str | None = None
    schema_dir: Path | None = None
    outfile: Path | None = None

    config_files: list[Path | str] = field(default_factory=lambda: [])

    # Collected diagnostics while loading / merging config.
    diagnostics: DiagnosticLog = field(default_factory=DiagnosticLog)

    # ---------------------------- Build/freeze ----------------------------

    def freeze(self) -> Config:
        """Validate this builder and freeze it into an immutable `Config`.

        Raises:
            ConfigError: If a namespace or interface name cannot be emitted as a
                TypeScript identifier, or the alias equals the root namespace.
        """
        root: str = self.root_namespace or DEFAULT_ROOT_NAMESPACE
        host: str = self.host_interface or DEFAULT_HOST_INTERFACE
        event: str = self.event_interface or DEFAULT_EVENT_INTERFACE
        for label, name in (
            (Toml.KEY_ROOT_NAMESPACE, root),
            (Toml.KEY_ALIAS_NAMESPACE, self.alias_namespace),
            (Toml.KEY_HOST_INTERFACE, host),
            (Toml.KEY_EVENT_INTERFACE, event),
        ):
            if name is None:
                continue
            if not is_valid_identifier(name) or is_reserved_word(name):
                raise ConfigError(f"'{label}' is not a usable identifier: {name!r}")
        if self.alias_namespace is not None and self.alias_namespace == root:
            raise ConfigError(f"'{Toml.KEY_ALIAS_NAMESPACE}' must differ from the root namespace")

        ignored: list[str] = []
        for namespace in self.ignored_namespaces or []:
            if namespace not in ignored:
                ignored.append(namespace)

        return Config(
            root_namespace=root,
            alias_namespace=self.alias_namespace,
            ignored_namespaces=tuple(ignored),
            host_interface=host,
            event_interface=event,
            schema_dir=self.schema_dir,
            outfile=self.outfile,
            config_files=tuple(self.config_files),
            diagnostics=tuple(self.diagnostics),
        )

    # --------------------------- Loaders/parsers --------------------------

    @classmethod
    def from_defaults(cls) -> MutableConfig:
        """Return a builder populated with the built-in defaults."""
        return cls.from_toml_dict(load_defaults_dict(), config_file=None)

    @classmethod
    def from_toml_dict(cls, data: TomlTable, config_file: Path | None = None) -> MutableConfig:
        """Create a draft config from a parsed TOML dict.

        Unknown sections and keys are recorded as warning diagnostics. Relative
        paths under ``[io]`` are resolved against the config file's directory.

        Args:
            data (TomlTable): The parsed TOML data (already unwrapped from
                ``[tool.webext-typings]`` for ``pyproject.toml``).
            config_file (Path | None): Source file, if any.

        Returns:
            MutableConfig: The resulting draft.

        Raises:
            ConfigError: If a value has the wrong type.
        """
        draft: MutableConfig = cls()
        source: str = str(config_file) if config_file is not None else "built-in defaults"
        check_unknown_keys(data, draft.diagnostics, source)

        generator_tbl: TomlTable = get_table_value(data, Toml.SECTION_GENERATOR, config_file)
        logger.trace("TOML [%s]: %s", Toml.SECTION_GENERATOR, generator_tbl)
        io_tbl: TomlTable = get_table_value(data, Toml.SECTION_IO, config_file)
        logger.trace("TOML [%s]: %s", Toml.SECTION_IO, io_tbl)

        section = Toml.SECTION_GENERATOR
        draft.root_namespace = get_string_value_or_none(
            generator_tbl, Toml.KEY_ROOT_NAMESPACE, section, config_file
        )
        draft.alias_namespace = get_string_value_or_none(
            generator_tbl, Toml.KEY_ALIAS_NAMESPACE, section, config_file
        )
        draft.ignored_namespaces = get_string_list_or_none(
            generator_tbl, Toml.KEY_IGNORED_NAMESPACES, section, config_file
        )
        draft.host_interface = get_string_value_or_none(
            generator_tbl, Toml.KEY_HOST_INTERFACE, section, config_file
        )
        draft.event_interface = get_string_value_or_none(
            generator_tbl, Toml.KEY_EVENT_INTERFACE, section, config_file
        )

        schema_dir = get_string_value_or_none(
            io_tbl, Toml.KEY_SCHEMA_DIR, Toml.SECTION_IO, config_file
        )
        if schema_dir is not None:
            draft.schema_dir = resolve_config_path(schema_dir, config_file)
        outfile = get_string_value_or_none(io_tbl, Toml.KEY_OUTFILE, Toml.SECTION_IO, config_file)
        if outfile is not None:
            draft.outfile = resolve_config_path(outfile, config_file)

        if config_file is not None:
            draft.config_files = [config_file]
        return draft

    @classmethod
    def from_toml_file(cls, path: Path) -> MutableConfig | None:
        """Load configuration from a single TOML file.

        For ``pyproject.toml`` only the ``[tool.webext-typings]`` table is used.

        Returns:
            MutableConfig | None: The draft, or None when a ``pyproject.toml``
                has no ``[tool.webext-typings]`` table.

        Raises:
            ConfigError: If the file cannot be read or parsed, or a value has
                the wrong type.
        """
        logger.debug("Creating MutableConfig from TOML config: %s", path)
        data: TomlTable = load_toml_dict(path)
        if path.name == PYPROJECT_FILE_NAME:
            tool_table = extract_tool_table(data)
            if tool_table is None:
                logger.debug("No [tool.webext-typings] table in %s", path)
                return None
            data = tool_table
        return cls.from_toml_dict(data, config_file=path)

    @classmethod
    def load_merged(
        cls,
        *,
        cwd: Path | None = None,
        extra_config_files: Iterable[Path] | None = None,
        no_config: bool = False,
    ) -> MutableConfig:
        """Discover and merge configuration layers into a draft `MutableConfig`.

        Merge order (lowest to highest precedence):
            1) Built-in defaults
            2) ``[tool.webext-typings]`` in ``pyproject.toml`` of ``cwd``
            3) ``webext-typings.toml`` of ``cwd``
            4) Extra config files (``--config``), in the order given

        Args:
            cwd (Path | None): Discovery directory (defaults to the current directory).
            extra_config_files (Iterable[Path] | None): Explicit config files.
            no_config (bool): If True, skip discovery (steps 2 and 3).

        Returns:
            MutableConfig: The merged draft, ready for CLI overrides and `freeze`.
        """
        draft: MutableConfig = cls.from_defaults()
        if not no_config:
            for path in discover_config_files(cwd or Path.cwd()):
                layer = cls.from_toml_file(path)
                if layer is not None:
                    draft = draft.merge_with(layer)
        for extra in extra_config_files or ():
            layer = cls.from_toml_file(extra)
            if layer is not None:
                draft = draft.merge_with(layer)
        return draft

    def merge_with(self, other: MutableConfig) -> MutableConfig:
        """Return a new draft where values set in ``other`` override this draft."""
        return MutableConfig(
            root_namespace=other.root_namespace
            if other.root_namespace is not None
            else self.root_namespace,
            alias_namespace=other.alias_namespace
            if other.alias_namespace is not None
            else self.alias_namespace,
            ignored_namespaces=list(other.ignored_namespaces)
            if other.ignored_namespaces is not None
            else self.ignored_namespaces,
            host_interface=other.host_interface
            if other.host_interface is not None
            else self.host_interface,
            event_interface=other.event_interface
            if other.event_interface is not None
            else self.event_interface,
            schema_dir=other.schema_dir if other.schema_dir is not None else self.schema_dir,
            outfile=other.outfile if other.outfile is not None else self.outfile,
            config_files=self.config_files + other.config_files,
            diagnostics=DiagnosticLog(items=[*self.diagnostics, *other.diagnostics]),
        )

    def apply_cli_args(self, args: ArgsLike) -> MutableConfig:
        """Apply overrides from a parsed arguments mapping (CLI or API).

        Only keys whose value is not None are applied. ``ignored_namespaces``
        extends the configured list instead of replacing it. Paths are taken
        relative to the current working directory.

        Args:
            args (ArgsLike): Parsed arguments mapping.

        Returns:
            MutableConfig: This instance, updated in place.
        """
        logger.debug("Applying CLI arguments to MutableConfig: %s", args)
        self.config_files.append(CLI_OVERRIDE_MARKER)

        for key in ("root_namespace", "alias_namespace", "host_interface", "event_interface"):
            value = args.get(key)
            if value is not None:
                setattr(self, key, value)

        extra_ignored = args.get("ignored_namespaces")
        if extra_ignored:
            self.ignored_namespaces = [*(self.ignored_namespaces or []), *extra_ignored]

        if args.get("schema_dir") is not None:
            self.schema_dir = Path(args["schema_dir"])
        if args.get("outfile") is not None:
            self.outfile = Path(args["outfile"])
        return self
