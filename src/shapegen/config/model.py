# topmark:header:start
#
#   project      : ShapeGen
#   file         : model.py
#   file_relpath : src/shapegen/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration model: a mutable, layered builder and its frozen snapshot.

Merge order (lowest to highest precedence):
    1) Built-in defaults (`load_defaults_dict`)
    2) The discovered project config file (``shapegen.toml`` or ``[tool.shapegen]``)
    3) Config files passed explicitly (``--config``), in the order given
    4) CLI overrides (`MutableConfig.apply_cli_args`)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from shapegen.config.keys import Toml
from shapegen.config.loaders import (
    discover_config_file,
    extract_tool_section,
    get_bool_value_or_none,
    get_string_value_or_none,
    get_table_value,
    load_defaults_dict,
    load_toml_dict,
)
from shapegen.config.logging import get_logger
from shapegen.constants import DEFAULT_OUTPUT_DIR
from shapegen.core.errors import MissingStateError
from shapegen.model.shape_id import ShapeId

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from shapegen.config.loaders import TomlTable
    from shapegen.config.logging import ShapegenLogger

logger: ShapegenLogger = get_logger(__name__)

CLI_OVERRIDE_STR: str = "<CLI overrides>"


# ------------------ Immutable runtime config ------------------


@dataclass(frozen=True, slots=True)
class Config:
    """Immutable configuration of one generation run.

    Produced by `MutableConfig.freeze`.

    Attributes:
        module_name (str): Go module path of the generated package.
        service (ShapeId | None): Service whose closure is generated; None means
            every shape of the model.
        output_dir (Path): Directory receiving the generated files.
        types (bool): Generate Go type definitions.
        schemas (bool): Generate schema descriptors.
        serde (bool): Generate serializers and deserializers.
        clone_operation_io (bool): Give each operation its own input/output structures.
        dry_run (bool): Generate without writing files.
        config_files (tuple[str, ...]): Config sources merged into this snapshot.
    """

    module_name: str
    service: ShapeId | None = None
    output_dir: Path = Path(DEFAULT_OUTPUT_DIR)
    types: bool = True
    schemas: bool = True
    serde: bool = True
    clone_operation_io: bool = True
    dry_run: bool = False
    config_files: tuple[str, ...] = ()

    def thaw(self) -> MutableConfig:
        """Return a mutable copy of this snapshot."""
        return MutableConfig(
            module_name=self.module_name,
            service=str(self.service) if self.service is not None else None,
            output_dir=self.output_dir,
            types=self.types,
            schemas=self.schemas,
            serde=self.serde,
            clone_operation_io=self.clone_operation_io,
            dry_run=self.dry_run,
            config_files=list(self.config_files),
        )


# -------------------------- Mutable builder --------------------------


@dataclass
class MutableConfig:
    """Mutable configuration used while merging layers.

    Every field is tri-state where a layer may leave it unset (None); `merge_with`
    lets set values of the later layer win.
    """

    module_name: str | None = None
    service: str | None = None
    output_dir: Path | None = None
    types: bool | None = None
    schemas: bool | None = None
    serde: bool | None = None
    clone_operation_io: bool | None = None
    dry_run: bool | None = None

    # Provenance
    config_files: list[str] = field(default_factory=lambda: [])

    # ---------------------------- Build/freeze ----------------------------

    def freeze(self) -> Config:
        """Freeze this builder into an immutable `Config`.

        Raises:
            MissingStateError: If no module name was configured.
            ShapeIdError: If the configured service is not a valid shape id.
        """
        if not self.module_name:
            raise MissingStateError("module_name", "Config")
        service = ShapeId.parse(self.service) if self.service else None
        return Config(
            module_name=self.module_name,
            service=service,
            output_dir=self.output_dir or Path(DEFAULT_OUTPUT_DIR),
            types=_resolved(self.types, True),
            schemas=_resolved(self.schemas, True),
            serde=_resolved(self.serde, True),
            clone_operation_io=_resolved(self.clone_operation_io, True),
            dry_run=_resolved(self.dry_run, False),
            config_files=tuple(self.config_files),
        )

    # --------------------------- Loaders/parsers --------------------------

    @classmethod
    def from_defaults(cls) -> MutableConfig:
        """Return a builder populated with the runtime defaults."""
        return cls.from_toml_dict(load_defaults_dict())

    @classmethod
    def from_toml_file(cls, path: Path) -> MutableConfig | None:
        """Load configuration from a single TOML file.

        Args:
            path (Path): ``shapegen.toml`` or ``pyproject.toml``.

        Returns:
            MutableConfig | None: The builder; None when a ``pyproject.toml`` has no
                ``[tool.shapegen]`` section.
        """
        logger.debug("Creating MutableConfig from TOML config: %s", path)
        section = extract_tool_section(load_toml_dict(path), path)
        if section is None:
            return None
        draft = cls.from_toml_dict(section, config_file=path)
        logger.trace("Generated MutableConfig: %s", draft)
        return draft

    @classmethod
    def from_toml_dict(cls, data: TomlTable, config_file: Path | None = None) -> MutableConfig:
        """Create a builder from a parsed TOML table.

        A relative output directory is resolved against the config file's directory.

        Args:
            data (TomlTable): The ShapeGen table.
            config_file (Path | None): The file ``data`` was read from, if any.

        Returns:
            MutableConfig: The new builder.
        """
        module_tbl: TomlTable = get_table_value(data, Toml.SECTION_MODULE)
        output_tbl: TomlTable = get_table_value(data, Toml.SECTION_OUTPUT)
        generation_tbl: TomlTable = get_table_value(data, Toml.SECTION_GENERATION)
        logger.trace("TOML [module]: %s", module_tbl)
        logger.trace("TOML [output]: %s", output_tbl)
        logger.trace("TOML [generation]: %s", generation_tbl)

        output_dir: Path | None = None
        directory = get_string_value_or_none(output_tbl, Toml.KEY_DIRECTORY)
        if directory is not None:
            output_dir = Path(directory)
            if config_file is not None and not output_dir.is_absolute():
                output_dir = config_file.parent.resolve() / output_dir

        return cls(
            module_name=get_string_value_or_none(module_tbl, Toml.KEY_NAME),
            service=get_string_value_or_none(module_tbl, Toml.KEY_SERVICE),
            output_dir=output_dir,
            types=get_bool_value_or_none(generation_tbl, Toml.KEY_TYPES),
            schemas=get_bool_value_or_none(generation_tbl, Toml.KEY_SCHEMAS),
            serde=get_bool_value_or_none(generation_tbl, Toml.KEY_SERDE),
            clone_operation_io=get_bool_value_or_none(generation_tbl, Toml.KEY_CLONE_OPERATION_IO),
            config_files=[str(config_file)] if config_file is not None else [],
        )

    @classmethod
    def load_merged(
        cls,
        *,
        anchor: Path | None = None,
        extra_config_files: Iterable[Path] | None = None,
        no_config: bool = False,
    ) -> MutableConfig:
        """Merge defaults, the discovered config file and explicit config files.

        Args:
            anchor (Path | None): Where discovery starts (CWD when None).
            extra_config_files (Iterable[Path] | None): Files merged after discovery.
            no_config (bool): Skip discovery.

        Returns:
            MutableConfig: The merged builder.
        """
        draft = cls.from_defaults()
        if not no_config:
            found = discover_config_file(anchor or Path.cwd())
            if found is not None:
                layer = cls.from_toml_file(found)
                if layer is not None:
                    draft = draft.merge_with(layer)
        for extra in extra_config_files or ():
            layer = cls.from_toml_file(Path(extra))
            if layer is not None:
                draft = draft.merge_with(layer)
        return draft

    # ------------------------------- Merging -------------------------------

    def merge_with(self, other: MutableConfig) -> MutableConfig:
        """Return a new builder where values set in ``other`` override this one."""
        return MutableConfig(
            module_name=_pick(other.module_name, self.module_name),
            service=_pick(other.service, self.service),
            output_dir=_pick(other.output_dir, self.output_dir),
            types=_pick(other.types, self.types),
            schemas=_pick(other.schemas, self.schemas),
            serde=_pick(other.serde, self.serde),
            clone_operation_io=_pick(other.clone_operation_io, self.clone_operation_io),
            dry_run=_pick(other.dry_run, self.dry_run),
            config_files=self.config_files + other.config_files,
        )

    def apply_cli_args(self, args: Mapping[str, Any]) -> MutableConfig:
        """Apply CLI (or API) overrides; keys absent or None leave values unchanged.

        Recognized keys: ``module_name``, ``service``, ``output_dir``, ``dry_run``.
        """
        logger.debug("Applying CLI arguments to MutableConfig: %s", args)
        self.config_files.append(CLI_OVERRIDE_STR)
        if args.get("module_name") is not None:
            self.module_name = args["module_name"]
        if args.get("service") is not None:
            self.service = args["service"]
        if args.get("output_dir") is not None:
            self.output_dir = Path(args["output_dir"])
        if args.get("dry_run") is not None:
            self.dry_run = bool(args["dry_run"])
        return self


def _pick(override: Any, base: Any) -> Any:
    return override if override is not None else base


def _resolved(value: bool | None, default: bool) -> bool:
    return default if value is None else value
