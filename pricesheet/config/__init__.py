"""Run configuration for pricesheet.

Settings come from an optional YAML file and can be overridden per command
line invocation. Relative paths inside the file are resolved against the
directory that holds it, so a deployment folder with ``config.yaml``,
``template.pdf`` and the CSV export works from any working directory.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from pricesheet.core.columns import column_index
from pricesheet.core.entries import AddressingMode, EntryLayout, accessor_for, layout_for
from pricesheet.core.errors import ConfigError, InvalidAddressError
from pricesheet.core.fields import FieldAccessor
from pricesheet_io.csv_reader import read_start_line

LayoutKey = Union[str, int]

_PATH_FIELDS = ("csv", "template", "output", "start_line_file")


class RunConfig(BaseModel):
    """Settings shared by the template fill and price sheet commands."""

    model_config = ConfigDict(extra="forbid")

    csv: Optional[Path] = None
    template: Optional[Path] = None
    output: Optional[Path] = None
    delimiter: str = ";"
    encoding: str = "utf-8"
    start_line: int = Field(default=0, ge=0)
    start_line_file: Optional[Path] = None
    limit: Optional[int] = Field(default=None, ge=0)
    pdf_encoding: str = "latin-1"
    addressing: AddressingMode = AddressingMode.LETTERS
    trailing_page_break: bool = False
    layout: Dict[str, Union[LayoutKey, List[LayoutKey]]] = Field(default_factory=dict)
    layout_join: Optional[str] = None

    @field_validator("delimiter")
    @classmethod
    def _single_character(cls, value: str) -> str:
        if len(value) != 1:
            raise ValueError("delimiter must be a single character")
        return value

    def with_overrides(self, **overrides: Any) -> "RunConfig":
        """Return a copy where every non-``None`` override replaces the stored value.

        Passing ``start_line`` clears a configured ``start_line_file`` so the
        option given last on the command line takes effect.
        """

        changes = {key: value for key, value in overrides.items() if value is not None}
        if not changes:
            return self
        # An explicit start_line replaces a start_line_file inherited from the file.
        if "start_line" in changes and "start_line_file" not in changes:
            changes["start_line_file"] = None
        try:
            return RunConfig.model_validate({**self.model_dump(), **changes})
        except ValidationError as exc:
            raise ConfigError(f"Invalid option: {exc}") from exc

    def require(self, name: str) -> Path:
        """Return a configured path or fail with a readable message."""

        value = getattr(self, name)
        if value is None:
            raise ConfigError(f"No {name} path configured")
        return value

    def resolve_start_line(self) -> int:
        """Header lines to skip; a ``start_line_file`` wins over ``start_line``."""

        if self.start_line_file is None:
            return self.start_line
        try:
            return read_start_line(self.start_line_file)
        except (FileNotFoundError, ValueError) as exc:
            raise ConfigError(str(exc)) from exc

    def accessor(self) -> FieldAccessor:
        return accessor_for(self.addressing)

    def entry_layout(self) -> EntryLayout:
        """Default layout of the addressing mode with configured overrides applied."""

        base = layout_for(self.addressing)
        overrides: Dict[str, Any] = dict(self.layout)
        if self.layout_join is not None:
            overrides["join"] = self.layout_join
        if not overrides:
            return base
        try:
            layout = base.override(overrides)
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"Invalid layout override: {exc}") from exc
        for key in layout.keys():
            _check_layout_key(key, self.addressing)
        return layout


def _check_layout_key(key: LayoutKey, mode: AddressingMode) -> None:
    if mode is AddressingMode.POSITIONS:
        if isinstance(key, bool) or not isinstance(key, int) or key < 0:
            raise ConfigError(f"Position layout keys must be non-negative integers, got {key!r}")
        return
    if not isinstance(key, str):
        raise ConfigError(f"Letter layout keys must be column letters, got {key!r}")
    try:
        column_index(key)
    except InvalidAddressError as exc:
        raise ConfigError(str(exc)) from exc


def load_config(path: str | Path | None = None) -> RunConfig:
    """Load a :class:`RunConfig` from YAML; ``None`` yields the defaults."""

    if path is None:
        return RunConfig()
    cfg_path = Path(path)
    if not cfg_path.exists():
        raise ConfigError(f"Config file not found: {cfg_path}")
    try:
        with cfg_path.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Config file is not valid YAML: {exc}") from exc
    if not isinstance(data, Mapping):
        raise ConfigError("Config file must contain a mapping")
    return config_from_mapping(data, base_dir=cfg_path.resolve().parent)


def config_from_mapping(data: Mapping[str, Any], base_dir: Optional[Path] = None) -> RunConfig:
    payload = dict(data)
    if base_dir is not None:
        for key in _PATH_FIELDS:
            value = payload.get(key)
            if value and not Path(str(value)).is_absolute():
                payload[key] = base_dir / str(value)
    try:
        return RunConfig.model_validate(payload)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc


__all__ = ["RunConfig", "config_from_mapping", "load_config"]
