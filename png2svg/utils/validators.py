"""Config schema validation and loading.

Provides centralized validation using pydantic:
    - Conversion options: single-pixel mode, 4096-color limit, pink debug fill
    - Converter config file (png2svg.v1.yaml): options + logging sinks

All callers must build options through these models for fail-fast error
detection with actionable messages (offending keys, conflicting flags).

Usage:
    from png2svg.utils import validators

    options = validators.ConversionOptions(quantize=True)
    cfg = validators.load_converter_config("configs/png2svg.v1.yaml")
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


# ============================================================================
# CONVERSION OPTIONS
# ============================================================================

class ConversionOptions(BaseModel):
    """Options for a single image conversion.

    Pink debug coloring only applies to rectangles that span more than one
    pixel, so it cannot be combined with single-pixel mode.
    """
    model_config = ConfigDict(frozen=True, extra="forbid")

    single_pixel: bool = Field(False, description="Emit one 1x1 rectangle per opaque pixel")
    quantize: bool = Field(False, description="Limit colors to 4096 (#abcdef → #ace)")
    pink: bool = Field(False, description="Fill expanded rectangles with the debug color")

    @model_validator(mode='after')
    def validate_pink_needs_expansion(self) -> 'ConversionOptions':
        if self.pink and self.single_pixel:
            raise ValueError(
                "pink debug coloring marks expanded rectangles and cannot be "
                "combined with single_pixel mode"
            )
        return self


# ============================================================================
# CONVERTER CONFIG V1
# ============================================================================

class LoggingConfig(BaseModel):
    """Logging sinks for the command-line converter."""
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    log_level: str = Field("INFO", description="Root log level")
    log_file: Optional[str] = Field(None, description="Optional log file path")
    json_format: bool = Field(False, alias="json", description="JSON lines in the log file")
    color: bool = Field(True, description="ANSI colors on the console")
    max_bytes: int = Field(0, ge=0, description="Rotate the log file at this size (0 = never)")
    backup_count: int = Field(3, ge=0, description="Rotated log files to keep")

    @field_validator('log_level')
    @classmethod
    def validate_level(cls, v: str) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"log_level must be one of {sorted(allowed)}, got '{v}'")
        return v.upper()


class ConverterConfigV1(BaseModel):
    """Converter config file (png2svg.v1.yaml schema)."""
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    schema_version: str = Field("png2svg.v1", alias="schema", description="Schema version")
    options: ConversionOptions = Field(default_factory=ConversionOptions)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator('schema_version')
    @classmethod
    def validate_schema(cls, v: str) -> str:
        if v != "png2svg.v1":
            raise ValueError(f"Expected schema 'png2svg.v1', got '{v}'")
        return v


def load_converter_config(path: Union[str, Path]) -> ConverterConfigV1:
    """Load and validate converter config from YAML.

    Parameters
    ----------
    path : Union[str, Path]
        Path to png2svg.v1.yaml file

    Returns
    -------
    ConverterConfigV1
        Validated converter configuration

    Raises
    ------
    FileNotFoundError
        If path doesn't exist
    ValueError
        If validation fails (with actionable error message)
    """
    from . import fs

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Converter config not found: {path}")

    data = fs.load_yaml(path)
    try:
        return ConverterConfigV1(**data)
    except Exception as e:
        raise ValueError(f"Converter config validation failed at {path}: {e}") from e


def merge_options(
    base: ConversionOptions,
    overrides: Dict[str, Any]
) -> ConversionOptions:
    """Return base with the non-None overrides applied, re-validated.

    Parameters
    ----------
    base : ConversionOptions
        Options from the config file (or defaults)
    overrides : Dict[str, Any]
        Field values from the command line; None means "not given"

    Returns
    -------
    ConversionOptions
        New validated options
    """
    data = base.model_dump()
    data.update({k: v for k, v in overrides.items() if v is not None})
    return ConversionOptions(**data)
