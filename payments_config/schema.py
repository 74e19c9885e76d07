"""
Engine configuration schema.

EngineConfig is the only configuration artifact. YAML files are parsed into
it by the loader; the engine service and CLI read it and never the raw YAML.
"""

from __future__ import annotations

from dataclasses import dataclass, fields

from payments_ingestion.export import DEFAULT_DECIMAL_PLACES, DEFAULT_ROUNDING, validate_rounding
from payments_kernel.logging_config import parse_level


@dataclass(frozen=True)
class EngineConfig:
    """Settings for one engine run."""

    output_decimal_places: int = DEFAULT_DECIMAL_PLACES
    output_rounding: str = DEFAULT_ROUNDING
    delimiter: str = ","
    encoding: str = "utf-8"
    log_level: str = "ERROR"  # Without --verbose only errors are logged
    verbose_log_level: str = "INFO"

    def __post_init__(self) -> None:
        if isinstance(self.output_decimal_places, bool) or not isinstance(
            self.output_decimal_places, int
        ):
            raise ValueError(
                f"output_decimal_places must be an integer, got {self.output_decimal_places!r}"
            )
        if self.output_decimal_places < 0:
            raise ValueError(
                f"output_decimal_places must be non-negative, got {self.output_decimal_places}"
            )
        validate_rounding(self.output_rounding)
        if not isinstance(self.delimiter, str) or len(self.delimiter) != 1:
            raise ValueError(f"delimiter must be a single character, got {self.delimiter!r}")
        if not isinstance(self.encoding, str) or not self.encoding:
            raise ValueError(f"encoding must be a non-empty string, got {self.encoding!r}")
        parse_level(self.log_level)
        parse_level(self.verbose_log_level)

    @classmethod
    def field_names(cls) -> frozenset[str]:
        return frozenset(f.name for f in fields(cls))

    @property
    def source_options(self) -> dict[str, str]:
        """Options for the CSV source adapter."""
        return {"delimiter": self.delimiter, "encoding": self.encoding}
