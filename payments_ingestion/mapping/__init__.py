"""Record mapping: raw source records to kernel transactions."""

from payments_ingestion.mapping.engine import MappingOutcome, map_record, map_records

__all__ = ["MappingOutcome", "map_record", "map_records"]
