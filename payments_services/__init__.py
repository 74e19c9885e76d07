"""
payments_services -- Driver layer for the payments engine.

Wires the CSV adapter, record mapping and kernel ledger into a single run
(EngineService) and exposes it on the command line (cli.main).
"""

from payments_services.engine_service import EngineService, ProcessingReport

__all__ = ["EngineService", "ProcessingReport"]
