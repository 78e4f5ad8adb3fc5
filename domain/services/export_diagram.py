from __future__ import annotations

from domain.catalog import DEFAULT_CATALOG, ServiceCatalog
from domain.models import Diagram
from domain.services.export_diagram_base import DiagramTextExporter
from domain.services.export_eraser_dsl import EraserDslExporter
from domain.services.export_flowchart import FlowchartExporter

EXPORT_FORMAT_ERASER = "eraser"
EXPORT_FORMAT_FLOWCHART = "flowchart"
EXPORT_FORMATS = (EXPORT_FORMAT_ERASER, EXPORT_FORMAT_FLOWCHART)


def build_exporter(fmt: str, catalog: ServiceCatalog = DEFAULT_CATALOG) -> DiagramTextExporter:
    if fmt == EXPORT_FORMAT_ERASER:
        return EraserDslExporter(catalog)
    if fmt == EXPORT_FORMAT_FLOWCHART:
        return FlowchartExporter(catalog)
    msg = f"Unsupported export format: {fmt}"
    raise ValueError(msg)


def export_diagram(
    diagram: Diagram, fmt: str = EXPORT_FORMAT_ERASER, catalog: ServiceCatalog = DEFAULT_CATALOG
) -> str:
    return build_exporter(fmt, catalog).export(diagram)
