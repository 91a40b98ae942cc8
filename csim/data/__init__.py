from .stats_export import Exporter, Statistics, export_chart_pdf

__all__ = ["Exporter", "Statistics", "export_chart_pdf"]
