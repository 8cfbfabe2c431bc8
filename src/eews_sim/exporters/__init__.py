"""Exporters for simulation reports."""

from eews_sim.exporters.csv_export import export_csv
from eews_sim.exporters.json_export import export_json

__all__ = ["export_csv", "export_json"]
