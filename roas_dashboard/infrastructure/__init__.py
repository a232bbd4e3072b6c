"""Infrastructure layer package."""

from .excel_repository import DashboardInputs, load_dashboard_inputs, save_output_workbook, write_output_excel
from .report_exporter import save_summary_json

__all__ = [
    "DashboardInputs",
    "load_dashboard_inputs",
    "save_output_workbook",
    "write_output_excel",
    "save_summary_json",
]
