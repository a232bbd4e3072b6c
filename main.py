"""ROAS dashboard entrypoint."""

from __future__ import annotations

import json
from pathlib import Path

from roas_dashboard.application.report_service import (
    build_summary,
    campaign_sheet_df,
    campaign_view_sheet_df,
    link_sheet_df,
    portfolio_sheet_df,
    run_dashboard_pipeline,
)
from roas_dashboard.config import LOG_FILE, LOG_LEVEL
from roas_dashboard.infrastructure import load_dashboard_inputs, save_output_workbook, save_summary_json
from roas_dashboard.log_config import get_logger, setup_logging

logger = get_logger(__name__)


def main() -> None:
    setup_logging(log_level=LOG_LEVEL, log_file=LOG_FILE)

    project_root = Path(__file__).resolve().parent
    input_path = project_root / "data" / "raw" / "input.xlsx"
    output_json_path = project_root / "output" / "summary.json"
    output_excel_path = project_root / "output" / "summary.xlsx"

    inputs = load_dashboard_inputs(input_path)
    report = run_dashboard_pipeline(inputs.records, inputs.channels, inputs.links)

    summary = build_summary(report)
    summary["input_meta"] = inputs.meta
    save_summary_json(output_json_path, summary)

    excel_saved, excel_error_message = save_output_workbook(
        output_excel_path,
        {
            "portfolio": portfolio_sheet_df(report.portfolio),
            "campaigns": campaign_sheet_df(report.campaigns),
            "campaigns_view": campaign_view_sheet_df(report.campaigns),
            "links": link_sheet_df(report.links),
        },
    )

    print(json.dumps(summary["totals_display"], indent=2, ensure_ascii=False))
    logger.info(f"Saved JSON: {output_json_path}")
    if excel_saved:
        logger.info(f"Saved Excel: {output_excel_path}")
    else:
        logger.warning(f"Excel save skipped (file may be open/locked): {excel_error_message}")


if __name__ == "__main__":
    main()
