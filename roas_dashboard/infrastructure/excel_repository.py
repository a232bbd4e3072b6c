"""Excel workbook adapter with Polars-first and openpyxl fallback.

The input workbook carries up to three sheets:

* ``spend``    one row per channel/campaign/day (required)
* ``links``    manually tracked attribution links (optional)
* ``channels`` connected ad channels (optional)
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date, timedelta
from pathlib import Path
from typing import Any, Dict, List, Sequence

import polars as pl
import xlsxwriter
from openpyxl import Workbook, load_workbook

from roas_dashboard.application.aggregation_service import METRICS
from roas_dashboard.application.normalizer import LINK_METRICS, normalize_channel, normalize_link, normalize_record
from roas_dashboard.config import LOOKBACK_DAYS, METRIC_PARSE_ERROR_THRESHOLD
from roas_dashboard.domain.models import AdChannel, AttributionLink, DailySpendRecord
from roas_dashboard.log_config import get_logger

logger = get_logger(__name__)

SPEND_SHEET = "spend"
LINKS_SHEET = "links"
CHANNELS_SHEET = "channels"
SPEND_REQUIRED_COLUMNS: list[str] = ["channel_id", "campaign_id", "date"]
LINK_REQUIRED_COLUMNS: list[str] = ["id"]
CHANNEL_REQUIRED_COLUMNS: list[str] = ["id", "channel_type"]


@dataclass(frozen=True)
class DashboardInputs:
    records: List[DailySpendRecord]
    links: List[AttributionLink]
    channels: List[AdChannel]
    meta: Dict[str, Any] = field(default_factory=dict)


def _header_names(header_row: Sequence[Any]) -> list[str]:
    """Blank headers get a positional name; repeated ones get a numeric suffix."""
    names: list[str] = []
    for position, cell in enumerate(header_row, start=1):
        base = ("" if cell is None else str(cell).strip()) or f"column_{position}"
        name, suffix = base, 1
        while name in names:
            suffix += 1
            name = f"{base}_{suffix}"
        names.append(name)
    return names


def _sheet_names(path: Path) -> list[str]:
    workbook = load_workbook(path, read_only=True, data_only=True)
    names = list(workbook.sheetnames)
    workbook.close()
    return names


def _read_with_polars(path: Path, sheet_name: str) -> pl.DataFrame:
    return pl.read_excel(path, sheet_name=sheet_name, infer_schema_length=10000)


def _read_with_openpyxl(path: Path, sheet_name: str) -> pl.DataFrame:
    workbook = load_workbook(path, read_only=True, data_only=True)
    worksheet = workbook[sheet_name]
    row_iter = worksheet.iter_rows(values_only=True)
    header_row = next(row_iter, None)
    if header_row is None:
        workbook.close()
        return pl.DataFrame()

    headers = _header_names(header_row)
    columns: dict[str, list[Any]] = {name: [] for name in headers}
    for values in row_iter:
        if values is None or all(value is None for value in values):
            continue
        for idx, name in enumerate(headers):
            columns[name].append(values[idx] if idx < len(values) else None)

    workbook.close()
    return pl.DataFrame({name: _coerce_mixed_column(values) for name, values in columns.items()})


def _coerce_mixed_column(values: list[Any]) -> list[Any]:
    """Cells typed inconsistently (e.g. numbers next to text) become text."""
    kinds = {type(value) for value in values if value is not None}
    if len(kinds) <= 1 or kinds <= {int, float}:
        return values
    return [None if value is None else str(value) for value in values]


def _read_sheet(path: Path, sheet_name: str) -> pl.DataFrame:
    try:
        return _read_with_polars(path, sheet_name)
    except Exception as exc:
        logger.debug("Polars Excel read failed, using openpyxl", sheet=sheet_name, error=str(exc))
        return _read_with_openpyxl(path, sheet_name)


def _require_columns(df: pl.DataFrame, required: Sequence[str], sheet_name: str) -> None:
    missing = sorted(set(required).difference(df.columns))
    if missing:
        raise ValueError(f"Missing required columns in sheet '{sheet_name}': {missing}")


def _metric_text(column: str) -> pl.Expr:
    return pl.col(column).cast(pl.Utf8, strict=False).str.strip_chars()


def _metric_number(column: str) -> pl.Expr:
    return _metric_text(column).str.replace_all(",", "").cast(pl.Float64, strict=False).alias(column)


def _unparsable_count(column: str) -> pl.Expr:
    text = _metric_text(column)
    return ((text != "") & _metric_number(column).is_null()).sum().alias(column)


def _check_metric_cells(
    df: pl.DataFrame,
    metric_columns: Sequence[str],
    sheet_name: str,
    threshold: float = METRIC_PARSE_ERROR_THRESHOLD,
) -> None:
    """Reject a sheet whose metric columns hold too much non-numeric text."""
    present = [column for column in metric_columns if column in df.columns]
    if df.is_empty() or threshold <= 0 or not present:
        return

    counts = df.select([_unparsable_count(column) for column in present]).row(0, named=True)
    ratios = {column: (count or 0) / df.height for column, count in counts.items()}
    offending = {column: ratio for column, ratio in ratios.items() if ratio > threshold}
    if offending:
        detail = ", ".join(f"{column}={ratio:.2%}" for column, ratio in offending.items())
        raise ValueError(f"Sheet '{sheet_name}' has non-numeric metric cells above {threshold:.2%}: {detail}")


def _coerce_metrics(df: pl.DataFrame, metric_columns: Sequence[str]) -> pl.DataFrame:
    return df.with_columns([_metric_number(column) for column in metric_columns if column in df.columns])


def _date_expr(column_name: str) -> pl.Expr:
    return (
        pl.col(column_name)
        .cast(pl.Utf8, strict=False)
        .str.strip_chars()
        .str.slice(0, 10)
        .str.to_date("%Y-%m-%d", strict=False)
        .alias(column_name)
    )


def _filter_date_window(df: pl.DataFrame, date_to: date, lookback_days: int) -> tuple[pl.DataFrame, Dict[str, Any]]:
    date_from = date_to - timedelta(days=lookback_days)
    scoped = df.with_columns(_date_expr("date"))
    filtered = scoped.filter(pl.col("date").is_between(pl.lit(date_from), pl.lit(date_to), closed="both"))
    meta: Dict[str, Any] = {
        "date_from": date_from.isoformat(),
        "date_to": date_to.isoformat(),
        "spend_rows_before": int(df.height),
        "spend_rows_after": int(filtered.height),
    }
    return filtered, meta


def load_dashboard_inputs(
    path: str | Path,
    date_to: date | None = None,
    lookback_days: int = LOOKBACK_DAYS,
) -> DashboardInputs:
    """Read spend rows (limited to ``[date_to - lookback_days, date_to]``), links and channels."""
    excel_path = Path(path)
    if not excel_path.exists():
        raise FileNotFoundError(f"Input Excel file not found: {excel_path}")

    available = _sheet_names(excel_path)
    if SPEND_SHEET not in available:
        raise ValueError(f"Sheet '{SPEND_SHEET}' not found in {excel_path} (sheets: {available})")

    spend_df = _read_sheet(excel_path, SPEND_SHEET)
    _require_columns(spend_df, SPEND_REQUIRED_COLUMNS, SPEND_SHEET)
    _check_metric_cells(spend_df, METRICS, SPEND_SHEET)
    spend_df = _coerce_metrics(spend_df, METRICS)
    spend_df, meta = _filter_date_window(spend_df, date_to or date.today(), lookback_days)

    links: List[AttributionLink] = []
    if LINKS_SHEET in available:
        links_df = _read_sheet(excel_path, LINKS_SHEET)
        _require_columns(links_df, LINK_REQUIRED_COLUMNS, LINKS_SHEET)
        _check_metric_cells(links_df, LINK_METRICS, LINKS_SHEET)
        links_df = _coerce_metrics(links_df, LINK_METRICS)
        links = [normalize_link(row) for row in links_df.iter_rows(named=True)]

    channels: List[AdChannel] = []
    if CHANNELS_SHEET in available:
        channels_df = _read_sheet(excel_path, CHANNELS_SHEET)
        _require_columns(channels_df, CHANNEL_REQUIRED_COLUMNS, CHANNELS_SHEET)
        channels = [normalize_channel(row) for row in channels_df.iter_rows(named=True)]

    records = [normalize_record(row) for row in spend_df.iter_rows(named=True)]
    meta.update({"link_rows": len(links), "channel_rows": len(channels)})
    logger.info("Loaded dashboard workbook", path=str(excel_path), **meta)
    return DashboardInputs(records=records, links=links, channels=channels, meta=meta)


def _cell(value: Any) -> Any:
    # openpyxl cannot store NaN or infinity
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def _write_with_xlsxwriter(path: Path, sheets: Dict[str, pl.DataFrame]) -> bool:
    try:
        with xlsxwriter.Workbook(str(path)) as workbook:
            for sheet_name, frame in sheets.items():
                frame.write_excel(workbook=workbook, worksheet=sheet_name[:31])
    except Exception as exc:
        logger.debug("Polars Excel write failed, using openpyxl", path=str(path), error=str(exc))
        return False
    return True


def _write_with_openpyxl(path: Path, sheets: Dict[str, pl.DataFrame]) -> None:
    workbook = Workbook()
    workbook.remove(workbook.active)
    for sheet_name, frame in sheets.items():
        worksheet = workbook.create_sheet(title=sheet_name[:31])
        worksheet.append(frame.columns)
        for row in frame.iter_rows():
            worksheet.append([_cell(value) for value in row])
    workbook.save(path)


def write_output_excel(path: str | Path, sheets: Dict[str, pl.DataFrame]) -> None:
    """Write one worksheet per frame; sheet names are cut to Excel's 31 characters."""
    excel_path = Path(path)
    excel_path.parent.mkdir(parents=True, exist_ok=True)
    if not _write_with_xlsxwriter(excel_path, sheets):
        _write_with_openpyxl(excel_path, sheets)


def save_output_workbook(path: Path, sheets: dict[str, pl.DataFrame]) -> tuple[bool, str]:
    try:
        write_output_excel(path, sheets)
    except PermissionError as exc:
        return False, str(exc)
    return True, ""
