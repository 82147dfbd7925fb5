from infra.logging import get_logger
from services.charts import render_trend_chart
from services.csv_io import decode_upload, load_dataset
from services.data_summary import build_preview, get_numeric_columns, get_summary_stats
from services.errors import DatasetError, ParseError
from services.models import AnalysisResult

logger = get_logger(__name__)


def analyze_upload(
    filename: str,
    raw: bytes,
    *,
    preview_rows: int = 5,
    chart_rows: int = 50,
    render_chart: bool = True,
) -> AnalysisResult:
    # Datei einlesen; alles Unerwartete wird zu ParseError
    try:
        text = decode_upload(raw)
        rows = load_dataset(filename, text)
    except DatasetError as e:
        logger.warning("Upload %s rejected: %s", filename, e)
        raise
    except Exception as e:
        logger.exception("Unexpected error while parsing %s", filename)
        raise ParseError(str(e)) from e

    numeric_cols = get_numeric_columns(rows)
    stats = get_summary_stats(rows, numeric_cols)
    preview, remaining = build_preview(rows, preview_rows)
    logger.info(
        "Analyzed %s: rows=%d numeric_columns=%s", filename, len(rows), numeric_cols
    )

    chart_png = None
    if render_chart and numeric_cols:
        try:
            chart_png = render_trend_chart(rows, numeric_cols, max_rows=chart_rows)
        except Exception:
            # Chart ist optional, Tabelle und Statistik bleiben sichtbar
            logger.exception("Chart rendering failed for %s", filename)

    return AnalysisResult(
        filename=filename,
        rows=rows,
        preview=preview,
        remaining_rows=remaining,
        numeric_columns=numeric_cols,
        stats=stats,
        chart_png=chart_png,
    )
