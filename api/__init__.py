from __future__ import annotations

from typing import Any

from flask import Blueprint, jsonify, request, current_app

from services.dataset_service import analyze_upload
from services.errors import DatasetError

# -----------------------------------------------------------------------------
# Blueprint
# -----------------------------------------------------------------------------
api_v1 = Blueprint("api_v1", __name__, url_prefix="/api/v1")

# -----------------------------------------------------------------------------
# Helpers: JSON responses
# -----------------------------------------------------------------------------
def json_ok(payload: dict | None = None, status: int = 200):
  """
  Success response envelope.
  Returns: (flask.Response, status_code)
  """
  body: dict[str, Any] = {"ok": True}
  if payload:
    body.update(payload)
  return jsonify(body), status


def json_error(message: str, code: int = 400, **extra):
  """
  Error response envelope.
  Returns: (flask.Response, status_code)
  """
  body: dict[str, Any] = {"ok": False, "error": message}
  if extra:
    body.update(extra)
  return jsonify(body), code


# -----------------------------------------------------------------------------
# Endpoints
# -----------------------------------------------------------------------------
@api_v1.get("/ping")
def ping():
  """
  Lightweight health check.
  """
  return json_ok({"message": "pong"})


@api_v1.post("/analyze")
def analyze():
  """
  Analyze an uploaded CSV/JSON file and return the same data the page shows,
  minus the chart.

  Multipart body: `file`.
  """
  file = request.files.get("file")
  if not file or not file.filename:
    return json_error("No file uploaded", 400)

  try:
    result = analyze_upload(
      file.filename,
      file.read(),
      preview_rows=current_app.config.get("PREVIEW_ROWS", 5),
      render_chart=False,
    )
  except DatasetError as e:
    return json_error(e.user_message, 400)

  return json_ok({
    "filename": result.filename,
    "row_count": result.row_count,
    "columns": result.columns,
    "numeric_columns": result.numeric_columns,
    "stats": {col: s.to_dict() for col, s in result.stats.items()},
    "preview": result.rows[: current_app.config.get("PREVIEW_ROWS", 5)],
    "remaining_rows": result.remaining_rows,
  })
