from flask import Blueprint, render_template, current_app, request
from services.dataset_service import analyze_upload
from services.errors import DatasetError

datasets_bp = Blueprint("datasets", __name__)


@datasets_bp.route("/", methods=["GET"])
def index():
    return render_template("index.html")


@datasets_bp.route("/upload", methods=["POST"])
def upload_dataset():
    file = request.files.get("file")
    if not file or file.filename == '':
        return render_template("index.html", error="Please select a CSV or JSON file."), 400

    try:
        result = analyze_upload(
            file.filename,
            file.read(),
            preview_rows=current_app.config.get("PREVIEW_ROWS", 5),
            chart_rows=current_app.config.get("CHART_ROWS", 50),
        )
    except DatasetError as e:
        return render_template("index.html", error=e.user_message), 400

    current_app.logger.debug(
        "Upload %s: rows=%s numeric=%s chart=%s",
        result.filename,
        result.row_count,
        result.numeric_columns,
        result.chart_png is not None,
    )
    return render_template("index.html", result=result)
