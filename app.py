# Data Insights – Webapp zur Analyse von CSV- und JSON-Dateien
# Upload, Vorschau, Kennzahlen je numerischer Spalte und Trend-Diagramm


from flask import Flask, render_template, request
from flask_wtf.csrf import CSRFProtect
from dotenv import load_dotenv
from werkzeug.exceptions import RequestEntityTooLarge
from routes.datasets import datasets_bp
from api import api_v1, json_error
from infra.config import get_config
from infra.logging import setup_app_logging

# Load environment variables early so infra.config sees them
load_dotenv()

app = Flask(__name__)
csrf = CSRFProtect(app)
setup_app_logging(app)

# Apply config
app.config.update(get_config())

# Blueprints an die App „andocken“
app.register_blueprint(datasets_bp)
app.register_blueprint(api_v1)
csrf.exempt(api_v1)

app.logger.info("Starting Data Insights application")


@app.template_filter("num")
def format_number(value):
    """3.0 → '3', 2.5 → '2.5', None → ''"""
    if value is None:
        return ""
    try:
        f = float(value)
    except (TypeError, ValueError):
        return str(value)
    if f.is_integer():
        return str(int(f))
    return str(f)


@app.errorhandler(RequestEntityTooLarge)
def upload_too_large(e):
    limit_mb = (app.config.get("MAX_CONTENT_LENGTH") or 0) // (1024 * 1024)
    message = f"File is too large (max {limit_mb} MB)."
    app.logger.warning("Rejected upload larger than %s MB: %s", limit_mb, request.path)
    if request.blueprint == api_v1.name:
        return json_error(message, 413)
    return render_template("index.html", error=message), 413


if __name__ == '__main__':
    app.run(debug=app.config.get("DEBUG", False), host='0.0.0.0', port=5001)
