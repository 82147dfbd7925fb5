import io
import os
import sys
import unittest
from unittest import mock

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app import app
from services.dataset_service import analyze_upload

CSV_BYTES = (
    b"date,value,city\n"
    b"2024-05-01,42,Berlin\n"
    b"2024-05-02,123,Hamburg\n"
    b"2024-05-03,99,Munich\n"
)


def _upload(client, path, payload: bytes, filename: str):
    return client.post(
        path,
        data={"file": (io.BytesIO(payload), filename)},
        content_type="multipart/form-data",
    )


class TestUploadPage(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        app.config["WTF_CSRF_ENABLED"] = False  # simplify POST in tests
        app.config["TESTING"] = True

    def setUp(self):
        self.client = app.test_client()

    def test_index_prompts_for_upload(self):
        resp = self.client.get("/")
        self.assertEqual(resp.status_code, 200)
        html = resp.get_data(as_text=True)
        self.assertIn("Data Insights App", html)
        self.assertIn("Upload a CSV or JSON file to get started.", html)

    def test_csv_upload_renders_preview_stats_and_chart(self):
        resp = _upload(self.client, "/upload", CSV_BYTES, "sales.csv")
        self.assertEqual(resp.status_code, 200)
        html = resp.get_data(as_text=True)
        self.assertIn("Uploaded Data Preview", html)
        self.assertIn("...and 0 more rows", html)
        self.assertIn("<td>value</td>", html)
        self.assertIn("<td>42</td>", html)
        self.assertIn("<td>123</td>", html)
        self.assertIn("<td>88</td>", html)
        self.assertIn("data:image/png;base64,", html)

    def test_json_upload_without_numeric_columns(self):
        resp = _upload(self.client, "/upload", b'[{"name": "a"}, {"name": "b"}]', "names.json")
        self.assertEqual(resp.status_code, 200)
        html = resp.get_data(as_text=True)
        self.assertIn("No numeric columns found for summary statistics.", html)
        self.assertIn("No numeric columns to plot trends.", html)

    def test_unsupported_file_type(self):
        resp = _upload(self.client, "/upload", b"hello", "notes.txt")
        self.assertEqual(resp.status_code, 400)
        self.assertIn(
            "Unsupported file type. Please upload a CSV or JSON file.",
            resp.get_data(as_text=True),
        )

    def test_malformed_json(self):
        resp = _upload(self.client, "/upload", b"{broken", "data.json")
        self.assertEqual(resp.status_code, 400)
        self.assertIn("Failed to parse file.", resp.get_data(as_text=True))

    def test_missing_file(self):
        resp = self.client.post("/upload", data={}, content_type="multipart/form-data")
        self.assertEqual(resp.status_code, 400)
        self.assertIn("Please select a CSV or JSON file.", resp.get_data(as_text=True))

    def test_chart_failure_keeps_statistics(self):
        with mock.patch("services.dataset_service.render_trend_chart", side_effect=RuntimeError("no backend")):
            resp = _upload(self.client, "/upload", CSV_BYTES, "sales.csv")
        self.assertEqual(resp.status_code, 200)
        html = resp.get_data(as_text=True)
        self.assertIn("The chart could not be rendered.", html)
        self.assertIn("<td>value</td>", html)
        self.assertIn("<td>88</td>", html)
        self.assertNotIn("data:image/png;base64,", html)

    def test_upload_too_large(self):
        old_limit = app.config.get("MAX_CONTENT_LENGTH")
        app.config["MAX_CONTENT_LENGTH"] = 1024
        try:
            resp = _upload(self.client, "/upload", CSV_BYTES * 200, "big.csv")
        finally:
            app.config["MAX_CONTENT_LENGTH"] = old_limit
        self.assertEqual(resp.status_code, 413)
        self.assertIn("text/html", resp.content_type)
        self.assertIn("File is too large", resp.get_data(as_text=True))


class TestApi(unittest.TestCase):
    def setUp(self):
        self.client = app.test_client()

    def test_ping(self):
        resp = self.client.get("/api/v1/ping")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.get_json(), {"ok": True, "message": "pong"})

    def test_analyze_csv(self):
        resp = _upload(self.client, "/api/v1/analyze", CSV_BYTES, "sales.csv")
        self.assertEqual(resp.status_code, 200)
        body = resp.get_json()
        self.assertTrue(body["ok"])
        self.assertEqual(body["row_count"], 3)
        self.assertEqual(body["columns"], ["date", "value", "city"])
        self.assertEqual(body["numeric_columns"], ["value"])
        self.assertEqual(body["stats"]["value"], {"min": 42.0, "max": 123.0, "mean": 88.0})
        self.assertEqual(body["preview"][0], {"date": "2024-05-01", "value": "42", "city": "Berlin"})
        self.assertEqual(body["remaining_rows"], 0)

    def test_analyze_rejects_unsupported_type(self):
        resp = _upload(self.client, "/api/v1/analyze", b"x", "data.xml")
        self.assertEqual(resp.status_code, 400)
        body = resp.get_json()
        self.assertFalse(body["ok"])
        self.assertEqual(body["error"], "Unsupported file type. Please upload a CSV or JSON file.")

    def test_analyze_without_file(self):
        resp = self.client.post("/api/v1/analyze", data={}, content_type="multipart/form-data")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.get_json()["error"], "No file uploaded")

    def test_analyze_too_large_returns_json(self):
        old_limit = app.config.get("MAX_CONTENT_LENGTH")
        app.config["MAX_CONTENT_LENGTH"] = 1024
        try:
            resp = _upload(self.client, "/api/v1/analyze", CSV_BYTES * 200, "big.csv")
        finally:
            app.config["MAX_CONTENT_LENGTH"] = old_limit
        self.assertEqual(resp.status_code, 413)
        self.assertTrue(resp.is_json)
        body = resp.get_json()
        self.assertFalse(body["ok"])
        self.assertIn("File is too large", body["error"])


class TestAnalyzeUpload(unittest.TestCase):
    def test_options_are_keyword_only(self):
        with self.assertRaises(TypeError):
            analyze_upload("sales.csv", CSV_BYTES, 5)

    def test_render_chart_false_skips_chart(self):
        result = analyze_upload("sales.csv", CSV_BYTES, preview_rows=2, render_chart=False)
        self.assertIsNone(result.chart_png)
        self.assertEqual(result.numeric_columns, ["value"])
        self.assertEqual(result.remaining_rows, 1)


if __name__ == "__main__":
    unittest.main()
