# config.py
# Paths and defaults. CLI options override these per run.

import os

DATA_DIR = "data"
DATASET_DIR = os.path.join(DATA_DIR, "datasets")
OUTPUT_DIR = os.path.join(DATA_DIR, "reports")
LOG_PATH = os.path.join(DATA_DIR, "logs")

REPORT_JSON_NAME = "kmp_report.json"
REPORT_CSV_NAME = "kmp_report.csv"
CHART_NAME = "kmp_chart.png"

PDF_ENGINES = ("pdfplumber", "pypdf")
PDF_ENGINE = "pdfplumber"

MANIFEST_EXTENSION = ".json"
DOCUMENT_EXTENSIONS = (".txt", ".pdf", ".docx")
