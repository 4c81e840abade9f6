# file_utils.py
# Contains utility functions for extracting text from dataset documents.

import logging
import os
import warnings

import docx
import pdfplumber
from pypdf import PdfReader

from config import PDF_ENGINE

logger = logging.getLogger("kmp.files")


def extract_text_from_txt(txt_file_path):
    """Reads a UTF-8 text file as-is."""
    try:
        with open(txt_file_path, "r", encoding="utf-8") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        logger.error("TXT Error: %s -> %s", txt_file_path, e)
        return None


def extract_text_from_pdf(pdf_file_path):
    """Extracts all text from a PDF file."""
    text = ""
    try:
        with pdfplumber.open(pdf_file_path) as pdf:
            for page in pdf.pages:
                page_text = page.extract_text()
                if page_text:
                    text += page_text + "\n"
        return text
    except Exception as e:
        logger.error("PDF Error: %s -> %s", pdf_file_path, e)
        return None


def extract_text_from_pdf_pypdf(pdf_file_path):
    """Extracts all text from a PDF file with pypdf."""
    text = ""
    try:
        with warnings.catch_warnings(record=True) as caught_warnings:
            warnings.simplefilter("always")
            reader = PdfReader(pdf_file_path)
            for page in reader.pages:
                extracted = page.extract_text()
                if extracted:
                    text += extracted + "\n"

        # pypdf reports malformed objects as warnings rather than errors
        for w in caught_warnings:
            logger.warning("%s -> %s", os.path.basename(pdf_file_path), w.message)
        return text
    except Exception as e:
        logger.error("PDF Error: %s -> %s", pdf_file_path, e)
        return None


def extract_text_from_docx(docx_file_path):
    """Extracts all text from a DOCX file."""
    text = ""
    try:
        doc = docx.Document(docx_file_path)
        for para in doc.paragraphs:
            text += para.text + "\n"
        return text
    except Exception as e:
        logger.error("DOCX Error: %s -> %s", docx_file_path, e)
        return None


def extract_text(path, pdf_engine=PDF_ENGINE):
    """Dispatches on extension. Returns None when the file cannot be read."""
    ext = os.path.splitext(path)[1].lower()
    if ext == ".txt":
        return extract_text_from_txt(path)
    if ext == ".docx":
        return extract_text_from_docx(path)
    if ext == ".pdf":
        if pdf_engine == "pypdf":
            return extract_text_from_pdf_pypdf(path)
        return extract_text_from_pdf(path)
    logger.warning("Unsupported file type: %s", path)
    return None
