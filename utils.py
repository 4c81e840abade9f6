import json
import logging
import os
import re

from config import DOCUMENT_EXTENSIONS, MANIFEST_EXTENSION, PDF_ENGINE
from file_utils import extract_text

logger = logging.getLogger("kmp.datasets")


class DatasetError(Exception):
    """Raised when the dataset folder is missing or a manifest is malformed."""


def normalize_name(filename):
    base = os.path.splitext(filename)[0]
    base = re.sub(r'\(\d+\)', '', base)
    base = re.sub(r'\s+', '_', base.strip())
    return base.lower()


def prepare_text(text, ignore_case=False):
    """Case folding is the only transformation applied before searching."""
    if ignore_case:
        return text.lower()
    return text


# ---------------------- Manifests ----------------------
def _load_manifest(path):
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise DatasetError(f"Cannot read manifest {path}: {e}") from e

    entries = data if isinstance(data, list) else [data]
    for index, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise DatasetError(f"{path}: entry {index} is not an object")
        if not isinstance(entry.get("pattern"), str):
            raise DatasetError(f"{path}: entry {index} needs a string 'pattern'")
        has_text = isinstance(entry.get("text"), str)
        has_file = isinstance(entry.get("text_file"), str)
        if has_text == has_file:
            raise DatasetError(f"{path}: entry {index} needs exactly one of 'text' or 'text_file'")
    return entries


def _manifest_datasets(path, pdf_engine, referenced):
    entries = _load_manifest(path)
    base_name = normalize_name(os.path.basename(path))
    for index, entry in enumerate(entries):
        name = entry.get("name") or (base_name if len(entries) == 1 else f"{base_name}_{index}")
        if isinstance(entry.get("text"), str):
            yield name, entry["pattern"], entry["text"]
            continue

        text_path = os.path.normpath(os.path.join(os.path.dirname(path), entry["text_file"]))
        referenced.add(os.path.abspath(text_path))
        text = extract_text(text_path, pdf_engine)
        if text is None:
            logger.error("Skipping dataset %s: could not read %s", name, text_path)
            continue
        yield name, entry["pattern"], text


# ---------------------- Discovery ----------------------
def read_datasets(dataset_folder, pattern=None, ignore_case=False, pdf_engine=PDF_ENGINE):
    """
    Yields (name, pattern, text) triples for every dataset under `dataset_folder`.

    JSON manifests carry their own pattern. Plain documents (.txt, .pdf, .docx)
    that no manifest points at are searched with `pattern` and skipped when it
    is None.
    """
    if not os.path.isdir(dataset_folder):
        raise DatasetError(f"Dataset folder not found: {dataset_folder}")

    manifests = []
    documents = []
    for root, dirs, files in os.walk(dataset_folder):
        dirs.sort()
        for file in sorted(files):
            file_path = os.path.join(root, file)
            ext = os.path.splitext(file)[1].lower()
            if ext == MANIFEST_EXTENSION:
                manifests.append(file_path)
            elif ext in DOCUMENT_EXTENSIONS:
                documents.append(file_path)

    datasets = []
    referenced = set()
    for manifest in manifests:
        datasets.extend(_manifest_datasets(manifest, pdf_engine, referenced))

    for document in documents:
        if os.path.abspath(document) in referenced:
            continue
        if pattern is None:
            logger.warning("Skipping %s: no pattern given for plain documents", document)
            continue
        text = extract_text(document, pdf_engine)
        if text is None:
            logger.error("Skipping dataset %s: could not read file", document)
            continue
        datasets.append((normalize_name(os.path.basename(document)), pattern, text))

    logger.info("Found %d datasets in %s", len(datasets), dataset_folder)
    for name, dataset_pattern, text in sorted(datasets, key=lambda d: d[0]):
        yield name, prepare_text(dataset_pattern, ignore_case), prepare_text(text, ignore_case)
