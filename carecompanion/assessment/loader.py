"""YAML catalog loader with integrity hashing."""

import hashlib
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

from carecompanion.assessment.bank import QuestionBank, ResourceCatalog
from carecompanion.assessment.errors import CatalogError
from carecompanion.core.config import settings

logger = logging.getLogger(__name__)

# Bundled catalogs directory
DATA_DIR = Path(__file__).parent / "data"


def compute_content_hash(content: str) -> str:
    """Compute SHA256 hash of catalog content.

    Lets a result be traced back to the exact bank it was scored against.
    """
    return hashlib.sha256(content.encode("utf-8")).hexdigest()


def load_yaml_file(
    filename: str,
    data_dir: Path | None = None,
) -> tuple[dict[str, Any], str]:
    """Load a catalog YAML file and compute its hash.

    Args:
        filename: Name of the file (e.g., "question-bank-v1.yaml")
        data_dir: Directory containing catalogs (defaults to bundled data)

    Returns:
        Tuple of (parsed dict, SHA256 hash)

    Raises:
        FileNotFoundError: If the file doesn't exist
        CatalogError: If the YAML is invalid or not a mapping
    """
    filepath = (data_dir or DATA_DIR) / filename

    if not filepath.exists():
        raise FileNotFoundError(f"Catalog not found: {filepath}")

    content = filepath.read_text(encoding="utf-8")
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise CatalogError(f"Invalid YAML in {filename}: {e}") from e

    if not isinstance(data, dict):
        raise CatalogError(f"{filename} must contain a mapping at the top level")

    return data, compute_content_hash(content)


def load_question_bank(filename: str, data_dir: Path | None = None) -> QuestionBank:
    """Load and validate a question bank file."""
    data, content_hash = load_yaml_file(filename, data_dir)
    bank = QuestionBank.from_dict(data, content_hash=content_hash)
    logger.info(
        f"Loaded question bank {bank.bank_id} v{bank.version} "
        f"({len(bank)} items, hash={content_hash[:12]})"
    )
    return bank


def load_resource_catalog(filename: str, data_dir: Path | None = None) -> ResourceCatalog:
    """Load and validate a resource catalog file."""
    data, content_hash = load_yaml_file(filename, data_dir)
    catalog = ResourceCatalog.from_dict(data, content_hash=content_hash)
    logger.info(
        f"Loaded resource catalog {catalog.catalog_id} v{catalog.version} "
        f"({len(catalog)} resources, hash={content_hash[:12]})"
    )
    return catalog


@lru_cache
def get_question_bank() -> QuestionBank:
    """Get the process-wide question bank, loading it on first use."""
    return load_question_bank(settings.question_bank_file)


@lru_cache
def get_resource_catalog() -> ResourceCatalog:
    """Get the process-wide resource catalog, loading it on first use."""
    return load_resource_catalog(settings.resource_catalog_file)
