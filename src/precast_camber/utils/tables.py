"""Loading of the engineering tables file.

The tables (elastic-modulus formula, PCI multipliers, strand library) live in
``data/pci_tables.yaml`` inside the package.  A project may point at its own
copy instead; see :func:`load_tables`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml


DEFAULT_TABLES_PATH = Path(__file__).resolve().parent.parent / "data" / "pci_tables.yaml"


class ConfigurationError(Exception):
    """Raised when the engine tables are missing, malformed or incomplete.

    This is a deployment problem, not bad user input, and is raised when the
    engine is built rather than per calculation.
    """


_tables_cache: dict[str, Any] | None = None


def load_tables(path: str | Path | None = None) -> dict[str, Any]:
    """Load the engineering tables from YAML.

    Parameters
    ----------
    path : str, Path or None
        Tables file to read.  ``None`` reads the packaged default, which is
        cached so repeated engine construction does not re-read from disk.

    Returns
    -------
    dict
        Parsed YAML content keyed by table name (``elastic_modulus``,
        ``multipliers``, ``strand_library``, ...).

    Raises
    ------
    ConfigurationError
        If the file does not exist or is not a YAML mapping.
    """
    global _tables_cache
    if path is None and _tables_cache is not None:
        return _tables_cache

    table_path = Path(path) if path is not None else DEFAULT_TABLES_PATH
    if not table_path.is_file():
        raise ConfigurationError(f"Tables file not found: {table_path}")

    try:
        with open(table_path, encoding="utf-8") as fh:
            tables = yaml.safe_load(fh)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Tables file {table_path} is not valid YAML: {exc}") from exc

    if not isinstance(tables, dict):
        raise ConfigurationError(f"Tables file {table_path} must contain a mapping")

    if path is None:
        _tables_cache = tables
    return tables


def _clear_tables_cache() -> None:
    """Reset the internal cache (useful in tests)."""
    global _tables_cache
    _tables_cache = None
