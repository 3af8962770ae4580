"""
Reporting Configuration Schema.

Controls report labelling, the export row-count safety bound and PDF layout
options.  Loaded with defaults, from a dict, or from a YAML file.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Self

import yaml

from hr_kernel.logging_config import get_logger

logger = get_logger("modules.reporting.config")

PDF_PAGE_SIZES = ("A4", "LETTER")


@dataclass
class ReportingConfig:
    """
    Configuration schema for the reporting module.

    Controls labelling, export limits and document layout.
    """

    # Title shown on exported documents and used as the sheet name
    report_title: str = "Employees by Organization"

    # Label used for the organization columns
    organization_label: str = "Organization"

    # Exports with more rows than this fail instead of truncating
    max_export_rows: int = 100_000

    # Suggested download filename prefix (date and extension are appended)
    filename_prefix: str = "employees_by_organization"

    # Paginated document layout
    pdf_page_size: str = "A4"
    pdf_compress: bool = True

    def __post_init__(self):
        if self.max_export_rows < 1:
            raise ValueError("max_export_rows must be at least 1")
        if self.pdf_page_size.upper() not in PDF_PAGE_SIZES:
            raise ValueError(
                f"pdf_page_size must be one of {', '.join(PDF_PAGE_SIZES)}"
            )
        self.pdf_page_size = self.pdf_page_size.upper()
        if not self.report_title.strip():
            raise ValueError("report_title cannot be blank")
        if not self.filename_prefix.strip():
            raise ValueError("filename_prefix cannot be blank")

    @classmethod
    def with_defaults(cls) -> Self:
        """Create config with standard defaults."""
        logger.info("reporting_config_created_with_defaults")
        return cls()

    @classmethod
    def from_dict(cls, data: dict) -> Self:
        """
        Create config from dictionary.

        Raises:
            ValueError: On unknown keys or invalid values.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown reporting config keys: {', '.join(unknown)}")
        logger.info(
            "reporting_config_loading_from_dict",
            extra={"keys": sorted(data.keys())},
        )
        return cls(**data)

    @classmethod
    def from_yaml(cls, path: Path | str) -> Self:
        """
        Create config from a YAML file.

        The file may hold the settings at top level or under a
        ``reporting:`` key.  An empty file yields the defaults.

        Raises:
            FileNotFoundError: if the file does not exist.
            yaml.YAMLError: if the file contains invalid YAML.
            ValueError: if the document is not a mapping or has invalid values.
        """
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Reporting config in {path} must be a mapping")
        section = data.get("reporting", data)
        if not isinstance(section, dict):
            raise ValueError(f"'reporting' section in {path} must be a mapping")
        return cls.from_dict(section)
