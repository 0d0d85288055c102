"""Tests for export option and record models."""

import pytest
from pydantic import ValidationError

from sitecrate.models import ExportOptions, VersionHistoryOptions, VersionOptions


class TestExportOptions:
    """Test ExportOptions defaults and immutability."""

    def test_defaults(self):
        options = ExportOptions()
        assert options.export_metadata is False
        assert options.export_site_settings is False
        assert options.export_data is False
        assert options.version_history_options == VersionHistoryOptions.PUBLISHED

    def test_frozen(self):
        options = ExportOptions(export_metadata=True)
        with pytest.raises(ValidationError):
            options.export_metadata = False

    def test_combined_flags_accepted(self):
        flags = VersionHistoryOptions.DRAFT | VersionHistoryOptions.PUBLISHED
        options = ExportOptions(version_history_options=flags)
        assert VersionHistoryOptions.DRAFT in options.version_history_options


class TestVersionOptions:
    """Test the query policy enum."""

    def test_two_values(self):
        assert {v.value for v in VersionOptions} == {"draft", "published"}
