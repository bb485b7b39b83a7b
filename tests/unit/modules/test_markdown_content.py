"""Tests for README content extraction."""

from unittest.mock import patch

import pytest

from readme_validator.errors import ErrorKind, MarkdownExtractionError
from readme_validator.modules.format_detector import MarkdownFormat
from readme_validator.modules.markdown_content import MarkdownContent
from readme_validator.modules.section_matcher import matches_section_name

PREFIXES = ["azurerm_"]


class TestSections:
    """Tests for section queries."""

    def test_has_section_fuzzy(self, document_readme):
        """Test section lookups tolerate plural and typo variants."""
        content = MarkdownContent(document_readme, provider_prefixes=PREFIXES)

        assert content.has_section("Resources")
        assert content.has_section("Resource")
        assert content.has_section("Outputz")
        assert not content.has_section("Testing")

    def test_has_section_is_memoized(self, document_readme):
        """Test a repeated lookup does not rescan the headings."""
        content = MarkdownContent(document_readme)

        with patch(
            "readme_validator.modules.markdown_content.matches_section_name",
            wraps=matches_section_name,
        ) as spy:
            first = content.has_section("Providers")
            calls = spy.call_count
            second = content.has_section("Providers")

        assert first is second is True
        assert calls == len(content.get_all_sections())
        assert spy.call_count == calls

    def test_get_all_sections_keeps_order_and_duplicates(self):
        """Test every level-2 heading is listed as written."""
        content = MarkdownContent("# T\n\n## Resources\n\n### x\n\n## Outputs\n\n## Resources\n")

        assert content.get_all_sections() == ["Resources", "Outputs", "Resources"]

    def test_content_and_explicit_format(self, document_readme):
        """Test an explicit format bypasses detection."""
        content = MarkdownContent(document_readme, MarkdownFormat.TABLE)

        assert content.content == document_readme
        assert content.format is MarkdownFormat.TABLE
        assert content.detection is None

    def test_auto_format_records_detection(self, table_readme):
        """Test AUTO exposes the detection result."""
        content = MarkdownContent(table_readme)

        assert content.format is MarkdownFormat.TABLE
        assert content.detection is not None
        assert content.detection.format is MarkdownFormat.TABLE


class TestExtractSectionItems:
    """Tests for extract_section_items()."""

    def test_document_format_items(self, document_readme):
        """Test level-3 headings under matching sections are items."""
        content = MarkdownContent(document_readme)

        assert content.extract_section_items("Required Inputs", "Optional Inputs") == [
            "location",
            "tags",
        ]
        assert content.extract_section_items("Outputs") == ["vnet_id"]

    def test_table_format_items(self, table_readme):
        """Test first table column values are items."""
        content = MarkdownContent(table_readme)

        assert content.extract_section_items("Inputs") == ["location", "tags"]
        assert content.extract_section_items("Outputs") == ["vnet_id"]

    def test_table_cells_strip_backticks(self):
        """Test code-formatted names are unwrapped."""
        text = "## Outputs\n\n| Name | Description |\n|---|---|\n| `id` | The id. |\n"
        content = MarkdownContent(text, MarkdownFormat.TABLE)

        assert content.extract_section_items("Outputs") == ["id"]

    def test_heading_items_stop_at_next_section(self):
        """Test items are bounded by the next level-2 heading."""
        text = "## Outputs\n\n### id\n\n### name\n\n## Testing\n\n### not_an_output\n"
        content = MarkdownContent(text, MarkdownFormat.DOCUMENT)

        assert content.extract_section_items("Outputs") == ["id", "name"]

    def test_bracketed_heading_names(self):
        """Test literal brackets around a heading are trimmed."""
        content = MarkdownContent("## Outputs\n\n### [name]\n", MarkdownFormat.DOCUMENT)

        assert content.extract_section_items("Outputs") == ["name"]

    def test_anchor_fallback_without_headings(self):
        """Test anchors are used when no section heading matches."""
        text = (
            'Inputs: <a name="input_location"></a> location\n\n'
            'Outputs: <a name="output_vnet_id"></a> vnet_id\n'
        )
        content = MarkdownContent(text, MarkdownFormat.DOCUMENT)

        assert content.extract_section_items("Required Inputs") == ["location"]
        assert content.extract_section_items("Outputs") == ["vnet_id"]
        assert content.extract_section_items("Resources") == []

    def test_anchor_type_filter(self):
        """Test items anchored as inputs are dropped from an Outputs section."""
        text = (
            "## Outputs\n\n"
            '### <a name="output_id"></a> id\n\n'
            '### <a name="input_region"></a> region\n\n'
            "### plain\n"
        )
        content = MarkdownContent(text, MarkdownFormat.DOCUMENT)

        assert content.extract_section_items("Outputs") == ["id", "plain"]


class TestExtractResources:
    """Tests for extract_resources_and_data_sources()."""

    def test_document_resources(self, document_readme):
        """Test provider links become resources and data sources."""
        content = MarkdownContent(document_readme, provider_prefixes=PREFIXES)

        resources, data_sources = content.extract_resources_and_data_sources()

        assert resources == [
            "azurerm_resource_group.main",
            "azurerm_resource_group",
            "azurerm_virtual_network.main",
            "azurerm_virtual_network",
        ]
        assert data_sources == ["azurerm_client_config.current", "azurerm_client_config"]

    def test_table_resources(self, table_readme):
        """Test links inside a Resources table are found."""
        content = MarkdownContent(table_readme, provider_prefixes=PREFIXES)

        resources, data_sources = content.extract_resources_and_data_sources()

        assert "azurerm_virtual_network.main" in resources
        assert data_sources == ["azurerm_client_config.current", "azurerm_client_config"]

    def test_prefix_is_case_insensitive(self, document_readme):
        """Test configured prefixes match regardless of case."""
        content = MarkdownContent(document_readme, provider_prefixes=["AzureRM_"])

        resources, _ = content.extract_resources_and_data_sources()

        assert "azurerm_resource_group" in resources

    def test_links_bounded_by_next_section(self):
        """Test links after the Resources section are ignored."""
        text = (
            "## Resources\n\n- [azurerm_subnet.a](https://example.com/r/subnet)\n\n"
            "## Outputs\n\n- [azurerm_vnet.b](https://example.com/r/vnet)\n"
        )
        content = MarkdownContent(text, provider_prefixes=PREFIXES)

        resources, _ = content.extract_resources_and_data_sources()

        assert resources == ["azurerm_subnet.a", "azurerm_subnet"]

    def test_whole_document_scan_without_heading(self):
        """Test links anywhere are used when there is no Resources heading."""
        text = "# Module\n\nUses [azurerm_subnet.a](https://example.com/docs/data-sources/subnet).\n"
        content = MarkdownContent(text, provider_prefixes=PREFIXES)

        resources, data_sources = content.extract_resources_and_data_sources()

        assert resources == []
        assert data_sources == ["azurerm_subnet.a", "azurerm_subnet"]

    def test_no_prefixes_means_nothing_found(self, document_readme):
        """Test no link qualifies without configured prefixes."""
        content = MarkdownContent(document_readme)

        with pytest.raises(MarkdownExtractionError, match="resources section not found or empty"):
            content.extract_resources_and_data_sources()


class TestValidateTableColumns:
    """Tests for validate_table_columns()."""

    def test_valid_tables(self, table_readme):
        """Test terraform-docs tables satisfy every contract."""
        content = MarkdownContent(table_readme)

        assert content.validate_table_columns() == []

    def test_misspelled_column(self):
        """Test a truncated column is unexpected and its full name missing."""
        text = "## Providers\n\n| Name | Ver |\n|---|---|\n| azurerm | >= 3.0 |\n"
        content = MarkdownContent(text, MarkdownFormat.TABLE)

        messages = {str(error) for error in content.validate_table_columns()}

        assert messages == {
            "unexpected column 'Ver' in table under header: Providers (did you mean 'Version'?)",
            "missing required column 'Version' in table under header: Providers",
        }

    def test_unrelated_column_has_no_hint(self):
        """Test an unrelated extra column gets no suggestion."""
        text = "## Outputs\n\n| Name | Description | Sensitive |\n|---|---|---|\n| id | x | no |\n"
        content = MarkdownContent(text, MarkdownFormat.TABLE)

        errors = content.validate_table_columns()

        assert [str(error) for error in errors] == [
            "unexpected column 'Sensitive' in table under header: Outputs"
        ]
        assert errors[0].kind is ErrorKind.MALFORMED_TABLE

    def test_missing_table(self):
        """Test a contract section without a table is reported."""
        content = MarkdownContent("## Outputs\n\nNo outputs.\n", MarkdownFormat.TABLE)

        assert [str(e) for e in content.validate_table_columns()] == [
            "missing table after header: Outputs"
        ]

    def test_optional_columns_allowed(self):
        """Test optional Inputs columns may be omitted."""
        text = "## Inputs\n\n| Name | Description | Required |\n|---|---|---|\n| a | b | yes |\n"
        content = MarkdownContent(text, MarkdownFormat.TABLE)

        assert content.validate_table_columns() == []
