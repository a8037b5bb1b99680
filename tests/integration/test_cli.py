"""Integration tests for CLI commands.

Network calls are patched; these tests run offline.
"""

import json
import pytest
from unittest.mock import AsyncMock, patch
from typer.testing import CliRunner

from oncomerge.cli import app
from oncomerge.errors import EnrichmentFetchError
from oncomerge.models.cosmic import CosmicCount
from oncomerge.models.study import CancerStudy


runner = CliRunner()

CALLED = [
    {"gene": {"hugoGeneSymbol": "ERG"}, "proteinChange": "TMPRSS2-ERG fusion"},
    {"gene": {"hugoGeneSymbol": "TMPRSS2"}, "proteinChange": "TMPRSS2-ERG fusion"},
    {
        "gene": {"hugoGeneSymbol": "TP53", "chromosome": "17"},
        "proteinChange": "R175H",
        "startPosition": 7578406,
        "endPosition": 7578406,
        "referenceAllele": "C",
        "variantAllele": "T",
        "keyword": "TP53 R175 missense",
    },
]

UNCALLED = [
    {
        "hugoGeneSymbol": "TP53",
        "chr": "17",
        "proteinChange": "R175H",
        "startPosition": 7578406,
        "endPosition": 7578406,
        "referenceAllele": "C",
        "variantAllele": "T",
        "mutationStatus": "UNCALLED",
    },
]


@pytest.fixture
def mutation_files(tmp_path):
    called = tmp_path / "called.json"
    uncalled = tmp_path / "uncalled.json"
    called.write_text(json.dumps(CALLED))
    uncalled.write_text(json.dumps(UNCALLED))
    return called, uncalled


class TestMergeCommand:
    """Tests for 'oncomerge merge'."""

    @pytest.mark.integration
    def test_merge_prints_groups(self, mutation_files):
        called, uncalled = mutation_files
        result = runner.invoke(app, ["merge", str(called), "--uncalled", str(uncalled)])

        assert result.exit_code == 0
        assert "3 mutation groups" in result.stdout
        assert "TMPRSS2" in result.stdout
        assert "TP53 R175H" in result.stdout

    @pytest.mark.integration
    def test_merge_writes_output(self, mutation_files, tmp_path):
        called, uncalled = mutation_files
        output = tmp_path / "groups.json"

        result = runner.invoke(app, ["merge", str(called), "-u", str(uncalled), "-o", str(output)])

        assert result.exit_code == 0
        groups = json.loads(output.read_text())
        assert [len(g) for g in groups] == [1, 1, 2]
        assert groups[2][1]["mutationStatus"] == "UNCALLED"

    @pytest.mark.integration
    def test_merge_invalid_record(self, tmp_path):
        bad = tmp_path / "bad.json"
        bad.write_text(json.dumps([{"proteinChange": "V600E"}]))

        result = runner.invoke(app, ["merge", str(bad)])

        assert result.exit_code == 1
        assert "gene symbol" in result.stdout

    @pytest.mark.integration
    def test_merge_missing_file(self, tmp_path):
        result = runner.invoke(app, ["merge", str(tmp_path / "nope.json")])

        assert result.exit_code == 1
        assert "not found" in result.stdout

    @pytest.mark.integration
    def test_merge_invalid_log_level(self, mutation_files):
        called, _ = mutation_files
        result = runner.invoke(app, ["merge", str(called), "--log-level", "LOUD"])

        assert result.exit_code == 1
        assert "Invalid log level" in result.stdout
        assert not isinstance(result.exception, ValueError)


class TestCosmicCommand:
    """Tests for 'oncomerge cosmic'."""

    @pytest.mark.integration
    def test_cosmic_skipped_without_keywords(self, tmp_path):
        called = tmp_path / "called.json"
        called.write_text(json.dumps(CALLED[:2]))

        with patch(
            "oncomerge.cli.CBioPortalClient.fetch_cosmic_counts", new_callable=AsyncMock
        ) as mock_fetch:
            result = runner.invoke(app, ["cosmic", str(called)])

        assert result.exit_code == 0
        assert "Skipped" in result.stdout
        mock_fetch.assert_not_called()

    @pytest.mark.integration
    def test_cosmic_fetches_counts(self, mutation_files):
        called, uncalled = mutation_files

        with patch(
            "oncomerge.cli.CBioPortalClient.fetch_cosmic_counts", new_callable=AsyncMock
        ) as mock_fetch:
            mock_fetch.return_value = [
                CosmicCount(keyword="TP53 R175 missense", count=1234, cosmic_mutation_id="COSM10648")
            ]
            result = runner.invoke(app, ["cosmic", str(called), "--uncalled", str(uncalled)])

        assert result.exit_code == 0
        assert "1234" in result.stdout
        mock_fetch.assert_awaited_once_with(["TP53 R175 missense"])

    @pytest.mark.integration
    def test_cosmic_lookup_failure(self, mutation_files):
        called, _ = mutation_files

        with patch(
            "oncomerge.cli.CBioPortalClient.fetch_cosmic_counts", new_callable=AsyncMock
        ) as mock_fetch:
            mock_fetch.side_effect = EnrichmentFetchError("COSMIC count lookup failed: Expecting value")
            result = runner.invoke(app, ["cosmic", str(called)])

        assert result.exit_code == 1
        assert "COSMIC count lookup failed" in result.stdout


class TestStudiesCommand:
    """Tests for 'oncomerge studies'."""

    @pytest.mark.integration
    def test_studies(self):
        with patch(
            "oncomerge.cli.CBioPortalClient.fetch_studies", new_callable=AsyncMock
        ) as mock_fetch:
            mock_fetch.return_value = [
                CancerStudy.model_validate({"studyId": "gbm_tcga", "cancerType": {"name": "Glioblastoma"}}),
            ]
            result = runner.invoke(app, ["studies", "gbm_tcga"])

        assert result.exit_code == 0
        assert "gbm_tcga" in result.stdout
        assert "Glioblastoma" in result.stdout


class TestVersionCommand:
    @pytest.mark.integration
    def test_version(self):
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert "OncoMerge version" in result.stdout
