"""Tests for the seqedit command-line interface and table output."""

import pandas as pd
import pytest
from click.testing import CliRunner
from seqedit.cli import cli, parse_key_script
from seqedit.core.models import MutationScar, ScarType
from seqedit.io.output import generate_changelog_report, scars_to_dataframe


@pytest.fixture
def runner():
    return CliRunner()


class TestKeyScript:
    """Test edit script parsing."""

    def test_plain_residues(self):
        """Test each character is a key."""
        assert parse_key_script("ACG") == ["A", "C", "G"]

    def test_named_keys(self):
        """Test {Name} tokens become named keys."""
        assert parse_key_script("A{Backspace}C{Undo}") == ["A", "Backspace", "C", "Undo"]


class TestAnalysisCommands:
    """Test gc, orfs, motif and detect commands."""

    def test_gc(self, runner):
        """Test GC profile printed to stdout."""
        result = runner.invoke(cli, ["gc", "GCGC", "-w", "2", "-s", "1"])

        assert result.exit_code == 0
        assert "Overall GC: 1.0000" in result.output

    def test_gc_to_tsv(self, runner, tmp_path):
        """Test GC profile written to TSV."""
        out = tmp_path / "gc.tsv"
        result = runner.invoke(cli, ["gc", "ATGC", "-w", "2", "-s", "2", "-o", str(out)])

        assert result.exit_code == 0
        df = pd.read_csv(out, sep="\t")
        assert list(df["position"]) == [0, 2]
        assert list(df["gc"]) == [0.0, 1.0]

    def test_gc_invalid_window(self, runner):
        """Test a zero window exits with an error."""
        result = runner.invoke(cli, ["gc", "ATGC", "-w", "0"])
        assert result.exit_code == 1

    def test_orfs(self, runner):
        """Test ORF table output."""
        result = runner.invoke(cli, ["orfs", "ATGAAATAG", "--min-aa", "1"])

        assert result.exit_code == 0
        assert "TAG" in result.output
        assert "+1" in result.output

    def test_orfs_none(self, runner):
        """Test message when nothing passes the length filter."""
        result = runner.invoke(cli, ["orfs", "ATGAAATAG"])

        assert result.exit_code == 0
        assert "No ORFs found" in result.output

    def test_orfs_from_config(self, runner, tmp_path):
        """Test thresholds are read from the config file."""
        config = tmp_path / "editor.yaml"
        config.write_text("analysis:\n  orf_min_amino_acids: 1\n  start_codons: [GTG]\n")
        out = tmp_path / "orfs.tsv"

        result = runner.invoke(cli, ["orfs", "GTGAAATAG", "-c", str(config), "-o", str(out)])

        assert result.exit_code == 0
        df = pd.read_csv(out, sep="\t", dtype={"frame_label": str})
        assert list(df["start_codon"]) == ["GTG"]
        assert list(df["frame_label"]) == ["+1"]

    def test_orfs_from_fasta(self, runner, tmp_path):
        """Test the sequence argument accepts a FASTA path."""
        fasta = tmp_path / "seq.fa"
        fasta.write_text(">s\nATGAAA\nTAG\n")

        result = runner.invoke(cli, ["orfs", str(fasta), "--min-aa", "1"])

        assert result.exit_code == 0
        assert "ATG" in result.output

    def test_motif(self, runner, tmp_path):
        """Test motif matches written to TSV."""
        out = tmp_path / "motifs.tsv"
        result = runner.invoke(cli, ["motif", "AACGATCG", "AWCG", "-o", str(out)])

        assert result.exit_code == 0
        df = pd.read_csv(out, sep="\t")
        assert list(df["start"]) == [0, 4]

    def test_motif_none(self, runner):
        """Test message when the motif is absent."""
        result = runner.invoke(cli, ["motif", "AAAA", "GG"])
        assert "No matches" in result.output

    def test_motif_protein_literal(self, runner):
        """Test protein motifs are not expanded as nucleotide codes."""
        result = runner.invoke(cli, ["motif", "MKVLM", "KV", "--type", "protein"])

        assert result.exit_code == 0
        assert "No matches" not in result.output
        assert "KV" in result.output

    def test_malformed_config_reported(self, runner, tmp_path):
        """Test unparsable YAML exits with an error message."""
        config = tmp_path / "broken.yaml"
        config.write_text("analysis: [unclosed\n")

        result = runner.invoke(cli, ["orfs", "ATGAAATAG", "-c", str(config)])

        assert result.exit_code == 1
        assert "Error loading config" in result.output

    def test_wrong_typed_config_reported(self, runner, tmp_path):
        """Test a config value of the wrong type exits with an error message."""
        config = tmp_path / "typed.yaml"
        config.write_text("max_history: ten\n")

        result = runner.invoke(cli, ["gc", "GCGC", "-c", str(config)])

        assert result.exit_code == 1
        assert "Error loading config" in result.output

    def test_non_mapping_config_reported(self, runner, tmp_path):
        """Test a YAML list instead of a mapping exits with an error message."""
        config = tmp_path / "list.yaml"
        config.write_text("- max_history\n")

        result = runner.invoke(cli, ["gc", "GCGC", "-c", str(config)])

        assert result.exit_code == 1
        assert "Error loading config" in result.output

    def test_detect(self, runner):
        """Test sequence type detection."""
        result = runner.invoke(cli, ["detect", "AUGCAUGC"])

        assert result.exit_code == 0
        assert "Type: rna" in result.output
        assert "Length: 8" in result.output

    def test_detect_reports_composition(self, runner):
        """Test GC, weight and melting temperature for a nucleotide oligo."""
        result = runner.invoke(cli, ["detect", "ATGC"])

        assert result.exit_code == 0
        assert "GC: 0.5000  AT: 0.5000" in result.output
        assert "MW: 1277.74 Da" in result.output
        assert "Tm: 12.0 C" in result.output

    def test_detect_protein_weight(self, runner):
        """Test protein sequences report the residue weight."""
        result = runner.invoke(cli, ["detect", "MEEK"])

        assert "Type: protein" in result.output
        assert "MW: 535.23 Da" in result.output
        assert "Tm:" not in result.output


class TestEditCommand:
    """Test the edit command."""

    def test_substitute(self, runner):
        """Test a single substitution at the clicked position."""
        result = runner.invoke(cli, ["edit", "ATGAAATAG", "-p", "3", "--keys", "G"])

        assert result.exit_code == 0
        assert "Sequence: ATGGAATAG" in result.output
        assert "Cursor: 4" in result.output
        assert "Scars: 1" in result.output
        assert "Position 4: A → G" in result.output

    def test_undo(self, runner):
        """Test {Undo} reverts the previous key."""
        result = runner.invoke(cli, ["edit", "ATGAAATAG", "--keys", "C{Undo}"])

        assert "Sequence: ATGAAATAG" in result.output
        assert "Scars: 0" in result.output

    def test_insert_and_backspace(self, runner):
        """Test insert mode with a backspace."""
        result = runner.invoke(
            cli, ["edit", "ATGAAATAG", "--insert", "--keys", "CC{Backspace}"]
        )

        assert "Sequence: CATGAAATAG" in result.output
        assert "Scars: 3" in result.output

    def test_invalid_key_reported(self, runner):
        """Test rejected keys are reported without aborting."""
        result = runner.invoke(cli, ["edit", "ATGAAATAG", "--keys", "ZC"])

        assert result.exit_code == 0
        assert "invalid_residue" in result.output
        assert "Sequence: CTGAAATAG" in result.output

    def test_invalid_sequence_exits(self, runner):
        """Test a sequence with invalid residues for its type is refused."""
        result = runner.invoke(cli, ["edit", "ATGU", "--type", "dna", "--keys", "A"])
        assert result.exit_code == 1

    def test_changelog(self, runner, tmp_path):
        """Test the markdown changelog is written."""
        changelog = tmp_path / "changes.md"
        result = runner.invoke(
            cli, ["edit", "ATGAAATAG", "--keys", "G{Delete}", "--changelog", str(changelog)]
        )

        assert result.exit_code == 0
        text = changelog.read_text()
        assert "# Edit History" in text
        assert "- **Edits:** 2" in text
        assert "Position 2: delete T (1 bp)" in text


class TestOutput:
    """Test table and report writers."""

    def test_scars_dataframe_order(self):
        """Test most_recent_first reverses ledger order."""
        scars = [
            MutationScar(position=0, type=ScarType.INSERTION, inserted="A", created_at=1.0),
            MutationScar(position=5, type=ScarType.DELETION, original="G", created_at=2.0),
        ]

        df = scars_to_dataframe(scars, most_recent_first=True)

        assert list(df["position"]) == [5, 0]
        assert list(df["type"]) == ["deletion", "insertion"]
        assert df["description"].iloc[0] == "Position 6: delete G (1 bp)"

    def test_empty_scars_dataframe(self):
        """Test an empty ledger still has the expected columns."""
        df = scars_to_dataframe([])
        assert df.empty
        assert "description" in df.columns

    def test_changelog_without_scars(self, tmp_path):
        """Test the report for an unedited block."""
        path = generate_changelog_report([], tmp_path / "empty.md", title="Plasmid")
        text = path.read_text()

        assert text.startswith("# Plasmid")
        assert "- **Edits:** 0" in text
        assert "Changes" not in text


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
