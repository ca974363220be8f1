"""Tests for seqedit.analysis module."""

import pytest
from seqedit.analysis.gc import (
    at_content,
    choose_window,
    gc_content,
    gc_window,
    melting_temperature,
    molecular_weight,
    nucleotide_composition,
    protein_molecular_weight,
)
from seqedit.analysis.motif import count_motif, expand_pattern, find_motif
from seqedit.analysis.orf import find_longest_orf, find_orfs
from seqedit.analysis.types import ORF
from seqedit.core.models import SequenceType


class TestGCWindow:
    """Test sliding-window GC content."""

    def test_all_gc(self):
        """Test every window of a GC-only sequence is 1.0."""
        points = gc_window("GCGC", window_size=2, step=1)

        assert [p.position for p in points] == [0, 1, 2]
        assert all(p.gc == 1.0 for p in points)

    def test_mixed_windows(self):
        """Test windows advance by step."""
        points = gc_window("ATGC", window_size=2, step=2)
        assert [(p.position, p.gc) for p in points] == [(0, 0.0), (2, 1.0)]

    def test_ambiguous_bases_excluded(self):
        """Test N does not count towards the denominator."""
        [point] = gc_window("GGNN", window_size=4, step=1)
        assert point.gc == 1.0

    def test_rna(self):
        """Test U counts as an AT base."""
        [point] = gc_window("GCUU", window_size=4, step=1, sequence_type=SequenceType.RNA)
        assert point.gc == 0.5

    def test_shorter_than_window(self):
        """Test a short sequence gives one point for the whole sequence."""
        [point] = gc_window("GCA")
        assert point.position == 0
        assert point.gc == pytest.approx(2 / 3)

    def test_protein_returns_empty(self):
        """Test protein sequences have no GC profile."""
        assert gc_window("MKVL", sequence_type=SequenceType.PROTEIN) == []

    def test_over_max_length_returns_empty(self):
        """Test sequences above max_length are skipped."""
        assert gc_window("GC" * 10, max_length=5) == []

    def test_invalid_window_raises(self):
        """Test window_size < 1 raises ValueError."""
        with pytest.raises(ValueError):
            gc_window("ATGC", window_size=0)

    def test_adaptive_window(self):
        """Test window and step scale with sequence length."""
        assert choose_window(500) == (20, 5)
        assert choose_window(501) == (50, 10)
        assert choose_window(5000) == (50, 10)
        assert choose_window(5001) == (100, 20)

    def test_adaptive_point_count(self):
        """Test default windows on a 100 bp sequence."""
        points = gc_window("AT" * 50)
        assert len(points) == (100 - 20) // 5 + 1


class TestComposition:
    """Test base composition helpers."""

    def test_composition(self):
        """Test base counts."""
        comp = nucleotide_composition("AAUGCNX")

        assert comp["A"] == 2
        assert comp["T"] == 1
        assert comp["N"] == 1
        assert comp["other"] == 1

    def test_gc_content(self):
        """Test overall GC fraction."""
        assert gc_content("ATGC") == 0.5
        assert gc_content("") == 0.0

    def test_at_content(self):
        """Test AT fraction counts U as T."""
        assert at_content("ATGC") == 0.5
        assert at_content("AUUA") == 1.0
        assert at_content("NNN") == 0.0

    def test_molecular_weight(self):
        """Test nucleotide weight with bond water and 5' phosphate."""
        assert molecular_weight("") == 0.0
        assert molecular_weight("A") == pytest.approx(409.22)
        assert molecular_weight("AT") == pytest.approx(695.39)
        assert molecular_weight("AU") == molecular_weight("AT")

    def test_unknown_base_weighed_as_n(self):
        """Test ambiguous codes fall back to the N weight."""
        assert molecular_weight("R") == molecular_weight("N")

    def test_protein_molecular_weight(self):
        """Test protein weight skips stops and averages unknown residues."""
        assert protein_molecular_weight("G") == pytest.approx(75.04)
        assert protein_molecular_weight("GA*") == pytest.approx(146.08)
        assert protein_molecular_weight("B") == pytest.approx(129.12)
        assert protein_molecular_weight("*") == 0.0

    def test_melting_temperature_short(self):
        """Test the Wallace rule for short oligos."""
        assert melting_temperature("ATGC") == 12.0
        assert melting_temperature("NNN") is None

    def test_melting_temperature_long(self):
        """Test the GC formula above 13 bases."""
        tm = melting_temperature("GC" * 7)
        assert tm == pytest.approx(64.9 + 41 * (14 - 16.4) / 14)


class TestFindOrfs:
    """Test six-frame ORF detection."""

    def test_single_forward_orf(self):
        """Test a minimal forward ORF."""
        [orf] = find_orfs("ATGAAATAG", min_amino_acids=1)

        assert (orf.start, orf.end) == (0, 9)
        assert orf.strand == 1
        assert orf.frame == 1
        assert orf.start_codon == "ATG"
        assert orf.stop_codon == "TAG"
        assert orf.amino_acids == 2
        assert orf.frame_label == "+1"

    def test_reverse_strand_orf(self):
        """Test reverse-strand ORFs are reported in forward coordinates."""
        [orf] = find_orfs("CTATTTCAT", min_amino_acids=1)

        assert (orf.start, orf.end) == (0, 9)
        assert orf.strand == -1
        assert orf.frame_label == "-1"

    def test_reverse_coordinates_with_offset(self):
        """Test reverse ORF coordinates on a padded sequence."""
        [orf] = find_orfs("GGCTATTTCAT", min_amino_acids=1)
        assert (orf.start, orf.end, orf.strand) == (2, 11, -1)

    def test_truncated_orf_runs_to_end(self):
        """Test an ORF without a stop codon ends at the sequence end."""
        [orf] = find_orfs("ATGAAAAAA", min_amino_acids=1)

        assert orf.end == 9
        assert orf.stop_codon is None
        assert orf.is_truncated
        assert orf.amino_acids == 3

    def test_nested_orfs_reported(self):
        """Test each in-frame start codon reports its own ORF."""
        orfs = find_orfs("ATGATGTAA", min_amino_acids=1)
        assert [(o.start, o.end, o.amino_acids) for o in orfs] == [(0, 9, 2), (3, 9, 1)]

    def test_frame_numbering(self):
        """Test frame reflects the codon offset."""
        [orf] = find_orfs("CCATGAAATAG", min_amino_acids=2)
        assert (orf.start, orf.frame) == (2, 3)

    def test_min_amino_acids_filter(self):
        """Test short ORFs are filtered out."""
        assert find_orfs("ATGAAATAG", min_amino_acids=3) == []

    def test_sorted_longest_first(self):
        """Test results are ordered by length."""
        seq = "ATGAAATAG" + "ATGAAAAAAAAATAA"
        orfs = find_orfs(seq, min_amino_acids=1)

        lengths = [o.length for o in orfs]
        assert lengths == sorted(lengths, reverse=True)
        assert orfs[0].start == 9

    def test_rna_input(self):
        """Test U is read as T."""
        [orf] = find_orfs("AUGAAAUAG", min_amino_acids=1)
        assert orf.start_codon == "ATG"

    def test_alternative_start_codons(self):
        """Test configurable start codons."""
        assert find_orfs("GTGAAATAG", min_amino_acids=1) == []
        [orf] = find_orfs("GTGAAATAG", min_amino_acids=1, start_codons=("ATG", "GTG"))
        assert orf.start_codon == "GTG"

    def test_max_length_skips(self):
        """Test long sequences are not scanned."""
        assert find_orfs("ATGAAATAG", min_amino_acids=1, max_length=5) == []

    def test_negative_min_raises(self):
        """Test negative min_amino_acids raises ValueError."""
        with pytest.raises(ValueError):
            find_orfs("ATG", min_amino_acids=-1)

    def test_longest_orf(self):
        """Test find_longest_orf picks the longest hit."""
        orf = find_longest_orf("ATGATGTAA")
        assert (orf.start, orf.end) == (0, 9)
        assert find_longest_orf("CCCC") is None

    def test_to_dict_includes_length(self):
        """Test ORF serialization."""
        orf = ORF(start=0, end=9, strand=1, frame=1, start_codon="ATG",
                  stop_codon="TAG", amino_acids=2)
        assert orf.to_dict()["length"] == 9


class TestFindMotif:
    """Test IUPAC motif search."""

    def test_exact_matches(self):
        """Test non-overlapping exact hits."""
        matches = find_motif("ATCGATCG", "ATCG")
        assert [(m.start, m.end) for m in matches] == [(0, 4), (4, 8)]

    def test_ambiguity_code(self):
        """Test W matches A or T."""
        matches = find_motif("AACGATCG", "AWCG")
        assert [(m.start, m.matched) for m in matches] == [(0, "AACG"), (4, "ATCG")]

    def test_overlapping_matches(self):
        """Test overlapping hits are all reported."""
        assert [m.start for m in find_motif("AAAA", "AA")] == [0, 1, 2]

    def test_case_insensitive(self):
        """Test matching ignores case."""
        assert count_motif("atcg", "aTcG") == 1

    def test_n_matches_any_base(self):
        """Test N matches every base."""
        assert count_motif("ACGT", "NN") == 3

    def test_literal_protein_motif(self):
        """Test protein patterns match literally, not as IUPAC codes."""
        [match] = find_motif("MKVLM", "KV", SequenceType.PROTEIN)
        assert (match.start, match.end, match.matched) == (1, 3, "KV")

    def test_protein_letters_not_expanded(self):
        """Test amino-acid letters that are also IUPAC codes stay literal."""
        assert find_motif("MAVLM", "KV", SequenceType.PROTEIN) == []
        assert count_motif("MRSWY", "RSW", SequenceType.PROTEIN) == 1

    def test_non_iupac_characters_literal_in_dna(self):
        """Test characters outside the IUPAC table match themselves."""
        [match] = find_motif("ACG*T", "G*")
        assert match.start == 2

    def test_no_wrap_around(self):
        """Test matches do not span the sequence end."""
        assert find_motif("CGAT", "ATCG") == []

    def test_edge_cases(self):
        """Test empty inputs and patterns longer than the sequence."""
        assert find_motif("", "A") == []
        assert find_motif("ACGT", "") == []
        assert find_motif("AC", "ACGT") == []

    def test_expand_pattern(self):
        """Test IUPAC expansion."""
        assert expand_pattern("RY") == [frozenset("AG"), frozenset("CT")]
        assert expand_pattern("RY", SequenceType.PROTEIN) == [frozenset("R"), frozenset("Y")]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
