"""Tests for the gene coordinate table."""

import pytest

from svscore.errors import GeneNotFoundError, InputFileError, MalformedRecordError
from svscore.genes import GeneTable, parse_gene_line
from svscore.models import GeneRecord


class TestParseGeneLine:
    """Tests for gene file rows."""

    def test_strand_before_symbol(self):
        record = parse_gene_line("17\t41196311\t41277500\t-\tBRCA1\n")
        assert record == GeneRecord("BRCA1", "17", 41196311, 41277500, "-")

    def test_symbol_before_strand(self):
        record = parse_gene_line("17\t41196311\t41277500\tBRCA1\t-\n")
        assert record.symbol == "BRCA1"
        assert record.strand == "-"

    def test_blank_line(self):
        assert parse_gene_line("\n") is None

    def test_too_few_columns(self):
        with pytest.raises(MalformedRecordError, match="line 4"):
            parse_gene_line("17\t100\t200\n", 4)

    def test_invalid_coordinates(self):
        with pytest.raises(MalformedRecordError, match="invalid coordinates"):
            parse_gene_line("17\tstart\t200\t+\tG1\n")


class TestGeneTable:
    """Tests for gene merging and lookup."""

    def test_merge_widens_interval(self):
        table = GeneTable()
        table.add(GeneRecord("G1", "chr17", 100, 200, "+"))
        table.add(GeneRecord("G1", "chr17", 150, 300, "+"))

        gene = table.lookup("G1", "chr17")
        assert (gene.start, gene.stop) == (100, 300)

    def test_merge_keeps_first_strand(self):
        table = GeneTable()
        table.add(GeneRecord("G1", "1", 500, 600, "-"))
        table.add(GeneRecord("G1", "1", 100, 200, "+"))

        gene = table.lookup("G1", "1")
        assert (gene.start, gene.stop, gene.strand) == (100, 600, "-")

    def test_same_symbol_on_different_chromosomes(self):
        table = GeneTable.from_lines(["X\t10\t20\t+\tPAR1\n", "Y\t30\t40\t+\tPAR1\n"])
        assert table.lookup("PAR1", "X").start == 10
        assert table.lookup("PAR1", "Y").start == 30
        assert len(table) == 1

    def test_lookup_miss_raises(self, gene_table):
        with pytest.raises(GeneNotFoundError, match="GPLUS on chromosome 5"):
            gene_table.lookup("GPLUS", "5")
        with pytest.raises(GeneNotFoundError):
            gene_table.lookup("NOPE", "1")

    def test_contains_and_get(self, gene_table):
        assert ("GPLUS", "1") in gene_table
        assert ("GPLUS", "2") not in gene_table
        assert gene_table.get("GMINUS", "2").strand == "-"
        assert gene_table.get("GMINUS", "1") is None

    def test_from_lines_merges_transcripts(self, gene_table):
        gene = gene_table.lookup("GPLUS", "1")
        assert (gene.start, gene.stop) == (4000, 7000)
        assert gene_table.lookup("G1", "17").stop == 300

    def test_from_file(self, gene_file):
        table = GeneTable.from_file(gene_file)
        assert len(table) == 3

    def test_from_missing_file(self, tmp_path):
        with pytest.raises(InputFileError, match="gene table"):
            GeneTable.from_file(tmp_path / "missing.bed")

    def test_undecodable_file(self, tmp_path):
        path = tmp_path / "genes.bed"
        path.write_bytes(b"1\t100\t200\t+\tG\xff1\n")
        with pytest.raises(InputFileError, match="Could not read gene table"):
            GeneTable.from_file(path)
