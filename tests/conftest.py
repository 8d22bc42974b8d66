"""Shared pytest fixtures for annovep tests."""

import logging
from pathlib import Path

import pytest

from annovep.engine import AnnotationContext, AnnotationEngine
from annovep.lookup import LookupTable, TableEntry

CSQ_DESCRIPTION = (
    "Consequence annotations from Ensembl VEP. "
    "Format: Allele|Consequence|IMPACT|SYMBOL|Gene"
)

VCF_HEADER = f"""##fileformat=VCFv4.2
##contig=<ID=chr1,length=10000>
##INFO=<ID=DP,Number=1,Type=Integer,Description="Total depth">
##INFO=<ID=CSQ,Number=.,Type=String,Description="{CSQ_DESCRIPTION}">
#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO
"""

VCF_RECORDS = [
    "chr1\t100\t.\tA\tG\t.\tPASS\tDP=10;CSQ=G|missense_variant|MODERATE|ABC|GENE1,G|intron_variant|MODIFIER|DEF|GENE2",
    "chr1\t200\t.\tC\tT\t.\tPASS\tDP=12;CSQ=T|intron_variant|MODIFIER|XYZ|GENE9",
    "chr1\t300\t.\tG\tA\t.\tPASS\tDP=7",
    "chr1\t400\t.\tT\tC\t.\tPASS\tCSQ=C|upstream_gene_variant|MODIFIER||",
]


@pytest.fixture(autouse=True)
def reset_annovep_logger():
    """Undo handlers and level set by setup_logging in CLI tests."""
    yield
    logger = logging.getLogger("annovep")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def write_table(tmp_path):
    """Write lines to a TSV table file and return its path."""

    def _write(lines, name="genes.tsv"):
        path = tmp_path / name
        path.write_text("".join(line + "\n" for line in lines))
        return path

    return _write


@pytest.fixture
def gene_table():
    return LookupTable([TableEntry("GENE1", "A"), TableEntry("GENE2", "B")])


@pytest.fixture
def engine(gene_table):
    return AnnotationEngine(AnnotationContext(tag_name="TAG", table=gene_table))


@pytest.fixture
def vep_vcf(tmp_path) -> Path:
    """A small VEP-annotated VCF with a record without CSQ and one with an empty gene."""
    path = tmp_path / "input.vcf"
    path.write_text(VCF_HEADER + "\n".join(VCF_RECORDS) + "\n")
    return path


@pytest.fixture
def vcf_without_csq_header(tmp_path) -> Path:
    path = tmp_path / "no_csq.vcf"
    path.write_text(
        "##fileformat=VCFv4.2\n"
        "##contig=<ID=chr1,length=10000>\n"
        '##INFO=<ID=DP,Number=1,Type=Integer,Description="Total depth">\n'
        "#CHROM\tPOS\tID\tREF\tALT\tQUAL\tFILTER\tINFO\n"
        "chr1\t100\t.\tA\tG\t.\tPASS\tDP=10\n"
    )
    return path
