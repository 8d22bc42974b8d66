"""Streaming VCF/BCF host for the CSQ annotation engine.

Reads records with pysam, patches the output header once, annotates the
target INFO field of every record and writes all records in input order.
"""

import dataclasses
import logging
from typing import Any, Dict, Optional

import pysam

from annovep.engine import AnnotationEngine
from annovep.errors import AllocationError, SchemaNotFound

logger = logging.getLogger("annovep")

# bcftools style -O output types mapped to pysam write modes
WRITE_MODES = {
    "v": "w",
    "z": "wz",
    "b": "wb",
    "u": "wbu",
}


@dataclasses.dataclass
class RunSummary:
    records_read: int = 0
    records_written: int = 0
    records_annotated: int = 0
    subentries_annotated: int = 0
    subentries_matched: int = 0
    schema_patched: bool = False

    def as_dict(self) -> Dict[str, Any]:
        return dataclasses.asdict(self)


class VCFTagAnnotator:
    """Annotate the CSQ field of a VCF/BCF file.

    Attributes:
        input_vcf: Input VCF/BCF path, '-' for stdin.
        output_vcf: Output path, '-' for stdout.
        output_type: One of v (VCF), z (bgzipped VCF), b (BCF), u (uncompressed BCF).
        engine: AnnotationEngine carrying the lookup table and tag name.
    """

    def __init__(
        self,
        input_vcf: str,
        engine: AnnotationEngine,
        output_vcf: str = "-",
        output_type: str = "v",
    ) -> None:
        if output_type not in WRITE_MODES:
            raise ValueError(
                f"Unknown output type {output_type!r}, expected one of {', '.join(WRITE_MODES)}"
            )
        self.input_vcf = str(input_vcf)
        self.output_vcf = str(output_vcf)
        self.output_type = output_type
        self.engine = engine
        self.summary = RunSummary()

    @property
    def field(self) -> str:
        return self.engine.context.field

    def declare_field(self, in_header: pysam.VariantHeader) -> bool:
        """Declare the field on the input header if it is missing.

        Must run before any record is parsed, otherwise htslib adds its own
        Number=1 placeholder when it meets the field. Returns True if a
        declaration was added.
        """
        if self.field in in_header.info:
            return False
        logger.warning(
            f"No INFO/{self.field} declaration in header, declaring it as Number=. String"
        )
        in_header.info.add(self.field, ".", "String", f"Undeclared {self.field} field")
        return True

    def build_header(self, in_header: pysam.VariantHeader) -> pysam.VariantHeader:
        """Return a new header with the new tag added to the field's Format list.

        Header lines are copied one by one so the field's INFO line can be
        written with the patched Description in its original position.
        """
        try:
            meta = in_header.info.get(self.field)
            if meta is None:
                raise SchemaNotFound(f"No INFO/{self.field} declaration in header")
            raw_description = meta.record["Description"] or ""
            description = self.engine.patch_schema(raw_description)
        except SchemaNotFound as e:
            logger.warning(f"{e}; header left unchanged, records are still annotated")
            return in_header.copy()

        # a fresh header already carries fileformat and FILTER/PASS
        header = pysam.VariantHeader()
        for rec in in_header.records:
            if rec.type == "GENERIC" and rec.key == "fileformat":
                continue
            if rec.type == "FILTER" and rec.get("ID") == "PASS":
                continue
            line = str(rec).rstrip("\n")
            if rec.type == "INFO" and rec.get("ID") == self.field:
                start = line.find("Description=")
                line = line[:start] + line[start:].replace(raw_description, description, 1)
            header.add_line(line)
        for sample in in_header.samples:
            header.add_sample(sample)

        self.summary.schema_patched = True
        logger.debug(f"Patched INFO/{self.field} description: {description}")
        return header

    def read_field(self, record: pysam.VariantRecord) -> Optional[str]:
        if self.field not in record.header.info or self.field not in record.info:
            return None
        value = record.info[self.field]
        if value is None:
            return None
        if isinstance(value, (tuple, list)):
            # Number=. string fields come back split on commas
            return self.engine.context.codec.join_outer(value)
        return str(value)

    def annotate_record(self, record: pysam.VariantRecord) -> pysam.VariantRecord:
        """Annotate record in place. Records without the field are left untouched."""
        raw_field = self.read_field(record)
        if not raw_field:
            return record

        try:
            new_field = self.engine.process(raw_field)
        except MemoryError as e:
            raise AllocationError(
                f"Out of memory annotating {record.chrom}:{record.pos}"
            ) from e

        record.info[self.field] = new_field
        self._count(new_field)
        return record

    def _count(self, new_field: str) -> None:
        codec = self.engine.context.codec
        self.summary.records_annotated += 1
        for subentry in codec.split_outer(new_field):
            self.summary.subentries_annotated += 1
            if codec.split_inner(subentry)[-1]:
                self.summary.subentries_matched += 1

    def run(self) -> RunSummary:
        """Stream all records from input to output."""
        logger.info(f"Annotating {self.input_vcf} -> {self.output_vcf} (INFO/{self.field})")
        with pysam.VariantFile(self.input_vcf) as vcf_in:
            self.declare_field(vcf_in.header)
            out_header = self.build_header(vcf_in.header)
            mode = WRITE_MODES[self.output_type]
            with pysam.VariantFile(self.output_vcf, mode, header=out_header) as vcf_out:
                for record in vcf_in:
                    self.summary.records_read += 1
                    record.translate(out_header)
                    vcf_out.write(self.annotate_record(record))
                    self.summary.records_written += 1

        logger.info(
            f"Processed {self.summary.records_read} records, "
            f"{self.summary.records_annotated} annotated, "
            f"{self.summary.subentries_matched}/{self.summary.subentries_annotated} "
            f"transcripts matched the table"
        )
        return self.summary
