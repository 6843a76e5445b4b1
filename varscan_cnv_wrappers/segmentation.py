# -*- coding: utf-8 -*-
"""R script for the circular binary segmentation of recentered copy number calls with DNAcopy

As the chromosome names carry the arm annotation at this point, each arm is segmented separately.
"""

import textwrap


#: Template for the R script, formatted with ``str.format()``
SCRIPT_TPL = r"""
    suppressPackageStartupMessages(library(DNAcopy))

    cn <- read.table("{input}", header=TRUE, sep="\t", stringsAsFactors=FALSE)
    cna <- CNA(
        genomdat=cn$adjusted_log_ratio,
        chrom=cn$chrom,
        maploc=cn$chr_start,
        data.type="logratio",
        sampleid="{sample_id}"
    )
    smoothed <- smooth.CNA(cna)
    segs <- segment(smoothed, undo.splits="sdundo", undo.SD={undo_sd}, verbose=0)

    result <- segs$output[, c("chrom", "loc.start", "loc.end", "num.mark", "seg.mean")]
    write.table(result, file="{output}", sep="\t", quote=FALSE, row.names=FALSE)
"""


def _r_string(value):
    """Escape ``value`` for use in a double-quoted R string"""
    return str(value).replace("\\", "\\\\").replace('"', '\\"')


def render_script(input_path, output_path, undo_sd=2.5, sample_id="tumor"):
    """Return R script segmenting ``input_path`` into ``output_path``"""
    return textwrap.dedent(
        SCRIPT_TPL.format(
            input=_r_string(input_path),
            output=_r_string(output_path),
            sample_id=_r_string(sample_id),
            undo_sd=undo_sd,
        )
    ).lstrip()
