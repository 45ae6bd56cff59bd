"""
Ribosomal RNA prediction with Barrnap.

https://github.com/tseemann/barrnap
"""
import os

from bacanno.provenance import do

def run_barrnap(sample, out_dir, prep, ctx):
    """Predict rRNA genes, writing GFF3 from stdout and rRNA sequences.
    """
    base = os.path.join(out_dir, sample.name)
    cmd = ["barrnap", "--kingdom", "bac", "--threads", ctx.run.num_cores,
           "--outseq", base + "_16S.fa", sample.file]
    do.run(cmd, "Processing with Barrnap", ctx, sample=sample,
           stdout_file=base + "_Barrnap.gff")
