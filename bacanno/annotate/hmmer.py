"""
Protein domain scanning against Pfam with HMMER.

http://hmmer.org/
"""
import os

from bacanno.annotate import gemoma
from bacanno.pipeline import datadict as dd
from bacanno.provenance import do

def run_hmmscan(sample, out_dir, prep, ctx):
    """Scan GeMoMa predicted proteins for Pfam domains.
    """
    base = os.path.join(out_dir, sample.name)
    cmd = ["hmmscan", "--cpu", ctx.run.num_cores,
           "-o", base + "_hmmscan.txt",
           "--domtblout", base + "_hmmer_results.tbl",
           dd.get_pfam_db(ctx.config), os.path.join(out_dir, gemoma.PROTEIN_FILE)]
    do.run(cmd, "Processing with HMMER", ctx, sample=sample)
