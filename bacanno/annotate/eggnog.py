"""
Functional annotation with eggNOG-mapper.

https://github.com/eggnogdb/eggnog-mapper
"""
import os

from bacanno.provenance import do

def run_eggnog(sample, out_dir, prep, ctx):
    """Annotate Glimmer predictions for a sample.
    """
    cmd = ["emapper.py", "-i", os.path.join(out_dir, sample.name + ".predict"),
           "-o", sample.name + "_eggnog", "--output_dir", out_dir,
           "--cpu", ctx.run.num_cores]
    do.run(cmd, "Processing with EggNOG", ctx, sample=sample)
