"""
Prodigal gene prediction and Prokka annotation.

https://github.com/hyattpd/Prodigal
https://github.com/tseemann/prokka
"""
import os

from bacanno.provenance import do

def run_prodigal(sample, out_dir, prep, ctx):
    base = os.path.join(out_dir, sample.name)
    cmd = ["prodigal", "-i", sample.file, "-c", "-m", "-f", "gbk",
           "-o", base + "_genes.gbk",
           "-d", base + "_cds.fna",
           "-a", base + "_proteins.faa"]
    do.run(cmd, "Processing with Prodigal", ctx, sample=sample)

def run_prokka(sample, out_dir, prep, ctx):
    cmd = ["prokka", "--outdir", out_dir, "--prefix", sample.name, "--force",
           "--cpus", ctx.run.num_cores, "--kingdom", "Bacteria", sample.file]
    do.run(cmd, "Processing with Prokka", ctx, sample=sample)
