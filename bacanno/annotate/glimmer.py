"""
Gene prediction with Glimmer, using an interpolated context model (ICM)
trained on a type strain genome.

https://ccb.jhu.edu/software/glimmer/
"""
import os

from bacanno import utils
from bacanno.pipeline import datadict as dd
from bacanno.pipeline import genome
from bacanno.provenance import do
from bacanno.transaction import file_transaction

TRAIN_BASE = "type_strain_genome"

def prepare(ctx):
    """Retrieve the training genome and build the ICM model shared by all samples.
    """
    ref_file = genome.obtain(genome.get_reference("training_genome", ctx), ctx)
    return {"icm": train_icm(ref_file, ctx)}

def train_icm(ref_file, ctx):
    """Train a Glimmer model from long ORFs in the reference genome.

    The model is reused if a previous run already built it.
    """
    params = dd.get_glimmer_params(ctx.config)
    work_dir = utils.safe_makedir(os.path.join(ctx.ref_dir, "glimmer"))
    base = os.path.join(work_dir, TRAIN_BASE)
    icm_file = base + ".icm"
    if utils.file_exists(icm_file):
        return icm_file
    longorfs_file = base + ".longorfs"
    train_file = base + ".train"
    do.run(["long-orfs", "-n", "-t", params.get("longorfs_threshold", 1.15),
            ref_file, longorfs_file],
           "Finding long ORFs for Glimmer training", ctx,
           checks=[do.file_nonempty(longorfs_file)])
    do.run(["extract", "-t", ref_file, longorfs_file],
           "Extracting Glimmer training sequences", ctx, stdout_file=train_file)
    with file_transaction(ctx.config, icm_file) as tx_icm_file:
        do.run(["build-icm", "-r", tx_icm_file], "Training Glimmer model", ctx,
               stdin_file=train_file, checks=[do.file_nonempty(tx_icm_file)])
    return icm_file

def run_glimmer(sample, out_dir, prep, ctx):
    params = dd.get_glimmer_params(ctx.config)
    cmd = ["glimmer3", "-o", params.get("max_overlap", 30), "-g", params.get("gene_len", 150),
           "-t", params.get("threshold", 50), sample.file, prep["icm"],
           os.path.join(out_dir, sample.name)]
    do.run(cmd, "Processing with Glimmer", ctx, sample=sample)
