"""
Homology based gene prediction with GeMoMa.

http://www.jstacs.de/index.php/GeMoMa
"""
from bacanno.pipeline import genome
from bacanno.provenance import do

# predicted protein sequences GeMoMaPipeline writes to its outdir
PROTEIN_FILE = "predicted_proteins.fasta"

def prepare(ctx):
    """Retrieve the reference genome and annotation predictions are mapped from.
    """
    return {"ref_genome": genome.obtain(genome.get_reference("homology_genome", ctx), ctx),
            "ref_gff": genome.obtain(genome.get_reference("homology_gff", ctx), ctx)}

def run_gemoma(sample, out_dir, prep, ctx):
    cmd = ["GeMoMa", "GeMoMaPipeline",
           "threads=%s" % ctx.run.num_cores,
           "g=%s" % prep["ref_genome"],
           "a=%s" % prep["ref_gff"],
           "t=%s" % sample.file,
           "outdir=%s" % out_dir,
           "AnnotationFinalizer.p=GENE_PREFIX",
           "AnnotationFinalizer.i=G",
           "AnnotationFinalizer.s=0",
           "AnnotationFinalizer.d=5"]
    do.run(cmd, "Processing with GeMoMa", ctx, sample=sample)
