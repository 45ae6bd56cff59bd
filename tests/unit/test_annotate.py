"""Command lines built for the external annotation tools."""
import os

import pytest

from bacanno.annotate import barrnap, eggnog, gemoma, glimmer, hmmer, prokka
from bacanno.pipeline.run_info import Sample
from tests.unit.conftest import FakeRunner, make_ctx

SAMPLE = Sample("sample1", "/data/sample1.fasta")
OUT_DIR = "/out/stage/sample1"


@pytest.fixture
def ctx(input_dir, output_dir, config):
    return make_ctx(input_dir, output_dir, config, runner=FakeRunner(), num_cores=6)


def _cmd(ctx):
    return ctx.runner.calls[-1]["cmd"]


def test_prodigal_and_prokka_share_sample_directory(ctx):
    prokka.run_prodigal(SAMPLE, OUT_DIR, {}, ctx)
    assert _cmd(ctx) == ["prodigal", "-i", SAMPLE.file, "-c", "-m", "-f", "gbk",
                         "-o", OUT_DIR + "/sample1_genes.gbk",
                         "-d", OUT_DIR + "/sample1_cds.fna",
                         "-a", OUT_DIR + "/sample1_proteins.faa"]
    prokka.run_prokka(SAMPLE, OUT_DIR, {}, ctx)
    assert _cmd(ctx) == ["prokka", "--outdir", OUT_DIR, "--prefix", "sample1", "--force",
                         "--cpus", "6", "--kingdom", "Bacteria", SAMPLE.file]


def test_barrnap_writes_gff_from_stdout(ctx, tmp_path):
    out_dir = str(tmp_path)
    barrnap.run_barrnap(SAMPLE, out_dir, {}, ctx)
    call = ctx.runner.calls[-1]
    assert call["stdout_file"] == os.path.join(out_dir, "sample1_Barrnap.gff")
    assert "--outseq" in call["cmd"]
    assert call["cmd"][-1] == SAMPLE.file


def test_gemoma_uses_prepared_references(ctx):
    prep = {"ref_genome": "/ref/genome.fna", "ref_gff": "/ref/genome.gff"}
    gemoma.run_gemoma(SAMPLE, OUT_DIR, prep, ctx)
    cmd = _cmd(ctx)
    assert cmd[:2] == ["GeMoMa", "GeMoMaPipeline"]
    assert "g=/ref/genome.fna" in cmd
    assert "a=/ref/genome.gff" in cmd
    assert "t=%s" % SAMPLE.file in cmd
    assert "outdir=%s" % OUT_DIR in cmd
    assert "threads=6" in cmd


def test_hmmscan_scans_gemoma_proteins_against_configured_db(ctx):
    ctx.config["resources"]["hmmer"]["pfam_db"] = "/db/Pfam-A.hmm"
    hmmer.run_hmmscan(SAMPLE, OUT_DIR, {}, ctx)
    cmd = _cmd(ctx)
    assert cmd[-2:] == ["/db/Pfam-A.hmm", OUT_DIR + "/predicted_proteins.fasta"]
    assert cmd[cmd.index("--domtblout") + 1] == OUT_DIR + "/sample1_hmmer_results.tbl"


def test_glimmer_and_eggnog_chain_through_predictions(ctx):
    glimmer.run_glimmer(SAMPLE, OUT_DIR, {"icm": "/ref/glimmer/model.icm"}, ctx)
    assert _cmd(ctx) == ["glimmer3", "-o", "30", "-g", "150", "-t", "50", SAMPLE.file,
                         "/ref/glimmer/model.icm", OUT_DIR + "/sample1"]
    eggnog.run_eggnog(SAMPLE, OUT_DIR, {}, ctx)
    cmd = _cmd(ctx)
    assert cmd[cmd.index("-i") + 1] == OUT_DIR + "/sample1.predict"
    assert cmd[cmd.index("--cpu") + 1] == "6"


class TrainingRunner(FakeRunner):
    """Writes the files Glimmer training commands would produce."""
    def __call__(self, cmd, cwd=None, env=None, stdout_file=None, stdin_file=None):
        result = super(TrainingRunner, self).__call__(cmd, cwd, env, stdout_file, stdin_file)
        cmd = [str(x) for x in cmd]
        if cmd[0] == "long-orfs":
            out_file = cmd[-1]
        elif cmd[0] == "build-icm":
            out_file = cmd[-1]
        else:
            return result
        with open(out_file, "w") as out_handle:
            out_handle.write("trained\n")
        return result


def test_train_icm_runs_training_chain_once(ctx, tmp_path):
    ctx.runner = TrainingRunner()
    ref_file = str(tmp_path / "train.fna")
    icm_file = glimmer.train_icm(ref_file, ctx)
    assert icm_file == os.path.join(ctx.ref_dir, "glimmer", "type_strain_genome.icm")
    assert os.path.getsize(icm_file) > 0
    assert ctx.runner.programs == ["long-orfs", "extract", "build-icm"]
    build = ctx.runner.calls[-1]
    assert build["stdin_file"] == ctx.runner.calls[1]["stdout_file"]
    glimmer.train_icm(ref_file, ctx)
    assert len(ctx.runner.calls) == 3
