"""Pytest fixtures and test helper functions"""
import json
import os

import pytest

from bacanno.pipeline import config_utils, run_info, stages
from bacanno.provenance import do


class FakeRunner(object):
    """Stands in for external tools, recording each command instead of running it.

    fail_on: called with the command list, returning True for commands
    that should exit with `exitcode`.
    """
    def __init__(self, fail_on=None, exitcode=1):
        self.calls = []
        self.fail_on = fail_on
        self.exitcode = exitcode

    def __call__(self, cmd, cwd=None, env=None, stdout_file=None, stdin_file=None):
        cmd = [str(x) for x in cmd]
        self.calls.append({"cmd": cmd, "cwd": cwd, "env": env,
                           "stdout_file": stdout_file, "stdin_file": stdin_file})
        if self.fail_on and self.fail_on(cmd):
            return do.CommandResult(self.exitcode, "", "tool failed")
        if stdout_file:
            with open(stdout_file, "w") as out_handle:
                out_handle.write("output\n")
        return do.CommandResult(0, "", "")

    @property
    def programs(self):
        return [c["cmd"][0] for c in self.calls]


@pytest.fixture
def config():
    return config_utils.load_system_config()[0]


@pytest.fixture
def runner():
    return FakeRunner()


@pytest.fixture
def input_dir(tmp_path):
    in_dir = tmp_path / "input_fasta"
    in_dir.mkdir()
    return in_dir


@pytest.fixture
def output_dir(tmp_path):
    return tmp_path / "output_annotation"


def add_samples(in_dir, names):
    for name in names:
        (in_dir / ("%s.fasta" % name)).write_text(">contig1\nACGTACGTACGT\n")


def make_ctx(input_dir, output_dir, config, runner=None, num_cores=4, base_env=None):
    run = run_info.PipelineRun(str(input_dir), str(output_dir), num_cores, None)
    return run_info.RunContext(run, config, runner,
                               {"PATH": "/usr/bin:/bin"} if base_env is None else base_env)


@pytest.fixture
def conda_envs(tmp_path, mocker, config):
    """Fake conda installation with an environment per stage holding its executables.

    Patches the conda environment listing to report them.
    """
    base = tmp_path / "conda"
    prefixes = {}
    for stage in stages.get_stages(config):
        prefix = base / "envs" / stage.env.name
        bin_dir = prefix / "bin"
        bin_dir.mkdir(parents=True)
        for cmd in stage.commands:
            exe = bin_dir / cmd
            exe.write_text("#!/bin/sh\n")
            exe.chmod(0o755)
        prefixes[stage.env.name] = str(prefix)
    listing = json.dumps({"envs": [str(base)] + sorted(prefixes.values())})
    check_output = mocker.patch("bacanno.install.subprocess.check_output",
                                return_value=listing)
    return {"prefixes": prefixes, "check_output": check_output}


@pytest.fixture
def cached_refs(output_dir, config):
    """Pre-populate the reference directory so no downloads or model training happen.
    """
    ref_dir = output_dir / "ref"
    (ref_dir / "glimmer").mkdir(parents=True)
    for info in config["references"].values():
        (ref_dir / info["file"]).write_text(">ref\nACGT\n")
    (ref_dir / "glimmer" / "type_strain_genome.icm").write_text("model\n")
    return ref_dir


@pytest.fixture
def no_network(mocker):
    return mocker.patch("bacanno.pipeline.genome.requests.get")


def stage_env_bin(call):
    return call["env"]["PATH"].split(os.pathsep)[0]
