"""Retrieve run information: inputs to process, output layout and run context.
"""
import collections
import os

from bacanno import utils
from bacanno.errors import InvalidInputError
from bacanno.log import DEFAULT_LOG_DIR
from bacanno.provenance import do

SEQUENCE_EXT = ".fasta"
REF_DIR = "ref"

PipelineRun = collections.namedtuple("PipelineRun", ["input_dir", "output_dir", "num_cores",
                                                     "log_file"])
Sample = collections.namedtuple("Sample", ["name", "file"])


class RunContext(object):
    """Everything a stage needs to execute, passed explicitly to each call.

    Holds the run, system configuration, the process runner used for
    external tools and the currently active tool environment, if any.
    """
    def __init__(self, run, config, runner=None, base_env=None):
        self.run = run
        self.config = config
        self.runner = runner or do.invoke
        self.base_env = dict(os.environ if base_env is None else base_env)
        self.activation = None
        self.env_prefixes = {}
        # local paths of reference datasets already resolved in this run
        self.fetched = set()

    @property
    def environ(self):
        """Process environment for tool invocations.
        """
        if self.activation is not None:
            return self.activation.env
        return self.base_env

    @property
    def ref_dir(self):
        return os.path.join(self.run.output_dir, REF_DIR)

    def sample_dir(self, stage, sample):
        return os.path.join(self.run.output_dir, stage.subdir, sample.name)


def validate_input(input_dir):
    """Ensure the input directory exists and has something to process.
    """
    if not os.path.isdir(input_dir):
        raise InvalidInputError("Input directory not found: %s" % input_dir)
    if not utils.is_nonempty_dir(input_dir):
        raise InvalidInputError("Input directory is empty: %s" % input_dir)
    return input_dir

def organize_samples(input_dir):
    """Retrieve samples for every sequence file directly inside the input directory.

    Files with other extensions and subdirectories are ignored. Samples are
    sorted by file name so processing order and logs are reproducible.
    """
    samples = []
    for fname in sorted(os.listdir(input_dir)):
        in_file = os.path.join(input_dir, fname)
        if fname.endswith(SEQUENCE_EXT) and os.path.isfile(in_file):
            samples.append(Sample(fname[:-len(SEQUENCE_EXT)], os.path.abspath(in_file)))
    return samples

def setup_directories(output_dir, stages):
    """Create the output tree: logs, reference cache and one directory per stage.
    """
    dirs = {"output": utils.safe_makedir(output_dir),
            "logs": utils.safe_makedir(os.path.join(output_dir, DEFAULT_LOG_DIR)),
            "ref": utils.safe_makedir(os.path.join(output_dir, REF_DIR))}
    for stage in stages:
        dirs[stage.name] = utils.safe_makedir(os.path.join(output_dir, stage.subdir))
    return dirs
