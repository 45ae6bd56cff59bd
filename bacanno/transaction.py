"""Handle file based transactions allowing safe restarts at any point.

To handle interrupts, output files are written to temporary locations
during processing and moved to the final location when finished. A final
path therefore only exists once it is complete.
"""
import contextlib
import os
import shutil
import tempfile

import toolz as tz

from bacanno import utils

DEFAULT_TMP = "bacannotx"

@contextlib.contextmanager
def tx_tmpdir(config=None, base_dir=None):
    """Context manager to create and remove a transactional temporary directory.

    Uses the configured temporary directory (resources: tmp: dir), or a
    `bacannotx` directory inside `base_dir` or the current directory.
    """
    base_dir = base_dir or os.getcwd()
    tmpdir_base = utils.get_abspath(_get_base_tmpdir(config, base_dir))
    utils.safe_makedir(tmpdir_base)
    tmp_dir = tempfile.mkdtemp(dir=tmpdir_base)
    try:
        yield tmp_dir
    finally:
        utils.remove_safe(tmp_dir)

def _get_base_tmpdir(config, fallback_base_dir):
    config_tmpdir = tz.get_in(("resources", "tmp", "dir"), config)
    return config_tmpdir or os.path.join(fallback_base_dir, DEFAULT_TMP)

@contextlib.contextmanager
def file_transaction(config, out_file):
    """Wrap file generation in a transaction, moving to output if finishes.

    The temporary file is created next to the output, so the final move
    stays on the same filesystem.
    """
    with tx_tmpdir(config, os.path.dirname(os.path.abspath(out_file))) as tmpdir:
        tx_file = os.path.join(tmpdir, os.path.basename(out_file))
        yield tx_file
        if os.path.exists(tx_file):
            _move_tmp_file(tx_file, out_file)

def _move_tmp_file(safe, orig):
    utils.safe_makedir(os.path.dirname(os.path.abspath(orig)))
    want_size = utils.get_size(safe)
    shutil.move(safe, orig)
    transfer_size = utils.get_size(orig)
    assert want_size == transfer_size, (
        "File copy error: file on temporary storage ({}) size {} bytes "
        "does not equal size after transfer ({}) size {} bytes".format(
            safe, want_size, orig, transfer_size))
