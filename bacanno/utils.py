"""Helpful utilities for building annotation pipelines.
"""
import copy
import os
import shutil
import time


def safe_makedir(dname):
    """Make a directory if it doesn't exist, handling concurrent race conditions.
    """
    if not dname:
        return dname
    num_tries = 0
    max_tries = 5
    while not os.path.exists(dname):
        # we could get an error here if multiple processes are creating
        # the directory at the same time
        try:
            os.makedirs(dname)
        except OSError:
            if num_tries > max_tries:
                raise
            num_tries += 1
            time.sleep(2)
    return dname

def file_exists(fname):
    """Check if a file exists and is non-empty.
    """
    try:
        return bool(fname) and os.path.exists(fname) and os.path.getsize(fname) > 0
    except OSError:
        return False

def get_size(path):
    """ Returns the size in bytes if `path` is a file,
        or the size of all files in `path` if it's a directory.
    """
    if os.path.isfile(path):
        return os.path.getsize(path)
    return sum(get_size(os.path.join(path, f)) for f in os.listdir(path))

def is_nonempty_dir(dname):
    return os.path.isdir(dname) and len(os.listdir(dname)) > 0

def splitext_plus(f):
    """Split on file extensions, allowing for zipped extensions.
    """
    base, ext = os.path.splitext(f)
    if ext in [".gz", ".bz2", ".zip"]:
        base, ext2 = os.path.splitext(base)
        ext = ext2 + ext
    return base, ext

def remove_safe(f):
    try:
        if os.path.isdir(f):
            shutil.rmtree(f)
        else:
            os.remove(f)
    except OSError:
        pass

def get_abspath(path, pardir=None):
    if pardir is None:
        pardir = os.getcwd()
    path = os.path.expandvars(os.path.expanduser(path))
    return os.path.normpath(os.path.join(pardir, path))

def deep_merge(base, update):
    """Merge nested dictionaries, with values in `update` taking precedence.
    """
    out = copy.deepcopy(base)
    for k, v in update.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = deep_merge(out[k], v)
        else:
            out[k] = copy.deepcopy(v)
    return out

def which(program, env=None):
    """ returns the path to an executable or None if it can't be found

    Searches the PATH of `env` when provided, otherwise the current process PATH.
    """
    def is_exe(fpath):
        return os.path.isfile(fpath) and os.access(fpath, os.X_OK)

    fpath, _ = os.path.split(program)
    if fpath:
        if is_exe(program):
            return program
    else:
        path = (env or os.environ).get("PATH", "")
        for d in path.split(os.pathsep):
            if not d:
                continue
            exe_file = os.path.join(d, program)
            if is_exe(exe_file):
                return exe_file
    return None
