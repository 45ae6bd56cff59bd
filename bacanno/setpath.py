"""Activate a conda tool environment for the tools of a single stage.

Activation never touches the global os.environ. It builds a process
environment from the run context's base environment, with the stage
environment's bin directory first on PATH and every other conda
environment's bin directory removed, and installs it on the context
until released.
"""
import os

from bacanno import install
from bacanno.log import logger

def _prepend(original, to_prepend):
    """Prepend paths in a string representing a list of paths to another.

    original and to_prepend are expected to be strings representing
    os.pathsep-separated lists of filepaths.

    If to_prepend is None, original is returned.

    The list of paths represented in the returned value consists of the first of
    occurrences of each non-empty path in the list obtained by prepending the
    paths in to_prepend to the paths in original.

    examples:
    # Unix
    _prepend('/b:/d:/a:/d', '/a:/b:/c:/a') -> '/a:/b:/c:/d'
    _prepend('/a:/b:/a', '/a:/c:/c')       -> '/a:/c:/b'
    _prepend('/c', '/a::/b:/a')            -> '/a:/b:/c'
    _prepend('/a:/b:/a', None)             -> '/a:/b:/a'
    _prepend('/a:/b:/a', '')               -> '/a:/b'
    """
    if to_prepend is None:
        return original
    seen = set()
    components = []
    for path in _split_path_value(to_prepend) + _split_path_value(original):
        if path not in seen and path != '':
            components.append(path)
            seen.add(path)
    return os.pathsep.join(components)

def _remove(original, should_remove):
    """Remove paths matching `should_remove` from an os.pathsep-separated list.
    """
    return os.pathsep.join(p for p in _split_path_value(original) if p and not should_remove(p))

def _split_path_value(path_value):
    return [] if not path_value else path_value.split(os.pathsep)

def _is_conda_env_bin(path):
    """Identify bin directories of named conda environments (<base>/envs/<name>/bin).
    """
    path = os.path.normpath(path)
    return (os.path.basename(path) == "bin" and
            os.path.basename(os.path.dirname(os.path.dirname(path))) == "envs")

def isolated_env(env_name, prefix, ctx):
    """Build a process environment resolving executables against a single conda environment.
    """
    env = dict(ctx.base_env)
    other_bins = set(os.path.normpath(os.path.join(p, "bin")) for p in ctx.env_prefixes.values())
    def should_remove(p):
        return os.path.normpath(p) in other_bins or _is_conda_env_bin(p)
    env["PATH"] = _prepend(_remove(env.get("PATH", ""), should_remove),
                           os.path.join(prefix, "bin"))
    env["CONDA_PREFIX"] = prefix
    env["CONDA_DEFAULT_ENV"] = env_name
    return env


class ScopedActivation(object):
    """Handle to an active tool environment, released on leaving a `with` block.
    """
    def __init__(self, name, prefix, env, ctx):
        self.name = name
        self.prefix = prefix
        self.env = env
        self._ctx = ctx
        self._prior = ctx.activation
        self.released = False

    def release(self):
        if not self.released:
            logger.info("Deactivating Conda environment: %s" % self.name)
            self._ctx.activation = self._prior
            self.released = True

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.release()


def activate(env_name, ctx):
    """Switch executable resolution for tool invocations on `ctx` to `env_name`.
    """
    prefix = install.get_env_prefix(env_name, ctx)
    logger.info("Activating Conda environment: %s" % env_name)
    activation = ScopedActivation(env_name, prefix, isolated_env(env_name, prefix, ctx), ctx)
    ctx.activation = activation
    return activation
