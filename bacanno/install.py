"""Provision the isolated conda environments holding each stage's tools.

Environments are created once, with pinned package versions, and reused
on later runs. The pipeline never removes them.
"""
import collections
import json
import os
import subprocess

from bacanno import utils
from bacanno.errors import EnvironmentProvisionError
from bacanno.log import logger, logger_cl
from bacanno.pipeline import datadict as dd

ToolEnvironmentSpec = collections.namedtuple("ToolEnvironmentSpec", ["name", "packages"])

def env_from_config(config, key):
    """Build an environment specification from the system configuration.
    """
    info = dd.get_environment(config, key)
    return ToolEnvironmentSpec(info["name"], list(info.get("packages", [])))

def _get_conda_bin(ctx):
    return dd.get_conda_cmd(ctx.config)

def _get_conda_channels(ctx):
    out = []
    for c in dd.get_conda_channels(ctx.config):
        out.extend(["-c", c])
    return out

def _get_envs(ctx):
    """Retrieve prefixes of all existing conda environments.
    """
    cmd = [_get_conda_bin(ctx), "env", "list", "--json"]
    try:
        info = json.loads(subprocess.check_output(cmd, env=ctx.base_env))
    except (OSError, subprocess.CalledProcessError) as e:
        raise EnvironmentProvisionError("conda", "Could not list conda environments: %s" % e,
                                        cmd=" ".join(cmd),
                                        exitcode=getattr(e, "returncode", None))
    except ValueError as e:
        raise EnvironmentProvisionError("conda", "Unexpected output listing conda environments: %s" % e,
                                        cmd=" ".join(cmd))
    return info.get("envs", [])

def _find_env(env_name, envs):
    for prefix in envs:
        if os.path.basename(os.path.normpath(prefix)) == env_name:
            return prefix

def ensure_env(env_spec, ctx):
    """Create the conda environment for `env_spec` if it does not already exist.

    Returns the environment prefix, also remembered on the run context.
    """
    envs = _get_envs(ctx)
    prefix = _find_env(env_spec.name, envs)
    if prefix:
        logger.info("Conda environment %s already exists" % env_spec.name)
    else:
        logger.info("Creating Conda environment: %s" % env_spec.name)
        cmd = ([_get_conda_bin(ctx), "create", "--yes", "--name", env_spec.name] +
               _get_conda_channels(ctx) + list(env_spec.packages))
        logger_cl.debug(" ".join(cmd))
        try:
            subprocess.check_output(cmd, stderr=subprocess.STDOUT, env=ctx.base_env)
        except OSError as e:
            raise EnvironmentProvisionError(env_spec.name, "Could not run conda: %s" % e,
                                            cmd=" ".join(cmd))
        except subprocess.CalledProcessError as e:
            output = e.output.decode("utf-8", errors="replace") if isinstance(e.output, bytes) else e.output
            for line in (output or "").splitlines()[-20:]:
                logger.debug(line)
            raise EnvironmentProvisionError(env_spec.name, "Package installation failed",
                                            cmd=" ".join(cmd), exitcode=e.returncode)
        envs = _get_envs(ctx)
        prefix = _find_env(env_spec.name, envs)
        if not prefix:
            raise EnvironmentProvisionError(env_spec.name,
                                            "Environment not found after creation")
    ctx.env_prefixes[env_spec.name] = prefix
    return prefix

def get_env_prefix(env_name, ctx):
    """Retrieve the installation prefix of an environment, querying conda if needed.
    """
    if env_name not in ctx.env_prefixes:
        prefix = _find_env(env_name, _get_envs(ctx))
        if not prefix:
            raise EnvironmentProvisionError(env_name, "Conda environment does not exist")
        ctx.env_prefixes[env_name] = prefix
    return ctx.env_prefixes[env_name]

def check_commands(commands, ctx):
    """Ensure every required executable resolves in the active environment.
    """
    for cmd in commands:
        if not utils.which(cmd, ctx.environ):
            env_name = ctx.activation.name if ctx.activation else "base"
            logger.error("Required command not found: %s" % cmd)
            raise EnvironmentProvisionError(env_name, "Required command not found: %s" % cmd)
