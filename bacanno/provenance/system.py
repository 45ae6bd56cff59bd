"""Identify system resources and check them against pipeline requirements.

The check is advisory: shortfalls are logged as warnings and the run goes on.
"""
import os
import socket

import psutil

from bacanno.log import logger
from bacanno.pipeline import datadict as dd

BYTES_IN_GIG = 1073741824.0

def machine_info(path="/"):
    """Retrieve available memory and free disk space on the filesystem holding `path`.
    """
    return {"memory": float("%.1f" % (psutil.virtual_memory().available / BYTES_IN_GIG)),
            "disk": float("%.1f" % (psutil.disk_usage(_existing_parent(path)).free / BYTES_IN_GIG)),
            "cores": psutil.cpu_count(),
            "name": socket.gethostname()}

def _existing_parent(path):
    path = os.path.abspath(path)
    while not os.path.exists(path):
        path = os.path.dirname(path)
    return path

def check_resources(ctx, required_memory=None, required_disk=None):
    """Compare available memory and disk with recommended minimums.

    Returns the warning messages, which are also written to the run log.
    """
    if required_memory is None:
        required_memory = dd.get_required_memory(ctx.config)
    if required_disk is None:
        required_disk = dd.get_required_disk(ctx.config)
    minfo = machine_info(ctx.run.output_dir)
    warnings = []
    if minfo["memory"] < required_memory:
        warnings.append("Available memory (%s GB) is less than recommended (%s GB)"
                        % (minfo["memory"], required_memory))
    if minfo["disk"] < required_disk:
        warnings.append("Available disk space (%s GB) is less than recommended (%s GB)"
                        % (minfo["disk"], required_disk))
    for msg in warnings:
        logger.warning(msg)
    if minfo["cores"] and ctx.run.num_cores > minfo["cores"]:
        logger.info("Requested %s threads on a machine with %s cores"
                    % (ctx.run.num_cores, minfo["cores"]))
    return warnings
