"""Centralize running of external commands, providing logging and tracking.

`invoke` is the only place a child process gets started. It reports what
happened as a CommandResult and never raises for a non-zero exit; `run`
is the checked wrapper the pipeline uses, turning failures into
ToolInvocationError with the stage and sample attached.
"""
import collections
import contextlib
import os
import subprocess

from bacanno import utils
from bacanno.errors import ToolInvocationError
from bacanno.log import logger, logger_cl

CommandResult = collections.namedtuple("CommandResult", ["exitcode", "stdout", "stderr"])

# exit status used by shells when a command cannot be found
NOT_FOUND_EXITCODE = 127

def cmd_str(cmd):
    return " ".join(str(x) for x in cmd)

def invoke(cmd, cwd=None, env=None, stdout_file=None, stdin_file=None):
    """Run a command to completion, returning exit code and trailing output.

    Without `stdout_file`, stdout and stderr are merged and reported as
    stdout. With it, stdout goes to the file and stderr is reported.
    Only the last 100 lines of reported output are kept.
    """
    cmd = [str(x) for x in cmd]
    tail = collections.deque(maxlen=100)
    with contextlib.ExitStack() as stack:
        stdin = stack.enter_context(open(stdin_file, "rb")) if stdin_file else subprocess.DEVNULL
        if stdout_file:
            stdout = stack.enter_context(open(stdout_file, "wb"))
            stderr = subprocess.PIPE
        else:
            stdout = subprocess.PIPE
            stderr = subprocess.STDOUT
        try:
            s = subprocess.Popen(cmd, cwd=cwd, env=env, stdin=stdin, stdout=stdout,
                                 stderr=stderr, close_fds=True)
        except OSError as e:
            return CommandResult(NOT_FOUND_EXITCODE, "", "%s: %s" % (cmd[0], e.strerror))
        stream = s.stderr if stdout_file else s.stdout
        for line in stream:
            line = line.decode("utf-8", errors="replace")
            if line.rstrip():
                tail.append(line)
                logger.debug(line.rstrip())
        stream.close()
        exitcode = s.wait()
    output = "".join(tail)
    if stdout_file:
        return CommandResult(exitcode, "", output)
    return CommandResult(exitcode, output, "")

def run(cmd, descr, ctx, stage=None, sample=None, cwd=None, stdout_file=None,
        stdin_file=None, checks=None):
    """Run the provided command, logging details and checking for errors.

    Uses the process runner and active tool environment of `ctx`.
    """
    if descr:
        logger.info(_descr_str(descr, sample))
    full_cmd = cmd_str(cmd)
    if stdin_file:
        full_cmd += " < %s" % stdin_file
    if stdout_file:
        full_cmd += " > %s" % stdout_file
    logger_cl.debug(full_cmd)
    result = ctx.runner(cmd, cwd=cwd, env=ctx.environ, stdout_file=stdout_file,
                        stdin_file=stdin_file)
    if result.exitcode != 0:
        output = result.stdout or result.stderr
        for line in output.splitlines()[-20:]:
            logger.debug(line)
        raise ToolInvocationError(full_cmd, result.exitcode, stage=stage,
                                  sample=sample.name if sample else None, output=output)
    # Check for problems not identified by exit codes
    for check in checks or []:
        if not check():
            raise ToolInvocationError(full_cmd, 1, stage=stage,
                                      sample=sample.name if sample else None,
                                      output="Expected output not produced")
    return result

def _descr_str(descr, sample):
    """Add the sample name to the description string.
    """
    if sample:
        descr = "{0} : {1}".format(descr, sample.name)
    return descr

# checks for validating run completed successfully

def file_nonempty(target_file):
    def check():
        ok = utils.file_exists(target_file)
        if not ok:
            logger.info("Did not find non-empty output file {0}".format(target_file))
        return ok
    return check
