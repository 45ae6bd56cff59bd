"""Exceptions raised while running the annotation pipeline.

Every fatal condition is a PipelineError carrying the exit code the
process should terminate with, so the top level can log it and exit.
"""


class PipelineError(Exception):
    exitcode = 1

    def describe(self):
        return str(self)


class InvalidInputError(PipelineError):
    """Input directory is missing or has nothing in it.
    """
    pass


class EnvironmentProvisionError(PipelineError):
    """A conda tool environment could not be created or is incomplete.
    """
    def __init__(self, env_name, msg, cmd=None, exitcode=None):
        super(EnvironmentProvisionError, self).__init__(msg)
        self.env_name = env_name
        self.cmd = cmd
        if exitcode:
            self.exitcode = exitcode

    def describe(self):
        if self.cmd:
            return ("Command failed with exit code %s while provisioning %s: %s"
                    % (self.exitcode, self.env_name, self.cmd))
        return "%s: %s" % (self.env_name, self)


class ReferenceFetchError(PipelineError):
    """Reference dataset could not be downloaded or decompressed.
    """
    def __init__(self, url, msg):
        super(ReferenceFetchError, self).__init__(msg)
        self.url = url

    def describe(self):
        return "Could not retrieve reference %s: %s" % (self.url, self)


class ToolInvocationError(PipelineError):
    """An external tool exited with a non-zero status.
    """
    def __init__(self, cmd, exitcode, stage=None, sample=None, output=""):
        super(ToolInvocationError, self).__init__(
            "Command failed with exit code %s: %s" % (exitcode, cmd))
        self.cmd = cmd
        self.exitcode = exitcode
        self.stage = stage
        self.sample = sample
        self.output = output

    def describe(self):
        where = " : ".join(x for x in [self.stage, self.sample] if x)
        return ("Command failed with exit code %s%s: %s"
                % (self.exitcode, " (%s)" % where if where else "", self.cmd))
