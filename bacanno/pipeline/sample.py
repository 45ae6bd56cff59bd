"""Run a single annotation stage over all samples.
"""
from bacanno import install, setpath, utils
from bacanno.errors import ToolInvocationError
from bacanno.log import logger
from bacanno.pipeline import run_info

def run_stage(stage, ctx):
    """Run every tool of a stage on each sample inside the stage's environment.

    The environment is released on every exit path. The first failing tool
    aborts the stage; remaining samples are not processed.
    """
    install.ensure_env(stage.env, ctx)
    with setpath.activate(stage.env.name, ctx):
        install.check_commands(stage.commands, ctx)
        try:
            prep = stage.prepare(ctx) if stage.prepare else {}
            samples = run_info.organize_samples(ctx.run.input_dir)
            if not samples:
                logger.info("No %s files found in %s" % (run_info.SEQUENCE_EXT, ctx.run.input_dir))
            for sample in samples:
                out_dir = utils.safe_makedir(ctx.sample_dir(stage, sample))
                for tool in stage.tools:
                    tool(sample, out_dir, prep, ctx)
        except ToolInvocationError as e:
            if e.stage is None:
                e.stage = stage.name
            raise
    return samples
