"""Main entry point for the bacterial genome annotation pipeline.

Validates inputs, sets up the output tree and logging, checks machine
resources and then runs the four annotation stages in order, stopping
at the first failure.
"""
import argparse
import os
import sys
import traceback

from bacanno import log
from bacanno.errors import InvalidInputError, PipelineError
from bacanno.log import logger
from bacanno.pipeline import config_utils, run_info, sample, stages, version
from bacanno.provenance import do, profile, system

DEFAULT_INPUT_DIR = "./input_fasta"
DEFAULT_OUTPUT_DIR = "./output_annotation"
DEFAULT_THREADS = 8

def run_main(input_dir=DEFAULT_INPUT_DIR, output_dir=DEFAULT_OUTPUT_DIR, num_cores=DEFAULT_THREADS,
             config_file=None, runner=None, base_env=None, stream=None):
    """Run the annotation pipeline, returning the process exit status.

    Raises InvalidInputError, before creating any output, when the input
    directory is missing or empty. `runner` replaces the process runner
    used for external tools and `base_env` the environment they start from.
    """
    input_dir = os.path.abspath(input_dir)
    output_dir = os.path.abspath(output_dir)
    run_info.validate_input(input_dir)
    config, config_file = config_utils.load_system_config(config_file)
    all_stages = stages.get_stages(config)
    dirs = run_info.setup_directories(output_dir, all_stages)
    run = run_info.PipelineRun(input_dir, output_dir, int(num_cores),
                               log.get_log_file(dirs["logs"]))
    handler = log.setup_local_logging(run.log_file, stream)
    try:
        logger.info("System YAML configuration: %s" % config_file)
        return execute(run_info.RunContext(run, config, runner, base_env), all_stages)
    finally:
        log.close_local_logging(handler)

def execute(ctx, all_stages):
    """Run preflight checks and every stage, returning the exit status.
    """
    logger.info("Annotating sequences in %s with %s threads" % (ctx.run.input_dir, ctx.run.num_cores))
    system.check_resources(ctx)
    try:
        for stage in all_stages:
            with profile.report(stage.label, ctx.run.output_dir):
                sample.run_stage(stage, ctx)
    except PipelineError as e:
        logger.error(_failure_msg(e, sys.exc_info()[2]))
        return _exit_status(e.exitcode)
    except KeyboardInterrupt:
        logger.error("Pipeline interrupted")
        raise
    logger.info("Pipeline completed successfully!")
    logger.info("Results are available in: %s" % ctx.run.output_dir)
    return 0

def _failure_msg(e, tb):
    """Describe a failure with the step it was raised from.

    Frames inside the command runner are skipped, so tool failures point
    at the wrapper that built the command.
    """
    frames = [f for f in traceback.extract_tb(tb)
              if os.path.abspath(f[0]) != os.path.abspath(do.__file__)]
    if frames:
        fname, lineno = frames[-1][0], frames[-1][1]
        return "%s [%s:%s]" % (e.describe(), os.path.basename(fname), lineno)
    return e.describe()

def _exit_status(exitcode):
    # processes killed by a signal report negative codes
    if exitcode < 0:
        return 128 - exitcode
    return exitcode or 1

# ## Command line

def parse_cl_args(in_args):
    """Parse input commandline arguments, returning the parser and arguments.
    """
    description = "Annotate bacterial genomes with Prokka, Barrnap, GeMoMa/HMMER and Glimmer/EggNOG."
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument("-v", "--version", help="Print current version",
                        action="store_true")
    subparsers = parser.add_subparsers(dest="command")
    run_parser = subparsers.add_parser("run", help="Run the annotation pipeline")
    run_parser.add_argument("input_dir", nargs="?", default=DEFAULT_INPUT_DIR,
                            help="Directory containing input FASTA files (default: %s)"
                            % DEFAULT_INPUT_DIR)
    run_parser.add_argument("output_dir", nargs="?", default=DEFAULT_OUTPUT_DIR,
                            help="Directory for output files (default: %s)" % DEFAULT_OUTPUT_DIR)
    run_parser.add_argument("num_cores", nargs="?", type=int, default=DEFAULT_THREADS,
                            help="Number of CPU threads to use (default: %s)" % DEFAULT_THREADS)
    run_parser.add_argument("--config",
                            help="YAML configuration overriding environments, references and resources")
    args = parser.parse_args(in_args)
    if args.command == "run" and args.num_cores < 1:
        run_parser.error("Number of threads must be at least 1, got %s" % args.num_cores)
    return parser, run_parser, args

def main(in_args=None):
    parser, run_parser, args = parse_cl_args(sys.argv[1:] if in_args is None else in_args)
    if args.version:
        print(version.__version__)
        return 0
    if args.command != "run":
        parser.print_help()
        return 1
    try:
        return run_main(args.input_dir, args.output_dir, args.num_cores, args.config)
    except InvalidInputError as e:
        sys.stderr.write("ERROR: %s\n" % e)
        run_parser.print_help()
        return 1

if __name__ == "__main__":
    sys.exit(main())
