"""Timing of pipeline stages, logged and recorded in a metrics table.
"""
import contextlib
import datetime
import os

from bacanno.log import logger

METRICS_FILE = "performance_metrics.tsv"
METRICS_HEADER = ["stage", "start", "end", "seconds"]

@contextlib.contextmanager
def report(label, output_dir=None):
    """Log start and completion of a stage, recording elapsed time on success.
    """
    start = datetime.datetime.now()
    logger.info("Starting %s" % label)
    yield None
    end = datetime.datetime.now()
    elapsed = (end - start).total_seconds()
    logger.info("Completed %s in %.1f seconds" % (label, elapsed))
    if output_dir:
        _write_metrics(os.path.join(output_dir, METRICS_FILE), label, start, end, elapsed)

def _write_metrics(metrics_file, label, start, end, elapsed):
    is_new = not os.path.exists(metrics_file)
    with open(metrics_file, "a") as out_handle:
        if is_new:
            out_handle.write("\t".join(METRICS_HEADER) + "\n")
        out_handle.write("\t".join([label, start.isoformat(timespec="seconds"),
                                    end.isoformat(timespec="seconds"),
                                    "%.1f" % elapsed]) + "\n")
