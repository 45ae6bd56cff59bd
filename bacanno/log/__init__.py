"""Utility functionality for logging.

Run records go to a timestamped file in the output log directory and to
standard output. Command lines for every external tool go to a separate
commands log, which is the place to look when reproducing a failure.
"""
import datetime
import os
import sys

import logbook

from bacanno import utils

LOG_NAME = "bacanno"
DEFAULT_LOG_DIR = "logs"
FORMAT_STR = "[{record.time:%Y-%m-%d %H:%M:%S}] [{record.level_name}] {record.message}"

logger = logbook.Logger(LOG_NAME)
logger_cl = logbook.Logger(LOG_NAME + "-commands")

def _is_cl(record, _):
    return record.channel == LOG_NAME + "-commands"

def _not_cl(record, handler):
    return not _is_cl(record, handler)

class CloseableNestedSetup(logbook.NestedSetup):
    def close(self):
        for obj in self.objects:
            if hasattr(obj, "close"):
                obj.close()

def get_log_file(log_dir, start=None):
    """Name of the log file for a run started at `start`.
    """
    start = start or datetime.datetime.now()
    return os.path.join(log_dir, "pipeline_%s.log" % start.strftime("%Y%m%d_%H%M%S"))

def _create_log_handler(log_file, stream=None):
    logbook.set_datetime_format("local")
    handlers = [logbook.NullHandler()]
    if log_file:
        log_dir = utils.safe_makedir(os.path.dirname(log_file))
        handlers.append(logbook.FileHandler(log_file, format_string=FORMAT_STR,
                                            level="INFO", filter=_not_cl, bubble=True))
        handlers.append(logbook.FileHandler(os.path.join(log_dir, "commands.log"),
                                            format_string=FORMAT_STR, level="DEBUG",
                                            filter=_is_cl, bubble=True))
    handlers.append(logbook.StreamHandler(stream or sys.stdout, format_string=FORMAT_STR,
                                          level="INFO", filter=_not_cl, bubble=True))
    return CloseableNestedSetup(handlers)

def setup_local_logging(log_file=None, stream=None):
    """Setup logging for a run, directing messages to the run log and stdout.

    Returns the pushed handler; callers pop and close it when the run finishes.
    """
    handler = _create_log_handler(log_file, stream)
    handler.push_thread()
    return handler

def close_local_logging(handler):
    handler.pop_thread()
    handler.close()
