import logging
import os
from collections import namedtuple
from datetime import datetime

from colorama import Fore, Style, init
from rich.console import Console

init(autoreset=True)

ACTIVITY_FILE_PATH = os.path.expanduser("~/.local/share/activitycal/activity.log")
LOG_DIR = os.path.expanduser("~/.cache/activitycal")
LOG_FILENAME = "activitycal.log"

TRACE_LEVEL_NUM = 5
logging.addLevelName(TRACE_LEVEL_NUM, "TRACE")


class MyLogger(logging.Logger):
    def trace(self, message, *args, **kws):
        if self.isEnabledFor(TRACE_LEVEL_NUM):
            self._log(TRACE_LEVEL_NUM, message, args, **kws)


logging.setLoggerClass(MyLogger)

err_console = Console(stderr=True)

Activity = namedtuple("Activity", ["time", "topic"])


def setup_logging(log_level, log_filename=LOG_FILENAME):
    log_file_path = os.path.join(LOG_DIR, log_filename)

    logger = logging.getLogger(__name__)
    logger.setLevel(log_level)

    if logger.hasHandlers():
        logger.handlers.clear()

    try:
        os.makedirs(LOG_DIR, exist_ok=True)
        handler = logging.FileHandler(log_file_path)
        formatter = logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    except OSError as e:
        print(
            f"{Fore.RED}Failed to configure logging to '{log_file_path}': {e}{Style.RESET_ALL}"
        )
        logger.addHandler(logging.NullHandler())

    return logger


def read_activity_file(file_path, logger):
    file_path = os.path.expanduser(file_path)
    logger.info(f"Attempting to read activity file: {file_path}")
    if not os.path.exists(file_path):
        message = f"Warning: Activity file not found at '{file_path}'."
        print(f"{Fore.YELLOW}{message}{Style.RESET_ALL}")
        logger.warning(message)
        return []

    try:
        with open(file_path) as f:
            lines = f.readlines()
        lines = [line.rstrip("\n") for line in lines]
        logger.info(f"Successfully read {len(lines)} lines from file.")
        return lines
    except OSError as e:
        message = f"Error reading activity file '{file_path}': {e}"
        print(f"{Fore.RED}{message}{Style.RESET_ALL}")
        logger.error(message)
        return []


def parse_activity(lines, logger):
    """
    Turns activity log lines into Activity records.

    Each line holds an ISO-8601 timestamp optionally followed by a topic:
        2020-05-30T14:02:11 git
        2020-05-30T09:00+02:00
        2020-05-31
        2020-05-30T22:15:00Z
    Blank lines and '#' comments are ignored. Timezone offsets are dropped so
    the event stays on the date it was recorded on.
    """
    logger.info(f"Starting to parse {len(lines)} activity lines.")
    activities = []

    for line_number, line in enumerate(lines, start=1):
        cleaned_line = line.strip()
        if not cleaned_line or cleaned_line.startswith("#"):
            continue

        logger.trace(f"Processing line {line_number}: '{line}'")
        parts = cleaned_line.split(None, 1)
        timestamp = parts[0]
        topic = parts[1].strip() if len(parts) > 1 else None

        if timestamp.endswith(("Z", "z")):
            timestamp = timestamp[:-1] + "+00:00"

        try:
            time = datetime.fromisoformat(timestamp)
        except ValueError:
            logger.warning(f"Skipping line {line_number}, invalid timestamp: '{line}'")
            continue

        activities.append(Activity(time=time.replace(tzinfo=None), topic=topic))

    logger.info(f"Parsing complete. Found {len(activities)} activity records.")
    return activities


def query_activity(activities, since, until, topic=None):
    """Returns the activities in [since, until), oldest first.

    until=None leaves the range open at the top.
    """
    selected = [
        activity
        for activity in activities
        if since <= activity.time
        and (until is None or activity.time < until)
        and (topic is None or activity.topic == topic)
    ]
    selected.sort(key=lambda activity: activity.time)
    return selected
