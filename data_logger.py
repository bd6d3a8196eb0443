# data_logger.py
import csv
import logging
import os
from datetime import datetime

from metrics.aggregator import MetricsFrame

logger = logging.getLogger(__name__)


class DataLogger:
    """
    Records tracker events and metric frames to daily CSV files.
    Creates new files each day under the configured log directory:
    '<date>_events.csv' and '<date>_metrics.csv'.
    """

    def __init__(self, log_dir="logs"):
        """
        Initialize the logger and ensure the log directory exists.
        """
        self.log_dir = log_dir
        os.makedirs(self.log_dir, exist_ok=True)
        self.current_date = None
        self.events_path = None
        self.metrics_path = None
        self._update_log_files()

    def _update_log_files(self):
        """
        Create or switch to new log files when the date changes.
        """
        today = datetime.now().strftime("%Y-%m-%d")
        if today != self.current_date:
            self.current_date = today
            self.events_path = os.path.join(self.log_dir, f"{today}_events.csv")
            self.metrics_path = os.path.join(self.log_dir, f"{today}_metrics.csv")

            self._ensure_header(self.events_path, ["Timestamp", "Event Type", "Details"])
            self._ensure_header(self.metrics_path, MetricsFrame.field_names())

    @staticmethod
    def _ensure_header(path, header):
        if not os.path.exists(path):
            with open(path, mode="w", newline="") as file:
                csv.writer(file).writerow(header)

    def log_event(self, event_type, details=""):
        """
        Log an event with the current timestamp.
        """
        self._update_log_files()
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        with open(self.events_path, mode="a", newline="") as file:
            csv.writer(file).writerow([timestamp, event_type, details])

        logger.info("%s: %s", event_type, details)

    def log_metrics(self, frame):
        """
        Append one MetricsFrame as a CSV row.
        """
        self._update_log_files()
        row = frame.to_dict()
        with open(self.metrics_path, mode="a", newline="") as file:
            csv.writer(file).writerow([row[name] for name in MetricsFrame.field_names()])
