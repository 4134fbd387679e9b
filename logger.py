import json
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

LOGGER_NAME = "pathfind_sanctum"

# Attributes every LogRecord carries; anything else arrived through extra={}
STANDARD_ATTRS = set(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__.keys()
) | {"message", "asctime"}


class JSONFormatter(logging.Formatter):
    """Formats each record as one JSON object, keeping structured extras."""

    def format(self, record):
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for attr_name, attr_value in record.__dict__.items():
            if attr_name not in STANDARD_ATTRS and not attr_name.startswith("_"):
                log_data[attr_name] = attr_value

        return json.dumps(log_data, default=str)


class HumanReadableFormatter(logging.Formatter):
    """Short console lines for the events a player cares about."""

    def format(self, record):
        message = record.getMessage()

        if record.levelname == "DEBUG":
            return None

        if record.levelname in ["ERROR", "WARNING"]:
            return f"{record.levelname}: {message}"

        event_type = getattr(record, "event_type", None)

        if event_type == "run_started":
            run_id = getattr(record, "run_id", "unknown")
            return f"\nNEW SANCTUM RUN: {run_id}"

        elif event_type == "cycle_completed":
            cycle = getattr(record, "cycle", "?")
            path_length = getattr(record, "path_length", 0)
            path_weight = getattr(record, "path_weight", 0.0)
            return f"Cycle {cycle}: best path {path_length} rooms, weight {path_weight:.0f}"

        elif event_type == "best_path_found":
            path = getattr(record, "path", "")
            return f"  Best path: {path}" if path else f"  {message}"

        elif event_type == "layout_invalid":
            reason = getattr(record, "reason", message)
            return f"  Layout check: {reason}"

        elif event_type in ["weight_map_built", "weight_map_cleared", "edge_skipped"]:
            return None

        return message


class FilteringStreamHandler(logging.StreamHandler):
    """Stream handler that drops records the formatter hides."""

    def emit(self, record):
        try:
            msg = self.format(record)
            if msg is not None:
                self.stream.write(msg + self.terminator)
                self.flush()
        except Exception:
            self.handleError(record)


class FilteringFileHandler(logging.FileHandler):
    """File handler that drops records the formatter hides."""

    def emit(self, record):
        try:
            msg = self.format(record)
            if msg is not None:
                if self.stream is None:
                    self.stream = self._open()
                self.stream.write(msg + self.terminator)
                self.flush()
        except Exception:
            self.handleError(record)


def setup_logging(
    log_file: Optional[str] = None,
    json_log_file: Optional[str] = None,
    log_level: int = logging.INFO,
) -> logging.Logger:
    """
    Set up the path finder logger.

    Args:
        log_file: Optional path for a human-readable log file
        json_log_file: Optional path for a JSON lines log file
        log_level: Logging level (default: INFO)

    Returns:
        The configured "pathfind_sanctum" logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(log_level)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    console_handler = FilteringStreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(HumanReadableFormatter())
    logger.addHandler(console_handler)

    if log_file:
        file_handler = FilteringFileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setLevel(log_level)
        file_handler.setFormatter(HumanReadableFormatter())
        logger.addHandler(file_handler)

    if json_log_file:
        json_handler = logging.FileHandler(json_log_file, mode="a", encoding="utf-8")
        json_handler.setLevel(log_level)
        json_handler.setFormatter(JSONFormatter())
        json_handler.is_json_handler = True
        logger.addHandler(json_handler)

    return logger


def parse_json_logs(json_log_file: str) -> List[Dict[str, Any]]:
    """Parse a JSON log file into a list of log entries."""
    logs = []
    with open(json_log_file, "r", encoding="utf-8") as f:
        for line in f:
            try:
                logs.append(json.loads(line.strip()))
            except json.JSONDecodeError:
                continue
    return logs
