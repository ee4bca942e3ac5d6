# playground/utils/logger.py

import json
import logging
import os
import traceback

from playground import config

# Ensure the log directory exists, using the path from config
os.makedirs(config.LOGS_PATH, exist_ok=True)

access_log_file = os.path.join(config.LOGS_PATH, "access.log")
error_log_file = os.path.join(config.LOGS_PATH, "error.log")

formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(message)s", "%Y-%m-%d %H:%M:%S")


def setup_logger(name, log_file, level):
    """A helper function to set up a file logger."""
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.propagate = False  # Prevent duplicate logs in parent loggers

    # Avoid adding handlers if they already exist (e.g., during autoreload)
    if not logger.handlers:
        handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


access_logger = setup_logger("access", access_log_file, getattr(logging, config.LOG_LEVEL, logging.INFO))
error_logger = setup_logger("error", error_log_file, logging.ERROR)


def log_info(message):
    access_logger.info(message)


def log_exception(e: Exception, context: str = ""):
    error_logger.error(f"Exception in {context}: {type(e).__name__}: {e}\n{traceback.format_exc()}")


def json_response(handler, data: dict, status: int = 200):
    log_info(f"{handler.request.method} {handler.request.path} -> {status}")
    handler.set_status(status)
    handler.set_header("Content-Type", "application/json")
    handler.write(json.dumps(data, default=str))


def json_error(handler, error_code: str, message: str, status: int = 500):
    log_info(f"{handler.request.method} {handler.request.path} -> {status} | {message}")
    handler.set_status(status)
    handler.set_header("Content-Type", "application/json")
    handler.write(json.dumps({"error": {"code": error_code, "message": message}}))
