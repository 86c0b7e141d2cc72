from datetime import datetime
import json
import logging
from logging.handlers import RotatingFileHandler
import os
from pathlib import Path


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": datetime.now().isoformat(),
            "source": getattr(record, "args")["source"],
            "took_s": getattr(record, "args")["took"],
            # log true/false depending on if the logging call was made when an exception has occurred
            "error": bool(record.exc_info),
        }
        if record.exc_info and record.exc_info[1] is not None:
            payload["message"] = str(record.exc_info[1])
        return json.dumps(payload, ensure_ascii=False)


def setup_compile_logger(logging_dir: str):
    Path(logging_dir).mkdir(exist_ok=True)
    logger = logging.getLogger("compile")
    logger.propagate = False
    logger.setLevel("INFO")
    h = RotatingFileHandler(os.path.join(logging_dir, "compile.jsonl"), maxBytes=50000000)
    h.setFormatter(JSONFormatter())
    logger.addHandler(h)


def get_compile_logger():
    return logging.getLogger("compile")
