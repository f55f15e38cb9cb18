import os
import sys
import json
import datetime as dt
import logging
from logging.handlers import TimedRotatingFileHandler
from typing import Any, Optional

import yaml
from jsonschema import validate, Draft202012Validator
from jsonschema.exceptions import ValidationError

# ---------- File helpers ----------

def load_file(path: str) -> str:
    with open(path, "r", encoding="utf-8") as f:
        return f.read()

def read_source(source: Any) -> str:
    """Return JavaScript text from a string or any object exposing ``read()``."""
    if hasattr(source, "read"):
        source = source.read()
    if isinstance(source, bytes):
        return source.decode("utf-8")
    return source if isinstance(source, str) else str(source)

def source_excerpt(source: Optional[str], limit: int = 80) -> str:
    if not source:
        return ""
    first = source.strip().splitlines()[0] if source.strip() else ""
    return first if len(first) <= limit else first[: limit - 3] + "..."

def write_output(artifact: str, path: Optional[str]) -> None:
    if not path or path == "-":
        sys.stdout.write(artifact)
        sys.stdout.write("\n")
        return
    parent = os.path.dirname(os.path.abspath(path))
    os.makedirs(parent, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(artifact)

# ---------- Options file ----------

def load_options_file(path: str) -> dict:
    data = yaml.safe_load(load_file(path))
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Options file must contain a mapping, got {type(data).__name__}")
    return data

def validate_options(options: dict):
    here = os.path.dirname(os.path.abspath(__file__))
    schema_path = os.path.join(here, "schemas", "options.schema.json")
    schema = json.loads(load_file(schema_path))
    try:
        validate(instance=options, schema=schema, cls=Draft202012Validator)
    except ValidationError as e:
        raise ValueError(f"Options validation error: {e.message} at {list(e.path)}") from e

# ---------- Logging ----------

_LOGGER_INITIALIZED = False

class JsonFormatter(logging.Formatter):
    def format(self, record):
        payload = {
            "ts": dt.datetime.fromtimestamp(record.created, dt.timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)

def _build_logger():
    global _LOGGER_INITIALIZED
    if _LOGGER_INITIALIZED:
        return

    level = os.getenv("LOG_LEVEL", "WARNING").upper()
    # File logging only when a directory is configured
    log_dir = os.getenv("LOG_DIR")
    json_mode = os.getenv("LOG_JSON", "false").lower() == "true"

    logger = logging.getLogger("jscompact")
    logger.setLevel(getattr(logging, level, logging.WARNING))

    if json_mode:
        fmt = JsonFormatter()
    else:
        fmt = logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")

    ch = logging.StreamHandler()
    ch.setLevel(logger.level)
    ch.setFormatter(fmt)
    logger.addHandler(ch)

    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        fh = TimedRotatingFileHandler(os.path.join(log_dir, "jscompact.log"), when="D", backupCount=7, encoding="utf-8")
        fh.setLevel(logger.level)
        fh.setFormatter(fmt)
        logger.addHandler(fh)

    _LOGGER_INITIALIZED = True

def get_logger(name: str = None) -> logging.Logger:
    _build_logger()
    return logging.getLogger(name if name else __name__)
