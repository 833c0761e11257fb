"""
Payment Logger — writes timestamped lines to console and log file.
Use `alog` from async code so the file write runs in the threadpool.
"""
import os
from datetime import datetime

from fastapi.concurrency import run_in_threadpool

from app.config import get_settings


def log(component: str, message: str, filename: str = "payments.log"):
    """Internal logger — writes to console and log file."""
    ts = datetime.now().isoformat()
    line = f"{ts} - {component}: {message}"
    print(line)
    log_dir = get_settings().LOG_DIR
    try:
        os.makedirs(log_dir, exist_ok=True)
        with open(os.path.join(log_dir, filename), "a") as f:
            f.write(line + "\n")
    except OSError as e:
        print(f"{ts} - LOGGER: cannot write {filename} in {log_dir}: {e}")


async def alog(component: str, message: str, filename: str = "payments.log"):
    await run_in_threadpool(log, component, message, filename)
