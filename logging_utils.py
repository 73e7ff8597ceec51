#!/usr/bin/env python3
"""Logging utilities for github-to-gitlab."""

import os
import sys
import time
from pathlib import Path
from typing import List, Optional, Sequence, TextIO

import colorama

from config import LOG_FILE_PREFIX
from security import SecurityValidator

# Initialize colorama for cross-platform colored output
colorama.init(autoreset=True)


class Logger:
    """Colored console output mirrored into the session log file."""

    PROCESS_NAME = "github-to-gitlab"

    _log_file: Optional[TextIO] = None
    _log_path: Optional[Path] = None
    _secrets: List[str] = []

    @classmethod
    def register_secret(cls, secret: str) -> None:
        """Redact this exact value from every message from now on."""
        if secret and secret not in cls._secrets:
            cls._secrets.append(secret)

    @classmethod
    def open_session_log(cls, directory: Path) -> Path:
        """Create the timestamped, append-only log file for this run."""
        if cls._log_file is not None:
            return cls._log_path
        stamp = time.strftime("%Y%m%d_%H%M%S")
        path = Path(directory) / f"{LOG_FILE_PREFIX}{stamp}.log"
        cls._log_file = open(path, "a", encoding="utf-8")
        cls._log_path = path
        cls._write_file("session", f"log opened by {cls._get_header()}")
        return path

    @classmethod
    def close_session_log(cls) -> None:
        if cls._log_file is not None:
            cls._log_file.close()
        cls._log_file = None
        cls._secrets.clear()

    @classmethod
    def log_path(cls) -> Optional[Path]:
        return cls._log_path

    @classmethod
    def debug(cls, *messages: str) -> None:
        cls._write_stdout(colorama.Fore.LIGHTBLACK_EX, "debug", *messages)

    @classmethod
    def info(cls, *messages: str) -> None:
        cls._write_stdout(colorama.Fore.CYAN, "info", *messages)

    @classmethod
    def success(cls, *messages: str) -> None:
        cls._write_stdout(colorama.Fore.GREEN, "info", *messages)

    @classmethod
    def warn(cls, *messages: str) -> None:
        cls._write_stdout(colorama.Fore.YELLOW, "warn", *messages)

    @classmethod
    def error(cls, *messages: str) -> None:
        cls._write_stderr(colorama.Fore.RED, "error", *messages)

    @classmethod
    def step(cls, message: str, ok: bool) -> None:
        """Report the outcome of one step as an inline done/failed status."""
        if ok:
            status = f"{colorama.Fore.GREEN}done{colorama.Style.RESET_ALL}"
        else:
            status = f"{colorama.Fore.RED}failed{colorama.Style.RESET_ALL}"
        line = cls._sanitize(message)
        sys.stdout.write(
            f"{colorama.Fore.CYAN}{cls._get_header()}{colorama.Style.RESET_ALL} "
            f"{line} ... {status}\n"
        )
        cls._write_file("step", f"{line} ... {'done' if ok else 'failed'}")

    @classmethod
    def security_event(cls, event_type: str, details: str) -> None:
        """Record security events (credential handling) in the session log."""
        cls._write_file(f"SECURITY:{event_type}", cls._sanitize(details))

    @classmethod
    def tool_output(cls, cmd: Sequence[str], output: Optional[str]) -> None:
        """Append the error stream of an external tool to the session log only."""
        command = cls._sanitize(" ".join(str(part) for part in cmd))
        cls._write_file("tool", f"$ {command}")
        if output:
            for line in output.rstrip().splitlines():
                cls._write_file("tool", cls._sanitize(line))

    @classmethod
    def _sanitize(cls, message: str) -> str:
        return SecurityValidator.sanitize_for_logging(str(message), cls._secrets)

    @classmethod
    def _write_stdout(cls, color: str, level: str, *messages: str) -> None:
        message = cls._join(*messages)
        sys.stdout.write(cls._format_line(color, message) + "\n")
        cls._write_file(level, message)

    @classmethod
    def _write_stderr(cls, color: str, level: str, *messages: str) -> None:
        message = cls._join(*messages)
        sys.stderr.write(cls._format_line(color, message) + "\n")
        cls._write_file(level, message)

    @classmethod
    def _write_file(cls, level: str, message: str) -> None:
        if cls._log_file is None:
            return
        timestamp = time.strftime("%Y-%m-%d %H:%M:%S")
        cls._log_file.write(f"{timestamp} [{level}] {message}\n")
        cls._log_file.flush()

    @classmethod
    def _get_header(cls) -> str:
        return f"[{cls.PROCESS_NAME}:{os.getpid()}]"

    @classmethod
    def _join(cls, *messages: str) -> str:
        return cls._sanitize(" ".join(str(m) for m in messages))

    @classmethod
    def _format_line(cls, color: str, message: str) -> str:
        header = cls._get_header()
        return f"{color}{header}{colorama.Style.RESET_ALL} {message}"
