"""Module: exiftool_wrapper.py

Author: Michael Economou
Date: 2026-10-12

This module provides a lightweight ExifTool wrapper using a persistent
'-stay_open True' process for fast metadata extraction. One process is
started per run and shared by all pipeline workers; requests are serialized
with a lock.

Each request is written to the process as an argument file:

    -json
    ...
    /path/to/file.jpg
    -echo4
    {ready7}
    -execute7

ExifTool answers on stdout followed by '{ready7}', and echoes '{ready7}' to
stderr once processing is complete. Both streams are read up to the marker,
stderr on a helper thread so neither pipe can fill up while the other is
being read.

Requires: exiftool installed and in PATH (or MEDIARENAME_EXIFTOOL set)
"""

from __future__ import annotations

import contextlib
import json
import subprocess
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from typing import IO, Any

from mediarename.config import EXIFTOOL_CLOSE_TIMEOUT, EXIFTOOL_READ_ARGS
from mediarename.core.errors import FatalStartupError
from mediarename.models.metadata_record import MetadataRecord
from mediarename.utils.logging.logger_factory import get_cached_logger
from mediarename.utils.shared.external_tools import ToolName, get_tool_path, get_tool_version

logger = get_cached_logger(__name__)


class ExifToolWrapper:
    """Persistent ExifTool process wrapper with thread-safe operations.

    Features:
    - Single long-lived process reused for every file
    - Thread-safe access via locking
    - Health monitoring and error tracking
    - Restart after the process dies unexpectedly
    - Graceful cleanup on shutdown

    Attributes:
        process: Subprocess running exiftool
        lock: Thread lock for safe concurrent access
        counter: Unique tag counter for commands

    """

    def __init__(self, exiftool_path: str | None = None) -> None:
        """Locate ExifTool and start the persistent process.

        Args:
            exiftool_path: Explicit executable path (PATH / env lookup if None)

        Raises:
            FatalStartupError: ExifTool cannot be found or started

        """
        try:
            self._exiftool_path = get_tool_path(ToolName.EXIFTOOL, exiftool_path)
        except FileNotFoundError as e:
            logger.error("[ExifToolWrapper] ExifTool not found: %s", e)
            raise FatalStartupError(f"ExifTool is required but not found: {e}") from e

        self.process: subprocess.Popen[str] | None = None
        self.lock = threading.Lock()
        self.counter = 0
        self._closed = False

        # Health tracking
        self._last_error: str | None = None
        self._consecutive_errors = 0

        self._stderr_reader = ThreadPoolExecutor(max_workers=1, thread_name_prefix="exiftool-stderr")

        self._start_process()

    def __enter__(self) -> ExifToolWrapper:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close(try_graceful=True)

    def __del__(self) -> None:
        with contextlib.suppress(Exception):
            self.close(try_graceful=False)

    @property
    def exiftool_path(self) -> str:
        return self._exiftool_path

    def _start_process(self) -> None:
        try:
            self.process = subprocess.Popen(
                [self._exiftool_path, "-stay_open", "True", "-@", "-"],
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
                bufsize=1,  # line buffered
            )
        except OSError as e:
            logger.error("[ExifToolWrapper] Cannot start %s: %s", self._exiftool_path, e)
            raise FatalStartupError(f"cannot start ExifTool: {e}") from e

        logger.debug(
            "[ExifToolWrapper] Started persistent ExifTool (pid %s)",
            self.process.pid,
            extra={"dev_only": True},
        )

    @staticmethod
    def is_available(exiftool_path: str | None = None) -> bool:
        """Check if ExifTool is available on the system."""
        try:
            path = get_tool_path(ToolName.EXIFTOOL, exiftool_path)
        except FileNotFoundError:
            logger.warning("[ExifToolWrapper] ExifTool not found")
            return False

        version = get_tool_version(path)
        if version:
            logger.debug("[ExifToolWrapper] ExifTool version: %s", version)
        return version is not None

    def extract(self, path: str) -> MetadataRecord:
        """Read the metadata of one file.

        Per-file failures never raise: they come back as a record whose
        ``error`` is set.

        Args:
            path: Absolute path of the file

        Returns:
            MetadataRecord for the file

        """
        with self.lock:
            if "\n" in path or "\r" in path:
                return self._failed(path, "file name contains a line break")

            if self._closed:
                return self._failed(path, "ExifTool wrapper is closed")

            if self.process is None or self.process.poll() is not None:
                logger.warning("[ExifToolWrapper] ExifTool process not running, restarting")
                try:
                    self._start_process()
                except FatalStartupError as e:
                    return self._failed(path, str(e))

            self.counter += 1
            marker = f"{{ready{self.counter}}}"
            args = [*EXIFTOOL_READ_ARGS, path, "-echo4", marker, f"-execute{self.counter}"]

            try:
                self.process.stdin.write("\n".join(args) + "\n")
                self.process.stdin.flush()
                stdout, stderr = self._read_response(marker)
            except (BrokenPipeError, OSError, EOFError, ValueError) as e:
                logger.error("[ExifToolWrapper] Lost ExifTool process while reading %s: %s", path, e)
                self._discard_process()
                return self._failed(path, f"ExifTool process failed: {e}")

            return self._build_record(path, stdout, stderr)

    def _read_response(self, marker: str) -> tuple[str, str]:
        """Read stdout and stderr up to the marker at the same time.

        stderr is drained on a helper thread so a flood of warnings cannot
        fill its pipe while stdout is being read.
        """
        stderr_future = self._stderr_reader.submit(self._read_until, self.process.stderr, marker)
        try:
            stdout = self._read_until(self.process.stdout, marker)
        except Exception:
            # Killing the process closes stderr, which ends the helper read
            self._discard_process()
            with contextlib.suppress(Exception):
                stderr_future.result(timeout=EXIFTOOL_CLOSE_TIMEOUT)
            raise
        return stdout, stderr_future.result()

    @staticmethod
    def _read_until(stream: IO[str], marker: str) -> str:
        """Read lines up to the marker line; return everything before it."""
        lines: list[str] = []
        while True:
            line = stream.readline()
            if not line:
                raise EOFError("ExifTool closed its output")
            stripped = line.rstrip("\r\n")
            if stripped.endswith(marker):
                head = stripped[: -len(marker)]
                if head:
                    lines.append(head)
                return "\n".join(lines)
            lines.append(stripped)

    def _build_record(self, path: str, stdout: str, stderr: str) -> MetadataRecord:
        error_lines = [ln.strip() for ln in stderr.splitlines() if ln.strip().startswith("Error")]

        if not stdout.strip():
            reason = error_lines[0] if error_lines else "no metadata returned"
            return self._failed(path, reason)

        raw = self._parse_json_output(stdout)
        if raw is None:
            return self._failed(path, "invalid JSON output from ExifTool")

        if "Error" in raw:
            return self._failed(path, str(raw["Error"]))

        for warning in (ln.strip() for ln in stderr.splitlines()):
            if warning.startswith("Warning"):
                logger.debug("[ExifToolWrapper] %s (%s)", warning, path, extra={"dev_only": True})

        self._consecutive_errors = 0
        raw.pop("SourceFile", None)
        return MetadataRecord.from_raw(path, raw)

    @staticmethod
    def _parse_json_output(output: str) -> dict[str, Any] | None:
        """Parse exiftool JSON output and return the first metadata dictionary."""
        try:
            data = json.loads(output)
        except json.JSONDecodeError as e:
            logger.error("[ExifToolWrapper] JSON decode error: %s", e)
            logger.debug("[ExifToolWrapper] Raw output was: %r", output, extra={"dev_only": True})
            return None

        if isinstance(data, list) and data and isinstance(data[0], dict):
            return dict(data[0])
        logger.warning("[ExifToolWrapper] Invalid JSON structure from exiftool")
        return None

    def _failed(self, path: str, reason: str) -> MetadataRecord:
        self._last_error = reason
        self._consecutive_errors += 1
        logger.debug("[ExifToolWrapper] Extraction failed for %s: %s", path, reason, extra={"dev_only": True})
        return MetadataRecord.failed(path, reason)

    def _discard_process(self) -> None:
        proc, self.process = self.process, None
        if proc is None:
            return
        with contextlib.suppress(Exception):
            proc.kill()
        with contextlib.suppress(Exception):
            proc.wait(timeout=0.5)

    def close(
        self,
        *,
        try_graceful: bool = True,
        graceful_wait_s: float = EXIFTOOL_CLOSE_TIMEOUT,
        terminate_wait_s: float = 0.5,
        kill_wait_s: float = 0.2,
    ) -> None:
        """Shuts down the persistent ExifTool process.

        Args:
            try_graceful: If True, send '-stay_open False' and wait first.
            graceful_wait_s: Max seconds to wait for a graceful exit.
            terminate_wait_s: Max seconds to wait after terminate().
            kill_wait_s: Max seconds to wait after kill().

        """
        with self.lock:
            self._closed = True
            self._stderr_reader.shutdown(wait=False)
            proc, self.process = self.process, None
            if proc is None:
                return

            if try_graceful and proc.stdin and not proc.stdin.closed:
                try:
                    proc.stdin.write("-stay_open\nFalse\n")
                    proc.stdin.flush()
                except (BrokenPipeError, OSError, ValueError) as e:
                    logger.debug(
                        "[ExifToolWrapper] Expected error during graceful close: %s",
                        e,
                        extra={"dev_only": True},
                    )

            with contextlib.suppress(BrokenPipeError, OSError, ValueError, AttributeError):
                if proc.stdin and not proc.stdin.closed:
                    proc.stdin.close()

            if try_graceful:
                try:
                    proc.wait(timeout=graceful_wait_s)
                    logger.debug("[ExifToolWrapper] Process exited gracefully", extra={"dev_only": True})
                    return
                except subprocess.TimeoutExpired:
                    logger.debug(
                        "[ExifToolWrapper] Graceful close timed out (%.2fs)",
                        graceful_wait_s,
                        extra={"dev_only": True},
                    )

            with contextlib.suppress(Exception):
                proc.terminate()
            try:
                proc.wait(timeout=terminate_wait_s)
            except subprocess.TimeoutExpired:
                with contextlib.suppress(Exception):
                    proc.kill()
                with contextlib.suppress(subprocess.TimeoutExpired):
                    proc.wait(timeout=kill_wait_s)

    def is_healthy(self) -> bool:
        """True while the process runs and errors have not piled up."""
        if self.process is None or self.process.poll() is not None:
            return False
        return self._consecutive_errors <= 5

    def last_error(self) -> str | None:
        return self._last_error

    def health_check(self) -> dict[str, Any]:
        """Health status snapshot for diagnostics."""
        if self.process is None:
            process_status = "stopped"
        else:
            code = self.process.poll()
            process_status = "running" if code is None else f"terminated (code: {code})"

        return {
            "healthy": self.is_healthy(),
            "process_status": process_status,
            "last_error": self._last_error,
            "consecutive_errors": self._consecutive_errors,
            "requests": self.counter,
            "last_check": time.time(),
        }
