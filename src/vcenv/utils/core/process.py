# Copyright (C) 2025 Intel Corporation
# SPDX-License-Identifier: Apache-2.0

"""
Secure subprocess execution utilities.

This module provides the single place where helper binaries are executed.
It implements:
- Command validation
- Bounded execution time with kill-on-expiry
- Standardized error handling (failures are reported, not raised)
- Logging of every executed command

Commands are always executed as argument lists, never through a shell, and
their output is captured and decoded before the call returns so that no
process handle outlives the call.
"""

import logging
import os
import subprocess  # nosec B404 # For secure process execution API
import time
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)


class ProcessResult:
    """
    Container for subprocess execution results with metadata.
    """

    def __init__(
        self,
        returncode: int,
        stdout: str = "",
        stderr: str = "",
        command: List[str] = None,
        execution_time: float = 0.0,
        timed_out: bool = False,
    ):
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        self.command = command or []
        self.execution_time = execution_time
        self.timed_out = timed_out

    @property
    def success(self) -> bool:
        """Check if the command executed successfully."""
        return self.returncode == 0 and not self.timed_out

    @property
    def failed(self) -> bool:
        """Check if the command failed."""
        return not self.success

    def __str__(self) -> str:
        status = "SUCCESS" if self.success else "FAILED"
        return f"ProcessResult(status={status}, returncode={self.returncode}, time={self.execution_time:.2f}s)"


class ProcessSecurityConfig:
    """Execution limits for subprocess execution."""

    def __init__(self, max_execution_time: float = 10.0, log_commands: bool = True):
        self.max_execution_time = max_execution_time
        self.log_commands = log_commands


class SecureProcessExecutor:
    """
    Secure subprocess executor.

    Every call spawns exactly one child process, waits for it with a bounded
    timeout and returns a ProcessResult. Execution problems (missing binary,
    permission denied, timeout) are converted into a failed result.
    """

    def __init__(self, security_config: Optional[ProcessSecurityConfig] = None):
        """
        Initialize the secure process executor.

        Args:
            security_config: Execution limits for subprocess execution
        """
        self.security_config = security_config or ProcessSecurityConfig()

    def run(self, command: List[str], timeout: Optional[float] = None) -> ProcessResult:
        """
        Execute a command and capture its output.

        Args:
            command: Command to execute as an argument list
            timeout: Maximum execution time in seconds

        Returns:
            ProcessResult: Execution results with metadata

        Raises:
            SecurityError: If the command is not a non-empty argument list
        """
        start_time = time.time()

        cmd_list = self._prepare_command(command)
        effective_timeout = timeout or self.security_config.max_execution_time

        if self.security_config.log_commands:
            logger.debug(f"Executing command: {' '.join(cmd_list)} (timeout={effective_timeout})")

        try:
            return self._run_standard(cmd_list, self._prepare_environment(), effective_timeout)

        except subprocess.TimeoutExpired:
            execution_time = time.time() - start_time
            logger.warning(f"Command timed out after {execution_time:.2f}s: {' '.join(cmd_list)}")
            return ProcessResult(
                returncode=-1,
                stderr=f"Command timed out after {effective_timeout}s",
                command=cmd_list,
                execution_time=execution_time,
                timed_out=True,
            )

        except OSError as e:
            # Missing file, not executable, bad interpreter
            execution_time = time.time() - start_time
            logger.debug(f"Command could not be started: {' '.join(cmd_list)}: {e}")
            return ProcessResult(returncode=-1, stderr=str(e), command=cmd_list, execution_time=execution_time)

    def _prepare_command(self, command: List[str]) -> List[str]:
        """Validate the command format."""
        if not isinstance(command, list):
            raise SecurityError(f"Invalid command type: {type(command)}")
        if not command or not command[0]:
            raise SecurityError("Empty command not allowed")
        return [str(arg) for arg in command]

    def _prepare_environment(self) -> Dict[str, str]:
        """Prepare environment variables for subprocess execution."""
        safe_env = os.environ.copy()

        # Helpers must print their version in a stable, untranslated form
        safe_env["LC_ALL"] = "C"

        return safe_env

    def _run_standard(self, cmd_list: List[str], env: Dict[str, str], timeout: float) -> ProcessResult:
        """Execute command with standard subprocess.run."""
        start_time = time.time()

        # subprocess.run kills and reaps the child when the timeout expires
        result = subprocess.run(  # nosec B603 # argument list, no shell
            cmd_list,
            env=env,
            timeout=timeout,
            capture_output=True,
            text=True,
            errors="replace",
            stdin=subprocess.DEVNULL,
            check=False,
        )

        execution_time = time.time() - start_time

        return ProcessResult(
            returncode=result.returncode,
            stdout=result.stdout,
            stderr=result.stderr,
            command=cmd_list,
            execution_time=execution_time,
        )


class SecurityError(Exception):
    """Exception raised for malformed commands."""

    pass


# Global secure executor instance
_global_executor = None


def get_executor() -> SecureProcessExecutor:
    """
    Get the global secure process executor instance.

    Returns:
        SecureProcessExecutor: Global executor instance
    """
    global _global_executor
    if _global_executor is None:
        _global_executor = SecureProcessExecutor()
    return _global_executor


def run_command(command: List[str], timeout: Optional[float] = None) -> ProcessResult:
    """
    Execute a command with default settings.

    This is the function that should be used throughout the application
    for subprocess execution instead of direct subprocess calls.

    Args:
        command: Command to execute as an argument list
        timeout: Execution timeout

    Returns:
        ProcessResult: Execution results
    """
    return get_executor().run(command=command, timeout=timeout)
