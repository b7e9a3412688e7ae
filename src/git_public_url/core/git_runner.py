from __future__ import annotations

import logging
import os
import signal
import subprocess
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from .errors import GitExecutionError, GitPolicyError
from .models import GitRunResult
from .security import resolve_root

logger = logging.getLogger(__name__)

TIMEOUT_EXIT_CODE = 124


def _kill_process_tree_windows(pid: int) -> None:
    """
    Kill a process tree on Windows (git may spawn helper processes such as
    credential managers, ssh, pagers, etc.).
    """
    subprocess.run(
        ["taskkill", "/PID", str(pid), "/T", "/F"],
        capture_output=True,
        text=True,
    )


def _kill_process_group_posix(p: subprocess.Popen) -> None:
    """
    Kill entire process group on POSIX when start_new_session=True.
    Falls back to p.kill() if group kill fails.
    """
    try:
        os.killpg(p.pid, signal.SIGKILL)
    except OSError:
        try:
            p.kill()
        except OSError:
            pass


def _kill(p: subprocess.Popen) -> None:
    if os.name == "nt":
        _kill_process_tree_windows(p.pid)
    else:
        _kill_process_group_posix(p)


@dataclass(frozen=True)
class GitRunnerConfig:
    """
    Runner configuration.

    timeout_s=None waits for git indefinitely.
    """
    timeout_s: float | None = None

    # Read queries used by the resolvers; nothing here writes.
    read_only_allowlist: tuple[str, ...] = (
        "describe",
        "rev-list",
        "rev-parse",
        "config",
        "cat-file",
    )


class SafeGitRunner:
    """
    Read-only git runner bound to one repository root:
      - No shell
      - Every query runs with cwd=root (no process-wide chdir)
      - Optional hard timeout, killing stuck process groups
      - Standardized result: stdout/stderr/exit_code/duration_ms
    """

    def __init__(self, root: str | Path, config: GitRunnerConfig | None = None) -> None:
        self.root = resolve_root(root)
        self.config = config or GitRunnerConfig()

    def run(self, args: Iterable[str]) -> GitRunResult:
        args_list = list(args)
        self._validate_args(args_list)

        argv = ["git", *args_list]
        merged_env = self._build_env()

        start = time.perf_counter()
        stdout, stderr, exit_code, timed_out = self._run_process(
            argv=argv,
            cwd=self.root,
            env=merged_env,
            timeout_s=self.config.timeout_s,
        )
        duration_ms = int((time.perf_counter() - start) * 1000)
        logger.debug("%s -> exit=%s in %sms (root=%s)", " ".join(argv), exit_code, duration_ms, self.root)

        return GitRunResult(
            argv=argv,
            root=str(self.root),
            stdout=stdout,
            stderr=stderr,
            exit_code=exit_code,
            duration_ms=duration_ms,
            timed_out=timed_out,
        )

    def _validate_args(self, args_list: list[str]) -> None:
        if not args_list:
            raise GitPolicyError("Empty git args are not allowed.")

        lowered = [a.strip().lower() for a in args_list]
        subcmd = lowered[0]
        if subcmd not in self.config.read_only_allowlist:
            raise GitPolicyError(
                f"Blocked git subcommand: '{subcmd}'. "
                f"Allowed: {', '.join(self.config.read_only_allowlist)}"
            )

        dangerous_flags = {
            "--global", "--system",
            "--unset", "--unset-all", "--add", "--replace-all",
            "--delete", "-d",
            "--force", "-f",
        }
        if any(f in lowered for f in dangerous_flags):
            raise GitPolicyError(f"Blocked potentially mutating git flags: {args_list}")

        # only `config --get <key>` reads; anything else may write
        if subcmd == "config" and (len(lowered) != 3 or lowered[1] != "--get"):
            raise GitPolicyError("Blocked config write; only 'config --get <key>' is allowed.")

    def _build_env(self) -> dict[str, str]:
        """
        Build a controlled environment that prevents interactive hangs.
        """
        merged_env = dict(os.environ)
        merged_env.update(
            {
                "GIT_TERMINAL_PROMPT": "0",
                "GCM_INTERACTIVE": "Never",
                "GIT_PAGER": "cat",
                "LC_ALL": "C",
                "GIT_OPTIONAL_LOCKS": "0",
            }
        )

        return merged_env

    def _run_process(
        self,
        *,
        argv: list[str],
        cwd: Path,
        env: dict[str, str],
        timeout_s: float | None,
    ) -> tuple[str, str, int, bool]:
        """
        Run git via Popen + communicate(timeout).
        Returns: (stdout, stderr, exit_code, timed_out)
        """
        popen_kwargs: dict = {}
        if os.name != "nt":
            popen_kwargs["start_new_session"] = True

        try:
            p = subprocess.Popen(
                argv,
                cwd=str(cwd),
                env=env,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
                shell=False,
                **popen_kwargs,
            )
        except FileNotFoundError as e:
            raise GitExecutionError("git executable not found in PATH.") from e
        except OSError as e:
            raise GitExecutionError(f"Failed to spawn git: {type(e).__name__}: {e}") from e

        try:
            out, err = p.communicate(timeout=timeout_s)
            return out or "", err or "", int(p.returncode or 0), False

        except subprocess.TimeoutExpired:
            try:
                _kill(p)
            finally:
                try:
                    out, err = p.communicate(timeout=0.5)
                except (subprocess.TimeoutExpired, OSError, ValueError):
                    out, err = ("", "")
            return out or "", err or "", TIMEOUT_EXIT_CODE, True

        except Exception as e:
            try:
                _kill(p)
            except OSError:
                pass
            raise GitExecutionError(f"Failed while running git: {type(e).__name__}: {e}") from e
