"""LESS compilation through the Node.js ``lessc`` binary."""

import subprocess

from ...exceptions import CompileError
from ...utils.helpers import is_tool_available
from .base import StyleCompiler


class LesscCompiler(StyleCompiler):
    """Pipes the source through ``lessc -`` and reads CSS from stdout."""

    name = "lessc"

    def __init__(self, executable: str = "lessc", timeout: float = 60.0):
        self.executable = executable
        self.timeout = timeout

    def compile(self, source: str, compress: bool = True) -> str:
        if not is_tool_available(self.executable):
            raise CompileError(f"'{self.executable}' not found on PATH")

        cmd = [self.executable, "--no-color"]
        if compress:
            cmd.append("--compress")
        cmd.append("-")

        try:
            result = subprocess.run(
                cmd,
                input=source,
                capture_output=True,
                text=True,
                encoding="utf-8",
                timeout=self.timeout,
                check=False,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            raise CompileError(f"{self.executable} failed to run: {e}") from e

        if result.returncode != 0:
            message = result.stderr.strip() or f"exit code {result.returncode}"
            raise CompileError(f"{self.executable}: {message}")
        return result.stdout
