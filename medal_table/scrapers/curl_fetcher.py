import asyncio
from typing import List, Optional, Tuple

from loguru import logger

from medal_table.config.settings import settings
from .base_scraper import TransportError

CHUNK_SIZE = 64 * 1024


class _OutputOverflow(Exception):
    """Internal marker: stdout grew past the configured cap."""

    def __init__(self, size: int):
        super().__init__(f"{size} bytes read")
        self.size = size


class CurlFetcher:
    """Secondary transport: re-issues a GET through the curl command line tool.

    Each invocation is bounded by ``timeout`` seconds and its captured stdout
    by ``max_output_bytes``. The process is killed if it overruns either limit
    or if the awaiting task is cancelled.
    """

    def __init__(
        self,
        executable: Optional[str] = None,
        timeout: Optional[float] = None,
        max_output_bytes: Optional[int] = None,
    ):
        self.executable = executable or settings.curl_path
        self.timeout = timeout or settings.curl_timeout
        self.max_output_bytes = max_output_bytes or settings.curl_max_output_bytes

    def build_args(self, url: str, user_agent: Optional[str] = None) -> List[str]:
        args = [
            "-sL",
            "--max-time",
            f"{self.timeout:g}",
            "--max-filesize",
            str(self.max_output_bytes),
        ]
        if user_agent:
            args += ["-H", f"User-Agent: {user_agent}"]
        args.append(url)
        return args

    async def _read_stdout(self, process: asyncio.subprocess.Process) -> bytes:
        """Reads stdout in chunks, giving up as soon as the cap is passed."""
        chunks = []
        size = 0
        while True:
            chunk = await process.stdout.read(CHUNK_SIZE)
            if not chunk:
                return b"".join(chunks)
            size += len(chunk)
            if size > self.max_output_bytes:
                raise _OutputOverflow(size)
            chunks.append(chunk)

    async def _collect(self, process: asyncio.subprocess.Process) -> Tuple[bytes, bytes]:
        # stderr is drained alongside stdout so neither pipe can fill up and block
        stderr_task = asyncio.ensure_future(process.stderr.read())
        try:
            stdout = await self._read_stdout(process)
            stderr = await stderr_task
        finally:
            if not stderr_task.done():
                stderr_task.cancel()
        await process.wait()
        return stdout, stderr

    async def fetch(self, url: str, user_agent: Optional[str] = None) -> str:
        args = self.build_args(url, user_agent)
        logger.debug(f"Running {self.executable} for {url}")
        try:
            process = await asyncio.create_subprocess_exec(
                self.executable,
                *args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise TransportError(f"Could not start {self.executable}: {e}", url) from e

        try:
            stdout, stderr = await asyncio.wait_for(
                self._collect(process), timeout=self.timeout
            )
        except asyncio.TimeoutError as e:
            raise TransportError(
                f"{self.executable} timed out after {self.timeout:g}s for {url}", url
            ) from e
        except _OutputOverflow as e:
            raise TransportError(
                f"{self.executable} output for {url} exceeds {self.max_output_bytes} bytes",
                url,
            ) from e
        finally:
            # Runs on timeout, overflow and cancellation alike
            if process.returncode is None:
                try:
                    process.kill()
                except ProcessLookupError:
                    pass
                await process.wait()

        if process.returncode != 0:
            detail = stderr.decode("utf-8", errors="replace").strip()
            raise TransportError(
                f"{self.executable} exited with {process.returncode} for {url}: {detail}",
                url,
            )
        logger.debug(f"{self.executable} returned {len(stdout)} bytes for {url}")
        return stdout.decode("utf-8", errors="replace")
