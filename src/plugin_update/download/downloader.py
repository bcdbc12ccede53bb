"""downloads plugin artifacts to local storage."""

import atexit
import email.utils
import logging
import os
import shutil
import tempfile
import time
from abc import ABC, abstractmethod
from contextlib import suppress
from datetime import timezone
from pathlib import Path
from typing import Optional, TYPE_CHECKING
from urllib.parse import urlsplit
from urllib.request import url2pathname

import httpx
from tenacity import (
    RetryError,
    Retrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_none,
)
from tenacity.wait import wait_base

from ..domain.errors import AuthRequiredError, ConnectError, DownloadError
from ..utils.hash import sha1_hex

if TYPE_CHECKING:
    from rich.progress import TaskID

logger = logging.getLogger(__name__)

TEMP_DIR_PREFIX = "plugin-update-downloader"
MAX_ATTEMPTS = 3
BUFFER_SIZE = 8192


class FileDownloader(ABC):
    @abstractmethod
    def download_file(
        self,
        url: str,
        progress=None,
        task_id: Optional["TaskID"] = None
    ) -> Path:
        """Download the resource at url and return the local file path."""
        pass


class SimpleFileDownloader(FileDownloader):
    """
    downloads a file from a url into a fresh temporary directory.

    the body is written under a temporary name derived from the url and then
    renamed to the last segment of the url path, so the final path never
    holds a partial file. the returned file belongs to the caller.
    """

    def __init__(
        self,
        client: Optional[httpx.Client] = None,
        max_attempts: int = MAX_ATTEMPTS,
        wait: Optional[wait_base] = None
    ):
        self.client = client or httpx.Client(follow_redirects=True)
        self.max_attempts = max_attempts
        self.wait = wait or wait_none()

    def download_file(
        self,
        url: str,
        progress=None,
        task_id: Optional["TaskID"] = None
    ) -> Path:
        """
        download url and return the path of the downloaded file.

        args:
            url: absolute url of the artifact (http, https or file)
            progress: optional Progress instance for tracking download
            task_id: optional task id for updating progress

        raises:
            AuthRequiredError: the server answered 401
            ConnectError: the response, or the local source file, could not be
                opened after max_attempts
            DownloadError: the url is malformed or has no file name
        """
        file_name = _file_name(url)
        local = urlsplit(url).scheme == "file"
        request = None if local else self._build_request(url)

        destination = Path(tempfile.mkdtemp(prefix=TEMP_DIR_PREFIX))
        atexit.register(_remove_if_empty, destination)

        tmp_file = destination / f"{sha1_hex(url)}.tmp"
        tmp_file.unlink(missing_ok=True)

        logger.debug(f"Download '{url}' to '{tmp_file}'")

        if local:
            last_modified = self._copy_local(url, tmp_file)
        else:
            last_modified = self._fetch(url, request, tmp_file, progress, task_id)

        file = destination / file_name
        file.unlink(missing_ok=True)
        logger.debug(f"Rename '{tmp_file}' to '{file}'")
        tmp_file.replace(file)

        logger.debug(f"Set last modified of '{file}' to '{last_modified}'")
        os.utime(file, (file.stat().st_atime, last_modified))

        return file

    def _fetch(self, url: str, request: httpx.Request, tmp_file: Path, progress, task_id) -> float:
        response = self._with_retries(url, tmp_file, lambda: self._send(request))
        try:
            last_modified = _parse_last_modified(response.headers.get("Last-Modified"))

            if progress and task_id is not None and "content-length" in response.headers:
                progress.update(task_id, total=int(response.headers["content-length"]))

            # a failure past this point aborts the download, nothing is retried mid-stream
            downloaded = 0
            with open(tmp_file, "wb") as f:
                for chunk in response.iter_bytes(chunk_size=BUFFER_SIZE):
                    f.write(chunk)
                    downloaded += len(chunk)
                    if progress and task_id is not None:
                        progress.update(task_id, completed=downloaded)
        finally:
            response.close()

        return last_modified

    def _build_request(self, url: str) -> httpx.Request:
        try:
            return self.client.build_request("GET", url)
        except (httpx.InvalidURL, ValueError) as e:
            raise DownloadError(url, f"Invalid url '{url}': {e}") from e

    def _with_retries(self, url: str, tmp_file: Path, opener):
        """call opener until it succeeds, raising ConnectError after max_attempts failures."""
        retrying = Retrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=self.wait,
            retry=retry_if_exception_type((httpx.HTTPError, OSError)),
            before_sleep=before_sleep_log(logger, logging.ERROR, exc_info=True),
        )
        try:
            for attempt in retrying:
                with attempt:
                    return opener()
        except RetryError as e:
            cause = e.last_attempt.exception()
            logger.error(f"Giving up on '{url}' after {self.max_attempts} attempts: {cause}")
            raise ConnectError(url, tmp_file) from cause

    def _send(self, request: httpx.Request) -> httpx.Response:
        response = self.client.send(request, stream=True)
        if response.status_code == httpx.codes.UNAUTHORIZED:
            response.close()
            raise AuthRequiredError(str(request.url))
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError:
            response.close()
            raise
        return response

    def _copy_local(self, url: str, tmp_file: Path) -> float:
        source = Path(url2pathname(urlsplit(url).path))
        with self._with_retries(url, tmp_file, lambda: open(source, "rb")) as src:
            last_modified = os.fstat(src.fileno()).st_mtime
            with open(tmp_file, "wb") as dst:
                shutil.copyfileobj(src, dst, BUFFER_SIZE)
        return last_modified


def _file_name(url: str) -> str:
    try:
        path = urlsplit(url).path
    except ValueError as e:
        raise DownloadError(url, f"Invalid url '{url}': {e}") from e
    name = path[path.rfind("/") + 1:]
    if name in ("", ".", ".."):
        raise DownloadError(url, f"Can't derive a file name from '{url}'")
    return name


def _parse_last_modified(value: Optional[str]) -> float:
    """convert a Last-Modified header to a timestamp, defaulting to now."""
    if value:
        try:
            parsed = email.utils.parsedate_to_datetime(value)
        except (TypeError, ValueError):
            logger.debug(f"Ignoring unparsable Last-Modified '{value}'")
        else:
            if parsed.tzinfo is None:
                parsed = parsed.replace(tzinfo=timezone.utc)
            return parsed.timestamp()
    return time.time()


def _remove_if_empty(directory: Path):
    # the caller owns downloaded files, so only an empty directory is removed
    with suppress(OSError):
        directory.rmdir()
