#!/usr/bin/python3
# pylint: disable=line-too-long
"""
stream one file to a B2 upload url
"""
import logging
import os
from dataclasses import dataclass, field
from urllib.parse import quote

# non std modules
import requests

from .config import DEFAULTS


@dataclass
class UploadResult:
    """
    outcome of one upload

    file_id is set on success, error holds remote response text or failure description otherwise
    """

    file_id: str = None
    error: str = None
    response: dict = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.file_id is not None


class UploadBody:
    """
    iterable request body yielding blocks of an open file

    len() returns the file size, so requests sends a Content-Length header
    and no chunked transfer encoding
    """

    def __init__(self, fh, size: int, blocksize: int, progress=None, sent=None):
        self._fh = fh
        self._size = size
        self._blocksize = blocksize
        self._progress = progress
        self._sent = sent
        self._segments = size // blocksize  # estimate, remainder block not counted
        self.written = 0  # bytes handed out
        self.error = None  # OSError while reading, if any

    def __len__(self):
        return self._size

    def fraction(self, blocks: int) -> float:
        """
        progress after blocks written, limited to 1.0

        :param blocks <int>: number of blocks written so far
        """
        if self._segments == 0:
            return 1.0
        return min(1.0, blocks / self._segments)

    def __iter__(self):
        blocks = 0
        while True:
            try:
                data = self._fh.read(self._blocksize)
            except OSError as exc:
                self.error = exc
                raise
            if not data:
                if self._sent is not None:
                    self._sent()
                break
            self.written += len(data)
            yield data
            blocks += 1
            if self._progress is not None:
                self._progress(self.fraction(blocks))


class UploadClient:
    """
    uploads single files to B2 upload urls, exactly one attempt per file
    """

    def __init__(self, blocksize: int = DEFAULTS["UPLOAD_BLOCKSIZE"], timeout: int = DEFAULTS["TIMEOUT"], session=None):
        if blocksize <= 0:
            raise ValueError(f"blocksize must be positive, got {blocksize}")
        self._logger = logging.getLogger(self.__class__.__name__)
        self._blocksize = blocksize
        self._timeout = timeout
        self._session = session if session is not None else requests.Session()

    @staticmethod
    def headers(filename: str, target, checksum: str, size: int) -> dict:
        """
        request headers B2 requires for upload

        :param filename <str>: local path, only basename is used
        :param target <UploadTarget>: upload url and token
        :param checksum <str>: sha1 hexdigest of file
        :param size <int>: file size in bytes
        """
        return {
            "Authorization": target.authorization_token,
            "X-Bz-File-Name": quote(os.path.basename(filename), safe=""),
            "Content-Type": "b2/x-auto",
            "Content-Length": str(size),
            "X-Bz-Content-Sha1": checksum,
            "X-Bz-Info-UploaderVer": "1",
            "Connection": "keep-alive",
        }

    def upload(self, filename: str, target, checksum: str, progress=None, sent=None) -> UploadResult:
        """
        stream file to target upload url

        :param filename <str>: path to existing regular file
        :param target <UploadTarget>: upload url and token from get_upload_url
        :param checksum <str>: sha1 hexdigest of file content
        :param progress <callable>: called with fraction 0.0 - 1.0 after every block
        :param sent <callable>: called once the whole file is handed out, before waiting for the response
        :return <UploadResult>:
        """
        try:
            infile = open(filename, "rb")
        except OSError as exc:
            return UploadResult(error=f"Failed to Upload file: {exc}")
        with infile:
            try:
                size = os.fstat(infile.fileno()).st_size
            except OSError as exc:
                return UploadResult(error=f"Failed to Upload file: {exc}")
            body = UploadBody(infile, size, self._blocksize, progress, sent)
            headers = self.headers(filename, target, checksum, size)
            self._logger.debug(f"POST {size} bytes of {filename} to {target.upload_url} in blocks of {self._blocksize}")
            if size == 0:
                if progress is not None:
                    progress(1.0)
                if sent is not None:
                    sent()
            try:
                # requests announces chunked encoding for zero length streams
                # redirects are not followed, body can not be sent twice
                response = self._session.post(
                    target.upload_url,
                    data=body if size else b"",
                    headers=headers,
                    timeout=self._timeout,
                    allow_redirects=False,
                )
            except (OSError, requests.exceptions.RequestException) as exc:
                if body.error is not None:
                    return UploadResult(error=f"Failed to Upload file: {body.error}")
                if body.written < size:
                    return UploadResult(error=f"Failed to Upload file: {exc}")
                return UploadResult(error=f"Error while processing upload: {exc}")
        return self._result(response)

    def _result(self, response) -> UploadResult:
        """parse confirmation of upload"""
        if not 200 <= response.status_code < 300:
            self._logger.debug(f"upload returned status {response.status_code}")
            return UploadResult(error=response.text)
        try:
            data = response.json()
            return UploadResult(file_id=data["fileId"], response=data)
        except (ValueError, KeyError, TypeError) as exc:
            return UploadResult(error=f"Error while processing upload: {exc!r}")
