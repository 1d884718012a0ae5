from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union
import re


USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/122.0.0.0 Safari/537.36"
)
INVALID_FS_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1F]+')
CHUNK_SIZE = 1024 * 512
CONNECT_TIMEOUT = 15
READ_TIMEOUT = 120
DEFAULT_WORKERS = 4

Timeout = Union[float, tuple[float, float]]

DIRECT_HOSTS = ("i.redd.it", "imgur.com")
LANDING_PAGE_HOSTS = ("gfycat.com", "redgifs.com")
ANIMATED_IMAGE_HOSTS = ("imgur.com",)
MEDIA_META_PROPERTY = "og:video"


class ExportError(Exception):
    pass


class DownloadError(Exception):
    kind = "internal"

    def __init__(self, message: str, url: str, path: Optional[Path] = None):
        super().__init__(message)
        self.url = url
        self.path = path


class ResolutionError(DownloadError):
    kind = "resolution"


class UnsupportedHostError(ResolutionError):
    def __init__(self, url: str):
        super().__init__(f"unsupported host: {url}", url)


class LandingPageError(ResolutionError):
    def __init__(self, message: str, url: str, status_code: Optional[int] = None):
        super().__init__(message, url)
        self.status_code = status_code


class MissingMediaTagError(ResolutionError):
    pass


class TransportError(DownloadError):
    kind = "transport"

    def __init__(
        self,
        message: str,
        url: str,
        path: Optional[Path] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message, url, path)
        self.status_code = status_code


class FilesystemError(DownloadError):
    kind = "filesystem"


@dataclass(frozen=True)
class Job:
    index: int
    url: str
    file_stem: Path
    folder_path: Path


@dataclass(frozen=True)
class FailureRecord:
    kind: str
    cause: str
    url: str
    path: Optional[Path] = None

    @classmethod
    def from_error(cls, exc: DownloadError) -> "FailureRecord":
        return cls(kind=exc.kind, cause=str(exc), url=exc.url, path=exc.path)


@dataclass(frozen=True)
class RunResult:
    processed: int
    existing: int
    downloaded: int
    failed: int
    failures: list[FailureRecord]
