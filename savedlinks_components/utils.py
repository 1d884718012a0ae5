import html
import re
from pathlib import Path
from typing import Iterable, Optional
from urllib.parse import urlparse

from .types import INVALID_FS_CHARS
from .ui import TerminalUI


def clean_path_component(name: str, fallback: str) -> str:
    name = html.unescape(name or "").strip()
    name = re.sub(r"\s+", " ", name)
    name = INVALID_FS_CHARS.sub("_", name).strip(" .")
    if not name or name in {".", ".."}:
        return fallback
    return name


def get_host(url: str) -> str:
    return (urlparse(url).hostname or "").lower()


def host_matches(url: str, hosts: Iterable[str]) -> bool:
    """True when the URL's host is one of ``hosts`` or a sub-domain of one."""
    host = get_host(url)
    if not host:
        return False
    return any(host == h or host.endswith("." + h) for h in hosts)


def extension_from_content_type(content_type: Optional[str], url: str) -> str:
    """Last path segment of the media type, e.g. ``video/mp4`` -> ``mp4``.

    Parameters such as ``; charset=utf-8`` are dropped. Without a usable
    content type the URL path suffix is used, then ``bin``.
    """
    if content_type:
        media_type = content_type.split(";", 1)[0].strip()
        ext = media_type.rsplit("/", 1)[-1].strip().lower()
        ext = INVALID_FS_CHARS.sub("", ext)
        if ext:
            return ext
    suffix = Path(urlparse(url).path).suffix.lstrip(".").lower()
    return suffix or "bin"


def file_exists(path: Path, ui: TerminalUI) -> bool:
    try:
        path.stat()
    except (FileNotFoundError, NotADirectoryError):
        return False
    except OSError as exc:
        ui.warn(f"cannot stat {path}, treating as missing: {exc}")
        return False
    return True


def human_bytes(value: Optional[float]) -> str:
    if value is None:
        return "?"
    value = float(max(0.0, value))
    units = ["B", "KB", "MB", "GB", "TB"]
    idx = 0
    while value >= 1024 and idx < len(units) - 1:
        value /= 1024.0
        idx += 1
    return f"{value:.2f}{units[idx]}"
