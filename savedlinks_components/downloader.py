from pathlib import Path

import requests

from .types import CHUNK_SIZE, FilesystemError, Timeout, TransportError
from .ui import TerminalUI
from .utils import extension_from_content_type, file_exists, human_bytes


def download_file(
    session: requests.Session,
    url: str,
    file_stem: Path,
    timeout: Timeout,
    ui: TerminalUI,
) -> str:
    """Fetch ``url`` to ``file_stem`` plus an extension taken from the response.

    Returns ``"downloaded"`` or ``"existing"``. The existence check needs the
    content type, so it only happens once the response headers are in.
    """
    try:
        r = session.get(url, stream=True, timeout=timeout)
    except requests.RequestException as exc:
        raise TransportError(f"GET {url} failed: {exc}", url) from exc

    with r:
        if not 200 <= r.status_code <= 299:
            raise TransportError(
                f"url {url} returned status code {r.status_code}",
                url,
                status_code=r.status_code,
            )

        ext = extension_from_content_type(r.headers.get("Content-Type"), url)
        out_path = file_stem.parent / f"{file_stem.name}.{ext}"
        if file_exists(out_path, ui):
            return "existing"

        try:
            out_path.parent.mkdir(parents=True, exist_ok=True)
            f = out_path.open("xb")
        except OSError as exc:
            ui.error(f"cannot create {out_path}: {exc}")
            raise FilesystemError(f"cannot create {out_path}: {exc}", url, out_path) from exc

        size = 0
        try:
            with f:
                for chunk in r.iter_content(chunk_size=CHUNK_SIZE):
                    if not chunk:
                        continue
                    f.write(chunk)
                    size += len(chunk)
        except (requests.RequestException, OSError) as exc:
            out_path.unlink(missing_ok=True)
            raise TransportError(f"copying {url} to {out_path} failed: {exc}", url, out_path) from exc
        except BaseException:
            out_path.unlink(missing_ok=True)
            raise

    ui.ok(f"Downloaded {out_path.name} ({human_bytes(size)}) from {url}")
    return "downloaded"
