"""Turn a saved-links HTML export into download jobs.

The export is a list of ``<li>`` items. The first anchor of an item points
at the media, the second at the post it was saved from, e.g.
``https://www.reddit.com/r/<folder>/comments/<leaf>/``.
"""
from pathlib import Path

from bs4 import BeautifulSoup

from .types import ExportError, Job
from .ui import TerminalUI
from .utils import clean_path_component

FOLDER_SEGMENT = 4


def load_export(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        raise ExportError(f"cannot read export file {path}: {exc}") from exc


def parse_export(html_text: str, base_dir: Path, ui: TerminalUI) -> list[Job]:
    doc = BeautifulSoup(html_text, "html.parser")
    jobs: list[Job] = []
    for index, item in enumerate(doc.find_all("li")):
        anchors = item.find_all("a")
        if len(anchors) < 2:
            continue
        url = (anchors[0].get("href") or "").strip()
        if not url:
            ui.warn(f"item {index} has no media link, skipped")
            continue
        split = (anchors[1].get("href") or "").split("/")
        if len(split) <= FOLDER_SEGMENT + 1:
            ui.warn(f"item {index} has an unexpected post link {anchors[1].get('href')!r}, skipped")
            continue

        folder = clean_path_component(split[FOLDER_SEGMENT], fallback="unsorted")
        name = clean_path_component(split[-2], fallback=f"item_{index}")
        folder_path = base_dir / folder
        jobs.append(
            Job(
                index=index,
                url=url,
                file_stem=folder_path / name,
                folder_path=folder_path,
            )
        )
    return jobs
