import re

import requests
from bs4 import BeautifulSoup

from .types import (
    ANIMATED_IMAGE_HOSTS,
    CONNECT_TIMEOUT,
    DIRECT_HOSTS,
    LANDING_PAGE_HOSTS,
    MEDIA_META_PROPERTY,
    READ_TIMEOUT,
    Timeout,
    LandingPageError,
    MissingMediaTagError,
    UnsupportedHostError,
)
from .utils import host_matches


GIFV_SUFFIX = re.compile(r"\.gifv(?=$|[?#])", re.IGNORECASE)


def rewrite_landing_media_url(url: str) -> str:
    """Prefer the full-size asset over the thumbnail/mobile renditions."""
    url = url.replace("thumbs", "giant", 1)
    return url.replace("-mobile", "", 1)


def extract_media_url(page_html: str) -> str:
    doc = BeautifulSoup(page_html, "html.parser")
    tag = doc.find("meta", attrs={"property": MEDIA_META_PROPERTY})
    if tag is None:
        return ""
    return (tag.get("content") or "").strip()


def fetch_landing_media_url(session: requests.Session, url: str, timeout: Timeout) -> str:
    try:
        with session.get(url, timeout=timeout) as r:
            if not 200 <= r.status_code <= 299:
                raise LandingPageError(
                    f"landing page {url} returned status code {r.status_code}",
                    url,
                    status_code=r.status_code,
                )
            page_html = r.text
    except requests.RequestException as exc:
        raise LandingPageError(f"cannot fetch landing page {url}: {exc}", url) from exc

    media_url = extract_media_url(page_html)
    if not media_url:
        raise MissingMediaTagError(f'no <meta property="{MEDIA_META_PROPERTY}"> on {url}', url)
    return media_url


def resolve(
    session: requests.Session,
    url: str,
    timeout: Timeout = (CONNECT_TIMEOUT, READ_TIMEOUT),
) -> str:
    """Return a directly downloadable URL for ``url``.

    Raises a ``ResolutionError`` subclass: ``UnsupportedHostError`` when no
    strategy knows the host, ``LandingPageError`` when the intermediary page
    could not be fetched and ``MissingMediaTagError`` when it was fetched but
    names no media.
    """
    if host_matches(url, LANDING_PAGE_HOSTS):
        return rewrite_landing_media_url(fetch_landing_media_url(session, url, timeout))
    if host_matches(url, ANIMATED_IMAGE_HOSTS) and GIFV_SUFFIX.search(url):
        return GIFV_SUFFIX.sub(".mp4", url, count=1)
    if host_matches(url, DIRECT_HOSTS):
        return url
    raise UnsupportedHostError(url)
