import logging
import re
from typing import Optional, Set
from urllib.parse import unquote, urlsplit

logger = logging.getLogger(__name__)

# Regex scan rather than a DOM parse: unclosed tags do not stop extraction.
ANCHOR_HREF_RE = re.compile(r"""<a\s+(?:[^>]*?\s+)?href=(["'])(.*?)\1""")


def _decode(value: str) -> str:
    value = value.replace("&amp;", "&")
    try:
        return unquote(value, errors="strict")
    except UnicodeDecodeError:
        return value


class LinkExtractor:
    """Pull same-host links out of an HTML document.

    Only absolute links on the crawl's host and root-relative paths are
    understood. Root-relative paths are always resolved against the crawl's
    base URL (`scheme://host`), not against the page they were found on.
    """

    def normalize(self, href: str, base_url: str) -> Optional[str]:
        link = _decode(href).split("#", 1)[0]
        host = urlsplit(base_url).netloc
        if link.startswith(("http://" + host, "https://" + host)):
            return link
        if link.startswith("/") and not link.startswith("//"):
            return base_url + link
        return None

    def extract_links(self, html: str, base_url: str) -> Set[str]:
        links: Set[str] = set()
        if not html:
            return links
        for match in ANCHOR_HREF_RE.finditer(html):
            link = self.normalize(match.group(2), base_url)
            if link is None:
                logger.debug("Skipping (unsupported or external) href %r", match.group(2))
                continue
            links.add(link)
        return links
