"""Turn HTML markup into absolute, fragment-free candidate URLs."""
import logging
import re
from typing import Callable, Dict, List, Mapping, Optional, Sequence
from urllib.parse import urldefrag, urljoin, urlsplit, urlunsplit

from bs4 import BeautifulSoup

from linkscout.domain.parsed_link import ParsedLink

logger = logging.getLogger(__name__)

# attribute -> tags carrying a URL in it; "" means any element
AttributeRules = Mapping[str, Sequence[str]]

BASE_LINK_ATTRIBUTES: Dict[str, List[str]] = {
    "background": ["body"],
    "cite": ["blockquote", "del", "ins", "q"],
    "data": ["object"],
    "href": ["a", "area", "embed", "link"],
    "icon": ["command"],
    "longdesc": ["frame", "iframe"],
    "manifest": ["html"],
    "poster": ["video"],
    "pluginspage": ["embed"],
    "pluginurl": ["embed"],
    "src": [
        "audio",
        "embed",
        "frame",
        "iframe",
        "img",
        "input",
        "script",
        "source",
        "track",
        "video",
    ],
    "srcset": ["img", "source"],
    "style": [""],
}

_WINDOWS_PATH = re.compile(r"^[a-zA-Z]:\\")
# RFC 3986 section 3.1
_SCHEME_PREFIX = re.compile(r"^[a-zA-Z][a-zA-Z\d+\-.]*:")
_STYLE_URL_VALUE = re.compile(r"^.*url\(('|\"|)?([^)]+?)('|\"|)?\).*")
_STYLE_URL_PROPERTIES = ("background", "background-image")
_HOST_REQUIRED_SCHEMES = ("http", "https", "ftp")


def get_base_link_attributes() -> Dict[str, List[str]]:
    return {attr: list(tags) for attr, tags in BASE_LINK_ATTRIBUTES.items()}


def is_absolute_url(url: str) -> bool:
    """True when `url` starts with a URI scheme. Windows drive paths are not schemes."""
    if _WINDOWS_PATH.match(url):
        return False
    return bool(_SCHEME_PREFIX.match(url))


def parse_attribute(name: str, value: Optional[str]) -> List[str]:
    """Split one attribute value into raw URL tokens."""
    if not value:
        return []
    if name == "style":
        tokens = []
        for declaration in value.split(";"):
            if not declaration:
                continue
            prop, sep, prop_value = declaration.partition(":")
            if not sep:
                continue
            if prop.strip() not in _STYLE_URL_PROPERTIES:
                continue
            m = _STYLE_URL_VALUE.match(prop_value)
            if m:
                tokens.append(m.group(2))
        return tokens
    if name == "srcset":
        tokens = []
        for candidate in value.split(","):
            parts = candidate.strip().split()
            if parts:
                tokens.append(parts[0])
        return tokens
    return [value]


def normalize_origin(url: str) -> str:
    """Lowercase the scheme and host of `url`; userinfo, path and query keep their case."""
    parts = urlsplit(url)
    if not parts.netloc:
        return url
    userinfo, at, hostport = parts.netloc.rpartition("@")
    netloc = userinfo + at + hostport.lower()
    if netloc == parts.netloc and parts.scheme == parts.scheme.lower():
        return url
    return urlunsplit(parts._replace(scheme=parts.scheme.lower(), netloc=netloc))


def resolve_url(link: str, base_url: str) -> str:
    """Resolve `link` against `base_url` and drop the fragment.

    Raises ValueError when the result is not a usable absolute URL.
    """
    joined = urljoin(base_url, link)
    url, _ = urldefrag(joined)
    parts = urlsplit(url)
    if not parts.scheme:
        raise ValueError(f"cannot resolve {link!r} against {base_url!r}")
    if parts.scheme.lower() in _HOST_REQUIRED_SCHEMES:
        if not parts.hostname:
            raise ValueError(f"missing host in {url!r}")
        # raises ValueError on a malformed port
        parts.port
    return normalize_origin(url)


def parse_link(link: str, base_url: str) -> ParsedLink:
    try:
        return ParsedLink(raw=link, url=resolve_url(link, base_url))
    except ValueError as e:
        return ParsedLink(raw=link, error=e)


class LinkExtractor:
    def __init__(
        self,
        attribute_rules: Optional[AttributeRules] = None,
        soup_factory: Optional[Callable[[str], BeautifulSoup]] = None,
    ):
        self.attribute_rules = attribute_rules if attribute_rules is not None else get_base_link_attributes()
        self._soup_factory = soup_factory or (
            lambda html: BeautifulSoup(html, "html.parser", multi_valued_attributes=None)
        )

    def extract_links(self, html: str, base_url: str, attribute_rules: Optional[AttributeRules] = None) -> List[ParsedLink]:
        """Return every link token in `html`, resolved against the effective base URL.

        Tokens that fail to resolve are returned with `error` set rather than
        raised; callers filter them out.
        """
        if not html:
            return []
        rules = attribute_rules if attribute_rules is not None else self.attribute_rules
        soup = self._soup_factory(html)

        raw_links: List[str] = []
        for attr, tags in rules.items():
            for element in self._elements_with(soup, attr, tags):
                raw_links.extend(parse_attribute(attr, element.get(attr)))

        effective_base = self._effective_base_url(soup, base_url)

        parsed = []
        for raw in raw_links:
            token = raw.strip()
            if not token:
                continue
            link = parse_link(token, effective_base)
            if link.error is not None:
                logger.debug("Unparseable link %r on %s: %s", token, base_url, link.error)
            parsed.append(link)
        return parsed

    def _elements_with(self, soup: BeautifulSoup, attr: str, tags: Sequence[str]):
        names = [t for t in tags if t]
        if len(names) != len(tags):
            # an empty tag name matches any element
            return soup.find_all(attrs={attr: True})
        return soup.find_all(names, attrs={attr: True})

    def _effective_base_url(self, soup: BeautifulSoup, base_url: str) -> str:
        # only the first <base href> counts
        base = soup.find("base", href=True)
        if base is None:
            return base_url
        html_base = (base.get("href") or "").strip()
        if not html_base:
            return base_url
        if is_absolute_url(html_base):
            return html_base
        url, _ = urldefrag(urljoin(base_url, html_base))
        return url
