from typing import Optional
from urllib.parse import quote, urlparse


class URLUtils:

    @staticmethod
    def strip_www(host: str) -> str:
        """Drop a single leading 'www.' from a hostname."""
        if host.startswith("www."):
            return host[4:]
        return host

    @staticmethod
    def get_domain(url: str) -> Optional[str]:
        """
        Return the www.-stripped, lower-cased host of an absolute URL.

        Args:
            url: Absolute URL string

        Returns:
            The domain, or None when the URL has no parseable host.
        """
        if not url or not isinstance(url, str):
            return None
        try:
            host = urlparse(url.strip()).hostname
        except ValueError:
            return None
        if not host:
            return None
        return URLUtils.strip_www(host.lower())

    @staticmethod
    def derive_source_name(domain: str) -> str:
        """First domain label with its first letter upper-cased ('nytimes.com' -> 'Nytimes')."""
        label = domain.split(".")[0]
        return label[:1].upper() + label[1:]

    @staticmethod
    def encode_uri_component(value: str) -> str:
        # Same reserved set as the browser's encodeURIComponent
        return quote(value, safe="!~*'()")

    @staticmethod
    def link_preview_image(url: str, template: str) -> str:
        """Build an image fallback URL from a link-preview template."""
        return template.format(url=URLUtils.encode_uri_component(url))
