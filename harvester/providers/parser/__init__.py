"""Page parsers.

DeliciousHtmlParser - BeautifulSoup-based parser for del.icio.us profile
pages (bookmark blocks plus pagination).
"""

from harvester.providers.parser.delicious_html_parser import DeliciousHtmlParser

__all__ = ["DeliciousHtmlParser"]
