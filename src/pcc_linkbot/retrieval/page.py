"""A fetched HTML document, parsed at most once.

The labeled-field tiers work on the raw text; og:title, <title> and the
meta refresh are read from the parsed tree.
"""

from functools import cached_property
from typing import Union

from bs4 import BeautifulSoup


class Page:
    def __init__(self, html: str):
        self.html = html or ""

    @cached_property
    def soup(self) -> BeautifulSoup:
        return BeautifulSoup(self.html, "html.parser")


def as_page(page: Union[str, Page]) -> Page:
    return page if isinstance(page, Page) else Page(page)
