"""
# Lightmark: documents.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Documents, the public surface of the conversion.
"""

import copy
from typing import Awaitable, Callable, Optional

import httpx

from lightmark.constants import CONTAINER_PREFIX, CONTAINER_SUFFIX, FALLBACK_SOURCE
from lightmark.core import apply_rules, extract_front_matter
from lightmark.rules import STANDARD_RULES
from lightmark.sources import SourceRetrieval, retrieve_source


SourceLoader = Callable[[str], Awaitable[SourceRetrieval]]


class Document:
    """
    A Lightmark document, holding a source and the results of parsing it.

    Every load replaces the source and parses it afresh.
    Parsing produces the rendered HTML (the converted main content
    wrapped in `<div class="lightmark"><article>` and `</article></div>`)
    and the metadata (from the front matter).

    Sources are retrieved by `loader` if supplied, otherwise by `retrieve_source`
    (URLs over HTTP, through `http_client` if supplied, and anything else from the file system).
    A source that is unavailable is replaced by the fallback source.

    A document is not safe for concurrent loads;
    callers must await one load before starting the next.
    A load cancelled while awaiting retrieval leaves the document as it was.
    """
    _source: str
    _rendered_html: str
    _metadata: dict[str, str]
    _fallback_source: str
    _loader: Optional[SourceLoader]
    _http_client: Optional[httpx.AsyncClient]
    _verbose_mode_enabled: bool

    def __init__(self, fallback_source: str = FALLBACK_SOURCE, loader: Optional[SourceLoader] = None,
                 http_client: Optional[httpx.AsyncClient] = None, verbose_mode_enabled: bool = False):
        self._fallback_source = fallback_source
        self._source = fallback_source
        self._rendered_html = CONTAINER_PREFIX + CONTAINER_SUFFIX
        self._metadata = {}
        self._loader = loader
        self._http_client = http_client
        self._verbose_mode_enabled = verbose_mode_enabled

    @property
    def source(self) -> str:
        return self._source

    @property
    def rendered_html(self) -> str:
        return self._rendered_html

    @property
    def metadata(self) -> dict[str, str]:
        return copy.copy(self._metadata)

    @property
    def fallback_source(self) -> str:
        return self._fallback_source

    @fallback_source.setter
    def fallback_source(self, value: str):
        self._fallback_source = value

    async def load_from_source(self, identifier: str):
        """
        Load and parse the source identified by a URL or a path.

        An unavailable source is replaced by the fallback source;
        a transport failure is raised as SourceTransportException.
        """
        if self._loader is None:
            retrieval = await retrieve_source(identifier, self._http_client)
        else:
            retrieval = await self._loader(identifier)

        if retrieval.is_successful:
            self._source = retrieval.text
        else:
            self._source = self._fallback_source

        self.parse()

    def load_from_string(self, source: str):
        self._source = source
        self.parse()

    def parse(self):
        metadata, main_content = extract_front_matter(self._source, default_metadata=self._metadata)
        html = apply_rules(main_content, STANDARD_RULES, self._verbose_mode_enabled)

        self._metadata = metadata
        self._rendered_html = f'{CONTAINER_PREFIX}{html}{CONTAINER_SUFFIX}'
