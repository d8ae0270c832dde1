"""
# Lightmark: sources.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Retrieval of Lightmark sources from URLs and files.

A retrieval has three outcomes:
- success, with the retrieved text;
- unavailability (e.g. HTTP 404, or a missing file), which is not an error;
- transport failure (e.g. a refused connection), raised as SourceTransportException.
"""

import asyncio
import re
from typing import NamedTuple, Optional

import httpx

from lightmark.exceptions import SourceTransportException


class SourceRetrieval(NamedTuple):
    is_successful: bool
    text: str


UNAVAILABLE_SOURCE_RETRIEVAL = SourceRetrieval(is_successful=False, text='')


def is_url(identifier: str) -> bool:
    return re.match(pattern=r'https?://', string=identifier, flags=re.IGNORECASE) is not None


async def retrieve_url(url: str, http_client: Optional[httpx.AsyncClient] = None,
                       timeout: Optional[float] = None) -> SourceRetrieval:
    """
    Retrieve a source over HTTP.

    If `http_client` is not supplied, a client is created for this retrieval alone,
    with no timeout unless `timeout` is given.
    A body that cannot be decoded in its declared charset (UTF-8 if undeclared)
    is a transport failure.
    """
    try:
        if http_client is None:
            async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as client:
                response = await client.get(url)
        else:
            response = await http_client.get(url)
    except httpx.TransportError as transport_error:
        raise SourceTransportException(url, f'error: cannot retrieve `{url}`: {transport_error}') \
            from transport_error

    if not response.is_success:
        return UNAVAILABLE_SOURCE_RETRIEVAL

    try:
        text = response.content.decode(response.encoding or 'utf-8')
    except (LookupError, UnicodeDecodeError) as decode_error:
        raise SourceTransportException(url, f'error: cannot decode `{url}`: {decode_error}') from decode_error

    return SourceRetrieval(is_successful=True, text=text)


def read_file(path: str) -> str:
    with open(path, 'r', encoding='utf-8') as file:
        return file.read()


async def retrieve_file(path: str) -> SourceRetrieval:
    """
    Retrieve a source from the file system.

    Missing, directory, and permission-denied paths count as unavailable;
    any other failure to read the file is a transport failure.
    """
    try:
        text = await asyncio.to_thread(read_file, path)
    except (FileNotFoundError, IsADirectoryError, PermissionError):
        return UNAVAILABLE_SOURCE_RETRIEVAL
    except (OSError, UnicodeDecodeError) as read_error:
        raise SourceTransportException(path, f'error: cannot read `{path}`: {read_error}') from read_error

    return SourceRetrieval(is_successful=True, text=text)


async def retrieve_source(identifier: str, http_client: Optional[httpx.AsyncClient] = None) -> SourceRetrieval:
    if is_url(identifier):
        return await retrieve_url(identifier, http_client)

    return await retrieve_file(identifier)
