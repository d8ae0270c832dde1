"""
# Lightmark: cli.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Command-line interface.
"""

import argparse
import asyncio
import os
import posixpath
import re
import sys
from typing import Optional

import httpx

from lightmark._version import __version__
from lightmark.constants import (
    COMMAND_LINE_ERROR_EXIT_CODE,
    GENERIC_ERROR_EXIT_CODE,
    STANDALONE_PAGE_TEMPLATE,
    UNTITLED_TITLE,
)
from lightmark.documents import Document
from lightmark.exceptions import SourceTransportException
from lightmark.sources import is_url
from lightmark.utilities import escape_html

DESCRIPTION = '''
    Convert Lightmark (a lightweight markdown dialect) to HTML.
'''
SOURCES_HELP = '''
    paths or http(s) URLs of Lightmark sources to be converted
'''
OUTPUT_DIRECTORY_HELP = '''
    directory to write HTML files to
    (default: beside each source path, or the working directory for URLs)
'''
FALLBACK_SOURCE_HELP = '''
    Lightmark source to convert in place of a source that is unavailable
'''
VERBOSE_MODE_HELP = '''
    run in verbose mode (prints every rule applied)
'''
STANDALONE_MODE_HELP = '''
    write a complete HTML page, titled by the `title` metadata, rather than a fragment
'''
INDEX_NAME = 'index'


def derive_html_file_name(identifier: str, output_directory: Optional[str] = None) -> str:
    """
    Derive the name of the HTML file to be written for a source.

    The name is that of the source with any `.md` extension replaced by `.html`,
    where a URL with an empty last path segment is named `index`.
    A path source's HTML file goes beside it, and a URL source's in the working directory,
    unless `output_directory` is given.
    """
    if is_url(identifier):
        base_name = posixpath.basename(httpx.URL(identifier).path) or INDEX_NAME
        directory = output_directory or ''
    else:
        identifier = os.path.normpath(identifier)
        base_name = os.path.basename(identifier)
        directory = output_directory if output_directory is not None else os.path.dirname(identifier)

    md_name = re.sub(pattern=r'[.] md \Z', repl='', string=base_name, flags=re.VERBOSE)

    return os.path.join(directory, f'{md_name}.html')


def build_standalone_page(document: Document) -> str:
    title = document.metadata.get('title') or UNTITLED_TITLE

    return STANDALONE_PAGE_TEMPLATE.format(title=escape_html(title), fragment=document.rendered_html)


def parse_command_line_arguments(arguments: Optional[list[str]] = None) -> argparse.Namespace:
    argument_parser = argparse.ArgumentParser(prog='lightmark', description=DESCRIPTION)
    argument_parser.add_argument(
        '-v', '--version',
        action='version',
        version=f'{argument_parser.prog} version {__version__}',
    )
    argument_parser.add_argument(
        '-o', '--output-directory',
        dest='output_directory',
        help=OUTPUT_DIRECTORY_HELP,
        metavar='DIRECTORY',
    )
    argument_parser.add_argument(
        '-f', '--fallback-source',
        dest='fallback_source',
        help=FALLBACK_SOURCE_HELP,
        metavar='SOURCE',
    )
    argument_parser.add_argument(
        '-x', '--verbose',
        dest='verbose_mode_enabled',
        action='store_true',
        help=VERBOSE_MODE_HELP,
    )
    argument_parser.add_argument(
        '-s', '--standalone',
        dest='standalone_mode_enabled',
        action='store_true',
        help=STANDALONE_MODE_HELP,
    )
    argument_parser.add_argument(
        'sources',
        help=SOURCES_HELP,
        metavar='source',
        nargs='+',
    )

    return argument_parser.parse_args(arguments)


def write_file(file_name: str, text: str):
    with open(file_name, 'w', encoding='utf-8') as file:
        file.write(text)


async def generate_html_file(identifier: str, html_file_name: str, parsed_arguments: argparse.Namespace,
                             http_client: httpx.AsyncClient):
    document = Document(http_client=http_client, verbose_mode_enabled=parsed_arguments.verbose_mode_enabled)
    if parsed_arguments.fallback_source is not None:
        document.fallback_source = parsed_arguments.fallback_source

    await document.load_from_source(identifier)

    if parsed_arguments.standalone_mode_enabled:
        html = build_standalone_page(document)
    else:
        html = document.rendered_html + '\n'

    await asyncio.to_thread(write_file, html_file_name, html)


async def generate_html_files(parsed_arguments: argparse.Namespace, http_client: httpx.AsyncClient) -> int:
    exit_code = 0
    for identifier in parsed_arguments.sources:
        html_file_name = derive_html_file_name(identifier, parsed_arguments.output_directory)
        try:
            await generate_html_file(identifier, html_file_name, parsed_arguments, http_client)
        except SourceTransportException as transport_exception:
            print(transport_exception, file=sys.stderr)
            exit_code = GENERIC_ERROR_EXIT_CODE
            continue
        except OSError:
            print(f'error: cannot write to `{html_file_name}`', file=sys.stderr)
            exit_code = GENERIC_ERROR_EXIT_CODE
            continue

        print(f'success: wrote to `{html_file_name}`')

    return exit_code


async def run(parsed_arguments: argparse.Namespace, http_client: Optional[httpx.AsyncClient] = None) -> int:
    """
    Convert every source named on the command line, returning the exit code.

    Unavailable sources are converted from the fallback source.
    A source that fails to transport (or an HTML file that cannot be written) is reported on stderr
    and does not stop the conversion of the rest.
    """
    output_directory = parsed_arguments.output_directory
    if output_directory is not None and not os.path.isdir(output_directory):
        print(f'error: argument -o/--output-directory: directory `{output_directory}` not found', file=sys.stderr)
        return COMMAND_LINE_ERROR_EXIT_CODE

    if http_client is None:
        async with httpx.AsyncClient(timeout=None, follow_redirects=True) as client:
            return await generate_html_files(parsed_arguments, client)

    return await generate_html_files(parsed_arguments, http_client)


def main(arguments: Optional[list[str]] = None):
    parsed_arguments = parse_command_line_arguments(arguments)
    exit_code = asyncio.run(run(parsed_arguments))

    if exit_code != 0:
        sys.exit(exit_code)


if __name__ == '__main__':
    main()
