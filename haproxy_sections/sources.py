"""
Line sources for the section classifier.

The classifier only sees an iterator of lines; everything about
where those lines come from lives here:

    from haproxy_sections.sources import open_lines

    with open_lines("/var/lib/haproxy/conf/haproxy.config") as lines:
        document = SectionClassifier().classify(lines)

    with open_lines("http://router.example:1936/haproxy.config") as lines:
        ...

Any failure to open or read the source, including one that happens
halfway through the file, surfaces as ConfigReadError. The file or
HTTP response is always closed when the with-block exits.
"""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterable, Iterator, TextIO, Union

import requests

from haproxy_sections.errors import ConfigReadError

logger = logging.getLogger(__name__)

Source = Union[str, Path]

URL_SCHEMES = ("http://", "https://")


def is_url(source: Source) -> bool:
    return isinstance(source, str) and source.startswith(URL_SCHEMES)


def _guarded(source: Source, lines: Iterable[str]) -> Iterator[str]:
    # Read errors are raised lazily by the consumer's loop, so they
    # have to be translated here rather than at open time.
    try:
        for line in lines:
            yield line
    except (OSError, UnicodeDecodeError, requests.RequestException) as e:
        raise ConfigReadError(source, str(e)) from e


def iter_stream_lines(stream: TextIO, name: str = "<stream>") -> Iterator[str]:
    """
    Yield lines from an already-open text stream.

    The stream is not closed; whoever opened it owns it.
    """
    return _guarded(name, stream)


@contextmanager
def _open_file(path: Path, encoding: str) -> Iterator[Iterator[str]]:
    try:
        handle = open(path, encoding=encoding)
    except OSError as e:
        raise ConfigReadError(path, e.strerror or str(e)) from e
    try:
        logger.debug("Reading config from file %s", path)
        yield _guarded(path, handle)
    finally:
        handle.close()


@contextmanager
def _open_url(url: str, encoding: str, timeout: float) -> Iterator[Iterator[str]]:
    try:
        response = requests.get(url, stream=True, timeout=timeout)
    except requests.RequestException as e:
        raise ConfigReadError(url, str(e)) from e
    try:
        response.raise_for_status()
    except requests.RequestException as e:
        response.close()
        raise ConfigReadError(url, str(e)) from e
    try:
        charset = response.encoding or encoding
        logger.debug("Reading config from %s (status %s, %s)", url, response.status_code, charset)
        yield _guarded(url, _decode_lines(response.iter_lines(), charset))
    finally:
        response.close()


def _decode_lines(raw_lines: Iterable[bytes], encoding: str) -> Iterator[str]:
    # iter_lines(decode_unicode=True) would replace bad bytes with U+FFFD;
    # decode strictly so URLs fail the same way files do.
    for raw_line in raw_lines:
        yield raw_line.decode(encoding)


@contextmanager
def open_lines(
    source: Source,
    encoding: str = "utf-8",
    timeout: float = 10.0,
) -> Iterator[Iterator[str]]:
    """
    Open a config source and yield a lazy iterator over its lines.

    Args:
        source: Filesystem path, or an http:// / https:// URL
        encoding: Text encoding of the source
        timeout: HTTP connect/read timeout in seconds (URLs only)

    Raises:
        ConfigReadError: if the source cannot be opened or read
    """
    if is_url(source):
        with _open_url(source, encoding, timeout) as lines:
            yield lines
    else:
        with _open_file(Path(source), encoding) as lines:
            yield lines
