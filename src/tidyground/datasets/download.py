"""Download remote files into a local cache."""

import http.client
import logging
import os
import tempfile
import urllib.error
import urllib.request
from pathlib import Path

log = logging.getLogger(__name__)


class DatasetError(Exception):
    """Raised when a dataset can't be downloaded or doesn't have the expected content."""

    pass


def fetch(url: str, destination: str | os.PathLike, timeout: float = 30) -> Path:
    """Download ``url`` into ``destination`` unless it's already there.

    The content is first written to a temporary file
    in the same directory and then moved in place,
    so an interrupted download never leaves a truncated
    file that would be mistaken for a cached one.

    :param url: The address of the file to download.
    :param destination: Local path where the file has to be stored.
    :param timeout: Seconds to wait for the server before giving up.
    """
    destination = Path(destination)
    if destination.exists():
        log.debug("Using cached %s", destination)
        return destination

    destination.parent.mkdir(parents=True, exist_ok=True)
    log.info("Downloading %s", url)
    with tempfile.NamedTemporaryFile(
        dir=destination.parent, prefix=".download-", delete=False
    ) as tmpfile:
        tmpname = tmpfile.name
        try:
            with urllib.request.urlopen(url, timeout=timeout) as response:
                while chunk := response.read(64 * 1024):
                    tmpfile.write(chunk)
        except (urllib.error.URLError, http.client.HTTPException, OSError, ValueError) as e:
            tmpfile.close()
            os.unlink(tmpname)
            raise DatasetError(f"Unable to download {url}: {e}") from e
        except BaseException:
            # Interrupted, never leave a partial file behind.
            tmpfile.close()
            os.unlink(tmpname)
            raise

    os.replace(tmpname, destination)
    log.info("Saved %s (%d bytes)", destination, destination.stat().st_size)
    return destination
