"""Retrieve reference genomes and annotations used by homology based stages.

References are downloaded once into the output `ref` directory and reused
for every sample and on later runs. A local copy counts as present when it
exists and is non-empty; downloads and decompression happen inside file
transactions so an interrupted fetch never leaves a partial file at the
final path.
"""
import collections
import gzip
import os
import shutil
import zlib
from urllib.parse import urlparse

import requests

from bacanno import utils
from bacanno.errors import ReferenceFetchError
from bacanno.log import logger
from bacanno.pipeline import datadict as dd
from bacanno.transaction import file_transaction, tx_tmpdir

ReferenceDataset = collections.namedtuple("ReferenceDataset", ["name", "url", "local_path"])

def get_reference(key, ctx):
    """Build a reference dataset from the `references` section of the configuration.

    Relative file names are placed in the run's reference directory.
    """
    refs = dd.get_references(ctx.config)
    if key not in refs:
        raise ValueError("Reference %s not found in configuration. Available: %s"
                         % (key, ", ".join(sorted(refs))))
    info = refs[key]
    fname = info.get("file") or utils.splitext_plus(os.path.basename(urlparse(info["url"]).path))[0]
    local_path = fname if os.path.isabs(fname) else os.path.join(ctx.ref_dir, fname)
    return ReferenceDataset(key, info["url"], local_path)

def obtain(dataset, ctx):
    """Retrieve a local copy of a reference dataset, downloading only when missing.
    """
    if dataset.local_path in ctx.fetched:
        return dataset.local_path
    if utils.file_exists(dataset.local_path):
        logger.info("Using cached reference %s: %s" % (dataset.name, dataset.local_path))
        ctx.fetched.add(dataset.local_path)
        return dataset.local_path
    logger.info("Downloading reference %s from %s" % (dataset.name, dataset.url))
    out_dir = utils.safe_makedir(os.path.dirname(os.path.abspath(dataset.local_path)))
    with tx_tmpdir(ctx.config, out_dir) as tmp_dir:
        dl_file = os.path.join(tmp_dir, os.path.basename(urlparse(dataset.url).path) or dataset.name)
        _download(dataset.url, dl_file, dd.get_download_timeout(ctx.config))
        with file_transaction(ctx.config, dataset.local_path) as tx_out_file:
            _decompress(dl_file, tx_out_file, dataset.url)
    ctx.fetched.add(dataset.local_path)
    return dataset.local_path

def _download(url, out_file, timeout):
    try:
        with requests.get(url, stream=True, timeout=timeout) as r:
            r.raise_for_status()
            with open(out_file, "wb") as out_handle:
                for chunk in r.iter_content(chunk_size=1024 * 1024):
                    out_handle.write(chunk)
    except (requests.exceptions.RequestException, OSError) as e:
        raise ReferenceFetchError(url, "Download failed: %s" % e)

def _decompress(in_file, out_file, url):
    """Decompress gzipped downloads, copying anything else unchanged.
    """
    try:
        if in_file.endswith(".gz"):
            with gzip.open(in_file, "rb") as in_handle:
                with open(out_file, "wb") as out_handle:
                    shutil.copyfileobj(in_handle, out_handle)
        else:
            shutil.copyfile(in_file, out_file)
    except (OSError, EOFError, zlib.error) as e:
        raise ReferenceFetchError(url, "Decompression failed: %s" % e)
    if not utils.file_exists(out_file):
        raise ReferenceFetchError(url, "Retrieved reference is empty")
