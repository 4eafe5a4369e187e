#!/usr/bin/python
# -*- coding: utf-8 -*-
"""
This module contains methods to unwrap compressed
MusicXML containers (.mxl) and decode raw score input.
"""
import io
import logging
import posixpath
import re
import zipfile
import zlib
import xml.etree.ElementTree as ET

from ..config import (
    MAX_CONTAINER_DEPTH,
    CONTAINER_MANIFEST,
    CONVENTIONAL_SCORE_NAMES,
    MUSICXML_SUFFIXES,
)
from ..errors import FormatError, ExtractionError
from .xmlutils import find_local, attr_local

logger = logging.getLogger(__name__)

ZIP_SIGNATURE = b"PK"
PDF_SIGNATURE = b"%PDF"
XML_ENCODING = re.compile(br"""encoding=['"]([A-Za-z0-9._-]+)['"]""")


def is_compressed(data):
    """
    True if `data` starts with the zip signature.
    """
    if isinstance(data, str):
        return data.startswith("PK")
    return bytes(data[:2]) == ZIP_SIGNATURE


def extract_musicxml(data, max_depth=MAX_CONTAINER_DEPTH):
    """
    Turn raw score input into MusicXML text.

    Parameters
    ----------
    data : str or bytes
        Plain MusicXML text, raw bytes of a MusicXML file, or the
        bytes of a compressed container. A `str` starting with "PK"
        is taken to be a binary string (one char per byte).
    max_depth : int
        How many containers nested inside a container are unwrapped.

    Returns
    -------
    xml_text : str
        The decoded MusicXML document.

    Raises
    ------
    FormatError
        Empty, undecodable, corrupt or non-MusicXML (PDF) input.
    ExtractionError
        A container without resolvable payload, or nested deeper
        than `max_depth`.
    """
    if data is None or len(data) == 0:
        raise FormatError("empty input")

    if isinstance(data, str):
        if not is_compressed(data):
            return _check_text(data)
        try:
            data = data.encode("latin-1")
        except UnicodeEncodeError as err:
            raise FormatError("input looks compressed but is not a binary string") from err

    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise FormatError("unsupported input type: {}".format(type(data).__name__))

    data = bytes(data)
    if is_compressed(data):
        return _extract_from_container(data, depth=0, max_depth=max_depth)
    return _check_text(decode_xml_bytes(data))


def decode_xml_bytes(data):
    """
    Decode an uncompressed XML payload, honoring a BOM or
    the encoding declared in the XML declaration.
    """
    if data.lstrip()[:4] == PDF_SIGNATURE:
        raise FormatError("input is a PDF document, not MusicXML")
    if data.startswith(b"\xef\xbb\xbf"):
        encoding = "utf-8-sig"
    elif data.startswith((b"\xff\xfe", b"\xfe\xff")):
        encoding = "utf-16"
    else:
        declared = XML_ENCODING.search(data[:200])
        encoding = declared.group(1).decode("ascii") if declared else "utf-8"
    try:
        return data.decode(encoding)
    except (UnicodeDecodeError, LookupError) as err:
        raise FormatError("cannot decode input as {}".format(encoding)) from err


def _check_text(text):
    stripped = text.strip()
    if stripped.startswith("%PDF"):
        raise FormatError("input is a PDF document, not MusicXML")
    if not stripped:
        raise FormatError("empty input")
    return stripped


def _extract_from_container(data, depth, max_depth):
    try:
        archive = zipfile.ZipFile(io.BytesIO(data))
    except (zipfile.BadZipFile, EOFError, OSError) as err:
        raise FormatError("corrupt compressed container") from err

    with archive:
        entry = resolve_payload_entry(archive)
        if entry is None:
            raise ExtractionError("no MusicXML payload found in compressed container")
        payload = read_entry(archive, entry)

    logger.debug("extracted %s from container (depth %d)", entry, depth)
    if is_compressed(payload):
        if depth >= max_depth:
            raise ExtractionError(
                "compressed container nested deeper than {} level(s)".format(max_depth)
            )
        return _extract_from_container(payload, depth=depth + 1, max_depth=max_depth)
    return _check_text(decode_xml_bytes(payload))


def resolve_payload_entry(archive):
    """
    Name of the score entry inside a container archive.

    The root file named in META-INF/container.xml wins, then
    a conventional file name, then the first MusicXML entry
    outside META-INF (top level entries first).
    Returns None if nothing qualifies.
    """
    names = [name for name in archive.namelist() if not name.endswith("/")]

    rootfile = _manifest_rootfile(archive, names)
    if rootfile is not None:
        return rootfile

    for name in CONVENTIONAL_SCORE_NAMES:
        if name in names:
            return name

    candidates = [
        name
        for name in names
        if not name.startswith("META-INF")
        and posixpath.splitext(name)[1].lower() in MUSICXML_SUFFIXES
    ]
    candidates.sort(key=lambda name: "/" in name)
    return candidates[0] if candidates else None


def _manifest_rootfile(archive, names):
    if CONTAINER_MANIFEST not in names:
        return None
    try:
        manifest = ET.fromstring(read_entry(archive, CONTAINER_MANIFEST))
    except (ExtractionError, ET.ParseError):
        logger.warning("ignoring malformed %s", CONTAINER_MANIFEST)
        return None
    full_path = attr_local(find_local(manifest, "rootfile"), "full-path")
    if full_path and full_path in names:
        return full_path
    return None


def read_entry(archive, name):
    """
    Bytes of an archive entry.

    Raises
    ------
    ExtractionError
        If the entry is missing, encrypted, uses an unsupported
        compression method or its compressed data is damaged.
    """
    try:
        return archive.read(name)
    except (zipfile.BadZipFile, zlib.error, EOFError, KeyError, OSError,
            RuntimeError, NotImplementedError) as err:
        raise ExtractionError("cannot read container entry {}: {}".format(name, err)) from err
