#!/usr/bin/env python
# -*- coding: utf-8 -*-
# pylint: skip-file
"""
This module contains tests.
"""

import io
import struct
import os
import zipfile

BASE_PATH = os.path.dirname(os.path.realpath(__file__))
DATA_PATH = os.path.join(BASE_PATH, "data")
MUSICXML_FILES = [
    os.path.join(DATA_PATH, fn)
    for fn in [
        "c_major_4.musicxml",
        "namespaced.musicxml",
        "transposing_octaves.musicxml",
        "notations.musicxml",
    ]
]

CONTAINER_MANIFEST = """<?xml version="1.0" encoding="UTF-8"?>
<container>
  <rootfiles>
    <rootfile full-path="{}" media-type="application/vnd.recordare.musicxml+xml"/>
  </rootfiles>
</container>
"""

TYPE_BY_DURATION = {16: "whole", 8: "half", 4: "quarter", 2: "eighth", 1: "sixteenth"}


def read_data(filename):
    with open(filename, "r", encoding="utf-8") as f:
        return f.read()


def make_note(note):
    """
    MusicXML <note> for a note given as a dictionary with keys
    step, octave, alter, duration, type, rest, tie, slur, articulation
    (all optional except step/octave for pitched notes)
    """
    duration = note.get("duration", 4)
    lines = ["      <note>"]
    if note.get("rest"):
        lines.append("        <rest/>")
    else:
        alter = note.get("alter")
        alter_xml = "<alter>{}</alter>".format(alter) if alter is not None else ""
        lines.append(
            "        <pitch><step>{}</step>{}<octave>{}</octave></pitch>".format(
                note["step"], alter_xml, note["octave"]
            )
        )
    lines.append("        <duration>{}</duration>".format(duration))
    if note.get("tie"):
        lines.append('        <tie type="{}"/>'.format(note["tie"]))
    lines.append(
        "        <type>{}</type>".format(
            note.get("type", TYPE_BY_DURATION.get(duration, "quarter"))
        )
    )
    notations = []
    if note.get("slur"):
        notations.append('<slur type="{}" number="1"/>'.format(note["slur"]))
    if note.get("articulation"):
        notations.append(
            "<articulations><{}/></articulations>".format(note["articulation"])
        )
    if notations:
        lines.append("        <notations>{}</notations>".format("".join(notations)))
    lines.append("      </note>")
    return "\n".join(lines)


def make_musicxml(notes, divisions=4):
    """
    single part, single measure partwise MusicXML document
    """
    body = "\n".join(make_note(note) for note in notes)
    return """<?xml version="1.0" encoding="UTF-8"?>
<score-partwise version="3.1">
  <part-list>
    <score-part id="P1"><part-name>Music</part-name></score-part>
  </part-list>
  <part id="P1">
    <measure number="1">
      <attributes>
        <divisions>{}</divisions>
      </attributes>
{}
    </measure>
  </part>
</score-partwise>
""".format(divisions, body)


def make_container(entries):
    """
    bytes of a zip archive with the given {name: content} entries
    """
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as archive:
        for name, content in entries.items():
            archive.writestr(name, content)
    return buffer.getvalue()


def make_mxl(xml_text, payload_name="score.xml", with_manifest=True):
    entries = {}
    if with_manifest:
        entries["META-INF/container.xml"] = CONTAINER_MANIFEST.format(payload_name)
    entries[payload_name] = xml_text
    return make_container(entries)


def corrupt_entry(data, name, n_bytes=10):
    """
    copy of the zip archive `data` with the first `n_bytes` of the
    compressed data of entry `name` inverted
    """
    with zipfile.ZipFile(io.BytesIO(data)) as archive:
        info = archive.getinfo(name)
    offset = info.header_offset
    name_length, extra_length = struct.unpack("<HH", data[offset + 26:offset + 30])
    start = offset + 30 + name_length + extra_length
    stop = start + min(n_bytes, info.compress_size)
    damaged = bytes(b ^ 0xFF for b in data[start:stop])
    return data[:start] + damaged + data[stop:]


def quarters(*pitches, **extra):
    """
    note dictionaries for consecutive quarter notes, e.g.
    quarters(("C", 4), ("F", 4, 1))
    """
    notes = []
    for pitch in pitches:
        note = {"step": pitch[0], "octave": pitch[1], "duration": 4}
        if len(pitch) > 2:
            note["alter"] = pitch[2]
        note.update(extra)
        notes.append(note)
    return notes
