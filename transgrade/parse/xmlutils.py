#!/usr/bin/python
# -*- coding: utf-8 -*-
"""
This module contains namespace agnostic element queries.

MusicXML files in the wild come with and without default
namespaces and prefixes, so every lookup in this package
matches on the local name of a tag only.
"""


def local_name(tag):
    """
    local part of an ElementTree tag ('{uri}note' and 'mx:note' -> 'note')
    """
    if not isinstance(tag, str):
        # comments and processing instructions
        return ""
    if tag.startswith("{"):
        tag = tag.rsplit("}", 1)[-1]
    return tag.rsplit(":", 1)[-1]


def iter_local(element, name):
    """
    Iterate over all descendants of `element` (not the element itself)
    with local name `name`, in document order.
    """
    for descendant in element.iter():
        if descendant is element:
            continue
        if local_name(descendant.tag) == name:
            yield descendant


def find_local(element, name):
    """
    first descendant with local name `name` or None
    """
    if element is None:
        return None
    return next(iter_local(element, name), None)


def find_all_local(element, name):
    if element is None:
        return []
    return list(iter_local(element, name))


def children_local(element, name):
    """
    direct children with local name `name`
    """
    if element is None:
        return []
    return [child for child in element if local_name(child.tag) == name]


def text_local(element, name, default=None):
    """
    Stripped text of the first descendant named `name`.

    Returns `default` if there is no such descendant or its text is empty.
    """
    found = find_local(element, name)
    if found is None or found.text is None:
        return default
    text = found.text.strip()
    return text if text else default


def attr_local(element, name, default=None):
    """
    attribute value looked up by local name
    """
    if element is None:
        return default
    if name in element.attrib:
        return element.attrib[name]
    for key, value in element.attrib.items():
        if local_name(key) == name:
            return value
    return default


def to_int(text, default):
    """
    integer value of a MusicXML text node, `default` if absent or invalid
    """
    if text is None:
        return default
    try:
        return int(round(float(text)))
    except (ValueError, OverflowError):
        return default
