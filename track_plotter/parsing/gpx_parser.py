"""GPX track-point extraction.

Only ``trkpt`` elements are read; routes and waypoints are ignored. Tag
matching is namespace agnostic so GPX 1.0, 1.1 and vendor extension
namespaces (``gpxtpx:speed`` and friends) all resolve to the same names.
"""
from __future__ import annotations

import logging

from lxml import etree

from track_plotter.model.geo_types import GeoPoint, make_point

logger = logging.getLogger(__name__)

# Descendant element name -> GeoPoint field.
_FIELD_TAGS = {
    "ele": "altitude",
    "speed": "speed",
    "course": "heading",
    "heading": "heading",
}


def _local_name(tag: str) -> str:
    name = tag.rsplit("}", 1)[-1]
    return name.rsplit(":", 1)[-1].lower()


def _make_parser() -> etree.XMLParser:
    return etree.XMLParser(
        recover=True,
        resolve_entities=False,
        no_network=True,
        huge_tree=True,
    )


def _trkpt_to_point(element: etree._Element) -> GeoPoint | None:
    fields: dict[str, str] = {}
    for child in element.iterdescendants():
        if not isinstance(child.tag, str):
            continue
        field = _FIELD_TAGS.get(_local_name(child.tag))
        if field is None or child.text is None:
            continue
        fields[field] = child.text.strip()
    return make_point(
        element.get("lat"),
        element.get("lon"),
        fields.get("altitude"),
        fields.get("speed"),
        fields.get("heading"),
    )


def parse_gpx(raw: bytes) -> list[GeoPoint]:
    """Return every usable track point in document order."""
    try:
        root = etree.fromstring(raw, parser=_make_parser())
    except etree.XMLSyntaxError as exc:
        logger.debug("GPX document could not be parsed: %s", exc)
        return []
    if root is None:
        return []

    points: list[GeoPoint] = []
    skipped = 0
    for element in root.iter():
        if not isinstance(element.tag, str) or _local_name(element.tag) != "trkpt":
            continue
        point = _trkpt_to_point(element)
        if point is None:
            skipped += 1
            continue
        points.append(point)
    if skipped:
        logger.debug("Discarded %s malformed GPX track points", skipped)
    return points
