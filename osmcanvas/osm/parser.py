"""
OSM XML parser

Parses an OSM XML document into OSMNode, OSMWay and Bounds objects
"""

import math
from pathlib import Path
from typing import Dict, List, Union
from xml.etree import ElementTree as ET
from loguru import logger

from ..exceptions import ParseError
from .models import Bounds, OSMExtract, OSMNode, OSMWay


class OSMXmlParser:
    """Parses OSM XML documents"""

    @staticmethod
    def parse(raw_text: Union[str, bytes]) -> OSMExtract:
        """
        Parse OSM XML into a node index, a way list and the bounding box

        Does not check that way node references exist; dangling references
        are dropped later when paths are built.

        Args:
            raw_text: OSM XML content

        Returns:
            OSMExtract with nodes keyed by id, ways in document order and bounds

        Raises:
            ParseError: If the XML is malformed or the bounds are missing,
                non-numeric or degenerate
        """
        try:
            root = ET.fromstring(raw_text)
        except ET.ParseError as e:
            raise ParseError(f"malformed OSM XML: {e}") from e

        bounds = OSMXmlParser._parse_bounds(root)
        nodes = OSMXmlParser._parse_nodes(root)
        ways = OSMXmlParser._parse_ways(root)

        logger.info(f"Parsed OSM extract: {len(nodes)} nodes, {len(ways)} ways")
        return OSMExtract(nodes=nodes, ways=ways, bounds=bounds)

    @staticmethod
    def parse_file(file_path: Union[str, Path]) -> OSMExtract:
        """Parse an OSM XML file from disk"""
        logger.info(f"Parsing OSM data from {file_path}")
        with open(file_path, 'rb') as f:
            return OSMXmlParser.parse(f.read())

    @staticmethod
    def _parse_bounds(root: ET.Element) -> Bounds:
        element = root if root.tag == "bounds" else root.find(".//bounds")
        if element is None:
            raise ParseError("missing bounds")
        try:
            values = [float(element.get(attr)) for attr in ("minlat", "minlon", "maxlat", "maxlon")]
        except (TypeError, ValueError) as e:
            raise ParseError("missing bounds") from e
        if not all(math.isfinite(v) for v in values):
            raise ParseError("missing bounds")
        return Bounds(*values)

    @staticmethod
    def _parse_tags(element: ET.Element) -> Dict[str, str]:
        # Duplicate keys: last one wins
        return {tag.get('k'): tag.get('v', '') for tag in element.findall('tag') if tag.get('k') is not None}

    @staticmethod
    def _parse_nodes(root: ET.Element) -> Dict[str, OSMNode]:
        nodes = {}
        skipped = 0
        for element in root.iter('node'):
            node_id = element.get('id')
            try:
                lat = float(element.get('lat'))
                lon = float(element.get('lon'))
            except (TypeError, ValueError):
                skipped += 1
                continue
            if node_id is None or not (math.isfinite(lat) and math.isfinite(lon)):
                skipped += 1
                continue
            nodes[node_id] = OSMNode(
                id=node_id,
                lat=lat,
                lon=lon,
                tags=OSMXmlParser._parse_tags(element)
            )

        if skipped > 0:
            logger.warning(f"{skipped} nodes had no id or no finite lat/lon and were skipped")
        return nodes

    @staticmethod
    def _parse_ways(root: ET.Element) -> List[OSMWay]:
        ways = []
        for element in root.iter('way'):
            node_refs = [nd.get('ref') for nd in element.findall('nd') if nd.get('ref') is not None]
            ways.append(OSMWay(
                id=element.get('id', ''),
                node_refs=node_refs,
                tags=OSMXmlParser._parse_tags(element)
            ))
        return ways


def parse(raw_text: Union[str, bytes]) -> OSMExtract:
    """Parse OSM XML text; see OSMXmlParser.parse"""
    return OSMXmlParser.parse(raw_text)
