import pytest

from osmcanvas.osm.models import Bounds, OSMNode, OSMWay


SAMPLE_OSM_XML = """<?xml version="1.0" encoding="UTF-8"?>
<osm version="0.6" generator="test">
  <bounds minlat="45.5000000" minlon="-73.6000000" maxlat="45.5200000" maxlon="-73.5500000"/>
  <node id="1" lat="45.5100000" lon="-73.5750000">
    <tag k="name" v="Centre"/>
  </node>
  <node id="2" lat="45.5150000" lon="-73.5800000"/>
  <node id="3" lat="45.5150000" lon="-73.5700000"/>
  <node id="4" lat="45.5050000" lon="-73.5700000"/>
  <node id="5" lat="45.5050000" lon="-73.5800000">
    <tag k="amenity" v="bench"/>
    <tag k="amenity" v="fountain"/>
  </node>
  <way id="100">
    <nd ref="1"/>
    <nd ref="2"/>
    <nd ref="3"/>
    <nd ref="4"/>
    <tag k="highway" v="motorway"/>
    <tag k="name" v="Autoroute"/>
  </way>
  <way id="101">
    <nd ref="2"/>
    <nd ref="3"/>
    <nd ref="4"/>
    <nd ref="5"/>
    <nd ref="2"/>
    <tag k="building" v="yes"/>
  </way>
  <way id="102">
    <nd ref="5"/>
    <nd ref="4"/>
    <nd ref="3"/>
    <tag k="leisure" v="park"/>
  </way>
  <way id="103">
    <nd ref="4"/>
    <nd ref="999"/>
    <nd ref="5"/>
    <nd ref="1"/>
    <tag k="natural" v="water"/>
  </way>
  <way id="104">
    <nd ref="1"/>
    <nd ref="2"/>
    <tag k="barrier" v="fence"/>
  </way>
  <way id="105">
    <nd ref="998"/>
    <nd ref="997"/>
    <tag k="building" v="garage"/>
  </way>
</osm>
"""


@pytest.fixture
def sample_xml():
    return SAMPLE_OSM_XML


@pytest.fixture
def bounds():
    return Bounds(min_lat=45.50, min_lon=-73.60, max_lat=45.52, max_lon=-73.55)


@pytest.fixture
def nodes():
    coords = {
        "1": (45.51, -73.575),
        "2": (45.515, -73.58),
        "3": (45.515, -73.57),
        "4": (45.505, -73.57),
        "5": (45.505, -73.58),
    }
    return {nid: OSMNode(id=nid, lat=lat, lon=lon) for nid, (lat, lon) in coords.items()}


def make_way(way_id, refs, **tags):
    return OSMWay(id=way_id, node_refs=list(refs), tags=dict(tags))
