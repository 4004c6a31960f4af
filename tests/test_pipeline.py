import pytest

from osmcanvas.config import CanvasConfig, PipelineConfig
from osmcanvas.osm.models import Category
from osmcanvas.pipeline import MapPipeline, MapScene, MapSession


def test_load_produces_draw_list(sample_xml):
    scene = MapPipeline().load(sample_xml)

    assert scene.ok
    assert scene.error is None
    # 105 has no resolvable refs, 104 is OTHER
    assert [p.way_id for p in scene.paths] == ["103", "102", "101", "100"]
    assert [p.category for p in scene.paths] == [
        Category.WATER, Category.PARK, Category.BUILDING, Category.HIGHWAY
    ]
    assert [w.id for w in scene.categorized[Category.OTHER]] == ["104"]


def test_load_keeps_raw_extract(sample_xml):
    scene = MapPipeline().load(sample_xml)
    assert len(scene.extract.nodes) == 5
    assert len(scene.extract.ways) == 6
    assert scene.projection.bounds == scene.extract.bounds


def test_motorway_projection_through_pipeline(sample_xml):
    scene = MapPipeline().load(sample_xml)
    motorway = scene.paths[-1]
    # Node 1 sits on the bounds midpoint
    assert (motorway.points[0].x, motorway.points[0].y) == pytest.approx((1500, 1500))
    assert motorway.style.stroke_width == 28


def test_water_path_skips_dangling_ref(sample_xml):
    scene = MapPipeline().load(sample_xml)
    water = scene.paths[0]
    # 4, 5, 1 resolve; closing point appended
    assert len(water.points) == 4
    assert water.closed


def test_parse_error_falls_back_to_empty_scene():
    scene = MapPipeline().load("<osm><node id='1' lat='0' lon='0'/></osm>")
    assert not scene.ok
    assert scene.paths == []
    assert scene.extract is None
    assert "missing bounds" in scene.error


def test_canvas_size_from_config(sample_xml):
    config = PipelineConfig(canvas=CanvasConfig(width=1000, height=500))
    scene = MapPipeline(config).load(sample_xml)
    assert (scene.canvas_width, scene.canvas_height) == (1000, 500)
    for path in scene.paths:
        for p in path.points:
            assert 0 <= p.x <= 1000 + 1e-6
            assert 0 <= p.y <= 500 + 1e-6


def test_load_file(tmp_path, sample_xml):
    path = tmp_path / "map.osm"
    path.write_text(sample_xml, encoding="utf-8")
    assert MapPipeline().load_file(path).ok


def test_load_file_honours_declared_encoding(tmp_path):
    xml = (
        '<?xml version="1.0" encoding="ISO-8859-1"?>'
        '<osm><bounds minlat="0" minlon="0" maxlat="1" maxlon="1"/>'
        '<node id="a" lat="0.1" lon="0.1"/><node id="b" lat="0.9" lon="0.9"/>'
        '<way id="7"><nd ref="a"/><nd ref="b"/>'
        '<tag k="highway" v="residential"/><tag k="name" v="Rue du Café"/></way>'
        '</osm>'
    )
    path = tmp_path / "latin1.osm"
    path.write_bytes(xml.encode("latin-1"))

    scene = MapPipeline().load_file(path)
    assert scene.ok
    assert scene.extract.ways[0].tags["name"] == "Rue du Café"
    assert len(scene.paths) == 1


def test_undecodable_file_falls_back_to_empty_scene(tmp_path):
    path = tmp_path / "broken.osm"
    path.write_bytes('<osm><bounds minlat="0" minlon="0" maxlat="1" maxlon="1"/><node id="a" lat="0" lon="0"><tag k="name" v="Caf\xe9"/></node></osm>'.encode("latin-1"))

    scene = MapPipeline().load_file(path)
    assert not scene.ok
    assert "malformed" in scene.error


def test_infinite_bounds_fall_back_to_empty_scene():
    scene = MapPipeline().load(
        '<osm><bounds minlat="0" minlon="-inf" maxlat="1" maxlon="1"/>'
        '<node id="a" lat="0.1" lon="0.1"/><node id="b" lat="0.9" lon="0.9"/>'
        '<way id="1"><nd ref="a"/><nd ref="b"/><tag k="highway" v="path"/></way></osm>'
    )
    assert not scene.ok
    assert scene.paths == []


def test_summary(sample_xml):
    summary = MapPipeline().load(sample_xml, generation=3).summary()
    assert summary["generation"] == 3
    assert summary["nodes"] == 5
    assert summary["ways"] == 6
    assert summary["paths"] == 4
    assert summary["categories"]["building"] == 2


def test_empty_scene():
    scene = MapScene.empty(3000, 3000, error="boom")
    assert not scene.ok
    assert scene.summary() == {"generation": 0, "ok": False, "paths": 0, "categories": {}, "error": "boom"}


class TestMapSession:
    OTHER_XML = (
        '<osm><bounds minlat="0" minlon="0" maxlat="1" maxlon="1"/>'
        '<node id="a" lat="0.1" lon="0.1"/><node id="b" lat="0.9" lon="0.9"/>'
        '<way id="only"><nd ref="a"/><nd ref="b"/><tag k="highway" v="path"/></way>'
        '</osm>'
    )

    def test_starts_empty(self):
        session = MapSession()
        assert session.scene.paths == []
        assert session.latest_requested == 0

    def test_load_adopts_result(self, sample_xml):
        session = MapSession()
        scene = session.load(sample_xml)
        assert scene is session.scene
        assert scene.generation == 1
        assert len(scene.paths) == 4

    def test_new_load_replaces_previous(self, sample_xml):
        session = MapSession()
        session.load(sample_xml)
        session.load(self.OTHER_XML)
        assert [p.way_id for p in session.scene.paths] == ["only"]
        assert session.scene.generation == 2

    def test_out_of_order_completion_keeps_newest(self, sample_xml):
        session = MapSession()
        first = session.request_load()
        second = session.request_load()

        assert session.complete_load(second, self.OTHER_XML)
        assert not session.complete_load(first, sample_xml)

        assert session.scene.generation == second
        assert [p.way_id for p in session.scene.paths] == ["only"]

    def test_stale_completion_before_newest(self, sample_xml):
        session = MapSession()
        first = session.request_load()
        second = session.request_load()

        assert not session.complete_load(first, sample_xml)
        assert session.scene.paths == []
        assert session.complete_load(second, sample_xml)
        assert session.scene.generation == second

    def test_failed_newest_load_yields_empty_scene(self, sample_xml):
        session = MapSession()
        session.load(sample_xml)
        session.load("not xml")
        assert session.scene.paths == []
        assert "malformed" in session.scene.error
