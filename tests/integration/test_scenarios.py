"""End-to-end tests for complete Voronoi diagrams.

Each scenario runs a sweep to completion and checks the finished edge list:
face shapes, the Euler characteristic, and that every site sits inside its
own face, clipped to the rectangle.
"""

import random

import pytest

from sweepvoronoi.config import DiagnosticsConfig, VoronoiSettings
from sweepvoronoi.core import (
    VoronoiSweep,
    element_counts,
    euler_characteristic,
    face_area,
    face_centroid,
    face_polygon,
    point_in_polygon,
    validate_dcel,
)
from sweepvoronoi.domain import Bounds, Point
from sweepvoronoi.io import diagram_to_dict

SQUARE = Bounds(0.0, 0.0, 10.0, 10.0)
WIDE = Bounds(-5.0, -5.0, 15.0, 15.0)


def finished_sweep(points: list[Point], bounds: Bounds, check: bool = False) -> VoronoiSweep:
    settings = VoronoiSettings(diagnostics=DiagnosticsConfig(check_invariants=check))
    sweep = VoronoiSweep(points, bounds, settings)
    sweep.run()
    return sweep


def assert_well_formed(sweep: VoronoiSweep) -> None:
    """Structural checks every finished diagram must pass."""
    faces = sweep.faces()
    assert validate_dcel(faces, check_lengths=True) == []
    assert euler_characteristic(faces) == 2
    for face in faces:
        for edge in face.edges():
            assert edge.twin.origin is not edge.origin

    site_faces = sweep.site_faces()
    assert set(site_faces) == set(sweep.points())
    assert len({id(face) for face in site_faces.values()}) == len(site_faces)

    for site, face in site_faces.items():
        polygon = face_polygon(face)
        assert point_in_polygon(site, polygon), site
        for vertex in polygon:
            assert sweep.bounds.contains(vertex, strict=False, tolerance=1e-9), vertex


class TestSingleSite:
    """One site owns the whole rectangle."""

    def test_whole_rectangle(self) -> None:
        """Test the only face is the rectangle itself."""
        sweep = finished_sweep([Point(3.0, 4.0)], SQUARE)

        face = sweep.site_faces()[Point(3.0, 4.0)]
        assert face_area(face) == pytest.approx(100.0)
        assert element_counts(sweep.faces()) == (4, 4, 2)
        assert_well_formed(sweep)


class TestTwoSites:
    """Two level sites split the rectangle down the middle."""

    @pytest.fixture
    def sweep(self) -> VoronoiSweep:
        return finished_sweep([Point(0.0, 0.0), Point(10.0, 0.0)], WIDE)

    def test_event_count(self, sweep) -> None:
        """Two site events and three circle events."""
        assert sweep.events_processed == 5

    def test_faces(self, sweep) -> None:
        """Test both halves are 10 by 20 rectangles."""
        faces = sweep.site_faces()
        left = faces[Point(0.0, 0.0)]
        right = faces[Point(10.0, 0.0)]

        assert face_area(left) == pytest.approx(200.0)
        assert face_area(right) == pytest.approx(200.0)
        assert len(face_polygon(left)) == 4
        assert len(face_polygon(right)) == 4

        centroid = face_centroid(left)
        assert (centroid.x, centroid.y) == pytest.approx((0.0, 5.0))
        centroid = face_centroid(right)
        assert (centroid.x, centroid.y) == pytest.approx((10.0, 5.0))

    def test_bisector_at_x_5(self, sweep) -> None:
        """The shared edge is the vertical bisector of the two sites."""
        left = sweep.site_faces()[Point(0.0, 0.0)]
        xs = sorted(point.x for point in face_polygon(left))
        assert xs == pytest.approx([-5.0, -5.0, 5.0, 5.0])

    def test_counts(self, sweep) -> None:
        """Test vertex, edge and face counts."""
        assert element_counts(sweep.faces()) == (6, 7, 3)
        assert_well_formed(sweep)


class TestCollinearSites:
    """Three sites on one horizontal line give three vertical strips."""

    def test_strips(self) -> None:
        """Test strip areas and element counts."""
        points = [Point(0.0, 0.0), Point(5.0, 0.0), Point(10.0, 0.0)]
        sweep = finished_sweep(points, WIDE)

        faces = sweep.site_faces()
        areas = [face_area(faces[point]) for point in points]
        assert areas == pytest.approx([150.0, 100.0, 150.0])
        assert element_counts(sweep.faces()) == (8, 10, 4)
        assert_well_formed(sweep)


class TestThreeSites:
    """Three sites in general position meet at their circumcenter."""

    @pytest.fixture
    def sweep(self) -> VoronoiSweep:
        points = [Point(0.0, 0.0), Point(10.0, 0.0), Point(5.0, 10.0)]
        return finished_sweep(points, Bounds(-20.0, -20.0, 30.0, 30.0))

    def test_shared_vertex(self, sweep) -> None:
        """Every face has a corner at the circumcenter."""
        faces = sweep.site_faces()
        assert len(faces) == 3
        for face in faces.values():
            assert any(
                point.x == pytest.approx(5.0) and point.y == pytest.approx(3.75)
                for point in face_polygon(face)
            )

    def test_well_formed(self, sweep) -> None:
        assert_well_formed(sweep)


class TestLevelSites:
    """Many sites on one horizontal line."""

    def test_hundreds_of_level_sites(self) -> None:
        """Long beach lines and outer boundaries finish without a walk budget."""
        count = 400
        points = [Point(0.5 + i, 50.0) for i in range(count)]
        bounds = Bounds(0.0, 0.0, count + 1.0, 100.0)

        sweep = finished_sweep(points, bounds)

        faces = sweep.site_faces()
        assert len(faces) == count
        assert face_area(faces[points[0]]) == pytest.approx(100.0)
        assert face_area(faces[points[-1]]) == pytest.approx(200.0)
        assert face_area(faces[points[200]]) == pytest.approx(100.0)
        assert_well_formed(sweep)


class TestCocircularSites:
    """Exact ties between circle events, site events and the rectangle."""

    def test_diamond_in_square(self) -> None:
        """Four sites on one circle split the square along its diagonals."""
        points = [Point(5.0, 8.0), Point(8.0, 5.0), Point(2.0, 5.0), Point(5.0, 2.0)]

        sweep = finished_sweep(points, SQUARE)

        faces = sweep.site_faces()
        assert set(faces) == set(points)
        for point in points:
            assert face_area(faces[point]) == pytest.approx(25.0)
        assert sweep.stats.edges_collapsed > 0
        assert_well_formed(sweep)

    def test_diamond_vertices(self) -> None:
        """The bottom face meets the center and both top corners."""
        sweep = finished_sweep(
            [Point(5.0, 8.0), Point(8.0, 5.0), Point(2.0, 5.0), Point(5.0, 2.0)], SQUARE
        )

        polygon = face_polygon(sweep.site_faces()[Point(5.0, 2.0)])
        corners = {(round(point.x, 9), round(point.y, 9)) for point in polygon}
        assert corners == {(0.0, 0.0), (5.0, 5.0), (10.0, 0.0)}


class TestInvariantChecking:
    """Runs with invariant checking enabled after every step."""

    def test_three_sites_checked(self) -> None:
        """Test a checked run finishes without raising."""
        points = [Point(0.0, 0.0), Point(10.0, 0.0), Point(5.0, 10.0)]
        sweep = finished_sweep(points, Bounds(-20.0, -20.0, 30.0, 30.0), check=True)
        assert sweep.is_finished

    def test_collinear_checked(self) -> None:
        """Test collinear sites pass checking after every step."""
        points = [Point(0.0, 0.0), Point(5.0, 0.0), Point(10.0, 0.0)]
        sweep = finished_sweep(points, WIDE, check=True)
        assert sweep.is_finished


class TestRandomSites:
    """Property checks on sites in general position."""

    @pytest.mark.parametrize("seed", [1, 7, 42])
    def test_faces_tile_rectangle(self, seed) -> None:
        """The site faces cover the rectangle without overlap."""
        rng = random.Random(seed)
        bounds = Bounds(0.0, 0.0, 100.0, 100.0)
        points = [Point(rng.uniform(5.0, 95.0), rng.uniform(5.0, 95.0)) for _ in range(12)]

        sweep = finished_sweep(points, bounds)

        total = sum(face_area(face) for face in sweep.site_faces().values())
        assert total == pytest.approx(bounds.width * bounds.height)
        assert_well_formed(sweep)

    def test_nearest_site(self) -> None:
        """Each face's centroid is closer to its own site than to any other."""
        rng = random.Random(3)
        points = [Point(rng.uniform(5.0, 95.0), rng.uniform(5.0, 95.0)) for _ in range(10)]

        sweep = finished_sweep(points, Bounds(0.0, 0.0, 100.0, 100.0))

        for site, face in sweep.site_faces().items():
            centroid = face_centroid(face)
            own = site.distance(centroid)
            assert all(own <= other.distance(centroid) + 1e-9 for other in points)


class TestDeterminism:
    """Identical input gives an identical diagram."""

    def test_repeat_runs(self) -> None:
        points = [Point(0.0, 0.0), Point(10.0, 0.0), Point(5.0, 10.0), Point(2.0, 7.0)]
        bounds = Bounds(-20.0, -20.0, 30.0, 30.0)

        first = diagram_to_dict(finished_sweep(points, bounds))
        second = diagram_to_dict(finished_sweep(points, bounds))

        assert first == second


class TestBetweenSteps:
    """The edge list stays a connected planar subdivision between steps."""

    @pytest.mark.parametrize(
        ("points", "bounds"),
        [
            ([Point(0.0, 0.0), Point(10.0, 0.0)], WIDE),
            ([Point(0.0, 0.0), Point(5.0, 0.0), Point(10.0, 0.0)], WIDE),
            (
                [Point(0.0, 0.0), Point(10.0, 0.0), Point(5.0, 10.0)],
                Bounds(-20.0, -20.0, 30.0, 30.0),
            ),
            (
                [Point(5.0, 8.0), Point(8.0, 5.0), Point(2.0, 5.0), Point(5.0, 2.0)],
                SQUARE,
            ),
        ],
        ids=["two", "collinear", "three", "cocircular"],
    )
    def test_euler_before_every_step(self, points: list[Point], bounds: Bounds) -> None:
        """Test V - E + F is 2 and validation is clean before each event."""
        sweep = VoronoiSweep(points, bounds)

        while sweep.has_events():
            faces = sweep.faces()
            assert validate_dcel(faces) == []
            assert euler_characteristic(faces) == 2
            sweep.step()

        assert_well_formed(sweep)

    def test_random_sites_stepped(self) -> None:
        """Test the same holds for sites in general position."""
        rng = random.Random(11)
        points = [Point(rng.uniform(5.0, 95.0), rng.uniform(5.0, 95.0)) for _ in range(15)]
        sweep = VoronoiSweep(points, Bounds(0.0, 0.0, 100.0, 100.0))

        steps = 0
        while sweep.has_events():
            assert euler_characteristic(sweep.faces()) == 2
            assert validate_dcel(sweep.faces()) == []
            sweep.step()
            steps += 1

        assert steps == sweep.events_processed
        assert_well_formed(sweep)
