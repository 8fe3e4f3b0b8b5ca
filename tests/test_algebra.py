import itertools
import re
from collections import Counter
from fractions import Fraction

import numpy as np
import pytest

from polyrep import (
    DimensionMismatch,
    HalfSpace,
    HRepresentation,
    HyperPlane,
    Line,
    Point,
    Polyhedron,
    Ray,
    TypeIncompatibility,
    UnsupportedMutation,
    VCone,
    VRepresentation,
    cartesian_product,
    conichull,
    conify,
    convexhull,
    convexhull_inplace,
    hcartesianproduct,
    hrep_transform,
    intersect,
    intersect_inplace,
    left_divide,
    linear_map,
    minkowski_sum,
    usehrep,
    vcartesianproduct,
)


def hcontent(h):
    return Counter(h.hyperplanes()), Counter(h.halfspaces())


def vcontent(v):
    return Counter(v.points()), Counter(v.lines()), Counter(v.rays())


def test_intersect_elements():
    h = intersect(HalfSpace([1, 0], 1), HyperPlane([0, 1], 0))
    assert isinstance(h, HRepresentation)
    assert h.hyperplanes() == (HyperPlane([0, 1], 0),)
    assert h.halfspaces() == (HalfSpace([1, 0], 1),)

    h = h & HalfSpace([-1, 0], 0)
    assert h.halfspaces() == (HalfSpace([1, 0], 1), HalfSpace([-1, 0], 0))

    single = intersect(HalfSpace([1, 0], 1))
    assert single == HRepresentation(halfspaces=[([1, 0], 1)])


def test_intersect_associative_commutative():
    h1 = HRepresentation([([1, 1], 0)], [([1, 0], 1)])
    h2 = HRepresentation(halfspaces=[([0, 1], 2), ([-1, 0], 0)])
    h3 = HRepresentation([([1, -1], 3)], ambient_dim=2)

    ref = hcontent(intersect(intersect(h1, h2), h3))
    assert hcontent(intersect(h1, intersect(h2, h3))) == ref
    assert hcontent(intersect(h3, h1, h2)) == ref
    assert hcontent(h2 & h3 & h1) == ref


def test_intersect_promotes():
    h = intersect(HalfSpace([1, 0], 1), HalfSpace([Fraction(1, 2), 0], 1))
    assert h.coefficient_type() is Fraction
    with pytest.raises(TypeIncompatibility):
        intersect(HalfSpace([Fraction(1, 2), 0], 1), HalfSpace([0.5, 0], 1))


def test_intersect_errors():
    with pytest.raises(DimensionMismatch, match=re.escape("Cannot combine operands of different dimensions, [2, 3].")):
        intersect(HalfSpace([1, 0], 1), HalfSpace([1, 0, 0], 1))
    with pytest.raises(TypeError, match=re.escape("Expected an H-representation, got Point.")):
        intersect(HalfSpace([1, 0], 1), Point([1, 0]))
    with pytest.raises(ValueError):
        intersect()


def test_intersect_flavor():
    square = HRepresentation(halfspaces=[([1, 0], 1), ([-1, 0], 0), ([0, 1], 1), ([0, -1], 0)])
    p = Polyhedron(hrep=square)
    h = HRepresentation(halfspaces=[([1, 1], 1)])

    assert isinstance(intersect(p, h), Polyhedron)
    assert isinstance(intersect(h, p), HRepresentation)
    assert isinstance(intersect(HalfSpace([1, 1], 1), p), Polyhedron)
    assert isinstance(p & HalfSpace([1, 1], 1), Polyhedron)
    q = intersect(p, p)
    assert q.backend() == p.backend()
    assert q.hrep().nhalfspaces() == 8


def test_intersect_inplace():
    square = HRepresentation(halfspaces=[([1, 0], 1), ([-1, 0], 0), ([0, 1], 1), ([0, -1], 0)])
    p = Polyhedron(hrep=square)
    p.reset_vrep(VRepresentation([[0, 0], [1, 0], [0, 1], [1, 1]]))
    p &= HalfSpace([1, 1], 1)
    assert isinstance(p, Polyhedron)
    assert p.hrep().nhalfspaces() == 5
    assert not p.vrep_is_computed()

    assert intersect_inplace(p, HyperPlane([1, -1], 0)) is p
    assert p.hrep().nhyperplanes() == 1


def test_intersect_inplace_mismatch_does_not_mutate():
    p = Polyhedron(hrep=HRepresentation(halfspaces=[([1, 0], 1)]))
    before = p.hrep()
    with pytest.raises(DimensionMismatch):
        intersect_inplace(p, HalfSpace([1, 0, 0], 1))
    with pytest.raises(DimensionMismatch):
        p &= HalfSpace([1, 0, 0], 1)
    assert p.hrep() is before
    assert p.ambient_dim() == 2


def test_inplace_unsupported():
    h = HRepresentation(halfspaces=[([1, 0], 1)])
    msg = "intersect_inplace is not implemented for HRepresentation. It probably does not support in-place modification, try intersect instead."
    with pytest.raises(UnsupportedMutation, match=re.escape(msg)):
        intersect_inplace(h, HalfSpace([0, 1], 1))
    with pytest.raises(UnsupportedMutation, match=re.escape("try convexhull instead")):
        convexhull_inplace(VRepresentation([[0, 0]]), Point([1, 0]))


def test_convexhull():
    v = convexhull([0, 0], [1, 0], Ray([0, 1]))
    assert isinstance(v, VRepresentation)
    assert v.points() == (Point([0, 0]), Point([1, 0]))
    assert v.rays() == (Ray([0, 1]),)

    # no deduplication
    v = convexhull(Point([0, 0]), Point([0, 0]))
    assert v.npoints() == 2

    c = convexhull(Ray([1, 0]), Line([0, 1]))
    assert isinstance(c, VCone)
    assert (c.nlines(), c.nrays()) == (1, 1)

    assert convexhull([1, 2]) == VRepresentation([[1, 2]])


def test_convexhull_cone_contributes_origin():
    v = convexhull(VRepresentation([[1, 1]]), VCone(rays=[[1, 0]]))
    assert type(v) is VRepresentation
    assert v.points() == (Point([1, 1]), Point([0, 0]))
    assert v.rays() == (Ray([1, 0]),)


def test_convexhull_associative_commutative():
    v1 = VRepresentation([[0, 0], [1, 0]], rays=[[1, 1]])
    v2 = VRepresentation([[0, 1]], lines=[[1, -1]])
    v3 = VCone(rays=[[0, 1]], ambient_dim=2)

    ref = vcontent(convexhull(convexhull(v1, v2), v3))
    assert vcontent(convexhull(v1, convexhull(v2, v3))) == ref
    assert vcontent(convexhull(v3, v2, v1)) == ref
    assert vcontent(v2 | v1 | v3) == ref


def test_convexhull_bare_directions_any_order():
    operands = [Point([1, 1]), Ray([1, 0]), Ray([0, 1]), Line([1, -1])]
    ref = vcontent(convexhull(*operands))
    assert ref[0] == Counter([Point([1, 1])])
    for ps in itertools.permutations(operands):
        assert vcontent(convexhull(*ps)) == ref

    v = VRepresentation([[1, 1]])
    for ps in itertools.permutations([Line([1, -1]), Ray([1, 0]), v]):
        assert Counter(convexhull(*ps).points()) == Counter([Point([1, 1])])

    # a cone given as a representation keeps its origin
    c = VCone(rays=[[1, 0]])
    for ps in itertools.permutations([Ray([0, 1]), c, Point([1, 1])]):
        assert Counter(convexhull(*ps).points()) == Counter([Point([1, 1]), Point([0, 0])])


def test_convexhull_errors():
    with pytest.raises(DimensionMismatch):
        convexhull([0, 0], [0, 0, 0])
    with pytest.raises(TypeError, match=re.escape("Expected a V-representation, got HalfSpace.")):
        convexhull([0, 0], HalfSpace([1, 0], 1))


def test_convexhull_inplace():
    p = Polyhedron(vrep=VRepresentation([[0, 0], [1, 0]]))
    p |= [0, 1]
    assert p.vrep().npoints() == 3
    assert not p.hrep_is_computed()
    assert convexhull_inplace(p, Ray([1, 1])) is p
    assert p.vrep().nrays() == 1


def test_conify():
    c = conify(VRepresentation([[1, 0]], rays=[[0, 1]]))
    assert isinstance(c, VCone)
    assert c.rays() == (Ray([0, 1]), Ray([1, 0]))
    assert conify([1, 2]) == Ray([1, 2])
    r = Ray([1, 2])
    assert conify(r) is r
    c = VCone(rays=[[1, 0]])
    assert conify(c) is c
    c = conify(Polyhedron(vrep=VRepresentation([[1, 1]])))
    assert isinstance(c, VCone)
    assert c.rays() == (Ray([1, 1]),)


def test_conichull():
    c = conichull([1, 0], [1, 1])
    assert isinstance(c, VCone)
    assert c.rays() == (Ray([1, 0]), Ray([1, 1]))


def test_minkowski_sum_cone_shortcut():
    v = VRepresentation([[1, 0]]) + VCone(rays=[[0, 1]])
    assert v.points() == (Point([1, 0]),)
    assert v.rays() == (Ray([0, 1]),)

    assert vcontent(VRepresentation([[1, 0]]) + Ray([0, 1])) == vcontent(v)
    assert vcontent(Ray([0, 1]) + VRepresentation([[1, 0]])) == vcontent(v)

    c = VCone(rays=[[1, 0]]) + Line([0, 1])
    assert isinstance(c, VCone)


def test_minkowski_sum_cross():
    v1 = VRepresentation([[0, 0], [1, 0], [0, 1]])
    v2 = VRepresentation([[2, 2], [Fraction(1, 2), 0]], rays=[[1, 1]])
    s = minkowski_sum(v1, v2)
    assert s.npoints() == 6
    assert s.coefficient_type() is Fraction
    assert Counter(s.points()) == Counter(p + q for p in v1.points() for q in v2.points())
    assert s.rays() == (Ray([1, 1]),)


def test_minkowski_sum_errors():
    h = HRepresentation(halfspaces=[([1, 0], 1)])
    with pytest.raises(TypeError):
        h + VRepresentation([[0, 0]])
    with pytest.raises(TypeError):
        VRepresentation([[0, 0]]) + h
    with pytest.raises(DimensionMismatch):
        minkowski_sum(VRepresentation([[0, 0]]), VRepresentation([[0]]))


def test_hcartesianproduct():
    h1 = HRepresentation(halfspaces=[([1], 1), ([-1], 0)])
    h2 = HRepresentation(hyperplanes=[([1, 1], 2)])
    h = h1 * h2
    assert h.ambient_dim() == 3
    assert h.hyperplanes() == (HyperPlane([0, 1, 1], 2),)
    assert h.halfspaces() == (HalfSpace([1, 0, 0], 1), HalfSpace([-1, 0, 0], 0))
    assert h == hcartesianproduct(h1, h2)


def test_cartesian_padding_round_trip():
    h1 = HRepresentation(halfspaces=[([1, 2], 1), ([-1, 0], 0)])
    h2 = HRepresentation(halfspaces=[([3], 4)])
    h = cartesian_product(h1, h2)
    d1 = h1.ambient_dim()

    first, second = h.halfspaces()[:2], h.halfspaces()[2:]
    for orig, padded in zip(h1.halfspaces(), first):
        assert list(padded.a[:d1]) == list(orig.a)
        assert all(c == 0 for c in padded.a[d1:])
        assert padded.beta == orig.beta
    for orig, padded in zip(h2.halfspaces(), second):
        assert list(padded.a[d1:]) == list(orig.a)
        assert all(c == 0 for c in padded.a[:d1])
        assert padded.beta == orig.beta


def test_vcartesianproduct():
    v = VRepresentation([[0], [1]])
    p = v * v
    assert p.ambient_dim() == 2
    assert Counter(p.points()) == Counter([Point([0, 0]), Point([1, 0]), Point([0, 1]), Point([1, 1])])

    c = vcartesianproduct(VRepresentation([[1]]), VCone(rays=[[1]]))
    assert c.points() == (Point([1, 0]),)
    assert c.rays() == (Ray([0, 1]),)


def test_cartesian_product_polyhedra():
    h1 = HRepresentation(halfspaces=[([1], 1), ([-1], 0)])
    v1 = VRepresentation([[0], [1]])
    ph = Polyhedron(hrep=h1)
    pv = Polyhedron(vrep=v1)

    assert usehrep(ph, ph)
    assert not usehrep(pv, ph)
    q = ph * ph
    assert isinstance(q, Polyhedron)
    assert q.hrep_is_computed() and not q.vrep_is_computed()
    q = pv * pv
    assert q.vrep_is_computed() and not q.hrep_is_computed()

    both = Polyhedron(hrep=h1)
    both.reset_vrep(v1)
    assert usehrep(both, ph)
    assert not usehrep(both, pv)

    # a bare representation picks the side
    assert isinstance(ph * h1, Polyhedron)
    assert isinstance(h1 * ph, HRepresentation)


def test_cartesian_product_errors():
    with pytest.raises(TypeError, match=re.escape("Cannot take the Cartesian product of HRepresentation and VRepresentation.")):
        HRepresentation(halfspaces=[([1], 1)]) * VRepresentation([[0]])


def test_hrep_transform():
    h = HRepresentation(halfspaces=[HalfSpace([1, 0, 0], 1)], hyperplanes=[([0, 1, 1], 2)])
    t = h / [[1, 0, 0], [0, 0, 1]]
    assert t.ambient_dim() == 2
    assert t.halfspaces() == (HalfSpace([1, 0], 1),)
    assert t.hyperplanes() == (HyperPlane([0, 1], 2),)
    assert t == hrep_transform(h, np.array([[1, 0, 0], [0, 0, 1]]))

    msg = "The number of columns of P, 4, must match the dimension of the H-representation, 3."
    with pytest.raises(DimensionMismatch, match=re.escape(msg)):
        h / [[1, 0, 0, 0], [0, 0, 1, 0]]
    with pytest.raises(ValueError, match=re.escape("Input matrix must be a 2D matrix.")):
        hrep_transform(h, [1, 0, 0])


def test_hrep_transform_promotes():
    h = HRepresentation(halfspaces=[([1, 0], 1)])
    t = h / [[Fraction(1, 2), 0], [0, 1]]
    assert t.coefficient_type() is Fraction
    assert t.halfspaces() == (HalfSpace([Fraction(1, 2), 0], 1),)


def test_left_divide():
    h = HRepresentation(halfspaces=[([1, 2], 1)])
    P = np.array([[1, 2], [3, 4]])
    assert left_divide(P, h) == h / P.T
    assert left_divide(P, h).halfspaces() == (HalfSpace([7, 10], 1),)


def test_linear_map():
    v = VRepresentation([[1, 2], [3, 4]], rays=[[1, 0]])
    w = [[1, 1]] @ v
    assert w.points() == (Point([3]), Point([7]))
    assert w.rays() == (Ray([1]),)
    assert np.array([[1, 1]]) * v == w
    assert linear_map([[1, 1]], v) == w

    c = np.array([[2, 0], [0, 1]]) @ VCone(rays=[[1, 1]])
    assert isinstance(c, VCone)
    assert c.rays() == (Ray([2, 1]),)

    with pytest.raises(DimensionMismatch):
        [[1, 1, 1]] @ v


def test_transform_polyhedron():
    p = Polyhedron(hrep=HRepresentation(halfspaces=[([1, 0, 0], 1)]))
    q = p / [[1, 0, 0], [0, 0, 1]]
    assert isinstance(q, Polyhedron)
    assert q.backend() == p.backend()
    assert q.ambient_dim() == 2
    assert q.hrep_is_computed()

    p = Polyhedron(vrep=VRepresentation([[1, 2]]))
    q = [[1, 1]] @ p
    assert isinstance(q, Polyhedron)
    assert q.vrep().points() == (Point([3]).change_coefficient_type(q.coefficient_type()),)


def test_transform_converts_matrix_once(monkeypatch):
    import polyrep.elements

    def fail(*args):
        raise AssertionError("the matrix was checked again for each element")

    monkeypatch.setattr(polyrep.elements, "_transform_matrix", fail)
    h = HRepresentation(halfspaces=[([1, 0], 1), ([0, 1], 2)], hyperplanes=[([1, 1], 0)])
    t = h / [[Fraction(1, 2), 0], [0, 1]]
    assert t.halfspaces() == (HalfSpace([Fraction(1, 2), 0], 1), HalfSpace([0, 1], 2))
    assert t.hyperplanes() == (HyperPlane([Fraction(1, 2), 1], 0),)

    v = [[1, 1]] @ VRepresentation([[1, 2]], rays=[[0, 1]])
    assert v.points() == (Point([3]),)
    assert v.rays() == (Ray([1]),)
