"""Tests for the Piecewise container: construction, routing, domain transforms, concat."""

import copy

import numpy as np
import pytest

from pypiecewise import ChebyshevSegment, Interval, Piecewise


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------

class TestConstruction:
    def test_empty(self):
        pw = Piecewise()
        assert pw.is_empty
        assert len(pw) == 0
        assert pw.cuts == []
        assert pw.invariants()

    def test_empty_has_no_domain(self):
        with pytest.raises(ValueError, match="empty"):
            Piecewise().domain

    def test_from_segment_default_domain(self):
        pw = Piecewise(ChebyshevSegment.linear(0, 1))
        assert pw.cuts == [0.0, 1.0]
        assert pw.size == 1
        assert pw.invariants()

    def test_from_constant(self):
        pw = Piecewise(2.5)
        assert pw.cuts == [0.0, 1.0]
        assert pw(0.3) == 2.5

    def test_from_segments(self, pw_hat):
        assert pw_hat.cuts == [0.0, 0.5, 1.0]
        assert len(pw_hat) == 2
        assert pw_hat.invariants()

    def test_from_segments_count_mismatch_raises(self):
        with pytest.raises(ValueError, match="Expected 2 cuts"):
            Piecewise.from_segments([ChebyshevSegment.linear(0, 1)], [0.0, 1.0, 2.0])

    def test_from_segments_unsorted_raises(self):
        segs = [ChebyshevSegment.linear(0, 1), ChebyshevSegment.linear(1, 0)]
        with pytest.raises(ValueError, match="greater"):
            Piecewise.from_segments(segs, [0.0, 1.0, 1.0])

    def test_non_segment_raises(self):
        with pytest.raises(TypeError, match="Segment"):
            Piecewise.from_segments([lambda t: t], [0.0, 1.0])

    def test_push_cut_must_increase(self):
        pw = Piecewise()
        pw.push_cut(1.0)
        with pytest.raises(ValueError):
            pw.push_cut(0.5)

    def test_push_without_start_cut_raises(self):
        with pytest.raises(ValueError, match="push_cut"):
            Piecewise().push(ChebyshevSegment.linear(0, 1), 1.0)

    def test_push_grows(self):
        pw = Piecewise()
        pw.push_cut(0.0)
        pw.push(ChebyshevSegment.linear(0, 1), 1.0)
        pw.push(ChebyshevSegment.linear(1, 0), 3.0)
        assert pw.cuts == [0.0, 1.0, 3.0]
        assert pw.invariants()

    def test_setitem_type_checked(self, pw_hat):
        with pytest.raises(TypeError):
            pw_hat[0] = 3.0
        pw_hat[0] = ChebyshevSegment.constant(1.0)
        assert pw_hat(0.25) == 1.0


# ---------------------------------------------------------------------------
# Routing and evaluation
# ---------------------------------------------------------------------------

class TestRouting:
    def test_seg_index(self, pw_square):
        assert pw_square.seg_index(-1.0) == 0
        assert pw_square.seg_index(0.5) == 0
        assert pw_square.seg_index(2.999) == 2
        assert pw_square.seg_index(3.0) == 2
        assert pw_square.seg_index(10.0) == 2

    def test_interior_cut_belongs_to_next_segment(self, pw_square):
        assert pw_square.seg_index(1.0) == 1
        assert pw_square.seg_index(2.0) == 2

    def test_seg_index_with_bounds(self, pw_square):
        assert pw_square.seg_index(2.5, 1) == 2
        assert pw_square.seg_index(1.5, 0, 2) == 1

    def test_seg_time(self, pw_square):
        assert pw_square.seg_time(1.5) == 0.5
        assert pw_square.seg_time(3.5, 2) == 1.5

    def test_map_to_domain(self, pw_hat):
        assert pw_hat.map_to_domain(0.5, 1) == 0.75

    def test_value_at(self, pw_square):
        for t in [0.0, 0.7, 1.0, 1.5, 2.2, 3.0]:
            assert abs(pw_square.value_at(t) - t * t) < 1e-13

    def test_extrapolation(self, pw_hat):
        assert abs(pw_hat(-0.5) + 1.0) < 1e-15
        assert abs(pw_hat(1.5) + 1.0) < 1e-15

    def test_array_evaluation(self, pw_sin):
        t = np.linspace(-0.2, 3.3, 57)
        batch = pw_sin(t)
        assert batch.shape == t.shape
        np.testing.assert_allclose(batch, [pw_sin(float(x)) for x in t], atol=1e-14)

    def test_empty_evaluation_raises(self):
        with pytest.raises(ValueError):
            Piecewise()(0.5)


# ---------------------------------------------------------------------------
# Domain transforms
# ---------------------------------------------------------------------------

class TestDomainTransforms:
    def test_offset_domain(self, pw_hat):
        ref = pw_hat.copy()
        pw_hat.offset_domain(2.0)
        assert pw_hat.domain == Interval(2.0, 3.0)
        for t in [0.1, 0.5, 0.9]:
            assert abs(pw_hat(t + 2.0) - ref(t)) < 1e-14

    def test_scale_domain(self, pw_hat):
        ref = pw_hat.copy()
        pw_hat.scale_domain(4.0)
        assert pw_hat.cuts == [0.0, 2.0, 4.0]
        for t in [0.1, 0.5, 0.9]:
            assert abs(pw_hat(4.0 * t) - ref(t)) < 1e-14
        assert pw_hat.invariants()

    def test_scale_domain_zero_collapses(self, pw_hat):
        pw_hat.scale_domain(0)
        assert pw_hat.is_empty
        assert pw_hat.cuts == []
        assert pw_hat.invariants()

    def test_scale_domain_negative_raises(self, pw_hat):
        with pytest.raises(ValueError, match="positive"):
            pw_hat.scale_domain(-1.0)

    def test_set_domain(self, pw_square):
        pw_square.set_domain(Interval(10.0, 16.0))
        assert pw_square.cuts == [10.0, 12.0, 14.0, 16.0]
        assert abs(pw_square(13.0) - 1.5 ** 2) < 1e-13

    def test_set_domain_accepts_tuple(self, pw_hat):
        pw_hat.set_domain((-1.0, 1.0))
        assert pw_hat.cuts == [-1.0, 0.0, 1.0]

    def test_set_domain_empty_interval_collapses(self, pw_hat):
        pw_hat.set_domain(Interval(2.0))
        assert pw_hat.is_empty
        assert pw_hat.invariants()

    def test_set_domain_on_empty_is_noop(self):
        pw = Piecewise()
        pw.set_domain(Interval(0, 5))
        assert pw.is_empty


# ---------------------------------------------------------------------------
# Concatenation
# ---------------------------------------------------------------------------

class TestConcat:
    def test_concat_shifts_time(self, pw_hat):
        other = Piecewise.from_segments([ChebyshevSegment.linear(5, 7)], [10.0, 12.0])
        pw_hat.concat(other)
        assert pw_hat.cuts == [0.0, 0.5, 1.0, 3.0]
        assert abs(pw_hat(2.0) - 6.0) < 1e-14
        assert pw_hat.invariants()

    def test_concat_does_not_force_continuity(self):
        a = Piecewise(1.0)
        a.concat(Piecewise(3.0))
        assert a.cuts == [0.0, 1.0, 2.0]
        assert a(0.999) == 1.0
        assert a(1.0) == 3.0

    def test_concat_into_empty(self, pw_hat):
        pw = Piecewise()
        pw.concat(pw_hat)
        assert pw == pw_hat
        pw.cuts[0] = -5.0
        assert pw_hat.cuts[0] == 0.0

    def test_concat_empty_is_noop(self, pw_hat):
        ref = pw_hat.copy()
        pw_hat.concat(Piecewise())
        assert pw_hat == ref

    def test_concat_with_itself(self, pw_hat):
        pw_hat.concat(pw_hat)
        assert pw_hat.cuts == [0.0, 0.5, 1.0, 1.5, 2.0]

    def test_continuous_concat(self):
        a = Piecewise(ChebyshevSegment.linear(0, 1))
        b = Piecewise(ChebyshevSegment.linear(5, 7))
        a.continuous_concat(b)
        assert a.cuts == [0.0, 1.0, 2.0]
        left = a.segs[0].at1()
        right = a.segs[1].at0()
        assert abs(left - right) < 1e-14
        assert abs(a(2.0) - 3.0) < 1e-14

    def test_continuous_concat_into_empty(self):
        a = Piecewise()
        b = Piecewise(ChebyshevSegment.linear(5, 7))
        a.continuous_concat(b)
        assert a == b


# ---------------------------------------------------------------------------
# Value semantics and printing
# ---------------------------------------------------------------------------

class TestValueSemantics:
    def test_copy_is_independent(self, pw_hat):
        c = copy.copy(pw_hat)
        c.offset_domain(1.0)
        c.push(ChebyshevSegment.constant(0.0), 3.0)
        assert pw_hat.cuts == [0.0, 0.5, 1.0]
        assert len(pw_hat) == 2

    def test_equality(self, pw_hat):
        assert pw_hat == pw_hat.copy()
        other = pw_hat.copy()
        other.offset_domain(0.1)
        assert pw_hat != other

    def test_invariants_detects_bad_state(self, pw_hat):
        pw_hat.cuts = [0.0, 0.7, 0.5]
        assert not pw_hat.invariants()
        pw_hat.cuts = [0.0, 1.0]
        assert not pw_hat.invariants()

    def test_repr(self, pw_hat):
        assert repr(pw_hat) == "Piecewise(segments=2, domain=[0.0, 1.0])"
        assert repr(Piecewise()) == "Piecewise(empty)"

    def test_str(self, pw_hat):
        text = str(pw_hat)
        assert "Piecewise (2 segments)" in text
        assert "ChebyshevSegment" in text
