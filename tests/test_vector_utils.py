"""Tests for the small 2D vector helpers."""

import math

import pytest

from tinysolar.vector_utils import clamp, polar, vec_add, vec_len, vec_scale, vec_sub


def test_clamp():
    assert clamp(5.0, 0.0, 1.0) == 1.0
    assert clamp(-5.0, 0.0, 1.0) == 0.0
    assert clamp(0.5, 0.0, 1.0) == 0.5


def test_vector_arithmetic():
    assert vec_add((1.0, 2.0), (3.0, 4.0)) == (4.0, 6.0)
    assert vec_sub((1.0, 2.0), (3.0, 4.0)) == (-2.0, -2.0)
    assert vec_scale((1.0, -2.0), 3.0) == (3.0, -6.0)
    assert vec_len((3.0, 4.0)) == 5.0


def test_polar():
    x, y = polar(2.0, math.pi / 2)
    assert x == pytest.approx(0.0, abs=1e-12)
    assert y == pytest.approx(2.0)
