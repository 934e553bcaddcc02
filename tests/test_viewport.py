import dataclasses
import math

import pytest

from threed.viewport import Viewport


def test_at_origin():
    vp = Viewport.at_origin(640, 480)
    assert vp == Viewport(0, 0, 640, 480)


def test_aspect():
    vp = Viewport.at_origin(640, 480)
    assert vp.aspect() == pytest.approx(640 / 480)
    assert Viewport(5, 7, 10, 10).aspect() == 1.0


def test_aspect_zero_height():
    assert Viewport.at_origin(4, 0).aspect() == math.inf
    assert str(Viewport.at_origin(0, 0).aspect()) == "nan"


def test_viewport_is_immutable():
    vp = Viewport.at_origin(1, 1)
    with pytest.raises(dataclasses.FrozenInstanceError):
        vp.width = 3
    assert vp.width == 1
    assert vp == Viewport(0, 0, 1, 1)