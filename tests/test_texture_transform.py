from threed.texture_transform import TextureTransform


def test_default_is_identity():
    assert TextureTransform().to_vec4() == (0.0, 0.0, 1.0, 1.0)


def test_halve():
    t = TextureTransform(2.0, 4.0, 8.0, 16.0)
    t.halve()
    assert t.to_vec4() == (1.0, 2.0, 4.0, 8.0)


def test_shift_only_moves_offset():
    t = TextureTransform()
    t.shift(0.25, -0.5)
    assert t.to_vec4() == (0.25, -0.5, 1.0, 1.0)


def test_shift_then_back():
    t = TextureTransform(0.5, 0.5, 2.0, 3.0)
    t.shift(1.5, 2.5)
    t.shift(-1.5, -2.5)
    assert t == TextureTransform(0.5, 0.5, 2.0, 3.0)