import pytest

from raycaster.geometry import Shape
from raycaster.matrix import scaling, translation
from raycaster.patterns import Pattern
from raycaster.types import Color, color, point

BLACK = Color.black()
WHITE = Color.white()

@pytest.fixture
def stripes():
    return Pattern.stripe(WHITE, BLACK)

# --- Tests for stripe patterns ---

def test_stripe_holds_both_colors(stripes):
    assert stripes.colors == (WHITE, BLACK)

@pytest.mark.parametrize("p", [(0, 0, 0), (0, 1, 0), (0, 2, 0), (0, 0, 1), (0, 0, 2)])
def test_stripe_constant_in_y_and_z(stripes, p):
    assert stripes.pattern_at(point(*p)) == WHITE

@pytest.mark.parametrize("x, expected", [
    (0.0, WHITE), (0.9, WHITE), (1.0, BLACK), (-0.1, BLACK), (-1.0, BLACK), (-1.1, WHITE),
])
def test_stripe_alternates_in_x(stripes, x, expected):
    assert stripes.pattern_at(point(x, 0, 0)) == expected

def test_stripe_with_object_transform(stripes):
    s = Shape.sphere(transform=scaling(2, 2, 2))
    assert stripes.color_at(s, point(1.5, 0, 0)) == WHITE

def test_stripe_with_pattern_transform(unit_sphere):
    p = Pattern.stripe(WHITE, BLACK).with_transform(scaling(2, 2, 2))
    assert p.color_at(unit_sphere, point(1.5, 0, 0)) == WHITE

def test_stripe_with_both_transforms():
    s = Shape.sphere(transform=scaling(2, 2, 2))
    p = Pattern.stripe(WHITE, BLACK).with_transform(translation(0.5, 0, 0))
    assert p.color_at(s, point(2.5, 0, 0)) == WHITE

# --- Tests for the other variants ---

def test_solid_is_constant():
    p = Pattern.solid(color(0.2, 0.4, 0.6))
    for q in [(0, 0, 0), (3.7, -1.2, 8), (-100, 5, 0.5)]:
        assert p.pattern_at(point(*q)) == color(0.2, 0.4, 0.6)

def test_gradient_interpolates_between_colors():
    p = Pattern.gradient(WHITE, BLACK)
    assert p.pattern_at(point(0, 0, 0)) == WHITE
    assert p.pattern_at(point(0.25, 0, 0)) == color(0.75, 0.75, 0.75)
    assert p.pattern_at(point(0.5, 0, 0)) == color(0.5, 0.5, 0.5)
    assert p.pattern_at(point(0.75, 0, 0)) == color(0.25, 0.25, 0.25)

def test_gradient_repeats_every_unit():
    p = Pattern.gradient(WHITE, BLACK)
    assert p.pattern_at(point(1.25, 0, 0)) == color(0.75, 0.75, 0.75)
    assert p.pattern_at(point(-0.75, 0, 0)) == color(0.75, 0.75, 0.75)

def test_ring_extends_in_x_and_z():
    p = Pattern.ring(WHITE, BLACK)
    assert p.pattern_at(point(0, 0, 0)) == WHITE
    assert p.pattern_at(point(1, 0, 0)) == BLACK
    assert p.pattern_at(point(0, 0, 1)) == BLACK
    # 0.708 is just past sqrt(2)/2
    assert p.pattern_at(point(0.708, 0, 0.708)) == BLACK

def test_radial_gradient_uses_distance_from_y_axis():
    p = Pattern.radial_gradient(WHITE, BLACK)
    assert p.pattern_at(point(0, 0, 0)) == WHITE
    assert p.pattern_at(point(0.3, 0, 0.4)) == color(0.5, 0.5, 0.5)
    assert p.pattern_at(point(0, 7, 0.25)) == color(0.75, 0.75, 0.75)

@pytest.mark.parametrize("axis", [0, 1, 2])
def test_checkers_repeat_in_each_dimension(axis):
    p = Pattern.checkers(WHITE, BLACK)
    def along(value):
        coords = [0.0, 0.0, 0.0]
        coords[axis] = value
        return point(*coords)
    assert p.pattern_at(along(0.0)) == WHITE
    assert p.pattern_at(along(0.99)) == WHITE
    assert p.pattern_at(along(1.01)) == BLACK

def test_blended_averages_layers():
    p = Pattern.blended(Pattern.solid(WHITE), Pattern.solid(BLACK))
    assert p.pattern_at(point(0.3, 2, -1)) == color(0.5, 0.5, 0.5)

def test_blended_layers_apply_their_own_transform():
    shifted = Pattern.stripe(WHITE, BLACK).with_transform(translation(1, 0, 0))
    p = Pattern.blended(Pattern.stripe(WHITE, BLACK), shifted)
    # Shifting by one stripe puts the layers out of phase everywhere
    for x in [0.5, 1.5, 2.5, -0.5]:
        assert p.pattern_at(point(x, 0, 0)) == color(0.5, 0.5, 0.5)

def test_blended_nested_inside_scaled_pattern():
    inner = Pattern.blended(Pattern.solid(WHITE), Pattern.stripe(WHITE, BLACK))
    p = Pattern.blended(inner.with_transform(scaling(2, 1, 1)), Pattern.solid(BLACK))
    # inner samples x = 1.5 / 2 = 0.75: white stripe, so inner is white
    assert p.pattern_at(point(1.5, 0, 0)) == color(0.5, 0.5, 0.5)
    # inner samples x = 1.25: black stripe, so inner is gray
    assert p.pattern_at(point(2.5, 0, 0)) == color(0.25, 0.25, 0.25)

def test_blended_of_identical_layers_matches_layer(unit_sphere):
    stripe = Pattern.stripe(WHITE, BLACK)
    p = Pattern.blended(stripe, stripe)
    for x in [0.2, 1.2, -0.5]:
        assert p.color_at(unit_sphere, point(x, 0, 0)) == stripe.color_at(unit_sphere, point(x, 0, 0))

def test_unknown_kind_is_rejected():
    with pytest.raises(ValueError):
        Pattern("zigzag")
