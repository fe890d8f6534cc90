import math

import numpy as np
import pytest

from threebody import constants
from threebody.body import Body, center_of_mass, total_mass, total_momentum


def test_default_body_string():
    assert str(Body()) == (
        "Body[m=1.000kg, pos=(0.000,0.000,0.000), "
        "vel=(0.000,0.000,0.000), r=1.000m, active=true]"
    )


def test_string_reports_inactive():
    body = Body()
    body.active = False
    assert str(body).endswith("active=false]")


def test_kinetic_energy_matches_momentum():
    body = Body(2.0, (0, 0, 0), (3.0, 4.0, 0.0), 1.0)
    p = body.momentum()
    assert body.kinetic_energy() == pytest.approx(np.dot(p, p) / (2 * body.mass))
    np.testing.assert_allclose(p, [6.0, 8.0, 0.0])


def test_distances():
    a = Body(1.0, (0, 0, 0), (0, 0, 0), 1.0)
    b = Body(1.0, (3, 4, 0), (0, 0, 0), 1.0)
    assert a.distance_to(b) == pytest.approx(5.0)
    assert a.squared_distance_to(b) == pytest.approx(25.0)
    assert b.distance_to(a) == a.distance_to(b)


def test_collision_boundary_inclusive():
    a = Body(1.0, (0, 0, 0), (0, 0, 0), 1.0)
    reach = constants.COLLISION_FACTOR * 2.0
    b = Body(1.0, (reach, 0, 0), (0, 0, 0), 1.0)
    c = Body(1.0, (reach + 1e-6, 0, 0), (0, 0, 0), 1.0)
    assert a.is_colliding_with(b)
    assert b.is_colliding_with(a)
    assert not a.is_colliding_with(c)


def test_inactive_bodies_do_not_collide():
    a = Body(1.0, (0, 0, 0), (0, 0, 0), 1.0)
    b = Body(1.0, (0, 0, 0), (0, 0, 0), 1.0)
    b.active = False
    assert not a.is_colliding_with(b)


def test_merge_conserves_mass_momentum_and_volume():
    a = Body(2.0, (1, 0, 0), (0, 1, 0), 1.0, (1.0, 0.0, 0.0))
    b = Body(3.0, (0, 2, 0), (1, 0, 0), 2.0, (0.0, 1.0, 0.0))
    merged = a.merge_with(b)
    assert merged.mass == pytest.approx(a.mass + b.mass)
    np.testing.assert_allclose(merged.momentum(), a.momentum() + b.momentum())
    np.testing.assert_allclose(merged.position, center_of_mass([a, b]))
    assert merged.radius**3 == pytest.approx(a.radius**3 + b.radius**3)
    assert sum(merged.color) == pytest.approx(1.0)
    assert merged.active and len(merged.trail) == 0


def test_gravity_obeys_third_law_and_points_toward_other():
    a = Body(5.0, (0, 0, 0), (0, 0, 0), 1.0)
    b = Body(7.0, (2, 0, 0), (0, 0, 0), 1.0)
    acc_a = a.gravitational_acceleration(b)
    acc_b = b.gravitational_acceleration(a)
    np.testing.assert_allclose(a.mass * acc_a, -b.mass * acc_b)
    assert acc_a[0] > 0 and acc_b[0] < 0
    assert acc_a[1] == 0 and acc_a[2] == 0


def test_gravity_zero_when_inactive():
    a = Body(5.0, (0, 0, 0), (0, 0, 0), 1.0)
    b = Body(7.0, (2, 0, 0), (0, 0, 0), 1.0)
    b.active = False
    np.testing.assert_array_equal(a.gravitational_acceleration(b), np.zeros(3))
    a.apply_gravitational_force(b, 0.1)
    np.testing.assert_array_equal(a.acceleration, np.zeros(3))


def test_apply_force_then_update_motion_resets_acceleration():
    a = Body(1.0, (0, 0, 0), (0, 0, 0), 1.0)
    b = Body(1e10, (1, 0, 0), (0, 0, 0), 1.0)
    a.apply_gravitational_force(b, 1.0)
    expected = a.gravitational_acceleration(b)
    np.testing.assert_allclose(a.acceleration, expected)
    a.update_motion(1.0)
    np.testing.assert_allclose(a.velocity, expected)
    assert a.position[0] > 0
    np.testing.assert_array_equal(a.acceleration, np.zeros(3))


def test_update_motion_without_acceleration_moves_linearly():
    body = Body(1.0, (1, 2, 3), (0.5, -1.0, 2.0), 1.0)
    body.update_motion(2.0)
    np.testing.assert_allclose(body.position, [2.0, 0.0, 7.0])
    np.testing.assert_allclose(body.velocity, [0.5, -1.0, 2.0])


def test_inactive_body_does_not_move_or_trail():
    body = Body(1.0, (1, 2, 3), (1, 1, 1), 1.0)
    body.active = False
    body.update_motion(1.0)
    body.update_trail()
    np.testing.assert_array_equal(body.position, [1, 2, 3])
    assert len(body.trail) == 0


def test_trail_is_bounded_and_keeps_newest():
    body = Body(1.0, (0, 0, 0), (1, 0, 0), 1.0)
    for _ in range(constants.MAX_TRAIL_POINTS + 10):
        body.update_motion(1.0)
        body.update_trail()
    assert len(body.trail) == constants.MAX_TRAIL_POINTS
    np.testing.assert_array_equal(body.trail[-1], body.position)
    assert body.trail[0][0] == pytest.approx(11.0)


def test_trail_stores_copies():
    body = Body(1.0, (0, 0, 0), (1, 0, 0), 1.0)
    body.update_trail()
    body.position[0] = 9.0
    assert body.trail[0][0] == 0.0


def test_reset_restores_state():
    body = Body(1.0, (0, 0, 0), (1, 0, 0), 1.0)
    body.update_trail()
    body.active = False
    body.reset((4, 5, 6), (0, 1, 0))
    np.testing.assert_array_equal(body.position, [4, 5, 6])
    np.testing.assert_array_equal(body.velocity, [0, 1, 0])
    np.testing.assert_array_equal(body.initial_position, [4, 5, 6])
    assert body.active
    assert len(body.trail) == 0


def test_bad_vector_shape_rejected():
    with pytest.raises(ValueError):
        Body(1.0, (1, 2), (0, 0, 0), 1.0)


def test_collection_helpers_skip_inactive():
    a = Body(2.0, (1, 0, 0), (1, 0, 0), 1.0)
    b = Body(2.0, (-1, 0, 0), (-1, 0, 0), 1.0)
    c = Body(6.0, (10, 10, 10), (3, 3, 3), 1.0)
    c.active = False
    bodies = [a, b, c]
    assert total_mass(bodies) == pytest.approx(4.0)
    np.testing.assert_allclose(center_of_mass(bodies), np.zeros(3))
    np.testing.assert_allclose(total_momentum(bodies), np.zeros(3))


def test_center_of_mass_of_empty_is_origin():
    np.testing.assert_array_equal(center_of_mass([]), np.zeros(3))
    assert total_mass([]) == 0


def test_figure8_preset_is_momentum_free():
    bodies = [
        Body(constants.FIGURE8_MASS, constants.FIGURE8_POS_1, constants.FIGURE8_VEL_1, 5.0),
        Body(constants.FIGURE8_MASS, constants.FIGURE8_POS_2, constants.FIGURE8_VEL_2, 5.0),
        Body(constants.FIGURE8_MASS, constants.FIGURE8_POS_3, constants.FIGURE8_VEL_3, 5.0),
    ]
    np.testing.assert_allclose(total_momentum(bodies), np.zeros(3), atol=1e-12)
    np.testing.assert_allclose(center_of_mass(bodies), np.zeros(3), atol=1e-12)
    assert not math.isnan(bodies[0].kinetic_energy())