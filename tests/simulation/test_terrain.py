import pytest

from golfsim.physics import ScalarField
from golfsim.simulation import FrictionZone, Terrain


def test_zone_lookup_is_inclusive_and_ordered() -> None:
    sand = FrictionZone(0.0, 0.0, 2.0, 2.0, kinetic_friction=0.7, static_friction=1.0)
    mud = FrictionZone(1.0, 1.0, 3.0, 3.0, kinetic_friction=0.5, static_friction=0.8, name="mud")
    terrain = Terrain(ScalarField("0"), [sand, mud])

    assert terrain.zone_at(2.0, 2.0) is sand
    assert terrain.zone_at(2.5, 2.5) is mud
    assert terrain.zone_at(-0.1, 0.0) is None
    assert terrain.friction_at(0.5, 0.5) == (0.7, 1.0)
    assert terrain.friction_at(5.0, 5.0) == (0.1, 0.2)


def test_custom_default_friction() -> None:
    terrain = Terrain(ScalarField("0"), default_friction=(0.3, 0.4))

    assert terrain.friction_at(0.0, 0.0) == (0.3, 0.4)


def test_water_below_level() -> None:
    terrain = Terrain(ScalarField("x", ["x", "y"]), water_level=0.5)

    assert terrain.is_water(0.0, 0.0)
    assert not terrain.is_water(0.5, 0.0)
    assert terrain.height(2.0, 7.0) == pytest.approx(2.0)


def test_inverted_zone_rejected() -> None:
    with pytest.raises(ValueError):
        FrictionZone(1.0, 0.0, 0.0, 1.0)
