"""Tests for the propellants module."""

import pytest

from persistent_thrust.errors import InvalidMixtureError
from persistent_thrust.propellants import (
    MASSLESS,
    RESOURCE_DENSITIES,
    PropellantComponent,
    PropellantMixture,
    get_resource_density,
    list_resources,
)


class TestResourceDatabase:
    """Test resource density database."""

    def test_list_resources(self) -> None:
        """Test listing available resources."""
        resources = list_resources()

        assert len(resources) > 0
        assert "LiquidFuel" in resources
        assert "XenonGas" in resources
        assert "ElectricCharge" in resources

    def test_densities_non_negative(self) -> None:
        """All densities are zero or positive."""
        for name, density in RESOURCE_DENSITIES.items():
            assert density >= 0, name

    def test_electric_charge_massless(self) -> None:
        assert get_resource_density("ElectricCharge") == 0.0

    def test_case_insensitive_lookup(self) -> None:
        assert get_resource_density("xenongas") == get_resource_density("XenonGas")

    def test_unknown_resource_raises(self) -> None:
        """Test that unknown resource raises ValueError."""
        with pytest.raises(ValueError, match="Unknown resource"):
            get_resource_density("Unobtainium")

    def test_component_from_resource(self) -> None:
        component = PropellantComponent.from_resource("Oxidizer", 1.1)
        assert component.resource_id == "Oxidizer"
        assert component.ratio == 1.1
        assert component.density == RESOURCE_DENSITIES["Oxidizer"]
        assert not component.is_massless


class TestMixtureBuild:
    """Test mixture validation."""

    def test_empty_mixture_raises(self) -> None:
        with pytest.raises(InvalidMixtureError, match="no components"):
            PropellantMixture.build([])

    def test_all_zero_ratios_raise(self) -> None:
        components = [
            PropellantComponent("LiquidFuel", 0.0, 5.0),
            PropellantComponent("Oxidizer", 0.0, 5.0),
        ]
        with pytest.raises(InvalidMixtureError, match="positive"):
            PropellantMixture.build(components)

    def test_negative_ratio_raises(self) -> None:
        with pytest.raises(InvalidMixtureError, match="negative ratio"):
            PropellantMixture.build([PropellantComponent("LiquidFuel", -1.0, 5.0)])

    def test_invalid_mixture_is_value_error(self) -> None:
        """Callers catching ValueError also see mixture errors."""
        with pytest.raises(ValueError):
            PropellantMixture.build([])

    def test_components_kept_in_order(self) -> None:
        components = [
            PropellantComponent("Oxidizer", 1.1, 5.0),
            PropellantComponent("LiquidFuel", 0.9, 5.0),
        ]
        mixture = PropellantMixture.build(components)
        assert mixture.resource_ids == ("Oxidizer", "LiquidFuel")
        assert len(mixture) == 2


class TestAverageDensity:
    """Test average mixture density."""

    def test_single_component(self) -> None:
        mixture = PropellantMixture.build([PropellantComponent("Fuel", 1.0, 1000.0)])
        assert mixture.average_density == pytest.approx(1000.0)

    def test_ratio_weighted(self) -> None:
        """Scenario mixture averages to 900 kg/unit."""
        mixture = PropellantMixture.build([
            PropellantComponent("A", 0.8, 1000.0),
            PropellantComponent("B", 0.2, 500.0),
        ])
        assert mixture.average_density == pytest.approx(900.0)

    def test_massless_dilutes_density(self) -> None:
        """Demand split back through densities recovers the burned mass."""
        mixture = PropellantMixture.build([
            PropellantComponent.from_resource("XenonGas", 0.1),
            PropellantComponent.from_resource("ElectricCharge", 1.8),
        ])
        burned = 3.0
        shares = mixture.demand_for(burned / mixture.average_density)
        mass = sum(s * c.density for s, c in zip(shares, mixture.components))
        assert mass == pytest.approx(burned)

    def test_all_massless(self) -> None:
        mixture = PropellantMixture.build([
            PropellantComponent("ElectricCharge", 1.0, 0.0),
        ])
        assert mixture.average_density == MASSLESS
        assert mixture.is_massless

    def test_massed_mixture_not_massless(self) -> None:
        mixture = PropellantMixture.build([PropellantComponent("Fuel", 1.0, 5.0)])
        assert not mixture.is_massless


class TestDemandSplit:
    """Test per-component demand split."""

    @pytest.fixture
    def mixture(self) -> PropellantMixture:
        return PropellantMixture.build([
            PropellantComponent("LiquidFuel", 0.9, 5.0),
            PropellantComponent("Oxidizer", 1.1, 5.0),
            PropellantComponent("ElectricCharge", 0.3, 0.0),
        ])

    def test_proportional(self, mixture: PropellantMixture) -> None:
        shares = mixture.demand_for(23.0)
        assert shares[0] == pytest.approx(9.0)
        assert shares[1] == pytest.approx(11.0)
        assert shares[2] == pytest.approx(3.0)

    def test_shares_sum_to_total(self, mixture: PropellantMixture) -> None:
        for total in (0.0, 1e-9, 1.0, 123.456, 1e9):
            assert sum(mixture.demand_for(total)) == pytest.approx(total)

    def test_idempotent(self, mixture: PropellantMixture) -> None:
        """Repeated calls give identical splits."""
        assert mixture.demand_for(17.5) == mixture.demand_for(17.5)

    def test_zero_ratio_component_gets_nothing(self) -> None:
        mixture = PropellantMixture.build([
            PropellantComponent("LiquidFuel", 1.0, 5.0),
            PropellantComponent("Oxidizer", 0.0, 5.0),
        ])
        assert mixture.demand_for(4.0) == (4.0, 0.0)
