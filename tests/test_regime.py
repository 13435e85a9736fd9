"""Tests for the regime state machine."""

from persistent_thrust.regime import RegimeController, RegimeState


def step(ctrl: RegimeController, enabled: bool = True, accelerated: bool = False,
         sub_orbital: bool = False):
    return ctrl.update(enabled=enabled, host_accelerated=accelerated, sub_orbital=sub_orbital)


class TestBasicTransitions:
    """Test the nominal transition graph."""

    def test_starts_disabled(self) -> None:
        assert RegimeController().state is RegimeState.DISABLED

    def test_disabled_to_real_time(self) -> None:
        ctrl = RegimeController()
        decision = step(ctrl)
        assert decision.state is RegimeState.REAL_TIME
        assert decision.previous is RegimeState.DISABLED

    def test_stays_disabled_while_feature_off(self) -> None:
        ctrl = RegimeController()
        assert step(ctrl, enabled=False).state is RegimeState.DISABLED

    def test_disabled_waits_for_real_time(self) -> None:
        """Enabling during warp waits until the host is back in real time."""
        ctrl = RegimeController()
        assert step(ctrl, accelerated=True).state is RegimeState.DISABLED
        assert step(ctrl, accelerated=False).state is RegimeState.REAL_TIME

    def test_real_time_to_accelerated(self) -> None:
        ctrl = RegimeController()
        step(ctrl)
        assert step(ctrl, accelerated=True).state is RegimeState.ACCELERATED

    def test_accelerated_stays_accelerated(self) -> None:
        ctrl = RegimeController()
        step(ctrl)
        for _ in range(5):
            decision = step(ctrl, accelerated=True)
        assert decision.state is RegimeState.ACCELERATED
        assert not decision.entered_transition

    def test_any_state_to_disabled(self) -> None:
        for accelerated in (False, True):
            ctrl = RegimeController()
            step(ctrl)
            step(ctrl, accelerated=accelerated)
            assert step(ctrl, enabled=False).state is RegimeState.DISABLED


class TestTransitionEdge:
    """Test the one-step edge back to real time."""

    def test_edge_lasts_one_step(self) -> None:
        ctrl = RegimeController()
        step(ctrl)
        step(ctrl, accelerated=True)

        edge = step(ctrl, accelerated=False)
        assert edge.state is RegimeState.TRANSITIONING_TO_REAL_TIME
        assert edge.entered_transition

        after = step(ctrl, accelerated=False)
        assert after.state is RegimeState.REAL_TIME
        assert not after.entered_transition

    def test_edge_exits_even_if_host_warps_again(self) -> None:
        ctrl = RegimeController()
        step(ctrl)
        step(ctrl, accelerated=True)
        step(ctrl, accelerated=False)
        assert step(ctrl, accelerated=True).state is RegimeState.REAL_TIME
        assert step(ctrl, accelerated=True).state is RegimeState.ACCELERATED

    def test_real_time_exit_has_no_edge(self) -> None:
        ctrl = RegimeController()
        step(ctrl)
        decision = step(ctrl)
        assert not decision.entered_transition


class TestForcedExitAndSafeguard:
    """Test depletion exit and the sub-orbital safeguard."""

    def test_force_real_time_skips_edge(self) -> None:
        ctrl = RegimeController()
        step(ctrl)
        step(ctrl, accelerated=True)
        ctrl.force_real_time()
        assert ctrl.state is RegimeState.REAL_TIME

        decision = step(ctrl, accelerated=False)
        assert decision.state is RegimeState.REAL_TIME
        assert not decision.entered_transition

    def test_force_real_time_ignored_outside_acceleration(self) -> None:
        ctrl = RegimeController()
        ctrl.force_real_time()
        assert ctrl.state is RegimeState.DISABLED

    def test_sub_orbital_blocks_acceleration(self) -> None:
        ctrl = RegimeController()
        step(ctrl)
        for _ in range(3):
            decision = step(ctrl, accelerated=True, sub_orbital=True)
            assert decision.state is RegimeState.REAL_TIME
            assert decision.sub_orbital_blocked

    def test_sub_orbital_drops_out_of_acceleration(self) -> None:
        ctrl = RegimeController()
        step(ctrl)
        step(ctrl, accelerated=True)
        decision = step(ctrl, accelerated=True, sub_orbital=True)
        assert decision.state is RegimeState.REAL_TIME
        assert decision.sub_orbital_blocked

    def test_sub_orbital_in_real_time_is_not_blocked(self) -> None:
        ctrl = RegimeController()
        step(ctrl)
        decision = step(ctrl, sub_orbital=True)
        assert decision.state is RegimeState.REAL_TIME
        assert not decision.sub_orbital_blocked

    def test_orbit_restored_allows_acceleration(self) -> None:
        ctrl = RegimeController()
        step(ctrl)
        step(ctrl, accelerated=True, sub_orbital=True)
        assert step(ctrl, accelerated=True).state is RegimeState.ACCELERATED
