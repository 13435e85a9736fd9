#!/usr/bin/env python
"""Ion engine burn across real time, time warp, and propellant depletion.

This example demonstrates the full persistent thrust cycle:
1. Build an orbiting probe with a xenon ion engine
2. Burn in real time while the engine samples its operating point
3. Switch to 1000x time warp and integrate thrust per warp step
4. Run the tanks dry and watch the engine drop the host out of warp
5. Summarize the step history
"""

import logging
from collections import Counter

from persistent_thrust import PersistentThrustConfig, StepOutcome
from persistent_thrust.simulation import Simulator


def main() -> None:
    """Run the ion warp burn example."""
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(message)s")

    print("=" * 60)
    print("PERSISTENT THRUST: ION WARP BURN")
    print("=" * 60)

    # =========================================================================
    # 1. Build the probe
    # =========================================================================
    print("\n1. Building probe...")

    config = PersistentThrustConfig(persistent_enabled=True, record_history=True)
    sim = Simulator.ion_probe(xenon=2000.0, dry_mass=800.0, config=config)
    engine = sim.engines[0]

    print(f"   Wet mass:        {sim.vessel.total_mass():.1f} kg")
    print(f"   Avg density:     {engine.mixture.average_density:.5f} kg/unit")
    print(f"   Sample period:   {config.sample_period} steps")

    # =========================================================================
    # 2. Real time
    # =========================================================================
    print("\n2. Burning in real time...")

    sim.run(steps=100)
    telemetry = engine.telemetry()
    print(f"   Regime:          {engine.state.name}")
    print(f"   Thrust:          {telemetry.thrust:.0f} N")
    print(f"   Isp:             {telemetry.specific_impulse:.0f} s")
    print(f"   Warp g limit:    {sim.clock.acceleration_limit:.3f} g")

    # =========================================================================
    # 3. Time warp
    # =========================================================================
    print("\n3. Warping at 1000x...")

    sim.clock.set_rate(1000.0)
    steps = 0
    while sim.clock.is_accelerated() and steps < 1000:
        sim.step()
        steps += 1

    print(f"   Warp steps:      {steps}")
    print(f"   Regime:          {engine.state.name}")
    print(f"   Xenon left:      {sim.vessel.store.amount('XenonGas'):.3f} units")

    # =========================================================================
    # 4. Results
    # =========================================================================
    print("\n4. Results:")
    print("-" * 40)

    history = engine.history()
    counts = Counter(history.outcomes())
    for outcome in StepOutcome:
        if counts[outcome]:
            print(f"   {outcome.name:<14} {counts[outcome]:>5} steps")

    print(f"   Applied dv:      {history.total_delta_v:.1f} m/s")
    print(f"   Final mass:      {sim.vessel.total_mass():.1f} kg")
    print(f"   Final speed:     {sim.vessel.speed:.1f} m/s")
    for message in engine.diagnostics.messages:
        print(f"   Message:         {message.text}")

    frame = history.to_dataframe()
    print(f"\n   History table:   {frame.height} rows x {frame.width} columns")

    print("\n" + "=" * 60)
    print("SIMULATION COMPLETE")
    print("=" * 60)


if __name__ == "__main__":
    main()
