"""Example of letting it rain on background timer threads without a window."""

import time

from rainpi import Simulation, ThreadScheduler, configure_simulation
from rainpi.plotting import format_estimate


def report(snapshot):
    print(f"raindrops={snapshot.total:6d}  pi ~ {format_estimate(snapshot.estimate)}")


if __name__ == "__main__":
    configure_simulation(batch_size=1000, period_ms=100, seed=42)
    sim = Simulation(scheduler=ThreadScheduler())
    sim.subscribe(report)

    sim.generate_batch(100)
    sim.start_cadence()
    time.sleep(1.05)
    sim.stop_cadence()

    stats = sim.statistics()
    print(f"final: {format_estimate(stats.estimate)} (stderr {stats.stderr:.6f})")
