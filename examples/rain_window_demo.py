"""Example of configuring the cadence and opening the raindrop window."""

from rainpi import Simulation, configure_simulation
from rainpi.app import RainApp


def main():
    cfg = configure_simulation(
        batch_size=250,
        period_ms=200,
        manual_batch_sizes=(1, 10, 100, 1000, 10000),
        seed=1234,
        progress_to_terminal=True,
    )
    app = RainApp(Simulation(config=cfg))
    app.show()


if __name__ == "__main__":
    main()
