"""Run the exporter from a source checkout: python ."""

from gen8_exporter.__main__ import run

if __name__ == "__main__":
    run()
