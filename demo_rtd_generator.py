#!/usr/bin/env python3
"""
Demo: Generate read-the-docs sections from the example grammars.

Shows both rendering modes (SIMPLE, DETAILED).
"""

from datline.backends import RtdMode, generate_rtd
from datline.examples import build_manifold_kinetics_definition


def main():
    definition = build_manifold_kinetics_definition()

    print("=" * 80)
    print("RTD GENERATOR DEMO")
    print("=" * 80)

    for mode in [RtdMode.SIMPLE, RtdMode.DETAILED]:
        print(f"\n{mode.value.upper()} MODE:")
        print("-" * 80)
        print(generate_rtd(definition, mode=mode))


if __name__ == "__main__":
    main()
