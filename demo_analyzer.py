"""
Demo: Run the analyzer on the example grammars and print the reports.
"""

from datline.analyzer import analyze_definition
from datline.examples import build_example_definitions
from datline.serialization import save_catalog


def print_report(report):
    """Pretty-print a GrammarReport."""
    print()
    print("=" * 70)
    print(f"GRAMMAR ANALYSIS REPORT: {report.name}")
    print("=" * 70)
    print()

    print("📊 COMPONENTS")
    print(f"  Total Components:      {report.total_components}")
    print(f"  Optional Components:   {report.optional_components}")
    for kind, count in sorted(report.component_counts.items()):
        print(f"    {kind}: {count}")
    print()

    print("🔀 SWITCHES")
    print(f"  Branches:              {report.total_branches}")
    print(f"  Switch Depth:          {report.switch_depth}")
    print()

    print("🔑 CONTAINER KEYS")
    print(f"  Keys Written:          {', '.join(report.keys_written)}")
    if report.length_dependencies:
        print("  Dynamic Lengths:")
        for vector, source in report.length_dependencies.items():
            print(f"    {vector} <- {source}")
    print()

    if report.warnings:
        print("⚠️  WARNINGS")
        for i, warning in enumerate(report.warnings, 1):
            print(f"  {i}. {warning}")
    else:
        print("✨ NO WARNINGS - Grammar looks clean!")
    print()


if __name__ == "__main__":
    definitions = build_example_definitions()

    for definition in definitions:
        print_report(analyze_definition(definition))

    # Also save a catalogue for inspection
    save_catalog(definitions, "example_catalog.yaml")
    print("✅ Definitions exported to example_catalog.yaml")
