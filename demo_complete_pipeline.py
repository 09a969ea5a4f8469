#!/usr/bin/env python3
"""
Complete Pipeline Demo: Catalogue → Definitions → Lines → Documentation

Shows the full workflow:
1. Save and reload the example grammars as a YAML catalogue
2. Read condition lines into parameter containers
3. Report a malformed line
4. Generate read-the-docs sections
"""

import logging
import tempfile
from pathlib import Path

from datline.backends import RtdMode, save_rtd_file
from datline.errors import LineParseError
from datline.examples import build_example_definitions
from datline.serialization import load_catalog, save_catalog

SAMPLE_LINES = {
    "DESIGN SSI MANIFOLD SURF CONDITIONS": [
        "ConditionID 1 ImplType ElchElectrode thickness 1.5e-3",
    ],
    "DESIGN SSI MANIFOLD KINETICS SURF CONDITIONS": [
        "ConditionID 1 ManifoldConditionID 2 KINETIC_MODEL Butler-VolmerReduced "
        "NUMSCAL 2 STOICHIOMETRIES -1 1 E- 1 K_R 1.0e-3 ALPHA_A 0.5 ALPHA_C 0.5",
        "ConditionID 2 ManifoldConditionID 1 KINETIC_MODEL NoInterfaceFlux",
    ],
    "DESIGN SURF MANIFOLD DIRICH CONDITIONS": [
        "NUMDOF 2 ONOFF 1 0 VAL 0.0 1.0 FUNCT 1 0",
        "NUMDOF 2 ONOFF 1 VAL 0.0 1.0",
    ],
}


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    print("=" * 80)
    print("COMPLETE PIPELINE DEMO: Catalogue → Lines → Documentation")
    print("=" * 80)

    workdir = Path(tempfile.mkdtemp(prefix="datline_"))

    # =========================================================================
    # STEP 1: Catalogue
    # =========================================================================
    print("\n1. WRITING AND LOADING CATALOGUE...")
    catalog_path = workdir / "catalog.yaml"
    save_catalog(build_example_definitions(), catalog_path)
    catalog = load_catalog(catalog_path)
    for section in catalog:
        print(f"   ✓ {section}")

    # =========================================================================
    # STEP 2: Read Lines
    # =========================================================================
    print("\n2. READING LINES...")
    for section, lines in SAMPLE_LINES.items():
        definition = catalog[section]
        for line in lines:
            print(f"   {line}")
            try:
                container = definition.read(line)
            except LineParseError as e:
                print(f"      ✗ {type(e).__name__}: {e}")
                continue
            for name, value in container.to_dict().items():
                print(f"      {name} = {value!r}")

    # =========================================================================
    # STEP 3: Documentation
    # =========================================================================
    print("\n3. GENERATING DOCUMENTATION...")
    for definition in catalog.values():
        filename = workdir / f"{definition.section.lower().replace(' ', '_')}.rst"
        save_rtd_file(definition, str(filename), mode=RtdMode.DETAILED)
        print(f"   ✓ Saved {filename}")

    print("\n" + "=" * 80)
    print("PIPELINE COMPLETE!")
    print("=" * 80)


if __name__ == "__main__":
    main()
