"""
Example grammars for proof-of-concept, taken from scalar transport on
manifold conditions.

Builds three line definitions:
    - Manifold surface: labelled int, selection and real
    - Manifold kinetics: a switch over three kinetic models, one of them
      with a vector sized by a previously read count
    - Manifold Dirichlet: three vectors sized by NUMDOF
"""
from typing import List

from datline.components import (
    Component,
    Integer,
    IntegerVector,
    LengthFrom,
    Real,
    RealVector,
    Selection,
    Separator,
    Switch,
)
from datline.definition import LineDefinition

# Kinetic models
KINETICS_CONSTANT_INTERFACE_RESISTANCE = 1
KINETICS_BUTLER_VOLMER_REDUCED = 2
KINETICS_NO_INTERFACE_FLUX = 3

# Implementation types
IMPLTYPE_UNDEFINED = 0
IMPLTYPE_STD = 1
IMPLTYPE_ELCH_ELECTRODE = 2
IMPLTYPE_ELCH_DIFFCOND = 3


def _named_int(name: str, description: str = "", optional: bool = False) -> List[Component]:
    return [
        Separator(name, description=description, optional=optional),
        Integer(name, optional=optional, description=description),
    ]


def _named_real(name: str, description: str = "", optional: bool = False) -> List[Component]:
    return [
        Separator(name, description=description, optional=optional),
        Real(name, optional=optional, description=description),
    ]


def build_manifold_surface_definition() -> LineDefinition:
    components: List[Component] = []
    components += _named_int("ConditionID")
    components.append(Separator("ImplType"))
    components.append(
        Selection(
            name="ImplType",
            default="Undefined",
            literals=["Undefined", "Standard", "ElchElectrode", "ElchDiffCond"],
            values=[IMPLTYPE_UNDEFINED, IMPLTYPE_STD, IMPLTYPE_ELCH_ELECTRODE, IMPLTYPE_ELCH_DIFFCOND],
            description="implementation type",
        )
    )
    components += _named_real("thickness")

    return LineDefinition(
        section="DESIGN SSI MANIFOLD SURF CONDITIONS",
        components=components,
        description="scalar transport on manifold",
    )


def build_manifold_kinetics_definition() -> LineDefinition:
    constant_interface_resistance = [
        Separator("ONOFF"),
        IntegerVector("ONOFF", 2),
        Separator("RESISTANCE"),
        Real("RESISTANCE"),
        Separator("E-"),
        Integer("E-"),
    ]

    butler_volmer_reduced = [
        # total number of existing scalars
        Separator("NUMSCAL"),
        Integer("NUMSCAL"),
        Separator("STOICHIOMETRIES"),
        IntegerVector("STOICHIOMETRIES", LengthFrom("NUMSCAL")),
        Separator("E-"),
        Integer("E-"),
        Separator("K_R"),
        Real("K_R"),
        Separator("ALPHA_A"),
        Real("ALPHA_A"),
        Separator("ALPHA_C"),
        Real("ALPHA_C"),
    ]

    kinetic_model_choices = {
        KINETICS_CONSTANT_INTERFACE_RESISTANCE: ("ConstantInterfaceResistance", constant_interface_resistance),
        KINETICS_BUTLER_VOLMER_REDUCED: ("Butler-VolmerReduced", butler_volmer_reduced),
        KINETICS_NO_INTERFACE_FLUX: ("NoInterfaceFlux", []),
    }

    components: List[Component] = []
    components += _named_int("ConditionID")
    components += _named_int("ManifoldConditionID")
    components.append(Separator("KINETIC_MODEL"))
    components.append(
        Switch(
            name="KINETIC_MODEL",
            default_key=KINETICS_CONSTANT_INTERFACE_RESISTANCE,
            choices=kinetic_model_choices,
            description="kinetic model",
        )
    )

    return LineDefinition(
        section="DESIGN SSI MANIFOLD KINETICS SURF CONDITIONS",
        components=components,
        description="kinetics model for coupling scatra <-> scatra on manifold",
    )


def build_manifold_dirichlet_definition(section: str = "DESIGN SURF MANIFOLD DIRICH CONDITIONS") -> LineDefinition:
    components: List[Component] = []
    components += _named_int("NUMDOF")
    components.append(Separator("ONOFF"))
    components.append(IntegerVector("ONOFF", LengthFrom("NUMDOF")))
    components.append(Separator("VAL"))
    components.append(RealVector("VAL", LengthFrom("NUMDOF")))
    components.append(Separator("FUNCT", optional=True))
    components.append(IntegerVector("FUNCT", LengthFrom("NUMDOF"), optional=True))

    return LineDefinition(section=section, components=components, description="Surface Dirichlet")


def build_example_definitions() -> List[LineDefinition]:
    return [
        build_manifold_surface_definition(),
        build_manifold_kinetics_definition(),
        build_manifold_dirichlet_definition(),
    ]
