"""
Serialization helpers for line grammars (components and definitions).

Provides lossless JSON/YAML round-trip via intermediate dict representation,
and loading/saving of YAML catalogue files holding several definitions.
This module intentionally keeps serialization structure stable and explicit.

Processed components wrap arbitrary callables and cannot be serialized.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List

import yaml

from datline.components import (
    Boolean,
    Choice,
    Component,
    FixedLength,
    Integer,
    IntegerVector,
    Length,
    LengthFrom,
    Processed,
    Real,
    RealVector,
    Selection,
    Separator,
    String,
    Switch,
)
from datline.definition import LineDefinition

logger = logging.getLogger("datline.serialization")

_SCALAR_TYPES = {
    "string": String,
    "int": Integer,
    "real": Real,
    "bool": Boolean,
}
_VECTOR_TYPES = {
    "int_vector": IntegerVector,
    "real_vector": RealVector,
}


def length_to_dict(length: Length) -> Dict[str, Any]:
    if isinstance(length, FixedLength):
        return {"fixed": length.value}
    if isinstance(length, LengthFrom):
        return {"from": length.field}
    raise TypeError(f"Unsupported length type: {type(length)}")


def length_from_dict(d: Dict[str, Any]) -> Length:
    if "fixed" in d:
        return FixedLength(d["fixed"])
    if "from" in d:
        return LengthFrom(d["from"])
    raise TypeError(f"Unsupported length dict: {d}")


def component_to_dict(c: Component) -> Dict[str, Any]:
    if isinstance(c, Separator):
        return {"type": "separator", "name": c.name, "optional": c.optional, "description": c.description}
    for tag, cls in _SCALAR_TYPES.items():
        if type(c) is cls:
            return {
                "type": tag,
                "name": c.name,
                "default": c.default,
                "optional": c.optional,
                "description": c.description,
            }
    for tag, cls in _VECTOR_TYPES.items():
        if type(c) is cls:
            return {
                "type": tag,
                "name": c.name,
                "length": length_to_dict(c.length),
                "default": c.default,
                "optional": c.optional,
                "description": c.description,
            }
    if isinstance(c, Selection):
        return {
            "type": "selection",
            "name": c.name,
            "default": c.default,
            "literals": list(c.literals),
            "values": list(c.values),
            "optional": c.optional,
            "description": c.description,
        }
    if isinstance(c, Switch):
        return {
            "type": "switch",
            "name": c.name,
            "default_key": c.default_key,
            "choices": [choice_to_dict(choice) for choice in c.choices],
            "optional": c.optional,
            "description": c.description,
        }
    if isinstance(c, Processed):
        raise TypeError(f"Processed component '{c.name}' cannot be serialized")
    raise TypeError(f"Unsupported Component type: {type(c)}")


def component_from_dict(d: Dict[str, Any]) -> Component:
    t = d.get("type")
    optional = d.get("optional", False)
    description = d.get("description", "")
    if t == "separator":
        return Separator(d["name"], description=description, optional=optional)
    if t in _SCALAR_TYPES:
        cls = _SCALAR_TYPES[t]
        if "default" in d:
            return cls(d["name"], default=d["default"], optional=optional, description=description)
        return cls(d["name"], optional=optional, description=description)
    if t in _VECTOR_TYPES:
        cls = _VECTOR_TYPES[t]
        length = length_from_dict(d.get("length", {"fixed": 1}))
        if "default" in d:
            return cls(d["name"], length, default=d["default"], optional=optional, description=description)
        return cls(d["name"], length, optional=optional, description=description)
    if t == "selection":
        return Selection(
            name=d["name"],
            default=d["default"],
            literals=d["literals"],
            values=d["values"],
            optional=optional,
            description=description,
        )
    if t == "switch":
        return Switch(
            name=d["name"],
            default_key=d["default_key"],
            choices=[choice_from_dict(choice) for choice in d.get("choices", [])],
            optional=optional,
            description=description,
        )
    raise TypeError(f"Unsupported component dict type: {t}")


def choice_to_dict(choice: Choice) -> Dict[str, Any]:
    return {
        "key": choice.key,
        "literal": choice.literal,
        "components": [component_to_dict(c) for c in choice.components],
    }


def choice_from_dict(d: Dict[str, Any]) -> Choice:
    return Choice(
        key=d["key"],
        literal=d["literal"],
        components=tuple(component_from_dict(c) for c in d.get("components", [])),
    )


def definition_to_dict(definition: LineDefinition) -> Dict[str, Any]:
    return {
        "section": definition.section,
        "description": definition.description,
        "components": [component_to_dict(c) for c in definition.components],
    }


def definition_from_dict(d: Dict[str, Any]) -> LineDefinition:
    return LineDefinition(
        section=d.get("section", ""),
        components=[component_from_dict(c) for c in d.get("components", [])],
        description=d.get("description", ""),
    )


def definition_to_json(definition: LineDefinition) -> str:
    return json.dumps(definition_to_dict(definition), sort_keys=True)


def definition_from_json(s: str) -> LineDefinition:
    d = json.loads(s)
    return definition_from_dict(d)


def definition_to_yaml(definition: LineDefinition) -> str:
    return yaml.safe_dump(definition_to_dict(definition), sort_keys=False)


def definition_from_yaml(s: str) -> LineDefinition:
    d = yaml.safe_load(s)
    return definition_from_dict(d)


def load_catalog(path: str | Path) -> Dict[str, LineDefinition]:
    """
    Load a YAML catalogue of line definitions.

    The file holds a top-level `definitions` list; each entry is a
    definition dict as produced by definition_to_dict().

    Returns:
        Definitions keyed by section name, in file order
    """
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    catalog: Dict[str, LineDefinition] = {}
    for entry in data.get("definitions", []):
        definition = definition_from_dict(entry)
        if definition.section in catalog:
            raise ValueError(f"Section '{definition.section}' defined twice in {path}")
        catalog[definition.section] = definition

    logger.info("Loaded %d line definitions from %s", len(catalog), path)
    return catalog


def save_catalog(definitions: List[LineDefinition], path: str | Path) -> None:
    """Write definitions to a YAML catalogue readable by load_catalog()."""
    path = Path(path)
    data = {"definitions": [definition_to_dict(d) for d in definitions]}
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(data, f, sort_keys=False)


__all__ = [
    "component_to_dict",
    "component_from_dict",
    "definition_to_dict",
    "definition_from_dict",
    "definition_to_json",
    "definition_from_json",
    "definition_to_yaml",
    "definition_from_yaml",
    "load_catalog",
    "save_catalog",
]
