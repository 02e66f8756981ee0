"""
Title and signature formatting for documentation entries.

Pure functions: they read declaration shape and return display strings.
Nothing here mutates the syntax tree or raises on unnamed nodes.
"""

from typing import List, Optional

from tree_sitter import Node

from source_model.config import ANONYMOUS_NAME
from source_model.declarations import parameter_list
from source_model.models import ParameterDescriptor

STATIC_JOINER = "."
INSTANCE_JOINER = "#"


def display_name(name: Optional[str]) -> str:
    return name or ANONYMOUS_NAME


def format_parameter(parameter: ParameterDescriptor) -> str:
    """Format one parameter as ``...name``, ``name?`` or ``name``.

    A rest parameter never gets the optional marker, even when it is also
    marked optional or has a default.
    """
    if parameter.is_rest:
        return f"...{parameter.name}"
    if parameter.has_default or parameter.is_optional:
        return f"{parameter.name}?"
    return parameter.name


def parameters_for_node(node: Node) -> List[str]:
    """Formatted parameter tokens for a function- or method-like node."""
    return [format_parameter(parameter) for parameter in parameter_list(node)]


def keyword_title(keyword: str, name: Optional[str]) -> str:
    """``class Foo``, ``const x``, ``type T``..."""
    return f"{keyword} {display_name(name)}"


def call_syntax(name: Optional[str], parameters: List[str]) -> str:
    return f"{display_name(name)}({', '.join(parameters)})"


def function_title(name: Optional[str], parameters: List[str]) -> str:
    return f"function {call_syntax(name, parameters)}"


def setter_syntax(name: Optional[str]) -> str:
    return f"{display_name(name)}="


def joiner(static: bool) -> str:
    """``.`` for static members, ``#`` for instance members."""
    return STATIC_JOINER if static else INSTANCE_JOINER


def owned_title(owner_name: str, member_syntax: str, static: bool) -> str:
    """Qualify a member's call syntax with its owner, e.g. ``Widget#render()``."""
    return f"{owner_name}{joiner(static)}{member_syntax}"
