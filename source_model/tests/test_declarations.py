"""
Unit tests for declarations.py

Tests export enumeration, declaration kinds, names, members, modifiers and
parameter descriptors.
"""

import unittest

from source_model.declarations import (
    declaration_kind,
    declared_name,
    direct_children,
    is_readonly,
    is_static,
    list_exported_declarations,
    parameter_list,
)
from source_model.models import DeclarationKind, ParameterDescriptor
from source_model.parser import parse_source


def _module(source: str):
    return parse_source(source.encode("utf-8"), "/project/src/index.ts")


def _exported(source: str):
    return list_exported_declarations(_module(source))


def _members_by_name(source: str):
    class_node = _exported(source)[0]
    return {declared_name(node): node for node in direct_children(class_node)}


class TestExportedDeclarations(unittest.TestCase):
    """Test which declarations a module exports, and in what order."""

    def test_source_order_is_preserved(self):
        nodes = _exported(
            """
export type Id = string;
export class Zebra {}
export function alpha() {}
"""
        )
        self.assertEqual([declared_name(n) for n in nodes], ["Id", "Zebra", "alpha"])

    def test_non_exported_declarations_are_ignored(self):
        nodes = _exported(
            """
class Hidden {}
const secret = 1;
export const visible = 2;
"""
        )
        self.assertEqual([declared_name(n) for n in nodes], ["visible"])

    def test_each_declarator_is_a_declaration(self):
        nodes = _exported("export const a = 1, b = 2;\nexport let c = 3;")
        self.assertEqual([declared_name(n) for n in nodes], ["a", "b", "c"])
        self.assertTrue(all(declaration_kind(n) == DeclarationKind.VARIABLE for n in nodes))

    def test_destructuring_declarators_are_skipped(self):
        nodes = _exported("export const a = 1, { d, e } = obj, [f] = list;\nexport const g = 2;")
        self.assertEqual([declared_name(n) for n in nodes], ["a", "g"])

    def test_export_clause_resolves_local_declarations(self):
        nodes = _exported(
            """
class Engine {}
function helper(a: number) { return a; }
const version = "1.0";
export { Engine, helper as util, version };
"""
        )
        self.assertEqual([declared_name(n) for n in nodes], ["Engine", "helper", "version"])

    def test_default_export_of_identifier_is_not_duplicated(self):
        nodes = _exported(
            """
export class Engine {}
export default Engine;
"""
        )
        self.assertEqual(len(nodes), 1)
        self.assertEqual(declared_name(nodes[0]), "Engine")

    def test_anonymous_default_class(self):
        nodes = _exported("export default class { run() {} }")
        self.assertEqual(len(nodes), 1)
        self.assertEqual(declaration_kind(nodes[0]), DeclarationKind.CLASS)
        self.assertIsNone(declared_name(nodes[0]))

    def test_anonymous_default_function(self):
        nodes = _exported("export default function (a, b) {}")
        self.assertEqual(len(nodes), 1)
        self.assertEqual(declaration_kind(nodes[0]), DeclarationKind.FUNCTION)
        self.assertIsNone(declared_name(nodes[0]))

    def test_reexports_are_not_followed(self):
        nodes = _exported(
            """
export * from "./other";
export { Thing } from "./thing";
"""
        )
        self.assertEqual(nodes, [])

    def test_imported_names_are_not_resolved(self):
        nodes = _exported('import { Point } from "./point";\nexport { Point };')
        self.assertEqual(nodes, [])

    def test_ambient_declarations_are_unwrapped(self):
        nodes = _exported(
            """
export declare function parse(input: string): void;
export declare class Parser {}
"""
        )
        kinds = [declaration_kind(n) for n in nodes]
        self.assertEqual(kinds, [DeclarationKind.FUNCTION, DeclarationKind.CLASS])
        self.assertEqual([declared_name(n) for n in nodes], ["parse", "Parser"])


class TestDeclarationKind(unittest.TestCase):
    def test_top_level_kinds(self):
        nodes = _exported(
            """
export class A {}
export abstract class B {}
export function c() {}
export const d = 1;
export interface E {}
export type F = number;
export enum G { One }
"""
        )
        self.assertEqual(
            [declaration_kind(n) for n in nodes],
            [
                DeclarationKind.CLASS,
                DeclarationKind.CLASS,
                DeclarationKind.FUNCTION,
                DeclarationKind.VARIABLE,
                DeclarationKind.INTERFACE,
                DeclarationKind.TYPE_ALIAS,
                DeclarationKind.OTHER,
            ],
        )

    def test_member_kinds(self):
        members = _members_by_name(
            """
export class Box {
  size = 1;
  open(): void {}
  get label(): string { return ""; }
  set label(value: string) {}
}
"""
        )
        self.assertEqual(declaration_kind(members["size"]), DeclarationKind.PROPERTY)
        self.assertEqual(declaration_kind(members["open"]), DeclarationKind.METHOD)

        label_kinds = [
            declaration_kind(node)
            for node in direct_children(_exported(
                "export class Box { get label(): string { return ''; } set label(v: string) {} }"
            )[0])
        ]
        self.assertEqual(
            label_kinds,
            [DeclarationKind.GET_ACCESSOR, DeclarationKind.SET_ACCESSOR],
        )

    def test_method_named_get_is_a_method(self):
        members = _members_by_name(
            "export class Store { get(key: string): string { return key; } }"
        )
        self.assertEqual(declaration_kind(members["get"]), DeclarationKind.METHOD)

    def test_constructor_is_not_a_method(self):
        members = _members_by_name(
            "export class Point { constructor(x: number) {} }"
        )
        self.assertEqual(declaration_kind(members["constructor"]), DeclarationKind.OTHER)


class TestDirectChildren(unittest.TestCase):
    def test_inherited_members_are_excluded(self):
        nodes = _exported(
            """
export class Base { inherited(): void {} }
export class Derived extends Base { own(): void {} }
"""
        )
        derived = nodes[1]
        self.assertEqual([declared_name(n) for n in direct_children(derived)], ["own"])

    def test_interface_members(self):
        interface = _exported(
            "export interface Shape { readonly kind: string; area(): number; }"
        )[0]
        self.assertEqual(
            [declared_name(n) for n in direct_children(interface)],
            ["kind", "area"],
        )

    def test_non_container_has_no_children(self):
        function = _exported("export function f() { const inner = 1; }")[0]
        self.assertEqual(direct_children(function), [])


class TestModifiers(unittest.TestCase):
    def test_static_and_readonly(self):
        members = _members_by_name(
            """
export class Config {
  static defaults = {};
  readonly path: string = "";
  static readonly version = 1;
  mutable = true;
  static load(): Config { return new Config(); }
}
"""
        )
        self.assertTrue(is_static(members["defaults"]))
        self.assertFalse(is_readonly(members["defaults"]))
        self.assertFalse(is_static(members["path"]))
        self.assertTrue(is_readonly(members["path"]))
        self.assertTrue(is_static(members["version"]))
        self.assertTrue(is_readonly(members["version"]))
        self.assertFalse(is_static(members["mutable"]))
        self.assertFalse(is_readonly(members["mutable"]))
        self.assertTrue(is_static(members["load"]))

    def test_interface_members_are_never_static(self):
        interface = _exported("export interface Api { call(): void; readonly id: number; }")[0]
        for member in direct_children(interface):
            self.assertFalse(is_static(member))

    def test_interface_readonly_property_signature(self):
        interface = _exported("export interface Api { readonly id: number; name: string; }")[0]
        readonly = [is_readonly(member) for member in direct_children(interface)]
        self.assertEqual(readonly, [True, False])


class TestParameterList(unittest.TestCase):
    def test_parameter_shapes(self):
        function = _exported(
            "export function area(width: number, height = 1, depth?: number, ...rest: number[]) {}"
        )[0]
        self.assertEqual(
            parameter_list(function),
            [
                ParameterDescriptor(name="width"),
                ParameterDescriptor(name="height", has_default=True),
                ParameterDescriptor(name="depth", is_optional=True),
                ParameterDescriptor(name="rest", is_rest=True),
            ],
        )

    def test_destructured_parameters_use_pattern_text(self):
        function = _exported("export function configure({ a, b }: Options) {}")[0]
        self.assertEqual([p.name for p in parameter_list(function)], ["{ a, b }"])

    def test_generic_function_parameters(self):
        function = _exported("export function identity<T>(value: T): T { return value; }")[0]
        self.assertEqual([p.name for p in parameter_list(function)], ["value"])

    def test_no_parameters(self):
        function = _exported("export function now() {}")[0]
        self.assertEqual(parameter_list(function), [])

    def test_node_without_parameter_list(self):
        constant = _exported("export const x = 1;")[0]
        self.assertEqual(parameter_list(constant), [])


if __name__ == "__main__":
    unittest.main()
