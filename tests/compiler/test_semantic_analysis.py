# Copyright 2026 CreatorGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the C# semantic model and structural checks."""

from creatorgen.compiler.parser import parse
from creatorgen.compiler.semantic_analysis import SemanticError, SemanticModel, analyze
from creatorgen.compiler.syntax import CompilationUnit
from creatorgen.generator.emitter import emit_marker_attribute
from creatorgen.generator.provider import Declaration
from creatorgen.model.types import Accessibility, TypeDescriptor, TypeKind, TypeReference

# ###############
# Test Helpers
# ###############

MARKER = "CreatorGen.CreatorAttribute"


def _units(*sources: str) -> list[CompilationUnit]:
    return [parse(source) for source in sources]


def _model(*sources: str) -> tuple[SemanticModel, list[CompilationUnit]]:
    """Build a model over *sources* plus the marker attribute definition."""
    units = _units(*sources)
    model = SemanticModel([parse(emit_marker_attribute("CreatorGen")), *units])
    assert model.errors == []
    return model, units


def _descriptor(model: SemanticModel, name: str, arity: int = 0) -> TypeDescriptor:
    descriptor = model.lookup(name, arity)
    assert descriptor is not None, name
    return descriptor


def _declarations(model: SemanticModel, unit: CompilationUnit) -> list[Declaration]:
    return list(model.declarations_with_annotations(unit))


SERVICES = """
using InnerApi.Core.Models;
using InnerApi.Core.Services;
using InnerApi.Core.Repositories;
using CreatorGen;

namespace InnerApi.Core.Tests
{
    [TestFixture]
    [Creator(Target = typeof(AccountsService))]
    public partial class AccountsServiceTests
    {
    }
}

namespace InnerApi.Core.Services
{
    using InnerApi.Core.Models;
    using InnerApi.Core.Repositories;

    public class AccountsService : IAccountsService
    {
        private readonly IAccountsRepository _accountsRepository;

        public AccountsService(IAccountsRepository accountsRepository)
        {
            _accountsRepository = accountsRepository;
        }

        public async Task<Account> GetAccount(string accountId)
        {
            return await _accountsRepository.GetAccount(accountId);
        }
    }

    public interface IAccountsService
    {
        Account GetAccount(string accountId);
    }
}

namespace InnerApi.Core.Repositories
{
    using InnerApi.Core.Models;

    public interface IAccountsRepository
    {
        Task<Account> GetAccount(string accountId);
    }
}

namespace InnerApi.Core.Models
{
    public class Account
    {
        public string Id { get; set; }
    }
}
"""


# ###############
# Declarations
# ###############


class TestDeclarations:
    def test_annotated_class_is_reported(self) -> None:
        model, units = _model(SERVICES)
        declarations = _declarations(model, units[0])
        assert len(declarations) == 1
        declaration = declarations[0]
        assert declaration.name == "AccountsServiceTests"
        assert declaration.accessibility == "public"
        assert declaration.namespace == "InnerApi.Core.Tests"

    def test_imports_are_compilation_unit_usings(self) -> None:
        model, units = _model(SERVICES)
        declaration = _declarations(model, units[0])[0]
        assert declaration.imports == (
            "InnerApi.Core.Models",
            "InnerApi.Core.Services",
            "InnerApi.Core.Repositories",
            "CreatorGen",
        )

    def test_imports_include_enclosing_namespace_usings(self) -> None:
        model, units = _model("using A;\nnamespace N { using B; namespace M { using C; [X] class T { } } }")
        declaration = _declarations(model, units[0])[0]
        assert declaration.imports == ("A", "B", "C")
        assert declaration.namespace == "N.M"

    def test_namespace_usings_are_fully_qualified(self) -> None:
        """Relative directives inside a namespace are written as seen from the file top."""
        model, units = _model(
            "using Outer;\n"
            "namespace Company {\n"
            "    namespace Services { public interface IRepo { } public static class Factory { } }\n"
            "    namespace Tests {\n"
            "        using Services;\n"
            "        using Repo = Services.IRepo;\n"
            "        using static Services.Factory;\n"
            "        using global::System.Text;\n"
            "        [X] class T { }\n"
            "    }\n"
            "}"
        )
        declaration = _declarations(model, units[0])[0]
        assert declaration.imports == (
            "Outer",
            "Company.Services",
            "Repo = Company.Services.IRepo",
            "static Company.Services.Factory",
            "global::System.Text",
        )

    def test_annotation_type_names(self) -> None:
        model, units = _model(SERVICES)
        declaration = _declarations(model, units[0])[0]
        assert [a.type_name for a in declaration.annotations] == [None, MARKER]

    def test_annotation_arguments_filters_by_type(self) -> None:
        model, units = _model(SERVICES)
        declaration = _declarations(model, units[0])[0]
        argument_lists = model.annotation_arguments(declaration, MARKER)
        assert len(argument_lists) == 1
        assert [a.name for a in argument_lists[0]] == ["Target"]
        assert model.annotation_arguments(declaration, "Other.Attribute") == []

    def test_full_attribute_name_and_qualified_name_resolve(self) -> None:
        model, units = _model(
            "[CreatorGen.CreatorAttribute(Target = typeof(A))] public partial class T1 { }\n"
            "[global::CreatorGen.Creator(Target = typeof(A))] public partial class T2 { }\n"
            "public class A { }"
        )
        declarations = _declarations(model, units[0])
        assert [d.annotations[0].type_name for d in declarations] == [MARKER, MARKER]

    def test_unannotated_and_non_class_declarations_are_not_reported(self) -> None:
        model, units = _model(
            "using CreatorGen;\n"
            "public partial class Plain { }\n"
            "[Creator(Target = typeof(Plain))] public partial struct S { }\n"
            "public partial class Outer { [Creator(Target = typeof(Plain))] partial class Nested { } }"
        )
        assert _declarations(model, units[0]) == []

    def test_global_namespace_declaration(self) -> None:
        model, units = _model("[Foo] class T { }")
        declaration = _declarations(model, units[0])[0]
        assert declaration.namespace is None
        assert declaration.accessibility == "internal"

    def test_unknown_tree_yields_nothing(self) -> None:
        model, _ = _model(SERVICES)
        assert list(model.declarations_with_annotations(parse("[X] class T { }"))) == []


# ###############
# Type Binding
# ###############


class TestTypeBinding:
    def _target(self, model: SemanticModel, unit: CompilationUnit) -> TypeReference | None:
        declaration = _declarations(model, unit)[0]
        arguments = model.annotation_arguments(declaration, MARKER)[0]
        return model.type_of_argument(arguments[0].expression)

    def test_typeof_through_using(self) -> None:
        model, units = _model(SERVICES)
        target = self._target(model, units[0])
        assert target is not None
        assert target.name == "AccountsService"
        assert target.namespace == "InnerApi.Core.Services"

    def test_typeof_in_enclosing_namespace(self) -> None:
        model, units = _model(
            "namespace Shop.Tests { [CreatorGen.Creator(Target = typeof(Cart))] partial class CartTests { } }\n"
            "namespace Shop { class Cart { } }"
        )
        target = self._target(model, units[0])
        assert target is not None
        assert target.display_name == "Shop.Cart"

    def test_typeof_nested_type(self) -> None:
        model, units = _model(
            "[CreatorGen.Creator(Target = typeof(Outer.Inner))] partial class T { }\n"
            "namespace Ns { }\n"
            "class Outer { public class Inner { } }"
        )
        target = self._target(model, units[0])
        assert target is not None
        assert target.containing_types == ("Outer",)
        assert target.metadata_name == "Outer+Inner"

    def test_typeof_through_alias(self) -> None:
        model, units = _model(
            "using Svc = Billing.Services;\n[CreatorGen.Creator(Target = typeof(Svc.Invoicer))] partial class T { }\n"
            "namespace Billing.Services { class Invoicer { } }"
        )
        target = self._target(model, units[0])
        assert target is not None
        assert target.display_name == "Billing.Services.Invoicer"

    def test_typeof_generic_arity(self) -> None:
        model, units = _model(
            "[CreatorGen.Creator(Target = typeof(Repo<int>))] partial class T { }\n"
            "class Repo { }\nclass Repo<T> { }"
        )
        target = self._target(model, units[0])
        assert target is not None
        assert target.arity == 1

    def test_typeof_unknown_type_is_none(self) -> None:
        model, units = _model("[CreatorGen.Creator(Target = typeof(Missing))] partial class T { }")
        assert self._target(model, units[0]) is None

    def test_type_of_non_typeof_expression_is_none(self) -> None:
        model, units = _model('[CreatorGen.Creator(Target = "x")] partial class T { }')
        assert self._target(model, units[0]) is None

    def test_typeof_predefined_type(self) -> None:
        model, units = _model("[CreatorGen.Creator(Target = typeof(int))] partial class T { }")
        target = self._target(model, units[0])
        assert target is not None
        assert target.keyword == "int"
        assert target.metadata_name == "System.Int32"

    def test_global_using_from_other_file(self) -> None:
        model, units = _model(
            "[CreatorGen.Creator(Target = typeof(Clock))] partial class T { }",
            "global using Time;\nnamespace Time { class Clock { } }",
        )
        target = self._target(model, units[0])
        assert target is not None
        assert target.display_name == "Time.Clock"

    def test_using_relative_to_enclosing_namespace(self) -> None:
        model, units = _model(
            "namespace Acme { using Data; [CreatorGen.Creator(Target = typeof(Store))] partial class T { } }\n"
            "namespace Acme.Data { class Store { } }"
        )
        target = self._target(model, units[0])
        assert target is not None
        assert target.display_name == "Acme.Data.Store"


# ###############
# Descriptors
# ###############


class TestDescriptors:
    def test_constructor_parameters_are_bound(self) -> None:
        model, _ = _model(SERVICES)
        descriptor = _descriptor(model, "InnerApi.Core.Services.AccountsService")
        assert descriptor.kind == TypeKind.CLASS
        assert descriptor.accessibility == Accessibility.PUBLIC
        assert len(descriptor.constructors) == 1
        parameter = descriptor.constructors[0].parameters[0]
        assert parameter.name == "accountsRepository"
        assert parameter.type.display_name == "InnerApi.Core.Repositories.IAccountsRepository"
        assert not parameter.is_value_type
        assert not parameter.is_string_type

    def test_interfaces(self) -> None:
        model, _ = _model(SERVICES)
        descriptor = _descriptor(model, "InnerApi.Core.Services.AccountsService")
        assert [i.display_name for i in descriptor.interfaces] == ["InnerApi.Core.Services.IAccountsService"]

    def test_interfaces_are_transitive_in_first_seen_order(self) -> None:
        model, _ = _model(
            "interface IA { }\ninterface IB : IA { }\ninterface IC { }\n"
            "class Base : IB { }\nclass C : Base, IC, IA { }"
        )
        descriptor = _descriptor(model, "C")
        assert [i.name for i in descriptor.interfaces] == ["IB", "IA", "IC"]

    def test_unknown_interface_like_base_is_kept(self) -> None:
        model, _ = _model("using Ext;\nclass C : ExternalBase, IExternal { }")
        descriptor = _descriptor(model, "C")
        assert [i.name for i in descriptor.interfaces] == ["IExternal"]

    def test_resolve_type_by_reference(self) -> None:
        model, _ = _model(SERVICES)
        reference = TypeReference(name="AccountsService", namespace="InnerApi.Core.Services")
        descriptor = model.resolve_type(reference)
        assert descriptor is not None
        assert descriptor.reference == reference
        assert model.resolve_type(TypeReference(name="Nope")) is None

    def test_descriptor_is_cached(self) -> None:
        model, _ = _model(SERVICES)
        first = _descriptor(model, "InnerApi.Core.Services.AccountsService")
        assert _descriptor(model, "InnerApi.Core.Services.AccountsService") is first

    def test_parameter_classification(self) -> None:
        model, _ = _model(
            "using System;\n"
            "enum Mode { A }\n"
            "struct Point { }\n"
            "class Target {\n"
            "    public Target(int count, string name, String title, DateTime at, Mode mode, Point p,\n"
            "                  int? maybe, int[] values, string[] names, (int, int) pair, ILogger logger) { }\n"
            "}"
        )
        parameters = _descriptor(model, "Target").constructors[0].parameters
        flags = {p.name: (p.is_value_type, p.is_string_type) for p in parameters}
        assert flags == {
            "count": (True, False),
            "name": (False, True),
            "title": (False, True),
            "at": (True, False),
            "mode": (True, False),
            "p": (True, False),
            "maybe": (True, False),
            "values": (False, False),
            "names": (False, False),
            "pair": (True, False),
            "logger": (False, False),
        }

    def test_unresolved_parameter_keeps_written_qualifier(self) -> None:
        model, _ = _model("class A { public A(Microsoft.Extensions.Logging.ILogger log, IClock clock) { } }")
        parameters = _descriptor(model, "A").constructors[0].parameters
        assert parameters[0].type.namespace == "Microsoft.Extensions.Logging"
        assert parameters[0].type.name == "ILogger"
        assert parameters[1].type.namespace == ""

    def test_type_parameter_has_no_namespace(self) -> None:
        model, _ = _model("namespace N { class Box<T> { public Box(T value) { } } }")
        parameter = _descriptor(model, "N.Box", arity=1).constructors[0].parameters[0]
        assert parameter.type.name == "T"
        assert parameter.type.enclosing_namespace is None

    def test_static_constructors_are_excluded(self) -> None:
        model, _ = _model("class A { static A() { } public A(int x) { } }")
        constructors = _descriptor(model, "A").constructors
        assert [len(c.parameters) for c in constructors] == [1]

    def test_implicit_constructor(self) -> None:
        model, _ = _model("class A { }\nstatic class S { }\ninterface I { }")
        assert [len(c.parameters) for c in _descriptor(model, "A").constructors] == [0]
        assert _descriptor(model, "S").constructors == ()
        assert _descriptor(model, "I").constructors == ()

    def test_struct_always_has_parameterless_constructor(self) -> None:
        model, _ = _model("struct P { public P(int x) { } }")
        assert [len(c.parameters) for c in _descriptor(model, "P").constructors] == [1, 0]

    def test_record_primary_constructor(self) -> None:
        model, _ = _model("record Money(decimal Amount, string Currency);")
        constructors = _descriptor(model, "Money").constructors
        assert len(constructors) == 1
        assert [p.name for p in constructors[0].parameters] == ["Amount", "Currency"]

    def test_partial_parts_are_merged(self) -> None:
        model, _ = _model(
            "partial class A : IFirst { public A(int x) { } }\ninterface IFirst { }\ninterface ISecond { }",
            "public partial class A : ISecond { public A(int x, int y) { } }",
        )
        descriptor = _descriptor(model, "A")
        assert descriptor.accessibility == Accessibility.PUBLIC
        assert [len(c.parameters) for c in descriptor.constructors] == [1, 2]
        assert [i.name for i in descriptor.interfaces] == ["IFirst", "ISecond"]

    def test_accessibility_defaults(self) -> None:
        model, _ = _model("class Top { class Nested { } protected internal class Both { } }")
        assert _descriptor(model, "Top").accessibility == Accessibility.INTERNAL
        assert _descriptor(model, "Top.Nested").accessibility == Accessibility.PRIVATE
        assert _descriptor(model, "Top.Both").accessibility == Accessibility.PROTECTED_INTERNAL

    def test_builtin_types(self) -> None:
        model, _ = _model("")
        assert _descriptor(model, "System.Guid").kind == TypeKind.STRUCT
        assert _descriptor(model, "System.String").reference.keyword == "string"
        assert _descriptor(model, "System.Threading.CancellationToken").kind.is_value_type


# ###############
# Structural Checks
# ###############


class TestAnalyze:
    def test_no_errors(self) -> None:
        assert analyze(_units(SERVICES)) == []

    def test_duplicate_type(self) -> None:
        errors = analyze(_units("namespace N { class A { } }", "namespace N { class A { } }"))
        assert len(errors) == 1
        assert isinstance(errors[0], SemanticError)
        assert "Duplicate type 'N.A'" in errors[0].message

    def test_partial_parts_are_not_duplicates(self) -> None:
        assert analyze(_units("partial class A { }", "partial class A { }")) == []

    def test_one_non_partial_part_is_a_duplicate(self) -> None:
        assert len(analyze(_units("partial class A { }", "class A { }"))) == 1

    def test_generic_arity_distinguishes_types(self) -> None:
        assert analyze(_units("class A { }\nclass A<T> { }")) == []

    def test_duplicate_nested_type(self) -> None:
        errors = analyze(_units("class O { class I { } class I { } }"))
        assert [e.message.split(" at ")[0] for e in errors] == ["Duplicate type 'O.I'"]

    def test_redeclared_builtin(self) -> None:
        assert len(analyze(_units("namespace System { struct Guid { } }"))) == 1
