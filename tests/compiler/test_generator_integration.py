# Copyright 2026 CreatorGen Contributors
# SPDX-License-Identifier: Apache-2.0

"""End-to-end generation over the demo workspace in ``tests/data/demo``."""

from __future__ import annotations

from pathlib import Path

from creatorgen.compiler.build import build_model, generate_files, load_units
from creatorgen.compiler.semantic_analysis import SemanticModel
from creatorgen.generator.pipeline import GeneratorOptions, generate_units
from creatorgen.workspace.config import load_workspace_config

# ###############
# Test data directory
# ###############

DEMO_DIR = Path(__file__).parent.parent / "data" / "demo"

EXPECTED_FACTORY = """\
#nullable enable
using InnerApi.Core.Models;
using InnerApi.Core.Services;
using InnerApi.Core.Repositories;
using Moq;

namespace InnerApi.Core.Tests
{
    public partial class AccountsServiceTests
    {
        private static IAccountsService CreateAccountsService(
            MockBehavior defaultBehavior = MockBehavior.Loose,
            IAccountsRepository? accountsRepository = null)
        {
            return new AccountsService(
                accountsRepository ?? Mock.Of<IAccountsRepository>(defaultBehavior));
        }
    }
}
"""

EXPECTED_MARKER = """\
#nullable enable
using System;

namespace CC.Generators
{
    [AttributeUsage(AttributeTargets.Class)]
    public class CreatorAttribute : Attribute
    {
        public Type? Target;
    }
}
"""


def _demo_sources() -> list[Path]:
    return sorted(path for path in DEMO_DIR.rglob("*.cs") if not path.name.endswith(".g.cs"))


def _demo_options() -> GeneratorOptions:
    return load_workspace_config(DEMO_DIR / ".creatorgen.yaml").generator_options()


# ###############
# Demo workspace
# ###############


class TestDemoWorkspace:
    def test_generates_expected_files(self, tmp_path: Path) -> None:
        result = generate_files(_demo_sources(), tmp_path, _demo_options())
        assert [output.file_key for output in result.outputs] == [
            "CreatorAttribute.g.cs",
            "AccountsServiceTests.g.cs",
        ]

    def test_factory_text(self, tmp_path: Path) -> None:
        generate_files(_demo_sources(), tmp_path, _demo_options())
        assert (tmp_path / "AccountsServiceTests.g.cs").read_text(encoding="utf-8") == EXPECTED_FACTORY

    def test_marker_text(self, tmp_path: Path) -> None:
        generate_files(_demo_sources(), tmp_path, _demo_options())
        assert (tmp_path / "CreatorAttribute.g.cs").read_text(encoding="utf-8") == EXPECTED_MARKER

    def test_unit_details(self) -> None:
        units = load_units(_demo_sources()).units
        options = _demo_options()
        model = build_model(units, options)
        [unit] = generate_units(model, units, options)
        assert unit.declaration.name == "AccountsServiceTests"
        assert unit.declaration.declared_namespace == "InnerApi.Core.Tests"
        assert unit.target.display_name == "InnerApi.Core.Services.AccountsService"
        assert unit.result_type is not None
        assert unit.result_type.display_name == "InnerApi.Core.Services.IAccountsService"
        [parameter] = unit.selected_constructor.parameters
        assert parameter.name == "accountsRepository"
        assert parameter.type.display_name == "InnerApi.Core.Repositories.IAccountsRepository"
        assert not parameter.is_value_type
        assert not parameter.is_string_type

    def test_generated_files_parse_back(self, tmp_path: Path) -> None:
        result = generate_files(_demo_sources(), tmp_path, _demo_options())
        units = load_units([*_demo_sources(), *result.written]).units
        model = SemanticModel(units)
        assert model.errors == []
        assert model.lookup("CC.Generators.CreatorAttribute") is not None

    def test_default_marker_namespace_finds_nothing(self, tmp_path: Path) -> None:
        result = generate_files(_demo_sources(), tmp_path)
        assert [output.file_key for output in result.outputs] == ["CreatorAttribute.g.cs"]


# ###############
# Nested namespaces
# ###############

NESTED_SOURCE = """\
namespace Company
{
    namespace Services
    {
        public interface IRepo { }

        public class Svc
        {
            public Svc(IRepo repo) { }
        }
    }

    namespace Tests
    {
        using Services;

        [CreatorGen.Creator(Target = typeof(Svc))]
        public partial class SvcTests { }
    }
}
"""

EXPECTED_NESTED_FACTORY = """\
#nullable enable
using Company.Services;
using Moq;

namespace Company.Tests
{
    public partial class SvcTests
    {
        private static Svc CreateSvc(
            MockBehavior defaultBehavior = MockBehavior.Loose,
            IRepo? repo = null)
        {
            return new Svc(
                repo ?? Mock.Of<IRepo>(defaultBehavior));
        }
    }
}
"""


class TestNestedNamespaces:
    def test_relative_using_is_written_fully_qualified(self, tmp_path: Path) -> None:
        source = tmp_path / "SvcTests.cs"
        source.write_text(NESTED_SOURCE, encoding="utf-8")
        out = tmp_path / "Generated"
        generate_files([source], out)
        assert (out / "SvcTests.g.cs").read_text(encoding="utf-8") == EXPECTED_NESTED_FACTORY
