from __future__ import annotations

import ast

import pytest

from src.codegen.emitter import (
    dispatch_function_name,
    emit,
    parameter_name,
    per_field_function_name,
    render_unit,
    write_output,
)
from src.codegen.errors import FileCreateError, TemplateExecError, TemplateParseError
from src.codegen.loader import load_package
from src.codegen.model import CauseField, EnumMapping, GenerationUnit
from src.codegen.synthesizer import build_generation_unit
from tests._helpers import NGAP_CAUSE_FILES

EXPECTED_EXAMPLE = '''\
# Code generated by gen_cause_strings.py; DO NOT EDIT.
# Source: ngapType (free5gc.ngap.ngapType) struct Cause, source hash abc123
from __future__ import annotations

from free5gc.ngap import ngapType

SOURCE_HASH = "abc123"


def get_cause_transport_error_str(cause: ngapType.CauseTransport | None) -> str:
    if cause is None:
        return "unknown cause"
    match cause.Value:
        case ngapType.CauseTransportPresentX:
            return "Transport : X"
        case ngapType.CauseTransportPresentY:
            return "Transport : Y"
        case _:
            return "unknown cause"


def get_cause_nas_error_str(cause: ngapType.CauseNas | None) -> str:
    return "Nas : Unknown error"


def get_cause_error_str(cause: ngapType.Cause | None) -> str:
    if cause is None:
        return "unknown ngapType.Cause"
    match cause.Present:
        case ngapType.CausePresentTransport:
            return get_cause_transport_error_str(cause.Transport)
        case ngapType.CausePresentNas:
            return get_cause_nas_error_str(cause.Nas)
        case _:
            return "unknown ngapType.Cause"


__all__ = [
    "get_cause_transport_error_str",
    "get_cause_nas_error_str",
    "get_cause_error_str",
]
'''


def _example_unit(source_hash: str = "abc123") -> GenerationUnit:
    return GenerationUnit(
        package_import_path="free5gc.ngap",
        package_name="ngapType",
        struct_name="Cause",
        source_hash=source_hash,
        fields=(
            CauseField("Transport", "CauseTransport", "CausePresentTransport", (
                EnumMapping("CauseTransportPresentX", "Transport : X"),
                EnumMapping("CauseTransportPresentY", "Transport : Y"),
            )),
            CauseField("Nas", "CauseNas", "CausePresentNas"),
        ),
    )


def test_render_matches_worked_example():
    assert render_unit(_example_unit()) == EXPECTED_EXAMPLE


def test_function_and_case_counts():
    unit = _example_unit()
    tree = ast.parse(render_unit(unit))
    funcs = {n.name: n for n in tree.body if isinstance(n, ast.FunctionDef)}
    assert list(funcs) == [
        per_field_function_name(unit, "Transport"),
        per_field_function_name(unit, "Nas"),
        dispatch_function_name(unit),
    ]
    dispatch_match = next(n for n in ast.walk(funcs["get_cause_error_str"]) if isinstance(n, ast.Match))
    # N variant cases plus the default
    assert len(dispatch_match.cases) == len(unit.fields) + 1
    assert isinstance(dispatch_match.cases[-1].pattern, ast.MatchAs)
    transport_match = next(n for n in ast.walk(funcs["get_cause_transport_error_str"]) if isinstance(n, ast.Match))
    assert len(transport_match.cases) == 3


def test_render_is_byte_identical_across_runs(ngap_root):
    first = render_unit(build_generation_unit(load_package("free5gc.ngap", "ngapType", [ngap_root]), "Cause"))
    second = render_unit(build_generation_unit(load_package("free5gc.ngap", "ngapType", [ngap_root]), "Cause"))
    assert first == second


def test_generated_module_runtime_behaviour(ngap_root, tmp_path, import_generated):
    unit = build_generation_unit(load_package("free5gc.ngap", "ngapType", [ngap_root]), "Cause")
    out = emit(unit, tmp_path / "cause_strings_gen.py")
    gen = import_generated(out, ngap_root)
    from free5gc.ngap import ngapType  # type: ignore[import-not-found]

    transport = ngapType.Cause(Present=ngapType.CausePresentTransport,
                               Transport=ngapType.CauseTransport(Value=ngapType.CauseTransportPresentY))
    assert gen.get_cause_error_str(transport) == "Transport : Y"
    transport.Transport.Value = ngapType.CauseTransportPresentX
    assert gen.get_cause_error_str(transport) == "Transport : X"
    transport.Transport.Value = 42
    assert gen.get_cause_error_str(transport) == "unknown cause"

    nas = ngapType.Cause(Present=ngapType.CausePresentNas, Nas=ngapType.CauseNas(Value=0))
    assert gen.get_cause_error_str(nas) == "Nas : Unknown error"
    for value in (0, 1, 999):
        assert gen.get_cause_nas_error_str(ngapType.CauseNas(Value=value)) == "Nas : Unknown error"

    assert gen.get_cause_error_str(ngapType.Cause(Present=ngapType.CausePresentNothing)) == "unknown ngapType.Cause"
    assert gen.get_cause_error_str(ngapType.Cause(Present=77)) == "unknown ngapType.Cause"
    assert gen.get_cause_error_str(None) == "unknown ngapType.Cause"
    assert gen.SOURCE_HASH == unit.source_hash


def test_labels_are_escaped_as_python_literals():
    unit = GenerationUnit(
        package_import_path="", package_name="t", struct_name="Cause",
        fields=(CauseField("Misc", "CauseMisc", "CausePresentMisc", (
            EnumMapping("CauseMiscPresentQuote", 'Misc : say "hi" \\ bye'),
        )),),
    )
    text = render_unit(unit)
    assert "import t\n" in text
    tree = ast.parse(text)
    literals = [n.value for n in ast.walk(tree) if isinstance(n, ast.Constant) and isinstance(n.value, str)]
    assert 'Misc : say "hi" \\ bye' in literals


def test_unparsable_template_raises_parse_error(tmp_path):
    (tmp_path / "bad.j2").write_text("{% for x in %}", encoding="utf-8")
    with pytest.raises(TemplateParseError):
        render_unit(_example_unit(), template_name="bad.j2", template_dir=tmp_path)
    with pytest.raises(TemplateParseError):
        render_unit(_example_unit(), template_name="missing.j2", template_dir=tmp_path)


def test_template_execution_error(tmp_path):
    (tmp_path / "undefined.j2").write_text("{{ unit.no_such_attribute }}", encoding="utf-8")
    with pytest.raises(TemplateExecError):
        render_unit(_example_unit(), template_name="undefined.j2", template_dir=tmp_path)


def test_template_failure_leaves_no_output_file(tmp_path):
    (tmp_path / "undefined.j2").write_text("{{ nope }}", encoding="utf-8")
    out = tmp_path / "gen.py"
    with pytest.raises(TemplateExecError):
        emit(_example_unit(), out, template_name="undefined.j2", template_dir=tmp_path)
    assert not out.exists()


def test_output_file_that_cannot_be_created(tmp_path):
    with pytest.raises(FileCreateError) as ei:
        write_output("x = 1\n", tmp_path / "missing_dir" / "gen.py")
    assert ei.value.subject.endswith("gen.py")
    assert ei.value.stage == "emit"


def test_emit_overwrites_previous_output(tmp_path):
    out = tmp_path / "gen.py"
    out.write_text("stale\n", encoding="utf-8")
    emit(_example_unit(), out)
    assert out.read_text(encoding="utf-8") == EXPECTED_EXAMPLE


def test_parameter_does_not_shadow_package_module(package_factory, tmp_path, import_generated):
    root = package_factory("shadowpkg.cause", NGAP_CAUSE_FILES)
    unit = build_generation_unit(load_package("shadowpkg", "cause", [root]), "Cause")
    assert parameter_name(unit) == "cause_"
    text = render_unit(unit)
    assert "def get_cause_transport_error_str(cause_: cause.CauseTransport | None) -> str:" in text
    assert "match cause_.Value:" in text

    gen = import_generated(emit(unit, tmp_path / "shadow_gen.py"), root, "shadow_gen")
    from shadowpkg import cause  # type: ignore[import-not-found]

    value = cause.Cause(Present=cause.CausePresentTransport,
                        Transport=cause.CauseTransport(Value=cause.CauseTransportPresentX))
    assert gen.get_cause_error_str(value) == "Transport : X"
    assert gen.get_cause_transport_error_str(value.Transport) == "Transport : X"


@pytest.mark.parametrize("struct_name", ["Pass", "Class", "Return", "Import", "Global", "With", "Lambda"])
def test_keyword_struct_names_render_valid_python(struct_name):
    unit = GenerationUnit(
        package_import_path="pk", package_name="types", struct_name=struct_name,
        fields=(CauseField("Nas", "CauseNas", "CausePresentNas", (
            EnumMapping("CauseNasPresentNormalRelease", "Nas : NormalRelease"),
        )),),
    )
    param = parameter_name(unit)
    assert param == struct_name.lower() + "_"
    tree = ast.parse(render_unit(unit))
    funcs = [n for n in tree.body if isinstance(n, ast.FunctionDef)]
    assert [f.args.args[0].arg for f in funcs] == [param, param]
