from typing import Any

import pytest
from pydantic import TypeAdapter, ValidationError

from library_api.patching import PatchMove, PatchOperation, PatchReplace, apply_patch

operations_adapter = TypeAdapter(list[PatchOperation])


def parse_ops(raw: list[dict[str, Any]]) -> list[PatchOperation]:
    return operations_adapter.validate_python(raw)


@pytest.fixture
def document() -> dict[str, Any]:
    return {"title": "Dune", "description": "Desert planet"}


def test_replace_and_add_set_fields(document: dict[str, Any]) -> None:
    ops = parse_ops(
        [
            {"op": "replace", "path": "/title", "value": "Dune Messiah"},
            {"op": "add", "path": "/description", "value": "Sequel"},
        ]
    )

    patched, findings = apply_patch(document, ops)

    assert findings == []
    assert patched == {"title": "Dune Messiah", "description": "Sequel"}


def test_remove_resets_field_to_none(document: dict[str, Any]) -> None:
    patched, findings = apply_patch(document, parse_ops([{"op": "remove", "path": "/description"}]))

    assert findings == []
    assert patched == {"title": "Dune", "description": None}


def test_move_transfers_value_and_clears_source(document: dict[str, Any]) -> None:
    ops = parse_ops([{"op": "move", "from": "/title", "path": "/description"}])

    patched, findings = apply_patch(document, ops)

    assert findings == []
    assert patched == {"title": None, "description": "Dune"}
    assert isinstance(ops[0], PatchMove)


def test_copy_duplicates_value(document: dict[str, Any]) -> None:
    ops = parse_ops([{"op": "copy", "from": "/description", "path": "/title"}])

    patched, findings = apply_patch(document, ops)

    assert findings == []
    assert patched == {"title": "Desert planet", "description": "Desert planet"}


def test_passing_test_operation_changes_nothing(document: dict[str, Any]) -> None:
    patched, findings = apply_patch(
        document, parse_ops([{"op": "test", "path": "/title", "value": "Dune"}])
    )

    assert findings == []
    assert patched == document


def test_failing_test_operation_reports_and_continues(document: dict[str, Any]) -> None:
    ops = parse_ops(
        [
            {"op": "test", "path": "/title", "value": "Emma"},
            {"op": "replace", "path": "/description", "value": "Spice"},
        ]
    )

    patched, findings = apply_patch(document, ops)

    assert [f.field for f in findings] == ["/title"]
    assert "is not equal to the test value 'Emma'" in findings[0].message
    assert patched["description"] == "Spice"


@pytest.mark.parametrize(
    ("path", "segment"),
    [
        pytest.param("/isbn", "isbn", id="unknown-field"),
        pytest.param("/title/0", "/title/0", id="nested-path"),
        pytest.param("title", "title", id="missing-leading-slash"),
        pytest.param("/", "/", id="root"),
    ],
)
def test_unaddressable_path_yields_finding(
    document: dict[str, Any], path: str, segment: str
) -> None:
    ops = parse_ops(
        [
            {"op": "replace", "path": path, "value": "x"},
            {"op": "replace", "path": "/title", "value": "Children of Dune"},
        ]
    )

    patched, findings = apply_patch(document, ops)

    assert len(findings) == 1
    assert findings[0].field == path
    assert findings[0].message == (
        f"The target location specified by path segment '{segment}' was not found."
    )
    assert patched == {"title": "Children of Dune", "description": "Desert planet"}


def test_unknown_move_source_yields_finding(document: dict[str, Any]) -> None:
    ops = parse_ops([{"op": "move", "from": "/subtitle", "path": "/title"}])

    patched, findings = apply_patch(document, ops)

    assert len(findings) == 1
    assert "'subtitle'" in findings[0].message
    assert patched == document


def test_paths_match_case_insensitively_and_unescape(document: dict[str, Any]) -> None:
    escaped = {"a/b": 1, "c~d": 2}

    patched, findings = apply_patch(
        document, parse_ops([{"op": "replace", "path": "/TITLE", "value": "X"}])
    )
    assert findings == []
    assert patched["title"] == "X"

    patched, findings = apply_patch(
        escaped,
        parse_ops(
            [
                {"op": "replace", "path": "/a~1b", "value": 10},
                {"op": "replace", "path": "/c~0d", "value": 20},
            ]
        ),
    )
    assert findings == []
    assert patched == {"a/b": 10, "c~d": 20}


def test_apply_patch_does_not_mutate_input(document: dict[str, Any]) -> None:
    original = dict(document)

    apply_patch(document, [PatchReplace(op="replace", path="/title", value="Other")])

    assert document == original


def test_operations_apply_in_order(document: dict[str, Any]) -> None:
    ops = parse_ops(
        [
            {"op": "replace", "path": "/title", "value": "First"},
            {"op": "copy", "from": "/title", "path": "/description"},
            {"op": "replace", "path": "/title", "value": "Second"},
        ]
    )

    patched, _ = apply_patch(document, ops)

    assert patched == {"title": "Second", "description": "First"}


def test_unknown_operation_is_rejected_at_parse_time() -> None:
    with pytest.raises(ValidationError):
        parse_ops([{"op": "increment", "path": "/title"}])


def test_move_without_from_is_rejected_at_parse_time() -> None:
    with pytest.raises(ValidationError):
        parse_ops([{"op": "move", "path": "/title"}])


@pytest.mark.parametrize("op", ["add", "replace", "test"])
def test_value_is_required_for_value_operations(op: str) -> None:
    with pytest.raises(ValidationError):
        parse_ops([{"op": op, "path": "/description"}])


def test_explicit_null_value_is_accepted(document: dict[str, Any]) -> None:
    patched, findings = apply_patch(
        document, parse_ops([{"op": "replace", "path": "/description", "value": None}])
    )

    assert findings == []
    assert patched["description"] is None
