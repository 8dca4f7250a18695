"""Scenario-style integration tests for core reconciliation behaviors."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner
from state_reconciler.cli import cli
from state_reconciler.configuration.runtime_settings import SchemaConfig
from state_reconciler.schema_management import load_resource_schema
from state_reconciler.schema_management.schema_models import ResourceSchema
from state_reconciler.state_merging import MissingIdentifierError, coerce_value
from state_reconciler.state_writing import (
    ResourceState,
    extract_identifier,
    update_state_with_payload,
)
from state_reconciler.value_hashing import canonical_hash

_SCHEMA_TEXT = """
wrap_nested_objects: false
properties:
  - name: id
    type: string
  - name: displayName
    type: string
  - name: adminPassword
    type: string
    write_only: true
  - name: zones
    type: list
    ignore_order: true
    items: string
  - name: items
    type: set
    items:
      properties:
        - name: name
          type: string
        - name: v
          type: integer
  - name: rules
    type: set
    correlation_key: [name]
    items:
      properties:
        - name: name
          type: string
        - name: port
          type: integer
        - name: secret
          type: string
          write_only: true
  - name: hops
    type: list
    items:
      properties:
        - name: address
          type: string
        - name: weight
          type: float
"""


def _schema() -> ResourceSchema:
    return load_resource_schema(SchemaConfig(text=_SCHEMA_TEXT, source_path=None))


def _read(payload: dict[str, Any], values: dict[str, Any] | None = None) -> dict[str, Any]:
    state = ResourceState(values=dict(values or {}))
    update_state_with_payload(_schema(), payload, state)
    return state.values


def test_given_reordered_mapping_keys_when_hashing_then_hash_is_unchanged() -> None:
    first = {"name": "a", "v": 1, "nested": {"b": [1, 2], "a": None}}
    second = {"nested": {"a": None, "b": [1, 2]}, "v": 1, "name": "a"}

    assert canonical_hash(first) == canonical_hash(second)


@pytest.mark.parametrize("remote_value", [None, "changed", "hunter2"])
def test_given_write_only_property_when_remote_differs_then_local_value_is_kept(
    remote_value: Any,
) -> None:
    values = _read({"adminPassword": remote_value}, {"admin_password": "hunter2"})

    assert values["admin_password"] == "hunter2"
    assert coerce_value(_schema().get_property("adminPassword"), remote_value, None) is None


def test_given_ordered_list_when_merged_with_itself_then_elements_are_identical() -> None:
    hops = [{"address": "10.0.0.1", "weight": 0.5}, {"address": "10.0.0.2", "weight": 2.0}]

    values = _read({"hops": hops}, {"hops": hops})

    assert values["hops"] == hops


def test_given_local_and_remote_sets_when_merged_then_remote_elements_appear_exactly_once() -> None:
    local = [{"name": "a", "v": 1}, {"name": "b", "v": 2}, {"name": "gone", "v": 0}]
    remote = [{"name": "b", "v": 2}, {"name": "a", "v": 1}, {"name": "c", "v": 3}]

    values = _read({"items": remote}, {"items": local})

    assert values["items"] == remote
    assert {"name": "gone", "v": 0} not in values["items"]


def test_given_correlation_key_when_rule_changes_then_write_only_secret_survives() -> None:
    local = [
        {"name": "ssh", "port": 22, "secret": "s1"},
        {"name": "web", "port": 80, "secret": "s2"},
    ]
    remote = [{"name": "web", "port": 8080}, {"name": "new", "port": 9000}]

    values = _read({"rules": remote}, {"rules": local})

    assert values["rules"] == [
        {"name": "web", "port": 8080, "secret": "s2"},
        {"name": "new", "port": 9000, "secret": None},
    ]


@pytest.mark.parametrize(
    ("prior", "remote", "expected"),
    [
        (["x", "y", "z"], ["z", "y", "x"], ["x", "y", "z"]),
        (["x", "y"], ["y", "x", "w"], ["x", "y", "w"]),
        (["x", "y", "z"], ["x", "q", "z"], ["x", "z", "q"]),
    ],
)
def test_given_ignore_order_list_when_remote_reorders_then_prior_order_is_kept(
    prior: list[str], remote: list[str], expected: list[str]
) -> None:
    assert _read({"zones": remote}, {"zones": prior})["zones"] == expected


def test_given_float_identifier_when_extracting_then_integral_string_is_returned() -> None:
    schema = _schema()

    assert extract_identifier(schema, {"id": 42.0}) == "42"
    with pytest.raises(MissingIdentifierError):
        extract_identifier(schema, {"displayName": "edge"})


def test_given_full_tree_when_merged_with_itself_then_tree_is_a_fixed_point() -> None:
    tree = {
        "display_name": "edge",
        "admin_password": "hunter2",
        "zones": ["b", "a"],
        "items": [{"name": "a", "v": 1}],
        "rules": [{"name": "ssh", "port": 22, "secret": "s1"}],
        "hops": [{"address": "10.0.0.1", "weight": 0.5}],
    }
    payload = {
        "displayName": "edge",
        "zones": ["b", "a"],
        "items": [{"name": "a", "v": 1}],
        "rules": [{"name": "ssh", "port": 22}],
        "hops": [{"address": "10.0.0.1", "weight": 0.5}],
    }

    assert _read(payload, tree) == tree


def test_given_undeclared_remote_property_when_reading_then_it_is_logged_and_skipped(
    caplog: pytest.LogCaptureFixture,
) -> None:
    with caplog.at_level(logging.WARNING):
        values = _read({"displayName": "edge", "createdAt": "2024-01-01"})

    assert values == {"display_name": "edge"}
    assert "createdAt" in caplog.text


def test_given_files_on_disk_when_reconcile_command_runs_then_state_is_updated(
    tmp_path: Path,
) -> None:
    (tmp_path / "schema.yaml").write_text(_SCHEMA_TEXT, encoding="utf-8")
    config_path = tmp_path / "reconciler.yaml"
    config_path.write_text("schema:\n  path: schema.yaml\n", encoding="utf-8")
    remote_path = tmp_path / "remote.json"
    remote_path.write_text(
        json.dumps({"id": 7.0, "displayName": "edge", "zones": ["b", "a"]}), encoding="utf-8"
    )
    state_path = tmp_path / "state.json"
    state_path.write_text(
        json.dumps({"id": "7", "values": {"admin_password": "hunter2", "zones": ["a", "b"]}}),
        encoding="utf-8",
    )

    result = CliRunner().invoke(
        cli,
        [
            "reconcile",
            "--config",
            str(config_path),
            "--remote",
            str(remote_path),
            "--state",
            str(state_path),
        ],
    )

    assert result.exit_code == 0, result.output
    document = json.loads(state_path.read_text(encoding="utf-8"))
    assert document == {
        "id": "7",
        "values": {"admin_password": "hunter2", "display_name": "edge", "zones": ["a", "b"]},
    }
