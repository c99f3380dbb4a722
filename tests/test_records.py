# Copyright (c) Syntropy Systems
"""Tests for open records."""

from __future__ import annotations

import json
from typing import Any

import pytest
from pydantic import ValidationError

from jenkins_api.errors import InvalidObjectType, StructuralDecodeError
from jenkins_api.models.action import CommonAction
from jenkins_api.models.build import BuildStatus, ShortBuild
from jenkins_api.models.changeset import CommonChangeSetList
from jenkins_api.models.records import (
    CommonBuild,
    MatrixBuildRecord,
    MatrixRunRecord,
    decode_build_record,
    decode_build_record_json,
)
from jenkins_api.registry import decode_record, decode_records


class TestOverflow:
    """Tests for keeping undeclared fields."""

    def test_undeclared_field_kept(self) -> None:
        """Test that a field no model declares lands in other_fields."""
        payload = {
            "_class": "hudson.model.FreeStyleBuild",
            "url": "http://jenkins.local/job/app/1/",
            "number": 1,
            "customField": "abc",
        }

        record = decode_build_record(payload)

        assert record.number == 1
        assert record.class_name == "hudson.model.FreeStyleBuild"
        assert record.other_fields == {"customField": "abc"}

    def test_keys_split_between_declared_and_other(
        self, freestyle_payload: dict[str, Any]
    ) -> None:
        """Test that every payload key is either declared or kept aside."""
        record = decode_build_record(freestyle_payload)

        declared = {
            field.alias or name for name, field in CommonBuild.model_fields.items()
        }
        other = set(record.other_fields)

        assert declared.isdisjoint(other)
        assert set(freestyle_payload) <= declared | other
        assert other == {"builtOn", "changeSet"}

    def test_to_payload_reproduces_input(
        self, freestyle_payload: dict[str, Any]
    ) -> None:
        """Test that re-encoding gives back the decoded payload."""
        record = decode_build_record(freestyle_payload)

        assert record.to_payload() == freestyle_payload

    def test_snake_case_keys_are_other_fields(self) -> None:
        """Test that Python field names in a payload are not read as declared keys."""
        payload = {
            "url": "http://jenkins.local/job/app/3/",
            "number": 3,
            "queue_id": 7,
            "class_name": "hudson.matrix.MatrixBuild",
        }

        record = decode_build_record(payload)

        assert type(record) is CommonBuild
        assert record.class_name is None
        assert record.queue_id == 0
        assert record.other_fields == {
            "queue_id": 7,
            "class_name": "hudson.matrix.MatrixBuild",
        }
        assert record.to_payload() == payload

    def test_defaults_not_reencoded(self) -> None:
        """Test that fields absent from the payload stay absent on re-encode."""
        payload = {"url": "http://jenkins.local/job/app/1/", "number": 1}

        record = decode_build_record(payload)

        assert record.duration == 0
        assert record.result is None
        assert record.to_payload() == payload

    def test_nested_actions_keep_fields(
        self, freestyle_payload: dict[str, Any]
    ) -> None:
        """Test that actions are open records too."""
        record = decode_build_record(freestyle_payload)

        cause, hidden = record.actions
        assert isinstance(cause, CommonAction)
        assert cause.class_name == "hudson.model.CauseAction"
        assert "causes" in cause.other_fields
        assert not cause.is_empty
        assert hidden.is_empty

    def test_result_is_enum(self, freestyle_payload: dict[str, Any]) -> None:
        """Test that declared fields are typed."""
        record = decode_build_record(freestyle_payload)

        assert record.result is BuildStatus.SUCCESS

    def test_records_are_frozen(self, freestyle_payload: dict[str, Any]) -> None:
        """Test that decoded records cannot be modified."""
        record = decode_build_record(freestyle_payload)

        with pytest.raises(ValidationError):
            record.number = 13  # type: ignore[misc]


class TestStructuralErrors:
    """Tests for declared fields that do not fit."""

    def test_bad_declared_field(self) -> None:
        """Test that a bad declared field fails the whole record."""
        with pytest.raises(StructuralDecodeError) as exc_info:
            decode_build_record({"url": "http://jenkins.local/x/1/", "number": "abc"})

        assert exc_info.value.object_type == "CommonBuild"
        assert [error["loc"] for error in exc_info.value.errors] == [("number",)]

    def test_wrong_scalar_type_not_coerced(self) -> None:
        """Test that a string number or a string flag is refused, not converted."""
        for key, value in (("number", "3"), ("building", "yes")):
            payload = {"url": "http://jenkins.local/job/app/3/", "number": 3}
            payload[key] = value

            with pytest.raises(StructuralDecodeError) as exc_info:
                decode_build_record(payload)

            assert [error["loc"] for error in exc_info.value.errors] == [(key,)]

    def test_missing_declared_field(self) -> None:
        """Test that a missing required field fails."""
        with pytest.raises(StructuralDecodeError, match="url"):
            decode_build_record({"number": 1})

    def test_json_entry_point(self, freestyle_payload: dict[str, Any]) -> None:
        """Test decoding an open record from JSON."""
        record = decode_build_record_json(json.dumps(freestyle_payload))

        assert record.to_payload() == freestyle_payload

    def test_decode_records(
        self,
        freestyle_payload: dict[str, Any],
        unknown_build_payload: dict[str, Any],
    ) -> None:
        """Test decoding a list of payloads of different job types."""
        records = decode_records(
            [freestyle_payload, unknown_build_payload], CommonBuild
        )

        assert [record.number for record in records] == [12, 2]
        assert records[1].other_fields == {"pluginState": {"stage": "deploy"}}


class TestSpecialization:
    """Tests for registered specializations."""

    def test_registered_class_specializes(
        self, matrix_payload: dict[str, Any]
    ) -> None:
        """Test that a registered _class decodes to its specialization."""
        record = decode_build_record(matrix_payload)

        assert isinstance(record, MatrixBuildRecord)
        assert [run.url for run in record.runs] == [
            "http://jenkins.local/job/matrix/os=linux/3/",
            "http://jenkins.local/job/matrix/os=windows/3/",
        ]
        assert all(isinstance(run, ShortBuild) for run in record.runs)
        assert record.culprits[0].full_name == "Bob"
        assert isinstance(record.change_set, CommonChangeSetList)
        assert record.other_fields == {}
        assert record.to_payload() == matrix_payload

    def test_specialization_can_be_skipped(
        self, matrix_payload: dict[str, Any]
    ) -> None:
        """Test decoding as the common record only."""
        record = decode_build_record(matrix_payload, specialize=False)

        assert type(record) is CommonBuild
        assert set(record.other_fields) == {"changeSet", "runs", "culprits"}

    def test_as_variant(self, matrix_payload: dict[str, Any]) -> None:
        """Test converting a common record to its registered specialization."""
        record = decode_build_record(matrix_payload, specialize=False)

        matrix = record.as_variant(MatrixBuildRecord)

        assert isinstance(matrix, MatrixBuildRecord)
        assert len(matrix.runs) == 2

    def test_as_variant_wrong_class(self, freestyle_payload: dict[str, Any]) -> None:
        """Test that converting to another class's specialization fails."""
        record = decode_build_record(freestyle_payload)

        with pytest.raises(InvalidObjectType) as exc_info:
            record.as_variant(MatrixRunRecord)

        assert exc_info.value.action == "convert to MatrixRunRecord"
        assert exc_info.value.discriminant == "hudson.model.FreeStyleBuild"
        assert "MatrixRunRecord" in str(exc_info.value)

    def test_as_variant_unregistered_target(
        self, matrix_payload: dict[str, Any]
    ) -> None:
        """Test that a target without a registered _class is refused."""
        record = decode_build_record(matrix_payload, specialize=False)

        with pytest.raises(InvalidObjectType):
            record.as_variant(CommonBuild)

    def test_generic_decode_record(self, matrix_payload: dict[str, Any]) -> None:
        """Test the generic entry point with an explicit record type."""
        record = decode_record(matrix_payload, CommonBuild, specialize=True)

        assert isinstance(record, MatrixBuildRecord)
