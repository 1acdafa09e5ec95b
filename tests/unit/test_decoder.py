"""Unit tests for JSON body decoding into binding models."""

from __future__ import annotations

import pytest

from bouncer.core.errors import ShapeDefinitionError
from bouncer.schemas.error import ErrorKind
from bouncer.services.decoder import decode_body
from tests.models import Account
from tests.models import GuardedWidget
from tests.models import Widget


@pytest.mark.parametrize("body", [None, b"", b"   \n\t", b"null"])
def test_absent_or_empty_body_decodes_to_zero_instance(body: bytes | None) -> None:
    instance, errors = decode_body(Widget, body)

    assert len(errors) == 0
    assert instance == Widget()


def test_each_call_allocates_a_fresh_instance() -> None:
    first, _ = decode_body(Account, b"")
    second, _ = decode_body(Account, b"")

    assert first is not second
    assert first.tags is not second.tags


def test_valid_body_populates_fields_by_alias() -> None:
    instance, errors = decode_body(Widget, b'{"Name": "gear", "ID": 7}')

    assert len(errors) == 0
    assert instance is not None
    assert instance.name == "gear"
    assert instance.id == 7


def test_malformed_json_yields_single_deserialization_error() -> None:
    instance, errors = decode_body(Widget, b'{"Name": ')

    assert instance is None
    assert len(errors) == 1
    assert errors[0].field == []
    assert errors[0].error == ErrorKind.DESERIALIZATION
    assert errors[0].message


def test_type_mismatch_is_reported_with_location() -> None:
    instance, errors = decode_body(Widget, b'{"ID": "not-a-number"}')

    assert instance is None
    assert len(errors) == 1
    assert errors[0].error == ErrorKind.DESERIALIZATION
    assert errors[0].message.startswith("ID:")


@pytest.mark.parametrize("body", [b"[1, 2]", b'"text"', b"42"])
def test_non_object_payloads_are_deserialization_errors(body: bytes) -> None:
    instance, errors = decode_body(Widget, body)

    assert instance is None
    assert [entry.error for entry in errors] == [ErrorKind.DESERIALIZATION]


def test_reference_shape_is_rejected_before_decoding() -> None:
    with pytest.raises(ShapeDefinitionError):
        decode_body(Widget(), b'{"Name": "gear"}')


@pytest.mark.parametrize("body", [None, b"", b"  ", b"null", b"{}"])
def test_model_validators_rejecting_zero_values_yield_deserialization_error(body: bytes | None) -> None:
    instance, errors = decode_body(GuardedWidget, body)

    assert instance is None
    assert [(entry.field, entry.error) for entry in errors] == [([], ErrorKind.DESERIALIZATION)]
    assert "name missing" in errors[0].message


def test_model_validators_accept_supplied_values() -> None:
    instance, errors = decode_body(GuardedWidget, b'{"name": "gear"}')

    assert len(errors) == 0
    assert instance == GuardedWidget(name="gear")
