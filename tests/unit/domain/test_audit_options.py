"""AuditOptions validation and AuditRecord immutability."""

import pytest

from audit_trail.domain.constants import AuditAction, AuditResource
from audit_trail.domain.exceptions import InvalidAuditOptionsError
from audit_trail.domain.models import AuditOptions, AuditRecord


def test_string_tags_coerced_to_enums():
    options = AuditOptions(action="UPDATE", resource_type="role", id_arg=0)
    assert options.action is AuditAction.UPDATE
    assert options.resource_type is AuditResource.ROLE
    assert options.batch is False
    assert options.condition is None


def test_id_arg_and_id_path_mutually_exclusive():
    with pytest.raises(InvalidAuditOptionsError) as exc_info:
        AuditOptions(
            action=AuditAction.UPDATE,
            resource_type=AuditResource.ROLE,
            id_arg=0,
            id_path="id",
        )
    assert "mutually exclusive" in exc_info.value.message


@pytest.mark.parametrize("id_arg", [-1, True, "0"])
def test_invalid_id_arg_rejected(id_arg):
    with pytest.raises(InvalidAuditOptionsError):
        AuditOptions(action=AuditAction.DELETE, resource_type=AuditResource.ROLE, id_arg=id_arg)


def test_unknown_resource_type_rejected():
    with pytest.raises(InvalidAuditOptionsError):
        AuditOptions(action=AuditAction.DELETE, resource_type="invoice", id_arg=0)


def test_blank_path_rejected():
    with pytest.raises(InvalidAuditOptionsError):
        AuditOptions(action=AuditAction.CREATE, resource_type=AuditResource.USER, id_from_result=" ")


def test_options_immutable():
    options = AuditOptions(action=AuditAction.CREATE, resource_type=AuditResource.USER, id_from_result="id")
    with pytest.raises(AttributeError):
        options.batch = True  # type: ignore[misc]


def test_record_immutable_and_serializable():
    record = AuditRecord(
        actor_id="u-1",
        request_id="req-1",
        action=AuditAction.DELETE,
        resource_type=AuditResource.PERMISSION,
        resource_id="4",
        old_data={"id": 4},
        new_data=None,
        ip="127.0.0.1",
        user_agent="curl/8",
    )
    with pytest.raises(AttributeError):
        record.resource_id = "5"  # type: ignore[misc]
    d = record.to_dict()
    assert d["action"] == "DELETE"
    assert d["resource_type"] == "permission"
    assert d["old_data"] == {"id": 4}
    assert d["new_data"] is None
