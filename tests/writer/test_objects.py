from __future__ import annotations

import pytest

from actpdf.core.exceptions import (
    ObjectTableError,
    SerializationStateError,
    StreamLengthMismatchError,
    UnresolvedReferenceError,
)
from actpdf.writer.objects import ObjectTable, TableState


def test_allocate_assigns_contiguous_ids_in_creation_order() -> None:
    table = ObjectTable()
    assert table.state is TableState.UNPOPULATED

    ids = [table.allocate(f"<< /N {index} >>") for index in range(5)]

    assert ids == [1, 2, 3, 4, 5]
    assert [obj.id for obj in table] == ids
    assert len(table) == 5
    assert table.state is TableState.ALLOCATED


def test_get_rejects_unknown_ids() -> None:
    table = ObjectTable()
    table.allocate("1")

    with pytest.raises(ObjectTableError):
        table.get(0)
    with pytest.raises(ObjectTableError):
        table.get(2)


def test_resolve_patches_forward_reference_placeholders() -> None:
    table = ObjectTable()
    page_id = table.allocate(f"<< /Type /Page /Parent {ObjectTable.placeholder('pages')} 0 R >>")
    pages_id = table.allocate(f"<< /Type /Pages /Kids [{page_id} 0 R] /Count 1 >>")

    patched = table.resolve("pages", pages_id)

    assert patched == 1
    assert table.get(page_id).body == "<< /Type /Page /Parent 2 0 R >>"


def test_patch_requires_exact_placeholder_text() -> None:
    table = ObjectTable()
    obj_id = table.allocate("<< /Parent {{pages}} 0 R >>")

    with pytest.raises(UnresolvedReferenceError):
        table.patch(obj_id, "{{kids}}", "2")

    table.patch(obj_id, "{{pages}}", "7")
    assert table.get(obj_id).body == "<< /Parent 7 0 R >>"


def test_resolve_without_matching_slot_is_an_error() -> None:
    table = ObjectTable()
    table.allocate("<< /Type /Catalog >>")

    with pytest.raises(UnresolvedReferenceError):
        table.resolve("pages", 1)


def test_placeholder_rejects_invalid_names() -> None:
    with pytest.raises(ValueError):
        ObjectTable.placeholder("not valid")


def test_finalize_length_records_exact_byte_count() -> None:
    table = ObjectTable()
    length_id = table.allocate("0")
    content_id = table.allocate(f"<< /Length {length_id} 0 R >>")
    data = "BT (Ubicación — entrega) Tj ET".encode("utf-8")

    table.set_stream(content_id, data)
    length = table.finalize_length(length_id, data)
    table.seal()

    assert length == len(data)
    assert length > len("BT (Ubicación — entrega) Tj ET")
    assert table.get(length_id).body == str(len(data))


def test_seal_rejects_unpatched_placeholders() -> None:
    table = ObjectTable()
    table.allocate("<< /Parent {{pages}} 0 R >>")

    with pytest.raises(UnresolvedReferenceError):
        table.seal()


def test_seal_rejects_dangling_references() -> None:
    table = ObjectTable()
    table.allocate("<< /Type /Pages /Kids [9 0 R] /Count 1 >>")

    with pytest.raises(UnresolvedReferenceError):
        table.seal()


def test_seal_ignores_decimal_numbers_that_look_like_references() -> None:
    table = ObjectTable()
    table.allocate("<< /MediaBox [0 0 595.28 841.89] >>")

    table.seal()

    assert table.state is TableState.PATCHED


def test_seal_rejects_stale_stream_length() -> None:
    table = ObjectTable()
    length_id = table.allocate("0")
    table.allocate(f"<< /Length {length_id} 0 R >>", stream=b"q Q")

    with pytest.raises(StreamLengthMismatchError):
        table.seal()


def test_seal_checks_direct_stream_lengths() -> None:
    table = ObjectTable()
    table.allocate("<< /Length 3 >>", stream=b"q Q")
    table.seal()

    broken = ObjectTable()
    broken.allocate("<< /Length 4 >>", stream=b"q Q")
    with pytest.raises(StreamLengthMismatchError):
        broken.seal()


def test_state_machine_only_moves_forward() -> None:
    table = ObjectTable()
    with pytest.raises(SerializationStateError):
        table.seal()
    with pytest.raises(SerializationStateError):
        table.mark_serialized()

    table.allocate("<< /Type /Catalog >>")
    table.seal()
    table.seal()  # sealing twice is a no-op
    assert table.state is TableState.PATCHED

    with pytest.raises(SerializationStateError):
        table.allocate("late")
    with pytest.raises(SerializationStateError):
        table.set_body(1, "changed")

    table.mark_serialized()
    assert table.state is TableState.SERIALIZED
    with pytest.raises(SerializationStateError):
        table.mark_serialized()
    with pytest.raises(SerializationStateError):
        table.seal()
