import uuid
import warnings

import pytest
from sqlalchemy import select
from sqlalchemy.exc import SADeprecationWarning

from catalog.db import models
from catalog.errors import CatalogError, ErrorKind
from catalog.services import OwnerAdapter, OwnerField


def _image(media_service_id):
    return models.Image(
        url="https://cdn.example.com/a.png",
        secure_url="https://cdn.example.com/a.png",
        public_id="catalog/a",
        media_service_id=media_service_id,
    )


def test_rejects_models_outside_owner_union():
    with pytest.raises(CatalogError) as exc:
        OwnerAdapter(models.Product)
    assert exc.value.kind == ErrorKind.INTERNAL


def test_service_adapters_are_bound_to_their_model(course_service, seminar_service):
    assert course_service.owner_adapter().owner_type == "course"
    assert seminar_service.owner_adapter().model is models.Seminar


def test_mismatched_owner_is_internal_error(session_factory, course_service, course_request):
    created = course_service.create(course_request)
    adapter = OwnerAdapter(models.Seminar)
    with session_factory() as db:
        course = db.get(models.Course, created.id)
        with pytest.raises(CatalogError) as exc:
            adapter.add_image(db, course, _image(uuid.uuid4()))
    assert exc.value.kind == ErrorKind.INTERNAL


def test_add_find_and_delete_images(session_factory, course_service, course_request):
    first = course_service.create(course_request)
    second = course_service.create({**course_request, "name": "Rust Basics"})
    adapter = OwnerAdapter(models.Course)
    media_id = uuid.uuid4()

    with session_factory() as db:
        owners = adapter.list_with_unpublished_by_ids(db, [first.id, second.id])
        rows = adapter.add_image_batch(db, owners, _image(media_id))
        assert {r.owner_id for r in rows} == {first.id, second.id}
        assert all(r.owner_type == "course" for r in rows)
        db.commit()

    with session_factory() as db:
        found = adapter.find_owner_ids_by_image_id(db, media_id, [first.id, second.id, uuid.uuid4()])
        assert set(found) == {first.id, second.id}
        owner = adapter.get_with_unpublished(db, first.id)
        assert adapter.delete_image(db, owner, media_id) == 1
        db.commit()

    with session_factory() as db:
        assert adapter.find_owner_ids_by_image_id(db, media_id, [first.id, second.id]) == [second.id]


def test_batch_update_writes_only_flagged_columns(session_factory, course_service, course_request, fetch):
    created = course_service.create(course_request)
    adapter = OwnerAdapter(models.Course)

    with session_factory() as db:
        owner = adapter.get_with_unpublished(db, created.id)
        owner.uploaded_image_amount = 3
        owner.in_stock = True
        assert adapter.batch_update(db, [owner], OwnerField.UPLOADED_IMAGE_AMOUNT) == 1
        assert adapter.batch_update(db, [owner], OwnerField.NONE) == 0

        # autoflush is off, so this reads the row as written, without the pending in_stock change
        row = db.execute(
            select(models.Course.uploaded_image_amount, models.Course.in_stock)
            .where(models.Course.id == created.id)
        ).one()
        assert tuple(row) == (3, False)
        db.rollback()

    stored = fetch(models.Course, created.id)
    assert stored.uploaded_image_amount == 0
    assert stored.in_stock is False


def test_batch_update_leaves_no_pending_write(session_factory, course_service, course_request, fetch):
    created = course_service.create(course_request)
    adapter = OwnerAdapter(models.Course)

    with session_factory() as db:
        owner = adapter.get_with_unpublished(db, created.id)
        owner.uploaded_image_amount = 3
        adapter.batch_update(db, [owner], OwnerField.UPLOADED_IMAGE_AMOUNT)
        assert not db.is_modified(owner)
        db.commit()

    stored = fetch(models.Course, created.id)
    assert stored.uploaded_image_amount == 3
    assert stored.in_stock is False


def test_batch_update_both_fields(session_factory, course_service, course_request, fetch):
    created = course_service.create(course_request)
    adapter = OwnerAdapter(models.Course)

    with session_factory() as db:
        owner = adapter.get_with_unpublished(db, created.id)
        owner.uploaded_image_amount = 1
        owner.in_stock = True
        adapter.batch_update(db, [owner], OwnerField.IN_STOCK | OwnerField.UPLOADED_IMAGE_AMOUNT)
        db.commit()

    stored = fetch(models.Course, created.id)
    assert stored.uploaded_image_amount == 1
    assert stored.in_stock is True


def test_reduced_owner_read_is_not_deprecated(session_factory, course_service, course_request):
    created = course_service.create(course_request)
    adapter = OwnerAdapter(models.Course)

    with session_factory() as db, warnings.catch_warnings():
        warnings.simplefilter("error", SADeprecationWarning)
        owner = adapter.get_with_unpublished(db, created.id)
        assert owner.id == created.id
        assert owner.images == []
