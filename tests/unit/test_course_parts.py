import uuid

import pytest

from catalog.errors import CatalogError, ErrorKind
from catalog.lifecycle import Visibility


@pytest.fixture
def course_id(course_service, course_request):
    return course_service.create(course_request).id


def _part(course_id, number, name="Lesson"):
    return {
        "course_id": str(course_id),
        "name": f"{name}{number}",
        "short_description": "part overview",
        "number": number,
    }


class TestCoursePartService:
    def test_create_starts_unpublished(self, part_service, course_id):
        created = part_service.create(_part(course_id, 1))

        part = part_service.get(created.id, course_id, Visibility.WITH_UNPUBLISHED)
        assert part.course_id == course_id
        assert part.number == 1
        assert part.published is False
        with pytest.raises(CatalogError) as exc:
            part_service.get(created.id, course_id)
        assert exc.value.kind == ErrorKind.NOT_FOUND

    def test_create_for_unknown_course(self, part_service):
        with pytest.raises(CatalogError) as exc:
            part_service.create(_part(uuid.uuid4(), 1))
        assert exc.value.kind == ErrorKind.NOT_FOUND

    def test_numbers_are_unique_per_course(self, part_service, course_service, course_request, course_id):
        part_service.create(_part(course_id, 1))
        with pytest.raises(CatalogError) as exc:
            part_service.create(_part(course_id, 1, name="Other"))
        assert exc.value.kind == ErrorKind.INVALID_ARGUMENT

        other_course = course_service.create({**course_request, "name": "Other Course"})
        part_service.create(_part(other_course.id, 1))

    def test_publish_requires_published_course(self, part_service, course_service, course_id):
        created = part_service.create(_part(course_id, 1))

        with pytest.raises(CatalogError) as exc:
            part_service.publish(created.id, course_id)
        assert exc.value.kind == ErrorKind.INVALID_ARGUMENT

        course_service.publish(course_id)
        part_service.publish(created.id, course_id)
        assert part_service.get(created.id, course_id).published is True

        part_service.unpublish(created.id, course_id)
        assert part_service.get(created.id, course_id, Visibility.WITH_UNPUBLISHED).published is False

    def test_publish_part_of_other_course_is_not_found(self, part_service, course_service, course_request, course_id):
        created = part_service.create(_part(course_id, 1))
        other_course = course_service.create({**course_request, "name": "Other Course"})
        course_service.publish(other_course.id)

        with pytest.raises(CatalogError) as exc:
            part_service.publish(created.id, other_course.id)
        assert exc.value.kind == ErrorKind.NOT_FOUND

    def test_update_diff_and_number_conflict(self, part_service, course_id):
        first = part_service.create(_part(course_id, 1))
        part_service.create(_part(course_id, 2))

        diff = part_service.update({
            "id": str(first.id),
            "course_id": str(course_id),
            "name": "Lesson1",
            "long_description": "covers the toolchain",
            "tags": ["intro", "setup"],
        })
        assert diff == {"course_part": {"long_description": "covers the toolchain", "tags": ["intro", "setup"]}}

        with pytest.raises(CatalogError) as exc:
            part_service.update({"id": str(first.id), "course_id": str(course_id), "number": 2})
        assert exc.value.kind == ErrorKind.INVALID_ARGUMENT

        assert part_service.update({"id": str(first.id), "course_id": str(course_id), "number": 3}) == {
            "course_part": {"number": 3}
        }

    def test_list_per_tier(self, part_service, course_service, course_id):
        course_service.publish(course_id)
        first = part_service.create(_part(course_id, 1))
        second = part_service.create(_part(course_id, 2))
        part_service.publish(second.id, course_id)

        published, total = part_service.list(course_id)
        assert [p.id for p in published] == [second.id]
        assert total == 1

        drafts, total = part_service.list(course_id, Visibility.WITH_UNPUBLISHED)
        assert [p.id for p in drafts] == [first.id]
        assert total == 1

        course_service.delete(course_id)
        deleted, total = part_service.list(course_id, Visibility.WITH_DELETED)
        assert {p.id for p in deleted} == {first.id, second.id}
        assert total == 2

    def test_delete_unpublishes_and_hides_part(self, part_service, course_service, course_id, fetch_parts):
        course_service.publish(course_id)
        created = part_service.create(_part(course_id, 1))
        part_service.publish(created.id, course_id)

        part_service.delete(created.id, course_id)

        stored = fetch_parts(course_id)[0]
        assert stored.published is False
        assert stored.deleted_at is not None
        with pytest.raises(CatalogError) as exc:
            part_service.get(created.id, course_id, Visibility.WITH_UNPUBLISHED)
        assert exc.value.kind == ErrorKind.NOT_FOUND
        assert part_service.get(created.id, course_id, Visibility.WITH_DELETED).id == created.id

        with pytest.raises(CatalogError) as exc:
            part_service.delete(created.id, course_id)
        assert exc.value.kind == ErrorKind.NOT_FOUND

    def test_restore_leaves_part_unpublished(self, part_service, course_service, course_id, fetch_parts):
        course_service.publish(course_id)
        created = part_service.create(_part(course_id, 1))
        part_service.publish(created.id, course_id)
        part_service.delete(created.id, course_id)

        part_service.restore(created.id, course_id)

        stored = fetch_parts(course_id)[0]
        assert stored.deleted_at is None
        assert stored.published is False
        with pytest.raises(CatalogError):
            part_service.get(created.id, course_id)

        with pytest.raises(CatalogError) as exc:
            part_service.restore(created.id, course_id)
        assert exc.value.kind == ErrorKind.NOT_FOUND

    def test_restore_rejects_taken_number(self, part_service, course_id):
        created = part_service.create(_part(course_id, 1))
        part_service.delete(created.id, course_id)
        part_service.create(_part(course_id, 1, name="Replacement"))

        with pytest.raises(CatalogError) as exc:
            part_service.restore(created.id, course_id)
        assert exc.value.kind == ErrorKind.INVALID_ARGUMENT

    def test_delete_permanent(self, part_service, course_id, fetch_parts):
        kept = part_service.create(_part(course_id, 1))
        removed = part_service.create(_part(course_id, 2))

        part_service.delete_permanent(removed.id, course_id)

        assert [p.id for p in fetch_parts(course_id)] == [kept.id]
        with pytest.raises(CatalogError) as exc:
            part_service.delete_permanent(removed.id, course_id)
        assert exc.value.kind == ErrorKind.NOT_FOUND
        with pytest.raises(CatalogError) as exc:
            part_service.delete_permanent(kept.id, uuid.uuid4())
        assert exc.value.kind == ErrorKind.NOT_FOUND
