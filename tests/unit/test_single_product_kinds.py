"""Training sessions and physical goods share the single-product lifecycle."""
import pytest

from catalog.db import models
from catalog.errors import CatalogError, ErrorKind
from catalog.lifecycle import LifecycleState, Visibility


@pytest.fixture
def session_request():
    return {
        "name": "Mobility Class",
        "short_description": "joint mobility basics",
        "duration_minutes": 90,
        "format": "online",
        "price": 25.0,
    }


@pytest.fixture
def good_request():
    return {
        "name": "Resistance Band",
        "short_description": "medium tension band",
        "price": 15.5,
        "amount": 12,
        "shipping_required": True,
    }


class TestTrainingSessions:
    def test_full_lifecycle(self, training_session_service, session_request, fetch, fetch_products):
        created = training_session_service.create(session_request)
        assert fetch_products(created.id)[0].details_type == "training_session"

        training_session_service.publish(created.id)
        details = training_session_service.get(created.id)
        assert details.format == "online"
        assert details.duration_minutes == 90
        assert details.price == pytest.approx(25.0)

        diff = training_session_service.update({"id": str(created.id), "format": "offline", "duration_minutes": 90})
        assert diff == {"training_session": {"format": "offline"}}

        assert training_session_service.delete(created.id).state == LifecycleState.DELETED
        assert training_session_service.restore(created.id).state == LifecycleState.ARCHIVED
        assert fetch(models.TrainingSession, created.id).in_stock is False

    @pytest.mark.parametrize("payload", [
        {"duration_minutes": 45},
        {"duration_minutes": 0},
        {"format": "hybrid"},
        {"name": "9 to 5"},
    ])
    def test_invalid_requests(self, training_session_service, session_request, payload):
        with pytest.raises(CatalogError) as exc:
            training_session_service.create({**session_request, **payload})
        assert exc.value.kind == ErrorKind.INVALID_ARGUMENT


class TestPhysicalGoods:
    def test_full_lifecycle(self, physical_good_service, good_request, fetch_products):
        created = physical_good_service.create(good_request)
        assert fetch_products(created.id)[0].price == pytest.approx(15.5)

        details = physical_good_service.get(created.id, Visibility.WITH_UNPUBLISHED)
        assert details.amount == 12
        assert details.shipping_required is True

        diff = physical_good_service.update({"id": str(created.id), "amount": 3, "price": 17.0})
        assert diff == {"physical_good": {"amount": 3}, "product": {"price": 17.0}}

        physical_good_service.publish(created.id)
        items, total = physical_good_service.list()
        assert [g.id for g in items] == [created.id]
        assert total == 1

        physical_good_service.delete_permanent(created.id)
        assert physical_good_service.count(Visibility.WITH_DELETED) == 0
        assert fetch_products(created.id) == []

    def test_shipping_requires_stock(self, physical_good_service, good_request):
        with pytest.raises(CatalogError) as exc:
            physical_good_service.create({**good_request, "amount": 0})
        assert exc.value.kind == ErrorKind.INVALID_ARGUMENT

    def test_digital_good_may_have_zero_amount(self, physical_good_service, good_request):
        created = physical_good_service.create({**good_request, "amount": 0, "shipping_required": False})
        assert physical_good_service.get(created.id, Visibility.WITH_UNPUBLISHED).amount == 0

    def test_negative_amount_is_rejected(self, physical_good_service, good_request):
        with pytest.raises(CatalogError) as exc:
            physical_good_service.create({**good_request, "amount": -1, "shipping_required": False})
        assert exc.value.kind == ErrorKind.INVALID_ARGUMENT
