from datetime import UTC, datetime, timedelta

import pytest

from catalog.db import models
from catalog.db.database import build_engine, build_session_factory
from catalog.services import (
    CoursePartService,
    CourseService,
    ImageService,
    PhysicalGoodService,
    ProductService,
    SeminarService,
    TrainingSessionService,
)


# In-memory SQLite shared through StaticPool so every session sees one schema.
@pytest.fixture(scope="session")
def engine():
    eng = build_engine("sqlite+pysqlite:///:memory:")
    models.Base.metadata.create_all(bind=eng)
    try:
        yield eng
    finally:
        models.Base.metadata.drop_all(bind=eng)
        eng.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture(autouse=True)
def clean(engine):
    yield
    with engine.begin() as conn:
        for table in reversed(models.Base.metadata.sorted_tables):
            conn.execute(table.delete())


@pytest.fixture
def fetch(session_factory):
    """Load a row in a fresh session so assertions never see stale identity-map state."""
    def _fetch(model, row_id):
        with session_factory() as s:
            return s.get(model, row_id)
    return _fetch


@pytest.fixture
def fetch_products(session_factory):
    def _fetch(details_id):
        with session_factory() as s:
            return (
                s.query(models.Product)
                .filter(models.Product.details_id == details_id)
                .order_by(models.Product.id)
                .all()
            )
    return _fetch


@pytest.fixture
def fetch_parts(session_factory):
    def _fetch(course_id):
        with session_factory() as s:
            return (
                s.query(models.CoursePart)
                .filter(models.CoursePart.course_id == course_id)
                .order_by(models.CoursePart.number)
                .all()
            )
    return _fetch


@pytest.fixture
def course_service(session_factory):
    return CourseService(session_factory)


@pytest.fixture
def seminar_service(session_factory):
    return SeminarService(session_factory)


@pytest.fixture
def training_session_service(session_factory):
    return TrainingSessionService(session_factory)


@pytest.fixture
def physical_good_service(session_factory):
    return PhysicalGoodService(session_factory)


@pytest.fixture
def part_service(session_factory):
    return CoursePartService(session_factory)


@pytest.fixture
def product_service(session_factory):
    return ProductService(session_factory)


@pytest.fixture
def image_service(session_factory):
    return ImageService(session_factory)


@pytest.fixture
def course_request():
    return {
        "name": "Go Basics",
        "short_description": "intro",
        "topic": "programming",
        "price": 49.99,
        "access_duration": 30,
    }


@pytest.fixture
def seminar_request():
    start = datetime.now(UTC) + timedelta(days=10)
    return {
        "name": "Spring Intensive",
        "short_description": "two day workshop",
        "reservation_price": 10.0,
        "early_price": 100.0,
        "late_price": 150.0,
        "early_surcharge_price": 20.0,
        "late_surcharge_price": 30.0,
        "date": start,
        "ending_date": start + timedelta(hours=6),
        "place": "Main Hall",
        "late_payment_date": start - timedelta(days=3),
    }
