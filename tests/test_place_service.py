# File: tests/test_place_service.py

"""
Workflow-level tests that need to reach inside the unit of work.
"""

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from app.core.errors import ErrorCode
from app.core.result import Err, Ok
from app.models.place import Place
from app.models.user import User
from app.schemas.place import PlaceCreate
from app.services import place_service


@pytest.fixture
def owner(db):
    user = User(name="Owner", email="owner@example.com", password="x", image="img.png")
    db.add(user)
    db.commit()
    return user


def _payload():
    return PlaceCreate(title="Place", description="Somewhere nice", address="1 Main St")


def _place_count(db) -> int:
    return db.execute(select(func.count()).select_from(Place)).scalar_one()


def _boom(*args, **kwargs):
    raise OperationalError("UPDATE users", {}, Exception("simulated failure"))


def test_create_place_writes_place_and_owner_list(db, geocoder, owner):
    result = place_service.create_place(
        db, geocoder, _payload(), image="img.png", creator_id=owner.id
    )
    assert isinstance(result, Ok)
    place = result.value

    db.expire_all()
    assert db.get(Place, place.id).creator_id == owner.id
    assert db.get(User, owner.id).place_ids == [place.id]


def test_create_place_rolls_back_both_writes(db, geocoder, owner, monkeypatch):
    monkeypatch.setattr(place_service, "_attach_to_creator", _boom)

    result = place_service.create_place(
        db, geocoder, _payload(), image="img.png", creator_id=owner.id
    )

    assert isinstance(result, Err)
    assert result.error.code is ErrorCode.INTERNAL
    assert result.error.status_code == 500
    db.expire_all()
    assert _place_count(db) == 0
    assert db.get(User, owner.id).places == []


def test_create_place_rolls_back_when_commit_fails(db, geocoder, owner, monkeypatch):
    def failing_attach(uow, creator, place):
        creator.places.append(place)
        uow.session.flush()
        raise OperationalError("COMMIT", {}, Exception("connection lost"))

    monkeypatch.setattr(place_service, "_attach_to_creator", failing_attach)

    result = place_service.create_place(
        db, geocoder, _payload(), image="img.png", creator_id=owner.id
    )

    assert isinstance(result, Err)
    db.expire_all()
    assert _place_count(db) == 0
    assert db.get(User, owner.id).places == []


def test_delete_place_rolls_back_both_writes(db, geocoder, owner, monkeypatch, tmp_path):
    image = tmp_path / "place.png"
    image.write_bytes(b"png")
    place = place_service.create_place(
        db, geocoder, _payload(), image=str(image), creator_id=owner.id
    ).value
    place_id = place.id

    monkeypatch.setattr(place_service, "_detach_from_creator", _boom)
    result = place_service.delete_place(db, place_id, caller_id=owner.id)

    assert isinstance(result, Err)
    assert result.error.message == "Could not delete place in database"
    db.expire_all()
    assert db.get(Place, place_id) is not None
    assert db.get(User, owner.id).place_ids == [place_id]
    assert image.exists()


def test_delete_place_ignores_image_delete_failure(db, geocoder, owner, monkeypatch):
    place = place_service.create_place(
        db, geocoder, _payload(), image="/nonexistent/dir/place.png", creator_id=owner.id
    ).value

    result = place_service.delete_place(db, place.id, caller_id=owner.id)

    assert result == Ok("Deleted place.")
    assert _place_count(db) == 0


def test_delete_place_by_non_creator_changes_nothing(db, geocoder, owner):
    place = place_service.create_place(
        db, geocoder, _payload(), image="img.png", creator_id=owner.id
    ).value

    result = place_service.delete_place(db, place.id, caller_id="someone-else")

    assert isinstance(result, Err)
    assert result.error.status_code == 401
    db.expire_all()
    assert _place_count(db) == 1
    assert db.get(User, owner.id).place_ids == [place.id]


def test_geocoding_error_is_returned_verbatim(db, geocoder, owner):
    geocoder.unknown_addresses.add("1 Main St")

    result = place_service.create_place(
        db, geocoder, _payload(), image="img.png", creator_id=owner.id
    )

    assert isinstance(result, Err)
    assert result.error.status_code == 422
    assert result.error.message == "Could not find coordinate for the given address."
    assert _place_count(db) == 0


def test_get_places_by_user_id_returns_places(db, geocoder, owner):
    place = place_service.create_place(
        db, geocoder, _payload(), image="img.png", creator_id=owner.id
    ).value

    result = place_service.get_places_by_user_id(db, owner.id)

    assert isinstance(result, Ok)
    assert [p.id for p in result.value] == [place.id]
