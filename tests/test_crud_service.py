import logging

import pytest

from stackhelper.constants import SearchOperator
from stackhelper.dtos.pet_dto import PetWriteDTO
from stackhelper.dtos.request.search_request import SearchCriterion
from stackhelper.exceptions import InvalidQueryError, PersistenceError
from stackhelper.services.pet_service import PetService


def test_find_by_id_after_create(pet_service):
    key = pet_service.create(PetWriteDTO(name="Rex"))

    dto = pet_service.find_by_id(key)

    assert key is not None
    assert dto.id == key
    assert dto.name == "Rex"
    assert dto.friends == []


def test_find_by_id_absent_is_none(pet_service):
    assert pet_service.find_by_id(99) is None
    assert pet_service.exists_by_id(99) is False


def test_count_tracks_creates_and_deletes(pet_service, make_pet):
    keys = [make_pet(name) for name in ("Rex", "Max", "Bella", "Luna")]

    pet_service.delete_by_id(keys[0])
    pet_service.delete_by_id_list(keys[1:3])

    assert pet_service.count_all() == 1
    assert pet_service.exists_by_id(keys[3])


def test_create_with_friends(pet_service, make_pet):
    max_id = make_pet("Max")
    rex_id = make_pet("Rex", friends_ids=[max_id])

    rex = pet_service.find_by_id(rex_id)

    assert [f.name for f in rex.friends] == ["Max"]


def test_create_rejected_returns_none(pet_service, make_pet):
    make_pet("Rex")

    assert pet_service.create(PetWriteDTO(name="Rex")) is None
    assert pet_service.count_all() == 1


def test_create_ignores_supplied_key(pet_service):
    key = pet_service.create(PetWriteDTO(id=42, name="Rex"))

    assert key == 1


def test_find_all_sorted(pet_service, make_pet):
    for name in ("Rex", "Max", "Bella"):
        make_pet(name)

    assert [p.name for p in pet_service.find_all()] == ["Rex", "Max", "Bella"]
    assert [p.name for p in pet_service.find_all("name")] == ["Bella", "Max", "Rex"]
    assert [p.name for p in pet_service.find_all(["-name"])] == ["Rex", "Max", "Bella"]


def test_find_all_unknown_sort_field(pet_service):
    with pytest.raises(InvalidQueryError):
        pet_service.find_all("colour")


def test_pages_concatenate_to_full_listing(pet_service, make_pet):
    for i in range(7):
        make_pet(f"Pet{i}")

    collected = []
    page_index = 0
    while True:
        page = pet_service.find_page(page_index, 3, "-name")
        collected.extend(page.content)
        if page.last:
            break
        page_index += 1

    assert page_index == 2
    assert [p.id for p in collected] == [p.id for p in pet_service.find_all("-name")]
    assert len({p.id for p in collected}) == 7


def test_page_metadata(pet_service, make_pet):
    for name in ("Rex", "Max", "Bella"):
        make_pet(name)

    page = pet_service.find_page(0, 2, "name")

    assert page.total_elements == 3
    assert page.total_pages == 2
    assert page.first and not page.last
    assert [o.field for o in page.sort] == ["name"]


def test_page_past_the_end_is_empty(pet_service, make_pet):
    make_pet("Rex")

    page = pet_service.find_page(5, 10)

    assert page.content == []
    assert page.total_elements == 1
    assert page.last


def test_page_with_criteria(pet_service, make_pet):
    for name in ("Rex", "Rexy", "Max"):
        make_pet(name)

    criteria = [SearchCriterion(field="name", operator=SearchOperator.STARTS_WITH, value="Re")]
    page = pet_service.find_page(0, 10, "-name", criteria)

    assert [p.name for p in page.content] == ["Rexy", "Rex"]
    assert page.total_elements == 2


def test_page_size_above_maximum(db_session):
    service = PetService(db_session)
    service.max_page_size = 5

    with pytest.raises(InvalidQueryError) as exc:
        service.find_page(0, 6)

    assert exc.value.details == {"parameter": "size"}


def test_update_existing(pet_service, make_pet):
    key = make_pet("Rex")
    max_id = make_pet("Max")

    assert pet_service.update(key, PetWriteDTO(name="Rexy", friends_ids=[max_id])) == key

    dto = pet_service.find_by_id(key)
    assert dto.name == "Rexy"
    assert [f.id for f in dto.friends] == [max_id]


def test_update_absent_key_creates_nothing(pet_service):
    assert pet_service.update(7, PetWriteDTO(name="Ghost")) is None
    assert pet_service.count_all() == 0
    assert pet_service.exists_by_id(7) is False


def test_update_rejected_keeps_stored_state(pet_service, make_pet):
    key = make_pet("Rex")
    make_pet("Max")

    assert pet_service.update(key, PetWriteDTO(name="Max")) is None
    assert pet_service.find_by_id(key).name == "Rex"


def test_create_all_skips_rejected_items(pet_service, make_pet):
    make_pet("Bella")

    keys = pet_service.create_all([
        PetWriteDTO(name="Rex"),
        PetWriteDTO(name="Rex"),
        PetWriteDTO(name="Bella"),
        PetWriteDTO(name="Max"),
    ])

    assert len(keys) == 2
    assert sorted(p.name for p in pet_service.find_all()) == ["Bella", "Max", "Rex"]


def test_create_all_later_items_see_earlier_ones(pet_service):
    keys = pet_service.create_all([PetWriteDTO(name="Max"), PetWriteDTO(name="Rex", friends_ids=[1])])

    rex = pet_service.find_by_id(keys[1])
    assert [f.name for f in rex.friends] == ["Max"]


def test_create_all_empty(pet_service):
    assert pet_service.create_all([]) == []


def test_update_all_skips_unusable_items(pet_service, make_pet):
    rex = make_pet("Rex")
    max_id = make_pet("Max")

    keys = pet_service.update_all([
        PetWriteDTO(id=rex, name="Rexy"),
        PetWriteDTO(name="NoKey"),
        PetWriteDTO(id=404, name="Ghost"),
        PetWriteDTO(id=max_id, name="Rexy"),
    ])

    assert keys == [rex]
    assert pet_service.find_by_id(rex).name == "Rexy"
    assert pet_service.find_by_id(max_id).name == "Max"
    assert pet_service.count_all() == 2


def test_delete_is_idempotent(pet_service, make_pet):
    key = make_pet("Rex")

    pet_service.delete_by_id(key)
    pet_service.delete_by_id(key)
    pet_service.delete_by_id_list([key, 99])

    assert pet_service.count_all() == 0


def test_delete_all(pet_service, make_pet):
    make_pet("Max")
    make_pet("Rex", friends_ids=[1])

    assert pet_service.delete_all() == 2
    assert pet_service.count_all() == 0


def test_failed_write_is_logged_and_propagated(pet_service, monkeypatch, caplog):
    def explode(_):
        raise PersistenceError("delete", "disk full")

    monkeypatch.setattr(pet_service.repository, "delete_by_id", explode)

    with caplog.at_level(logging.ERROR):
        with pytest.raises(PersistenceError):
            pet_service.delete_by_id(1)

    failed = [r for r in caplog.records if r.getMessage() == "Failed delete_by_id"]
    assert len(failed) == 1
    assert failed[0].resource == "pet"
    assert failed[0].error_type == "PersistenceError"


def test_find_by_id_on_densely_connected_pets(pet_service, make_pet):
    keys = []
    for i in range(20):
        keys.append(make_pet(f"Pet{i}", friends_ids=list(keys)))

    dto = pet_service.find_by_id(keys[-1])

    def nodes(d):
        return 1 + sum(nodes(f) for f in d.friends)

    assert nodes(dto) == 1 + 20 * 19 // 2
