import asyncio

import pytest
from fastapi import HTTPException

from stackhelper.exceptions import (
    ApplicationError,
    InvalidQueryError,
    NotFoundError,
    PersistenceError,
    ValidationRejectedError,
)
from stackhelper.utils.error_handlers import handle_api_errors, handle_delete_errors, to_http_exception


@pytest.mark.parametrize("error, status", [
    (NotFoundError("pets", 3), 404),
    (InvalidQueryError("bad sort", parameter="sort"), 400),
    (ValidationRejectedError("name taken"), 400),
    (PersistenceError("save", "constraint failed"), 500),
    (ApplicationError("odd"), 500),
    (RuntimeError("boom"), 500),
])
def test_status_mapping(error, status):
    assert to_http_exception("pets.op", error).status_code == status


def test_message_is_carried_as_detail():
    assert to_http_exception("pets.op", PersistenceError("save", "constraint failed")).detail == "constraint failed"
    assert to_http_exception("pets.op", KeyError()).detail == "KeyError"


def test_http_exception_passes_through():
    @handle_api_errors("pets.op")
    def endpoint():
        raise HTTPException(status_code=418)

    with pytest.raises(HTTPException) as exc:
        endpoint()
    assert exc.value.status_code == 418


def test_api_errors_async():
    @handle_api_errors("pets.op")
    async def endpoint():
        raise NotFoundError("pets", 1)

    with pytest.raises(HTTPException) as exc:
        asyncio.run(endpoint())
    assert exc.value.status_code == 404
    assert exc.value.detail == "pets '1' not found"


def test_api_errors_returns_value():
    @handle_api_errors("pets.op")
    def endpoint(value):
        return value * 2

    assert endpoint(4) == 8


def test_delete_errors_answer_204():
    @handle_delete_errors("pets.delete")
    def endpoint():
        raise PersistenceError("delete", "locked")

    assert endpoint().status_code == 204


def test_delete_errors_async():
    @handle_delete_errors("pets.delete")
    async def endpoint():
        raise RuntimeError("boom")

    assert asyncio.run(endpoint()).status_code == 204
