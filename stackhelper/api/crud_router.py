"""
Generic CRUD router.

build_crud_router() exposes every CrudService operation for one resource:

    GET    /count          200 integer
    GET    /               200 page of read DTOs (page, size, sort, search)
    GET    /{id}           200 read DTO | 404
    POST   /               201 + Location | 204 when no key was produced
    POST   /createAll      200 list of keys | 204 when none
    PUT    /{id}           201 + Location | 204 when no key was produced
    PUT    /updateAll      200 list of keys | 204 when none
    DELETE /{id}           200 | 204 on any failure
    DELETE /deleteAll      200 | 204 on any failure

Static paths are registered before /{id} so they are never captured as keys.
"""

from typing import Any, Callable, List, Optional, Type

from fastapi import APIRouter, Body, Depends, Query, Request, Response
from pydantic import BaseModel

from stackhelper.config import settings
from stackhelper.constants import HTTPStatus
from stackhelper.dtos.request.search_request import SearchCriterion
from stackhelper.dtos.response.page_response import Page
from stackhelper.exceptions import NotFoundError
from stackhelper.services.crud_service import CrudService
from stackhelper.utils.error_handlers import handle_api_errors, handle_delete_errors


def build_crud_router(
    service_dependency: Callable[..., CrudService],
    read_dto: Type[BaseModel],
    write_dto: Type[BaseModel],
    prefix: str,
    key_type: Type = int,
    resource_name: Optional[str] = None,
    default_page_size: Optional[int] = None,
    **router_kwargs: Any
) -> APIRouter:
    """
    Build the REST surface of one resource.

    Args:
        service_dependency: FastAPI dependency returning the resource's CrudService
        read_dto: Response model for single items and page content
        write_dto: Request body model for create/update
        prefix: Base path, e.g. "/pets"
        key_type: Python type of the entity key (path and body parsing)
        resource_name: Name used for route names and logs (prefix without '/' by default)
        default_page_size: Page size when the client sends none
        **router_kwargs: Forwarded to APIRouter (tags, dependencies, ...)

    Returns:
        APIRouter ready for app.include_router()
    """
    name = resource_name or prefix.strip('/').replace('/', '_')
    page_size = default_page_size or settings.default_page_size
    find_by_id_route = f"{name}_find_by_id"
    router = APIRouter(prefix=prefix, **router_kwargs)

    def location_of(request: Request, key: Any) -> str:
        return str(request.url_for(find_by_id_route, item_id=key))

    def created(request: Request, key: Any) -> Response:
        if key is None:
            return Response(status_code=HTTPStatus.NO_CONTENT)
        return Response(status_code=HTTPStatus.CREATED, headers={"Location": location_of(request, key)})

    @router.get("/count", response_model=int, name=f"{name}_count")
    @handle_api_errors(f"{name}.count_all")
    def count_all(service: CrudService = Depends(service_dependency)):
        return service.count_all()

    @router.get("", response_model=Page[read_dto], name=f"{name}_find_all")
    @handle_api_errors(f"{name}.find_all")
    def find_all(
        page: int = Query(0, ge=0, description="Zero-based page index"),
        size: int = Query(page_size, ge=1, description="Page size"),
        sort: Optional[List[str]] = Query(None, description="Fields to sort by, '-' prefix for descending"),
        search: Optional[List[str]] = Query(None, description="Criteria as field:OPERATOR:value"),
        service: CrudService = Depends(service_dependency),
    ):
        return service.find_page(page, size, sort, SearchCriterion.parse_all(search))

    @router.get("/{item_id}", response_model=read_dto, name=find_by_id_route)
    @handle_api_errors(f"{name}.find_by_id")
    def find_by_id(item_id: key_type, service: CrudService = Depends(service_dependency)):
        dto = service.find_by_id(item_id)
        if dto is None:
            raise NotFoundError(name, item_id)
        return dto

    @router.post(
        "",
        status_code=HTTPStatus.CREATED,
        response_class=Response,
        responses={HTTPStatus.NO_CONTENT: {"description": "Nothing was created"}},
        name=f"{name}_create",
    )
    @handle_api_errors(f"{name}.create")
    def create(dto: write_dto, request: Request, service: CrudService = Depends(service_dependency)):
        return created(request, service.create(dto))

    @router.post(
        "/createAll",
        response_model=List[key_type],
        responses={HTTPStatus.NO_CONTENT: {"description": "Nothing was created"}},
        name=f"{name}_create_all",
    )
    @handle_api_errors(f"{name}.create_all")
    def create_all(dtos: List[write_dto], service: CrudService = Depends(service_dependency)):
        keys = service.create_all(dtos)
        if not keys:
            return Response(status_code=HTTPStatus.NO_CONTENT)
        return keys

    @router.put(
        "/updateAll",
        response_model=List[key_type],
        responses={HTTPStatus.NO_CONTENT: {"description": "Nothing was updated"}},
        name=f"{name}_update_all",
    )
    @handle_api_errors(f"{name}.update_all")
    def update_all(dtos: List[write_dto], service: CrudService = Depends(service_dependency)):
        keys = service.update_all(dtos)
        if not keys:
            return Response(status_code=HTTPStatus.NO_CONTENT)
        return keys

    @router.put(
        "/{item_id}",
        status_code=HTTPStatus.CREATED,
        response_class=Response,
        responses={HTTPStatus.NO_CONTENT: {"description": "Nothing was updated"}},
        name=f"{name}_update",
    )
    @handle_api_errors(f"{name}.update")
    def update(
        item_id: key_type,
        dto: write_dto,
        request: Request,
        service: CrudService = Depends(service_dependency),
    ):
        return created(request, service.update(item_id, dto))

    @router.delete("/deleteAll", response_class=Response, name=f"{name}_delete_all")
    @handle_delete_errors(f"{name}.delete_by_id_list")
    def delete_all(keys: List[key_type] = Body(...), service: CrudService = Depends(service_dependency)):
        service.delete_by_id_list(keys)
        return Response(status_code=HTTPStatus.OK)

    @router.delete("/{item_id}", response_class=Response, name=f"{name}_delete")
    @handle_delete_errors(f"{name}.delete_by_id")
    def delete_by_id(item_id: key_type, service: CrudService = Depends(service_dependency)):
        service.delete_by_id(item_id)
        return Response(status_code=HTTPStatus.OK)

    return router
