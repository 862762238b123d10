"""Tag API routes."""

from typing import Optional

from fastapi import APIRouter, Query, Request, status

from odin.config import DEFAULT_PAGE_LIMIT
from odin.repositories.tag_repository import TAG_SORT_COLUMNS
from odin.responses import RequestMethod, add_entry, build_body, pagination_meta, parse_list_param, parse_sort
from odin.schemas.common import Envelope
from odin.schemas.tags import CreateTagRequest, TagResponse
from odin.services.tag_service import TagService

router = APIRouter(prefix="/tags", tags=["Tags"])


def _tag_payload(tag, fields=None) -> dict:
    payload = TagResponse(**tag.to_dict()).model_dump()
    if fields:
        payload = {key: value for key, value in payload.items() if key in fields or key == "id"}
    return payload


@router.get("", response_model=Envelope)
async def list_tags(
    request: Request,
    limit: int = Query(DEFAULT_PAGE_LIMIT, ge=1),
    skip: Optional[int] = Query(None, ge=0),
    page: Optional[int] = Query(None, ge=0),
    fields: Optional[str] = Query(None, description="Comma-separated attributes to return"),
    sort: Optional[str] = Query(None, description="Comma-separated 'attribute [ASC|DESC]' entries"),
    about: Optional[str] = None,
    description: Optional[str] = None,
    email: Optional[str] = None
):
    """
    List tags, one page at a time.

    Parameters:
        - limit: Page size
        - skip / page: Start of the page; a non-zero page takes precedence
        - fields: Comma-separated attributes to keep in each record
        - sort: Ordering, e.g. "about DESC, created_at"
        - about, description, email: Exact-match criteria

    Raises:
        - 400: Unsupported sort attribute or direction
    """
    criteria = {
        key: value
        for key, value in (("about", about), ("description", description), ("email", email))
        if value is not None
    }
    order = parse_sort(sort, TAG_SORT_COLUMNS)
    meta = pagination_meta(criteria, limit, skip=skip, page=page)
    tag_service = TagService()
    tags, total = tag_service.list_tags(limit=limit, skip=meta["start"], criteria=criteria, sort=order)

    add_entry(add_entry(meta, "status", "ok"), "total", total)
    add_entry(meta, "message", f"{len(tags)} tags")
    links = {"self": str(request.url)}
    if meta["end"] < total:
        links["next"] = str(request.url.include_query_params(skip=meta["end"], limit=limit).remove_query_params("page"))

    selected = parse_list_param(fields)
    return build_body(RequestMethod.GET, meta, data=[_tag_payload(t, selected) for t in tags], links=links)


@router.get("/{tag_id}", response_model=Envelope)
async def get_tag(tag_id: str, request: Request, fields: Optional[str] = Query(None)):
    """
    Fetch one tag with its categories.

    Raises:
        - 400: Invalid tag id
        - 404: Tag not found
    """
    tag = TagService().get_tag(tag_id)
    meta = {"status": "ok", "message": "Tag found"}
    return build_body(
        RequestMethod.GET,
        meta,
        data=_tag_payload(tag, parse_list_param(fields)),
        links={"self": str(request.url)}
    )


@router.post("", response_model=Envelope, status_code=status.HTTP_201_CREATED)
async def create_tag(body: CreateTagRequest, request: Request):
    """
    Create a tag. The id is generated; categories are created on first use.

    Raises:
        - 400: Email longer than the column allows
        - 422: Malformed email
    """
    tag = TagService().create_tag(
        about=body.about,
        description=body.description,
        email=body.email,
        categories=body.categories,
    )
    meta = {"status": "created", "message": "Tag created"}
    links = {"self": str(request.url_for("get_tag", tag_id=tag.id))}
    return build_body(RequestMethod.POST, meta, data=_tag_payload(tag), links=links)


@router.delete("/{tag_id}", response_model=Envelope)
async def delete_tag(tag_id: str):
    """
    Delete a tag and its category associations.

    Raises:
        - 400: Invalid tag id
        - 404: Tag not found
    """
    TagService().delete_tag(tag_id)
    meta = {"status": "deleted", "message": f"Tag {tag_id} deleted"}
    return build_body(RequestMethod.DELETE, meta, data={"id": tag_id})
