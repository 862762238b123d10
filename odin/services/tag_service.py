"""Tag service for business logic."""

from typing import Dict, List, Optional, Tuple

from pydantic import EmailStr, TypeAdapter, ValidationError

from common import shortid
from common.logging_config import get_logger
from odin.config import TAG_EMAIL_MAX_LENGTH, TAG_ID_MAX_LENGTH
from odin.domain import Tag
from odin.exceptions import InvalidIdentifierError, InvalidTagError, TagNotFoundError
from odin.repositories.tag_repository import TagRepository

logger = get_logger(__name__)

_email_adapter = TypeAdapter(EmailStr)


def _check_tag_id(tag_id: str) -> None:
    if not shortid.is_valid(tag_id) or len(tag_id) > TAG_ID_MAX_LENGTH:
        raise InvalidIdentifierError(f"Invalid tag id: {tag_id!r}")


class TagService:
    def __init__(self):
        self.tag_repo = TagRepository()

    def create_tag(
        self,
        about: Optional[str] = None,
        description: Optional[str] = None,
        email: Optional[str] = None,
        categories: Optional[List[str]] = None,
    ) -> Tag:
        if email is not None:
            if len(email) > TAG_EMAIL_MAX_LENGTH:
                raise InvalidTagError(f"Email must be at most {TAG_EMAIL_MAX_LENGTH} characters")
            try:
                email = _email_adapter.validate_python(email)
            except ValidationError:
                raise InvalidTagError("Email is not a valid address")

        category_names = []
        for name in categories or []:
            name = name.strip()
            if name and name not in category_names:
                category_names.append(name)

        tag = self.tag_repo.create_tag(
            about=about,
            description=description,
            email=email,
            category_names=category_names,
        )
        logger.info(f"Created tag with {len(tag.categories)} categories [tag_id={tag.id}]")
        return tag

    def get_tag(self, tag_id: str) -> Tag:
        _check_tag_id(tag_id)
        tag = self.tag_repo.get_by_id(tag_id)
        if tag is None:
            raise TagNotFoundError(f"Tag {tag_id} not found")
        return tag

    def list_tags(
        self,
        limit: int,
        skip: int,
        criteria: Optional[Dict[str, str]] = None,
        sort: Optional[List[Tuple[str, str]]] = None
    ) -> Tuple[List[Tag], int]:
        """
        Returns:
            Tuple of (tags in the requested slice, total number of matching tags)
        """
        tags = self.tag_repo.list_tags(limit=limit, skip=skip, criteria=criteria, sort=sort)
        return tags, self.tag_repo.count_tags(criteria)

    def delete_tag(self, tag_id: str) -> None:
        _check_tag_id(tag_id)
        if not self.tag_repo.delete_tag(tag_id):
            raise TagNotFoundError(f"Tag {tag_id} not found")
        logger.info(f"Deleted tag [tag_id={tag_id}]")
