"""Tag repository for database operations."""

from datetime import datetime
from typing import Dict, List, Optional, Tuple

from common import shortid
from common.logging_config import get_logger
from odin.database import get_db_connection, open_db_connection
from odin.domain import Category, Tag

logger = get_logger(__name__)

TAG_FILTER_COLUMNS = ("about", "description", "email")
TAG_SORT_COLUMNS = ("id", "about", "description", "email", "created_at")


def _row_to_tag(row, categories: List[Category]) -> Tag:
    return Tag(
        id=row["id"],
        about=row["about"],
        description=row["description"],
        email=row["email"],
        categories=categories,
        created_at=datetime.fromisoformat(row["created_at"]),
    )


class TagRepository:
    @staticmethod
    def create_tag(
        about: Optional[str] = None,
        description: Optional[str] = None,
        email: Optional[str] = None,
        category_names: Optional[List[str]] = None,
        tag_id: Optional[str] = None,
        conn=None
    ) -> Tag:
        should_close = conn is None
        if conn is None:
            conn = open_db_connection()

        try:
            tag_id = tag_id or shortid.generate()
            created_at = datetime.utcnow()
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO tags (id, about, description, email, created_at)
                VALUES (?, ?, ?, ?, ?)
                """,
                (tag_id, about, description, email, created_at.isoformat())
            )

            categories = []
            for name in category_names or []:
                category = TagRepository._get_or_create_category(name, conn)
                cursor.execute(
                    "INSERT OR IGNORE INTO tag_categories (tag_id, category_id) VALUES (?, ?)",
                    (tag_id, category.id)
                )
                if category not in categories:
                    categories.append(category)

            if should_close:
                conn.commit()

            return Tag(
                id=tag_id,
                about=about,
                description=description,
                email=email,
                categories=categories,
                created_at=created_at,
            )
        except Exception:
            if should_close:
                conn.rollback()
            raise
        finally:
            if should_close:
                conn.close()

    @staticmethod
    def _get_or_create_category(name: str, conn) -> Category:
        cursor = conn.cursor()
        cursor.execute("SELECT id, name FROM categories WHERE name = ?", (name,))
        row = cursor.fetchone()
        if row:
            return Category(id=row["id"], name=row["name"])

        category = Category(id=shortid.generate(), name=name)
        cursor.execute("INSERT INTO categories (id, name) VALUES (?, ?)", (category.id, category.name))
        logger.debug(f"Created category {name} [category_id={category.id}]")
        return category

    @staticmethod
    def get_categories_for_tag(tag_id: str, conn) -> List[Category]:
        cursor = conn.cursor()
        cursor.execute(
            """
            SELECT c.id, c.name
            FROM categories c
            JOIN tag_categories tc ON tc.category_id = c.id
            WHERE tc.tag_id = ?
            ORDER BY c.name
            """,
            (tag_id,)
        )
        return [Category(id=row["id"], name=row["name"]) for row in cursor.fetchall()]

    @staticmethod
    def get_by_id(tag_id: str) -> Optional[Tag]:
        with get_db_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT id, about, description, email, created_at FROM tags WHERE id = ?",
                (tag_id,)
            )
            row = cursor.fetchone()
            if row is None:
                return None
            return _row_to_tag(row, TagRepository.get_categories_for_tag(tag_id, conn))

    @staticmethod
    def _where(criteria: Optional[Dict[str, str]]) -> Tuple[str, list]:
        clauses, params = [], []
        for column, value in (criteria or {}).items():
            if column not in TAG_FILTER_COLUMNS:
                raise ValueError(f"Unknown tag column: {column}")
            clauses.append(f"{column} = ?")
            params.append(value)
        return (" WHERE " + " AND ".join(clauses)) if clauses else "", params

    @staticmethod
    def list_tags(
        limit: int = 0,
        skip: int = 0,
        criteria: Optional[Dict[str, str]] = None,
        sort: Optional[List[Tuple[str, str]]] = None
    ) -> List[Tag]:
        """
        List tags matching every criteria entry, ordered by sort then by id.
        """
        where, params = TagRepository._where(criteria)
        order = []
        for column, direction in sort or [("created_at", "ASC")]:
            if column not in TAG_SORT_COLUMNS or direction not in ("ASC", "DESC"):
                raise ValueError(f"Invalid sort: {column} {direction}")
            order.append(f"{column} {direction}")
        order.append("id ASC")

        with get_db_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                f"SELECT id, about, description, email, created_at FROM tags{where} "
                f"ORDER BY {', '.join(order)} LIMIT ? OFFSET ?",
                (*params, limit if limit > 0 else -1, skip)
            )
            rows = cursor.fetchall()
            return [_row_to_tag(row, TagRepository.get_categories_for_tag(row["id"], conn)) for row in rows]

    @staticmethod
    def count_tags(criteria: Optional[Dict[str, str]] = None) -> int:
        where, params = TagRepository._where(criteria)
        with get_db_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(f"SELECT COUNT(*) as count FROM tags{where}", params)
            return cursor.fetchone()["count"]

    @staticmethod
    def delete_tag(tag_id: str) -> bool:
        """
        Delete a tag and its category associations.

        Returns:
            True if a tag was deleted, False if none had this id
        """
        with get_db_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM tags WHERE id = ?", (tag_id,))
            deleted = cursor.rowcount > 0
            conn.commit()
            return deleted
