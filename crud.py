"""Data access for the books table.

Every statement goes through SQLAlchemy, so values are always sent as bound
parameters. Database failures are rolled back and re-raised as the errors
defined in ``errors``.
"""

import logging
from typing import Any

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

import models
from errors import BookNotFound, DuplicateBook, StorageError

logger = logging.getLogger(__name__)

BOOK_FIELDS = (
    "amazon_url",
    "author",
    "language",
    "pages",
    "publisher",
    "title",
    "year",
)


class BookRepository:
    def __init__(self, db: Session):
        self.db = db

    def _fail(self, action: str, exc: SQLAlchemyError) -> StorageError:
        self.db.rollback()
        logger.error("Failed to %s: %s", action, exc, exc_info=exc)
        return StorageError(f"Failed to {action}")

    def list_all(self) -> list[models.Book]:
        try:
            return self.db.query(models.Book).order_by(models.Book.title.asc()).all()
        except SQLAlchemyError as exc:
            raise self._fail("list books", exc) from exc

    def get_by_isbn(self, isbn: str) -> models.Book:
        try:
            db_book = self.db.query(models.Book).filter(models.Book.isbn == isbn).first()
        except SQLAlchemyError as exc:
            raise self._fail(f"fetch book {isbn}", exc) from exc

        if db_book is None:
            raise BookNotFound(isbn)
        return db_book

    def create(self, book: dict[str, Any]) -> models.Book:
        new_book = models.Book(isbn=book["isbn"], **{name: book[name] for name in BOOK_FIELDS})

        self.db.add(new_book)
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            logger.info("Rejected duplicate isbn %s", book["isbn"])
            raise DuplicateBook(book["isbn"]) from exc
        except SQLAlchemyError as exc:
            raise self._fail(f"create book {book['isbn']}", exc) from exc

        self.db.refresh(new_book)
        logger.info("Created book %s", new_book.isbn)
        return new_book

    def update(self, isbn: str, fields: dict[str, Any]) -> models.Book:
        values = {name: fields[name] for name in BOOK_FIELDS}
        try:
            matched = (
                self.db.query(models.Book)
                .filter(models.Book.isbn == isbn)
                .update(values, synchronize_session="fetch")
            )
            if not matched:
                self.db.rollback()
                raise BookNotFound(isbn)
            # read back inside the same transaction, detached so commit does not expire it
            db_book = (
                self.db.query(models.Book)
                .filter(models.Book.isbn == isbn)
                .populate_existing()
                .one()
            )
            self.db.expunge(db_book)
            self.db.commit()
        except SQLAlchemyError as exc:
            raise self._fail(f"update book {isbn}", exc) from exc

        logger.info("Updated book %s", isbn)
        return db_book

    def remove(self, isbn: str) -> None:
        try:
            deleted = (
                self.db.query(models.Book)
                .filter(models.Book.isbn == isbn)
                .delete(synchronize_session="fetch")
            )
            if not deleted:
                self.db.rollback()
                raise BookNotFound(isbn)
            self.db.commit()
        except SQLAlchemyError as exc:
            raise self._fail(f"delete book {isbn}", exc) from exc

        logger.info("Deleted book %s", isbn)
