import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, status
from sqlalchemy.orm import Session

import schemas
from crud import BookRepository
from database import get_db
from validation import validate_book

router = APIRouter(prefix="/books", tags=["Books"])
logger = logging.getLogger(__name__)


def get_repository(db: Session = Depends(get_db)) -> BookRepository:
    return BookRepository(db)


def _validated(payload: Any, kind: str) -> dict:
    result = validate_book(payload, kind)
    if not result.valid:
        logger.info("Rejected %s payload: %s", kind, result.errors)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=result.errors)
    return result.data


# List Books
@router.get("/", response_model=schemas.BookListResponse)
def list_books(repo: BookRepository = Depends(get_repository)):
    return {"books": repo.list_all()}


# Get Book
@router.get("/{isbn}", response_model=schemas.BookResponse)
def get_book(isbn: str, repo: BookRepository = Depends(get_repository)):
    return {"book": repo.get_by_isbn(isbn)}


# Add Book
@router.post("/", response_model=schemas.BookResponse, status_code=status.HTTP_201_CREATED)
def add_book(
    payload: Any = Body(default=None),
    repo: BookRepository = Depends(get_repository),
):
    book = _validated(payload, "create")
    return {"book": repo.create(book)}


@router.put("/{isbn}", response_model=schemas.BookResponse)
def update_book(
    isbn: str,
    payload: Any = Body(default=None),
    repo: BookRepository = Depends(get_repository),
):
    fields = _validated(payload, "update")
    return {"book": repo.update(isbn, fields)}


@router.delete("/{isbn}", response_model=schemas.MessageResponse)
def delete_book(isbn: str, repo: BookRepository = Depends(get_repository)):
    repo.remove(isbn)
    return {"message": "Book deleted"}
