from pydantic import BaseModel, ConfigDict


class BookOut(BaseModel):
    isbn: str
    amazon_url: str
    author: str
    language: str
    pages: int
    publisher: str
    title: str
    year: int

    model_config = ConfigDict(from_attributes=True)


class BookResponse(BaseModel):
    book: BookOut


class BookListResponse(BaseModel):
    books: list[BookOut]


class MessageResponse(BaseModel):
    message: str
