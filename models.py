from sqlalchemy import Column, Integer, String

from database import Base


class Book(Base):
    __tablename__ = "books"

    isbn = Column(String, primary_key=True)
    amazon_url = Column(String, nullable=False)
    author = Column(String, nullable=False)
    language = Column(String, nullable=False)
    pages = Column(Integer, nullable=False)
    publisher = Column(String, nullable=False)
    title = Column(String, nullable=False)
    year = Column(Integer, nullable=False)

    def __repr__(self) -> str:
        return f"<Book isbn={self.isbn!r} title={self.title!r}>"
