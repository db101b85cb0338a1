"""
Catalog repositories
"""
from wms.models import Brand, Category, Location, Product, User
from wms.repositories.base import SoftDeleteRepository


class BrandRepository(SoftDeleteRepository):
    model = Brand


class CategoryRepository(SoftDeleteRepository):
    model = Category


class ProductRepository(SoftDeleteRepository):
    model = Product


class LocationRepository(SoftDeleteRepository):
    model = Location


class UserRepository:
    """Users are not soft-deleted through the API; lookups only skip deleted rows"""

    def __init__(self, db):
        self.db = db

    def get(self, user_id: int):
        return self.db.query(User).filter(User.id == user_id, User.deleted_at.is_(None)).first()

    def get_by_email(self, email: str):
        return self.db.query(User).filter(
            User.email == email.strip().lower(),
            User.deleted_at.is_(None),
        ).first()

    def email_taken(self, email: str) -> bool:
        return self.db.query(User.id).filter(User.email == email.strip().lower()).first() is not None

    def add(self, user: User) -> User:
        self.db.add(user)
        self.db.flush()
        return user
