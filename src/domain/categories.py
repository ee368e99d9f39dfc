"""
Category domain service - Admin management of admission tiers.

Thin pass-through to the category repository with the same collect-all
validation used for registrations.
"""

import logging
from dataclasses import dataclass

from .exceptions import CategoryValidationFailed, NotFoundError
from .models import Category, CategoryInput
from .ports import CategoryRepository
from .validation import validate_category

logger = logging.getLogger(__name__)


@dataclass
class CategoryService:
    """Domain service for category CRUD."""

    repository: CategoryRepository

    def list_categories(self) -> list[Category]:
        return self.repository.list_all()

    def add_category(self, data: CategoryInput) -> Category:
        """
        Create a category.

        Raises:
            CategoryValidationFailed: If name or description is too short
        """
        self._validate(data)
        category = self.repository.add(data)
        logger.info("Category added: id=%s", category.id)
        return category

    def update_category(self, category_id: str, data: CategoryInput) -> Category:
        """
        Replace a category's name and description.

        Raises:
            CategoryValidationFailed: If name or description is too short
            NotFoundError: If no category has that id
        """
        self._validate(data)
        category = self.repository.update(category_id, data)
        if category is None:
            raise NotFoundError(category_id)
        logger.info("Category updated: id=%s", category_id)
        return category

    def delete_category(self, category_id: str) -> None:
        """
        Delete a category. Existing registrations keep the raw id.

        Raises:
            NotFoundError: If no category has that id
        """
        if not self.repository.delete(category_id):
            raise NotFoundError(category_id)
        logger.info("Category deleted: id=%s", category_id)

    def _validate(self, data: CategoryInput) -> None:
        outcome = validate_category(data)
        if not outcome.is_valid:
            raise CategoryValidationFailed(outcome.errors)
