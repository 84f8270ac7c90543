from fintrack.domains.categories.services import TransactionCategoryService

__all__ = ["TransactionCategoryService"]
