from healthcare_platform.schemas.common import Page, Pagination, SearchRequest

__all__ = ["Page", "Pagination", "SearchRequest"]
