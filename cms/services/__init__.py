"""Domain services."""

from cms.services.categories import CategoryService
from cms.services.category_integrity import CategoryIntegrityChecker
from cms.services.container import ServiceContainer
from cms.services.counters import CounterMaintainer
from cms.services.pagination import PageParams, build_pagination, to_page
from cms.services.post_lifecycle import PostLifecycleManager, calculate_reading_time
from cms.services.slug import ensure_unique, generate_slug
from cms.services.users import UserService

__all__ = [
    "CategoryIntegrityChecker",
    "CategoryService",
    "CounterMaintainer",
    "PageParams",
    "PostLifecycleManager",
    "ServiceContainer",
    "UserService",
    "build_pagination",
    "calculate_reading_time",
    "ensure_unique",
    "generate_slug",
    "to_page",
]
