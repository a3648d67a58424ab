"""Cost bucket registry and external category mapping"""

from enum import Enum
from typing import Dict, List

from bmc_finance.domain.exceptions import UnknownCategoryError


class CostType(str, Enum):
    """Whether a cost is incurred regardless of client volume"""

    FIXED = "fixed"
    VARIABLE = "variable"


class CostBucket(str, Enum):
    """Closed set of cost buckets the engine aggregates into"""

    LEADERSHIP = "leadership"
    TECHNICAL = "technical"
    CONTENT = "content"
    MARKETING_SALES = "marketingSales"
    OPERATIONS = "operations"
    INFRASTRUCTURE = "infrastructure"
    OVERHEAD = "overhead"
    MARKETING = "marketing"

    @property
    def cost_type(self) -> CostType:
        return CostType.VARIABLE if self in _VARIABLE_BUCKETS else CostType.FIXED


_VARIABLE_BUCKETS = frozenset({CostBucket.MARKETING})

# External labels (admin category keys) that differ from the internal bucket key
CATEGORY_ALIASES: Dict[str, CostBucket] = {
    "marketing-sales": CostBucket.MARKETING_SALES,
    "marketing_sales": CostBucket.MARKETING_SALES,
    "marketing & sales": CostBucket.MARKETING_SALES,
    "team-leadership": CostBucket.LEADERSHIP,
    "tech": CostBucket.TECHNICAL,
    "advertising": CostBucket.MARKETING,
    "admin": CostBucket.OVERHEAD,
}

# Sub-categories registered under a parent bucket
SUBCATEGORY_PARENTS: Dict[str, CostBucket] = {
    "hosting": CostBucket.INFRASTRUCTURE,
    "database": CostBucket.INFRASTRUCTURE,
    "storage": CostBucket.INFRASTRUCTURE,
    "seo-tools": CostBucket.INFRASTRUCTURE,
    "analytics": CostBucket.INFRASTRUCTURE,
    "development": CostBucket.INFRASTRUCTURE,
    "monitoring": CostBucket.INFRASTRUCTURE,
    "project-management": CostBucket.INFRASTRUCTURE,
}


def _normalize(category: str) -> str:
    return "-".join(category.strip().lower().replace("_", " ").split())


_LOOKUP: Dict[str, CostBucket] = {}
for _bucket in CostBucket:
    _LOOKUP[_normalize(_bucket.value)] = _bucket
    _LOOKUP[_normalize(_bucket.name)] = _bucket
for _label, _bucket in {**CATEGORY_ALIASES, **SUBCATEGORY_PARENTS}.items():
    _LOOKUP[_normalize(_label)] = _bucket


def resolve_bucket(category: str) -> CostBucket:
    """
    Map an internal key, external label or sub-category to its cost bucket.

    Matching ignores case and treats hyphens, underscores and spaces alike,
    so "marketingSales", "marketing-sales" and "MARKETING_SALES" all resolve.

    Raises:
        UnknownCategoryError: Category is not registered
    """
    if isinstance(category, CostBucket):
        return category
    if not isinstance(category, str) or not category.strip():
        raise UnknownCategoryError(str(category))

    bucket = _LOOKUP.get(_normalize(category))
    if bucket is None:
        raise UnknownCategoryError(category)
    return bucket


def fixed_buckets() -> List[CostBucket]:
    """Fixed buckets in presentation order"""
    return [b for b in CostBucket if b.cost_type is CostType.FIXED]


def variable_buckets() -> List[CostBucket]:
    """Variable buckets in presentation order"""
    return [b for b in CostBucket if b.cost_type is CostType.VARIABLE]
