"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidFinancialDataError(DomainException):
    """Financial input data is invalid and the computation must be rejected"""

    pass


class InvalidCostItemError(InvalidFinancialDataError):
    """Cost item amount is negative or not a finite number"""

    def __init__(self, label: str, amount: object):
        self.label = label
        self.amount = amount
        super().__init__(f"Invalid amount {amount!r} for cost item {label!r}")


class UnknownCategoryError(InvalidFinancialDataError):
    """Cost category does not map to any known cost bucket"""

    def __init__(self, category: str):
        self.category = category
        super().__init__(f"Unknown cost category {category!r}")


class DuplicatePlanError(InvalidFinancialDataError):
    """Two pricing plans share the same key"""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Duplicate pricing plan key {key!r}")
