"""Domain-specific exceptions."""


class FTPPricingError(Exception):
    """Base exception for the pricing package."""

    pass


class CurveDefinitionError(FTPPricingError):
    """Curve knots are empty, unsorted or duplicated."""

    pass


class InvalidTransactionError(FTPPricingError):
    """Transaction fields are malformed (negative amounts, NaN, unknown enums)."""

    def __init__(self, issues):
        self.issues = list(issues)
        super().__init__("Invalid transaction: " + "; ".join(self.issues))


class InvalidApprovalMatrixError(FTPPricingError):
    """Approval thresholds are not ordered auto >= L1 >= L2."""

    def __init__(self, issues):
        self.issues = list(issues)
        super().__init__("Invalid approval matrix: " + "; ".join(self.issues))
