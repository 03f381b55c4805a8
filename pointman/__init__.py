"""
Django Pointman - QR points redemption.

Usage:
    from pointman import ScanService, PointsService

    result = ScanService.redeem(customer.pk, "QR ID: A1\nBatch ID: B1\nPoints: 50")
    if result.success:
        print(result.total_points)

    PointsService.adjust("maria", 100, operation="add")
"""


def __getattr__(name):
    if name == "ScanService":
        from pointman.service import ScanService

        return ScanService
    if name == "PointsService":
        from pointman.service import PointsService

        return PointsService
    if name == "PointmanError":
        from pointman.exceptions import PointmanError

        return PointmanError
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["ScanService", "PointsService", "PointmanError"]
__version__ = "0.1.0"
