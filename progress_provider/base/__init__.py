"""Base abstractions for progress reporting collaborators."""

from .report_factory import (
    ProgressReportFactory,
    ObjectProgressReportFactory,
    TextProgressReportFactory,
    create_report_factory
)
from .navigation_service import NavigationService, NullNavigationService

__all__ = [
    'ProgressReportFactory',
    'ObjectProgressReportFactory',
    'TextProgressReportFactory',
    'create_report_factory',
    'NavigationService',
    'NullNavigationService'
]
