"""Review report generation for reconciled parts."""

from .review_report import (
    ReviewReportGenerator,
    ReviewReport,
    generate_review,
    generate_review_without_llm,
)

__all__ = [
    "ReviewReportGenerator",
    "ReviewReport",
    "generate_review",
    "generate_review_without_llm",
]
