"""Budget validation oracle for selection results."""

from __future__ import annotations

from typing import Any, Dict, Optional, TYPE_CHECKING

from . import Oracle, OracleReport, OracleResult
from ..selector.candidates import estimate_document_characters

if TYPE_CHECKING:
    from ..selector.base import SelectionResult


class BudgetOracle(Oracle):
    """Oracle for validating the character budget and its accounting."""

    category = "budget"

    def name(self) -> str:
        return "budget_validation"

    def validate(
        self, result: 'SelectionResult', context: Optional[Dict[str, Any]] = None
    ) -> OracleReport:
        errors = []
        details: Dict[str, Any] = {
            "max_characters": result.max_characters,
            "total_characters": result.total_characters,
        }

        if result.max_characters <= 0:
            if result.selected_documents:
                errors.append(
                    f"{len(result.selected_documents)} documents selected with a "
                    f"non-positive budget"
                )
            else:
                return OracleReport(
                    oracle_name=self.name(),
                    result=OracleResult.SKIP,
                    message="No character budget set, skipping budget validation",
                    details=details,
                )

        # Hard constraint: zero overflow
        if result.total_characters > result.max_characters:
            overflow = result.total_characters - result.max_characters
            errors.append(
                f"Budget overflow: {result.total_characters} > {result.max_characters} "
                f"characters (+{overflow})"
            )
            details["budget_overflow"] = overflow

        # Accounting must match the selected documents
        recomputed = sum(estimate_document_characters(d) for d in result.selected_documents)
        details["recomputed_characters"] = recomputed
        if recomputed != result.total_characters:
            errors.append(
                f"Character sum mismatch: documents={recomputed}, "
                f"reported={result.total_characters}"
            )

        if result.max_characters > 0:
            expected = result.total_characters / result.max_characters
            reported = result.optimization.space_utilization
            if abs(expected - reported) > 1e-9:
                errors.append(
                    f"Space utilization mismatch: calculated={expected:.4f}, "
                    f"reported={reported:.4f}"
                )

        if errors:
            return OracleReport(
                oracle_name=self.name(),
                result=OracleResult.FAIL,
                message=f"Budget validation failed: {'; '.join(errors)}",
                details=details,
            )
        return OracleReport(
            oracle_name=self.name(),
            result=OracleResult.PASS,
            message=(
                f"Budget validation passed: {result.total_characters}/"
                f"{result.max_characters} characters"
            ),
            details=details,
        )
