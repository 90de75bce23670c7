"""Selection integrity oracles."""

from __future__ import annotations

from collections import Counter
from typing import Any, Dict, Optional, TYPE_CHECKING

from . import Oracle, OracleReport, OracleResult

if TYPE_CHECKING:
    from ..selector.base import SelectionResult


class UniquenessOracle(Oracle):
    """No document may appear twice in a selection."""

    category = "selection"

    def name(self) -> str:
        return "selection_uniqueness"

    def validate(
        self, result: 'SelectionResult', context: Optional[Dict[str, Any]] = None
    ) -> OracleReport:
        counts = Counter(result.selected_ids)
        duplicates = sorted(doc_id for doc_id, count in counts.items() if count > 1)

        if duplicates:
            return OracleReport(
                oracle_name=self.name(),
                result=OracleResult.FAIL,
                message=f"Duplicate documents in selection: {', '.join(duplicates)}",
                details={"duplicates": duplicates},
            )
        return OracleReport(
            oracle_name=self.name(),
            result=OracleResult.PASS,
            message=f"All {len(counts)} selected documents are unique",
        )
