from typing import Dict, Iterable, Optional, Tuple

from ..logger import get_logger
from ..qa import QAChecker, QAResult

logger = get_logger(__name__)


class QAService:
    """
    Runs the QA checks on all trans-units of a translation file.
    Results are kept per unit id, the caller decides what to do with them.
    """
    def __init__(self):
        self.checker = QAChecker()
        self.results: Dict[str, QAResult] = {}

    @staticmethod
    def check_batch(units: Iterable) -> Tuple[int, int]:
        """
        Static method to run QA check on a batch of units.
        Convenience wrapper around run_qa.
        """
        service = QAService()
        return service.run_qa(units)

    def run_qa(self, units: Iterable) -> Tuple[int, int]:
        """
        Runs QA check on all units (a translation file or any iterable of trans-units).
        Returns (error_count, warning_count), counted per unit.
        """
        error_count = 0
        warning_count = 0
        self.results = {}

        for unit in units:
            result = self.checker.check_unit(unit)
            self.results[unit.id] = result
            if result.status == "error":
                error_count += 1
            elif result.status == "warning":
                warning_count += 1

        logger.debug(f"QA: {len(self.results)} units, {error_count} errors, {warning_count} warnings")
        return error_count, warning_count

    def result_for(self, unit_id: str) -> Optional[QAResult]:
        return self.results.get(unit_id)

    def get_readiness_stats(self) -> Tuple[int, int, int]:
        """
        Returns stats of the last run: (error_count, warning_count, health_score)
        """
        error_count = 0
        warning_count = 0
        for result in self.results.values():
            if result.status == "error":
                error_count += 1
            elif result.status == "warning":
                warning_count += 1

        if self.results:
            health = max(0, 100 - (error_count * 5) - (warning_count * 1))
        else:
            health = 100

        return error_count, warning_count, health
