from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .constants import STATE_FINAL, STATE_TRANSLATED
from .errors import MessageSyntaxError, StructuralError
from .logger import get_logger
from .validator import Validator

logger = get_logger(__name__)


@dataclass
class QAIssue:
    type: str  # validation key (placeholderAdded, tagRemoved, ...), 'invalid' or 'empty'
    severity: str  # 'error', 'warning'
    message: str
    details: Any = None


@dataclass
class QAResult:
    status: str  # 'ok', 'warning', 'error'
    issues: List[QAIssue] = field(default_factory=list)
    tag_stats: str = ""
    qa_details: Dict[str, Any] = field(default_factory=dict)


class QAChecker:
    """Checks the target of a trans-unit against its source."""

    def __init__(self):
        self.validator = Validator()

    def check_unit(self, unit) -> QAResult:
        source = unit.source_content_normalized()
        target_content = unit.target_content()
        if source is None or not target_content:
            return self._check_empty(unit)

        try:
            target = unit.target_content_normalized()
        except (MessageSyntaxError, StructuralError) as e:
            logger.debug(f"trans-unit {unit.id}: target not parseable: {e}")
            issue = QAIssue(type="invalid", severity="error", message=f"Invalid target: {e}", details=str(e))
            return QAResult(status="error", issues=[issue], qa_details={"invalid": str(e)})

        issues = []
        qa_details = {}
        for severity, findings in (("error", self.validator.validate(target)),
                                   ("warning", self.validator.validate_warnings(target))):
            for key, message in (findings or {}).items():
                issues.append(QAIssue(type=key, severity=severity, message=message))
                qa_details[key] = message

        source_count = len(Validator.placeholders(source)) + len(Validator.tags(source))
        target_count = len(Validator.placeholders(target)) + len(Validator.tags(target))
        tag_stats = f"TAG: {target_count}/{source_count}"

        if any(issue.severity == "error" for issue in issues):
            status = "error"
        elif issues:
            status = "warning"
        else:
            status = "ok"
        return QAResult(status=status, issues=issues, tag_stats=tag_stats, qa_details=qa_details)

    @staticmethod
    def _check_empty(unit) -> QAResult:
        state: Optional[str] = unit.target_state()
        if not unit.target_content() and state in (STATE_TRANSLATED, STATE_FINAL):
            issue = QAIssue(type="empty", severity="warning", message="Empty translation")
            return QAResult(status="warning", issues=[issue])
        return QAResult(status="ok")
