from enum import Enum
from dataclasses import dataclass
from typing import List, Optional


class DiagnosticLevel(Enum):
    WARNING = "warning"


@dataclass
class Diagnostic:
    level: DiagnosticLevel
    message: str
    scope: Optional[str] = None

    def format(self) -> str:
        result = f"{self.level.value}: {self.message}"
        if self.scope:
            result = f"{self.scope}: {result}"
        return result


class DiagnosticEngine:
    def __init__(self):
        self.diagnostics: List[Diagnostic] = []
        self.warning_count = 0

    def report(self, diag: Diagnostic):
        self.diagnostics.append(diag)
        if diag.level == DiagnosticLevel.WARNING:
            self.warning_count += 1

    def warning(self, message: str, scope: Optional[str] = None):
        self.report(Diagnostic(DiagnosticLevel.WARNING, message, scope))

    def extend(self, other: 'DiagnosticEngine'):
        """Take over the findings of a finished child translation"""
        for diag in other.diagnostics:
            self.report(diag)

    def has_warnings(self) -> bool:
        return self.warning_count > 0

    def warnings(self) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.level == DiagnosticLevel.WARNING]
