"""
Collection integrity report.

Checks a loaded collection for problems load does not reject:
- Aliases whose parent chain is broken (missing parent)
- Aliases whose chain is deeper than MAX_ALIAS_DEPTH or cyclic
- Icons without a body
- Char index entries pointing to names that do not exist

Problems are reported, not fixed; nothing here blocks using the collection.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from iconset.collection.store import MAX_ALIAS_DEPTH, Collection

logger = logging.getLogger(__name__)


class ValidationSeverity(Enum):
    """Severity level of validation issues."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass
class ValidationIssue:
    """A single problem found in the collection."""
    code: str
    severity: ValidationSeverity
    message: str
    count: int = 1
    details: List[str] = field(default_factory=list)  # offending names

    def __str__(self) -> str:
        if self.count > 1:
            return f"[{self.severity.value.upper()}] {self.code}: {self.message} ({self.count} occurrences)"
        return f"[{self.severity.value.upper()}] {self.code}: {self.message}"


@dataclass
class ValidationReport:
    """Complete validation report for a collection."""
    prefix: Optional[str]
    n_icons: int
    n_aliases: int
    n_chars: int
    issues: List[ValidationIssue] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def warnings(self) -> List[ValidationIssue]:
        """Get all warning-level issues."""
        return [i for i in self.issues if i.severity == ValidationSeverity.WARNING]

    @property
    def errors(self) -> List[ValidationIssue]:
        """Get all error-level issues."""
        return [i for i in self.issues if i.severity == ValidationSeverity.ERROR]

    def summary(self) -> str:
        """Generate human-readable summary."""
        lines = [
            "Collection Validation Report",
            "=" * 40,
            f"Prefix: {self.prefix}",
            f"Icons: {self.n_icons}",
            f"Aliases: {self.n_aliases}",
            f"Chars: {self.n_chars}",
        ]

        if self.issues:
            lines.append("")
            lines.append("Issues:")
            for issue in self.issues:
                lines.append(f"  - {issue}")

        lines.append("")
        lines.append(f"Overall: {'VALID' if self.is_valid else 'INVALID'}")
        return "\n".join(lines)


def _chain_status(name: str, icons: Dict, aliases: Dict) -> str:
    """Follow an alias chain: 'ok', 'broken' or 'too_deep'."""
    parent = aliases[name]['parent']
    for _ in range(MAX_ALIAS_DEPTH):
        if parent in icons:
            return 'ok'
        if parent not in aliases:
            return 'broken'
        parent = aliases[parent]['parent']
    return 'too_deep'


def _issue(code: str, severity: ValidationSeverity, message: str,
           names: List[str]) -> ValidationIssue:
    return ValidationIssue(code=code, severity=severity, message=message,
                           count=len(names), details=names[:10])


def validate_collection(collection: Collection) -> ValidationReport:
    """Check a collection's structure.

    Args:
        collection: Loaded collection

    Returns:
        ValidationReport with all findings; an unloaded collection yields an
        empty report with a NOT_LOADED error
    """
    snapshot = collection.get_icons()
    if snapshot is None:
        return ValidationReport(
            prefix=None, n_icons=0, n_aliases=0, n_chars=0,
            issues=[ValidationIssue("NOT_LOADED", ValidationSeverity.ERROR,
                                    "Collection is not loaded")],
        )

    icons = snapshot['icons']
    aliases = snapshot.get('aliases', {})
    chars = snapshot.get('chars', {})
    issues: List[ValidationIssue] = []

    logger.debug("Validating collection %r: %d icons, %d aliases",
                 snapshot['prefix'], len(icons), len(aliases))

    no_body = [name for name, item in icons.items() if not isinstance(item.get('body'), str)]
    if no_body:
        issues.append(_issue("MISSING_BODY", ValidationSeverity.ERROR,
                             f"{len(no_body)} icons have no body", no_body))

    broken: List[str] = []
    too_deep: List[str] = []
    for name in aliases:
        status = _chain_status(name, icons, aliases)
        if status == 'broken':
            broken.append(name)
        elif status == 'too_deep':
            too_deep.append(name)

    if broken:
        issues.append(_issue("BROKEN_ALIAS", ValidationSeverity.WARNING,
                             f"{len(broken)} aliases have a missing parent", broken))
    if too_deep:
        issues.append(_issue("ALIAS_TOO_DEEP", ValidationSeverity.WARNING,
                             f"{len(too_deep)} aliases are nested deeper than "
                             f"{MAX_ALIAS_DEPTH} levels or cyclic", too_deep))

    dangling = [char for char, target in chars.items()
                if target not in icons and target not in aliases]
    if dangling:
        issues.append(_issue("DANGLING_CHAR", ValidationSeverity.WARNING,
                             f"{len(dangling)} chars point to missing icons", dangling))

    for issue in issues:
        logger.warning("%s", issue)

    report = ValidationReport(
        prefix=snapshot['prefix'],
        n_icons=len(icons),
        n_aliases=len(aliases),
        n_chars=len(chars),
        issues=issues,
    )
    logger.info("Validation complete: %s", "VALID" if report.is_valid else "INVALID")
    return report
