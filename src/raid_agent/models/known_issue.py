"""
Known-issue catalog models.

Defines the Pydantic models for reference issues that can be matched
against problem descriptions and tool output.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class IssueCategory(str, Enum):
	"""Area of the system an issue belongs to."""

	SYSTEM = "system"
	CONTAINER = "container"
	KUBERNETES = "kubernetes"
	CGROUPS = "cgroups"
	SYSTEMD = "systemd"
	JOURNAL = "journal"
	NETWORK = "network"
	STORAGE = "storage"
	SECURITY = "security"
	PERFORMANCE = "performance"
	CONFIGURATION = "configuration"


class IssueSeverity(str, Enum):
	"""Impact level of an issue."""

	CRITICAL = "critical"
	HIGH = "high"
	MEDIUM = "medium"
	LOW = "low"
	INFO = "info"


class KnownIssue(BaseModel):
	"""
	A reference issue with matching hints and remediation steps.

	Attributes:
		id: Stable identifier (kebab-case).
		title: Short human-readable title.
		description: One-paragraph explanation.
		category: Area of the system.
		severity: Impact level.
		patterns: Phrases that strongly indicate the issue.
		keywords: Single words associated with the issue.
		symptoms: Observable symptoms.
		verification_commands: Commands that confirm the issue.
		fix_commands: Commands or steps that resolve it.
		prerequisites: Conditions required for the issue to apply.
		distribution_specific: Linux distribution it is limited to, if any.
		tags: Free-form tags.
		next_steps: Steps to take before attempting a fix.
	"""

	id: str
	title: str
	description: str
	category: IssueCategory
	severity: IssueSeverity
	patterns: List[str] = Field(default_factory=list)
	keywords: List[str] = Field(default_factory=list)
	symptoms: List[str] = Field(default_factory=list)
	verification_commands: List[str] = Field(default_factory=list)
	fix_commands: List[str] = Field(default_factory=list)
	prerequisites: List[str] = Field(default_factory=list)
	distribution_specific: Optional[str] = None
	tags: List[str] = Field(default_factory=list)
	next_steps: List[str] = Field(default_factory=list)

	def format_for_prompt(self) -> str:
		"""Render the issue as a reference block for the provider."""
		return ("KNOWN ISSUE: {title}\n"
		        "Category: {category}\n"
		        "Severity: {severity}\n"
		        "Description: {description}\n"
		        "Next Steps:\n{next_steps}\n"
		        "Verification Commands:\n{verify}\n"
		        "Fix Commands:\n{fix}\n").format(
		            title=self.title,
		            category=self.category.value,
		            severity=self.severity.value,
		            description=self.description,
		            next_steps="\n".join(self.next_steps),
		            verify="\n".join(self.verification_commands),
		            fix="\n".join(self.fix_commands),
		        )


class IssueMatch(BaseModel):
	"""A known issue scored against some text."""

	issue: KnownIssue
	confidence: float = Field(ge=0.0)
	matched_patterns: List[str] = Field(default_factory=list)
	matched_keywords: List[str] = Field(default_factory=list)


__all__ = ["IssueCategory", "IssueSeverity", "KnownIssue", "IssueMatch"]
