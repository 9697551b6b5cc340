"""
Known-issue database.

Loads a YAML catalog of reference issues and scores them against free
text (problem statements or tool output). Matching is a plain
case-insensitive substring test, weighted by what matched:

	pattern  0.4
	symptom  0.3
	keyword  0.2
	tag      0.1
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional

import yaml
from pydantic import TypeAdapter

from raid_agent.core.exceptions import KnownIssueNotFound
from raid_agent.models.known_issue import IssueCategory, IssueMatch, KnownIssue
from raid_agent.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_ISSUES_FILE = Path(__file__).resolve().parent.parent / "data" / \
    "known_issues.yaml"

PATTERN_WEIGHT = 0.4
SYMPTOM_WEIGHT = 0.3
KEYWORD_WEIGHT = 0.2
TAG_WEIGHT = 0.1
MATCH_THRESHOLD = 0.1
RELEVANCE_THRESHOLD = 0.3

ENRICH_HEADER = "KNOWN ISSUES THAT MAY BE RELEVANT:"
ENRICH_FOOTER = "Consider these known issues when analyzing the system state."

_ISSUES = TypeAdapter(list[KnownIssue])


def load_issues(path: Path | str) -> list[KnownIssue]:
	"""
	Load and validate a YAML issue catalog.

	The file holds either a list of issues or a mapping with an
	``issues`` key.

	Raises:
		FileNotFoundError: If path does not exist.
		ValueError: If the document has an unexpected shape.
		pydantic.ValidationError: If an issue is malformed.
	"""
	data = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
	if isinstance(data, dict):
		data = data.get("issues")
	if data is None:
		return []
	if not isinstance(data, list):
		raise ValueError(f"{path}: expected a list of issues")
	return _ISSUES.validate_python(data)


def _hits(candidates: Iterable[str], text: str) -> list[str]:
	return [c for c in candidates if c and c.lower() in text]


class KnownIssuesDatabase:
	"""In-memory catalog of known issues keyed by id."""

	def __init__(self, issues: Iterable[KnownIssue] = ()) -> None:
		self._issues: dict[str, KnownIssue] = {}
		for issue in issues:
			self.add_issue(issue)

	@classmethod
	def from_file(cls, path: Path | str | None = None) -> "KnownIssuesDatabase":
		"""Build a database from a YAML file (bundled catalog by default)."""
		source = Path(path) if path else DEFAULT_ISSUES_FILE
		issues = load_issues(source)
		logger.debug("loaded %d known issues from %s", len(issues), source)
		return cls(issues)

	def __len__(self) -> int:
		return len(self._issues)

	def add_issue(self, issue: KnownIssue) -> None:
		"""Insert or replace an issue."""
		self._issues[issue.id] = issue

	def all_issues(self) -> list[KnownIssue]:
		"""Return all issues sorted by id."""
		return [self._issues[k] for k in sorted(self._issues)]

	def get_issue(self, issue_id: str) -> KnownIssue:
		"""
		Return the issue with issue_id.

		Raises:
			KnownIssueNotFound: If no such issue exists.
		"""
		try:
			return self._issues[issue_id]
		except KeyError:
			raise KnownIssueNotFound(issue_id) from None

	def search_issues(self, query: str) -> list[KnownIssue]:
		"""
		Find issues by free-text query.

		An issue matches when the query occurs in its title or description,
		or when one of its keywords or tags occurs in the query.
		"""
		q = query.strip().lower()
		if not q:
			return []
		found = []
		for issue in self.all_issues():
			if (q in issue.title.lower() or q in issue.description.lower()
			    or _hits(issue.keywords, q) or _hits(issue.tags, q)):
				found.append(issue)
		return found

	def match_issues(
	    self,
	    text: str,
	    category: Optional[IssueCategory] = None,
	) -> list[IssueMatch]:
		"""
		Score every issue against text.

		Parameters:
			text: Problem statement or command output.
			category: Restrict matching to one category.

		Returns:
			Matches scoring above MATCH_THRESHOLD, best first.
		"""
		lowered = text.lower()
		matches: list[IssueMatch] = []
		for issue in self.all_issues():
			if category is not None and issue.category != category:
				continue
			patterns = _hits(issue.patterns, lowered)
			keywords = _hits(issue.keywords, lowered)
			confidence = (PATTERN_WEIGHT * len(patterns) +
			              KEYWORD_WEIGHT * len(keywords) +
			              SYMPTOM_WEIGHT * len(_hits(issue.symptoms, lowered)) +
			              TAG_WEIGHT * len(_hits(issue.tags, lowered)))
			if confidence > MATCH_THRESHOLD:
				matches.append(
				    IssueMatch(issue=issue,
				               confidence=round(confidence, 4),
				               matched_patterns=patterns,
				               matched_keywords=keywords))
		matches.sort(key=lambda m: m.confidence, reverse=True)
		return matches

	def relevant_issues(
	    self,
	    text: str,
	    category: Optional[IssueCategory] = None,
	) -> list[KnownIssue]:
		"""Return issues whose match confidence exceeds RELEVANCE_THRESHOLD."""
		return [
		    m.issue for m in self.match_issues(text, category)
		    if m.confidence > RELEVANCE_THRESHOLD
		]

	def enrich(self, text: str) -> str:
		"""
		Append a reference block of relevant issues to text.

		Returns text unchanged when nothing is relevant.
		"""
		relevant = self.relevant_issues(text)
		if not relevant:
			return text
		logger.info("enriching problem with %d known issues", len(relevant))
		lines = [text, "", ENRICH_HEADER]
		lines.extend(f"- {i.title}: {i.description}" for i in relevant)
		lines.extend(["", ENRICH_FOOTER])
		return "\n".join(lines)


__all__ = [
    "KnownIssuesDatabase",
    "load_issues",
    "DEFAULT_ISSUES_FILE",
    "ENRICH_HEADER",
    "RELEVANCE_THRESHOLD",
]
