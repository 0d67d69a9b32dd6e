"""Exceptions and structured load issues."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class WordpaceError(Exception):
    """Base class for all wordpace errors."""


class GoalError(WordpaceError):
    """A goal record is malformed or incomplete."""


class LedgerError(WordpaceError):
    """A ledger write would rewrite a day that is already closed."""


class ProjectError(WordpaceError):
    """A project folder is missing or cannot be used."""


class LoadIssue(BaseModel):
    """A single problem encountered while reading a project file."""

    source: str
    error_type: str = "unknown"
    message: str = ""
    timestamp: datetime = Field(default_factory=datetime.now)

    def summary_text(self) -> str:
        return f"{self.source}: {self.error_type}: {self.message}"
