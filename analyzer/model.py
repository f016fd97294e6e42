from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field


MAX_COMPLEXITY = 10


class LanguageTag(str, Enum):
	PYTHON = "python"
	JAVASCRIPT = "javascript"
	TYPESCRIPT = "typescript"
	JAVA = "java"
	CPP = "cpp"
	HTML = "html"
	CSS = "css"
	TEXT = "text"

	@classmethod
	def _missing_(cls, value: object) -> Optional["LanguageTag"]:
		# Unrecognized tags fall back to the generic rule set
		if isinstance(value, str):
			lowered = value.strip().lower()
			for member in cls:
				if member.value == lowered:
					return member
		return cls.TEXT


class EntityKind(str, Enum):
	FUNCTION = "function"
	CLASS = "class"
	VARIABLE = "variable"


class Entity(BaseModel):
	model_config = ConfigDict(frozen=True)

	name: str
	line: int = Field(ge=1)
	kind: EntityKind


class AnalysisResult(BaseModel):
	language: LanguageTag
	line_count: int = Field(default=0, ge=0)
	functions: List[Entity] = []
	classes: List[Entity] = []
	variables: List[Entity] = []
	loop_count: int = Field(default=0, ge=0)
	conditional_count: int = Field(default=0, ge=0)

	@computed_field  # type: ignore[misc]
	@property
	def complexity(self) -> int:
		score = (
			len(self.functions)
			+ len(self.classes) * 2
			+ self.conditional_count
			+ self.loop_count
		)
		return min(MAX_COMPLEXITY, score)


class FileInfo(BaseModel):
	path: str
	rel_path: str
	language: LanguageTag


class FileAnalysis(BaseModel):
	path: str
	rel_path: str
	result: AnalysisResult
