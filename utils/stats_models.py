#!/usr/bin/env python3
from __future__ import annotations

from typing import Dict, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field

STAT_FIELDS: Tuple[str, ...] = ("regions", "subregions", "countries", "states", "cities")


class StatRecord(BaseModel):
	"""Database totals parsed from the upstream README. None means not found."""

	model_config = ConfigDict(extra="forbid", frozen=True)

	regions: Optional[int] = Field(None, ge=0)
	subregions: Optional[int] = Field(None, ge=0)
	countries: Optional[int] = Field(None, ge=0)
	states: Optional[int] = Field(None, ge=0)
	cities: Optional[int] = Field(None, ge=0)

	def as_dict(self) -> Dict[str, Optional[int]]:
		return {name: getattr(self, name) for name in STAT_FIELDS}

	def found_count(self) -> int:
		return sum(1 for v in self.as_dict().values() if v is not None)

	def is_empty(self) -> bool:
		return self.found_count() == 0
