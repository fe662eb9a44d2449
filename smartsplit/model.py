from __future__ import annotations

from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class RelationBase(BaseModel):
	module_identity: str
	symbols: List[str] = []
	origin_unit: str
	unit_size_bytes: Optional[int] = None


class ImportRelation(RelationBase):
	kind: Literal["import"] = "import"


class NamedExportRelation(RelationBase):
	kind: Literal["named-export"] = "named-export"


class DefaultExportRelation(RelationBase):
	kind: Literal["default-export"] = "default-export"


RelationRecord = Annotated[
	Union[ImportRelation, NamedExportRelation, DefaultExportRelation],
	Field(discriminator="kind"),
]


class LedgerEntry(BaseModel):
	# Unknown keys written by newer versions survive a rewrite.
	model_config = ConfigDict(extra="allow", populate_by_name=True)

	load_count: int = Field(0, alias="loadCount", ge=0)
	imported: List[str] = []
	file_size: Optional[int] = Field(None, alias="fileSize")

	def to_document(self) -> dict:
		# Only fileSize is optional on disk; extra keys keep their nulls.
		exclude = {"file_size"} if self.file_size is None else set()
		return self.model_dump(by_alias=True, exclude=exclude)


class Suggestion(BaseModel):
	module_identity: str
	reason: str

	def to_document(self) -> dict:
		return {"moduleIdentity": self.module_identity, "reasonText": self.reason}
