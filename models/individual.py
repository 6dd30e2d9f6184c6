from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional, Sequence

from config.defaults import UNKNOWN_LABEL, BATCH_PREFIX_LENGTH

STANDARD_FIELDS = ("identifier", "name", "year", "branch", "subject", "batch")

# Accepted record headers per field, tried in order
RECORD_ALIASES = {
    "identifier": ["RollNumber", "Roll Number", "Roll", "roll", "identifier", "id"],
    "name": ["StudentName", "Student Name", "Name", "name"],
    "year": ["year", "Year", "YEAR"],
    "branch": ["Branch", "branch", "Department", "Dept"],
    "subject": ["Subject", "Common_Subject_1", "subject"],
    "batch": ["Batch", "batch"],
}


def _clean(value) -> str:
    if value is None:
        return ""
    text = str(value).strip()
    if text.lower() == "nan":
        return ""
    return text


def _lookup(record: Mapping, aliases: Sequence[str]) -> str:
    for alias in aliases:
        value = _clean(record.get(alias))
        if value:
            return value
    return ""


@dataclass(frozen=True)
class Individual:
    identifier: str
    name: str = ""
    year: str = ""
    branch: str = ""
    subject: str = ""
    batch: str = ""
    extra: Mapping[str, str] = field(default_factory=dict, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "extra", MappingProxyType(dict(self.extra)))

    def label(self, key: str) -> str:
        """Classification value for key; blank or missing values map to 'Unknown'."""
        if key in STANDARD_FIELDS:
            value = getattr(self, key)
        else:
            value = self.extra.get(key, "")
        value = _clean(value)
        return value if value else UNKNOWN_LABEL

    @classmethod
    def from_record(cls, record: Mapping, derive_batch: bool = False) -> "Individual":
        """Build an Individual from a loosely keyed record (one uploaded row)."""
        identifier = _lookup(record, RECORD_ALIASES["identifier"])
        if not identifier:
            roll_key: Optional[str] = next(
                (k for k in record.keys() if "roll" in str(k).lower()), None
            )
            if roll_key is not None:
                identifier = _clean(record.get(roll_key))

        values = {f: _lookup(record, RECORD_ALIASES[f]) for f in STANDARD_FIELDS[1:]}
        if derive_batch and not values["batch"] and identifier:
            values["batch"] = identifier[:BATCH_PREFIX_LENGTH]

        known = {alias for aliases in RECORD_ALIASES.values() for alias in aliases}
        extra = {
            str(k): _clean(v) for k, v in record.items()
            if k not in known and _clean(v)
        }
        return cls(identifier=identifier, extra=extra, **values)
