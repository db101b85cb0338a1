"""
Change description generator

Builds the human-readable sentence stored on every track row by diffing a
sparse change map against the row's prior snapshot. One routine serves all
ledger families; each family only declares its subject and field list.
"""
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Mapping, NamedTuple, Optional

# Field kinds
TEXT = "text"      # "changed code batch from A to B"
NUMBER = "number"  # formatted with two decimals
DATE = "date"      # ISO date
REF = "ref"        # foreign key: "changed product from ID 1 to ID 2"
NOTE = "note"      # long text, value never echoed: "updated description"


class TrackedField(NamedTuple):
    name: str
    label: str
    kind: str = TEXT


def format_value(value: Any, kind: str = TEXT) -> str:
    if value is None:
        return ""
    if kind == NUMBER:
        return "%.2f" % float(value)
    if kind == DATE:
        if isinstance(value, datetime):
            value = value.date()
        if isinstance(value, date):
            return value.isoformat()
    return str(value)


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _get(source: Any, name: str) -> Any:
    if isinstance(source, Mapping):
        return source.get(name)
    return getattr(source, name, None)


class ChangeDescriber:
    """
    Describes create / update / delete / restore of one entity family.

    `key_field` is echoed in delete and restore sentences when set,
    e.g. "Product batch deleted (code: B-001)".
    """

    def __init__(
        self,
        subject: str,
        fields: Iterable[TrackedField],
        create_fields: Optional[Iterable[str]] = None,
        key_field: Optional[TrackedField] = None,
    ):
        self.subject = subject
        self.fields = list(fields)
        self.create_fields = list(create_fields) if create_fields is not None else [
            f.name for f in self.fields if f.kind != NOTE
        ]
        self.key_field = key_field
        self._by_name = {f.name: f for f in self.fields}

    def describe_create(self, entity: Any) -> str:
        parts = []
        for name in self.create_fields:
            value = _get(entity, name)
            if _is_blank(value):
                continue
            kind = self._by_name[name].kind if name in self._by_name else TEXT
            parts.append("%s: %s" % (name, format_value(value, kind)))
        description = "%s created" % self.subject
        if parts:
            description += " with " + ", ".join(parts)
        return description

    def describe_update(self, changes: Mapping[str, Any], old: Any) -> str:
        clauses = self.diff(changes, old)
        if not clauses:
            return "%s updated (no field changes detected)" % self.subject
        return "%s updated: %s" % (self.subject, ", ".join(clauses))

    def describe_delete(self, entity: Any) -> str:
        return "%s deleted%s" % (self.subject, self._key_suffix(entity))

    def describe_restore(self, entity: Any) -> str:
        return "%s restored%s" % (self.subject, self._key_suffix(entity))

    def diff(self, changes: Mapping[str, Any], old: Any) -> List[str]:
        """One clause per known field whose value actually changes"""
        clauses = []
        for field in self.fields:
            if field.name not in changes:
                continue
            clause = self._clause(field, _get(old, field.name), changes[field.name])
            if clause:
                clauses.append(clause)
        return clauses

    def changed_fields(self, changes: Mapping[str, Any], old: Any) -> Dict[str, Any]:
        """Subset of `changes` that differs from the prior snapshot"""
        return {
            f.name: changes[f.name]
            for f in self.fields
            if f.name in changes and self._clause(f, _get(old, f.name), changes[f.name])
        }

    def _clause(self, field: TrackedField, old: Any, new: Any) -> Optional[str]:
        if _is_blank(old) and _is_blank(new):
            return None
        if field.kind == NOTE:
            if _is_blank(new):
                return "removed %s" % field.label
            if _is_blank(old):
                return "added %s" % field.label
            return "updated %s" % field.label if old != new else None
        if field.kind == REF:
            if _is_blank(old):
                return "added %s: ID %s" % (field.label, new)
            if _is_blank(new):
                return "removed %s" % field.label
            if old == new:
                return None
            return "changed %s from ID %s to ID %s" % (field.label, old, new)
        if _is_blank(new):
            return "removed %s" % field.label
        new_text = format_value(new, field.kind)
        if _is_blank(old):
            return "added %s: %s" % (field.label, new_text)
        old_text = format_value(old, field.kind)
        if old_text == new_text:
            return None
        return "changed %s from %s to %s" % (field.label, old_text, new_text)

    def _key_suffix(self, entity: Any) -> str:
        if self.key_field is None:
            return ""
        value = _get(entity, self.key_field.name)
        if _is_blank(value):
            return ""
        return " (%s: %s)" % (self.key_field.label, format_value(value, self.key_field.kind))


BATCH_DESCRIBER = ChangeDescriber(
    "Product batch",
    [
        TrackedField("product_id", "product", REF),
        TrackedField("code_batch", "code batch"),
        TrackedField("unit_price", "unit price", NUMBER),
        TrackedField("exp_date", "expiry date", DATE),
        TrackedField("description", "description", NOTE),
    ],
    create_fields=["code_batch", "unit_price", "exp_date"],
    key_field=TrackedField("code_batch", "code"),
)

STOCK_DESCRIBER = ChangeDescriber(
    "Product stock",
    [
        TrackedField("product_batch_id", "batch", REF),
        TrackedField("product_id", "product", REF),
        TrackedField("location_id", "location", REF),
        TrackedField("quantity", "quantity", NUMBER),
    ],
    create_fields=["product_batch_id", "location_id", "quantity"],
    key_field=TrackedField("quantity", "quantity", NUMBER),
)

ITEM_DESCRIBER = ChangeDescriber(
    "Product item",
    [
        TrackedField("stock_in", "stock in", NUMBER),
        TrackedField("stock_out", "stock out", NUMBER),
        TrackedField("quantity", "quantity", NUMBER),
        TrackedField("description", "description", NOTE),
    ],
    create_fields=["stock_in", "stock_out", "quantity"],
    key_field=TrackedField("quantity", "quantity", NUMBER),
)

UNIT_DESCRIBER = ChangeDescriber(
    "Product unit",
    [
        TrackedField("product_id", "product", REF),
        TrackedField("location_id", "location", REF),
        TrackedField("product_batch_id", "batch", REF),
        TrackedField("name", "name"),
        TrackedField("quantity", "quantity", NUMBER),
        TrackedField("unit_price", "unit price", NUMBER),
        TrackedField("unit_price_retail", "retail unit price", NUMBER),
        TrackedField("barcode", "barcode"),
        TrackedField("description", "description", NOTE),
    ],
    create_fields=["name", "quantity", "unit_price", "barcode"],
    key_field=TrackedField("barcode", "barcode"),
)
