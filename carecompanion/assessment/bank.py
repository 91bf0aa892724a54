"""Question bank and resource catalog.

Both are immutable once built. Order is authoring order and is never
re-sorted: questions are asked, and resources recommended, in the order
they were written.
"""

from typing import Any, Iterator

from carecompanion.assessment.errors import CatalogError
from carecompanion.assessment.models import (
    AnswerOption,
    AssessmentItem,
    Category,
    ResourceEntry,
)


class QuestionBank:
    """Ordered, read-only set of assessment items."""

    def __init__(
        self,
        items: list[AssessmentItem] | tuple[AssessmentItem, ...],
        bank_id: str = "custom",
        version: str = "unknown",
        content_hash: str | None = None,
    ) -> None:
        self._items = tuple(items)
        self.bank_id = bank_id
        self.version = version
        self.content_hash = content_hash
        self._by_id: dict[str, AssessmentItem] = {}
        self._max_values: dict[Category, int] = {}
        self._validate()

    def _validate(self) -> None:
        seen_crisis = False
        for item in self._items:
            if item.id in self._by_id:
                raise CatalogError(f"Duplicate item id: {item.id}")
            if len(item.options) < 2:
                raise CatalogError(f"Item {item.id} must have at least 2 options")
            if any(option.value < 0 for option in item.options):
                raise CatalogError(f"Item {item.id} has a negative option value")

            # Crisis screening is always the final question
            if item.category == Category.CRISIS:
                seen_crisis = True
            elif seen_crisis:
                raise CatalogError(
                    f"Item {item.id} follows a crisis item; crisis items must be last"
                )

            self._by_id[item.id] = item
            current = self._max_values.get(item.category, 0)
            self._max_values[item.category] = max(current, item.max_option_value)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[AssessmentItem]:
        return iter(self._items)

    @property
    def items(self) -> tuple[AssessmentItem, ...]:
        return self._items

    @property
    def categories(self) -> tuple[Category, ...]:
        """Categories in order of first appearance."""
        return tuple(dict.fromkeys(item.category for item in self._items))

    def get(self, item_id: str) -> AssessmentItem | None:
        return self._by_id.get(item_id)

    def max_option_value(self, category: Category) -> int:
        """Highest option value over every item in a category (0 if none)."""
        return self._max_values.get(category, 0)

    def filter_for_audience(self, audience: str) -> tuple[AssessmentItem, ...]:
        """Return the items that apply to an audience, in catalog order.

        An item applies when its audience set contains the requested tag
        or ``all``. Unrecognized tags therefore only receive ``all`` items.
        """
        return tuple(item for item in self._items if item.applies_to(audience))

    @classmethod
    def from_dict(cls, data: dict[str, Any], content_hash: str | None = None) -> "QuestionBank":
        """Create a QuestionBank from its YAML representation."""
        items = []
        for item_data in data.get("items") or []:
            try:
                category = Category(item_data["category"])
            except ValueError:
                raise CatalogError(
                    f"Unknown category {item_data['category']!r} on item {item_data.get('id')}"
                )
            except KeyError as e:
                raise CatalogError(f"Item is missing field {e}")

            try:
                options = tuple(
                    AnswerOption(text=str(opt["text"]), value=int(opt["value"]))
                    for opt in item_data["options"]
                )
                items.append(AssessmentItem(
                    id=str(item_data["id"]),
                    text=" ".join(str(item_data["text"]).split()),
                    category=category,
                    category_label=item_data.get("category_label") or category.value.title(),
                    audience=frozenset(item_data.get("audience") or ["all"]),
                    options=options,
                ))
            except KeyError as e:
                raise CatalogError(f"Item {item_data.get('id')} is missing field {e}")

        return cls(
            items,
            bank_id=data.get("id", "unknown"),
            version=str(data.get("version", "unknown")),
            content_hash=content_hash,
        )


class ResourceCatalog:
    """Ordered, read-only set of support resources."""

    def __init__(
        self,
        entries: list[ResourceEntry] | tuple[ResourceEntry, ...],
        catalog_id: str = "custom",
        version: str = "unknown",
        content_hash: str | None = None,
    ) -> None:
        self._entries = tuple(entries)
        self.catalog_id = catalog_id
        self.version = version
        self.content_hash = content_hash

        seen: set[str] = set()
        for entry in self._entries:
            if entry.id in seen:
                raise CatalogError(f"Duplicate resource id: {entry.id}")
            if not entry.link or not entry.link.strip():
                raise CatalogError(f"Resource {entry.id} has no link")
            seen.add(entry.id)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ResourceEntry]:
        return iter(self._entries)

    @property
    def entries(self) -> tuple[ResourceEntry, ...]:
        return self._entries

    def filter_for_audience(self, audience: str) -> tuple[ResourceEntry, ...]:
        """Return entries that apply to an audience, in catalog order."""
        return tuple(entry for entry in self._entries if entry.applies_to(audience))

    @classmethod
    def from_dict(cls, data: dict[str, Any], content_hash: str | None = None) -> "ResourceCatalog":
        """Create a ResourceCatalog from its YAML representation."""
        entries = []
        for entry_data in data.get("resources") or []:
            try:
                entries.append(ResourceEntry(
                    id=str(entry_data["id"]),
                    title=entry_data["title"],
                    category=entry_data.get("category", ""),
                    description=entry_data.get("description", ""),
                    link=entry_data.get("link") or "",
                    recommended_for=frozenset(entry_data.get("recommended_for") or []),
                    audience=frozenset(entry_data.get("audience") or ["all"]),
                ))
            except KeyError as e:
                raise CatalogError(f"Resource {entry_data.get('id')} is missing field {e}")

        return cls(
            entries,
            catalog_id=data.get("id", "unknown"),
            version=str(data.get("version", "unknown")),
            content_hash=content_hash,
        )
