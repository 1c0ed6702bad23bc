"""Transaction extraction domain service."""

from datetime import date
from typing import Any, Mapping, Optional, Sequence

from moneytrack.domain.entities import (
    ColumnRoleMap,
    Role,
    TransactionKind,
    TransactionRecord,
)
from moneytrack.domain.errors import ExtractionError, MalformedResponseError
from moneytrack.domain.text_parser import TextTransactionParser
from moneytrack.llm.prompting import SchemaHint
from moneytrack.logging_setup import get_logger
from moneytrack.utils.amount_parser import coerce_amount

_logger = get_logger("moneytrack.domain.extraction")


class TransactionExtractionService:
    """Service for turning free text into records awaiting review.

    A language-model extractor is preferred when one is configured. Its
    records are mapped onto roles and checked against the configured labels
    and categories. When the extractor cannot be reached the rule-based
    parser is used instead.
    """

    def __init__(
        self,
        parser: TextTransactionParser,
        roles: ColumnRoleMap,
        columns: Sequence[str],
        extractor: Optional[Any] = None,
    ):
        """Initialize extraction service.

        Args:
            parser: Rule-based parser, also the source of labels, categories
                and date format
            roles: Role map of the target sheet
            columns: Headers of the target sheet
            extractor: Optional object with ``extract(text, schema_hint)``
        """
        self.parser = parser
        self.roles = roles
        self.columns = tuple(columns)
        self.extractor = extractor

    def _today(self) -> date:
        return self.parser.today or date.today()

    def schema_hint(self) -> SchemaHint:
        """Describe the target sheet for the extractor."""

        def column(role: Role) -> str:
            return self.roles.column_for(role) or role.value

        return SchemaHint(
            columns=self.columns,
            amount_column=column(Role.AMOUNT),
            type_column=column(Role.TYPE),
            category_column=column(Role.CATEGORY),
            description_column=column(Role.DESCRIPTION),
            date_column=column(Role.DATE),
            type_labels=self.parser.type_labels,
            categories=self.parser.categories,
            date_pattern=self.parser.date_format.pattern,
            today=self._today(),
        )

    def preview(self, text: Optional[str]) -> list[TransactionRecord]:
        """Extract candidate records from ``text``.

        Returns:
            Records for review, never empty; blank text gives one blank record

        Note:
            A reply that cannot be decoded yields one blank record for manual
            entry rather than a guess from the local parser.
        """
        if not text or not text.strip():
            return [TransactionRecord.empty()]

        if self.extractor is None:
            return self.parser.parse_block(text)

        try:
            items = self.extractor.extract(text, self.schema_hint())
        except MalformedResponseError as e:
            _logger.warning("Could not decode extraction response: %s", e)
            return [TransactionRecord.empty()]
        except ExtractionError as e:
            _logger.warning("Extraction failed, using local parser: %s", e)
            return self.parser.parse_block(text)

        records = [self.normalize(item) for item in items]
        return records or [TransactionRecord.empty()]

    def normalize(self, item: Mapping[str, Any]) -> TransactionRecord:
        """Map one extractor record onto roles.

        Fields are looked up by the sheet's header, then by the canonical role
        name, ignoring case. The amount is coerced to a non-negative number,
        the type must equal one of the labels and the category must be a known
        one; anything else is left blank for the user to fill in.
        """
        lookup = {str(key).strip().lower(): value for key, value in item.items()}

        def value_for(role: Role) -> Any:
            for key in (self.roles.column_for(role), role.value):
                if key and key.lower() in lookup:
                    return lookup[key.lower()]
            return None

        labels = self.parser.type_labels
        kind = labels.kind_of(value_for(Role.TYPE))
        raw_date = value_for(Role.DATE)
        raw_description = value_for(Role.DESCRIPTION)
        if raw_date is None or not str(raw_date).strip():
            raw_date = self.parser.date_format.format(self._today())

        return TransactionRecord(
            date=str(raw_date).strip(),
            type=labels.label_for(kind) if kind is not None else "",
            amount=coerce_amount(value_for(Role.AMOUNT)),
            category=self._known_category(kind, value_for(Role.CATEGORY)),
            description="" if raw_description is None else str(raw_description).strip(),
        )

    def _known_category(self, kind: Optional[TransactionKind], value: Any) -> str:
        if value is None or not str(value).strip():
            return ""
        name = str(value).strip()
        kinds = [kind] if kind is not None else list(TransactionKind)
        for candidate_kind in kinds:
            if self.parser.categories.for_kind(candidate_kind):
                match = self.parser.categories.find(candidate_kind, name)
                if match is not None:
                    return match
            else:
                for category in self.parser.fallback_categories:
                    if category.lower() == name.lower():
                        return category
        return ""
