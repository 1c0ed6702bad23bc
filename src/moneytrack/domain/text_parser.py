"""Rule-based parsing of free-text transaction descriptions.

This is the local fallback used when no language-model extractor is
configured or reachable. It is deliberately approximate:

- the amount is the first number in the text (currency glyph optional)
- the type is Income only when an income keyword appears and no expense
  keyword does; every other case, including ambiguous text, is an Expense
- the description comes from "<amount> on X for Y" style phrasing, or from
  the text with the amount and filler words removed
- the category is only ever one of the known categories
- the date is today
"""

from datetime import date
from decimal import Decimal
from typing import Mapping, Optional, Sequence, Union
import re

from moneytrack.domain.column_roles import resolve_column_roles
from moneytrack.domain.config import LedgerConfig
from moneytrack.domain.entities import (
    CategoryList,
    ColumnRoleMap,
    Role,
    TransactionKind,
    TransactionRecord,
    TypeLabels,
    category_names,
)
from moneytrack.utils.amount_parser import find_amount
from moneytrack.utils.date_parser import ISO_DATE_FORMAT, DateFormat, detect_date_format

INCOME_KEYWORDS = (
    "salary",
    "income",
    "earned",
    "received",
    "paid to me",
    "bonus",
    "refund",
    "freelance",
    "business",
    "interest",
)
EXPENSE_KEYWORDS = ("spent", "bought", "paid", "cost", "expense", "purchase")

STOPWORDS = ("spent", "paid", "bought", "from", "for", "at", "on", "the", "a", "an")
_STOPWORD_RE = re.compile(r"\b(?:" + "|".join(STOPWORDS) + r")\b", re.IGNORECASE)
_WHITESPACE_RE = re.compile(r"\s+")
_CATEGORY_TOKEN_RE = re.compile(r"[\s\-_]+")

# Newlines, a comma before the next amount, or a standalone "and".
_BLOCK_SPLIT_RE = re.compile(r"\n|,(?=\s*\d)|(?:\s+and\s+)", re.IGNORECASE)

# Matched right after the amount, in order; the first match wins.
_NARRATIVE_PATTERNS = (
    re.compile(r"\s+on\s+.+?\s+for\s+(?P<description>.+)", re.IGNORECASE),
    re.compile(r"\s+from\s+.+?\s+for\s+(?P<description>.+)", re.IGNORECASE),
    re.compile(r"\s+on\s+(?P<description>.+)", re.IGNORECASE),
    re.compile(r"\s+from\s+(?P<description>.+)", re.IGNORECASE),
)

SIGN_LABELS = TypeLabels(income="+", expense="-")

KnownCategories = Union[CategoryList, Mapping[str, Sequence[str]], None]


def classify_type(text: str) -> TransactionKind:
    """Keyword classification with a bias towards Expense.

    Text mentioning both kinds of keyword, or neither, is an Expense.
    """
    lowered = (text or "").lower()
    has_income = any(keyword in lowered for keyword in INCOME_KEYWORDS)
    has_expense = any(keyword in lowered for keyword in EXPENSE_KEYWORDS)
    if has_income and not has_expense:
        return TransactionKind.INCOME
    return TransactionKind.EXPENSE


def extract_description(text: str) -> str:
    """Describe a transaction line without its amount and filler words.

    Narrative phrasing ("on X for Y", "from X") only counts when it follows
    the amount the parser reads, i.e. the first number in the line.
    """
    line = (text or "").strip()
    if not line:
        return ""

    amount_match = find_amount(line)
    if amount_match is None:
        description = line
    else:
        for pattern in _NARRATIVE_PATTERNS:
            match = pattern.match(line, amount_match.end())
            if match:
                description = match.group("description").strip()
                if description:
                    return description
        description = line[: amount_match.start()] + " " + line[amount_match.end() :]

    description = _STOPWORD_RE.sub(" ", description)
    description = _WHITESPACE_RE.sub(" ", description).strip()
    return description or line


def match_category(text: str, candidates: Sequence[str]) -> str:
    """Pick the first candidate category mentioned in ``text``.

    Whole category names are tried first, in list order. Failing that, a
    category matches if any of its words longer than two characters appears
    in the text. Returns "" when nothing matches.
    """
    lowered = (text or "").lower()
    if not lowered:
        return ""

    for category in candidates:
        if category and category.lower() in lowered:
            return category

    for category in candidates:
        tokens = _CATEGORY_TOKEN_RE.split((category or "").lower())
        if any(len(token) > 2 and token in lowered for token in tokens):
            return category

    return ""


def infer_type_labels(samples: Optional[Sequence[str]], default: TypeLabels) -> TypeLabels:
    """Use "+"/"-" when the existing type column holds nothing else."""
    values = {str(value).strip() for value in (samples or []) if str(value).strip()}
    if values and values <= {SIGN_LABELS.income, SIGN_LABELS.expense}:
        return SIGN_LABELS
    return default


def _known_categories(categories: KnownCategories) -> CategoryList:
    if isinstance(categories, CategoryList):
        return CategoryList.from_lists(categories.income, categories.expense)
    if isinstance(categories, Mapping):
        return CategoryList.from_lists(categories.get("income"), categories.get("expense"))
    return CategoryList()


class TextTransactionParser:
    """Parse free-text lines into role-keyed transaction records."""

    def __init__(
        self,
        categories: KnownCategories = None,
        type_labels: Optional[TypeLabels] = None,
        date_format: Optional[DateFormat] = None,
        fallback_categories: Sequence[str] = (),
        today: Optional[date] = None,
    ):
        """Initialize parser.

        Args:
            categories: Known income/expense categories, as a CategoryList or
                a ``{"income": [...], "expense": [...]}`` mapping. Entries that
                are not lists of strings are ignored.
            type_labels: Tokens written to the type column
            date_format: Format for the default date
            fallback_categories: Categories to match against when the known
                list for a type is empty (typically values already in the sheet)
            today: Date to use instead of the current date
        """
        self.categories = _known_categories(categories)
        self.type_labels = type_labels or TypeLabels()
        self.date_format = date_format or DateFormat.from_pattern("DD-MM-YYYY")
        self.fallback_categories = category_names(fallback_categories)
        self.today = today

    @classmethod
    def from_samples(
        cls,
        config: LedgerConfig,
        roles: ColumnRoleMap,
        existing_samples: Optional[Mapping[str, Sequence[str]]] = None,
        categories: KnownCategories = None,
        today: Optional[date] = None,
    ) -> "TextTransactionParser":
        """Configure a parser to mirror data already in a sheet.

        Without samples the configured date format and labels are used. With
        samples, the date format is detected from the first date value (ISO
        when there is none), "+"/"-" labels are adopted if the type column uses
        them, and existing category values back up empty category lists.
        """
        if existing_samples is None:
            try:
                date_format = config.date_format
            except ValueError:
                date_format = ISO_DATE_FORMAT
            return cls(
                categories=categories if categories is not None else config.categories,
                type_labels=config.type_labels,
                date_format=date_format,
                today=today,
            )

        def samples_for(role: Role) -> list[str]:
            column = roles.column_for(role)
            if column is None:
                return []
            return [str(v).strip() for v in existing_samples.get(column) or [] if str(v).strip()]

        date_samples = samples_for(Role.DATE)
        fallback: list[str] = []
        for value in samples_for(Role.CATEGORY):
            if value not in fallback:
                fallback.append(value)

        return cls(
            categories=categories if categories is not None else config.categories,
            type_labels=infer_type_labels(samples_for(Role.TYPE), config.type_labels),
            date_format=detect_date_format(date_samples[0] if date_samples else None),
            fallback_categories=fallback,
            today=today,
        )

    def parse_line(self, text: Optional[str]) -> TransactionRecord:
        """Parse a single line; blank input gives an empty record."""
        if not isinstance(text, str) or not text.strip():
            return TransactionRecord.empty()

        line = text.strip()
        amount_match = find_amount(line)
        amount = Decimal(amount_match.group(2)) if amount_match else Decimal(0)

        kind = classify_type(line)
        candidates = self.categories.for_kind(kind) or self.fallback_categories

        return TransactionRecord(
            date=self.date_format.format(self.today or date.today()),
            type=self.type_labels.label_for(kind),
            amount=amount,
            category=match_category(line, candidates),
            description=extract_description(line),
        )

    def parse_block(self, text: Optional[str]) -> list[TransactionRecord]:
        """Split a block into entries and parse each.

        Never returns an empty list: when nothing parses, a single empty
        record is returned for manual entry.
        """
        records: list[TransactionRecord] = []
        if isinstance(text, str):
            for piece in _BLOCK_SPLIT_RE.split(text):
                record = self.parse_line(piece)
                if not record.is_empty():
                    records.append(record)
        return records or [TransactionRecord.empty()]


def _build_parser(
    columns: Union[ColumnRoleMap, Sequence[str], None],
    categories: KnownCategories,
    existing_samples: Optional[Mapping[str, Sequence[str]]],
    config: Optional[LedgerConfig],
    today: Optional[date],
) -> TextTransactionParser:
    config = config or LedgerConfig()
    if isinstance(columns, ColumnRoleMap):
        roles = columns
    else:
        roles = resolve_column_roles(columns if columns is not None else config.columns)
    return TextTransactionParser.from_samples(
        config, roles, existing_samples, categories=categories, today=today
    )


def parse_line(
    text: Optional[str],
    columns: Union[ColumnRoleMap, Sequence[str], None] = None,
    categories: KnownCategories = None,
    existing_samples: Optional[Mapping[str, Sequence[str]]] = None,
    config: Optional[LedgerConfig] = None,
    today: Optional[date] = None,
) -> TransactionRecord:
    """Parse one line of text into a transaction record.

    Args:
        text: Free-text line such as "spent 45 on coffee"
        columns: Resolved role map, or sheet headers to resolve (defaults to
            the configured columns)
        categories: Known categories as a CategoryList or an
            ``{"income": [...], "expense": [...]}`` mapping (defaults to the
            configured ones)
        existing_samples: Existing cell values per column, used to mirror the
            sheet's date format, type labels and categories
        config: Ledger configuration (defaults to :class:`LedgerConfig`)
        today: Date to use instead of the current date

    Returns:
        TransactionRecord; use ``to_row`` to key it by header
    """
    return _build_parser(columns, categories, existing_samples, config, today).parse_line(text)


def parse_block(
    text: Optional[str],
    columns: Union[ColumnRoleMap, Sequence[str], None] = None,
    categories: KnownCategories = None,
    existing_samples: Optional[Mapping[str, Sequence[str]]] = None,
    config: Optional[LedgerConfig] = None,
    today: Optional[date] = None,
) -> list[TransactionRecord]:
    """Parse a block of one or more entries. See :func:`parse_line`."""
    return _build_parser(columns, categories, existing_samples, config, today).parse_block(text)
